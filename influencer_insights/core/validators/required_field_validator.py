"""
RequiredFieldValidator - ensures a field is present and not null/empty.
"""

from typing import Any

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not null/empty.

    Fails if:
    - Field is missing from the row (column absent from the header)
    - Field value is None (row shorter than the header)
    - Field value is an empty or whitespace-only string
    """

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.field_name not in record:
            raise self.fail("Field is missing from record")

        if value is None:
            raise self.fail("Field value is null")

        if isinstance(value, str) and value.strip() == "":
            raise self.fail("Field value is empty string")

    @property
    def rule_type(self) -> str:
        return "required_field"
