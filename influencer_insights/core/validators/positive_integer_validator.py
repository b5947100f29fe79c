"""
PositiveIntegerValidator - ensures a field parses to an integer greater than zero.
"""

from typing import Any

from influencer_insights.core.coercion import MAX_INT32, parse_int

from .base_validator import BaseValidator


class PositiveIntegerValidator(BaseValidator):
    """
    Validates that a value parses (see coercion.parse_int) to an integer > 0.

    The upper bound defaults to the INTEGER column range and can be
    overridden with the max_value parameter.

    Missing values are reported as unparseable; pair with
    RequiredFieldValidator for a more specific message.
    """

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        number = parse_int(value)
        if number is None:
            raise self.fail(f"Cannot parse {value!r} as integer")
        if number <= 0:
            raise self.fail(f"Value {number} must be a positive integer")

        max_value = self.parameters.get("max_value", MAX_INT32)
        if number > max_value:
            raise self.fail(f"Value {number} exceeds maximum {max_value}")

    @property
    def rule_type(self) -> str:
        return "positive_integer"
