"""
Validation rule implementations for required CSV fields.
"""

from .base_validator import BaseValidator
from .positive_integer_validator import PositiveIntegerValidator
from .required_field_validator import RequiredFieldValidator

__all__ = [
    "BaseValidator",
    "RequiredFieldValidator",
    "PositiveIntegerValidator",
]
