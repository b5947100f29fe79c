"""
Input validation utilities for command-line and service boundaries.

Provides reusable validation functions for influencer ids, result limits
and input file paths.
"""

from pathlib import Path

MAX_LIMIT = 100


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_influencer_id(influencer_id: int | str, field_name: str = "influencer_id") -> int:
    """
    Validate an influencer ID.

    Args:
        influencer_id: The ID to validate (int or decimal string)
        field_name: Name of the field (for error messages)

    Returns:
        The validated ID as int

    Raises:
        ValidationError: If the value is not a positive integer

    Examples:
        >>> validate_influencer_id("42")
        42
        >>> validate_influencer_id(0)  # doctest: +SKIP
        ValidationError: influencer_id must be a positive integer, got 0
    """
    if isinstance(influencer_id, bool):
        raise ValidationError(f"{field_name} must be an integer, got bool")

    if isinstance(influencer_id, str):
        text = influencer_id.strip()
        if not text.isdecimal():
            raise ValidationError(f"{field_name} must be a valid number, got {influencer_id!r}")
        influencer_id = int(text)

    if not isinstance(influencer_id, int):
        raise ValidationError(f"{field_name} must be an integer, got {type(influencer_id).__name__}")

    if influencer_id <= 0:
        raise ValidationError(f"{field_name} must be a positive integer, got {influencer_id}")

    return influencer_id


def validate_limit(limit: int | str, field_name: str = "limit", max_limit: int = MAX_LIMIT) -> int:
    """
    Validate a limit parameter for ranking queries.

    Args:
        limit: The limit value to validate (int or decimal string)
        field_name: Name of the field (for error messages)
        max_limit: Maximum allowed limit value

    Returns:
        The validated limit value

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_limit(10)
        10
        >>> validate_limit(101)  # doctest: +SKIP
        ValidationError: limit must be between 1 and 100
    """
    if isinstance(limit, str):
        text = limit.strip()
        if not text.lstrip("-").isdecimal():
            raise ValidationError(f"{field_name} must be an integer, got {limit!r}")
        limit = int(text)

    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ValidationError(f"{field_name} must be an integer, got {type(limit).__name__}")

    if limit < 1 or limit > max_limit:
        raise ValidationError(f"{field_name} must be between 1 and {max_limit}")

    return limit


def validate_input_file(file_path: str | Path, max_size_bytes: int, field_name: str = "input") -> Path:
    """
    Validate a CSV input file before import.

    Args:
        file_path: Path to the file
        max_size_bytes: Largest accepted file size
        field_name: Name of the field (for error messages)

    Returns:
        The path as a Path object

    Raises:
        ValidationError: If the file is missing, not a CSV file or too large
    """
    path = Path(file_path)

    if not path.is_file():
        raise ValidationError(f"{field_name} file not found: {file_path}")

    if path.suffix.lower() != ".csv":
        raise ValidationError(f"{field_name} must be a .csv file, got {path.name}")

    size = path.stat().st_size
    if size > max_size_bytes:
        raise ValidationError(
            f"{field_name} is too large ({size} bytes); maximum is {max_size_bytes} bytes"
        )

    return path
