"""
Lenient value coercion for CSV fields and aggregate query results.

CSV values arrive as strings (or None for short rows); aggregate results
arrive as int, float, Decimal or None depending on the column and whether
any rows matched. These helpers turn both into plain Python values.
"""

import re
from datetime import datetime
from typing import Any

_INTEGER_PATTERN = re.compile(r"^([+-]?)(\d+)(?:\.0*)?$")

# Column ranges of influencer_posts (INTEGER and BIGINT)
MAX_INT32 = 2**31 - 1
MAX_INT64 = 2**63 - 1

# Longer digit runs cannot fit any column; reject before int() sees them
_MAX_DIGITS = 19

# Non-ISO layouts seen in exported post data
_DATETIME_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
)


def blank_to_none(value: str | None) -> str | None:
    """Return None for missing or whitespace-only strings, else the value unchanged."""
    if value is None or value.strip() == "":
        return None
    return value


def parse_int(value: Any) -> int | None:
    """
    Parse an integer from a CSV value.

    Accepts an optionally signed digit string (surrounding whitespace allowed)
    or an integral float literal such as "1000.0". Exponents are not accepted,
    and neither are more than _MAX_DIGITS significant digits.

    Returns:
        The parsed integer, or None if the value is missing or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return None
    match = _INTEGER_PATTERN.match(text)
    if match is None:
        return None

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return None
    return int(sign + digits)


def parse_count(value: Any) -> int:
    """
    Parse a non-negative metric.

    Missing, unparseable, negative and out-of-range (above MAX_INT64) values
    all become 0.
    """
    number = parse_int(value)
    if number is None or number < 0 or number > MAX_INT64:
        return 0
    return number


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse a post date leniently.

    Supports ISO-8601 (a trailing "Z" is read as UTC) and the slash-separated
    layouts in _DATETIME_FORMATS.

    Returns:
        Parsed datetime, or None if the value is missing or unparseable
    """
    text = blank_to_none(value)
    if text is None:
        return None
    text = text.strip()

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass

    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def to_number(value: Any) -> float:
    """
    Coerce an aggregate query result to a float.

    AVG() over integer columns comes back from PostgreSQL as Decimal, and as
    NULL when no rows match. All of None, Decimal, int, float and numeric
    strings are handled; anything else (including NaN) is treated as 0.

    Args:
        value: Raw value from the database driver

    Returns:
        Plain float, 0.0 for None or unconvertible values
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return number
