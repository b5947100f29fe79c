"""
Unit tests for lenient value coercion.

Covers CSV integer/timestamp parsing and aggregate result normalization.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from influencer_insights.core.coercion import (
    blank_to_none,
    parse_count,
    parse_int,
    parse_timestamp,
    to_number,
)


class TestParseInt:
    """Tests for parse_int"""

    @pytest.mark.parametrize("value,expected", [
        ("42", 42),
        ("  7 ", 7),
        ("+3", 3),
        ("-5", -5),
        ("1000.0", 1000),
        ("000123", 123),
        ("-0", 0),
        ("9223372036854775807", 2**63 - 1),
        (12, 12),
    ])
    def test_parses_integral_values(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [
        None, "", "   ", "abc", "12abc", "1.5", "NaN", "inf", "1e3", "1e5", "1E+2", True,
    ])
    def test_rejects_non_integral_values(self, value):
        assert parse_int(value) is None

    @given(st.integers(min_value=-10**12, max_value=10**12))
    def test_property_string_of_integer_parses_back(self, number):
        """Property test: str(n) always parses back to n"""
        assert parse_int(str(number)) == number

    def test_huge_exponent_rejected_without_expansion(self):
        assert parse_int("1e1000000") is None
        assert parse_count("1e1000000") == 0

    def test_overlong_digit_run_rejected(self):
        assert parse_int("9" * 100000) is None
        assert parse_int("0" * 50 + "42") == 42
        assert parse_int("0" * 100000 + "x") is None


class TestParseCount:
    """Tests for parse_count"""

    def test_missing_defaults_to_zero(self):
        assert parse_count(None) == 0
        assert parse_count("") == 0

    def test_unparseable_defaults_to_zero(self):
        assert parse_count("lots") == 0

    def test_negative_clamped_to_zero(self):
        assert parse_count("-10") == 0

    def test_valid_count(self):
        assert parse_count("1234") == 1234

    def test_bigint_boundary(self):
        assert parse_count(str(2**63 - 1)) == 2**63 - 1
        assert parse_count(str(2**63)) == 0
        assert parse_count("1e30") == 0


class TestParseTimestamp:
    """Tests for parse_timestamp"""

    def test_iso_date(self):
        assert parse_timestamp("2024-01-12") == datetime(2024, 1, 12)

    def test_iso_datetime_with_z_suffix(self):
        parsed = parse_timestamp("2024-01-12T13:34:00Z")
        assert parsed == datetime(2024, 1, 12, 13, 34, tzinfo=timezone.utc)

    def test_iso_datetime_with_offset(self):
        parsed = parse_timestamp("2024-01-12T13:34:00+09:00")
        assert parsed.utcoffset() == timedelta(hours=9)

    @pytest.mark.parametrize("value,expected", [
        ("2024/01/12 13:34:56", datetime(2024, 1, 12, 13, 34, 56)),
        ("2024/01/12 13:34", datetime(2024, 1, 12, 13, 34)),
        ("2024/01/12", datetime(2024, 1, 12)),
    ])
    def test_slash_layouts(self, value, expected):
        assert parse_timestamp(value) == expected

    @pytest.mark.parametrize("value", [None, "", "  ", "yesterday", "2024-13-45"])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None


class TestToNumber:
    """Tests for to_number (aggregate result normalization)"""

    @pytest.mark.parametrize("value,expected", [
        (None, 0.0),
        (Decimal("1500.5000000000000000"), 1500.5),
        (Decimal("0"), 0.0),
        (12, 12.0),
        (3.25, 3.25),
        ("7.5", 7.5),
    ])
    def test_converts_driver_values(self, value, expected):
        result = to_number(value)
        assert isinstance(result, float)
        assert result == expected

    @pytest.mark.parametrize("value", ["abc", object(), float("nan"), Decimal("NaN"), [1, 2]])
    def test_unconvertible_values_become_zero(self, value):
        assert to_number(value) == 0.0


class TestBlankToNone:
    """Tests for blank_to_none"""

    def test_blank_values(self):
        assert blank_to_none(None) is None
        assert blank_to_none("") is None
        assert blank_to_none(" \t ") is None

    def test_value_returned_unchanged(self):
        assert blank_to_none(" hello ") == " hello "
