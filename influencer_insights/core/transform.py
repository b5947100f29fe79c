"""
Row transformation: raw CSV row -> validated PostRecord.

Identifier fields are validated strictly because deduplication depends on
them; metrics and dates are parsed leniently and fall back to defaults.
"""

from typing import Any

from influencer_insights.core.coercion import blank_to_none, parse_count, parse_int, parse_timestamp
from influencer_insights.core.models import PostRecord
from influencer_insights.core.validators import (
    BaseValidator,
    PositiveIntegerValidator,
    RequiredFieldValidator,
)

RawRow = dict[str, Any]

REQUIRED_COLUMNS = ("influencer_id", "post_id")
NUMERIC_COLUMNS = ("likes", "comments")
OPTIONAL_COLUMNS = ("shortcode", "thumbnail", "text", "post_date")


def is_blank_row(row: RawRow) -> bool:
    """
    Check whether every field of a row is empty or absent.

    Overflow values that csv.DictReader stores under the None key are ignored.
    """
    return all(
        value is None or (isinstance(value, str) and value.strip() == "")
        for key, value in row.items()
        if key is not None
    )


def is_header_row(row: RawRow) -> bool:
    """Check whether a row repeats the header (concatenated exports)."""
    return all(row.get(column) == column for column in REQUIRED_COLUMNS)


class RowTransformer:
    """
    Converts raw CSV rows into PostRecord instances.

    Fails with RowValidationError when post_id is absent/blank or
    influencer_id is not a positive integer. Everything else never fails
    the row.
    """

    def __init__(self) -> None:
        self.validators: list[BaseValidator] = [
            RequiredFieldValidator("influencer_id"),
            PositiveIntegerValidator("influencer_id"),
            RequiredFieldValidator("post_id"),
        ]

    def transform(self, row: RawRow) -> PostRecord:
        """
        Transform one raw row.

        Args:
            row: Mapping of column name to string value (or None)

        Returns:
            Validated PostRecord

        Raises:
            RowValidationError: If a required identifier is missing or invalid
        """
        for validator in self.validators:
            validator.validate(row.get(validator.field_name), row)

        return PostRecord(
            influencer_id=parse_int(row["influencer_id"]),
            external_post_id=row["post_id"].strip(),
            shortcode=blank_to_none(row.get("shortcode")),
            thumbnail_url=blank_to_none(row.get("thumbnail")),
            text=blank_to_none(row.get("text")),
            like_count=parse_count(row.get("likes")),
            comment_count=parse_count(row.get("comments")),
            posted_at=parse_timestamp(row.get("post_date")),
        )
