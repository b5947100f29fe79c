"""
FailedBatch model representing one batch that could not be persisted.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .post_record import PostRecord


class FailedBatch(BaseModel):
    """
    A batch whose dedup lookup or bulk insert failed.

    Written as one JSON line to the failed-batch log so an operator can
    replay it later.

    Attributes:
        file_name: Source file the batch came from
        batch_number: 1-based flush number within the run
        failed_at: When the failure happened
        error_type: Exception class name of the underlying failure
        error_message: Exception message
        records: Every record of the batch
    """

    file_name: str
    batch_number: int = Field(..., ge=1)
    failed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error_type: str
    error_message: str
    records: list[PostRecord] = Field(..., min_length=1)
