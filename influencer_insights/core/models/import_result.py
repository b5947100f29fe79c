"""
Run-level result models returned by imports and replays.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ImportResult(BaseModel):
    """
    Counters accumulated over one import run (caller-owned, not persisted).

    Duplicates resolved against the store are counted in total_skipped and
    are neither imports nor errors.

    Attributes:
        total_processed: Non-blank rows read from the source
        total_imported: Records attempted as new inserts
        total_errors: Invalid rows plus records of failed batches
        total_skipped: Records already present in the store
        batches_flushed: Number of flush operations performed
        failed_batches: Number of flushes that failed
        file_name: Source file name
        file_size: Source size in bytes
    """

    total_processed: int = 0
    total_imported: int = 0
    total_errors: int = 0
    total_skipped: int = 0
    batches_flushed: int = 0
    failed_batches: int = 0
    file_name: str
    file_size: int = Field(0, ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReplayResult(BaseModel):
    """
    Counters for resubmitting batches from the failed-batch log.
    """

    batches_replayed: int = 0
    total_records: int = 0
    total_imported: int = 0
    total_skipped: int = 0
    total_errors: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True
