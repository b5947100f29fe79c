"""
Exception taxonomy for the ingestion pipeline.

Row-level failures are recovered where they occur, batch-level failures are
recovered by the pipeline, and stream-level failures abort the whole run.
"""


class PipelineError(Exception):
    """Base class for ingestion pipeline errors."""


class RowValidationError(PipelineError):
    """Raised when a raw row is missing or has an unparseable required field."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class BatchPersistenceError(PipelineError):
    """Raised when the existence lookup or bulk insert fails for a batch."""

    def __init__(self, batch_number: int, record_count: int, message: str):
        self.batch_number = batch_number
        self.record_count = record_count
        super().__init__(
            f"Batch {batch_number} ({record_count} records) failed: {message}"
        )


class StreamDecodeError(PipelineError):
    """Raised when the source cannot be decoded as CSV at all."""
