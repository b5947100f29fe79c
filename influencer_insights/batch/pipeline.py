"""
Batch ingestion pipeline orchestration.

Coordinates the flow: read → transform → accumulate → resolve duplicates → commit
"""

import time
from collections.abc import Iterable
from enum import Enum
from typing import BinaryIO

from influencer_insights.core.errors import BatchPersistenceError, RowValidationError, StreamDecodeError
from influencer_insights.core.models import FailedBatch, ImportResult, PostRecord
from influencer_insights.core.settings import BATCH_SIZE
from influencer_insights.core.transform import RawRow, RowTransformer, is_blank_row, is_header_row
from influencer_insights.observability import metrics
from influencer_insights.observability.logger import get_logger, log_operation

from .dedup import DedupResolver
from .readers import CSVReader
from .writers import BatchCommitter, FailedBatchLog

logger = get_logger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    ACCUMULATING = "accumulating"
    FLUSHING = "flushing"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


class IngestionPipeline:
    """
    Streams CSV rows into the store in bounded batches.

    Flow:
    1. Decode rows one at a time from the source stream
    2. Skip blank rows, transform the rest (invalid rows count as errors)
    3. Accumulate valid records until batch_size is reached
    4. Flush: resolve duplicates, then bulk insert the new records
    5. Flush the remainder when the stream ends

    A failed flush counts every record of the batch as an error and
    appends the batch to the failed-batch log; the run continues. A stream
    decode failure aborts the run and propagates to the caller.
    """

    def __init__(
        self,
        resolver: DedupResolver,
        committer: BatchCommitter,
        transformer: RowTransformer | None = None,
        reader: CSVReader | None = None,
        failure_log: FailedBatchLog | None = None,
        batch_size: int = BATCH_SIZE,
    ):
        """
        Initialize ingestion pipeline.

        Args:
            resolver: Duplicate resolver queried before every commit
            committer: Bulk writer for new records
            transformer: Row transformer (default RowTransformer())
            reader: Stream decoder (default CSVReader())
            failure_log: Side log for failed batches; failures are only logged if None
            batch_size: Records accumulated before a flush
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self.resolver = resolver
        self.committer = committer
        self.transformer = transformer or RowTransformer()
        self.reader = reader or CSVReader()
        self.failure_log = failure_log
        self.batch_size = batch_size
        self.state = PipelineState.IDLE

    def run(self, source: BinaryIO, file_name: str, file_size: int = 0) -> ImportResult:
        """
        Import one CSV source.

        Args:
            source: Readable binary stream
            file_name: Name reported in the result and the failed-batch log
            file_size: Source size in bytes

        Returns:
            ImportResult with processed, imported, skipped and error counts

        Raises:
            StreamDecodeError: If the source cannot be decoded as CSV
        """
        result = ImportResult(file_name=file_name, file_size=file_size)
        start = time.perf_counter()

        with log_operation("CSV import", logger=logger, file_name=file_name, file_size=file_size):
            self.process_rows(self.reader.read(source), result)

        metrics.observe_histogram(metrics.import_duration_seconds, time.perf_counter() - start)
        logger.info(
            f"Import finished. Imported {result.total_imported} of {result.total_processed} records.",
            extra=result.model_dump()
        )
        return result

    def process_rows(self, rows: Iterable[RawRow], result: ImportResult) -> ImportResult:
        """
        Drive decoded rows through transform, accumulate and flush.

        Args:
            rows: Raw rows (consumed lazily)
            result: Accumulator updated in place

        Returns:
            The same result object
        """
        self.state = PipelineState.IDLE
        batch: list[PostRecord] = []

        self.state = PipelineState.STREAMING
        try:
            for row in rows:
                if is_blank_row(row) or is_header_row(row):
                    continue

                result.total_processed += 1
                try:
                    record = self.transformer.transform(row)
                except RowValidationError as e:
                    result.total_errors += 1
                    metrics.record_validation_failure(e.rule_name, e.field_name)
                    logger.warning(
                        f"Skipping invalid row: {e}",
                        extra={"row": {k: v for k, v in row.items() if k is not None}}
                    )
                    continue

                self.state = PipelineState.ACCUMULATING
                batch.append(record)
                if len(batch) >= self.batch_size:
                    self._flush(batch, result)
                    batch = []
                    self.state = PipelineState.ACCUMULATING
        except StreamDecodeError:
            self.state = PipelineState.FAILED
            logger.error(
                "Fatal error during CSV stream processing",
                extra={"file_name": result.file_name, "rows_processed": result.total_processed},
                exc_info=True
            )
            raise

        self.state = PipelineState.DRAINING
        if batch:
            self._flush(batch, result)

        self.state = PipelineState.DONE
        return result

    def _flush(self, batch: list[PostRecord], result: ImportResult) -> None:
        self.state = PipelineState.FLUSHING
        result.batches_flushed += 1
        batch_number = result.batches_flushed
        start = time.perf_counter()

        try:
            dedup = self.resolver.resolve(batch)
            committed = self.committer.commit(dedup.to_create)
        except Exception as e:
            # Either store round-trip failing fails the whole batch
            error = BatchPersistenceError(batch_number, len(batch), str(e))
            error.__cause__ = e
            result.total_errors += len(batch)
            result.failed_batches += 1
            metrics.record_flush(len(batch), 0, 0, False, time.perf_counter() - start)
            logger.error(
                f"Failed to import batch of {len(batch)} posts: {error}",
                extra={"batch_number": batch_number, "error_type": type(e).__name__},
                exc_info=error
            )
            self._record_failed_batch(batch, batch_number, result.file_name, e)
            return

        result.total_imported += len(committed.created)
        result.total_skipped += len(dedup.to_skip)
        metrics.record_flush(
            len(batch), len(committed.created), len(dedup.to_skip), True, time.perf_counter() - start
        )
        logger.info(
            f"Imported a batch of {len(committed.created)} posts",
            extra={
                "batch_number": batch_number,
                "created_count": len(committed.created),
                "skipped_count": len(dedup.to_skip),
            }
        )

    def _record_failed_batch(
        self, batch: list[PostRecord], batch_number: int, file_name: str, cause: Exception
    ) -> None:
        if self.failure_log is None:
            return

        failed_batch = FailedBatch(
            file_name=file_name,
            batch_number=batch_number,
            error_type=type(cause).__name__,
            error_message=str(cause),
            records=list(batch),
        )
        try:
            self.failure_log.append(failed_batch)
        except OSError:
            # The records are already counted as errors; keep importing
            logger.error(
                f"Could not write failed batch to {self.failure_log.path}",
                extra={"batch_number": batch_number},
                exc_info=True
            )
