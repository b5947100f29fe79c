"""
Failed-batch replay.

Resubmits batches recorded in the failed-batch log. Replaying is
idempotent: records stored by an earlier attempt are resolved as
duplicates and skipped.
"""

from influencer_insights.core.models import ReplayResult
from influencer_insights.observability.logger import get_logger

from .dedup import DedupResolver
from .writers import BatchCommitter, FailedBatchLog

logger = get_logger(__name__)


class FailedBatchReplayer:
    """
    Pushes logged batches through dedup resolution and commit again.
    """

    def __init__(self, resolver: DedupResolver, committer: BatchCommitter):
        """
        Initialize replayer.

        Args:
            resolver: Duplicate resolver
            committer: Bulk writer
        """
        self.resolver = resolver
        self.committer = committer

    def replay(self, log: FailedBatchLog, file_name: str | None = None) -> ReplayResult:
        """
        Replay every batch in the log.

        A batch that fails again counts all of its records as errors and
        the replay moves on to the next batch.

        Args:
            log: Failed-batch log to read
            file_name: Only replay batches that came from this source file

        Returns:
            ReplayResult with per-outcome record counts
        """
        result = ReplayResult()

        for failed_batch in log.read():
            if file_name is not None and failed_batch.file_name != file_name:
                continue

            result.batches_replayed += 1
            result.total_records += len(failed_batch.records)
            try:
                dedup = self.resolver.resolve(failed_batch.records)
                committed = self.committer.commit(dedup.to_create)
            except Exception:
                result.total_errors += len(failed_batch.records)
                logger.error(
                    f"Replay failed for batch {failed_batch.batch_number} of {failed_batch.file_name}",
                    extra={"batch_number": failed_batch.batch_number, "file_name": failed_batch.file_name},
                    exc_info=True
                )
                continue

            result.total_imported += len(committed.created)
            result.total_skipped += len(dedup.to_skip)

        logger.info(
            f"Replayed {result.batches_replayed} batches from {log.path}",
            extra=result.model_dump()
        )
        return result
