"""
Batch committer for new posts.

Writes the create set of a batch with a single bulk insert.
"""

from dataclasses import dataclass, field

from influencer_insights.core.models import PostRecord
from influencer_insights.observability.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommitResult:
    created: list[PostRecord] = field(default_factory=list)


class BatchCommitter:
    """
    Persists posts in one bulk operation with conflict skipping.

    Conflict skipping backs up DedupResolver for the window between its
    lookup and this insert (a concurrent import or an external writer).
    """

    def __init__(self, repository):
        """
        Initialize committer.

        Args:
            repository: Object providing bulk_create(records, skip_duplicates=True) -> int
        """
        self.repository = repository

    def commit(self, records: list[PostRecord]) -> CommitResult:
        """
        Insert records, skipping any whose post_id already exists.

        The returned list is the records attempted as new, not the count
        reported by the database, so accounting does not depend on how the
        store counts skipped conflicts.

        Args:
            records: The create set produced by DedupResolver

        Returns:
            CommitResult listing the attempted records

        Raises:
            Exception: Any store failure propagates for the whole batch
        """
        if not records:
            return CommitResult()

        inserted = self.repository.bulk_create(records, skip_duplicates=True)
        if inserted != len(records):
            logger.debug(
                "Store inserted a different number of rows than attempted",
                extra={"attempted": len(records), "inserted": inserted}
            )
        return CommitResult(created=list(records))
