"""
Duplicate resolution against already persisted posts.
"""

from dataclasses import dataclass, field

from influencer_insights.core.models import PostRecord
from influencer_insights.core.settings import LOOKUP_CHUNK_SIZE
from influencer_insights.observability.logger import get_logger

logger = get_logger(__name__)


@dataclass
class DedupResult:
    to_create: list[PostRecord] = field(default_factory=list)
    to_skip: list[PostRecord] = field(default_factory=list)


class DedupResolver:
    """
    Partitions candidate posts into new and already stored ones.

    The existence lookup is split into chunks of lookup_chunk_size ids,
    independent of the ingestion batch size, to stay within the query
    engine's parameter limits. The store is queried on every call; nothing
    is cached between batches.
    """

    def __init__(self, repository, lookup_chunk_size: int = LOOKUP_CHUNK_SIZE):
        """
        Initialize resolver.

        Args:
            repository: Object providing find_existing_post_ids(post_ids) -> set[str]
            lookup_chunk_size: Maximum ids per existence query
        """
        if lookup_chunk_size <= 0:
            raise ValueError("lookup_chunk_size must be positive")
        self.repository = repository
        self.lookup_chunk_size = lookup_chunk_size

    def find_existing(self, post_ids: list[str]) -> set[str]:
        """Union of existing ids over all lookup chunks."""
        existing: set[str] = set()
        for start in range(0, len(post_ids), self.lookup_chunk_size):
            chunk = post_ids[start:start + self.lookup_chunk_size]
            existing |= self.repository.find_existing_post_ids(chunk)
        return existing

    def resolve(self, candidates: list[PostRecord]) -> DedupResult:
        """
        Split candidates by whether their external id is already stored.

        Side-effect free and safe to retry.

        Args:
            candidates: Posts of one batch

        Returns:
            DedupResult with to_create and to_skip in input order
        """
        if not candidates:
            return DedupResult()

        # dict.fromkeys keeps first-seen order while dropping repeats
        post_ids = list(dict.fromkeys(c.external_post_id for c in candidates))
        existing = self.find_existing(post_ids)

        result = DedupResult()
        for candidate in candidates:
            if candidate.external_post_id in existing:
                result.to_skip.append(candidate)
            else:
                result.to_create.append(candidate)

        if result.to_skip:
            logger.debug(
                f"Skipping {len(result.to_skip)} already stored posts",
                extra={"candidates": len(candidates), "skipped": len(result.to_skip)}
            )
        return result
