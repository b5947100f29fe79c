"""
Influencer post repository backed by PostgreSQL.

Bulk inserts use INSERT ... ON CONFLICT (post_id) DO NOTHING so that a
retried or concurrent import never fails on an already stored post.
"""

from typing import Any

from influencer_insights.core.coercion import to_number
from influencer_insights.core.models import InfluencerStats, PostRecord, TopInfluencer

from .connection import DatabaseConnectionPool

POST_COLUMNS = (
    "influencer_id",
    "post_id",
    "shortcode",
    "likes",
    "comments",
    "thumbnail",
    "text",
    "post_date",
)

_INSERT_COLUMNS = ", ".join(POST_COLUMNS)
_INSERT_PLACEHOLDERS = ", ".join(["%s"] * len(POST_COLUMNS))


def _record_params(record: PostRecord) -> tuple:
    return (
        record.influencer_id,
        record.external_post_id,
        record.shortcode,
        record.like_count,
        record.comment_count,
        record.thumbnail_url,
        record.text,
        record.posted_at,
    )


class PostRepository:
    """
    Store operations for influencer posts.

    The ingestion pipeline only depends on find_existing_post_ids and
    bulk_create; the remaining methods serve the read side.
    """

    TABLE = "influencer_posts"

    def __init__(self, pool: DatabaseConnectionPool):
        """
        Initialize repository.

        Args:
            pool: Database connection pool
        """
        self.pool = pool

    def create(self, record: PostRecord) -> dict[str, Any]:
        """
        Insert a single post.

        Args:
            record: Post to insert

        Returns:
            The stored row including id and created_at
        """
        query = f"""
            INSERT INTO {self.TABLE} ({_INSERT_COLUMNS})
            VALUES ({_INSERT_PLACEHOLDERS})
            RETURNING *
        """
        with self.pool.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, _record_params(record))
                row = cur.fetchone()
            conn.commit()
        return row

    def bulk_create(self, records: list[PostRecord], skip_duplicates: bool = True) -> int:
        """
        Insert many posts in one transaction.

        Args:
            records: Posts to insert
            skip_duplicates: Silently skip rows whose post_id already exists

        Returns:
            Number of rows the database reports as inserted
        """
        if not records:
            return 0

        command = f"INSERT INTO {self.TABLE} ({_INSERT_COLUMNS}) VALUES ({_INSERT_PLACEHOLDERS})"
        if skip_duplicates:
            command += " ON CONFLICT (post_id) DO NOTHING"

        return self.pool.execute_batch(command, [_record_params(r) for r in records])

    def find_existing_post_ids(self, post_ids: list[str]) -> set[str]:
        """
        Return which of the given post ids are already stored.

        Callers are responsible for keeping the list within query
        parameter limits (see DedupResolver).
        """
        if not post_ids:
            return set()

        rows = self.pool.execute_query(
            f"SELECT post_id FROM {self.TABLE} WHERE post_id = ANY(%s)",
            (list(post_ids),),
        )
        return {row["post_id"] for row in rows}

    def find_by_influencer_id(self, influencer_id: int) -> list[dict[str, Any]]:
        return self.pool.execute_query(
            f"SELECT * FROM {self.TABLE} WHERE influencer_id = %s ORDER BY id",
            (influencer_id,),
        )

    def find_by_post_id(self, post_id: str) -> dict[str, Any] | None:
        rows = self.pool.execute_query(
            f"SELECT * FROM {self.TABLE} WHERE post_id = %s",
            (post_id,),
        )
        return rows[0] if rows else None

    def exists(self, post_id: str) -> bool:
        return self.find_by_post_id(post_id) is not None

    def get_influencer_stats(self, influencer_id: int) -> InfluencerStats | None:
        """
        Average likes and comments for one influencer.

        Returns:
            InfluencerStats, or None if the influencer has no posts
        """
        rows = self.pool.execute_query(
            f"""
            SELECT
                COUNT(*) AS post_count,
                AVG(likes) AS avg_likes,
                AVG(comments) AS avg_comments
            FROM {self.TABLE}
            WHERE influencer_id = %s
            """,
            (influencer_id,),
        )
        if not rows or rows[0]["post_count"] == 0:
            return None

        row = rows[0]
        return InfluencerStats(
            influencer_id=influencer_id,
            avg_likes=to_number(row["avg_likes"]),
            avg_comments=to_number(row["avg_comments"]),
            post_count=row["post_count"],
        )

    def get_top_influencers_by_likes(self, limit: int) -> list[TopInfluencer]:
        return [
            TopInfluencer(
                influencer_id=row["influencer_id"],
                avg_likes=to_number(row["average"]),
                post_count=row["post_count"],
            )
            for row in self._top_by_average("likes", limit)
        ]

    def get_top_influencers_by_comments(self, limit: int) -> list[TopInfluencer]:
        return [
            TopInfluencer(
                influencer_id=row["influencer_id"],
                avg_comments=to_number(row["average"]),
                post_count=row["post_count"],
            )
            for row in self._top_by_average("comments", limit)
        ]

    def _top_by_average(self, column: str, limit: int) -> list[dict[str, Any]]:
        # column comes from the two callers above, never from user input
        return self.pool.execute_query(
            f"""
            SELECT
                influencer_id,
                AVG({column}) AS average,
                COUNT(*) AS post_count
            FROM {self.TABLE}
            GROUP BY influencer_id
            ORDER BY average DESC, influencer_id ASC
            LIMIT %s
            """,
            (limit,),
        )

    def ping(self) -> bool:
        return self.pool.ping()
