"""
PostRecord model representing one validated influencer post (ephemeral).
"""

from datetime import datetime

from pydantic import BaseModel, Field

from influencer_insights.core.coercion import MAX_INT32, MAX_INT64


class PostRecord(BaseModel):
    """
    A validated post produced from one CSV row.

    Note: PostRecord only lives in memory while a batch is accumulated.
    It is persisted as a row of influencer_posts when its batch is committed.

    Attributes:
        influencer_id: Positive influencer identifier
        external_post_id: Source system post identifier (unique in the store)
        shortcode: Post shortcode
        thumbnail_url: Thumbnail image URL
        text: Post body text
        like_count: Number of likes (defaults to 0)
        comment_count: Number of comments (defaults to 0)
        posted_at: When the post was published
    """

    influencer_id: int = Field(..., gt=0, le=MAX_INT32)
    external_post_id: str = Field(..., min_length=1)
    shortcode: str | None = None
    thumbnail_url: str | None = None
    text: str | None = None
    like_count: int = Field(0, ge=0, le=MAX_INT64)
    comment_count: int = Field(0, ge=0, le=MAX_INT64)
    posted_at: datetime | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "influencer_id": 1,
                "external_post_id": "3271045962712893441",
                "shortcode": "C1a2B3c4D5e",
                "thumbnail_url": "https://example.com/thumb.jpg",
                "text": "新しいカフェに行きました",
                "like_count": 1000,
                "comment_count": 50,
                "posted_at": "2024-01-12T13:34:00"
            }
        }
