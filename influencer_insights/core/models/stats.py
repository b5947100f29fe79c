"""
Read-side models for influencer statistics, rankings and noun analysis.
"""

from pydantic import BaseModel, Field


class InfluencerStats(BaseModel):
    """
    Average engagement for one influencer.

    Attributes:
        influencer_id: Influencer identifier
        avg_likes: Average likes per post
        avg_comments: Average comments per post
        post_count: Number of stored posts
    """

    influencer_id: int
    avg_likes: float
    avg_comments: float
    post_count: int = Field(..., ge=0)


class TopInfluencer(BaseModel):
    """One ranking entry; only the ranked average is populated."""

    influencer_id: int
    avg_likes: float | None = None
    avg_comments: float | None = None
    post_count: int = Field(..., ge=0)


class NounCount(BaseModel):
    noun: str
    count: int = Field(..., ge=1)


class NounAnalysisResult(BaseModel):
    """
    Most frequent nouns across an influencer's posts.

    Attributes:
        influencer_id: Influencer identifier
        total_posts: Number of posts fetched (including posts without text)
        nouns: Nouns ordered by descending count
    """

    influencer_id: int
    total_posts: int = Field(..., ge=0)
    nouns: list[NounCount] = Field(default_factory=list)
