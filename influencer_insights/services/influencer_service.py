"""
Influencer statistics, rankings and noun analysis.
"""

from influencer_insights.analysis import TextAnalyzer
from influencer_insights.core.models import InfluencerStats, NounAnalysisResult, TopInfluencer

DEFAULT_LIMIT = 10


class InfluencerService:
    """
    Read-side operations over stored influencer posts.
    """

    def __init__(self, repository, text_analyzer: TextAnalyzer):
        """
        Initialize influencer service.

        Args:
            repository: PostRepository (or any object with the same read methods)
            text_analyzer: Shared analyzer, initialized once per process
        """
        self.repository = repository
        self.text_analyzer = text_analyzer

    def get_influencer_stats(self, influencer_id: int) -> InfluencerStats | None:
        return self.repository.get_influencer_stats(influencer_id)

    def get_top_influencers_by_likes(self, limit: int = DEFAULT_LIMIT) -> list[TopInfluencer]:
        return self.repository.get_top_influencers_by_likes(limit)

    def get_top_influencers_by_comments(self, limit: int = DEFAULT_LIMIT) -> list[TopInfluencer]:
        return self.repository.get_top_influencers_by_comments(limit)

    def get_top_nouns(self, influencer_id: int, limit: int = DEFAULT_LIMIT) -> NounAnalysisResult:
        """
        Most frequent nouns in an influencer's post texts.

        Args:
            influencer_id: Influencer identifier
            limit: Maximum number of nouns returned

        Returns:
            NounAnalysisResult (total_posts counts posts with and without text)
        """
        posts = self.repository.find_by_influencer_id(influencer_id)
        noun_counts = self.text_analyzer.analyze_texts(post["text"] for post in posts)

        return NounAnalysisResult(
            influencer_id=influencer_id,
            total_posts=len(posts),
            nouns=noun_counts[:limit],
        )
