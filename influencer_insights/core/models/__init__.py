"""
Core data models for the influencer post ingestion pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .failed_batch import FailedBatch
from .import_result import ImportResult, ReplayResult
from .post_record import PostRecord
from .stats import InfluencerStats, NounAnalysisResult, NounCount, TopInfluencer

__all__ = [
    "PostRecord",
    "ImportResult",
    "ReplayResult",
    "FailedBatch",
    "InfluencerStats",
    "TopInfluencer",
    "NounCount",
    "NounAnalysisResult",
]
