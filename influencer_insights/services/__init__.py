"""
Application services composing the pipeline, repository and analyzer.
"""

from .import_service import ImportService
from .influencer_service import InfluencerService

__all__ = [
    "ImportService",
    "InfluencerService",
]
