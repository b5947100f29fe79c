"""
Influencer Insights: CSV ingestion and analytics for influencer posts.
"""

__version__ = "0.1.0"
