"""
PostgreSQL access: connection pooling and the influencer post repository.
"""

from .connection import DatabaseConnectionPool
from .repository import PostRepository

__all__ = [
    "DatabaseConnectionPool",
    "PostRepository",
]
