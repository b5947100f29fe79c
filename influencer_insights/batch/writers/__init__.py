"""
Batch data sink writers.
"""

from .failure_log import FailedBatchLog
from .post_writer import BatchCommitter, CommitResult

__all__ = [
    "BatchCommitter",
    "CommitResult",
    "FailedBatchLog",
]
