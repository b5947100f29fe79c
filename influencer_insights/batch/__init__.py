"""
Batch ingestion: streaming reader, dedup, commit and orchestration.
"""

from .dedup import DedupResolver, DedupResult
from .pipeline import IngestionPipeline, PipelineState
from .readers import CSVReader
from .reprocess import FailedBatchReplayer
from .writers import BatchCommitter, CommitResult, FailedBatchLog

__all__ = [
    "IngestionPipeline",
    "PipelineState",
    "CSVReader",
    "DedupResolver",
    "DedupResult",
    "BatchCommitter",
    "CommitResult",
    "FailedBatchLog",
    "FailedBatchReplayer",
]
