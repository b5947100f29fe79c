"""
CSV import service.

Wires settings, repository and failed-batch log into an IngestionPipeline
and exposes the import entry points.
"""

import io
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from influencer_insights.batch import (
    BatchCommitter,
    CSVReader,
    DedupResolver,
    FailedBatchLog,
    FailedBatchReplayer,
    IngestionPipeline,
)
from influencer_insights.core.models import ImportResult, ReplayResult
from influencer_insights.core.settings import ImportSettings
from influencer_insights.core.transform import NUMERIC_COLUMNS, OPTIONAL_COLUMNS, REQUIRED_COLUMNS


class ImportService:
    """
    Entry points for importing influencer post CSVs.
    """

    def __init__(
        self,
        repository,
        settings: ImportSettings | None = None,
        failure_log: FailedBatchLog | None = None,
    ):
        """
        Initialize import service.

        Args:
            repository: PostRepository (or any object with the same methods)
            settings: Pipeline tuning; defaults to ImportSettings()
            failure_log: Failed-batch log; defaults to settings.failure_log_path
        """
        self.repository = repository
        self.settings = settings or ImportSettings()
        self.failure_log = failure_log or FailedBatchLog(self.settings.failure_log_path)

        self.resolver = DedupResolver(repository, lookup_chunk_size=self.settings.lookup_chunk_size)
        self.committer = BatchCommitter(repository)

    def _pipeline(self) -> IngestionPipeline:
        return IngestionPipeline(
            resolver=self.resolver,
            committer=self.committer,
            reader=CSVReader(encoding=self.settings.encoding, delimiter=self.settings.delimiter),
            failure_log=self.failure_log,
            batch_size=self.settings.batch_size,
        )

    def import_from_buffer(self, data: bytes, file_name: str) -> ImportResult:
        """
        Import CSV content held in memory (e.g. an uploaded file).

        Args:
            data: Raw CSV bytes
            file_name: Original file name

        Returns:
            ImportResult for the run

        Raises:
            StreamDecodeError: If the content cannot be decoded as CSV
        """
        return self._pipeline().run(io.BytesIO(data), file_name=file_name, file_size=len(data))

    def import_file(self, path: str | Path) -> ImportResult:
        """
        Import a CSV file from disk, streaming it row by row.

        Args:
            path: CSV file location

        Returns:
            ImportResult for the run

        Raises:
            FileNotFoundError: If the file does not exist
            StreamDecodeError: If the content cannot be decoded as CSV
        """
        path = Path(path)
        file_size = os.stat(path).st_size
        with open(path, "rb") as source:
            return self._pipeline().run(source, file_name=path.name, file_size=file_size)

    def replay_failed_batches(self, file_name: str | None = None) -> ReplayResult:
        """
        Resubmit batches from the failed-batch log.

        Args:
            file_name: Only replay batches from this source file

        Returns:
            ReplayResult for the replay
        """
        replayer = FailedBatchReplayer(self.resolver, self.committer)
        return replayer.replay(self.failure_log, file_name=file_name)

    def get_status(self) -> dict[str, Any]:
        """
        Describe import capabilities and database reachability.

        Returns:
            Status dictionary (camelCase keys, JSON-ready)
        """
        max_mb = self.settings.max_file_size_bytes // (1024 * 1024)
        connected = self.repository.ping()
        return {
            "status": "ready",
            "capabilities": {
                "maxFileSize": f"{max_mb}MB",
                "supportedFormats": ["csv"],
                "batchSize": self.settings.batch_size,
                "requiredColumns": list(REQUIRED_COLUMNS),
                "optionalColumns": list(NUMERIC_COLUMNS + OPTIONAL_COLUMNS),
            },
            "database": {
                "status": "connected" if connected else "disconnected",
                "type": "PostgreSQL",
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
