"""
Append-only log of batches that failed to persist.

One JSON document per line, so operators can inspect failures with
standard tools and replay them with FailedBatchReplayer.
"""

from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from influencer_insights.core.models import FailedBatch


class FailedBatchLog:
    """
    JSON-lines file of FailedBatch entries.
    """

    def __init__(self, path: str | Path):
        """
        Initialize failed-batch log.

        Args:
            path: Log file location; parent directories are created on first write
        """
        self.path = Path(path)

    def append(self, failed_batch: FailedBatch) -> None:
        """
        Append one failed batch as a single JSON line.

        Args:
            failed_batch: The batch to record
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(failed_batch.model_dump_json())
            f.write("\n")

    def read(self) -> Iterator[FailedBatch]:
        """
        Yield logged batches in the order they were written.

        Blank lines are ignored. A missing file yields nothing.

        Raises:
            ValueError: If a line is not a valid FailedBatch document
        """
        if not self.path.exists():
            return

        with open(self.path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield FailedBatch.model_validate_json(line)
                except ValidationError as e:
                    raise ValueError(
                        f"Invalid failed-batch entry at {self.path}:{line_number}: {e}"
                    ) from e
