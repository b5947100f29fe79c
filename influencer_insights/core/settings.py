"""
Import settings management.

Loads pipeline tuning from an optional YAML file and IMPORT_* environment
variables (a .env file is honoured via python-dotenv).
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

BATCH_SIZE = 1000
LOOKUP_CHUNK_SIZE = 500
MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024

# Environment variable -> settings field
ENV_OVERRIDES = {
    "IMPORT_BATCH_SIZE": "batch_size",
    "IMPORT_LOOKUP_CHUNK_SIZE": "lookup_chunk_size",
    "IMPORT_MAX_FILE_SIZE_BYTES": "max_file_size_bytes",
    "IMPORT_FAILURE_LOG": "failure_log_path",
    "IMPORT_ENCODING": "encoding",
    "IMPORT_DELIMITER": "delimiter",
}


class ImportSettings(BaseModel):
    """
    Tunables for the ingestion pipeline.

    Attributes:
        batch_size: Records accumulated before a flush
        lookup_chunk_size: Ids per existence query (bounded by query parameter limits)
        max_file_size_bytes: Largest accepted upload, enforced by the caller
        failure_log_path: JSON-lines file receiving failed batches
        encoding: Source text encoding (utf-8-sig strips a BOM)
        delimiter: CSV field delimiter
    """

    batch_size: int = Field(BATCH_SIZE, gt=0)
    lookup_chunk_size: int = Field(LOOKUP_CHUNK_SIZE, gt=0)
    max_file_size_bytes: int = Field(MAX_FILE_SIZE_BYTES, gt=0)
    failure_log_path: Path = Path("logs/failed_batches.jsonl")
    encoding: str = "utf-8-sig"
    delimiter: str = Field(",", min_length=1, max_length=1)


class SettingsLoader:
    """
    Loads ImportSettings from a YAML configuration file.

    Expected YAML format:
    ```yaml
    import:
      batch_size: 1000
      lookup_chunk_size: 500
      failure_log_path: logs/failed_batches.jsonl
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the settings loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

    def load(self) -> dict[str, Any]:
        """
        Read the import section of the YAML file.

        Returns:
            Raw settings dictionary (validated later by ImportSettings)

        Raises:
            ValueError: If the file does not contain an 'import' mapping
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not config or "import" not in config:
            raise ValueError("Configuration file must contain 'import' section")

        section = config["import"]
        if not isinstance(section, dict):
            raise ValueError("'import' section must be a mapping")

        unknown = set(section) - set(ImportSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown import settings: {', '.join(sorted(unknown))}")

        return section


def load_settings(config_path: str | Path | None = None) -> ImportSettings:
    """
    Build ImportSettings from defaults, an optional YAML file and the environment.

    Precedence (highest first): IMPORT_* environment variables, YAML file, defaults.

    Args:
        config_path: Optional YAML file; IMPORT_CONFIG is used when omitted

    Returns:
        Validated ImportSettings
    """
    load_dotenv()

    values: dict[str, Any] = {}
    config_path = config_path or os.getenv("IMPORT_CONFIG")
    if config_path:
        values.update(SettingsLoader(config_path).load())

    for env_name, field_name in ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value is not None and env_value != "":
            values[field_name] = env_value

    return ImportSettings(**values)
