"""
Helpers shared by the command-line interfaces.
"""

import argparse
import json
import os
from typing import Any

from pydantic import BaseModel

from influencer_insights.warehouse import DatabaseConnectionPool


def add_database_arguments(parser: argparse.ArgumentParser) -> None:
    """Add --db-* connection options (defaulting to the DB_* environment variables)."""
    parser.add_argument(
        "--db-host",
        default=os.getenv("DB_HOST", "localhost"),
        help="Database host (default: $DB_HOST or localhost)"
    )
    parser.add_argument(
        "--db-port",
        type=int,
        default=int(os.getenv("DB_PORT", "5432")),
        help="Database port (default: $DB_PORT or 5432)"
    )
    parser.add_argument(
        "--db-name",
        default=os.getenv("DB_NAME", "influencer_insights"),
        help="Database name (default: $DB_NAME or influencer_insights)"
    )
    parser.add_argument(
        "--db-user",
        default=os.getenv("DB_USER", "pipeline"),
        help="Database user (default: $DB_USER or pipeline)"
    )
    parser.add_argument(
        "--db-password",
        default=os.getenv("DB_PASSWORD"),
        help="Database password (default: $DB_PASSWORD)"
    )


def create_pool(args: argparse.Namespace) -> DatabaseConnectionPool:
    """Build an unopened connection pool from parsed --db-* options."""
    return DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )


def print_json(payload: Any) -> None:
    """Print a model, list of models or plain structure as indented JSON."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [
            item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
            for item in payload
        ]
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
