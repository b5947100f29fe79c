"""
Command-line interface for CSV imports.

Usage:
    influencer-import import --input <file_path> [options]
    influencer-import replay [--failure-log <path>] [--file-name <name>]
    influencer-import status
"""

import argparse
import sys

from psycopg import OperationalError

from influencer_insights.core.errors import StreamDecodeError
from influencer_insights.core.settings import load_settings
from influencer_insights.observability.logger import get_logger
from influencer_insights.observability.metrics import start_metrics_server
from influencer_insights.services import ImportService
from influencer_insights.utils.validation import ValidationError, validate_input_file
from influencer_insights.warehouse import PostRepository

from .common import add_database_arguments, create_pool, print_json

logger = get_logger(__name__)


def _build_settings(args):
    settings = load_settings(args.config)
    overrides = {}
    if getattr(args, "batch_size", None):
        overrides["batch_size"] = args.batch_size
    if getattr(args, "failure_log", None):
        overrides["failure_log_path"] = args.failure_log
    if getattr(args, "max_size", None):
        overrides["max_file_size_bytes"] = args.max_size
    if overrides:
        settings = settings.model_validate({**settings.model_dump(), **overrides})
    return settings


def import_command(args) -> int:
    """
    Execute an import.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    settings = _build_settings(args)

    try:
        input_path = validate_input_file(args.input, settings.max_file_size_bytes)
    except ValidationError as e:
        logger.error(str(e))
        return 1

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    pool = create_pool(args)
    pool.open()
    try:
        service = ImportService(PostRepository(pool), settings=settings)
        result = service.import_file(input_path)
    except StreamDecodeError as e:
        logger.error(f"Import failed: {e}", exc_info=True)
        return 1
    finally:
        pool.close()

    print_json(result)
    if result.failed_batches:
        logger.warning(
            f"{result.failed_batches} batch(es) failed; see {settings.failure_log_path}",
            extra={"failure_log": str(settings.failure_log_path)}
        )
    return 0


def replay_command(args) -> int:
    """
    Replay batches recorded in the failed-batch log.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    settings = _build_settings(args)
    if not settings.failure_log_path.exists():
        logger.info(f"No failed-batch log at {settings.failure_log_path}")
        return 0

    pool = create_pool(args)
    pool.open()
    try:
        service = ImportService(PostRepository(pool), settings=settings)
        result = service.replay_failed_batches(file_name=args.file_name)
    except ValueError as e:
        logger.error(f"Replay aborted: {e}")
        return 1
    finally:
        pool.close()

    print_json(result)
    return 0


def status_command(args) -> int:
    """Print import capabilities and database reachability."""
    settings = _build_settings(args)
    pool = create_pool(args)
    try:
        pool.open(max_retries=1)
    except OperationalError as e:
        logger.warning(f"Database unreachable: {e}")

    try:
        print_json(ImportService(PostRepository(pool), settings=settings).get_status())
    finally:
        pool.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="influencer-import",
        description="Import influencer post CSV files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Import a CSV file
  influencer-import import --input data/posts.csv

  # Import with a smaller batch size and a custom failure log
  influencer-import import --input data/posts.csv --batch-size 200 \\
      --failure-log /var/log/influencer/failed.jsonl

  # Resubmit batches that failed during earlier imports
  influencer-import replay --file-name posts.csv
        """
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file (default: $IMPORT_CONFIG)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    import_parser = subparsers.add_parser("import", help="Import a CSV file")
    import_parser.add_argument("--input", required=True, help="Path to input CSV file")
    import_parser.add_argument("--batch-size", type=int, help="Records per flush")
    import_parser.add_argument("--failure-log", help="Failed-batch log path")
    import_parser.add_argument("--max-size", type=int, help="Maximum input size in bytes")
    import_parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Expose Prometheus metrics on this port during the import"
    )
    add_database_arguments(import_parser)

    replay_parser = subparsers.add_parser("replay", help="Replay failed batches")
    replay_parser.add_argument("--failure-log", help="Failed-batch log path")
    replay_parser.add_argument("--file-name", help="Only replay batches from this source file")
    add_database_arguments(replay_parser)

    status_parser = subparsers.add_parser("status", help="Show import capabilities")
    add_database_arguments(status_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "import": import_command,
        "replay": replay_command,
        "status": status_command,
    }

    try:
        return commands[args.command](args)
    except (OperationalError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
