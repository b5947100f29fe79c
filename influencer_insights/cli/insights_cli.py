"""
Command-line interface for influencer statistics and text analysis.

Usage:
    influencer-insights stats --influencer-id <id>
    influencer-insights top-likes [--limit <n>]
    influencer-insights top-comments [--limit <n>]
    influencer-insights nouns --influencer-id <id> [--limit <n>]
"""

import argparse
import sys

from psycopg import OperationalError

from influencer_insights.analysis import TextAnalyzer
from influencer_insights.observability.logger import get_logger
from influencer_insights.services import InfluencerService
from influencer_insights.utils.validation import ValidationError, validate_influencer_id, validate_limit
from influencer_insights.warehouse import PostRepository

from .common import add_database_arguments, create_pool, print_json

logger = get_logger(__name__)


def _argparse_type(validator):
    """Adapt a validation function for use as an argparse type."""
    def convert(value: str):
        try:
            return validator(value)
        except ValidationError as e:
            raise argparse.ArgumentTypeError(str(e)) from e
    convert.__name__ = validator.__name__
    return convert


def stats_command(service: InfluencerService, args) -> int:
    stats = service.get_influencer_stats(args.influencer_id)
    if stats is None:
        logger.warning(f"No data found for influencer ID: {args.influencer_id}")
        return 1
    print_json(stats)
    return 0


def top_likes_command(service: InfluencerService, args) -> int:
    print_json({
        "limit": args.limit,
        "results": [
            r.model_dump(mode="json", exclude_none=True)
            for r in service.get_top_influencers_by_likes(args.limit)
        ],
    })
    return 0


def top_comments_command(service: InfluencerService, args) -> int:
    print_json({
        "limit": args.limit,
        "results": [
            r.model_dump(mode="json", exclude_none=True)
            for r in service.get_top_influencers_by_comments(args.limit)
        ],
    })
    return 0


def nouns_command(service: InfluencerService, args) -> int:
    print_json(service.get_top_nouns(args.influencer_id, args.limit))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="influencer-insights",
        description="Influencer statistics, rankings and noun analysis",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    influencer_id_type = _argparse_type(validate_influencer_id)
    limit_type = _argparse_type(validate_limit)

    stats_parser = subparsers.add_parser("stats", help="Average likes/comments of one influencer")
    stats_parser.add_argument("--influencer-id", type=influencer_id_type, required=True)

    likes_parser = subparsers.add_parser("top-likes", help="Influencers ranked by average likes")
    likes_parser.add_argument("--limit", type=limit_type, default=10, help="1-100 (default: 10)")

    comments_parser = subparsers.add_parser("top-comments", help="Influencers ranked by average comments")
    comments_parser.add_argument("--limit", type=limit_type, default=10, help="1-100 (default: 10)")

    nouns_parser = subparsers.add_parser("nouns", help="Most frequent nouns in an influencer's posts")
    nouns_parser.add_argument("--influencer-id", type=influencer_id_type, required=True)
    nouns_parser.add_argument("--limit", type=limit_type, default=10, help="1-100 (default: 10)")

    for subparser in (stats_parser, likes_parser, comments_parser, nouns_parser):
        add_database_arguments(subparser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "stats": stats_command,
        "top-likes": top_likes_command,
        "top-comments": top_comments_command,
        "nouns": nouns_command,
    }

    try:
        with create_pool(args) as pool:
            service = InfluencerService(PostRepository(pool), TextAnalyzer())
            return commands[args.command](service, args)
    except (OperationalError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
