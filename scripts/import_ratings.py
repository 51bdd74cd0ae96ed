#!/usr/bin/env python3
"""
Import a file of ratings into an IMDb account.

Usage:
    python scripts/import_ratings.py ratings.csv --session-id <cookie id> --rating-scale 5
"""

import argparse
import logging
import os
import sys

# Add the project root directory to sys.path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(project_root)

from pydantic import ValidationError

from core.config import ImporterConfig, settings
from core.errors import BatchSubmissionError, ConfigError
from services.importer import RatingImporter
from services.rating_sources import load_rating_requests

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Submit ratings to IMDb.")
    parser.add_argument("ratings_file", help="CSV, JSON or YAML file of ratings")
    parser.add_argument(
        "--session-id",
        default=settings.IMDB_SESSION_ID,
        help="Value of the IMDb 'id' cookie (defaults to IMDB_SESSION_ID)",
    )
    parser.add_argument(
        "--rating-scale",
        type=int,
        default=settings.IMDB_RATING_SCALE,
        help="Scale the ratings in the file are expressed on (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=settings.IMDB_DRY_RUN,
        help="Resolve titles and fetch auth tokens without posting ratings (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = ImporterConfig(
            session_identity=args.session_id or "",
            rating_scale=args.rating_scale,
            dry_run=args.dry_run,
            base_url=settings.IMDB_BASE_URL,
        )
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    try:
        ratings = load_rating_requests(args.ratings_file)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        logger.error("Could not load ratings from %s: %s", args.ratings_file, exc)
        return 1

    importer = RatingImporter(config)

    try:
        importer.submit(ratings)
    except BatchSubmissionError as exc:
        logger.error("%s", exc)
        for request, error in exc.failures:
            logger.error("  %s: %s", request.display_name, error)
        return 1

    logger.info("Processed %d rating(s)", len(ratings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
