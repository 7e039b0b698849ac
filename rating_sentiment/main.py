"""
Rating Sentiment Mapper

CLI entry point: enrich a review CSV with sentiment derived from ratings.
"""

import argparse
import logging
import sys
import time
from datetime import timedelta

from rating_sentiment.orchestrator import PipelineOrchestrator
from rating_sentiment.config import settings
from rating_sentiment.registry.sentiment_table import known_ratings


def setup_logging(log_level: str = "INFO", log_file: str = settings.LOG_FILE):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Map review star ratings to sentiment labels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default file names (threads_app_reviews.csv -> output.csv)
  rating-sentiment

  # Custom files, 4 workers
  rating-sentiment --input reviews.csv --output enriched.csv --workers 4

  # Reproduce one output row per review per worker
  rating-sentiment --distribution broadcast
        """
    )

    parser.add_argument(
        "--input",
        default=settings.INPUT_FILE,
        help=f"Input CSV with Content,Rating columns (default: {settings.INPUT_FILE})"
    )

    parser.add_argument(
        "--output",
        default=settings.OUTPUT_FILE,
        help=f"Output CSV path (default: {settings.OUTPUT_FILE})"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=settings.WORKER_COUNT,
        help=f"Number of enrichment workers (default: {settings.WORKER_COUNT}, one per CPU)"
    )

    parser.add_argument(
        "--channel-capacity",
        type=int,
        default=settings.CHANNEL_CAPACITY,
        help=f"Reviews buffered between workers and writer (default: {settings.CHANNEL_CAPACITY})"
    )

    parser.add_argument(
        "--distribution",
        default=settings.WORK_DISTRIBUTION,
        choices=["partition", "broadcast"],
        help=f"How reviews are handed to workers (default: {settings.WORK_DISTRIBUTION})"
    )

    parser.add_argument(
        "--on-unknown-rating",
        default=settings.UNKNOWN_RATING_POLICY,
        choices=["skip", "fail"],
        help=(
            f"What to do with ratings other than {', '.join(known_ratings())} "
            f"(default: {settings.UNKNOWN_RATING_POLICY})"
        )
    )

    parser.add_argument(
        "--no-metadata",
        action="store_true",
        help="Do not write the <output>_metadata.json file"
    )

    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not write the <output>_summary.csv sentiment distribution"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    start = time.perf_counter()

    try:
        orchestrator = PipelineOrchestrator(
            worker_count=args.workers,
            channel_capacity=args.channel_capacity,
            distribution=args.distribution,
            unknown_rating_policy=args.on_unknown_rating,
            write_metadata=not args.no_metadata,
            write_summary=not args.no_summary
        )

        orchestrator.run(input_path=args.input, output_path=args.output)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        sys.exit(1)

    logger.info(f"Done in: {timedelta(seconds=time.perf_counter() - start)}")
    sys.exit(0)


if __name__ == "__main__":
    main()
