"""
Pipeline Orchestrator.

Coordinates reading, concurrent enrichment and writing of one review file.
"""

import logging
import time
from collections import Counter
from typing import Dict, Iterable, Iterator, Optional

from rating_sentiment.agents.aggregation import SentimentSummarizer
from rating_sentiment.agents.enrichment import EnrichmentPipeline
from rating_sentiment.agents.ingestion import ReviewReader
from rating_sentiment.models.review import Review
from rating_sentiment.utils.storage import ReviewWriter
from rating_sentiment.config import settings

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Orchestrates one run of the mapper.

    Coordinates:
    1. Ingestion -> 2. Enrichment (worker pool) -> 3. CSV output
    -> 4. Sentiment summary -> 5. Run metadata
    """

    def __init__(
        self,
        worker_count: Optional[int] = None,
        channel_capacity: Optional[int] = None,
        distribution: Optional[str] = None,
        unknown_rating_policy: Optional[str] = None,
        write_metadata: Optional[bool] = None,
        write_summary: Optional[bool] = None
    ):
        """
        Initialize pipeline orchestrator.

        Arguments left as None fall back to rating_sentiment.config.settings.

        Args:
            worker_count: Number of enrichment workers
            channel_capacity: Output queue capacity
            distribution: "partition" or "broadcast"
            unknown_rating_policy: "skip" or "fail"
            write_metadata: Save <output stem>_metadata.json after the run
            write_summary: Save <output stem>_summary.csv after the run
        """
        logger.info("Initializing pipeline components...")

        self.reader = ReviewReader(encoding=settings.FILE_ENCODING)
        self.writer = ReviewWriter(encoding=settings.FILE_ENCODING)

        self.pipeline = EnrichmentPipeline(
            worker_count=worker_count if worker_count is not None else settings.WORKER_COUNT,
            channel_capacity=(
                channel_capacity if channel_capacity is not None else settings.CHANNEL_CAPACITY
            ),
            distribution=distribution or settings.WORK_DISTRIBUTION,
            unknown_rating_policy=unknown_rating_policy or settings.UNKNOWN_RATING_POLICY
        )

        self.write_metadata = (
            write_metadata if write_metadata is not None else settings.WRITE_RUN_METADATA
        )
        self.write_summary = (
            write_summary if write_summary is not None else settings.WRITE_SUMMARY
        )
        self.summarizer = SentimentSummarizer()

        logger.info("Pipeline initialized successfully")

    def run(self, input_path: str, output_path: str) -> Dict:
        """
        Enrich every review in input_path and write them to output_path.

        Args:
            input_path: Source CSV (Content, Rating)
            output_path: Destination CSV

        Returns:
            Run summary dict (counts, label distribution, elapsed seconds)
        """
        start = time.perf_counter()
        label_counts: Counter = Counter()

        # STAGE 1: Ingestion
        reviews = self.reader.read_all(input_path)

        # STAGE 2 + 3: Enrichment streamed into the writer
        with self.pipeline.start(reviews) as stream:
            rows_written = self.writer.write_all(
                output_path,
                self._count_labels(stream, label_counts)
            )
        stats = stream.stats

        elapsed = time.perf_counter() - start
        summary = {
            "input_path": str(input_path),
            "output_path": str(output_path),
            "rows_read": len(reviews),
            "rows_skipped_malformed": self.reader.last_skipped,
            "rows_skipped_unknown_rating": stats.skipped_ratings,
            "rows_written": rows_written,
            "worker_count": stats.worker_count,
            "distribution": stats.distribution,
            "label_counts": dict(label_counts),
            "elapsed_seconds": round(elapsed, 6)
        }

        # STAGE 4: Sentiment summary
        if self.write_summary:
            self.summarizer.save(label_counts, output_path)

        # STAGE 5: Run metadata
        if self.write_metadata:
            self.writer.save_run_metadata(output_path, summary)

        logger.info(
            f"Run complete: {len(reviews)} reviews read -> {rows_written} rows written "
            f"({stats.worker_count} workers, {stats.distribution})"
        )
        return summary

    @staticmethod
    def _count_labels(stream: Iterable[Review], label_counts: Counter) -> Iterator[Review]:
        """Pass reviews through while tallying their labels."""
        for review in stream:
            label_counts[review.label] += 1
            yield review
