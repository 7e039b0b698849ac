"""
Enrichment Pipeline.

Fans reviews out to a fixed pool of worker threads, each of which annotates
reviews with their sentiment and emits them onto one bounded output queue.
A coordinator thread waits for every worker and then closes the queue, so
the consumer can drain it concurrently with production.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from rating_sentiment.models.review import Review
from rating_sentiment.registry.sentiment_table import (
    UnknownRatingError,
    known_ratings,
    resolve,
)

logger = logging.getLogger(__name__)

DISTRIBUTIONS = ("partition", "broadcast")
UNKNOWN_RATING_POLICIES = ("skip", "fail")

# Marks the end of the output queue; put exactly once by the coordinator
_END_OF_STREAM = object()


class PipelineError(RuntimeError):
    """Raised to the consumer when a worker aborted the pipeline."""


@dataclass
class PipelineStats:
    """Counters for a finished pipeline run."""
    worker_count: int
    distribution: str
    emitted: int = 0
    skipped_ratings: int = 0


def enrich_review(review: Review) -> Review:
    """
    Return an enriched copy of a review.

    Raises:
        UnknownRatingError: If the review's rating is not in the table
    """
    polarity, label = resolve(review.rating)
    return review.with_sentiment(polarity, label)


class EnrichmentPipeline:
    """
    Concurrent fan-out/fan-in enrichment.

    Work distribution:
    - "partition": worker i takes reviews[i::W], every review is emitted once
    - "broadcast": every worker walks the full input, every review is
      emitted W times

    Unknown rating policy:
    - "skip": drop the review, log it and keep going
    - "fail": abort all workers; the consumer gets PipelineError once the
      queue has been drained
    """

    def __init__(
        self,
        worker_count: int,
        channel_capacity: int = 1,
        distribution: str = "partition",
        unknown_rating_policy: str = "skip"
    ):
        """
        Initialize enrichment pipeline.

        Args:
            worker_count: Number of worker threads (>= 1)
            channel_capacity: Maximum reviews waiting in the output queue (>= 1)
            distribution: "partition" or "broadcast"
            unknown_rating_policy: "skip" or "fail"
        """
        if worker_count < 1:
            raise ValueError(f"Invalid worker_count: {worker_count}. Must be >= 1")
        if channel_capacity < 1:
            raise ValueError(f"Invalid channel_capacity: {channel_capacity}. Must be >= 1")
        if distribution not in DISTRIBUTIONS:
            raise ValueError(
                f"Invalid distribution: {distribution}. Must be 'partition' or 'broadcast'"
            )
        if unknown_rating_policy not in UNKNOWN_RATING_POLICIES:
            raise ValueError(
                f"Invalid unknown_rating_policy: {unknown_rating_policy}. Must be 'skip' or 'fail'"
            )

        self.worker_count = worker_count
        self.channel_capacity = channel_capacity
        self.distribution = distribution
        self.unknown_rating_policy = unknown_rating_policy

        logger.info(
            f"Initialized EnrichmentPipeline with workers={worker_count}, "
            f"capacity={channel_capacity}, distribution={distribution}, "
            f"on_unknown_rating={unknown_rating_policy}"
        )

    def start(self, reviews: Sequence[Review]) -> "ResultStream":
        """
        Start the workers and the coordinator.

        Args:
            reviews: Un-enriched reviews; read concurrently, never modified

        Returns:
            ResultStream yielding enriched reviews in arrival order
        """
        run = _PipelineRun(self, reviews)
        run.start()
        return ResultStream(run)

    def batches(self, reviews: Sequence[Review]) -> List[Sequence[Review]]:
        """Split the input into one batch per worker."""
        if self.distribution == "broadcast":
            return [reviews] * self.worker_count
        return [reviews[i::self.worker_count] for i in range(self.worker_count)]


class _PipelineRun:
    """State of one started pipeline: queue, threads, counters, first error."""

    def __init__(self, pipeline: EnrichmentPipeline, reviews: Sequence[Review]):
        self.pipeline = pipeline
        self.reviews = reviews
        self.channel: "queue.Queue" = queue.Queue(maxsize=pipeline.channel_capacity)
        self.stop = threading.Event()
        self.stats = PipelineStats(
            worker_count=pipeline.worker_count,
            distribution=pipeline.distribution
        )
        self.error: Optional[BaseException] = None
        self._lock = threading.Lock()
        self.workers: List[threading.Thread] = []
        self.coordinator: Optional[threading.Thread] = None

    def start(self) -> None:
        logger.info(f"Total workers: {self.pipeline.worker_count}")

        for worker_id, batch in enumerate(self.pipeline.batches(self.reviews)):
            worker = threading.Thread(
                target=self._work,
                args=(worker_id, batch),
                name=f"enrich-worker-{worker_id}",
                daemon=True
            )
            self.workers.append(worker)

        for worker in self.workers:
            worker.start()

        self.coordinator = threading.Thread(
            target=self._coordinate,
            name="enrich-coordinator",
            daemon=True
        )
        self.coordinator.start()

    def _work(self, worker_id: int, batch: Sequence[Review]) -> None:
        emitted = 0
        try:
            for review in batch:
                if self.stop.is_set():
                    logger.debug(f"Worker {worker_id} stopping early")
                    break

                try:
                    enriched = enrich_review(review)
                except UnknownRatingError as e:
                    if self.pipeline.unknown_rating_policy == "fail":
                        raise
                    logger.warning(
                        f"Skipping review: {e}, expected one of {known_ratings()} "
                        f"(content={review.content[:40]!r})"
                    )
                    with self._lock:
                        self.stats.skipped_ratings += 1
                    continue

                self.channel.put(enriched)
                emitted += 1
        except Exception as e:
            logger.error(f"Worker {worker_id} failed: {e}")
            self._fail(e)
        finally:
            with self._lock:
                self.stats.emitted += emitted
            logger.debug(f"Worker {worker_id} finished, emitted {emitted} reviews")

    def _fail(self, error: BaseException) -> None:
        with self._lock:
            if self.error is None:
                self.error = error
        self.stop.set()

    def _coordinate(self) -> None:
        for worker in self.workers:
            worker.join()
        self.channel.put(_END_OF_STREAM)
        logger.debug("All workers finished, output stream closed")

    def join(self) -> None:
        if self.coordinator is not None:
            self.coordinator.join()


class ResultStream:
    """
    Single-pass stream of enriched reviews.

    Iteration ends when every worker has finished. If a worker aborted the
    run, PipelineError is raised after the queue has been drained.

    Use as a context manager so that a consumer leaving mid-stream, by
    error or by break, cancels the workers instead of leaving them blocked
    on a full queue.
    """

    def __init__(self, run: _PipelineRun):
        self._run = run
        self._closed = False

    @property
    def stats(self) -> PipelineStats:
        return self._run.stats

    def __iter__(self) -> Iterator[Review]:
        if self._closed:
            raise RuntimeError("ResultStream has already been consumed")

        while True:
            item = self._run.channel.get()
            if item is _END_OF_STREAM:
                break
            yield item

        self._closed = True
        self._run.join()

        if self._run.error is not None:
            raise PipelineError(f"Enrichment aborted: {self._run.error}") from self._run.error

    def cancel(self) -> None:
        """Stop the workers and discard whatever is still queued."""
        if self._closed:
            return

        self._run.stop.set()
        while self._run.channel.get() is not _END_OF_STREAM:
            pass
        self._closed = True
        self._run.join()
        logger.warning("Enrichment pipeline cancelled")

    def __enter__(self) -> "ResultStream":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cancel()
