"""
Storage utility.

Writes enriched reviews to CSV and the run metadata sidecar.
"""

import csv
import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Iterable

from rating_sentiment.models.review import Review

logger = logging.getLogger(__name__)

OUTPUT_HEADER = ["Content", "Rating", "Category Level", "Category"]


class ReviewWriter:
    """
    Manages file output for the pipeline.

    Handles:
    - Enriched review CSV (Content, Rating, Category Level, Category)
    - Run metadata (<output stem>_metadata.json)
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def write_all(self, path: str, reviews: Iterable[Review]) -> int:
        """
        Write enriched reviews in the order they arrive.

        The stream is consumed to exhaustion. On the first error the file is
        closed and the error propagates; rows written so far stay on disk.

        Args:
            path: Destination CSV path (created or truncated)
            reviews: Iterable of enriched reviews

        Returns:
            Number of data rows written
        """
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        written = 0
        try:
            with open(path, "w", newline="", encoding=self.encoding) as f:
                writer = csv.writer(f)
                writer.writerow(OUTPUT_HEADER)
                for review in reviews:
                    writer.writerow(review.to_row())
                    written += 1
        except OSError as e:
            logger.error(f"Failed to write reviews to {path} after {written} rows: {e}")
            raise

        logger.info(f"Wrote {written} reviews to {path}")
        return written

    def save_run_metadata(self, output_path: str, summary: Dict) -> str:
        """
        Save run metadata next to the output CSV.

        Args:
            output_path: Path of the CSV the run produced
            summary: Run counters (see PipelineOrchestrator.run)

        Returns:
            Path to the metadata JSON file
        """
        stem, _ = os.path.splitext(output_path)
        metadata_path = f"{stem}_metadata.json"

        metadata = dict(summary)
        metadata["generated_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

        try:
            with open(metadata_path, "w", encoding=self.encoding) as f:
                json.dump(metadata, f, indent=2)
            logger.info(f"Metadata saved to {metadata_path}")
        except OSError as e:
            logger.error(f"Failed to save run metadata to {metadata_path}: {e}")
            raise

        return metadata_path
