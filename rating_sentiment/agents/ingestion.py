"""
Ingestion Agent.

Loads review rows from a CSV file into memory, in file order.
"""

import csv
import logging
import sys
from typing import List, Optional

from rating_sentiment.models.review import Review

logger = logging.getLogger(__name__)

EXPECTED_FIELDS = 2  # Content, Rating


def _raise_field_size_limit() -> int:
    """Lift csv's 128 KiB per-field cap so one long review does not reject the file."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:
            limit //= 2


FIELD_SIZE_LIMIT = _raise_field_size_limit()


class ReviewDecodeError(ValueError):
    """Raised when the input file cannot be decoded as a review table."""


class ReviewReader:
    """
    Reads reviews from a CSV file.

    The first line is the header and is discarded. Each following row is
    decoded positionally into Review(content=row[0], rating=row[1]).

    Rows with the wrong number of fields are skipped with a warning and
    counted in `last_skipped`; reading continues with the next row. Blank
    lines are ignored. A file with no header, or one that is not valid
    CSV/UTF-8, is rejected as a whole.
    """

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize review reader.

        Args:
            encoding: Text encoding of the input file
        """
        self.encoding = encoding
        self.last_skipped = 0

    def read_all(self, path: str) -> List[Review]:
        """
        Read every review in the file.

        Args:
            path: Path to the input CSV

        Returns:
            List of un-enriched Review objects, in file order

        Raises:
            OSError: If the file cannot be opened or read
            ReviewDecodeError: If the file has no header or is not decodable
        """
        self.last_skipped = 0
        reviews = []

        try:
            with open(path, "r", newline="", encoding=self.encoding) as f:
                reader = csv.reader(f)

                header = next(reader, None)
                if header is None:
                    raise ReviewDecodeError(f"No header row in {path}")
                logger.debug(f"Discarding header {header!r}")

                for row in reader:
                    if not row:
                        continue
                    review = self._decode_row(row, reader.line_num)
                    if review is not None:
                        reviews.append(review)

        except OSError as e:
            logger.error(f"Failed to read reviews from {path}: {e}")
            raise
        except (csv.Error, UnicodeDecodeError) as e:
            raise ReviewDecodeError(f"Failed to decode {path}: {e}") from e

        logger.info(
            f"Read {len(reviews)} reviews from {path}"
            + (f" ({self.last_skipped} malformed rows skipped)" if self.last_skipped else "")
        )
        return reviews

    def _decode_row(self, row: List[str], line_num: int) -> Optional[Review]:
        """Build a Review from one row, or None if the row has the wrong shape."""
        if len(row) != EXPECTED_FIELDS:
            logger.warning(
                f"Skipping malformed row at line {line_num}: "
                f"expected {EXPECTED_FIELDS} fields, got {len(row)}"
            )
            self.last_skipped += 1
            return None

        content, rating = row
        return Review(content=content, rating=rating)
