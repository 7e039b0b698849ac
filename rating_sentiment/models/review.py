"""
Review data model.

Represents one review row read from the input CSV, before and after
sentiment enrichment.
"""

from dataclasses import dataclass, replace
from typing import List, Optional


@dataclass
class Review:
    """
    A single user review.

    `polarity` and `label` stay unset until the review has been enriched.
    Enrichment returns a new Review instead of mutating this one.
    """
    content: str  # Free review text
    rating: str  # Raw rating code, kept as read ("1".."5" expected)
    polarity: Optional[int] = None  # -1, 0 or 1 once enriched
    label: Optional[str] = None  # Negatif, Netral or Positif once enriched

    def __post_init__(self):
        # Derived fields come as a pair
        if (self.polarity is None) != (self.label is None):
            raise ValueError(
                f"Review must have both polarity and label or neither "
                f"(polarity={self.polarity!r}, label={self.label!r})"
            )

    @property
    def is_enriched(self) -> bool:
        return self.polarity is not None

    def with_sentiment(self, polarity: int, label: str) -> "Review":
        """Return an enriched copy of this review."""
        return replace(self, polarity=polarity, label=label)

    def to_row(self) -> List[str]:
        """
        Render the review as an output CSV row.

        Raises:
            ValueError: If the review has not been enriched
        """
        if not self.is_enriched:
            raise ValueError(f"Cannot write un-enriched review: {self.content[:40]!r}")
        return [self.content, self.rating, str(self.polarity), self.label]
