"""
Sentiment rule data model.

One entry of the static rating -> sentiment lookup table.
"""

from dataclasses import dataclass

VALID_POLARITIES = (-1, 0, 1)
VALID_LABELS = ("Negatif", "Netral", "Positif")


@dataclass(frozen=True)
class SentimentRule:
    """Maps a rating code to a polarity score and a sentiment label."""
    rating: str  # Rating code, e.g. "4"
    polarity: int  # -1, 0 or 1
    label: str  # Negatif, Netral or Positif

    def __post_init__(self):
        if self.polarity not in VALID_POLARITIES:
            raise ValueError(f"Invalid polarity: {self.polarity}. Must be -1, 0 or 1")

        if self.label not in VALID_LABELS:
            raise ValueError(
                f"Invalid label: {self.label}. Must be one of {', '.join(VALID_LABELS)}"
            )
