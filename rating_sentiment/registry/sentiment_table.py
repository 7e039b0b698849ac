"""
Sentiment Table - Single source of truth for rating sentiment.

Built once at import time and never mutated afterwards, so workers can
share it without locking.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Tuple

from rating_sentiment.models.sentiment_rule import SentimentRule

logger = logging.getLogger(__name__)


class UnknownRatingError(KeyError):
    """Raised when a rating code has no entry in the sentiment table."""

    def __init__(self, rating: str):
        super().__init__(rating)
        self.rating = rating

    def __str__(self):
        return f"Unknown rating code: {self.rating!r}"


def _build_table() -> Mapping[str, SentimentRule]:
    rules = [
        SentimentRule(rating="1", polarity=-1, label="Negatif"),
        SentimentRule(rating="2", polarity=-1, label="Negatif"),
        SentimentRule(rating="3", polarity=0, label="Netral"),
        SentimentRule(rating="4", polarity=1, label="Positif"),
        SentimentRule(rating="5", polarity=1, label="Positif"),
    ]
    return MappingProxyType({rule.rating: rule for rule in rules})


SENTIMENT_RULES: Mapping[str, SentimentRule] = _build_table()


def known_ratings() -> List[str]:
    """Rating codes the table can resolve, in ascending order."""
    return sorted(SENTIMENT_RULES)


def get_rule(rating: str) -> SentimentRule:
    """
    Look up the rule for a rating code.

    Codes are matched exactly; " 5" is not "5".

    Raises:
        UnknownRatingError: If the code is not in the table
    """
    try:
        return SENTIMENT_RULES[rating]
    except (KeyError, TypeError):
        raise UnknownRatingError(rating) from None


def resolve(rating: str) -> Tuple[int, str]:
    """
    Map a rating code to (polarity, label).

    Args:
        rating: Raw rating code from the input file

    Returns:
        Tuple of polarity (-1, 0, 1) and label

    Raises:
        UnknownRatingError: If the code is not in the table
    """
    rule = get_rule(rating)
    return rule.polarity, rule.label
