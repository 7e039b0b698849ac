"""
Sentiment Summary Aggregator.

Turns the per-label counts of a run into a small distribution table.
"""

import logging
import os
from typing import Dict

import pandas as pd

from rating_sentiment.registry.sentiment_table import SENTIMENT_RULES

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["Category", "Category Level", "Count", "Share"]


class SentimentSummarizer:
    """
    Aggregates label counts into a sentiment distribution table.

    Every label in the sentiment table gets a row, zero-filled when it did
    not occur, sorted by count (descending).
    """

    def build(self, label_counts: Dict[str, int]) -> pd.DataFrame:
        """
        Build the distribution table.

        Args:
            label_counts: Mapping of label -> number of output rows

        Returns:
            DataFrame with Category, Category Level, Count and Share (%) columns
        """
        polarity_by_label = {}
        for rule in SENTIMENT_RULES.values():
            polarity_by_label[rule.label] = rule.polarity

        unknown = set(label_counts) - set(polarity_by_label)
        if unknown:
            raise ValueError(f"Labels not in sentiment table: {sorted(unknown)}")

        total = sum(label_counts.values())
        rows = []
        for label, polarity in polarity_by_label.items():
            count = label_counts.get(label, 0)
            rows.append({
                "Category": label,
                "Category Level": polarity,
                "Count": count,
                "Share": round(100 * count / total, 2) if total else 0.0
            })

        df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
        df = df.sort_values(
            ["Count", "Category Level"], ascending=[False, False]
        ).reset_index(drop=True)

        logger.debug(f"Built sentiment summary over {total} rows")
        return df

    def save(self, label_counts: Dict[str, int], output_path: str) -> str:
        """
        Build the table and save it next to the output CSV.

        Args:
            label_counts: Mapping of label -> number of output rows
            output_path: Path of the CSV the run produced

        Returns:
            Path to <output stem>_summary.csv
        """
        df = self.build(label_counts)

        stem, _ = os.path.splitext(output_path)
        summary_path = f"{stem}_summary.csv"
        df.to_csv(summary_path, index=False)

        logger.info(f"Sentiment summary saved to {summary_path}")
        return summary_path
