"""
Unit tests for the sentiment distribution summary.
"""

import os

import pandas as pd
import pytest
from rating_sentiment.agents.aggregation import SUMMARY_COLUMNS, SentimentSummarizer


@pytest.fixture
def summarizer():
    return SentimentSummarizer()


def test_build_counts_and_shares(summarizer):
    df = summarizer.build({"Positif": 3, "Negatif": 1})

    assert list(df.columns) == SUMMARY_COLUMNS
    assert list(df["Category"]) == ["Positif", "Negatif", "Netral"]
    assert list(df["Count"]) == [3, 1, 0]
    assert list(df["Share"]) == [75.0, 25.0, 0.0]
    assert list(df["Category Level"]) == [1, -1, 0]


def test_build_empty_counts(summarizer):
    """Test every label is present even when nothing was written."""
    df = summarizer.build({})

    assert sorted(df["Category"]) == ["Negatif", "Netral", "Positif"]
    assert df["Count"].sum() == 0
    assert (df["Share"] == 0.0).all()


def test_build_rejects_unknown_label(summarizer):
    with pytest.raises(ValueError):
        summarizer.build({"Mixed": 2})


def test_save_writes_summary_csv(summarizer, tmp_path):
    output_path = str(tmp_path / "output.csv")

    summary_path = summarizer.save({"Netral": 2}, output_path)

    assert summary_path == os.path.join(str(tmp_path), "output_summary.csv")
    df = pd.read_csv(summary_path)
    assert list(df.columns) == SUMMARY_COLUMNS
    assert df.loc[0, "Category"] == "Netral"
    assert df.loc[0, "Count"] == 2


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
