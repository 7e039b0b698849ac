"""
Unit tests for the review CSV reader.
"""

import pytest
from rating_sentiment.agents.ingestion import ReviewDecodeError, ReviewReader


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.fixture
def reader():
    return ReviewReader()


def test_reads_rows_in_file_order(reader, tmp_path):
    """Test header is discarded and rows keep file order."""
    path = _write(tmp_path / "in.csv", "Content,Rating\nGreat app,5\nBad app,1\nOkay,3\n")

    reviews = reader.read_all(path)

    assert [(r.content, r.rating) for r in reviews] == [
        ("Great app", "5"),
        ("Bad app", "1"),
        ("Okay", "3"),
    ]
    assert all(not r.is_enriched for r in reviews)
    assert reader.last_skipped == 0


def test_header_only_returns_empty(reader, tmp_path):
    path = _write(tmp_path / "in.csv", "Content,Rating\n")
    assert reader.read_all(path) == []


def test_values_kept_as_strings(reader, tmp_path):
    """Test ratings and text are not converted or treated as missing values."""
    path = _write(tmp_path / "in.csv", "Content,Rating\nNA,05\n123,4\n")

    reviews = reader.read_all(path)

    assert [(r.content, r.rating) for r in reviews] == [("NA", "05"), ("123", "4")]


def test_quoted_fields(reader, tmp_path):
    """Test quoted content with delimiters and newlines."""
    path = _write(
        tmp_path / "in.csv",
        'Content,Rating\n"Fast, clean UI",5\n"line one\nline two",2\n',
    )

    reviews = reader.read_all(path)

    assert reviews[0].content == "Fast, clean UI"
    assert reviews[1].content == "line one\nline two"
    assert reviews[1].rating == "2"


def test_header_names_are_ignored(reader, tmp_path):
    """Test columns are taken by position."""
    path = _write(tmp_path / "in.csv", "text,score\nGreat app,5\n")

    reviews = reader.read_all(path)

    assert reviews[0].content == "Great app"
    assert reviews[0].rating == "5"


def test_row_with_extra_fields_skipped(reader, tmp_path):
    """Test rows with too many fields are skipped and counted."""
    path = _write(tmp_path / "in.csv", "Content,Rating\nGood,4\nBad,1,extra\nFine,3\n")

    reviews = reader.read_all(path)

    assert [r.content for r in reviews] == ["Good", "Fine"]
    assert reader.last_skipped == 1


def test_skip_counter_resets_between_reads(reader, tmp_path):
    bad = _write(tmp_path / "bad.csv", "Content,Rating\nBad,1,extra\n")
    good = _write(tmp_path / "good.csv", "Content,Rating\nGood,4\n")

    reader.read_all(bad)
    assert reader.last_skipped == 1

    reader.read_all(good)
    assert reader.last_skipped == 0


def test_missing_file_raises(reader, tmp_path):
    with pytest.raises(OSError):
        reader.read_all(str(tmp_path / "missing.csv"))


def test_empty_file_raises(reader, tmp_path):
    """Test a file without a header line is rejected."""
    path = _write(tmp_path / "in.csv", "")

    with pytest.raises(ReviewDecodeError):
        reader.read_all(path)


def test_header_is_not_validated(reader, tmp_path):
    """Test the header line is discarded whatever it contains."""
    path = _write(tmp_path / "in.csv", "Content\nGreat app,5\n")

    reviews = reader.read_all(path)

    assert [(r.content, r.rating) for r in reviews] == [("Great app", "5")]


def test_short_row_skipped(reader, tmp_path):
    """Test rows without a rating column are skipped and counted."""
    path = _write(tmp_path / "in.csv", "Content,Rating\nGood,4\nno rating here\nFine,3\n")

    reviews = reader.read_all(path)

    assert [r.content for r in reviews] == ["Good", "Fine"]
    assert reader.last_skipped == 1


def test_blank_lines_ignored(reader, tmp_path):
    path = _write(tmp_path / "in.csv", "Content,Rating\n\nGood,4\n\n")

    reviews = reader.read_all(path)

    assert len(reviews) == 1
    assert reader.last_skipped == 0


def test_empty_rating_is_kept(reader, tmp_path):
    """Test an empty rating field is a well-formed row; lookup decides later."""
    path = _write(tmp_path / "in.csv", "Content,Rating\nNo stars,\n")

    reviews = reader.read_all(path)

    assert reviews[0].rating == ""


def test_invalid_utf8_raises(reader, tmp_path):
    path = tmp_path / "in.csv"
    path.write_bytes(b"Content,Rating\n\xff\xfe bad,5\n")

    with pytest.raises(ReviewDecodeError):
        reader.read_all(str(path))


def test_long_review_is_read(reader, tmp_path):
    """Test a review longer than csv's default 128 KiB field cap is kept."""
    long_text = "slow " * 40000
    path = _write(tmp_path / "in.csv", f"Content,Rating\n\"{long_text}\",2\nShort,5\n")

    reviews = reader.read_all(path)

    assert [len(r.content) for r in reviews] == [len(long_text), 5]
    assert reviews[0].rating == "2"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
