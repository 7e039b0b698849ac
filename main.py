"""
Rating Sentiment Mapper

Runs the CLI from a source checkout; installed copies use the
rating-sentiment console script.
"""

from rating_sentiment.main import main


if __name__ == "__main__":
    main()
