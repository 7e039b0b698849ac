"""
Data models for rating sentiment mapping.

- Review: one input row, optionally enriched with polarity and label
- SentimentRule: one entry of the rating lookup table
"""
