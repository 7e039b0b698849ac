"""
Sentiment Table Module.

Single source of truth for the rating -> (polarity, label) mapping.
"""
