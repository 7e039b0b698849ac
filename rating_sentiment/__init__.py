"""
Rating Sentiment Mapper.

Reads review CSVs, maps star ratings to sentiment through a fixed table
using a concurrent worker pool, and writes the enriched CSV.
"""

__version__ = "1.0.0"
