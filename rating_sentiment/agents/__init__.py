"""
Agent implementations for rating sentiment mapping.

Contains the stages reviews pass through:
- Ingestion (CSV reader)
- Enrichment Pipeline (concurrent rating -> sentiment annotation)
- Aggregation (sentiment distribution summary)
"""
