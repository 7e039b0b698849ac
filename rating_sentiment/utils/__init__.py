"""
Utility modules for rating sentiment mapping.

Cross-cutting concerns:
- Storage: CSV output and run metadata persistence
"""
