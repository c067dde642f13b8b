"""
Utility functions module.

Time Semantics:
- All persisted timestamps are UTC and stored as ISO8601 strings
- Naive timestamps read back from storage are treated as UTC
"""
