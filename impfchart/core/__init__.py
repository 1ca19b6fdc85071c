"""
Core aggregation logic: calendar, lookups, canonicalization and statistics.
"""
