"""
Capture file readers.
"""

from .json_reader import ProbeBatchReader

__all__ = [
    "ProbeBatchReader",
]
