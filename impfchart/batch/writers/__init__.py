"""
Chart document writers.
"""

from .chart_writer import ChartWriter

__all__ = [
    "ChartWriter",
]
