"""
impfchart: availability statistics for Berlin vaccination centres.

Turns captured appointment-availability probes into the chart data
consumed by the frontend.
"""

__version__ = "0.1.0"
