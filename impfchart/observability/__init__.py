"""
Logging and metrics for the chart pipeline.
"""
