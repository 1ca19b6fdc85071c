"""
Prometheus metrics collection for impfchart

Counts what a run read, dropped and emitted, and how long each stage
took. Metrics live on a private registry so that runs inside tests do
not collide with the process-wide default registry.
"""
import os
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# INPUT METRICS
# =======================

files_read_total = Counter(
    name="impfchart_files_read_total",
    documentation="Total number of capture files read",
    labelnames=["status"],  # status: success, malformed
    registry=REGISTRY,
)

probes_read_total = Counter(
    name="impfchart_probes_read_total",
    documentation="Total number of probe results read from capture files",
    labelnames=["status"],  # status: success, error
    registry=REGISTRY,
)

# =======================
# CANONICALIZATION METRICS
# =======================

records_canonicalized_total = Counter(
    name="impfchart_records_canonicalized_total",
    documentation="Total number of canonical records produced",
    labelnames=["insurance"],
    registry=REGISTRY,
)

records_dropped_total = Counter(
    name="impfchart_records_dropped_total",
    documentation="Total number of probe results dropped before aggregation",
    labelnames=["reason"],  # reason: non_public, probe_error
    registry=REGISTRY,
)

slot_date_overrides_total = Counter(
    name="impfchart_slot_date_overrides_total",
    documentation="Probes whose upstream next date was replaced by the first date with slots",
    labelnames=["location"],
    registry=REGISTRY,
)

# =======================
# OUTPUT METRICS
# =======================

aggregates_emitted_total = Counter(
    name="impfchart_aggregates_emitted_total",
    documentation="Total number of aggregate rows written to the chart",
    labelnames=["series"],  # series: current, overall
    registry=REGISTRY,
)

bucket_count = Gauge(
    name="impfchart_bucket_count",
    documentation="Number of buckets in the last assembled chart",
    labelnames=["kind"],  # kind: day, recent_records
    registry=REGISTRY,
)

stage_duration_seconds = Histogram(
    name="impfchart_stage_duration_seconds",
    documentation="Time spent in each pipeline stage in seconds",
    labelnames=["stage"],  # stage: read, canonicalize, assemble, write
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

errors_total = Counter(
    name="impfchart_errors_total",
    documentation="Total number of fatal run errors",
    labelnames=["error_type"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def write_metrics_file(path: Optional[str] = None) -> Optional[str]:
    """
    Dump the registry in text format for a node-exporter textfile collector

    Args:
        path: Target file (defaults to env var METRICS_TEXTFILE; skipped if unset)

    Returns:
        Path written, or None if no target was configured
    """
    target = path or os.getenv("METRICS_TEXTFILE")
    if not target:
        return None
    with open(target, "wb") as f:
        f.write(generate_metrics())
    return target


def get_sample(name: str, **labels) -> float:
    """Current value of a sample, 0.0 when it was never touched."""
    value = REGISTRY.get_sample_value(name, labels)
    return value if value is not None else 0.0


# =======================
# CONTEXT MANAGERS
# =======================

class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(stage_duration_seconds, stage="read"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    gauge.labels(**labels).set(value)


# =======================
# RUN-SPECIFIC HELPERS
# =======================

def record_drop(reason: str) -> None:
    """Count a probe result that produced no canonical record."""
    increment_counter(records_dropped_total, 1, reason=reason)


def record_chart_assembled(current_rows: int, overall_rows: int, day_buckets: int, recent_records: int) -> None:
    """
    Record output metrics of one assembled chart.

    Args:
        current_rows: Aggregate rows in the current series
        overall_rows: Aggregate rows across all days of the overall series
        day_buckets: Number of distinct calendar days
        recent_records: Canonical records inside the recent window
    """
    increment_counter(aggregates_emitted_total, current_rows, series="current")
    increment_counter(aggregates_emitted_total, overall_rows, series="overall")
    set_gauge(bucket_count, day_buckets, kind="day")
    set_gauge(bucket_count, recent_records, kind="recent_records")
