"""
Chart assembly: the "current" and "overall" series of the chart document.
"""

from datetime import datetime, timedelta

from impfchart.batch.bucketing import DEFAULT_RECENT_WINDOW, RecordPool
from impfchart.core.calendar import date_from_key
from impfchart.core.models import ChartSource, DayStatistics
from impfchart.core.statistics import StatisticsEngine
from impfchart.observability import metrics
from impfchart.observability.logger import get_logger

logger = get_logger(__name__)


class ChartAssembler:
    """
    Builds a ChartSource from the canonical records of a run.

    Args:
        engine: Statistics engine used for every bucket
    """

    def __init__(self, engine: StatisticsEngine | None = None):
        self.engine = engine or StatisticsEngine()

    def assemble(
        self,
        pool: RecordPool,
        now: datetime,
        window: timedelta = DEFAULT_RECENT_WINDOW,
    ) -> ChartSource:
        """
        Assemble the chart document.

        Args:
            pool: Canonical records of the run
            now: Reference instant, captured once per run
            window: Length of the recent window

        Returns:
            ChartSource with the recent-window statistics as "current"
            and one entry per calendar day as "overall"
        """
        recent = pool.recent(now, window)
        current = self.engine.aggregate(recent, now)

        buckets = pool.day_buckets()
        overall = [
            DayStatistics(
                date=key,
                vaccinations=self.engine.aggregate(bucket, date_from_key(key)),
            )
            for key, bucket in buckets.items()
        ]

        overall_rows = sum(len(day.vaccinations) for day in overall)
        metrics.record_chart_assembled(
            current_rows=len(current),
            overall_rows=overall_rows,
            day_buckets=len(buckets),
            recent_records=len(recent),
        )
        logger.info(
            f"Assembled chart: {len(current)} current rows, {len(buckets)} days",
            extra={"recent_records": len(recent), "overall_rows": overall_rows},
        )

        return ChartSource(updated_at=now, current=current, overall=overall)
