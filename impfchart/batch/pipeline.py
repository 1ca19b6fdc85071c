"""
Batch chart pipeline orchestration.

Coordinates the flow: read → canonicalize → bucket → assemble → write
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from impfchart.batch.assembler import ChartAssembler
from impfchart.batch.bucketing import RecordPool
from impfchart.batch.readers import ProbeBatchReader
from impfchart.batch.writers import ChartWriter
from impfchart.config import PipelineSettings
from impfchart.core.canonicalizer import RecordCanonicalizer
from impfchart.core.models import ChartSource, ProbeBatch
from impfchart.core.statistics import StatisticsEngine
from impfchart.observability import metrics
from impfchart.observability.logger import get_logger, log_operation

logger = get_logger(__name__)


class ChartPipeline:
    """
    Orchestrates one chart run.

    Flow:
    1. Read every capture file of the input directory
    2. Canonicalize all probe results (drops failed and filtered probes)
    3. Pool the canonical records
    4. Assemble the current and overall series
    5. Write the chart document

    All input is read and canonicalized before any grouping happens; the
    first fatal error aborts the run before anything is written.
    """

    def __init__(self, settings: PipelineSettings | None = None):
        """
        Initialize chart pipeline.

        Args:
            settings: Pipeline settings (defaults apply when omitted)
        """
        self.settings = settings or PipelineSettings()

        self.reader = ProbeBatchReader(suffix=self.settings.input_suffix)
        self.canonicalizer = RecordCanonicalizer(
            insurance_only_public=self.settings.insurance_only_public
        )
        self.assembler = ChartAssembler(StatisticsEngine(reducer=self.settings.reducer))
        self.writer = ChartWriter()

    def build_pool(self, batches: list[ProbeBatch]) -> RecordPool:
        """Canonicalize every batch into a single record pool."""
        records = []
        for batch in batches:
            records.extend(self.canonicalizer.canonicalize_batch(batch))
        return RecordPool(records)

    def build_chart(self, batches: list[ProbeBatch], now: datetime) -> ChartSource:
        """
        Build the chart from already-read batches.

        Args:
            batches: Probe batches of the run
            now: Reference instant of the run
        """
        with metrics.track_duration(metrics.stage_duration_seconds, stage="canonicalize"):
            pool = self.build_pool(batches)
        logger.info(f"Canonicalized {len(pool)} records from {len(batches)} batches")

        with metrics.track_duration(metrics.stage_duration_seconds, stage="assemble"):
            return self.assembler.assemble(pool, now, self.settings.recent_window)

    def run(
        self,
        input_dir: str | Path,
        output_path: str | Path,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Run the pipeline end to end.

        Args:
            input_dir: Directory of capture files
            output_path: Destination of the chart document
            now: Reference instant; the current time when omitted

        Returns:
            Dictionary with run results:
            - files_read: Capture files read
            - probes_read: Probe results across all files
            - day_buckets: Distinct calendar days in the overall series
            - current_rows: Aggregate rows in the current series
            - output_path: Path written
        """
        now = now or datetime.now(timezone.utc)

        with log_operation("Chart run", logger=logger, input_dir=str(input_dir)):
            with metrics.track_duration(metrics.stage_duration_seconds, stage="read"):
                batches = self.reader.read_directory(input_dir)

            chart = self.build_chart(batches, now)

            with metrics.track_duration(metrics.stage_duration_seconds, stage="write"):
                written = self.writer.write(chart, output_path)

        return {
            "files_read": len(batches),
            "probes_read": sum(len(batch.results) for batch in batches),
            "day_buckets": len(chart.overall),
            "current_rows": len(chart.current),
            "output_path": str(written),
        }
