"""
Writes the assembled chart document as pretty-printed JSON.
"""

import json
import os
import tempfile
from pathlib import Path

from impfchart.core.models import ChartSource
from impfchart.observability.logger import get_logger

logger = get_logger(__name__)


class ChartWriter:
    """
    Serializes a ChartSource to disk.

    Output is UTF-8, indented by two spaces and newline-terminated; key
    order follows the model field order, so identical charts produce
    identical bytes.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, chart: ChartSource) -> str:
        """Render the chart as a JSON string."""
        document = chart.model_dump(mode="json", by_alias=True)
        return json.dumps(document, indent=self.indent, ensure_ascii=False) + "\n"

    def write(self, chart: ChartSource, output_path: str | Path) -> Path:
        """
        Write the chart to output_path.

        The document is written to a temporary file next to the target and
        moved into place, so a failed run never leaves a partial chart.

        Args:
            chart: Assembled chart
            output_path: Destination file

        Returns:
            Path written
        """
        target = Path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        content = self.render(chart)

        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info(f"Wrote chart to {target}", extra={"bytes": len(content.encode("utf-8"))})
        return target
