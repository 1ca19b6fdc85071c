"""
Reads a directory of probe capture files into validated batches.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from impfchart.core.errors import ConfigurationError, MalformedInputError
from impfchart.core.models import ProbeBatch
from impfchart.observability import metrics
from impfchart.observability.logger import get_logger

logger = get_logger(__name__)


class ProbeBatchReader:
    """
    Reads capture files, one ProbeBatch per file.

    Files are enumerated in sorted name order so repeated runs over the
    same directory see the same sequence.
    """

    def __init__(self, suffix: str = ".json"):
        """
        Initialize reader.

        Args:
            suffix: File name suffix of capture files
        """
        self.suffix = suffix

    def list_files(self, input_dir: str | Path) -> list[Path]:
        """
        List capture files of a directory.

        Args:
            input_dir: Directory holding capture files

        Returns:
            Sorted paths of regular files ending in the configured suffix

        Raises:
            ConfigurationError: If input_dir is not a directory
        """
        directory = Path(input_dir)
        if not directory.is_dir():
            raise ConfigurationError(f"Input directory not found: {input_dir}")

        return sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.name.endswith(self.suffix)
        )

    def read_file(self, path: str | Path) -> ProbeBatch:
        """
        Parse one capture file.

        Raises:
            MalformedInputError: If the file is not valid JSON or does not
                match the capture format
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
            batch = ProbeBatch.model_validate(document)
        except json.JSONDecodeError as e:
            metrics.increment_counter(metrics.files_read_total, status="malformed")
            raise MalformedInputError(str(path), f"invalid JSON: {e}") from e
        except ValidationError as e:
            metrics.increment_counter(metrics.files_read_total, status="malformed")
            raise MalformedInputError(
                str(path), f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}"
            ) from e

        metrics.increment_counter(metrics.files_read_total, status="success")
        for result in batch.results:
            status = "success" if result.response is not None else "error"
            metrics.increment_counter(metrics.probes_read_total, status=status)

        return batch

    def read_directory(self, input_dir: str | Path) -> list[ProbeBatch]:
        """
        Read every capture file of a directory.

        Returns:
            One ProbeBatch per file, in file name order
        """
        files = self.list_files(input_dir)
        logger.info(f"Found {len(files)} capture files", extra={"input_dir": str(input_dir)})
        return [self.read_file(path) for path in files]
