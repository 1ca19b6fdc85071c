"""
Command-line interface for building the chart data document.

Usage:
    impfchart <input_dir> <output_path> [options]
    python -m impfchart.cli.batch_cli <input_dir> <output_path> [options]
"""

import argparse
import sys
from datetime import datetime, timezone

from impfchart.batch.pipeline import ChartPipeline
from impfchart.config import PipelineSettings, SettingsLoader
from impfchart.core.errors import ChartDataError
from impfchart.observability import metrics
from impfchart.observability.logger import get_logger, setup_logger
from impfchart.utils.validation import (
    validate_input_dir,
    validate_output_path,
    validate_reference_instant,
)


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="impfchart",
        description="Build chart data from captured vaccination appointment probes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the chart from a directory of captures
  impfchart data/captures public/chartData.json

  # Include private insurance probes and use a custom window
  impfchart data/captures chartData.json --include-non-public --config config/impfchart.yaml

  # Reproduce a run at a fixed reference time
  impfchart data/captures chartData.json --now 2021-06-01T10:00:00Z
        """
    )

    parser.add_argument("input_dir", help="Directory of capture JSON files")
    parser.add_argument("output_path", help="Path of the chart JSON file to write")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file"
    )
    parser.add_argument(
        "--include-non-public",
        action="store_true",
        help="Keep probes for non-public insurance classes"
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference instant (ISO-8601, default: current time)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: LOG_LEVEL env var or INFO)"
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "text"],
        help="Log output format (default: json)"
    )
    return parser


def load_settings(args: argparse.Namespace) -> PipelineSettings:
    """Settings file values with command-line overrides applied."""
    settings = SettingsLoader(args.config).load() if args.config else PipelineSettings()
    return settings.with_overrides(
        insurance_only_public=False if args.include_non_public else None,
        log_level=args.log_level,
        log_format=args.log_format,
    )


def run_command(args: argparse.Namespace) -> int:
    """
    Execute a chart run.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    now = datetime.now(timezone.utc)

    try:
        settings = load_settings(args)
        setup_logger(level=settings.log_level, format_type=settings.log_format)

        input_dir = validate_input_dir(args.input_dir)
        output_path = validate_output_path(args.output_path)
        if args.now:
            now = validate_reference_instant(args.now)

        logger.info(f"Input directory: {input_dir}")
        logger.info(f"Output file: {output_path}")

        pipeline = ChartPipeline(settings)
        result = pipeline.run(input_dir, output_path, now=now)

        logger.info(f"Files read: {result['files_read']}")
        logger.info(f"Probes read: {result['probes_read']}")
        logger.info(f"Days in chart: {result['day_buckets']}")
        logger.info(f"Current rows: {result['current_rows']}")

    except ChartDataError as e:
        metrics.increment_counter(metrics.errors_total, error_type=type(e).__name__)
        logger.error(f"Chart run failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        metrics.increment_counter(metrics.errors_total, error_type=type(e).__name__)
        logger.error(f"Unexpected error during chart run: {e}", exc_info=True)
        return 1
    finally:
        metrics.write_metrics_file()

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())
