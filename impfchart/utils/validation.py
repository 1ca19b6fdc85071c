"""
Input validation utilities for command-line arguments.

Checks paths up front so that configuration mistakes are reported
before any capture file is read.
"""

from datetime import datetime
from pathlib import Path

from impfchart.core.calendar import parse_instant
from impfchart.core.errors import ConfigurationError


def validate_input_dir(input_dir: str, field_name: str = "input_dir") -> Path:
    """
    Validate the capture directory.

    Args:
        input_dir: Directory of capture files
        field_name: Name of the argument (for error messages)

    Returns:
        The directory as a Path

    Raises:
        ConfigurationError: If the path is empty, missing or not a directory
    """
    if not input_dir or not input_dir.strip():
        raise ConfigurationError(f"{field_name} must be a non-empty path")

    path = Path(input_dir)
    if not path.exists():
        raise ConfigurationError(f"{field_name} does not exist: {input_dir}")
    if not path.is_dir():
        raise ConfigurationError(f"{field_name} is not a directory: {input_dir}")
    return path


def validate_output_path(output_path: str, field_name: str = "output_path") -> Path:
    """
    Validate the chart destination.

    The parent directory may be missing (it is created on write) but the
    target itself must not be a directory.

    Raises:
        ConfigurationError: If the path is empty or names a directory
    """
    if not output_path or not output_path.strip():
        raise ConfigurationError(f"{field_name} must be a non-empty path")

    path = Path(output_path)
    if path.is_dir():
        raise ConfigurationError(f"{field_name} is a directory: {output_path}")
    return path


def validate_reference_instant(value: str, field_name: str = "now") -> datetime:
    """
    Parse an injected reference instant.

    Raises:
        ConfigurationError: If value is not an ISO-8601 instant

    Examples:
        >>> validate_reference_instant("2021-06-01T10:00:00Z").isoformat()
        '2021-06-01T10:00:00+00:00'
    """
    try:
        return parse_instant(value)
    except ValueError as e:
        raise ConfigurationError(f"{field_name} is not an ISO-8601 instant: {value}") from e
