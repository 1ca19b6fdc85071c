"""
Exceptions raised by the chart pipeline.

Every fatal condition of a run derives from ChartDataError so the CLI
can report it uniformly.
"""


class ChartDataError(Exception):
    """Base class for all pipeline failures."""
    pass


class ConfigurationError(ChartDataError):
    """Raised for invalid settings or command-line arguments."""
    pass


class UnknownIdentifierError(ChartDataError):
    """Raised when a site or vaccine identifier has no known mapping."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        super().__init__(f"unknown {kind}: {value}")


class MalformedInputError(ChartDataError):
    """Raised when an input document cannot be parsed or validated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
