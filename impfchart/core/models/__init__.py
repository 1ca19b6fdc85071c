"""
Core data models for the chart pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .canonical_record import CanonicalRecord
from .chart import AggregateRecord, ChartSource, DayStatistics
from .enums import Insurance, VaccinationLocation, VaccinationType
from .raw_probe import (
    Availability,
    AvailabilityData,
    BookingSource,
    ProbeBatch,
    ProbeResponse,
    ProbeSource,
    RawProbeResult,
)

__all__ = [
    "VaccinationLocation",
    "VaccinationType",
    "Insurance",
    "Availability",
    "AvailabilityData",
    "BookingSource",
    "ProbeSource",
    "ProbeResponse",
    "RawProbeResult",
    "ProbeBatch",
    "CanonicalRecord",
    "AggregateRecord",
    "DayStatistics",
    "ChartSource",
]
