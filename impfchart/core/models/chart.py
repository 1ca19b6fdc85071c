"""
Output models for the chart data document.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from impfchart.core.calendar import format_timestamp

from .enums import Insurance, VaccinationLocation, VaccinationType


class AggregateRecord(BaseModel):
    """
    One grouped-and-reduced statistics row.

    Attributes:
        type: Vaccine of the group
        location: Vaccination centre of the group
        insurance: Insurance class of the group
        days: Reduced days-until-next over records with known
            availability, or None if the group has none
    """

    type: VaccinationType
    location: VaccinationLocation
    insurance: Insurance
    days: int | float | None = None

    class Config:
        frozen = True


class DayStatistics(BaseModel):
    """Statistics of a single calendar-day bucket."""

    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    vaccinations: list[AggregateRecord] = Field(default_factory=list)

    class Config:
        frozen = True


class ChartSource(BaseModel):
    """
    Complete chart document.

    Attributes:
        updated_at: Reference instant of the run
        current: Statistics over the recent window
        overall: Per-day statistics in first-seen day order
    """

    updated_at: datetime = Field(..., alias="updatedAt")
    current: list[AggregateRecord] = Field(default_factory=list)
    overall: list[DayStatistics] = Field(default_factory=list)

    @field_serializer("updated_at")
    def serialize_updated_at(self, value: datetime) -> str:
        return format_timestamp(value)

    class Config:
        populate_by_name = True
        frozen = True
        json_schema_extra = {
            "example": {
                "updatedAt": "2021-06-01T10:00:00.000Z",
                "current": [
                    {"type": "BIONTECH_PFIZER", "location": "ARENA", "insurance": "PUBLIC", "days": 4}
                ],
                "overall": [
                    {
                        "date": "2021-06-01",
                        "vaccinations": [
                            {"type": "BIONTECH_PFIZER", "location": "ARENA", "insurance": "PUBLIC", "days": 4}
                        ]
                    }
                ]
            }
        }
