"""
Wire models for captured probe batches (read-only input).

A batch file holds the capture instant and the results of every probe
run at that instant. Field names follow the capture format (camelCase);
attributes are snake_case.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .enums import Insurance


class DoctolibSite(BaseModel):
    """Doctolib booking page of a site."""

    practice_id: str = Field(..., alias="practiceId", min_length=1)

    @field_validator("practice_id", mode="before")
    @classmethod
    def coerce_practice_id(cls, v):
        """Practice IDs are sometimes captured as numbers."""
        if isinstance(v, int):
            return str(v)
        return v

    class Config:
        populate_by_name = True
        frozen = True


class ProbeSite(BaseModel):
    doctolib: DoctolibSite

    class Config:
        frozen = True


class BookingSource(BaseModel):
    """
    What a probe checked.

    Attributes:
        vaccination: Raw vaccine code as captured
        insurance: Insurance class the booking page applies to
        site: Site identity
    """

    vaccination: str = Field(..., min_length=1)
    insurance: Insurance
    site: ProbeSite

    class Config:
        frozen = True


class ProbeSource(BaseModel):
    booking_source: BookingSource = Field(..., alias="bookingSource")
    url: str | None = None

    class Config:
        populate_by_name = True
        frozen = True


class Availability(BaseModel):
    """One day of the availability listing with its bookable slots."""

    date: str | None = None
    slots: list[Any] = Field(default_factory=list)

    class Config:
        frozen = True


class AvailabilityData(BaseModel):
    availabilities: list[Availability] = Field(default_factory=list)

    class Config:
        frozen = True


class ProbeResponse(BaseModel):
    """
    Successful probe payload.

    Attributes:
        next: Upstream's claim of the next available date (may be null)
        data: Availability listing returned by the booking API
    """

    next: str | None = None
    data: AvailabilityData = Field(default_factory=AvailabilityData)

    class Config:
        frozen = True


class RawProbeResult(BaseModel):
    """
    One site/vaccine/insurance probe attempt.

    Exactly one of response or error is normally present; a missing
    response marks a failed probe.
    """

    source: ProbeSource
    response: ProbeResponse | None = None
    error: dict[str, Any] | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "source": {
                    "bookingSource": {
                        "vaccination": "BIONTECH_PFIZER",
                        "insurance": "PUBLIC",
                        "site": {"doctolib": {"practiceId": "158431"}}
                    },
                    "url": "https://www.doctolib.de/institut/berlin/ciz-berlin-berlin"
                },
                "response": {
                    "next": "2021-06-01",
                    "data": {
                        "availabilities": [
                            {"date": "2021-06-01", "slots": []},
                            {"date": "2021-06-03", "slots": ["2021-06-03T09:00:00.000+02:00"]}
                        ]
                    }
                }
            }
        }


class ProbeBatch(BaseModel):
    """
    Contents of one capture file.

    Attributes:
        date: Capture instant shared by every result of the batch
        results: Probe results captured at that instant
    """

    date: datetime
    results: list[RawProbeResult] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Interpret naive capture instants as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    class Config:
        frozen = True
