"""
CanonicalRecord model: one successful, resolvable probe (ephemeral).
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import Insurance, VaccinationLocation, VaccinationType


class CanonicalRecord(BaseModel):
    """
    Normalized probe result consumed by the statistics engine.

    Note: CanonicalRecord lives only for the duration of one run and is
    never mutated after creation.

    Attributes:
        sampled_at: Capture instant of the enclosing batch (UTC)
        location: Resolved vaccination centre
        vaccination_type: Resolved vaccine
        insurance: Insurance class of the booking page
        next_available: Resolved next date with bookable slots, if any
        days_until_next: Days from the sampled_at calendar day to
            next_available; None means no known future availability
    """

    sampled_at: datetime
    location: VaccinationLocation
    vaccination_type: VaccinationType
    insurance: Insurance
    next_available: date | None = None
    days_until_next: int | None = Field(None)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "sampled_at": "2021-05-31T08:00:00Z",
                "location": "ARENA",
                "vaccination_type": "BIONTECH_PFIZER",
                "insurance": "PUBLIC",
                "next_available": "2021-06-03",
                "days_until_next": 3
            }
        }
