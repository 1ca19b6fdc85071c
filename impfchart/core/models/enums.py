"""
Closed enumerations for vaccination sites, vaccines and insurance classes.
"""

from enum import Enum


class VaccinationLocation(str, Enum):
    """Berlin vaccination centres with a known booking page."""

    ARENA = "ARENA"
    ERIKA_HESS = "ERIKA_HESS"
    MESSE = "MESSE"
    TEGEL = "TEGEL"
    TEMPELHOF = "TEMPELHOF"
    VELODROM = "VELODROM"


class VaccinationType(str, Enum):
    """Vaccines offered at the centres."""

    BIONTECH_PFIZER = "BIONTECH_PFIZER"
    MODERNA = "MODERNA"
    ASTRAZENECA = "ASTRAZENECA"


class Insurance(str, Enum):
    """Insurance class a booking source applies to."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
