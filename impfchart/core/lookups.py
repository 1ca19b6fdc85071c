"""
Static lookup tables for site and vaccine identity.

Both lookups are total over the known identifiers and fail loudly on
anything else; an unmapped identifier must abort the run instead of
silently skewing the statistics.
"""

from impfchart.core.errors import UnknownIdentifierError
from impfchart.core.models import VaccinationLocation, VaccinationType

# Doctolib practice IDs of the Berlin vaccination centres
PRACTICE_LOCATIONS: dict[str, VaccinationLocation] = {
    "158431": VaccinationLocation.ARENA,
    "158433": VaccinationLocation.TEMPELHOF,
    "158434": VaccinationLocation.MESSE,
    "158435": VaccinationLocation.VELODROM,
    "158436": VaccinationLocation.TEGEL,
    "158437": VaccinationLocation.ERIKA_HESS,
}

VACCINE_TYPES: dict[str, VaccinationType] = {
    "BIONTECH_PFIZER": VaccinationType.BIONTECH_PFIZER,
    "MODERNA": VaccinationType.MODERNA,
    "ASTRAZENECA": VaccinationType.ASTRAZENECA,
}


def practice_id_to_location(practice_id: str) -> VaccinationLocation:
    """
    Resolve a Doctolib practice ID to its vaccination centre.

    Raises:
        UnknownIdentifierError: If the practice ID is not a known centre
    """
    try:
        return PRACTICE_LOCATIONS[practice_id]
    except KeyError:
        raise UnknownIdentifierError("practice ID", practice_id) from None


def vaccine_code_to_type(code: str) -> VaccinationType:
    """
    Resolve a raw vaccine code to its vaccine.

    Raises:
        UnknownIdentifierError: If the code is not a known vaccine
    """
    try:
        return VACCINE_TYPES[code]
    except KeyError:
        raise UnknownIdentifierError("vaccination type", code) from None
