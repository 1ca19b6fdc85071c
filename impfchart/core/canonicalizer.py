"""
Record canonicalization: raw probe result → CanonicalRecord.

Each probe result yields at most one canonical record. Failed probes and
(optionally) non-public insurance classes are dropped; unknown site or
vaccine identifiers abort the run.
"""

from datetime import date, datetime

from impfchart.core.calendar import days_between, parse_calendar_date
from impfchart.core.errors import MalformedInputError
from impfchart.core.lookups import practice_id_to_location, vaccine_code_to_type
from impfchart.core.models import CanonicalRecord, Insurance, ProbeBatch, ProbeResponse, RawProbeResult
from impfchart.observability import metrics
from impfchart.observability.logger import get_logger

logger = get_logger(__name__)


def first_date_with_slots(response: ProbeResponse) -> str | None:
    """Date of the first availability entry that lists at least one slot."""
    for availability in response.data.availabilities:
        if availability.slots:
            return availability.date
    return None


def resolve_next_date(response: ProbeResponse) -> str | None:
    """
    Determine the next date with bookable slots.

    Upstream's "next" sometimes names a day without any slots, so the
    first availability entry that actually lists slots wins over it.
    """
    slot_date = first_date_with_slots(response)
    if slot_date is not None:
        return slot_date
    return response.next


class RecordCanonicalizer:
    """
    Maps raw probe results to canonical records.

    Args:
        insurance_only_public: Drop probes whose insurance class is not PUBLIC
    """

    def __init__(self, insurance_only_public: bool = True):
        self.insurance_only_public = insurance_only_public

    def canonicalize(self, result: RawProbeResult, sampled_at: datetime) -> CanonicalRecord | None:
        """
        Canonicalize a single probe result.

        Args:
            result: Probe result as captured
            sampled_at: Capture instant of the enclosing batch

        Returns:
            CanonicalRecord, or None if the result is filtered out

        Raises:
            UnknownIdentifierError: If the site or vaccine is not known
            MalformedInputError: If the resolved date cannot be parsed
        """
        booking_source = result.source.booking_source

        if self.insurance_only_public and booking_source.insurance != Insurance.PUBLIC:
            metrics.record_drop("non_public")
            return None

        if result.response is None:
            metrics.record_drop("probe_error")
            return None

        location = practice_id_to_location(booking_source.site.doctolib.practice_id)
        vaccination_type = vaccine_code_to_type(booking_source.vaccination)

        candidate = resolve_next_date(result.response)
        if candidate is not None and candidate != result.response.next:
            metrics.increment_counter(metrics.slot_date_overrides_total, location=location.value)

        next_available: date | None = None
        days_until_next: int | None = None
        if candidate is not None:
            try:
                next_available = parse_calendar_date(candidate)
            except ValueError as e:
                raise MalformedInputError(
                    result.source.url or booking_source.site.doctolib.practice_id,
                    f"invalid availability date {candidate!r}: {e}",
                ) from e
            days_until_next = days_between(sampled_at, next_available)

        metrics.increment_counter(metrics.records_canonicalized_total, insurance=booking_source.insurance.value)

        return CanonicalRecord(
            sampled_at=sampled_at,
            location=location,
            vaccination_type=vaccination_type,
            insurance=booking_source.insurance,
            next_available=next_available,
            days_until_next=days_until_next,
        )

    def canonicalize_batch(self, batch: ProbeBatch) -> list[CanonicalRecord]:
        """Canonicalize every result of a batch, preserving order."""
        records = []
        for result in batch.results:
            record = self.canonicalize(result, batch.date)
            if record is not None:
                records.append(record)

        logger.debug(
            f"Canonicalized {len(records)} of {len(batch.results)} probe results",
            extra={"sampled_at": batch.date.isoformat()},
        )
        return records
