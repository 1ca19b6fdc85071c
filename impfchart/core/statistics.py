"""
Statistics engine: group canonical records and reduce each group.

Groups are keyed by (vaccination type, location, insurance). Each group
reduces to one AggregateRecord whose days value is the median of the
known days-until-next values, or None if no record in the group knows
of a future slot.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import NamedTuple

from impfchart.core.calendar import days_between
from impfchart.core.maths import REDUCERS
from impfchart.core.models import (
    AggregateRecord,
    CanonicalRecord,
    Insurance,
    VaccinationLocation,
    VaccinationType,
)


class GroupKey(NamedTuple):
    vaccination_type: VaccinationType
    location: VaccinationLocation
    insurance: Insurance


def group_key(record: CanonicalRecord) -> GroupKey:
    return GroupKey(record.vaccination_type, record.location, record.insurance)


def anchored_days(record: CanonicalRecord, reference: date | datetime | None) -> int | None:
    """
    Days until the record's next availability, counted from reference.

    Without a reference the record's own days_until_next is used.
    """
    if reference is None or record.next_available is None:
        return record.days_until_next
    return days_between(reference, record.next_available)


class StatisticsEngine:
    """
    Groups canonical records and reduces every group to one aggregate row.

    Args:
        reducer: Name of the reduction applied to known days values
            ("median" or "mean")
    """

    def __init__(self, reducer: str = "median"):
        if reducer not in REDUCERS:
            raise ValueError(f"Unknown reducer: {reducer}. Expected one of {sorted(REDUCERS)}")
        self.reducer = reducer
        self._reduce = REDUCERS[reducer]

    def group(self, records: Iterable[CanonicalRecord]) -> dict[GroupKey, list[CanonicalRecord]]:
        """Group records by composite key, keys in first-seen order."""
        groups: dict[GroupKey, list[CanonicalRecord]] = {}
        for record in records:
            groups.setdefault(group_key(record), []).append(record)
        return groups

    def aggregate(
        self,
        records: Iterable[CanonicalRecord],
        reference: date | datetime | None = None,
    ) -> list[AggregateRecord]:
        """
        Reduce records to one AggregateRecord per group.

        Args:
            records: Canonical records of one bucket
            reference: Instant or day the days values are counted from;
                None keeps each record's own days_until_next

        Returns:
            Aggregate rows in first-seen group order
        """
        aggregates = []
        for key, group in self.group(records).items():
            present = [
                days
                for days in (anchored_days(record, reference) for record in group)
                if days is not None
            ]

            aggregates.append(
                AggregateRecord(
                    type=key.vaccination_type,
                    location=key.location,
                    insurance=key.insurance,
                    days=self._reduce(present) if present else None,
                )
            )
        return aggregates
