"""
Bucketing of canonical records.

RecordPool owns the canonical records of a run and offers two
independent read-only views over them: per-day buckets and the trailing
recent window.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from impfchart.core.calendar import date_key
from impfchart.core.models import CanonicalRecord

DEFAULT_RECENT_WINDOW = timedelta(hours=1)


class RecordPool:
    """
    Immutable collection of the canonical records of one run.

    Args:
        records: Canonical records in ingestion order
    """

    def __init__(self, records: Iterable[CanonicalRecord] = ()):
        self._records: tuple[CanonicalRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @property
    def records(self) -> tuple[CanonicalRecord, ...]:
        return self._records

    def day_buckets(self) -> dict[str, list[CanonicalRecord]]:
        """
        Group records by Berlin calendar day of their sample instant.

        Returns:
            Mapping of YYYY-MM-DD key to records, keys in first-seen order
        """
        buckets: dict[str, list[CanonicalRecord]] = {}
        for record in self._records:
            buckets.setdefault(date_key(record.sampled_at), []).append(record)
        return buckets

    def recent(self, now: datetime, window: timedelta = DEFAULT_RECENT_WINDOW) -> list[CanonicalRecord]:
        """
        Records sampled within [now - window, now], both ends inclusive.

        Args:
            now: Reference instant of the run
            window: Length of the trailing window
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        start = now - window
        return [record for record in self._records if start <= record.sampled_at <= now]
