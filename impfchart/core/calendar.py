"""
Calendar arithmetic in the fixed Europe/Berlin timezone.

Bucket keys and day counts are derived from the Berlin calendar day of an
instant, never from the process's local timezone.
"""

from datetime import date, datetime, timezone

import pytz

BERLIN = pytz.timezone("Europe/Berlin")

DATE_KEY_FORMAT = "%Y-%m-%d"


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Args:
        value: ISO-8601 string, e.g. "2021-06-01T08:00:00.000Z"

    Returns:
        Aware datetime in UTC (naive input is taken as UTC)

    Raises:
        ValueError: If the string is not a valid ISO-8601 instant
    """
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(text))


def berlin_date(instant: datetime) -> date:
    """Calendar day of an instant in Berlin."""
    return _as_utc(instant).astimezone(BERLIN).date()


def date_key(instant: datetime) -> str:
    """
    Render an instant as a YYYY-MM-DD bucket key in Berlin time.

    Two instants on the same Berlin calendar day give the same key,
    whatever their time of day.
    """
    return berlin_date(instant).strftime(DATE_KEY_FORMAT)


def date_from_key(key: str) -> date:
    """Inverse of date_key."""
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def parse_calendar_date(value: str) -> date:
    """
    Parse a date string into a calendar day.

    Plain dates ("2021-06-03") are taken as-is; full instants are
    projected onto their Berlin calendar day.

    Raises:
        ValueError: If the string is neither a date nor an instant
    """
    text = value.strip()
    if len(text) == 10:
        return date_from_key(text)
    return berlin_date(parse_instant(text))


def _to_calendar_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return berlin_date(value)
    if isinstance(value, date):
        return value
    return parse_calendar_date(value)


def days_between(from_instant: date | datetime, target: date | datetime | str) -> int:
    """
    Count calendar days from from_instant's day to the target's day.

    Args:
        from_instant: Reference instant, or an already resolved calendar day
        target: Target day as date, datetime or date/instant string

    Returns:
        Whole days, negative when the target lies in the past
    """
    return (_to_calendar_date(target) - _to_calendar_date(from_instant)).days


def format_timestamp(instant: datetime) -> str:
    """Render an instant as UTC ISO-8601 with milliseconds, e.g. 2021-06-01T08:00:00.000Z."""
    return _as_utc(instant).isoformat(timespec="milliseconds").replace("+00:00", "Z")
