"""
Unit tests for Berlin calendar arithmetic.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from impfchart.core.calendar import (
    BERLIN,
    date_from_key,
    date_key,
    days_between,
    format_timestamp,
    parse_calendar_date,
    parse_instant,
)


@pytest.mark.unit
class TestDateKey:
    """Tests for date_key"""

    def test_same_berlin_day_same_key(self):
        morning = datetime(2021, 6, 1, 4, 0, tzinfo=timezone.utc)
        evening = datetime(2021, 6, 1, 21, 59, 59, tzinfo=timezone.utc)
        assert date_key(morning) == date_key(evening) == "2021-06-01"

    def test_straddling_berlin_midnight_summer(self):
        """22:00 UTC is midnight in Berlin during CEST"""
        before = datetime(2021, 6, 1, 21, 59, tzinfo=timezone.utc)
        after = datetime(2021, 6, 1, 22, 1, tzinfo=timezone.utc)
        assert date_key(before) == "2021-06-01"
        assert date_key(after) == "2021-06-02"

    def test_straddling_berlin_midnight_winter(self):
        """23:00 UTC is midnight in Berlin during CET"""
        before = datetime(2021, 1, 15, 22, 59, tzinfo=timezone.utc)
        after = datetime(2021, 1, 15, 23, 0, tzinfo=timezone.utc)
        assert date_key(before) == "2021-01-15"
        assert date_key(after) == "2021-01-16"

    def test_key_differs_from_utc_date(self):
        instant = datetime(2021, 6, 1, 23, 30, tzinfo=timezone.utc)
        assert date_key(instant) == "2021-06-02"

    def test_naive_instant_taken_as_utc(self):
        assert date_key(datetime(2021, 6, 1, 22, 30)) == "2021-06-02"

    def test_offset_instant(self):
        instant = datetime(2021, 6, 2, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        assert date_key(instant) == "2021-06-02"

    @given(st.datetimes(min_value=datetime(2000, 1, 1), max_value=datetime(2035, 12, 31)))
    def test_property_key_is_berlin_wall_clock_date(self, local):
        """Property test: the key is the date on a Berlin wall clock"""
        instant = BERLIN.localize(local)
        assert date_key(instant) == BERLIN.normalize(instant).strftime("%Y-%m-%d")

    @given(
        st.dates(min_value=date(2000, 1, 1), max_value=date(2035, 12, 31)),
        st.integers(min_value=0, max_value=23),
        st.integers(min_value=0, max_value=23),
    )
    def test_property_time_of_day_does_not_matter(self, day, hour_a, hour_b):
        """Property test: instants on the same Berlin day share a key"""
        a = BERLIN.localize(datetime(day.year, day.month, day.day, hour_a, 15))
        b = BERLIN.localize(datetime(day.year, day.month, day.day, hour_b, 45))
        assert date_key(a) == date_key(b) == day.isoformat()

    def test_date_from_key_roundtrip(self):
        assert date_from_key("2021-06-03") == date(2021, 6, 3)


@pytest.mark.unit
class TestDaysBetween:
    """Tests for days_between"""

    def test_future_date(self):
        sampled = datetime(2021, 6, 1, 8, 0, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-06-04") == 3

    def test_same_day_is_zero(self):
        sampled = datetime(2021, 6, 1, 21, 0, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-06-01") == 0

    def test_past_date_is_negative(self):
        sampled = datetime(2021, 6, 5, 8, 0, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-06-01") == -4

    def test_time_of_day_is_ignored(self):
        early = datetime(2021, 6, 1, 0, 5, tzinfo=timezone.utc)
        late = datetime(2021, 6, 1, 21, 55, tzinfo=timezone.utc)
        assert days_between(early, "2021-06-10") == days_between(late, "2021-06-10") == 9

    def test_counts_from_berlin_day(self):
        """23:30 UTC on June 1 is already June 2 in Berlin"""
        sampled = datetime(2021, 6, 1, 23, 30, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-06-03") == 1

    def test_instant_target(self):
        sampled = datetime(2021, 6, 1, 8, 0, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-06-03T09:00:00.000+02:00") == 2

    def test_date_reference(self):
        assert days_between(date(2021, 6, 1), date(2021, 6, 3)) == 2

    def test_across_dst_change(self):
        sampled = datetime(2021, 3, 27, 12, 0, tzinfo=timezone.utc)
        assert days_between(sampled, "2021-03-29") == 2


@pytest.mark.unit
class TestParsing:
    """Tests for instant and date parsing"""

    def test_parse_instant_with_z(self):
        assert parse_instant("2021-06-01T10:00:00.000Z") == datetime(2021, 6, 1, 10, tzinfo=timezone.utc)

    def test_parse_instant_with_offset(self):
        assert parse_instant("2021-06-01T12:00:00+02:00") == datetime(2021, 6, 1, 10, tzinfo=timezone.utc)

    def test_parse_instant_naive(self):
        assert parse_instant("2021-06-01T10:00:00").tzinfo is not None

    def test_parse_instant_invalid(self):
        with pytest.raises(ValueError):
            parse_instant("yesterday")

    def test_parse_calendar_date_plain(self):
        assert parse_calendar_date("2021-06-03") == date(2021, 6, 3)

    def test_parse_calendar_date_instant_projected_to_berlin(self):
        assert parse_calendar_date("2021-06-02T22:30:00Z") == date(2021, 6, 3)

    def test_parse_calendar_date_invalid(self):
        with pytest.raises(ValueError):
            parse_calendar_date("2021-13-45")

    def test_format_timestamp(self):
        instant = datetime(2021, 6, 1, 12, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(instant) == "2021-06-01T10:00:00.123Z"
