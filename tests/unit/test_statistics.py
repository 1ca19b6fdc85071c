"""
Unit tests for the statistics engine.
"""

from datetime import date, datetime, timezone

import pytest

from impfchart.core.models import Insurance, VaccinationLocation, VaccinationType
from impfchart.core.statistics import GroupKey, StatisticsEngine, anchored_days


@pytest.mark.unit
class TestStatisticsEngine:
    """Tests for StatisticsEngine"""

    def test_median_of_present_values(self, record_factory):
        """3, 5 and a missing value reduce to 4"""
        records = [
            record_factory(days_until_next=3),
            record_factory(days_until_next=5),
            record_factory(days_until_next=None),
        ]
        aggregates = StatisticsEngine().aggregate(records)

        assert len(aggregates) == 1
        aggregate = aggregates[0]
        assert aggregate.type == VaccinationType.BIONTECH_PFIZER
        assert aggregate.location == VaccinationLocation.ARENA
        assert aggregate.insurance == Insurance.PUBLIC
        assert aggregate.days == 4

    def test_missing_values_not_treated_as_zero(self, record_factory):
        records = [
            record_factory(days_until_next=3),
            record_factory(days_until_next=5),
            record_factory(days_until_next=None),
            record_factory(days_until_next=None),
        ]
        assert StatisticsEngine().aggregate(records)[0].days == 4

    def test_all_missing_gives_none(self, record_factory):
        records = [record_factory(days_until_next=None), record_factory(days_until_next=None)]
        aggregates = StatisticsEngine().aggregate(records)

        assert len(aggregates) == 1
        assert aggregates[0].days is None

    def test_odd_count(self, record_factory):
        records = [record_factory(days_until_next=d) for d in (9, 1, 4)]
        assert StatisticsEngine().aggregate(records)[0].days == 4

    def test_groups_by_composite_key(self, record_factory):
        records = [
            record_factory(days_until_next=1),
            record_factory(location=VaccinationLocation.MESSE, days_until_next=2),
            record_factory(vaccination_type=VaccinationType.MODERNA, days_until_next=3),
            record_factory(insurance=Insurance.PRIVATE, days_until_next=4),
            record_factory(days_until_next=5),
        ]
        aggregates = StatisticsEngine().aggregate(records)

        assert len(aggregates) == 4
        assert [a.days for a in aggregates] == [3, 2, 3, 4]

    def test_groups_in_first_seen_order(self, record_factory):
        records = [
            record_factory(location=VaccinationLocation.VELODROM, days_until_next=1),
            record_factory(location=VaccinationLocation.ARENA, days_until_next=1),
            record_factory(location=VaccinationLocation.VELODROM, days_until_next=1),
            record_factory(location=VaccinationLocation.TEGEL, days_until_next=1),
        ]
        aggregates = StatisticsEngine().aggregate(records)

        assert [a.location for a in aggregates] == [
            VaccinationLocation.VELODROM,
            VaccinationLocation.ARENA,
            VaccinationLocation.TEGEL,
        ]

    def test_order_insensitive_within_group(self, record_factory):
        values = [7, 2, None, 4, 11]
        forward = StatisticsEngine().aggregate([record_factory(days_until_next=d) for d in values])
        backward = StatisticsEngine().aggregate([record_factory(days_until_next=d) for d in reversed(values)])
        assert forward == backward

    def test_empty_input(self):
        assert StatisticsEngine().aggregate([]) == []

    def test_group_returns_equal_keys_together(self, record_factory):
        groups = StatisticsEngine().group([record_factory(), record_factory()])
        key = GroupKey(VaccinationType.BIONTECH_PFIZER, VaccinationLocation.ARENA, Insurance.PUBLIC)
        assert list(groups) == [key]
        assert len(groups[key]) == 2

    def test_mean_reducer(self, record_factory):
        records = [record_factory(days_until_next=d) for d in (1, 2, 9)]
        assert StatisticsEngine(reducer="mean").aggregate(records)[0].days == 4

    def test_unknown_reducer(self):
        with pytest.raises(ValueError):
            StatisticsEngine(reducer="mode")


@pytest.mark.unit
class TestReferenceAnchoring:
    """Tests for re-anchoring days values to a reference instant"""

    def test_reference_recounts_from_its_day(self, record_factory):
        """Sampled late on June 1 (Berlin), referenced early on June 2"""
        record = record_factory(
            sampled_at=datetime(2021, 6, 1, 21, 30, tzinfo=timezone.utc),
            next_available=date(2021, 6, 3),
            days_until_next=2,
        )
        reference = datetime(2021, 6, 1, 22, 10, tzinfo=timezone.utc)

        assert anchored_days(record, None) == 2
        assert anchored_days(record, reference) == 1
        assert StatisticsEngine().aggregate([record], reference)[0].days == 1

    def test_date_reference(self, record_factory):
        record = record_factory(next_available=date(2021, 6, 3), days_until_next=2)
        assert anchored_days(record, date(2021, 6, 1)) == 2

    def test_missing_stays_missing_with_reference(self, record_factory):
        record = record_factory(days_until_next=None)
        assert anchored_days(record, date(2021, 6, 1)) is None
