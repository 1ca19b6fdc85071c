"""
Pytest configuration and fixtures for impfchart tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from impfchart.core.models import CanonicalRecord, Insurance, RawProbeResult, VaccinationLocation, VaccinationType


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests without filesystem access"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that read or write capture and chart files"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the command-line interface"
    )


# =======================
# TIME FIXTURES
# =======================

@pytest.fixture(scope="session")
def now() -> datetime:
    """
    Fixed reference instant for a run

    Returns:
        2021-06-01 10:00 UTC (12:00 in Berlin)
    """
    return datetime(2021, 6, 1, 10, 0, 0, tzinfo=timezone.utc)


# =======================
# PROBE FIXTURES
# =======================

def build_probe(
    practice_id: str = "158431",
    vaccination: str = "BIONTECH_PFIZER",
    insurance: str = "PUBLIC",
    next_date: str | None = None,
    availabilities: list[dict[str, Any]] | None = None,
    failed: bool = False,
) -> dict[str, Any]:
    """
    Build a probe result in capture format

    Args:
        practice_id: Doctolib practice ID of the site
        vaccination: Raw vaccine code
        insurance: Insurance class
        next_date: Upstream "next" date
        availabilities: Availability listing entries
        failed: Produce a failed probe (error, no response)

    Returns:
        Probe result dictionary as found in capture files
    """
    probe: dict[str, Any] = {
        "source": {
            "bookingSource": {
                "vaccination": vaccination,
                "insurance": insurance,
                "site": {"doctolib": {"practiceId": practice_id}},
            },
            "url": f"https://www.doctolib.de/institut/berlin/{practice_id}",
        }
    }
    if failed:
        probe["error"] = {"message": "Request failed with status code 503"}
    else:
        probe["response"] = {
            "next": next_date,
            "data": {"availabilities": availabilities or []},
        }
    return probe


@pytest.fixture
def probe_factory() -> Callable[..., dict[str, Any]]:
    """Factory for probe result dictionaries"""
    return build_probe


@pytest.fixture
def result_factory() -> Callable[..., RawProbeResult]:
    """Factory for validated RawProbeResult models"""
    def _factory(**kwargs) -> RawProbeResult:
        return RawProbeResult.model_validate(build_probe(**kwargs))
    return _factory


@pytest.fixture
def record_factory() -> Callable[..., CanonicalRecord]:
    """Factory for canonical records with sensible defaults"""
    def _factory(
        sampled_at: datetime = datetime(2021, 6, 1, 9, 30, tzinfo=timezone.utc),
        location: VaccinationLocation = VaccinationLocation.ARENA,
        vaccination_type: VaccinationType = VaccinationType.BIONTECH_PFIZER,
        insurance: Insurance = Insurance.PUBLIC,
        days_until_next: int | None = None,
        next_available=None,
    ) -> CanonicalRecord:
        return CanonicalRecord(
            sampled_at=sampled_at,
            location=location,
            vaccination_type=vaccination_type,
            insurance=insurance,
            next_available=next_available,
            days_until_next=days_until_next,
        )
    return _factory


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def capture_dir(tmp_path) -> Path:
    """
    Provide an empty capture directory

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the capture directory
    """
    directory = tmp_path / "captures"
    directory.mkdir()
    return directory


@pytest.fixture
def write_capture(capture_dir) -> Callable[..., Path]:
    """
    Factory writing one capture file into capture_dir

    Usage:
        write_capture("2021-06-01T09:30:00.000Z", [probe, ...], name="a.json")
    """
    def _write(date: str, results: list[dict[str, Any]], name: str | None = None) -> Path:
        file_name = name or f"{date.replace(':', '-')}.json"
        path = capture_dir / file_name
        path.write_text(json.dumps({"date": date, "results": results}), encoding="utf-8")
        return path
    return _write
