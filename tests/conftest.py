"""Shared fixtures for Symptomly tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from symptomly import const
from symptomly.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Run every test in UTC and restore the configured zone afterwards."""
    previous = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
    yield
    dt_utils.set_default_timezone(previous)


@pytest.fixture
def berlin_tz() -> Iterator[ZoneInfo]:
    """Use Europe/Berlin as the local timezone (DST testing)."""
    tz = ZoneInfo("Europe/Berlin")
    dt_utils.set_default_timezone(tz)
    yield tz


@pytest.fixture
def mock_scheduler() -> MagicMock:
    """Return a reminder scheduler double."""
    scheduler = MagicMock()
    scheduler.schedule.return_value = None
    scheduler.cancel.return_value = None
    return scheduler


def make_remedy_record(**overrides: Any) -> dict[str, Any]:
    """Build a stored remedy record without going through build_remedy()."""
    record: dict[str, Any] = {
        const.DATA_REMEDY_INTERNAL_ID: "remedy-1",
        const.DATA_REMEDY_NAME: "Arnica montana",
        const.DATA_REMEDY_POTENCY: const.POTENCY_30C,
        const.DATA_REMEDY_CUSTOM_POTENCY: None,
        const.DATA_REMEDY_TAKEN_AT: "2024-01-15T09:30:00+00:00",
        const.DATA_REMEDY_PRESCRIBED_AT: "2024-01-15T09:30:00+00:00",
        const.DATA_REMEDY_WAIT_VALUE: 1,
        const.DATA_REMEDY_WAIT_UNIT: const.TIME_UNIT_WEEKS,
        const.DATA_REMEDY_DUE_AT: "2024-01-22T09:30:00+00:00",
        const.DATA_REMEDY_NOTES: None,
        const.DATA_REMEDY_HAS_RECURRENCE: False,
        const.DATA_REMEDY_RECURRENCE_RULE: None,
        const.DATA_REMEDY_RECURRENCE_FREQUENCY: None,
        const.DATA_REMEDY_RECURRENCE_INTERVAL: None,
        const.DATA_REMEDY_RECURRENCE_END_DATE: None,
        const.DATA_REMEDY_NOTIFICATION_IDS: [],
    }
    record.update(overrides)
    return record


def make_symptom_record(**overrides: Any) -> dict[str, Any]:
    """Build a stored symptom record without going through build_symptom()."""
    record: dict[str, Any] = {
        const.DATA_SYMPTOM_INTERNAL_ID: "symptom-1",
        const.DATA_SYMPTOM_NAME: "Headache",
        const.DATA_SYMPTOM_SEVERITY: const.SEVERITY_MODERATE,
        const.DATA_SYMPTOM_TIMESTAMP: "2024-01-15T08:00:00+00:00",
        const.DATA_SYMPTOM_RESOLUTION_DATE: None,
        const.DATA_SYMPTOM_NOTES: None,
    }
    record.update(overrides)
    return record
