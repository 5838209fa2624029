"""Tests for NotificationManager with an injected scheduler double."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from symptomly import const
from symptomly.managers.notification_manager import (
    NotificationManager,
    ReminderSchedulingError,
)
from tests.conftest import make_remedy_record


def daily_remedy(**overrides: object) -> dict[str, object]:
    """Recurring daily remedy with previously stored reminder ids."""
    fields: dict[str, object] = {
        const.DATA_REMEDY_HAS_RECURRENCE: True,
        const.DATA_REMEDY_RECURRENCE_RULE: const.RECURRENCE_DAILY,
        const.DATA_REMEDY_RECURRENCE_END_DATE: "2024-02-15T00:00:00+00:00",
        const.DATA_REMEDY_NOTIFICATION_IDS: ["old-1", "old-2"],
    }
    fields.update(overrides)
    return make_remedy_record(**fields)


# =============================================================================
# Remedy reminders
# =============================================================================


class TestRemedyReminders:
    """Plan / schedule / cancel remedy reminders."""

    def test_plan_is_pure(self, mock_scheduler: MagicMock) -> None:
        """Planning does not touch the scheduler."""
        manager = NotificationManager(mock_scheduler)
        plan = manager.plan_remedy_reminders(daily_remedy())

        assert plan["cancel"] == ["old-1", "old-2"]
        assert len(plan["schedule"]) == 1
        mock_scheduler.schedule.assert_not_called()
        mock_scheduler.cancel.assert_not_called()

    def test_schedule_cancels_old_then_schedules_new(
        self, mock_scheduler: MagicMock
    ) -> None:
        """Old ids are cancelled before the new triggers are registered."""
        manager = NotificationManager(mock_scheduler)
        new_ids = manager.schedule_remedy_reminders(daily_remedy())

        mock_scheduler.cancel.assert_called_once_with(["old-1", "old-2"])
        mock_scheduler.schedule.assert_called_once()
        descriptors = mock_scheduler.schedule.call_args.args[0]
        assert [d["identifier"] for d in descriptors] == new_ids
        assert mock_scheduler.method_calls[0][0] == "cancel"

    def test_schedule_without_recurrence_only_cancels(
        self, mock_scheduler: MagicMock
    ) -> None:
        """Turning recurrence off leaves no reminders behind."""
        manager = NotificationManager(mock_scheduler)
        remedy = daily_remedy(**{const.DATA_REMEDY_HAS_RECURRENCE: False})

        assert manager.schedule_remedy_reminders(remedy) == []
        mock_scheduler.cancel.assert_called_once_with(["old-1", "old-2"])
        mock_scheduler.schedule.assert_not_called()

    def test_nothing_to_cancel_skips_scheduler(self, mock_scheduler: MagicMock) -> None:
        """An empty cancel list never reaches the scheduler."""
        manager = NotificationManager(mock_scheduler)
        manager.cancel_remedy_reminders(make_remedy_record())
        mock_scheduler.cancel.assert_not_called()

    def test_cancel_remedy_reminders(self, mock_scheduler: MagicMock) -> None:
        """Deleting a remedy cancels its stored ids."""
        manager = NotificationManager(mock_scheduler)
        manager.cancel_remedy_reminders(daily_remedy())
        mock_scheduler.cancel.assert_called_once_with(["old-1", "old-2"])

    def test_schedule_failure_raises(self, mock_scheduler: MagicMock) -> None:
        """Scheduler failures surface as ReminderSchedulingError."""
        mock_scheduler.schedule.side_effect = RuntimeError("denied")
        manager = NotificationManager(mock_scheduler)

        with pytest.raises(ReminderSchedulingError) as exc_info:
            manager.schedule_remedy_reminders(daily_remedy())

        assert exc_info.value.operation == "schedule"
        assert len(exc_info.value.identifiers) == 1
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_cancel_failure_raises(self, mock_scheduler: MagicMock) -> None:
        """Cancel failures surface as ReminderSchedulingError."""
        mock_scheduler.cancel.side_effect = RuntimeError("gone")
        manager = NotificationManager(mock_scheduler)

        with pytest.raises(ReminderSchedulingError) as exc_info:
            manager.cancel_remedy_reminders(daily_remedy())

        assert exc_info.value.operation == "cancel"
        assert exc_info.value.identifiers == ["old-1", "old-2"]


# =============================================================================
# Daily symptom reminder
# =============================================================================


class TestDailySymptomReminder:
    """Daily symptom check-in reminder."""

    def test_default_time(self, mock_scheduler: MagicMock) -> None:
        """Defaults to 20:00 with the fixed identifier."""
        manager = NotificationManager(mock_scheduler)
        descriptor = manager.schedule_daily_symptom_reminder()

        assert descriptor is not None
        assert descriptor["identifier"] == "dailySymptomReminder"
        assert descriptor["trigger"] == {"hour": 20, "minute": 0, "repeats": True}
        assert descriptor["title"] == "Daily Symptom Check"
        mock_scheduler.cancel.assert_called_once_with(["dailySymptomReminder"])
        mock_scheduler.schedule.assert_called_once_with([descriptor])

    def test_disabled_only_cancels(self, mock_scheduler: MagicMock) -> None:
        """Disabled reminders cancel the existing one and schedule nothing."""
        manager = NotificationManager(mock_scheduler)
        assert manager.schedule_daily_symptom_reminder(8, 15, enabled=False) is None
        mock_scheduler.cancel.assert_called_once_with(["dailySymptomReminder"])
        mock_scheduler.schedule.assert_not_called()

    def test_failure_raises(self, mock_scheduler: MagicMock) -> None:
        """Scheduler failures surface as ReminderSchedulingError."""
        mock_scheduler.schedule.side_effect = OSError("no permission")
        manager = NotificationManager(mock_scheduler)
        with pytest.raises(ReminderSchedulingError):
            manager.schedule_daily_symptom_reminder(7, 45)
