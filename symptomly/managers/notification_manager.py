"""Notification Manager for Symptomly.

This manager plans and applies reminder changes:
- Remedy reminders generated from the remedy's recurrence
- Cancellation of a remedy's reminders on delete or recurrence off
- The single repeating daily symptom check-in reminder

Delivery is owned by an injected ReminderScheduler (OS notification center,
push service, test double). The manager never talks to a global scheduler,
and planning is pure: plan_remedy_reminders() returns a ReminderPlan that
schedule_remedy_reminders() then hands to the scheduler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from .. import const
from ..engines.schedule_engine import generate_trigger_schedule

if TYPE_CHECKING:
    from ..type_defs import (
        CalendarTrigger,
        NotificationId,
        ReminderPlan,
        RemedyData,
        TriggerDescriptor,
    )


# =============================================================================
# Scheduler seam
# =============================================================================


class ReminderScheduler(Protocol):
    """External reminder delivery service."""

    def schedule(self, descriptors: list[TriggerDescriptor]) -> None:
        """Register repeating reminders."""

    def cancel(self, identifiers: list[NotificationId]) -> None:
        """Remove pending reminders by identifier. Unknown ids are ignored."""


class ReminderSchedulingError(Exception):
    """Raised when the injected scheduler fails to apply a change.

    Attributes:
        operation: "schedule" or "cancel"
        identifiers: Reminder identifiers involved in the failed call
    """

    def __init__(self, operation: str, identifiers: list[NotificationId]) -> None:
        """Initialize ReminderSchedulingError."""
        self.operation = operation
        self.identifiers = identifiers
        super().__init__(f"Reminder {operation} failed for {len(identifiers)} id(s)")


class NotificationManager:
    """Manager for remedy and symptom reminders.

    Responsibilities:
    - Build reminder plans for remedies (cancel old ids, schedule new triggers)
    - Apply plans through the injected scheduler
    - Keep the daily symptom reminder in sync with settings
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, scheduler: ReminderScheduler) -> None:
        """Initialize notification manager.

        Args:
            scheduler: Reminder delivery service
        """
        self._scheduler = scheduler

    # =========================================================================
    # Remedy reminders
    # =========================================================================

    def plan_remedy_reminders(self, remedy: RemedyData | dict[str, Any]) -> ReminderPlan:
        """Plan the reminder changes for a created or edited remedy.

        Previously stored ids are always cancelled, so regenerating a plan
        never leaves duplicate reminders behind.
        """
        return {
            "cancel": list(remedy.get(const.DATA_REMEDY_NOTIFICATION_IDS) or []),
            "schedule": generate_trigger_schedule(remedy),
        }

    def schedule_remedy_reminders(
        self, remedy: RemedyData | dict[str, Any]
    ) -> list[NotificationId]:
        """Apply a remedy's reminder plan.

        Returns:
            New reminder identifiers; store them as the remedy's
            notification_ids. Empty when the remedy has no recurrence.

        Raises:
            ReminderSchedulingError: If the scheduler rejects the change
        """
        plan = self.plan_remedy_reminders(remedy)
        self._cancel(plan["cancel"])

        descriptors = plan["schedule"]
        new_ids = [descriptor["identifier"] for descriptor in descriptors]
        if descriptors:
            try:
                self._scheduler.schedule(descriptors)
            except Exception as err:
                const.LOGGER.error(
                    "Failed to schedule %d reminder(s) for remedy %s: %s",
                    len(descriptors),
                    remedy.get(const.DATA_REMEDY_NAME),
                    err,
                )
                raise ReminderSchedulingError("schedule", new_ids) from err

        const.LOGGER.debug(
            "Remedy %s: cancelled %d reminder(s), scheduled %d",
            remedy.get(const.DATA_REMEDY_NAME),
            len(plan["cancel"]),
            len(new_ids),
        )
        return new_ids

    def cancel_remedy_reminders(self, remedy: RemedyData | dict[str, Any]) -> None:
        """Cancel all reminders stored on a remedy (delete, recurrence off)."""
        self._cancel(list(remedy.get(const.DATA_REMEDY_NOTIFICATION_IDS) or []))

    # =========================================================================
    # Daily symptom reminder
    # =========================================================================

    def schedule_daily_symptom_reminder(
        self,
        hour: int = const.DEFAULT_REMINDER_HOUR,
        minute: int = const.DEFAULT_REMINDER_MINUTE,
        enabled: bool = const.DEFAULT_REMINDER_ENABLED,
    ) -> TriggerDescriptor | None:
        """Replace the daily symptom check-in reminder.

        The existing reminder is always cancelled first; when disabled
        nothing new is scheduled.

        Returns:
            The scheduled descriptor, or None when disabled.
        """
        self._cancel([const.NOTIFY_ID_DAILY_SYMPTOM_REMINDER])
        if not enabled:
            const.LOGGER.debug("Daily symptom reminder disabled")
            return None

        trigger: CalendarTrigger = {"hour": hour, "minute": minute, "repeats": True}
        descriptor: TriggerDescriptor = {
            "identifier": const.NOTIFY_ID_DAILY_SYMPTOM_REMINDER,
            "trigger": trigger,
            "title": const.NOTIFY_TITLE_DAILY_SYMPTOM_REMINDER,
            "body": const.NOTIFY_BODY_DAILY_SYMPTOM_REMINDER,
        }
        try:
            self._scheduler.schedule([descriptor])
        except Exception as err:
            const.LOGGER.error("Failed to schedule daily symptom reminder: %s", err)
            raise ReminderSchedulingError(
                "schedule", [const.NOTIFY_ID_DAILY_SYMPTOM_REMINDER]
            ) from err

        const.LOGGER.debug("Daily symptom reminder set for %02d:%02d", hour, minute)
        return descriptor

    # =========================================================================
    # Internal
    # =========================================================================

    def _cancel(self, identifiers: list[NotificationId]) -> None:
        """Cancel reminders, skipping the scheduler call for an empty list."""
        if not identifiers:
            return
        try:
            self._scheduler.cancel(identifiers)
        except Exception as err:
            const.LOGGER.error(
                "Failed to cancel %d reminder(s): %s", len(identifiers), err
            )
            raise ReminderSchedulingError("cancel", identifiers) from err
