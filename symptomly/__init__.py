"""Symptomly: health journaling core.

Logs symptoms and homeopathic remedy intakes, computes wait-and-watch due
dates, expands remedy recurrence into per-day occurrences and reminder
triggers, and builds a combined timeline for search and export.

Call setup() once with the user's settings before using date-dependent
helpers; it configures the local timezone used for calendar arithmetic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from . import const
from .helpers.flow_helpers import build_settings_data
from .utils.dt_utils import set_default_timezone

if TYPE_CHECKING:
    from .managers.notification_manager import NotificationManager
    from .type_defs import SymptomlySettings


def setup(
    settings: dict[str, Any] | None = None,
    notification_manager: NotificationManager | None = None,
) -> SymptomlySettings:
    """Apply user settings.

    Args:
        settings: Raw settings (validated with SETTINGS_SCHEMA, defaults applied)
        notification_manager: When given, the daily symptom reminder is
            rescheduled to match the settings

    Returns:
        The validated settings.

    Raises:
        vol.Invalid: If any setting is invalid
    """
    validated = build_settings_data(settings)
    set_default_timezone(ZoneInfo(validated["time_zone"]))
    const.LOGGER.debug("Symptomly configured for time zone %s", validated["time_zone"])

    if notification_manager is not None:
        notification_manager.schedule_daily_symptom_reminder(
            hour=validated["reminder_hour"],
            minute=validated["reminder_minute"],
            enabled=validated["reminder_enabled"],
        )

    return validated


__all__ = ["setup"]
