"""Manager modules for Symptomly.

Managers coordinate engines with external collaborators.
"""

from .notification_manager import (
    NotificationManager,
    ReminderScheduler,
    ReminderSchedulingError,
)

__all__ = [
    "NotificationManager",
    "ReminderScheduler",
    "ReminderSchedulingError",
]
