"""Type definitions for Symptomly data structures.

Stored records (remedies, symptoms) and the payloads exchanged with external
collaborators (reminder scheduler, export consumers) are plain dicts described
here as TypedDicts. Engine-internal values (recurrence variants, effectiveness
window state) are dataclasses that live next to the engine using them.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime null checks and .get()
defaults remain in data_builders.py and the helpers.

IMPORTANT: This file must NOT import from engines, managers or helpers.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RemedyId = str  # UUID string
SymptomId = str  # UUID string
NotificationId = str  # Opaque reminder identifier
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"


# =============================================================================
# Stored Entities
# =============================================================================


class RemedyData(TypedDict):
    """Stored remedy record.

    Recurrence fields are kept flat for storage compatibility and decoded into
    a Recurrence variant by schedule_engine.recurrence_from_remedy().
    """

    internal_id: RemedyId
    name: str
    potency: str
    custom_potency: str | None
    taken_at: ISODatetime
    prescribed_at: ISODatetime
    wait_value: int
    wait_unit: str
    due_at: ISODatetime
    notes: str | None
    has_recurrence: bool
    recurrence_rule: str | None
    recurrence_frequency: int | None  # multiple_times_per_day only
    recurrence_interval: int | None  # multiple_times_per_day only
    recurrence_end_date: ISODatetime | None
    notification_ids: list[NotificationId]


class SymptomData(TypedDict):
    """Stored symptom record. Severity 0 marks a resolved symptom."""

    internal_id: SymptomId
    name: str
    severity: int
    timestamp: ISODatetime
    resolution_date: ISODatetime | None
    notes: str | None


# =============================================================================
# Reminder Scheduling Contracts
# =============================================================================


class CalendarTrigger(TypedDict):
    """Repeating calendar trigger matched on local wall-clock components.

    weekday uses Python numbering (0=Mon, 6=Sun).
    """

    hour: int
    minute: int
    weekday: NotRequired[int]
    day: NotRequired[int]
    repeats: bool


class TriggerDescriptor(TypedDict):
    """A reminder the external scheduler should register."""

    identifier: NotificationId
    trigger: CalendarTrigger
    title: str
    body: str


class ReminderPlan(TypedDict):
    """Instruction set for the external scheduler.

    cancel is applied before schedule.
    """

    cancel: list[NotificationId]
    schedule: list[TriggerDescriptor]


# =============================================================================
# Timeline / Export
# =============================================================================


class TimelineItem(TypedDict):
    """One entry of the combined symptom/remedy timeline."""

    item_id: str
    kind: str
    timestamp: ISODatetime
    name: str
    details: str


class TimelineDayBlock(TypedDict):
    """Per-day block for markdown exports."""

    date: ISODate
    symptoms: int
    remedies: int
    markdown_section: str


class TimelineExportRange(TypedDict):
    """Resolved export range (inclusive local dates)."""

    start_date: ISODate
    end_date: ISODate
    timezone: str


class TimelineExportResponse(TypedDict):
    """Response payload for build_timeline_export()."""

    range: TimelineExportRange
    summary: dict[str, int]
    daily: list[TimelineDayBlock]
    markdown: str


# =============================================================================
# Settings
# =============================================================================


class SymptomlySettings(TypedDict, total=False):
    """User settings validated by flow_helpers.SETTINGS_SCHEMA."""

    time_zone: str
    reminder_enabled: bool
    reminder_hour: int
    reminder_minute: int
