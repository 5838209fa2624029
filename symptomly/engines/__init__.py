"""Engine modules for Symptomly.

Contains pure computation engines:
- duration_engine: Wait-and-watch duration unit conversion
- effectiveness_engine: Due date calculation and form edit reducer
- schedule_engine: Recurrence variants, occurrences and reminder triggers
"""

# Use relative imports within package to avoid mypy module resolution issues
from .duration_engine import Duration, DurationEngine
from .effectiveness_engine import (
    ChangeUnit,
    EffectivenessWindow,
    SelectPotency,
    SetDueDate,
    SetDuration,
    SetTakenAt,
    WindowCommand,
    apply_potency_default,
    compute_due_date,
    derive_duration_from_due_date,
    reduce_window,
)
from .schedule_engine import (
    BiweeklyRecurrence,
    DailyRecurrence,
    EveryOtherDayRecurrence,
    MonthlyRecurrence,
    MultipleTimesPerDayRecurrence,
    Recurrence,
    RecurrenceEngine,
    WeeklyRecurrence,
    build_recurrence,
    recurrence_from_remedy,
)

__all__ = [
    "BiweeklyRecurrence",
    "ChangeUnit",
    "DailyRecurrence",
    "Duration",
    "DurationEngine",
    "EffectivenessWindow",
    "EveryOtherDayRecurrence",
    "MonthlyRecurrence",
    "MultipleTimesPerDayRecurrence",
    "Recurrence",
    "RecurrenceEngine",
    "SelectPotency",
    "SetDueDate",
    "SetDuration",
    "SetTakenAt",
    "WeeklyRecurrence",
    "WindowCommand",
    "apply_potency_default",
    "build_recurrence",
    "compute_due_date",
    "derive_duration_from_due_date",
    "recurrence_from_remedy",
    "reduce_window",
]
