"""Effectiveness Engine - Wait-and-watch window calculations.

Maps between (taken_at, duration) and (taken_at, due_at):
- compute_due_date: calendar-aware addition (Jan 31 + 1 month = Feb 29/28)
- derive_duration_from_due_date: back-derive the best-fit (value, unit)
- apply_potency_default: default wait period for a potency

Form edits are modeled as commands fed to reduce_window(). Each command fully
determines which field is authoritative for that step:

    SetTakenAt / SetDuration / ChangeUnit / SelectPotency → due_at recomputed
    SetDueDate → (value, unit) re-derived, due_at kept exactly as entered

so a user's exact due date is never overwritten by a recompute from the
derived duration, and no "suppress next recompute" state is needed.

ARCHITECTURE: Pure functions over frozen dataclasses, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_add_interval, dt_elapsed_components
from .duration_engine import Duration, DurationEngine

if TYPE_CHECKING:
    from datetime import datetime


# =============================================================================
# Calculations
# =============================================================================


def apply_potency_default(potency: str | None) -> Duration:
    """Return the default wait-and-watch period for a potency.

    6C → 1 day, 30C → 1 week, 200C → 1 month, 1M → 2 months.
    "Other" and unrecognized potencies default to 1 week.
    """
    value, unit = const.POTENCY_DEFAULT_WAIT_PERIODS.get(
        potency or const.POTENCY_OTHER, const.DEFAULT_WAIT_PERIOD
    )
    return Duration(value, unit)


def compute_due_date(taken_at: datetime, value: int, unit: str) -> datetime:
    """Compute the end of the wait-and-watch window.

    The value is clamped into its unit's range first, so the result is
    always after taken_at. Months land on the same day-of-month, clamped to
    the last valid day when the target month is shorter.

    Example:
        compute_due_date(datetime(2024, 1, 1, 10), 1, "weeks")
        → datetime(2024, 1, 8, 10, 0)
    """
    normalized = DurationEngine.normalize_unit(unit)
    clamped = DurationEngine.clamp_value(value, normalized)
    return dt_add_interval(taken_at, normalized, clamped)


def total_hours_between(taken_at: datetime, due_at: datetime) -> int:
    """Return the fixed-table hour count between two instants.

    Elapsed calendar components are weighted with the approximation table
    (week = 168h, month = 720h), matching the unit-switching conversions.
    """
    parts = dt_elapsed_components(taken_at, due_at)
    return (
        parts.hours
        + parts.days * const.HOURS_PER_DAY
        + parts.weeks * const.HOURS_PER_WEEK
        + parts.months * const.HOURS_PER_MONTH
    )


def derive_duration_from_due_date(taken_at: datetime, due_at: datetime) -> Duration:
    """Back-derive the best-fit (value, unit) for a due date.

    Not an exact inverse of compute_due_date(): months are weighted as 30 days
    here but added as calendar months there.

    Example:
        derive_duration_from_due_date(datetime(2024, 1, 1), datetime(2024, 1, 3))
        → Duration(48, "hours")
    """
    return DurationEngine.select_best_unit(total_hours_between(taken_at, due_at))


# =============================================================================
# Form State Reducer
# =============================================================================


@dataclass(frozen=True)
class EffectivenessWindow:
    """Current wait-and-watch window for a remedy being edited.

    Attributes:
        taken_at: When the dose was administered
        value: Duration value, always within its unit's range
        unit: TIME_UNIT_* constant
        due_at: End of the window, never before taken_at
    """

    taken_at: datetime
    value: int
    unit: str
    due_at: datetime

    @property
    def duration(self) -> Duration:
        """Return the window length as a Duration."""
        return Duration(self.value, self.unit)

    @classmethod
    def for_potency(cls, taken_at: datetime, potency: str | None) -> EffectivenessWindow:
        """Build the initial window for a newly logged dose."""
        value, unit = apply_potency_default(potency)
        return cls(
            taken_at=taken_at,
            value=value,
            unit=unit,
            due_at=compute_due_date(taken_at, value, unit),
        )

    @classmethod
    def from_due_date(cls, taken_at: datetime, due_at: datetime) -> EffectivenessWindow:
        """Rebuild a window from stored taken/due instants."""
        due_at = max(due_at, taken_at)
        value, unit = derive_duration_from_due_date(taken_at, due_at)
        return cls(taken_at=taken_at, value=value, unit=unit, due_at=due_at)


@dataclass(frozen=True)
class SetTakenAt:
    """User changed when the dose was taken."""

    taken_at: datetime


@dataclass(frozen=True)
class SetDuration:
    """User picked a duration value and unit."""

    value: int
    unit: str


@dataclass(frozen=True)
class ChangeUnit:
    """User switched the display unit; the length is kept approximately."""

    unit: str


@dataclass(frozen=True)
class SelectPotency:
    """User picked a potency; its default wait period is applied."""

    potency: str


@dataclass(frozen=True)
class SetDueDate:
    """User edited the due date directly."""

    due_at: datetime


WindowCommand = SetTakenAt | SetDuration | ChangeUnit | SelectPotency | SetDueDate


def reduce_window(
    state: EffectivenessWindow, command: WindowCommand
) -> EffectivenessWindow:
    """Apply one form edit and return the new window state.

    Args:
        state: Current window.
        command: One of the WindowCommand variants.

    Returns:
        New EffectivenessWindow. The input state is never mutated.
    """
    if isinstance(command, SetTakenAt):
        return replace(
            state,
            taken_at=command.taken_at,
            due_at=compute_due_date(command.taken_at, state.value, state.unit),
        )

    if isinstance(command, SetDuration):
        unit = DurationEngine.normalize_unit(command.unit)
        value = DurationEngine.clamp_value(command.value, unit)
        return replace(
            state,
            value=value,
            unit=unit,
            due_at=compute_due_date(state.taken_at, value, unit),
        )

    if isinstance(command, ChangeUnit):
        value, unit = DurationEngine.convert_duration(state.duration, command.unit)
        return replace(
            state,
            value=value,
            unit=unit,
            due_at=compute_due_date(state.taken_at, value, unit),
        )

    if isinstance(command, SelectPotency):
        value, unit = apply_potency_default(command.potency)
        return replace(
            state,
            value=value,
            unit=unit,
            due_at=compute_due_date(state.taken_at, value, unit),
        )

    if isinstance(command, SetDueDate):
        if command.due_at == state.due_at:
            return state
        due_at = command.due_at
        if due_at < state.taken_at:
            const.LOGGER.debug(
                "reduce_window: Due date %s before taken time %s, using taken time",
                due_at,
                state.taken_at,
            )
            due_at = state.taken_at
        value, unit = derive_duration_from_due_date(state.taken_at, due_at)
        return replace(state, value=value, unit=unit, due_at=due_at)

    const.LOGGER.warning("reduce_window: Unsupported command %r", command)
    return state
