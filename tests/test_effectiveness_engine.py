"""Unit tests for effectiveness_engine.py.

Tests:
- Potency defaults
- Calendar-aware due date computation (month-end clamping, DST)
- Duration derivation from a due date
- Form edit reducer: each command decides the authoritative field
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from symptomly import const
from symptomly.engines.duration_engine import Duration
from symptomly.engines.effectiveness_engine import (
    ChangeUnit,
    EffectivenessWindow,
    SelectPotency,
    SetDueDate,
    SetDuration,
    SetTakenAt,
    apply_potency_default,
    compute_due_date,
    derive_duration_from_due_date,
    reduce_window,
)

# =============================================================================
# Potency defaults
# =============================================================================


class TestPotencyDefaults:
    """apply_potency_default lookups."""

    @pytest.mark.parametrize(
        ("potency", "expected"),
        [
            (const.POTENCY_6C, Duration(1, const.TIME_UNIT_DAYS)),
            (const.POTENCY_30C, Duration(1, const.TIME_UNIT_WEEKS)),
            (const.POTENCY_200C, Duration(1, const.TIME_UNIT_MONTHS)),
            (const.POTENCY_1M, Duration(2, const.TIME_UNIT_MONTHS)),
            (const.POTENCY_OTHER, Duration(1, const.TIME_UNIT_WEEKS)),
            ("LM1", Duration(1, const.TIME_UNIT_WEEKS)),
            (None, Duration(1, const.TIME_UNIT_WEEKS)),
        ],
    )
    def test_defaults(self, potency: str | None, expected: Duration) -> None:
        """Known potencies map to their wait periods, anything else to 1 week."""
        assert apply_potency_default(potency) == expected


# =============================================================================
# Due date computation
# =============================================================================


class TestComputeDueDate:
    """compute_due_date calendar arithmetic."""

    def test_30c_end_to_end(self) -> None:
        """30C taken 2024-01-01T10:00 is due 2024-01-08T10:00."""
        taken_at = datetime(2024, 1, 1, 10, 0)
        value, unit = apply_potency_default(const.POTENCY_30C)
        assert compute_due_date(taken_at, value, unit) == datetime(2024, 1, 8, 10, 0)

    def test_month_end_clamps(self) -> None:
        """Jan 31 + 1 month lands on the last day of February."""
        assert compute_due_date(
            datetime(2024, 1, 31, 9), 1, const.TIME_UNIT_MONTHS
        ) == datetime(2024, 2, 29, 9)
        assert compute_due_date(
            datetime(2025, 1, 31, 9), 1, const.TIME_UNIT_MONTHS
        ) == datetime(2025, 2, 28, 9)

    def test_hours_and_days(self) -> None:
        """Hours are elapsed time, days are calendar days."""
        taken_at = datetime(2024, 3, 1, 22, 0)
        assert compute_due_date(taken_at, 5, const.TIME_UNIT_HOURS) == datetime(
            2024, 3, 2, 3, 0
        )
        assert compute_due_date(taken_at, 2, "day") == datetime(2024, 3, 3, 22, 0)

    def test_value_is_clamped_first(self) -> None:
        """Out-of-range values are clamped before adding."""
        taken_at = datetime(2024, 1, 1)
        assert compute_due_date(taken_at, 0, const.TIME_UNIT_DAYS) == datetime(2024, 1, 2)
        assert compute_due_date(taken_at, 500, const.TIME_UNIT_HOURS) == taken_at + timedelta(
            hours=72
        )

    def test_aware_week_across_dst_keeps_wall_clock(
        self, berlin_tz: ZoneInfo
    ) -> None:
        """A week across the spring DST change keeps the local time of day."""
        taken_at = datetime(2024, 3, 28, 9, 0, tzinfo=berlin_tz)
        due_at = compute_due_date(taken_at, 1, const.TIME_UNIT_WEEKS)
        local = due_at.astimezone(berlin_tz)
        assert (local.year, local.month, local.day, local.hour) == (2024, 4, 4, 9)
        assert due_at.tzinfo is not None


# =============================================================================
# Duration derivation
# =============================================================================


class TestDeriveDuration:
    """derive_duration_from_due_date."""

    def test_48_hours_boundary(self) -> None:
        """Exactly 48 hours stays in hours."""
        assert derive_duration_from_due_date(
            datetime(2024, 1, 1), datetime(2024, 1, 3)
        ) == Duration(48, const.TIME_UNIT_HOURS)

    def test_one_week(self) -> None:
        """Seven days → 168h → 7 days."""
        assert derive_duration_from_due_date(
            datetime(2024, 1, 1, 10), datetime(2024, 1, 8, 10)
        ) == Duration(7, const.TIME_UNIT_DAYS)

    def test_calendar_month_is_approximate(self) -> None:
        """One calendar month is weighted as 720h → 30 days."""
        assert derive_duration_from_due_date(
            datetime(2024, 1, 15), datetime(2024, 2, 15)
        ) == Duration(30, const.TIME_UNIT_DAYS)

    def test_due_before_taken_is_zero_elapsed(self) -> None:
        """Negative spans collapse to the minimum duration."""
        assert derive_duration_from_due_date(
            datetime(2024, 1, 5), datetime(2024, 1, 1)
        ) == Duration(1, const.TIME_UNIT_HOURS)


# =============================================================================
# Reducer
# =============================================================================


@pytest.fixture
def window() -> EffectivenessWindow:
    """30C window taken 2024-01-01T10:00."""
    return EffectivenessWindow.for_potency(datetime(2024, 1, 1, 10), const.POTENCY_30C)


class TestReduceWindow:
    """reduce_window commands."""

    def test_initial_window(self, window: EffectivenessWindow) -> None:
        """Potency default applied on creation."""
        assert window.duration == Duration(1, const.TIME_UNIT_WEEKS)
        assert window.due_at == datetime(2024, 1, 8, 10)

    def test_set_taken_at_recomputes_due(self, window: EffectivenessWindow) -> None:
        """Changing taken_at shifts the due date by the same duration."""
        result = reduce_window(window, SetTakenAt(datetime(2024, 1, 3, 10)))
        assert result.due_at == datetime(2024, 1, 10, 10)
        assert result.duration == window.duration

    def test_set_duration_recomputes_due(self, window: EffectivenessWindow) -> None:
        """A new duration recomputes the due date."""
        result = reduce_window(window, SetDuration(3, const.TIME_UNIT_DAYS))
        assert result.duration == Duration(3, const.TIME_UNIT_DAYS)
        assert result.due_at == datetime(2024, 1, 4, 10)

    def test_set_duration_clamps(self, window: EffectivenessWindow) -> None:
        """Out-of-range durations are clamped, never rejected."""
        result = reduce_window(window, SetDuration(999, const.TIME_UNIT_WEEKS))
        assert result.duration == Duration(52, const.TIME_UNIT_WEEKS)

    def test_change_unit_converts(self, window: EffectivenessWindow) -> None:
        """Switching 1 week to days shows 7 days."""
        result = reduce_window(window, ChangeUnit(const.TIME_UNIT_DAYS))
        assert result.duration == Duration(7, const.TIME_UNIT_DAYS)
        assert result.due_at == datetime(2024, 1, 8, 10)

    def test_select_potency_applies_default(self, window: EffectivenessWindow) -> None:
        """200C applies a one-month wait period."""
        result = reduce_window(window, SelectPotency(const.POTENCY_200C))
        assert result.duration == Duration(1, const.TIME_UNIT_MONTHS)
        assert result.due_at == datetime(2024, 2, 1, 10)

    def test_set_due_date_keeps_exact_value(self, window: EffectivenessWindow) -> None:
        """The user's due date is kept exactly; the duration is re-derived."""
        exact = datetime(2024, 1, 3, 17, 45)
        result = reduce_window(window, SetDueDate(exact))
        assert result.due_at == exact
        assert result.duration == Duration(2, const.TIME_UNIT_DAYS)

    def test_set_due_date_then_unchanged_due_is_noop(
        self, window: EffectivenessWindow
    ) -> None:
        """Re-sending the same due date returns the same state."""
        exact = datetime(2024, 1, 3, 17, 45)
        first = reduce_window(window, SetDueDate(exact))
        assert reduce_window(first, SetDueDate(exact)) is first

    def test_set_due_date_before_taken_clamps(self, window: EffectivenessWindow) -> None:
        """A due date before taken_at is clamped to taken_at."""
        result = reduce_window(window, SetDueDate(datetime(2023, 12, 25)))
        assert result.due_at == window.taken_at
        assert result.due_at >= result.taken_at

    def test_state_not_mutated(self, window: EffectivenessWindow) -> None:
        """Reducer returns new state."""
        reduce_window(window, SetDuration(2, const.TIME_UNIT_DAYS))
        assert window.duration == Duration(1, const.TIME_UNIT_WEEKS)

    def test_unknown_command_returns_state(self, window: EffectivenessWindow) -> None:
        """Unsupported commands are ignored."""
        assert reduce_window(window, "bogus") is window  # type: ignore[arg-type]

    def test_from_due_date(self) -> None:
        """Stored windows rebuild with derived duration and exact due date."""
        result = EffectivenessWindow.from_due_date(
            datetime(2024, 1, 1), datetime(2024, 1, 3)
        )
        assert result.duration == Duration(48, const.TIME_UNIT_HOURS)
        assert result.due_at == datetime(2024, 1, 3)
