"""Unit tests for DurationEngine - pure Python logic tests.

Test Categories:
- Hours conversion (to/from, synonyms)
- Range clamping
- Cross-unit conversion
- Best unit selection boundaries
"""

from __future__ import annotations

import pytest

from symptomly import const
from symptomly.engines.duration_engine import Duration, DurationEngine

ALL_UNITS = [
    const.TIME_UNIT_HOURS,
    const.TIME_UNIT_DAYS,
    const.TIME_UNIT_WEEKS,
    const.TIME_UNIT_MONTHS,
]

# =============================================================================
# Test: Hours conversion
# =============================================================================


class TestHoursConversion:
    """Tests for to_hours / from_hours."""

    def test_to_hours_table(self) -> None:
        """Each unit maps to its fixed hour count."""
        assert DurationEngine.to_hours(5, const.TIME_UNIT_HOURS) == 5
        assert DurationEngine.to_hours(2, const.TIME_UNIT_DAYS) == 48
        assert DurationEngine.to_hours(1, const.TIME_UNIT_WEEKS) == 168
        assert DurationEngine.to_hours(1, const.TIME_UNIT_MONTHS) == 720

    @pytest.mark.parametrize("alias", ["weekOfMonth", "week", "Weeks", "weekOfYear"])
    def test_week_synonyms(self, alias: str) -> None:
        """Calendar component names are accepted for weeks."""
        assert DurationEngine.to_hours(1, alias) == 168
        assert DurationEngine.normalize_unit(alias) == const.TIME_UNIT_WEEKS

    def test_unknown_unit_defaults_to_days(self) -> None:
        """Unknown units fall back to days instead of raising."""
        assert DurationEngine.normalize_unit("fortnight") == const.TIME_UNIT_DAYS
        assert DurationEngine.normalize_unit(None) == const.TIME_UNIT_DAYS

    def test_from_hours_floors(self) -> None:
        """Fractional remainders are discarded."""
        assert DurationEngine.from_hours(47, const.TIME_UNIT_DAYS) == 1
        assert DurationEngine.from_hours(335, const.TIME_UNIT_WEEKS) == 1
        assert DurationEngine.from_hours(719, const.TIME_UNIT_MONTHS) == 0

    @pytest.mark.parametrize("unit", ALL_UNITS)
    @pytest.mark.parametrize("multiple", [1, 2, 7, 30])
    def test_exact_multiples_round_trip(self, unit: str, multiple: int) -> None:
        """to_hours(from_hours(h, u), u) == h when h is a multiple of u."""
        hours = multiple * DurationEngine.hours_per_unit(unit)
        assert DurationEngine.to_hours(DurationEngine.from_hours(hours, unit), unit) == hours


# =============================================================================
# Test: Clamping and conversion
# =============================================================================


class TestClampAndConvert:
    """Tests for clamp_value / convert."""

    @pytest.mark.parametrize(
        ("unit", "low", "high"),
        [
            (const.TIME_UNIT_HOURS, 1, 72),
            (const.TIME_UNIT_DAYS, 1, 180),
            (const.TIME_UNIT_WEEKS, 1, 52),
            (const.TIME_UNIT_MONTHS, 1, 24),
        ],
    )
    def test_clamp_bounds(self, unit: str, low: int, high: int) -> None:
        """Values outside the range are clamped to the nearest bound."""
        assert DurationEngine.clamp_value(-5, unit) == low
        assert DurationEngine.clamp_value(0, unit) == low
        assert DurationEngine.clamp_value(high + 1000, unit) == high
        assert DurationEngine.clamp_value(low, unit) == low

    def test_convert_examples(self) -> None:
        """Conversion goes through hours and floors."""
        assert DurationEngine.convert(2, const.TIME_UNIT_WEEKS, const.TIME_UNIT_DAYS) == 14
        assert DurationEngine.convert(36, const.TIME_UNIT_HOURS, const.TIME_UNIT_DAYS) == 1
        assert DurationEngine.convert(1, const.TIME_UNIT_MONTHS, const.TIME_UNIT_WEEKS) == 4

    def test_convert_clamps_to_target_range(self) -> None:
        """3 months = 2160h, clamped to the 72h maximum."""
        assert DurationEngine.convert(3, const.TIME_UNIT_MONTHS, const.TIME_UNIT_HOURS) == 72
        # 5 hours is less than a day → floor 0 → clamped to 1
        assert DurationEngine.convert(5, const.TIME_UNIT_HOURS, const.TIME_UNIT_DAYS) == 1

    @pytest.mark.parametrize("from_unit", ALL_UNITS)
    @pytest.mark.parametrize("to_unit", ALL_UNITS)
    @pytest.mark.parametrize("value", [-100, 0, 1, 13, 10_000])
    def test_convert_always_in_range(
        self, from_unit: str, to_unit: str, value: int
    ) -> None:
        """Converted values always lie within the target unit's range."""
        low, high = const.DURATION_VALUE_RANGES[to_unit]
        assert low <= DurationEngine.convert(value, from_unit, to_unit) <= high

    def test_convert_duration_normalizes_unit(self) -> None:
        """convert_duration returns the canonical unit name."""
        result = DurationEngine.convert_duration(
            Duration(1, const.TIME_UNIT_WEEKS), "day"
        )
        assert result == Duration(7, const.TIME_UNIT_DAYS)


# =============================================================================
# Test: Best unit selection
# =============================================================================


class TestSelectBestUnit:
    """Tests for select_best_unit boundaries."""

    @pytest.mark.parametrize(
        ("total_hours", "expected"),
        [
            (0, Duration(1, const.TIME_UNIT_HOURS)),
            (1, Duration(1, const.TIME_UNIT_HOURS)),
            (48, Duration(48, const.TIME_UNIT_HOURS)),
            (49, Duration(2, const.TIME_UNIT_DAYS)),
            (180 * 24, Duration(180, const.TIME_UNIT_DAYS)),
            (180 * 24 + 1, Duration(25, const.TIME_UNIT_WEEKS)),
            (52 * 168, Duration(52, const.TIME_UNIT_WEEKS)),
            (52 * 168 + 1, Duration(12, const.TIME_UNIT_MONTHS)),
            (100 * 720, Duration(24, const.TIME_UNIT_MONTHS)),
        ],
    )
    def test_boundaries(self, total_hours: int, expected: Duration) -> None:
        """Boundaries use <= comparisons."""
        assert DurationEngine.select_best_unit(total_hours) == expected

    @pytest.mark.parametrize("total_hours", [0, 1, 47, 48, 49, 100, 4321, 8737, 20000])
    def test_never_zero_and_floor(self, total_hours: int) -> None:
        """Value is never 0 and never overshoots total hours (except the max(1) case)."""
        value, unit = DurationEngine.select_best_unit(total_hours)
        assert value >= 1
        if total_hours >= DurationEngine.hours_per_unit(unit):
            assert value * DurationEngine.hours_per_unit(unit) <= total_hours
