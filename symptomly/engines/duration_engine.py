"""Duration Engine - Pure logic for wait-and-watch duration units.

Converts (value, unit) pairs between hours, days, weeks and months through an
hours-denominated intermediate, picks the coarsest readable unit for an
arbitrary number of hours, and clamps values into each unit's allowed range.

The hours table (1 day = 24h, 1 week = 168h, 1 month = 720h) is a fixed
approximation used for unit switching and display. Due dates are computed
with calendar-aware arithmetic in effectiveness_engine instead.

ARCHITECTURE: Stateless static methods, no I/O. Invalid input never raises;
values are clamped and unknown units are normalized with a warning.
"""

from __future__ import annotations

from typing import NamedTuple

from .. import const


class Duration(NamedTuple):
    """A wait-and-watch duration expressed in one unit."""

    value: int
    unit: str


class DurationEngine:
    """Pure logic engine for duration unit conversion."""

    @staticmethod
    def normalize_unit(unit: str | None) -> str:
        """Map any accepted unit spelling to a TIME_UNIT_* constant.

        Calendar component names such as "weekOfMonth" are accepted as
        synonyms. Unknown or missing units fall back to days.
        """
        if unit:
            normalized = const.TIME_UNIT_ALIASES.get(str(unit).strip().lower())
            if normalized:
                return normalized
        const.LOGGER.warning(
            "DurationEngine: Unknown duration unit %s, defaulting to %s",
            unit,
            const.TIME_UNIT_DAYS,
        )
        return const.TIME_UNIT_DAYS

    @staticmethod
    def hours_per_unit(unit: str) -> int:
        """Return the fixed number of hours in one unit."""
        return const.HOURS_PER_UNIT[DurationEngine.normalize_unit(unit)]

    @staticmethod
    def to_hours(value: int, unit: str) -> int:
        """Convert a value in the given unit to hours.

        Examples:
            to_hours(2, "days") → 48
            to_hours(1, "weekOfMonth") → 168
        """
        return int(value) * DurationEngine.hours_per_unit(unit)

    @staticmethod
    def from_hours(hours: int, unit: str) -> int:
        """Convert hours to the given unit using floor division.

        The fractional remainder is discarded, so converting back and forth
        across units does not always round-trip.
        """
        return int(hours) // DurationEngine.hours_per_unit(unit)

    @staticmethod
    def clamp_value(value: int, unit: str) -> int:
        """Clamp a value into the allowed range for its unit.

        Ranges: hours [1, 72], days [1, 180], weeks [1, 52], months [1, 24].
        """
        low, high = const.DURATION_VALUE_RANGES[DurationEngine.normalize_unit(unit)]
        clamped = max(low, min(high, int(value)))
        if clamped != value:
            const.LOGGER.debug(
                "DurationEngine: Clamped %s %s to %s", value, unit, clamped
            )
        return clamped

    @staticmethod
    def convert(value: int, from_unit: str, to_unit: str) -> int:
        """Convert a value between units, clamped into the target unit's range.

        Examples:
            convert(2, "weeks", "days") → 14
            convert(36, "hours", "days") → 1
            convert(3, "months", "hours") → 72 (2160 clamped)
        """
        hours = DurationEngine.to_hours(value, from_unit)
        return DurationEngine.clamp_value(
            DurationEngine.from_hours(hours, to_unit), to_unit
        )

    @staticmethod
    def convert_duration(duration: Duration, to_unit: str) -> Duration:
        """Convert a Duration to another unit, keeping the approximate length."""
        normalized = DurationEngine.normalize_unit(to_unit)
        return Duration(
            DurationEngine.convert(duration.value, duration.unit, normalized),
            normalized,
        )

    @staticmethod
    def select_best_unit(total_hours: int) -> Duration:
        """Pick the coarsest unit that keeps the value readable.

        <= 48h → hours, <= 180 days → days, <= 52 weeks → weeks, else months.
        The value is floor-divided, never below 1, and clamped into range.

        Examples:
            select_best_unit(48) → Duration(48, "hours")
            select_best_unit(49) → Duration(2, "days")
            select_best_unit(0) → Duration(1, "hours")
        """
        total_hours = int(total_hours)

        if total_hours <= const.BEST_UNIT_MAX_HOURS:
            unit = const.TIME_UNIT_HOURS
        elif total_hours <= const.BEST_UNIT_MAX_DAYS_AS_HOURS:
            unit = const.TIME_UNIT_DAYS
        elif total_hours <= const.BEST_UNIT_MAX_WEEKS_AS_HOURS:
            unit = const.TIME_UNIT_WEEKS
        else:
            unit = const.TIME_UNIT_MONTHS

        value = max(1, total_hours // const.HOURS_PER_UNIT[unit])
        return Duration(DurationEngine.clamp_value(value, unit), unit)
