"""Schedule Engine for Symptomly.

Recurrence handling for remedy intake schedules:
- Tagged recurrence variants (daily, multiple times per day, every other day,
  weekly, biweekly, monthly), each carrying only the fields it needs
- Per-day occurrence checks for calendar and day views
- Repeating calendar-trigger descriptors for the reminder scheduler
- Exact occurrence instants via `dateutil.rrule` for range queries and
  RFC 5545 RRULE export

Occurrence bounds are day-granular: a remedy occurs no earlier than the local
calendar day of taken_at and no later than the local calendar day of the
recurrence end date.

IMPORTANT: This module must NOT import from data_builders.py, managers or
helpers. Only import from const.py, type_defs.py, utils and sibling engines.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any, ClassVar
import uuid

from dateutil.rrule import DAILY, MONTHLY, WEEKLY, rrule

from .. import const
from ..utils.dt_utils import (
    as_utc,
    dt_local_date,
    dt_parse_datetime,
    to_local_wall,
)

if TYPE_CHECKING:
    from ..type_defs import CalendarTrigger, RemedyData, TriggerDescriptor


# =============================================================================
# Recurrence Variants
# =============================================================================


@dataclass(frozen=True)
class DailyRecurrence:
    """Once a day, every day, until end_date."""

    rule: ClassVar[str] = const.RECURRENCE_DAILY

    end_date: datetime


@dataclass(frozen=True)
class MultipleTimesPerDayRecurrence:
    """Several doses a day.

    Attributes:
        end_date: Last day with occurrences
        frequency: Doses per day, 2-12; None when never configured
        interval_hours: Hours between doses, 1-12
    """

    rule: ClassVar[str] = const.RECURRENCE_MULTIPLE_TIMES_PER_DAY

    end_date: datetime
    frequency: int | None = const.DEFAULT_MULTI_DAILY_FREQUENCY
    interval_hours: int = const.DEFAULT_MULTI_DAILY_INTERVAL


@dataclass(frozen=True)
class EveryOtherDayRecurrence:
    """Every second day starting on the day the remedy was taken."""

    rule: ClassVar[str] = const.RECURRENCE_EVERY_OTHER_DAY

    end_date: datetime


@dataclass(frozen=True)
class WeeklyRecurrence:
    """Same weekday as the first dose, every week."""

    rule: ClassVar[str] = const.RECURRENCE_WEEKLY

    end_date: datetime


@dataclass(frozen=True)
class BiweeklyRecurrence:
    """Same weekday as the first dose, every second week."""

    rule: ClassVar[str] = const.RECURRENCE_BIWEEKLY

    end_date: datetime


@dataclass(frozen=True)
class MonthlyRecurrence:
    """Same day-of-month as the first dose, every month."""

    rule: ClassVar[str] = const.RECURRENCE_MONTHLY

    end_date: datetime


Recurrence = (
    DailyRecurrence
    | MultipleTimesPerDayRecurrence
    | EveryOtherDayRecurrence
    | WeeklyRecurrence
    | BiweeklyRecurrence
    | MonthlyRecurrence
)

_SIMPLE_RECURRENCES: dict[str, type[Any]] = {
    const.RECURRENCE_DAILY: DailyRecurrence,
    const.RECURRENCE_EVERY_OTHER_DAY: EveryOtherDayRecurrence,
    const.RECURRENCE_WEEKLY: WeeklyRecurrence,
    const.RECURRENCE_BIWEEKLY: BiweeklyRecurrence,
    const.RECURRENCE_MONTHLY: MonthlyRecurrence,
}

_LABEL_TO_RULE: dict[str, str] = {
    label.lower(): rule for rule, label in const.RECURRENCE_RULE_LABELS.items()
}

_RRULE_WEEKDAY_CODES = ["MO", "TU", "WE", "TH", "FR", "SA", "SU"]


def normalize_recurrence_rule(rule: str | None) -> str | None:
    """Map a stored rule string (value or display label) to a RECURRENCE_* value.

    Returns None for missing or unrecognized rules.
    """
    if not rule:
        return None
    candidate = str(rule).strip()
    if candidate in const.RECURRENCE_RULE_OPTIONS:
        return candidate
    return _LABEL_TO_RULE.get(candidate.lower())


def clamp_multi_daily_frequency(frequency: int) -> int:
    """Clamp doses-per-day into [2, 12]."""
    return max(
        const.MULTI_DAILY_FREQUENCY_MIN,
        min(const.MULTI_DAILY_FREQUENCY_MAX, int(frequency)),
    )


def clamp_multi_daily_interval(interval_hours: int) -> int:
    """Clamp hours-between-doses into [1, 12]."""
    return max(
        const.MULTI_DAILY_INTERVAL_MIN,
        min(const.MULTI_DAILY_INTERVAL_MAX, int(interval_hours)),
    )


def build_recurrence(
    rule: str | None,
    end_date: datetime | None,
    frequency: int | None = None,
    interval_hours: int | None = None,
) -> Recurrence | None:
    """Build a recurrence variant from loose fields.

    Args:
        rule: RECURRENCE_* value or its display label.
        end_date: Last day with occurrences (required).
        frequency: Doses per day (multiple_times_per_day only).
        interval_hours: Hours between doses (multiple_times_per_day only).

    Returns:
        Recurrence variant, or None when the rule is unrecognized or the end
        date is missing. Out-of-range frequency/interval values are clamped;
        a non-numeric frequency becomes None and a non-numeric interval the
        default.
    """
    normalized = normalize_recurrence_rule(rule)
    if normalized is None:
        if rule:
            const.LOGGER.debug("build_recurrence: Unrecognized rule %s", rule)
        return None
    if end_date is None:
        const.LOGGER.debug("build_recurrence: Rule %s has no end date", normalized)
        return None

    if normalized == const.RECURRENCE_MULTIPLE_TIMES_PER_DAY:
        clamped_frequency: int | None = None
        if frequency is not None:
            try:
                clamped_frequency = clamp_multi_daily_frequency(frequency)
            except (TypeError, ValueError):
                const.LOGGER.debug(
                    "build_recurrence: Invalid frequency %r, no daily doses",
                    frequency,
                )

        clamped_interval = const.DEFAULT_MULTI_DAILY_INTERVAL
        if interval_hours is not None:
            try:
                clamped_interval = clamp_multi_daily_interval(interval_hours)
            except (TypeError, ValueError):
                const.LOGGER.debug(
                    "build_recurrence: Invalid interval %r, using %d hours",
                    interval_hours,
                    const.DEFAULT_MULTI_DAILY_INTERVAL,
                )

        return MultipleTimesPerDayRecurrence(
            end_date=end_date,
            frequency=clamped_frequency,
            interval_hours=clamped_interval,
        )

    return _SIMPLE_RECURRENCES[normalized](end_date=end_date)


# =============================================================================
# Recurrence Engine
# =============================================================================


class RecurrenceEngine:
    """Occurrence and reminder calculations for one remedy schedule.

    A remedy without recurrence has exactly one occurrence: the calendar day
    of taken_at.
    """

    def __init__(self, taken_at: datetime, recurrence: Recurrence | None) -> None:
        """Initialize the engine.

        Args:
            taken_at: First dose instant.
            recurrence: Recurrence variant, or None for a single dose.
        """
        self._taken_at = taken_at
        self._recurrence = recurrence
        self._base = to_local_wall(taken_at)
        self._taken_day = self._base.date()
        self._end_day: date | None = (
            dt_local_date(recurrence.end_date) if recurrence else None
        )

    @property
    def recurrence(self) -> Recurrence | None:
        """Return the recurrence variant."""
        return self._recurrence

    # =========================================================================
    # Per-day occurrence check
    # =========================================================================

    def has_occurrence_on(self, value: date | datetime) -> bool:
        """Return True if the schedule has an occurrence on the given day.

        Examples:
            Monthly from Jan 15 until Jun 15: Mar 15 → True, Mar 16 → False,
            Jul 15 → False (past end date)
        """
        day = dt_local_date(value)
        if day < self._taken_day:
            return False

        recurrence = self._recurrence
        if recurrence is None:
            return day == self._taken_day

        if self._end_day is not None and day > self._end_day:
            return False

        days = (day - self._taken_day).days

        if isinstance(recurrence, (DailyRecurrence, MultipleTimesPerDayRecurrence)):
            return True
        if isinstance(recurrence, EveryOtherDayRecurrence):
            return days % 2 == 0
        if isinstance(recurrence, WeeklyRecurrence):
            return day.weekday() == self._taken_day.weekday()
        if isinstance(recurrence, BiweeklyRecurrence):
            return day.weekday() == self._taken_day.weekday() and (days // 7) % 2 == 0
        if isinstance(recurrence, MonthlyRecurrence):
            return day.day == self._taken_day.day

        const.LOGGER.warning(
            "RecurrenceEngine: Unsupported recurrence %r", recurrence
        )
        return False

    # =========================================================================
    # Reminder trigger generation
    # =========================================================================

    def generate_trigger_schedule(
        self,
        title: str = const.NOTIFY_TITLE_REMEDY_REMINDER,
        body: str = "",
        identifier_prefix: str = const.NOTIFY_ID_REMEDY_PREFIX,
    ) -> list[TriggerDescriptor]:
        """Build repeating calendar-trigger descriptors for this schedule.

        - daily: one trigger at taken_at's time of day
        - multiple_times_per_day: `frequency` triggers spaced evenly across
          the day from midnight (offset = i * 86400 // frequency seconds)
        - every_other_day: one trigger at taken_at's time of day
        - weekly / biweekly: one trigger with taken_at's weekday pinned
        - monthly: one trigger with taken_at's day-of-month pinned

        Every call returns fresh identifiers. Returns an empty list without
        recurrence, and for multiple_times_per_day without a frequency.
        """
        recurrence = self._recurrence
        if recurrence is None:
            return []

        hour, minute = self._base.hour, self._base.minute

        def descriptor(
            trigger_hour: int,
            trigger_minute: int,
            weekday: int | None = None,
            day: int | None = None,
        ) -> TriggerDescriptor:
            trigger: CalendarTrigger = {
                "hour": trigger_hour,
                "minute": trigger_minute,
                "repeats": True,
            }
            if weekday is not None:
                trigger["weekday"] = weekday
            if day is not None:
                trigger["day"] = day
            return {
                "identifier": f"{identifier_prefix}_{uuid.uuid4().hex}",
                "trigger": trigger,
                "title": title,
                "body": body,
            }

        if isinstance(recurrence, MultipleTimesPerDayRecurrence):
            if recurrence.frequency is None:
                const.LOGGER.debug(
                    "RecurrenceEngine: multiple_times_per_day without frequency, "
                    "no triggers generated"
                )
                return []
            frequency = clamp_multi_daily_frequency(recurrence.frequency)
            spacing = const.SECONDS_PER_DAY // frequency
            triggers: list[TriggerDescriptor] = []
            for index in range(frequency):
                offset = index * spacing
                triggers.append(
                    descriptor(
                        offset // const.SECONDS_PER_HOUR,
                        (offset % const.SECONDS_PER_HOUR) // const.SECONDS_PER_MINUTE,
                    )
                )
            return triggers

        if isinstance(recurrence, (DailyRecurrence, EveryOtherDayRecurrence)):
            return [descriptor(hour, minute)]
        if isinstance(recurrence, (WeeklyRecurrence, BiweeklyRecurrence)):
            return [descriptor(hour, minute, weekday=self._base.weekday())]
        if isinstance(recurrence, MonthlyRecurrence):
            return [descriptor(hour, minute, day=self._base.day)]

        const.LOGGER.warning(
            "RecurrenceEngine: Unsupported recurrence %r", recurrence
        )
        return []

    # =========================================================================
    # Exact occurrences (rrule)
    # =========================================================================

    def get_occurrences(
        self,
        start: date | datetime,
        end: date | datetime,
        limit: int = const.DEFAULT_OCCURRENCE_LIMIT,
    ) -> list[datetime]:
        """Generate occurrence instants within a range (inclusive).

        Instants are wall-clock values in taken_at's timezone (naive when
        taken_at is naive). Dates are read as start of day for `start` and
        end of day for `end`.
        """
        start_dt = self._coerce_bound(start, end_of_day=False)
        end_dt = self._coerce_bound(end, end_of_day=True)

        occurrences: list[datetime] = []
        for occurrence in self._iter_occurrences():
            if occurrence > end_dt or len(occurrences) >= limit:
                break
            if occurrence >= start_dt:
                occurrences.append(occurrence)
        return occurrences

    def next_occurrence(self, after: date | datetime) -> datetime | None:
        """Return the first occurrence strictly after a reference instant.

        Uses rrule.after() so the lookup cost does not grow with the distance
        from taken_at.
        """
        after_dt = self._coerce_bound(after, end_of_day=False)
        recurrence = self._recurrence
        if recurrence is None:
            return self._base if self._base > after_dt else None

        rule = self._build_rrule()
        if not isinstance(recurrence, MultipleTimesPerDayRecurrence):
            return rule.after(after_dt)

        # Slots stay within 24h of their day's first dose
        until = self._until()
        day_start = rule.after(after_dt - timedelta(days=1), inc=True)
        iteration = 0
        while (
            day_start is not None
            and iteration < const.MAX_DATE_CALCULATION_ITERATIONS
        ):
            for slot in self._daily_slots(day_start):
                if after_dt < slot <= until:
                    return slot
            day_start = rule.after(day_start)
            iteration += 1

        if day_start is not None:
            const.LOGGER.warning(
                "RecurrenceEngine: Max iterations reached looking after %s", after
            )
        return None

    def to_rrule_string(self) -> str:
        """Generate an RFC 5545 RRULE string for calendar export.

        Returns:
            RRULE string (e.g., "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO;UNTIL=...")
            or empty string for a single dose.
        """
        recurrence = self._recurrence
        if recurrence is None:
            return ""

        if isinstance(recurrence, DailyRecurrence):
            body = "FREQ=DAILY;INTERVAL=1"
        elif isinstance(recurrence, EveryOtherDayRecurrence):
            body = "FREQ=DAILY;INTERVAL=2"
        elif isinstance(recurrence, WeeklyRecurrence):
            body = f"FREQ=WEEKLY;INTERVAL=1;BYDAY={self._weekday_code()}"
        elif isinstance(recurrence, BiweeklyRecurrence):
            body = f"FREQ=WEEKLY;INTERVAL=2;BYDAY={self._weekday_code()}"
        elif isinstance(recurrence, MonthlyRecurrence):
            body = f"FREQ=MONTHLY;INTERVAL=1;BYMONTHDAY={self._base.day}"
        else:
            hours = ",".join(
                str(slot.hour)
                for slot in sorted(
                    self._daily_slots(self._base), key=lambda s: s.hour
                )
            )
            body = f"FREQ=DAILY;INTERVAL=1;BYHOUR={hours};BYMINUTE={self._base.minute}"

        return f"{body};UNTIL={self._until_string()}"

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _build_rrule(self) -> rrule:
        """Build the rrule for the recurrence.

        multiple_times_per_day yields one instant per day (the first dose);
        _daily_slots() expands it into the day's doses.
        """
        recurrence = self._recurrence
        until = self._until()

        if isinstance(recurrence, (DailyRecurrence, MultipleTimesPerDayRecurrence)):
            return rrule(DAILY, interval=1, dtstart=self._base, until=until)
        if isinstance(recurrence, EveryOtherDayRecurrence):
            return rrule(DAILY, interval=2, dtstart=self._base, until=until)
        if isinstance(recurrence, WeeklyRecurrence):
            return rrule(WEEKLY, interval=1, dtstart=self._base, until=until)
        if isinstance(recurrence, BiweeklyRecurrence):
            return rrule(WEEKLY, interval=2, dtstart=self._base, until=until)
        # Months without the day-of-month are skipped, matching has_occurrence_on
        return rrule(MONTHLY, interval=1, dtstart=self._base, until=until)

    def _iter_occurrences(self) -> Iterator[datetime]:
        """Yield occurrences in chronological order."""
        recurrence = self._recurrence
        if recurrence is None:
            yield self._base
            return

        rule = self._build_rrule()
        if isinstance(recurrence, MultipleTimesPerDayRecurrence):
            until = self._until()
            for day_start in rule:
                for slot in self._daily_slots(day_start):
                    if slot <= until:
                        yield slot
            return

        yield from rule

    def _daily_slots(self, day_start: datetime) -> list[datetime]:
        """Dose instants for one day of a multiple_times_per_day schedule.

        Doses start at taken_at's time and are spaced interval_hours apart,
        at most `frequency` of them, never reaching the next day's first dose.
        """
        recurrence = self._recurrence
        if not isinstance(recurrence, MultipleTimesPerDayRecurrence):
            return [day_start]
        frequency = (
            clamp_multi_daily_frequency(recurrence.frequency)
            if recurrence.frequency is not None
            else 1
        )
        interval = clamp_multi_daily_interval(recurrence.interval_hours)
        return [
            day_start + timedelta(hours=index * interval)
            for index in range(frequency)
            if index * interval < const.HOURS_PER_DAY
        ]

    def _until(self) -> datetime:
        """Last instant of the recurrence end day, aligned with taken_at."""
        end_day = self._end_day or self._taken_day
        return datetime.combine(end_day, time.max).replace(
            microsecond=0, tzinfo=self._base.tzinfo
        )

    def _until_string(self) -> str:
        """Format UNTIL for RRULE (UTC when timezone-aware)."""
        until = self._until()
        if until.tzinfo is None:
            return until.strftime("%Y%m%dT%H%M%S")
        return as_utc(until).strftime("%Y%m%dT%H%M%SZ")

    def _weekday_code(self) -> str:
        """Return the RRULE BYDAY code for taken_at's weekday."""
        return _RRULE_WEEKDAY_CODES[self._base.weekday()]

    def _coerce_bound(self, value: date | datetime, end_of_day: bool) -> datetime:
        """Bring a range bound onto taken_at's wall clock."""
        if not isinstance(value, datetime):
            bound_time = time.max.replace(microsecond=0) if end_of_day else time.min
            return datetime.combine(value, bound_time, tzinfo=self._base.tzinfo)
        wall = to_local_wall(value)
        if self._base.tzinfo is None:
            return wall.replace(tzinfo=None)
        if wall.tzinfo is None:
            return wall.replace(tzinfo=self._base.tzinfo)
        return wall.astimezone(self._base.tzinfo)


# =============================================================================
# Module-level convenience functions (stored remedy records)
# =============================================================================


def recurrence_from_remedy(remedy: RemedyData | dict[str, Any]) -> Recurrence | None:
    """Decode the flat recurrence fields of a stored remedy.

    Returns None when recurrence is off, the rule is unrecognized, or the
    end date is missing or unparseable.
    """
    if not remedy.get(const.DATA_REMEDY_HAS_RECURRENCE):
        return None

    return build_recurrence(
        rule=remedy.get(const.DATA_REMEDY_RECURRENCE_RULE),
        end_date=dt_parse_datetime(remedy.get(const.DATA_REMEDY_RECURRENCE_END_DATE)),
        frequency=remedy.get(const.DATA_REMEDY_RECURRENCE_FREQUENCY),
        interval_hours=remedy.get(const.DATA_REMEDY_RECURRENCE_INTERVAL),
    )


def engine_for_remedy(remedy: RemedyData | dict[str, Any]) -> RecurrenceEngine | None:
    """Build a RecurrenceEngine for a stored remedy.

    Returns None if taken_at is missing or unparseable.
    """
    taken_at = dt_parse_datetime(remedy.get(const.DATA_REMEDY_TAKEN_AT))
    if taken_at is None:
        const.LOGGER.warning(
            "engine_for_remedy: Remedy %s has no valid taken_at",
            remedy.get(const.DATA_REMEDY_NAME),
        )
        return None
    return RecurrenceEngine(taken_at, recurrence_from_remedy(remedy))


def has_occurrence_on(
    remedy: RemedyData | dict[str, Any], value: date | datetime
) -> bool:
    """Return True if a stored remedy has an occurrence on the given day."""
    engine = engine_for_remedy(remedy)
    return engine.has_occurrence_on(value) if engine else False


def generate_trigger_schedule(
    remedy: RemedyData | dict[str, Any],
) -> list[TriggerDescriptor]:
    """Build reminder trigger descriptors for a stored remedy.

    Descriptor identifiers are fresh on every call; the caller stores them on
    the remedy (notification_ids) for later cancellation.
    """
    engine = engine_for_remedy(remedy)
    if engine is None or engine.recurrence is None:
        return []

    name = remedy.get(const.DATA_REMEDY_NAME) or const.DISPLAY_UNKNOWN
    potency = remedy.get(const.DATA_REMEDY_POTENCY) or ""
    if potency == const.POTENCY_OTHER and remedy.get(const.DATA_REMEDY_CUSTOM_POTENCY):
        potency = remedy[const.DATA_REMEDY_CUSTOM_POTENCY]
    body = const.NOTIFY_BODY_REMEDY_REMINDER.format(name=name, potency=potency).strip()

    prefix = const.NOTIFY_ID_REMEDY_PREFIX
    if remedy.get(const.DATA_REMEDY_INTERNAL_ID):
        prefix = f"{prefix}_{remedy[const.DATA_REMEDY_INTERNAL_ID]}"

    return engine.generate_trigger_schedule(
        title=const.NOTIFY_TITLE_REMEDY_REMINDER,
        body=body,
        identifier_prefix=prefix,
    )
