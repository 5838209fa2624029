# File: utils/dt_utils.py
"""Date and time utilities for Symptomly.

Pure Python date/time functions. This module must not import from const.py
or any other package module so it can be tested in isolation.

Calendar arithmetic works on local wall-clock time: aware datetimes are
converted to DEFAULT_TIME_ZONE first, naive datetimes are taken as already
local. Results keep the awareness of the input.

Functions:
    - set_default_timezone / get_default_timezone: Configure local timezone
    - dt_today_local, dt_now_local, dt_now_utc: Current date/time helpers
    - as_utc, as_local, start_of_local_day: Timezone conversion
    - to_local_wall, dt_local_date: Local wall-clock views of a value
    - dt_parse_date, dt_parse, dt_format: Input normalization
    - dt_format_short: Human-readable formatting for exports
    - dt_add_interval: Calendar-aware interval addition with month-end clamping
    - dt_elapsed_components: Months/weeks/days/hours between two instants
    - dt_days_between: Whole local calendar days between two values
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from typing import TYPE_CHECKING, NamedTuple
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

TIME_UNIT_MINUTES = "minutes"
TIME_UNIT_HOURS = "hours"
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"
HELPER_RETURN_ISO_DATE = "iso_date"

DISPLAY_UNKNOWN = "Unknown"


class ElapsedComponents(NamedTuple):
    """Calendar components between two instants (all non-negative)."""

    months: int
    weeks: int
    days: int
    hours: int


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during setup to configure the user's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive input is assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive input is assumed to be in UTC.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(dt_obj: datetime | date, tz: ZoneInfo | None = None) -> datetime:
    """Get the start of day (00:00:00) for a value in local timezone.

    Dates and naive datetimes are taken as local; the result is aware.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    day = dt_local_date(dt_obj, tz_info)
    return datetime.combine(day, datetime.min.time(), tzinfo=tz_info)


def to_local_wall(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Return the local wall-clock view of a datetime.

    Naive datetimes are already wall-clock values and pass through unchanged.
    """
    if dt_obj.tzinfo is None:
        return dt_obj
    return as_local(dt_obj, tz)


def dt_local_date(value: date | datetime, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return to_local_wall(value, tz).date()
    return value


def _restore_zone(result: datetime, original: datetime) -> datetime:
    """Give a wall-clock result the same awareness/zone as the original input."""
    if original.tzinfo is None:
        return result
    return result.astimezone(original.tzinfo)


def _align_pair(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """Bring two datetimes onto the same local wall clock for subtraction."""
    start_wall = to_local_wall(start)
    end_wall = to_local_wall(end)
    if (start_wall.tzinfo is None) != (end_wall.tzinfo is None):
        start_wall = start_wall.replace(tzinfo=None)
        end_wall = end_wall.replace(tzinfo=None)
    return start_wall, end_wall


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts ISO ("2025-04-07"), US ("04/07/2025") and slash-ISO ("2025/04/07").
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize various datetime input formats to a consistent format.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)
        return_type: One of the HELPER_RETURN_* constants

    Returns:
        Normalized datetime, date, or string based on return_type, or None if
        the input could not be parsed.

    Example:
        >>> dt_parse("2025-04-15", return_type=HELPER_RETURN_ISO_DATETIME)
        '2025-04-15T00:00:00+00:00'
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input)
        except ValueError:
            parsed_date = dt_parse_date(dt_input)
            if parsed_date:
                result = datetime.combine(parsed_date, datetime.min.time())
            else:
                return None

    elif isinstance(dt_input, datetime):
        result = dt_input

    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())

    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return dt_format(result, return_type)


def dt_parse_datetime(dt_input: str | date | datetime | None) -> datetime | None:
    """Shortcut for dt_parse() that always yields an aware datetime or None."""
    result = dt_parse(dt_input, return_type=HELPER_RETURN_DATETIME)
    return result if isinstance(result, datetime) else None


# ==============================================================================
# Date/Time Formatting
# ==============================================================================


def dt_format(
    dt_obj: datetime,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Format a datetime object according to the specified return_type."""
    if return_type == HELPER_RETURN_DATETIME:
        return dt_obj
    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(dt_obj)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(dt_obj)
    if return_type == HELPER_RETURN_DATE:
        return dt_obj.date()
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return dt_obj.isoformat()
    if return_type == HELPER_RETURN_ISO_DATE:
        return dt_obj.date().isoformat()
    return dt_obj


def dt_format_short(
    dt_obj: datetime | None,
    include_date: bool = False,
) -> str:
    """Format a datetime for timeline exports.

    Returns "14:30" by default, "Jan 16, 14:30" with include_date, or
    "Unknown" if dt_obj is None.
    """
    if dt_obj is None:
        return DISPLAY_UNKNOWN

    local_dt = to_local_wall(dt_obj)
    if include_date:
        return local_dt.strftime("%b %d, %H:%M")
    return local_dt.strftime("%H:%M")


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def dt_add_interval(base_dt: datetime, interval_unit: str, delta: int) -> datetime:
    """Add a calendar interval to a datetime.

    Month arithmetic uses relativedelta, which clamps to the last valid day of
    the target month (Jan 31 + 1 month = Feb 28/29) instead of overflowing.
    Hours are added as elapsed time; days and weeks as wall-clock calendar days.

    Args:
        base_dt: Base datetime (naive = local wall clock).
        interval_unit: TIME_UNIT_* constant.
        delta: Number of units to add (can be negative).

    Returns:
        Resulting datetime with the same awareness as base_dt.

    Examples:
        dt_add_interval(datetime(2024, 1, 1, 10), TIME_UNIT_WEEKS, 1)
        → datetime(2024, 1, 8, 10, 0)

        dt_add_interval(datetime(2024, 1, 31, 9), TIME_UNIT_MONTHS, 1)
        → datetime(2024, 2, 29, 9, 0)
    """
    if interval_unit in (TIME_UNIT_MINUTES, TIME_UNIT_HOURS):
        step = (
            timedelta(minutes=delta)
            if interval_unit == TIME_UNIT_MINUTES
            else timedelta(hours=delta)
        )
        if base_dt.tzinfo is None:
            return base_dt + step
        return _restore_zone(as_utc(base_dt) + step, base_dt)

    wall = to_local_wall(base_dt)

    if interval_unit == TIME_UNIT_DAYS:
        result = wall + relativedelta(days=delta)
    elif interval_unit == TIME_UNIT_WEEKS:
        result = wall + relativedelta(weeks=delta)
    elif interval_unit == TIME_UNIT_MONTHS:
        result = wall + relativedelta(months=delta)
        if result.day != wall.day:
            _LOGGER.debug(
                "dt_add_interval: Clamped %s + %d months to %s",
                wall.isoformat(),
                delta,
                result.isoformat(),
            )
    elif interval_unit == TIME_UNIT_YEARS:
        result = wall + relativedelta(years=delta)
    else:
        _LOGGER.warning(
            "dt_add_interval: Unsupported interval_unit %s, defaulting to days",
            interval_unit,
        )
        result = wall + relativedelta(days=delta)

    return _restore_zone(result, base_dt)


def dt_elapsed_components(start: datetime, end: datetime) -> ElapsedComponents:
    """Split the wall-clock span between two datetimes into calendar components.

    Months absorb whole years; the remaining days are split into weeks and days.
    Minutes and seconds are discarded. A negative span yields all zeros.

    Example:
        dt_elapsed_components(datetime(2024, 1, 1), datetime(2024, 2, 10, 5))
        → ElapsedComponents(months=1, weeks=1, days=2, hours=5)
    """
    start_wall, end_wall = _align_pair(start, end)
    if end_wall <= start_wall:
        return ElapsedComponents(0, 0, 0, 0)

    span = relativedelta(end_wall, start_wall)
    months = span.years * 12 + span.months
    weeks, days = divmod(span.days, 7)
    return ElapsedComponents(months=months, weeks=weeks, days=days, hours=span.hours)


def dt_days_between(start: date | datetime, end: date | datetime) -> int:
    """Return the number of local calendar days from start to end (signed)."""
    return (dt_local_date(end) - dt_local_date(start)).days
