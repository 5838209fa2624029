"""Unit tests for dt_utils date/time helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from freezegun import freeze_time
import pytest

from symptomly.utils import dt_utils
from symptomly.utils.dt_utils import (
    HELPER_RETURN_DATE,
    HELPER_RETURN_ISO_DATE,
    HELPER_RETURN_ISO_DATETIME,
    ElapsedComponents,
    as_local,
    as_utc,
    dt_add_interval,
    dt_days_between,
    dt_elapsed_components,
    dt_format_short,
    dt_local_date,
    dt_now_local,
    dt_parse,
    dt_parse_date,
    dt_today_local,
    start_of_local_day,
)

# =============================================================================
# Current time and conversion
# =============================================================================


class TestNowAndConversion:
    """Clock helpers and timezone conversion."""

    @freeze_time("2024-06-30 22:30:00")
    def test_today_follows_default_zone(self, berlin_tz: ZoneInfo) -> None:
        """22:30 UTC is already tomorrow in Berlin (CEST)."""
        assert dt_today_local() == date(2024, 7, 1)
        assert dt_now_local().tzinfo == berlin_tz
        assert dt_today_local(ZoneInfo("UTC")) == date(2024, 6, 30)

    def test_as_utc_naive_is_local(self, berlin_tz: ZoneInfo) -> None:
        """Naive input to as_utc is taken as local time."""
        assert as_utc(datetime(2024, 1, 15, 12)) == datetime(2024, 1, 15, 11, tzinfo=UTC)

    def test_as_local_naive_is_utc(self, berlin_tz: ZoneInfo) -> None:
        """Naive input to as_local is taken as UTC."""
        assert as_local(datetime(2024, 1, 15, 12)).hour == 13

    def test_start_of_local_day(self, berlin_tz: ZoneInfo) -> None:
        """Start of day is local midnight, aware."""
        result = start_of_local_day(datetime(2024, 1, 15, 23, 30, tzinfo=UTC))
        assert result == datetime(2024, 1, 16, tzinfo=berlin_tz)

    def test_local_date_and_days_between(self, berlin_tz: ZoneInfo) -> None:
        """Calendar days are counted on the local wall clock."""
        late = datetime(2024, 1, 15, 23, 30, tzinfo=UTC)
        assert dt_local_date(late) == date(2024, 1, 16)
        assert dt_days_between(date(2024, 1, 14), late) == 2
        assert dt_days_between(late, date(2024, 1, 14)) == -2

    def test_set_default_timezone(self) -> None:
        """The configured zone is returned by get_default_timezone."""
        dt_utils.set_default_timezone(ZoneInfo("Asia/Tokyo"))
        assert str(dt_utils.get_default_timezone()) == "Asia/Tokyo"


# =============================================================================
# Parsing and formatting
# =============================================================================


class TestParsing:
    """dt_parse / dt_parse_date / dt_format_short."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2025-04-07", date(2025, 4, 7)),
            ("04/07/2025", date(2025, 4, 7)),
            ("2025/04/07", date(2025, 4, 7)),
            ("nope", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_date(self, raw: str | None, expected: date | None) -> None:
        """Supported date formats."""
        assert dt_parse_date(raw) == expected

    def test_parse_return_types(self) -> None:
        """Naive values get the default zone; return_type shapes the output."""
        assert (
            dt_parse("2025-04-15", return_type=HELPER_RETURN_ISO_DATETIME)
            == "2025-04-15T00:00:00+00:00"
        )
        assert dt_parse("2025-04-15T10:00:00+02:00", return_type=HELPER_RETURN_DATE) == (
            date(2025, 4, 15)
        )
        assert dt_parse(date(2025, 4, 15), return_type=HELPER_RETURN_ISO_DATE) == (
            "2025-04-15"
        )
        assert dt_parse("garbage") is None

    def test_format_short(self, berlin_tz: ZoneInfo) -> None:
        """Short format renders local wall-clock time."""
        moment = datetime(2024, 1, 16, 13, 5, tzinfo=UTC)
        assert dt_format_short(moment) == "14:05"
        assert dt_format_short(moment, include_date=True) == "Jan 16, 14:05"
        assert dt_format_short(None) == "Unknown"


# =============================================================================
# Calendar arithmetic
# =============================================================================


class TestCalendarArithmetic:
    """dt_add_interval / dt_elapsed_components."""

    def test_month_clamp(self) -> None:
        """Jan 31 + 1 month is the last day of February."""
        assert dt_add_interval(
            datetime(2024, 1, 31, 9), dt_utils.TIME_UNIT_MONTHS, 1
        ) == datetime(2024, 2, 29, 9)

    def test_days_keep_wall_clock_across_dst(self, berlin_tz: ZoneInfo) -> None:
        """Calendar days keep the local time; hours are elapsed time."""
        base = datetime(2024, 3, 30, 12, tzinfo=berlin_tz)
        next_day = dt_add_interval(base, dt_utils.TIME_UNIT_DAYS, 1)
        assert next_day.astimezone(berlin_tz).hour == 12

        plus_24h = dt_add_interval(base, dt_utils.TIME_UNIT_HOURS, 24)
        assert plus_24h.astimezone(berlin_tz).hour == 13

    def test_unknown_unit_defaults_to_days(self) -> None:
        """Unsupported units fall back to days."""
        assert dt_add_interval(datetime(2024, 1, 1), "fortnights", 2) == datetime(
            2024, 1, 3
        )

    def test_elapsed_components(self) -> None:
        """Span split into months, weeks, days and hours."""
        assert dt_elapsed_components(
            datetime(2024, 1, 1), datetime(2024, 2, 10, 5, 59)
        ) == ElapsedComponents(months=1, weeks=1, days=2, hours=5)
        assert dt_elapsed_components(
            datetime(2024, 2, 1), datetime(2024, 1, 1)
        ) == ElapsedComponents(0, 0, 0, 0)
