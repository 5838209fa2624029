"""Reporting helper functions for Symptomly exports.

This module provides read-only data shaping for timeline exports that a
journal can share with a practitioner.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import (
    dt_format_short,
    dt_local_date,
    dt_parse_date,
    dt_parse_datetime,
    get_default_timezone,
)
from .timeline_helpers import build_timeline, group_by_day

if TYPE_CHECKING:
    from ..type_defs import (
        RemedyData,
        SymptomData,
        TimelineDayBlock,
        TimelineExportRange,
        TimelineExportResponse,
        TimelineItem,
    )


def resolve_export_range(
    start: str | date | datetime,
    end: str | date | datetime,
) -> TimelineExportRange:
    """Resolve an export range into inclusive local dates.

    Raises:
        ValueError: If a bound cannot be parsed or start is after end
    """
    start_day = _coerce_date(start)
    end_day = _coerce_date(end)
    if start_day is None or end_day is None:
        raise ValueError("Export range requires a valid start and end date")
    if start_day > end_day:
        raise ValueError(
            f"Export range start {start_day.isoformat()} is after end {end_day.isoformat()}"
        )

    return {
        "start_date": start_day.isoformat(),
        "end_date": end_day.isoformat(),
        "timezone": str(get_default_timezone()),
    }


def build_timeline_export(
    symptoms: Iterable[SymptomData],
    remedies: Iterable[RemedyData],
    start: str | date | datetime,
    end: str | date | datetime,
    title: str | None = None,
) -> TimelineExportResponse:
    """Build a markdown timeline export for an inclusive day range.

    Days without entries are left out; days are listed newest first.

    Raises:
        ValueError: If the range is invalid
    """
    range_result = resolve_export_range(start, end)
    start_day = date.fromisoformat(range_result["start_date"])
    end_day = date.fromisoformat(range_result["end_date"])

    items = build_timeline(symptoms, remedies, start_day, end_day)

    daily_blocks: list[TimelineDayBlock] = []
    symptom_count = 0
    remedy_count = 0
    for day, day_items in group_by_day(items).items():
        day_symptoms = sum(
            1 for item in day_items if item["kind"] == const.TIMELINE_KIND_SYMPTOM
        )
        day_remedies = len(day_items) - day_symptoms
        symptom_count += day_symptoms
        remedy_count += day_remedies

        lines = [f"### {day.isoformat()}"]
        lines.extend(_render_item(item) for item in day_items)
        daily_blocks.append(
            {
                "date": day.isoformat(),
                "symptoms": day_symptoms,
                "remedies": day_remedies,
                "markdown_section": "\n".join(lines),
            }
        )

    const.LOGGER.debug(
        "build_timeline_export: %d symptom(s), %d remedy(ies) over %d day(s)",
        symptom_count,
        remedy_count,
        len(daily_blocks),
    )

    return {
        "range": range_result,
        "summary": {
            "symptoms": symptom_count,
            "remedies": remedy_count,
            "days_with_entries": len(daily_blocks),
        },
        "daily": daily_blocks,
        "markdown": _render_export_markdown(title, range_result, daily_blocks),
    }


def _coerce_date(value: str | date | datetime | None) -> date | None:
    """Coerce date-like values to a local calendar date."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return dt_local_date(value)
    parsed_date = dt_parse_date(value)
    if parsed_date is not None:
        return parsed_date
    parsed = dt_parse_datetime(value)
    return dt_local_date(parsed) if parsed is not None else None


def _render_item(item: TimelineItem) -> str:
    """Render one timeline entry as a markdown bullet."""
    kind = "Symptom" if item["kind"] == const.TIMELINE_KIND_SYMPTOM else "Remedy"
    moment = dt_parse_datetime(item["timestamp"])
    return f"- {dt_format_short(moment)} {kind}: {item['name']} ({item['details']})"


def _render_export_markdown(
    title: str | None,
    range_result: TimelineExportRange,
    daily_blocks: list[TimelineDayBlock],
) -> str:
    """Render markdown export from daily blocks."""
    lines = [
        f"# {title or const.EXPORT_DEFAULT_TITLE}",
        "",
        f"Range: {range_result['start_date']} to {range_result['end_date']}",
        "",
    ]

    if not daily_blocks:
        lines.append(const.EXPORT_EMPTY_MESSAGE)
        return "\n".join(lines)

    for block in daily_blocks:
        lines.append(block["markdown_section"])
        lines.append("")

    return "\n".join(lines).strip()
