"""Timeline and search helpers for Symptomly.

Read-only projections over stored symptoms and remedies:
- Combined chronological timeline (newest first)
- Free-text and kind filtering
- Grouping by local calendar day
- Remedies scheduled on a given day
- Remedy name suggestions
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..data_builders import display_potency
from ..engines.schedule_engine import has_occurrence_on
from ..predefined_data import PREDEFINED_REMEDY_NAMES
from ..utils.dt_utils import dt_local_date, dt_parse_datetime

if TYPE_CHECKING:
    from ..type_defs import RemedyData, SymptomData, TimelineItem


def _with_notes(details: str, notes: str | None) -> str:
    return f"{details} - {notes}" if notes else details


def symptom_details(symptom: SymptomData | dict[str, Any]) -> str:
    """Return the timeline detail line for a symptom.

    "Severity: Moderate - notes", or "Resolved - notes" for severity 0.
    """
    severity = symptom.get(const.DATA_SYMPTOM_SEVERITY)
    label = const.SEVERITY_LABELS.get(severity, const.DISPLAY_UNKNOWN)  # type: ignore[arg-type]
    details = label if severity == const.SEVERITY_RESOLVED else f"Severity: {label}"
    return _with_notes(details, symptom.get(const.DATA_SYMPTOM_NOTES))


def remedy_details(remedy: RemedyData | dict[str, Any]) -> str:
    """Return the timeline detail line for a remedy ("Potency: 30C - notes")."""
    return _with_notes(
        f"Potency: {display_potency(remedy)}", remedy.get(const.DATA_REMEDY_NOTES)
    )


def _in_range(
    moment: datetime, start: date | datetime | None, end: date | datetime | None
) -> bool:
    """Inclusive range check; dates compare on the local calendar day."""
    if start is not None:
        if isinstance(start, datetime):
            bound = dt_parse_datetime(start)
            if bound is not None and moment < bound:
                return False
        elif dt_local_date(moment) < start:
            return False
    if end is not None:
        if isinstance(end, datetime):
            bound = dt_parse_datetime(end)
            if bound is not None and moment > bound:
                return False
        elif dt_local_date(moment) > end:
            return False
    return True


def build_timeline(
    symptoms: Iterable[SymptomData],
    remedies: Iterable[RemedyData],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[TimelineItem]:
    """Merge symptoms and remedies into one timeline, newest first.

    Records with an unparseable timestamp are skipped with a warning.

    Args:
        symptoms: Stored symptom records
        remedies: Stored remedy records (placed at taken_at)
        start: Optional inclusive lower bound
        end: Optional inclusive upper bound
    """
    entries: list[tuple[datetime, TimelineItem]] = []

    for symptom in symptoms:
        moment = dt_parse_datetime(symptom.get(const.DATA_SYMPTOM_TIMESTAMP))
        if moment is None:
            const.LOGGER.warning(
                "build_timeline: Skipping symptom %s without a valid timestamp",
                symptom.get(const.DATA_SYMPTOM_INTERNAL_ID),
            )
            continue
        if not _in_range(moment, start, end):
            continue
        entries.append(
            (
                moment,
                {
                    "item_id": symptom.get(const.DATA_SYMPTOM_INTERNAL_ID, ""),
                    "kind": const.TIMELINE_KIND_SYMPTOM,
                    "timestamp": moment.isoformat(),
                    "name": symptom.get(const.DATA_SYMPTOM_NAME, ""),
                    "details": symptom_details(symptom),
                },
            )
        )

    for remedy in remedies:
        moment = dt_parse_datetime(remedy.get(const.DATA_REMEDY_TAKEN_AT))
        if moment is None:
            const.LOGGER.warning(
                "build_timeline: Skipping remedy %s without a valid taken_at",
                remedy.get(const.DATA_REMEDY_INTERNAL_ID),
            )
            continue
        if not _in_range(moment, start, end):
            continue
        entries.append(
            (
                moment,
                {
                    "item_id": remedy.get(const.DATA_REMEDY_INTERNAL_ID, ""),
                    "kind": const.TIMELINE_KIND_REMEDY,
                    "timestamp": moment.isoformat(),
                    "name": remedy.get(const.DATA_REMEDY_NAME, ""),
                    "details": remedy_details(remedy),
                },
            )
        )

    entries.sort(key=lambda entry: entry[0], reverse=True)
    return [item for _, item in entries]


def filter_timeline(
    items: Iterable[TimelineItem],
    query: str = "",
    kinds: Iterable[str] | None = None,
) -> list[TimelineItem]:
    """Filter timeline items by search text and kind.

    The query matches name or details case-insensitively; an empty query
    matches everything. kinds=None keeps every kind.
    """
    needle = query.strip().lower()
    allowed = set(kinds) if kinds is not None else None

    return [
        item
        for item in items
        if (allowed is None or item["kind"] in allowed)
        and (
            not needle
            or needle in item["name"].lower()
            or needle in item["details"].lower()
        )
    ]


def group_by_day(items: Iterable[TimelineItem]) -> dict[date, list[TimelineItem]]:
    """Group timeline items by local calendar day, keeping input order."""
    groups: dict[date, list[TimelineItem]] = {}
    for item in items:
        moment = dt_parse_datetime(item["timestamp"])
        if moment is None:
            continue
        groups.setdefault(dt_local_date(moment), []).append(item)
    return groups


def remedies_on_day(
    remedies: Iterable[RemedyData], day: date | datetime
) -> list[RemedyData]:
    """Return remedies with an occurrence on the given day."""
    return [remedy for remedy in remedies if has_occurrence_on(remedy, day)]


def suggest_remedy_names(
    query: str,
    existing_names: Iterable[str] = (),
) -> list[str]:
    """Suggest remedy names for a partially typed name.

    Combines the user's own remedy names with the predefined list, matches
    case-insensitively anywhere in the name, and leaves out an exact match
    of the query itself. Empty queries suggest nothing.

    Example:
        suggest_remedy_names("arni") → ["Arnica montana"]
    """
    needle = query.strip().lower()
    if not needle:
        return []

    candidates = {name.strip() for name in existing_names if name and name.strip()}
    candidates.update(PREDEFINED_REMEDY_NAMES)

    return sorted(
        (
            name
            for name in candidates
            if needle in name.lower() and name.lower() != needle
        ),
        key=str.lower,
    )
