"""Entity lifecycle management helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Remedy and symptom field defaults
- Business rule validation at the storage boundary
- Complete record structure building

## Build Functions
Each entity type has a `build_<entity>()` function that:
- Takes user_input with DATA_* keys (form and service keys are aligned)
- Generates internal_id (UUID) for new entities
- Applies field defaults
- Returns a complete record ready for storage

Remedy due dates are derived through the effectiveness reducer, so the same
rules apply here as in an interactive form: a potency change applies its
default wait period, a duration recomputes the due date, and an explicit
due date is kept exactly while its duration is re-derived.

Consumers:
- helpers/flow_helpers.py (input validation for forms)
- helpers/timeline_helpers.py (display values)
- managers/notification_manager.py (via schedule_engine)

See Also:
- type_defs.py: TypedDict definitions for stored records
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
import uuid

from . import const
from .engines.effectiveness_engine import (
    EffectivenessWindow,
    SelectPotency,
    SetDueDate,
    SetDuration,
    SetTakenAt,
    reduce_window,
)
from .engines.schedule_engine import (
    clamp_multi_daily_frequency,
    clamp_multi_daily_interval,
    normalize_recurrence_rule,
    recurrence_from_remedy,
)
from .type_defs import RemedyData, SymptomData
from .utils.dt_utils import (
    HELPER_RETURN_ISO_DATETIME,
    dt_local_date,
    dt_now_local,
    dt_parse,
    dt_parse_datetime,
)

__all__ = [
    "EntityValidationError",
    "build_remedy",
    "build_symptom",
    "display_potency",
    "is_remedy_active",
    "mark_symptom_resolved",
    "recurrence_from_remedy",
    "reopen_symptom",
]

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _normalize_notes(value: Any) -> str | None:
    """Strip notes; blank notes are stored as None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_iso(value: datetime | date | str | None) -> str | None:
    """Serialize a datetime-like value for storage (naive = local time)."""
    result = dt_parse(value, return_type=HELPER_RETURN_ISO_DATETIME)
    return result if isinstance(result, str) else None


def _parse_required_datetime(field: str, value: Any) -> datetime:
    """Parse a datetime field, raising EntityValidationError when invalid."""
    parsed = dt_parse_datetime(value)
    if parsed is None:
        raise EntityValidationError(
            field=field,
            translation_key=const.ERROR_INVALID_TIMESTAMP,
            placeholders={"value": str(value)},
        )
    return parsed


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class EntityValidationError(Exception):
    """Validation error with field-specific information for form highlighting.

    Attributes:
        field: The DATA_* constant identifying the field that failed
        translation_key: The ERROR_* constant for the error message
        placeholders: Optional dict for message placeholders

    Example:
        raise EntityValidationError(
            field=const.DATA_SYMPTOM_SEVERITY,
            translation_key=const.ERROR_INVALID_SEVERITY,
            placeholders={"value": "9"},
        )
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize EntityValidationError.

        Args:
            field: The DATA_* constant for the field that failed validation
            translation_key: The ERROR_* constant for error message
            placeholders: Optional dict for message placeholders
        """
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


# ==============================================================================
# REMEDIES
# ==============================================================================


def build_remedy(
    user_input: dict[str, Any],
    existing: RemedyData | None = None,
) -> RemedyData:
    """Build remedy data for create or update operations.

    One function handles both create (existing=None) and update
    (existing=RemedyData). Fields missing from user_input keep their existing
    value on update and fall back to defaults on create.

    Args:
        user_input: Data with DATA_REMEDY_* keys (may have missing fields)
        existing: None for create, existing RemedyData for update

    Returns:
        Complete RemedyData ready for storage. notification_ids are carried
        over; refresh them with NotificationManager.schedule_remedy_reminders().

    Raises:
        EntityValidationError: Empty name, unparseable timestamps, a due date
            before taken_at, or recurrence enabled without a rule, without an
            end date, or with an end date before taken_at.

    Examples:
        # CREATE - 30C applies a one-week wait-and-watch period
        remedy = build_remedy({DATA_REMEDY_NAME: "Arnica montana",
                               DATA_REMEDY_TAKEN_AT: "2024-01-01T10:00:00"})

        # UPDATE - explicit due date is kept, duration re-derived
        remedy = build_remedy({DATA_REMEDY_DUE_AT: "2024-01-03T10:00:00"},
                              existing=remedy)
    """
    is_create = existing is None

    def get_field(data_key: str, default: Any) -> Any:
        """Get field value: user_input > existing > default."""
        if data_key in user_input:
            return user_input[data_key]
        if existing is not None:
            return existing.get(data_key, default)
        return default

    # --- Name validation (required for create, optional for update) ---
    raw_name = get_field(const.DATA_REMEDY_NAME, "")
    name = str(raw_name).strip() if raw_name else ""
    if not name:
        raise EntityValidationError(
            field=const.DATA_REMEDY_NAME,
            translation_key=const.ERROR_INVALID_NAME,
        )

    potency = str(get_field(const.DATA_REMEDY_POTENCY, const.DEFAULT_POTENCY))
    custom_potency = _normalize_notes(get_field(const.DATA_REMEDY_CUSTOM_POTENCY, None))
    if potency != const.POTENCY_OTHER:
        custom_potency = None

    # --- Effectiveness window ---
    raw_taken = get_field(const.DATA_REMEDY_TAKEN_AT, None)
    taken_at = (
        _parse_required_datetime(const.DATA_REMEDY_TAKEN_AT, raw_taken)
        if raw_taken is not None
        else dt_now_local()
    )

    window: EffectivenessWindow
    existing_due = (
        dt_parse_datetime(existing.get(const.DATA_REMEDY_DUE_AT))
        if existing is not None
        else None
    )
    if existing is None or existing_due is None:
        window = EffectivenessWindow.for_potency(taken_at, potency)
    else:
        existing_taken = (
            dt_parse_datetime(existing.get(const.DATA_REMEDY_TAKEN_AT)) or taken_at
        )
        if existing.get(const.DATA_REMEDY_WAIT_VALUE) and existing.get(
            const.DATA_REMEDY_WAIT_UNIT
        ):
            window = EffectivenessWindow(
                taken_at=existing_taken,
                value=int(existing[const.DATA_REMEDY_WAIT_VALUE]),
                unit=str(existing[const.DATA_REMEDY_WAIT_UNIT]),
                due_at=existing_due,
            )
        else:
            window = EffectivenessWindow.from_due_date(existing_taken, existing_due)
        if (
            const.DATA_REMEDY_POTENCY in user_input
            and potency != existing.get(const.DATA_REMEDY_POTENCY)
        ):
            window = reduce_window(window, SelectPotency(potency))
        if taken_at != window.taken_at:
            window = reduce_window(window, SetTakenAt(taken_at))

    # Unchanged form values must not overwrite an exact due date
    raw_value = user_input.get(const.DATA_REMEDY_WAIT_VALUE)
    raw_unit = user_input.get(const.DATA_REMEDY_WAIT_UNIT)
    if raw_value is not None or raw_unit is not None:
        try:
            new_value = int(raw_value) if raw_value is not None else window.value
        except (TypeError, ValueError) as err:
            raise EntityValidationError(
                field=const.DATA_REMEDY_WAIT_VALUE,
                translation_key=const.ERROR_INVALID_DURATION,
                placeholders={"value": str(raw_value)},
            ) from err
        new_unit = str(raw_unit) if raw_unit is not None else window.unit
        if (new_value, new_unit) != (window.value, window.unit):
            window = reduce_window(window, SetDuration(new_value, new_unit))

    if user_input.get(const.DATA_REMEDY_DUE_AT) is not None:
        due_at = _parse_required_datetime(
            const.DATA_REMEDY_DUE_AT, user_input[const.DATA_REMEDY_DUE_AT]
        )
        if due_at < window.taken_at:
            raise EntityValidationError(
                field=const.DATA_REMEDY_DUE_AT,
                translation_key=const.ERROR_DUE_BEFORE_TAKEN,
            )
        window = reduce_window(window, SetDueDate(due_at))

    raw_prescribed = get_field(const.DATA_REMEDY_PRESCRIBED_AT, None)
    prescribed_at = (
        _parse_required_datetime(const.DATA_REMEDY_PRESCRIBED_AT, raw_prescribed)
        if raw_prescribed is not None
        else window.taken_at
    )

    # --- Recurrence ---
    has_recurrence = bool(get_field(const.DATA_REMEDY_HAS_RECURRENCE, False))
    rule: str | None = None
    end_date: datetime | None = None
    frequency: int | None = None
    interval: int | None = None

    if has_recurrence:
        rule = normalize_recurrence_rule(
            get_field(const.DATA_REMEDY_RECURRENCE_RULE, None)
        )
        if rule is None:
            raise EntityValidationError(
                field=const.DATA_REMEDY_RECURRENCE_RULE,
                translation_key=const.ERROR_RECURRENCE_RULE_REQUIRED,
            )

        raw_end = get_field(const.DATA_REMEDY_RECURRENCE_END_DATE, None)
        if raw_end is None:
            raise EntityValidationError(
                field=const.DATA_REMEDY_RECURRENCE_END_DATE,
                translation_key=const.ERROR_RECURRENCE_END_REQUIRED,
            )
        end_date = _parse_required_datetime(
            const.DATA_REMEDY_RECURRENCE_END_DATE, raw_end
        )
        if dt_local_date(end_date) < dt_local_date(window.taken_at):
            raise EntityValidationError(
                field=const.DATA_REMEDY_RECURRENCE_END_DATE,
                translation_key=const.ERROR_RECURRENCE_END_BEFORE_TAKEN,
                placeholders={"end_date": end_date.date().isoformat()},
            )

        if rule == const.RECURRENCE_MULTIPLE_TIMES_PER_DAY:
            raw_frequency = (
                get_field(const.DATA_REMEDY_RECURRENCE_FREQUENCY, None)
                or const.DEFAULT_MULTI_DAILY_FREQUENCY
            )
            try:
                frequency = clamp_multi_daily_frequency(raw_frequency)
            except (TypeError, ValueError) as err:
                raise EntityValidationError(
                    field=const.DATA_REMEDY_RECURRENCE_FREQUENCY,
                    translation_key=const.ERROR_INVALID_RECURRENCE,
                    placeholders={"value": str(raw_frequency)},
                ) from err

            raw_interval = (
                get_field(const.DATA_REMEDY_RECURRENCE_INTERVAL, None)
                or const.DEFAULT_MULTI_DAILY_INTERVAL
            )
            try:
                interval = clamp_multi_daily_interval(raw_interval)
            except (TypeError, ValueError) as err:
                raise EntityValidationError(
                    field=const.DATA_REMEDY_RECURRENCE_INTERVAL,
                    translation_key=const.ERROR_INVALID_RECURRENCE,
                    placeholders={"value": str(raw_interval)},
                ) from err

    # --- Build complete remedy structure ---
    if is_create or existing is None:
        internal_id = str(uuid.uuid4())
    else:
        internal_id = existing.get(const.DATA_REMEDY_INTERNAL_ID, str(uuid.uuid4()))

    return RemedyData(
        internal_id=internal_id,
        name=name,
        potency=potency,
        custom_potency=custom_potency,
        taken_at=_to_iso(window.taken_at) or "",
        prescribed_at=_to_iso(prescribed_at) or "",
        wait_value=window.value,
        wait_unit=window.unit,
        due_at=_to_iso(window.due_at) or "",
        notes=_normalize_notes(get_field(const.DATA_REMEDY_NOTES, None)),
        has_recurrence=has_recurrence,
        recurrence_rule=rule,
        recurrence_frequency=frequency,
        recurrence_interval=interval,
        recurrence_end_date=_to_iso(end_date),
        notification_ids=list(get_field(const.DATA_REMEDY_NOTIFICATION_IDS, []) or []),
    )


def display_potency(remedy: RemedyData | dict[str, Any]) -> str:
    """Return the potency shown to the user (custom text for "Other")."""
    potency = remedy.get(const.DATA_REMEDY_POTENCY) or ""
    custom = remedy.get(const.DATA_REMEDY_CUSTOM_POTENCY)
    if potency == const.POTENCY_OTHER and custom:
        return str(custom)
    return str(potency)


def is_remedy_active(
    remedy: RemedyData | dict[str, Any],
    at: datetime | None = None,
) -> bool:
    """Return True while `at` (default now) is inside the wait-and-watch window."""
    taken_at = dt_parse_datetime(remedy.get(const.DATA_REMEDY_TAKEN_AT))
    due_at = dt_parse_datetime(remedy.get(const.DATA_REMEDY_DUE_AT))
    moment = dt_parse_datetime(at) if at is not None else dt_now_local()
    if taken_at is None or due_at is None or moment is None:
        return False
    return taken_at <= moment <= due_at


# ==============================================================================
# SYMPTOMS
# ==============================================================================


def build_symptom(
    user_input: dict[str, Any],
    existing: SymptomData | None = None,
) -> SymptomData:
    """Build symptom data for create or update operations.

    Severity 0 marks the symptom resolved; a resolved symptom always carries
    a resolution_date (now when not given), an unresolved one never does.

    Raises:
        EntityValidationError: Empty name, severity outside 0-5, or
            unparseable timestamps
    """
    is_create = existing is None

    def get_field(data_key: str, default: Any) -> Any:
        """Get field value: user_input > existing > default."""
        if data_key in user_input:
            return user_input[data_key]
        if existing is not None:
            return existing.get(data_key, default)
        return default

    raw_name = get_field(const.DATA_SYMPTOM_NAME, "")
    name = str(raw_name).strip() if raw_name else ""
    if not name:
        raise EntityValidationError(
            field=const.DATA_SYMPTOM_NAME,
            translation_key=const.ERROR_INVALID_NAME,
        )

    raw_severity = get_field(const.DATA_SYMPTOM_SEVERITY, const.DEFAULT_SEVERITY)
    try:
        severity = int(raw_severity)
    except (TypeError, ValueError):
        severity = -1
    if severity not in const.SEVERITY_LABELS:
        raise EntityValidationError(
            field=const.DATA_SYMPTOM_SEVERITY,
            translation_key=const.ERROR_INVALID_SEVERITY,
            placeholders={"value": str(raw_severity)},
        )

    raw_timestamp = get_field(const.DATA_SYMPTOM_TIMESTAMP, None)
    timestamp = (
        _parse_required_datetime(const.DATA_SYMPTOM_TIMESTAMP, raw_timestamp)
        if raw_timestamp is not None
        else dt_now_local()
    )

    resolution_date: datetime | None = None
    if severity == const.SEVERITY_RESOLVED:
        raw_resolution = get_field(const.DATA_SYMPTOM_RESOLUTION_DATE, None)
        resolution_date = (
            _parse_required_datetime(const.DATA_SYMPTOM_RESOLUTION_DATE, raw_resolution)
            if raw_resolution is not None
            else dt_now_local()
        )

    if is_create or existing is None:
        internal_id = str(uuid.uuid4())
    else:
        internal_id = existing.get(const.DATA_SYMPTOM_INTERNAL_ID, str(uuid.uuid4()))

    return SymptomData(
        internal_id=internal_id,
        name=name,
        severity=severity,
        timestamp=_to_iso(timestamp) or "",
        resolution_date=_to_iso(resolution_date),
        notes=_normalize_notes(get_field(const.DATA_SYMPTOM_NOTES, None)),
    )


def mark_symptom_resolved(
    symptom: SymptomData,
    resolution_date: datetime | None = None,
    notes: str | None = None,
) -> SymptomData:
    """Return a resolved copy of a symptom."""
    user_input: dict[str, Any] = {
        const.DATA_SYMPTOM_SEVERITY: const.SEVERITY_RESOLVED,
        const.DATA_SYMPTOM_RESOLUTION_DATE: resolution_date or dt_now_local(),
    }
    if notes is not None:
        user_input[const.DATA_SYMPTOM_NOTES] = notes
    return build_symptom(user_input, existing=symptom)


def reopen_symptom(symptom: SymptomData) -> SymptomData:
    """Return an unresolved copy of a symptom at Mild severity."""
    return build_symptom(
        {
            const.DATA_SYMPTOM_SEVERITY: const.SEVERITY_MILD,
            const.DATA_SYMPTOM_RESOLUTION_DATE: None,
        },
        existing=symptom,
    )
