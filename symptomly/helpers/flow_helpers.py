"""Helpers for Symptomly form and settings input.

Provides voluptuous schemas and validation wrappers for remedy, symptom and
settings input.

## LAYERS ##

### Layer 1: Schema (this module)
`REMEDY_SCHEMA`, `SYMPTOM_SCHEMA`, `SETTINGS_SCHEMA` check types and ranges
and coerce raw form values (strings, numbers) into typed values.

### Layer 2: UI Validation Wrapper (this module)
`validate_<entity>_inputs(user_input, existing) -> errors_dict` runs the
schema, then delegates business rules to data_builders and maps
EntityValidationError onto a field → error key dict.

### Layer 3: Entity Building (data_builders)
`build_<entity>(data, existing=None)` builds the complete record.

## CALL SITE PATTERN ##
```python
errors = fh.validate_remedy_inputs(user_input)
if not errors:
    remedy = db.build_remedy(fh.REMEDY_SCHEMA(user_input))
```
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import voluptuous as vol

from .. import const
from ..data_builders import EntityValidationError, build_remedy, build_symptom
from ..engines.schedule_engine import normalize_recurrence_rule
from ..utils.dt_utils import dt_parse_datetime

if TYPE_CHECKING:
    from ..type_defs import RemedyData, SymptomData, SymptomlySettings


# ----------------------------------------------------------------------------------
# FIELD VALIDATORS
# ----------------------------------------------------------------------------------


def validate_datetime(value: Any) -> datetime:
    """Coerce a datetime, date or ISO string into an aware datetime.

    Raises:
        vol.Invalid: If the value cannot be parsed
    """
    parsed = dt_parse_datetime(value)
    if parsed is None:
        raise vol.Invalid(f"Invalid date/time: '{value}'")
    return parsed


def validate_duration_unit(value: Any) -> str:
    """Map a unit spelling ("day", "weekOfMonth", ...) to a TIME_UNIT_* value.

    Raises:
        vol.Invalid: If the unit is not recognized
    """
    normalized = const.TIME_UNIT_ALIASES.get(str(value).strip().lower())
    if normalized is None:
        raise vol.Invalid(f"Unknown duration unit: '{value}'")
    return normalized


def validate_recurrence_rule(value: Any) -> str:
    """Map a rule value or display label to a RECURRENCE_* value.

    Raises:
        vol.Invalid: If the rule is not recognized
    """
    normalized = normalize_recurrence_rule(value)
    if normalized is None:
        raise vol.Invalid(f"Unknown recurrence rule: '{value}'")
    return normalized


def validate_time_zone(value: Any) -> str:
    """Check that a value names an IANA timezone.

    Raises:
        vol.Invalid: If zoneinfo cannot load the zone
    """
    try:
        ZoneInfo(str(value))
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise vol.Invalid(f"Unknown time zone: '{value}'") from err
    return str(value)


_OPTIONAL_TEXT = vol.Any(None, vol.Coerce(str))
_OPTIONAL_DATETIME = vol.Any(None, validate_datetime)


# ----------------------------------------------------------------------------------
# SCHEMAS
# ----------------------------------------------------------------------------------

_NAME_VALIDATOR = vol.All(vol.Coerce(str), vol.Strip, vol.Length(min=1))


def build_remedy_schema(require_name: bool = True) -> vol.Schema:
    """Build the remedy input schema (name optional when editing)."""
    name_key = vol.Required if require_name else vol.Optional
    return vol.Schema(
        {
            name_key(const.DATA_REMEDY_NAME): _NAME_VALIDATOR,
            vol.Optional(const.DATA_REMEDY_POTENCY): vol.In(const.POTENCY_OPTIONS),
            vol.Optional(const.DATA_REMEDY_CUSTOM_POTENCY): _OPTIONAL_TEXT,
            vol.Optional(const.DATA_REMEDY_TAKEN_AT): validate_datetime,
            vol.Optional(const.DATA_REMEDY_PRESCRIBED_AT): validate_datetime,
            vol.Optional(const.DATA_REMEDY_WAIT_VALUE): vol.All(
                vol.Coerce(int), vol.Range(min=1)
            ),
            vol.Optional(const.DATA_REMEDY_WAIT_UNIT): validate_duration_unit,
            vol.Optional(const.DATA_REMEDY_DUE_AT): _OPTIONAL_DATETIME,
            vol.Optional(const.DATA_REMEDY_NOTES): _OPTIONAL_TEXT,
            vol.Optional(const.DATA_REMEDY_HAS_RECURRENCE): vol.Boolean(),
            vol.Optional(const.DATA_REMEDY_RECURRENCE_RULE): vol.Any(
                None, validate_recurrence_rule
            ),
            vol.Optional(const.DATA_REMEDY_RECURRENCE_FREQUENCY): vol.Any(
                None,
                vol.All(
                    vol.Coerce(int),
                    vol.Range(
                        min=const.MULTI_DAILY_FREQUENCY_MIN,
                        max=const.MULTI_DAILY_FREQUENCY_MAX,
                    ),
                ),
            ),
            vol.Optional(const.DATA_REMEDY_RECURRENCE_INTERVAL): vol.Any(
                None,
                vol.All(
                    vol.Coerce(int),
                    vol.Range(
                        min=const.MULTI_DAILY_INTERVAL_MIN,
                        max=const.MULTI_DAILY_INTERVAL_MAX,
                    ),
                ),
            ),
            vol.Optional(const.DATA_REMEDY_RECURRENCE_END_DATE): _OPTIONAL_DATETIME,
        }
    )


def build_symptom_schema(require_name: bool = True) -> vol.Schema:
    """Build the symptom input schema (name optional when editing)."""
    name_key = vol.Required if require_name else vol.Optional
    return vol.Schema(
        {
            name_key(const.DATA_SYMPTOM_NAME): _NAME_VALIDATOR,
            vol.Optional(const.DATA_SYMPTOM_SEVERITY): vol.All(
                vol.Coerce(int),
                vol.Range(min=const.SEVERITY_RESOLVED, max=const.SEVERITY_EXTREME),
            ),
            vol.Optional(const.DATA_SYMPTOM_TIMESTAMP): validate_datetime,
            vol.Optional(const.DATA_SYMPTOM_RESOLUTION_DATE): _OPTIONAL_DATETIME,
            vol.Optional(const.DATA_SYMPTOM_NOTES): _OPTIONAL_TEXT,
        }
    )


REMEDY_SCHEMA = build_remedy_schema()
SYMPTOM_SCHEMA = build_symptom_schema()

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.CONF_TIME_ZONE, default=const.DEFAULT_TIME_ZONE_NAME
        ): validate_time_zone,
        vol.Optional(
            const.CONF_REMINDER_ENABLED, default=const.DEFAULT_REMINDER_ENABLED
        ): vol.Boolean(),
        vol.Optional(
            const.CONF_REMINDER_HOUR, default=const.DEFAULT_REMINDER_HOUR
        ): vol.All(vol.Coerce(int), vol.Range(min=0, max=23)),
        vol.Optional(
            const.CONF_REMINDER_MINUTE, default=const.DEFAULT_REMINDER_MINUTE
        ): vol.All(vol.Coerce(int), vol.Range(min=0, max=59)),
    }
)

# Schema failures are reported with the error key of the offending field
_FIELD_ERROR_KEYS: dict[str, str] = {
    const.DATA_REMEDY_NAME: const.ERROR_INVALID_NAME,
    const.DATA_REMEDY_POTENCY: const.ERROR_INVALID_POTENCY,
    const.DATA_REMEDY_TAKEN_AT: const.ERROR_INVALID_TIMESTAMP,
    const.DATA_REMEDY_PRESCRIBED_AT: const.ERROR_INVALID_TIMESTAMP,
    const.DATA_REMEDY_DUE_AT: const.ERROR_INVALID_TIMESTAMP,
    const.DATA_REMEDY_WAIT_VALUE: const.ERROR_INVALID_DURATION,
    const.DATA_REMEDY_WAIT_UNIT: const.ERROR_INVALID_DURATION,
    const.DATA_REMEDY_RECURRENCE_RULE: const.ERROR_INVALID_RECURRENCE,
    const.DATA_REMEDY_RECURRENCE_FREQUENCY: const.ERROR_INVALID_RECURRENCE,
    const.DATA_REMEDY_RECURRENCE_INTERVAL: const.ERROR_INVALID_RECURRENCE,
    const.DATA_REMEDY_RECURRENCE_END_DATE: const.ERROR_INVALID_TIMESTAMP,
    const.DATA_SYMPTOM_SEVERITY: const.ERROR_INVALID_SEVERITY,
    const.DATA_SYMPTOM_TIMESTAMP: const.ERROR_INVALID_TIMESTAMP,
    const.DATA_SYMPTOM_RESOLUTION_DATE: const.ERROR_INVALID_TIMESTAMP,
    const.CONF_TIME_ZONE: const.ERROR_INVALID_TIME_ZONE,
    const.CONF_REMINDER_HOUR: const.ERROR_INVALID_TIME,
    const.CONF_REMINDER_MINUTE: const.ERROR_INVALID_TIME,
}


def _schema_errors(err: vol.MultipleInvalid) -> dict[str, str]:
    """Flatten voluptuous errors into {field: error_key}."""
    errors: dict[str, str] = {}
    for invalid in err.errors:
        field = str(invalid.path[0]) if invalid.path else "base"
        errors.setdefault(
            field, _FIELD_ERROR_KEYS.get(field, const.ERROR_INVALID_INPUT)
        )
    return errors


# ----------------------------------------------------------------------------------
# REMEDIES
# ----------------------------------------------------------------------------------


def default_recurrence_end_date(taken_at: datetime) -> datetime:
    """Return the end date offered when recurrence is switched on."""
    return taken_at + timedelta(days=const.DEFAULT_RECURRENCE_END_DAYS)


def validate_remedy_inputs(
    user_input: dict[str, Any],
    existing: RemedyData | None = None,
) -> dict[str, str]:
    """Validate remedy form input.

    Args:
        user_input: Raw form values with DATA_REMEDY_* keys
        existing: Stored remedy when editing

    Returns:
        Dictionary of errors (empty if validation passes).
    """
    schema = build_remedy_schema(require_name=existing is None)

    try:
        cleaned = schema(user_input)
    except vol.MultipleInvalid as err:
        return _schema_errors(err)

    try:
        build_remedy(cleaned, existing)
    except EntityValidationError as err:
        return {err.field: err.translation_key}

    return {}


# ----------------------------------------------------------------------------------
# SYMPTOMS
# ----------------------------------------------------------------------------------


def validate_symptom_inputs(
    user_input: dict[str, Any],
    existing: SymptomData | None = None,
) -> dict[str, str]:
    """Validate symptom form input.

    Returns:
        Dictionary of errors (empty if validation passes).
    """
    schema = build_symptom_schema(require_name=existing is None)

    try:
        cleaned = schema(user_input)
    except vol.MultipleInvalid as err:
        return _schema_errors(err)

    try:
        build_symptom(cleaned, existing)
    except EntityValidationError as err:
        return {err.field: err.translation_key}

    return {}


# ----------------------------------------------------------------------------------
# SETTINGS
# ----------------------------------------------------------------------------------


def validate_settings_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate settings input.

    Returns:
        Dictionary of errors (empty if validation passes).
    """
    try:
        SETTINGS_SCHEMA(user_input)
    except vol.MultipleInvalid as err:
        return _schema_errors(err)
    return {}


def build_settings_data(user_input: dict[str, Any] | None = None) -> SymptomlySettings:
    """Build complete settings with defaults applied.

    Raises:
        vol.Invalid: If any setting is out of range
    """
    validated = SETTINGS_SCHEMA(dict(user_input or {}))
    return {
        "time_zone": validated[const.CONF_TIME_ZONE],
        "reminder_enabled": validated[const.CONF_REMINDER_ENABLED],
        "reminder_hour": validated[const.CONF_REMINDER_HOUR],
        "reminder_minute": validated[const.CONF_REMINDER_MINUTE],
    }
