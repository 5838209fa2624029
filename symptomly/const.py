# File: const.py
"""Constants for the Symptomly journaling core.

This file centralizes storage keys, defaults, labels, lookup tables and
scheduling limits for consistency across engines, managers and helpers.
"""

import logging

# Logger
LOGGER = logging.getLogger(__package__)

# Safety limits
MAX_DATE_CALCULATION_ITERATIONS = 100
DEFAULT_OCCURRENCE_LIMIT = 500

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# ------------------------------------------------------------------------------------------------
# Potency
# ------------------------------------------------------------------------------------------------
POTENCY_6C = "6C"
POTENCY_30C = "30C"
POTENCY_200C = "200C"
POTENCY_1M = "1M"
POTENCY_OTHER = "Other"

POTENCY_OPTIONS = [
    POTENCY_6C,
    POTENCY_30C,
    POTENCY_200C,
    POTENCY_1M,
    POTENCY_OTHER,
]

DEFAULT_POTENCY = POTENCY_30C

# ------------------------------------------------------------------------------------------------
# Duration Units
# ------------------------------------------------------------------------------------------------
TIME_UNIT_HOURS = "hours"
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"

# Accepted spellings for each unit (calendar component names included)
TIME_UNIT_ALIASES: dict[str, str] = {
    "hour": TIME_UNIT_HOURS,
    "hours": TIME_UNIT_HOURS,
    "day": TIME_UNIT_DAYS,
    "days": TIME_UNIT_DAYS,
    "week": TIME_UNIT_WEEKS,
    "weeks": TIME_UNIT_WEEKS,
    "weekofmonth": TIME_UNIT_WEEKS,
    "weekofyear": TIME_UNIT_WEEKS,
    "month": TIME_UNIT_MONTHS,
    "months": TIME_UNIT_MONTHS,
}

# Fixed approximations, not calendar-exact
HOURS_PER_DAY = 24
HOURS_PER_WEEK = 7 * HOURS_PER_DAY
HOURS_PER_MONTH = 30 * HOURS_PER_DAY

HOURS_PER_UNIT: dict[str, int] = {
    TIME_UNIT_HOURS: 1,
    TIME_UNIT_DAYS: HOURS_PER_DAY,
    TIME_UNIT_WEEKS: HOURS_PER_WEEK,
    TIME_UNIT_MONTHS: HOURS_PER_MONTH,
}

# Allowed wait-and-watch value per unit (inclusive)
DURATION_VALUE_RANGES: dict[str, tuple[int, int]] = {
    TIME_UNIT_HOURS: (1, 72),
    TIME_UNIT_DAYS: (1, 180),
    TIME_UNIT_WEEKS: (1, 52),
    TIME_UNIT_MONTHS: (1, 24),
}

# Best-unit break points, in hours (inclusive upper bounds)
BEST_UNIT_MAX_HOURS = 48
BEST_UNIT_MAX_DAYS_AS_HOURS = 180 * HOURS_PER_DAY
BEST_UNIT_MAX_WEEKS_AS_HOURS = 52 * HOURS_PER_WEEK

# Default wait-and-watch period by potency: (value, unit)
POTENCY_DEFAULT_WAIT_PERIODS: dict[str, tuple[int, str]] = {
    POTENCY_6C: (1, TIME_UNIT_DAYS),
    POTENCY_30C: (1, TIME_UNIT_WEEKS),
    POTENCY_200C: (1, TIME_UNIT_MONTHS),
    POTENCY_1M: (2, TIME_UNIT_MONTHS),
    POTENCY_OTHER: (1, TIME_UNIT_WEEKS),
}
DEFAULT_WAIT_PERIOD: tuple[int, str] = (1, TIME_UNIT_WEEKS)

# ------------------------------------------------------------------------------------------------
# Recurrence
# ------------------------------------------------------------------------------------------------
RECURRENCE_DAILY = "daily"
RECURRENCE_MULTIPLE_TIMES_PER_DAY = "multiple_times_per_day"
RECURRENCE_EVERY_OTHER_DAY = "every_other_day"
RECURRENCE_WEEKLY = "weekly"
RECURRENCE_BIWEEKLY = "biweekly"
RECURRENCE_MONTHLY = "monthly"

RECURRENCE_RULE_OPTIONS = [
    RECURRENCE_DAILY,
    RECURRENCE_MULTIPLE_TIMES_PER_DAY,
    RECURRENCE_EVERY_OTHER_DAY,
    RECURRENCE_WEEKLY,
    RECURRENCE_BIWEEKLY,
    RECURRENCE_MONTHLY,
]

# Display labels; also accepted when decoding older records
RECURRENCE_RULE_LABELS: dict[str, str] = {
    RECURRENCE_DAILY: "Daily",
    RECURRENCE_MULTIPLE_TIMES_PER_DAY: "Multiple times per day",
    RECURRENCE_EVERY_OTHER_DAY: "Every other day",
    RECURRENCE_WEEKLY: "Weekly",
    RECURRENCE_BIWEEKLY: "Biweekly",
    RECURRENCE_MONTHLY: "Monthly",
}

MULTI_DAILY_FREQUENCY_MIN = 2
MULTI_DAILY_FREQUENCY_MAX = 12
MULTI_DAILY_INTERVAL_MIN = 1
MULTI_DAILY_INTERVAL_MAX = 12
DEFAULT_MULTI_DAILY_FREQUENCY = 2
DEFAULT_MULTI_DAILY_INTERVAL = 12

# Default recurrence end offset when the user enables recurrence
DEFAULT_RECURRENCE_END_DAYS = 30

# ------------------------------------------------------------------------------------------------
# Severity
# ------------------------------------------------------------------------------------------------
SEVERITY_RESOLVED = 0
SEVERITY_MILD = 1
SEVERITY_MODERATE = 2
SEVERITY_SEVERE = 3
SEVERITY_VERY_SEVERE = 4
SEVERITY_EXTREME = 5

DEFAULT_SEVERITY = SEVERITY_MODERATE

SEVERITY_LABELS: dict[int, str] = {
    SEVERITY_RESOLVED: "Resolved",
    SEVERITY_MILD: "Mild",
    SEVERITY_MODERATE: "Moderate",
    SEVERITY_SEVERE: "Severe",
    SEVERITY_VERY_SEVERE: "Very Severe",
    SEVERITY_EXTREME: "Extreme",
}

# ------------------------------------------------------------------------------------------------
# Storage Keys
# ------------------------------------------------------------------------------------------------
DATA_REMEDY_INTERNAL_ID = "internal_id"
DATA_REMEDY_NAME = "name"
DATA_REMEDY_POTENCY = "potency"
DATA_REMEDY_CUSTOM_POTENCY = "custom_potency"
DATA_REMEDY_TAKEN_AT = "taken_at"
DATA_REMEDY_PRESCRIBED_AT = "prescribed_at"
DATA_REMEDY_WAIT_VALUE = "wait_value"
DATA_REMEDY_WAIT_UNIT = "wait_unit"
DATA_REMEDY_DUE_AT = "due_at"
DATA_REMEDY_NOTES = "notes"
DATA_REMEDY_HAS_RECURRENCE = "has_recurrence"
DATA_REMEDY_RECURRENCE_RULE = "recurrence_rule"
DATA_REMEDY_RECURRENCE_FREQUENCY = "recurrence_frequency"
DATA_REMEDY_RECURRENCE_INTERVAL = "recurrence_interval"
DATA_REMEDY_RECURRENCE_END_DATE = "recurrence_end_date"
DATA_REMEDY_NOTIFICATION_IDS = "notification_ids"

DATA_SYMPTOM_INTERNAL_ID = "internal_id"
DATA_SYMPTOM_NAME = "name"
DATA_SYMPTOM_SEVERITY = "severity"
DATA_SYMPTOM_TIMESTAMP = "timestamp"
DATA_SYMPTOM_RESOLUTION_DATE = "resolution_date"
DATA_SYMPTOM_NOTES = "notes"

# ------------------------------------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------------------------------------
CONF_TIME_ZONE = "time_zone"
CONF_REMINDER_ENABLED = "reminder_enabled"
CONF_REMINDER_HOUR = "reminder_hour"
CONF_REMINDER_MINUTE = "reminder_minute"

DEFAULT_TIME_ZONE_NAME = "UTC"
DEFAULT_REMINDER_ENABLED = True
DEFAULT_REMINDER_HOUR = 20
DEFAULT_REMINDER_MINUTE = 0

# ------------------------------------------------------------------------------------------------
# Notifications
# ------------------------------------------------------------------------------------------------
NOTIFY_ID_DAILY_SYMPTOM_REMINDER = "dailySymptomReminder"
NOTIFY_ID_REMEDY_PREFIX = "remedy"

NOTIFY_TITLE_DAILY_SYMPTOM_REMINDER = "Daily Symptom Check"
NOTIFY_BODY_DAILY_SYMPTOM_REMINDER = "Don't forget to log your symptoms for today!"
NOTIFY_TITLE_REMEDY_REMINDER = "Remedy Reminder"
NOTIFY_BODY_REMEDY_REMINDER = "Time to take {name} {potency}"

# ------------------------------------------------------------------------------------------------
# Timeline / Export
# ------------------------------------------------------------------------------------------------
TIMELINE_KIND_SYMPTOM = "symptom"
TIMELINE_KIND_REMEDY = "remedy"

EXPORT_DEFAULT_TITLE = "Symptomly Timeline"
EXPORT_EMPTY_MESSAGE = "No entries found for the selected range."

DISPLAY_UNKNOWN = "Unknown"

# ------------------------------------------------------------------------------------------------
# Validation Error Keys
# ------------------------------------------------------------------------------------------------
ERROR_INVALID_NAME = "invalid_name"
ERROR_INVALID_TIMESTAMP = "invalid_timestamp"
ERROR_INVALID_SEVERITY = "invalid_severity"
ERROR_RECURRENCE_RULE_REQUIRED = "recurrence_rule_required"
ERROR_RECURRENCE_END_REQUIRED = "recurrence_end_date_required"
ERROR_RECURRENCE_END_BEFORE_TAKEN = "recurrence_end_date_before_taken"
ERROR_DUE_BEFORE_TAKEN = "due_date_before_taken"
ERROR_INVALID_POTENCY = "invalid_potency"
ERROR_INVALID_DURATION = "invalid_duration"
ERROR_INVALID_RECURRENCE = "invalid_recurrence"
ERROR_INVALID_TIME_ZONE = "invalid_time_zone"
ERROR_INVALID_TIME = "invalid_time"
ERROR_INVALID_INPUT = "invalid_input"
