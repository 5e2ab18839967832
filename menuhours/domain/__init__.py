"""
Domain layer - Pure scheduling logic without external I/O.
"""

from .availability import (
    AvailabilityDisplay,
    describe,
    evaluate,
    evaluate_query,
    is_available_now,
)
from .exceptions import (
    MenuHoursError,
    MissingDayScheduleError,
    ScheduleFormatError,
    UnknownWeekdayError,
)
from .formatter import DEFAULT_LABELS, DisplayLabels, ScheduleFormatter, format_schedule
from .models import (
    AvailabilityQuery,
    AvailabilityResult,
    DaySchedule,
    Instant,
    TimeRange,
    ValidationErrorKind,
    ValidationIssue,
    ValidationResult,
    WeeklySchedule,
    Weekday,
)
from .overrides import ScheduleLevel, resolve_effective_level, resolve_effective_schedule
from .validator import ScheduleValidator, validate

__all__ = [
    "AvailabilityDisplay",
    "AvailabilityQuery",
    "AvailabilityResult",
    "DEFAULT_LABELS",
    "DaySchedule",
    "DisplayLabels",
    "Instant",
    "MenuHoursError",
    "MissingDayScheduleError",
    "ScheduleFormatError",
    "ScheduleFormatter",
    "ScheduleLevel",
    "ScheduleValidator",
    "TimeRange",
    "UnknownWeekdayError",
    "ValidationErrorKind",
    "ValidationIssue",
    "ValidationResult",
    "WeeklySchedule",
    "Weekday",
    "describe",
    "evaluate",
    "evaluate_query",
    "format_schedule",
    "is_available_now",
    "resolve_effective_level",
    "resolve_effective_schedule",
    "validate",
]
