"""
Structural validation of weekly schedules.

Pure domain logic: problems are returned as a ValidationResult, never raised.
"""

from typing import Dict, List, Tuple

from .models import (
    DaySchedule,
    TimeRange,
    ValidationErrorKind,
    ValidationIssue,
    ValidationResult,
    WeeklySchedule,
    Weekday,
)

DEFAULT_SUMMARY_ERROR = "Please fix the schedule errors below"
INVERTED_RANGE_MESSAGE = "From must be before to"


class ScheduleValidator:
    """
    Checks a weekly schedule for inverted and overlapping time ranges.

    Algorithm, per weekday:
    1. Closed days are skipped entirely (stray slots are ignored)
    2. Every slot with ``start >= end`` is an inverted range
    3. Every unordered pair of remaining slots that intersects is an overlap
    4. A summary message is set whenever any day has errors
    """

    def __init__(self, summary_error: str = DEFAULT_SUMMARY_ERROR):
        self.summary_error = summary_error

    def validate(self, schedule: WeeklySchedule) -> ValidationResult:
        per_day_errors: Dict[Weekday, Tuple[ValidationIssue, ...]] = {}

        for day in schedule:
            issues = self.validate_day(day)
            if issues:
                per_day_errors[day.weekday] = tuple(issues)

        return ValidationResult(
            per_day_errors=per_day_errors,
            summary_error=self.summary_error if per_day_errors else None,
        )

    def validate_day(self, day: DaySchedule) -> List[ValidationIssue]:
        """Return the ordered issues for one day (empty if valid)."""
        if not day.is_open or not day.slots:
            return []

        issues: List[ValidationIssue] = []
        well_formed: List[TimeRange] = []

        for slot in day.slots:
            if slot.is_valid():
                well_formed.append(slot)
            else:
                issues.append(
                    ValidationIssue(
                        kind=ValidationErrorKind.INVERTED_RANGE,
                        message=INVERTED_RANGE_MESSAGE,
                    )
                )

        # Inverted slots already carry an error; only pair up the valid ones
        for i, first in enumerate(well_formed):
            for second in well_formed[i + 1:]:
                if first.overlaps(second):
                    issues.append(
                        ValidationIssue(
                            kind=ValidationErrorKind.OVERLAPPING_RANGES,
                            message=f"{day.weekday.label} has overlapping time ranges",
                        )
                    )

        return issues


_default_validator = ScheduleValidator()


def validate(schedule: WeeklySchedule) -> ValidationResult:
    """Validate a schedule with the default summary message."""
    return _default_validator.validate(schedule)
