"""
Availability resolution for an effective weekly schedule.

A missing schedule (None) means the entity is always available and has
nothing to display. Every function takes the query instant explicitly.
"""

from typing import Optional

from .exceptions import MissingDayScheduleError
from .formatter import DEFAULT_LABELS, DisplayLabels, ScheduleFormatter
from .models import (
    AvailabilityQuery,
    AvailabilityResult,
    DaySchedule,
    Instant,
    WeeklySchedule,
)


def is_day_available(day: DaySchedule, minute: int) -> bool:
    """
    Check one day's schedule at a minute of day.

    Closed days are never available; open days without slots have no
    restriction; otherwise the minute must fall in a well-formed slot.
    """
    if day is None:
        raise MissingDayScheduleError("A DaySchedule is required")

    if not day.is_open:
        return False
    if not day.slots:
        return True
    return any(slot.contains(minute) for slot in day.effective_slots())


def is_available_now(schedule: Optional[WeeklySchedule], now: Instant) -> bool:
    """Return True if the entity is available at ``now``."""
    if schedule is None:
        return True
    return is_day_available(schedule.day(now.weekday), now.minute)


def describe(
    schedule: Optional[WeeklySchedule],
    now: Instant,
    labels: DisplayLabels = DEFAULT_LABELS,
) -> Optional[str]:
    """
    Caption for the schedule at ``now``.

    When available, the full weekly pattern is shown. When not, the sentence
    built from ``labels.unavailable_template`` lists the open hours; a
    schedule with no open hours at all gets ``labels.never_available``.
    The label always reflects the declared weekly rule, not a countdown.
    """
    if schedule is None:
        return None

    formatter = ScheduleFormatter(labels)

    if is_available_now(schedule, now):
        return formatter.format(schedule) or None

    open_hours = formatter.format_open_hours(schedule)
    if not open_hours:
        return labels.never_available
    return labels.unavailable_template.format(schedule=open_hours)


def evaluate(
    schedule: Optional[WeeklySchedule],
    now: Instant,
    labels: DisplayLabels = DEFAULT_LABELS,
) -> AvailabilityResult:
    """Availability flag and caption in one result."""
    return AvailabilityResult(
        is_open_now=is_available_now(schedule, now),
        label=describe(schedule, now, labels),
    )


def evaluate_query(
    query: AvailabilityQuery,
    labels: DisplayLabels = DEFAULT_LABELS,
) -> AvailabilityResult:
    return evaluate(query.schedule, query.instant, labels)


class AvailabilityDisplay:
    """
    Display wrapper for an item's or category's effective schedule on the
    public menu. Use ``is_unavailable_now`` to dim entries.
    """

    def __init__(
        self,
        schedule: Optional[WeeklySchedule],
        labels: DisplayLabels = DEFAULT_LABELS,
    ):
        self._schedule = schedule
        self._labels = labels

    @property
    def schedule(self) -> Optional[WeeklySchedule]:
        return self._schedule

    @property
    def has_schedule(self) -> bool:
        """True if a schedule is present (it may be closed every day)."""
        return self._schedule is not None

    def is_available_now(self, now: Instant) -> bool:
        return is_available_now(self._schedule, now)

    def is_unavailable_now(self, now: Instant) -> bool:
        """Has a schedule and is not available at ``now``."""
        return self.has_schedule and not self.is_available_now(now)

    def label(self, now: Instant) -> Optional[str]:
        return describe(self._schedule, now, self._labels)
