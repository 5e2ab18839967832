"""
Human-readable rendering of weekly schedules.

The formatter is locale-agnostic: day abbreviations and literals are injected
through DisplayLabels (see ``menuhours.adapters.locale_labels``).
"""

from dataclasses import dataclass
from itertools import groupby
from typing import List, Optional, Tuple

from .models import DaySchedule, WeeklySchedule, format_wall_clock

# Group keys
_CLOSED = "closed"
_OPEN = "open"
_UNRESTRICTED = "unrestricted"


@dataclass(frozen=True)
class DisplayLabels:
    """Strings injected into the formatter for one locale."""
    day_abbreviations: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
    closed: str = "Closed"
    unavailable_template: str = "Currently not available. Available only {schedule}"
    never_available: str = "Currently not available"
    day_range_separator: str = "–"
    time_range_separator: str = "–"
    slot_separator: str = ", "
    group_separator: str = "; "

    def __post_init__(self):
        object.__setattr__(self, "day_abbreviations", tuple(self.day_abbreviations))
        if len(self.day_abbreviations) != 7:
            raise ValueError(
                f"Expected 7 day abbreviations, got {len(self.day_abbreviations)}"
            )
        if "{schedule}" not in self.unavailable_template:
            raise ValueError("unavailable_template must contain '{schedule}'")


DEFAULT_LABELS = DisplayLabels()


class ScheduleFormatter:
    """
    Renders a weekly schedule as a short string such as
    ``"Mon–Fri 11:00–15:00, 18:00–22:00; Sat–Sun Closed"``.

    Consecutive weekdays (Monday→Sunday, no wrap-around) with identical
    effective hours collapse into one group. Open days without declared
    hours have no restriction and print nothing. Inverted slots from
    unvalidated data are skipped.
    """

    def __init__(self, labels: DisplayLabels = DEFAULT_LABELS):
        self.labels = labels

    def format(self, schedule: WeeklySchedule) -> str:
        """Render every group, open and closed."""
        return self._render(schedule, include_closed=True)

    def format_open_hours(self, schedule: WeeklySchedule) -> str:
        """Render only the groups with opening hours."""
        return self._render(schedule, include_closed=False)

    def format_day(self, day: DaySchedule) -> str:
        """Render a single day's hours without the day label."""
        kind, slots = self._group_key(day)
        if kind == _CLOSED:
            return self.labels.closed
        return self._format_slots(slots)

    def _render(self, schedule: WeeklySchedule, include_closed: bool) -> str:
        parts: List[str] = []

        for (kind, slots), days in groupby(schedule, key=self._group_key):
            group = list(days)
            if kind == _UNRESTRICTED:
                continue
            if kind == _CLOSED and not include_closed:
                continue

            hours = self.labels.closed if kind == _CLOSED else self._format_slots(slots)
            parts.append(f"{self._format_day_span(group)} {hours}")

        return self.labels.group_separator.join(parts)

    @staticmethod
    def _group_key(day: DaySchedule) -> Tuple[str, Tuple[Tuple[int, int], ...]]:
        if not day.is_open:
            return _CLOSED, ()
        if not day.slots:
            return _UNRESTRICTED, ()

        slots = tuple((slot.start, slot.end) for slot in day.effective_slots())
        if not slots:
            # Only inverted slots: grants no availability
            return _CLOSED, ()
        return _OPEN, slots

    def _format_day_span(self, days: List[DaySchedule]) -> str:
        names = self.labels.day_abbreviations
        first, last = days[0].weekday, days[-1].weekday
        if first == last:
            return names[first]
        return f"{names[first]}{self.labels.day_range_separator}{names[last]}"

    def _format_slots(self, slots: Tuple[Tuple[int, int], ...]) -> str:
        sep = self.labels.time_range_separator
        return self.labels.slot_separator.join(
            f"{format_wall_clock(start)}{sep}{format_wall_clock(end)}"
            for start, end in slots
        )


def format_schedule(
    schedule: WeeklySchedule,
    labels: Optional[DisplayLabels] = None,
) -> str:
    """Render a schedule with the given (default English) labels."""
    return ScheduleFormatter(labels or DEFAULT_LABELS).format(schedule)
