"""
Domain models for weekly schedules and availability.

All models are immutable value objects. Times of day are wall-clock minutes
since midnight (0..1440), where 1440 is the "24:00" end-of-day sentinel.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import pendulum

from .exceptions import MissingDayScheduleError, UnknownWeekdayError

MINUTES_PER_DAY = 24 * 60

# ASCII digits only; hours may drop the leading zero
_WALL_CLOCK = re.compile(r"(?P<hour>[01]?[0-9]|2[0-3]):(?P<minute>[0-5][0-9])(?::(?P<second>[0-5][0-9]))?")
_END_OF_DAY = re.compile(r"24:00(?::00)?")


class Weekday(IntEnum):
    """Day of week, numbered like ``datetime.weekday()`` (0=Monday)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def key(self) -> str:
        """Lowercase storage key, e.g. ``"monday"``."""
        return self.name.lower()

    @property
    def label(self) -> str:
        """English display name, e.g. ``"Monday"``."""
        return self.name.capitalize()

    @classmethod
    def from_key(cls, key: str) -> "Weekday":
        """
        Look up a weekday by its storage key.

        Raises:
            UnknownWeekdayError: If the key is not a weekday name
        """
        if isinstance(key, str) and key == key.lower():
            try:
                return cls[key.upper()]
            except KeyError:
                pass
        raise UnknownWeekdayError(key)


def parse_wall_clock(value: str, round_seconds: bool = True) -> int:
    """
    Parse a 24h ``HH:MM`` or ``HH:MM:SS`` string to minutes since midnight.

    ``24:00`` is accepted as the end-of-day sentinel. Seconds round to the
    nearest minute (30 and above round up) unless ``round_seconds`` is False,
    in which case they are dropped.

    Raises:
        ValueError: If the string is not a valid wall-clock time
    """
    if not isinstance(value, str):
        raise ValueError(f"Wall-clock time must be a string, got {value!r}")

    text = value.strip()
    if _END_OF_DAY.fullmatch(text):
        return MINUTES_PER_DAY

    match = _WALL_CLOCK.fullmatch(text)
    if match is None:
        raise ValueError(f"Invalid wall-clock time: {value!r}")

    minutes = int(match["hour"]) * 60 + int(match["minute"])
    if round_seconds and match["second"] is not None and int(match["second"]) >= 30:
        minutes += 1
    return minutes


def format_wall_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM`` (1440 renders as ``24:00``)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class TimeRange:
    """
    A ``[start, end)`` wall-clock interval within one day.

    The ``start < end`` invariant is checked by the validator, not here:
    inverted ranges must be representable so they can be reported as data.
    """
    start: int
    end: int

    def __post_init__(self):
        for name, value in (("start", self.start), ("end", self.end)):
            if not 0 <= value <= MINUTES_PER_DAY:
                raise ValueError(f"TimeRange {name} out of range: {value}")

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeRange":
        """Build a range from two ``HH:MM`` strings."""
        return cls(start=parse_wall_clock(start), end=parse_wall_clock(end))

    def is_valid(self) -> bool:
        """Return True if the range is non-empty (start strictly before end)."""
        return self.start < self.end

    def duration_minutes(self) -> int:
        """Return the duration in minutes (0 for inverted ranges)."""
        return max(0, self.end - self.start)

    def contains(self, minute: int) -> bool:
        """Check if a minute-of-day falls inside the half-open range."""
        return self.start <= minute < self.end

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another (touching is not overlap)."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{format_wall_clock(self.start)}-{format_wall_clock(self.end)}"


@dataclass(frozen=True)
class DaySchedule:
    """
    Opening declaration for one weekday.

    ``is_open`` is independent of ``slots``: a closed day ignores any stray
    slots, and an open day without slots has no declared restriction.
    """
    weekday: Weekday
    is_open: bool = False
    slots: Tuple[TimeRange, ...] = ()

    def __post_init__(self):
        # Accept any iterable of slots but store a tuple to stay hashable.
        object.__setattr__(self, "slots", tuple(self.slots))

    @classmethod
    def closed(cls, weekday: Weekday) -> "DaySchedule":
        return cls(weekday=weekday, is_open=False)

    def effective_slots(self) -> Tuple[TimeRange, ...]:
        """Slots that actually grant availability (none on a closed day)."""
        if not self.is_open:
            return ()
        return tuple(slot for slot in self.slots if slot.is_valid())


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Seven day schedules, Monday through Sunday.

    Days not supplied at construction are normalized to closed.
    """
    days: Mapping[Weekday, DaySchedule] = field(default_factory=dict)

    def __post_init__(self):
        normalized: Dict[Weekday, DaySchedule] = {}
        for key, day in self.days.items():
            if not isinstance(key, Weekday):
                raise UnknownWeekdayError(key)
            if day is None:
                raise MissingDayScheduleError(f"No DaySchedule given for {key.label}")
            if day.weekday != key:
                raise ValueError(
                    f"DaySchedule for {day.weekday.label} stored under {key.label}"
                )
            normalized[key] = day

        for weekday in Weekday:
            normalized.setdefault(weekday, DaySchedule.closed(weekday))

        object.__setattr__(self, "days", {w: normalized[w] for w in Weekday})

    @classmethod
    def from_days(cls, days: List[DaySchedule]) -> "WeeklySchedule":
        """Build a schedule from a list of day schedules."""
        return cls(days={day.weekday: day for day in days})

    @classmethod
    def uniform(
        cls,
        slots: Tuple[TimeRange, ...] = (),
        weekdays: Optional[List[Weekday]] = None,
    ) -> "WeeklySchedule":
        """
        Build a schedule open with the same slots on the given weekdays
        (every day by default); other days are closed.
        """
        open_days = list(Weekday) if weekdays is None else weekdays
        return cls.from_days(
            [DaySchedule(weekday=w, is_open=True, slots=slots) for w in open_days]
        )

    @classmethod
    def never_available(cls) -> "WeeklySchedule":
        """A present schedule with every day closed."""
        return cls()

    def day(self, weekday: Weekday) -> DaySchedule:
        """
        Get the schedule for a weekday.

        Raises:
            UnknownWeekdayError: If ``weekday`` is not a Weekday
        """
        if not isinstance(weekday, Weekday):
            raise UnknownWeekdayError(weekday)
        return self.days[weekday]

    def __iter__(self) -> Iterator[DaySchedule]:
        return iter(self.days.values())

    def __hash__(self) -> int:
        return hash(tuple(self.days.values()))


@dataclass(frozen=True)
class Instant:
    """A query moment expressed as restaurant-local weekday and minute of day."""
    weekday: Weekday
    minute: int

    def __post_init__(self):
        if not isinstance(self.weekday, Weekday):
            raise UnknownWeekdayError(self.weekday)
        if not 0 <= self.minute < MINUTES_PER_DAY:
            raise ValueError(f"Minute of day out of range: {self.minute}")

    @classmethod
    def at(cls, weekday: Weekday, time_of_day: str) -> "Instant":
        """Build an instant from a weekday and an ``HH:MM[:SS]`` string (seconds are dropped)."""
        return cls(weekday=weekday, minute=parse_wall_clock(time_of_day, round_seconds=False))

    @classmethod
    def from_datetime(cls, dt: datetime, timezone: Optional[str] = None) -> "Instant":
        """
        Convert a datetime to a wall-clock instant.

        If ``timezone`` is given, the datetime is first converted to that
        zone; otherwise its own wall-clock fields are used as-is.
        """
        if timezone is not None:
            dt = pendulum.instance(dt).in_timezone(timezone)
        return cls(weekday=Weekday(dt.weekday()), minute=dt.hour * 60 + dt.minute)

    @classmethod
    def now(cls, timezone: str) -> "Instant":
        """Current wall-clock instant in the given timezone."""
        return cls.from_datetime(pendulum.now(timezone))

    def __str__(self) -> str:
        return f"{self.weekday.label} {format_wall_clock(self.minute)}"


class ValidationErrorKind(str, Enum):
    INVERTED_RANGE = "inverted_range"
    OVERLAPPING_RANGES = "overlapping_ranges"


@dataclass(frozen=True)
class ValidationIssue:
    """One structural problem found on a weekday."""
    kind: ValidationErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a weekly schedule.

    ``per_day_errors`` only contains weekdays that have at least one issue.
    """
    per_day_errors: Mapping[Weekday, Tuple[ValidationIssue, ...]] = field(default_factory=dict)
    summary_error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.per_day_errors and self.summary_error is None

    def errors_for(self, weekday: Weekday) -> Tuple[ValidationIssue, ...]:
        return tuple(self.per_day_errors.get(weekday, ()))

    def messages(self) -> Dict[str, List[str]]:
        """Errors keyed by storage day key, as plain strings (for form fields)."""
        return {
            weekday.key: [issue.message for issue in issues]
            for weekday, issues in self.per_day_errors.items()
        }


@dataclass(frozen=True)
class AvailabilityResult:
    """Evaluation of an effective schedule at one instant."""
    is_open_now: bool
    label: Optional[str] = None


@dataclass(frozen=True)
class AvailabilityQuery:
    """An already override-resolved schedule and the instant to evaluate it at."""
    schedule: Optional[WeeklySchedule]
    instant: Instant
