"""
Domain-specific exception hierarchy for the menuhours engine.

Schedule content problems (inverted or overlapping ranges) are never raised;
they are returned by the validator as data.
"""


class MenuHoursError(Exception):
    """Base class for all application-level errors."""


class ScheduleFormatError(MenuHoursError, ValueError):
    """Raised when stored or submitted schedule data has the wrong shape."""


class UnknownWeekdayError(MenuHoursError, KeyError):
    """Raised when a weekday key is not one of Monday..Sunday."""

    def __init__(self, key: object):
        super().__init__(f"Unknown weekday: {key!r}")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class MissingDayScheduleError(MenuHoursError, TypeError):
    """Raised when None is passed where a DaySchedule is required."""
