"""
Tests for availability resolution and captions.
"""

import pendulum
import pytest

from menuhours.domain.availability import (
    AvailabilityDisplay,
    describe,
    evaluate,
    evaluate_query,
    is_available_now,
    is_day_available,
)
from menuhours.domain.exceptions import MissingDayScheduleError
from menuhours.domain.formatter import DisplayLabels
from menuhours.domain.models import (
    AvailabilityQuery,
    AvailabilityResult,
    DaySchedule,
    Instant,
    TimeRange,
    WeeklySchedule,
    Weekday,
)

WEEKDAYS = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]


@pytest.fixture
def lunch_schedule() -> WeeklySchedule:
    """Monday to Friday 11:00-15:00, weekend closed."""
    return WeeklySchedule.uniform((TimeRange.parse("11:00", "15:00"),), weekdays=WEEKDAYS)


class TestIsAvailableNow:
    """Tests for is_available_now()."""

    @pytest.mark.parametrize("weekday", list(Weekday))
    @pytest.mark.parametrize("time_of_day", ["00:00", "11:00", "23:59"])
    def test_no_schedule_is_always_available(self, weekday, time_of_day):
        """Test that a missing schedule means always available."""
        assert is_available_now(None, Instant.at(weekday, time_of_day))

    def test_boundary_inclusivity(self, lunch_schedule):
        """Test that the slot start is open and the slot end is closed."""
        assert not is_available_now(lunch_schedule, Instant.at(Weekday.MONDAY, "10:59"))
        assert is_available_now(lunch_schedule, Instant.at(Weekday.MONDAY, "11:00"))
        assert is_available_now(lunch_schedule, Instant.at(Weekday.MONDAY, "14:59"))
        assert not is_available_now(lunch_schedule, Instant.at(Weekday.MONDAY, "15:00"))

    def test_closed_day(self, lunch_schedule):
        """Test that a closed day is never available."""
        assert not is_available_now(lunch_schedule, Instant.at(Weekday.SATURDAY, "12:00"))

    def test_closed_day_ignores_stray_slots(self):
        """Test that slots on a closed day grant nothing."""
        schedule = WeeklySchedule.from_days(
            [DaySchedule(weekday=Weekday.MONDAY, is_open=False, slots=[TimeRange.parse("00:00", "24:00")])]
        )

        for time_of_day in ("00:00", "12:00", "23:59"):
            assert not is_available_now(schedule, Instant.at(Weekday.MONDAY, time_of_day))

    def test_open_day_without_slots_is_unrestricted(self):
        """Test that open with zero slots is available all day."""
        schedule = WeeklySchedule.from_days([DaySchedule(weekday=Weekday.TUESDAY, is_open=True)])

        assert is_available_now(schedule, Instant.at(Weekday.TUESDAY, "00:00"))
        assert is_available_now(schedule, Instant.at(Weekday.TUESDAY, "23:59"))
        assert not is_available_now(schedule, Instant.at(Weekday.WEDNESDAY, "12:00"))

    def test_multiple_slots(self):
        """Test a split day with a gap in between."""
        schedule = WeeklySchedule.uniform(
            (TimeRange.parse("18:00", "22:00"), TimeRange.parse("11:00", "15:00"))
        )
        friday = Weekday.FRIDAY

        assert is_available_now(schedule, Instant.at(friday, "12:00"))
        assert not is_available_now(schedule, Instant.at(friday, "16:00"))
        assert is_available_now(schedule, Instant.at(friday, "21:59"))

    def test_end_of_day_sentinel(self):
        """Test that a slot ending at 24:00 covers the last minute."""
        schedule = WeeklySchedule.uniform((TimeRange.parse("18:00", "24:00"),))

        assert is_available_now(schedule, Instant.at(Weekday.SATURDAY, "23:59"))
        assert not is_available_now(schedule, Instant.at(Weekday.SATURDAY, "00:00"))

    def test_inverted_legacy_slot_fails_safe(self):
        """Test that an inverted slot contributes no availability."""
        schedule = WeeklySchedule.uniform((TimeRange.parse("15:00", "11:00"),))

        assert not is_available_now(schedule, Instant.at(Weekday.MONDAY, "12:00"))
        assert not is_available_now(schedule, Instant.at(Weekday.MONDAY, "16:00"))

    def test_inverted_slot_does_not_hide_valid_one(self):
        """Test that valid slots still count next to an inverted one."""
        schedule = WeeklySchedule.uniform(
            (TimeRange.parse("15:00", "11:00"), TimeRange.parse("18:00", "20:00"))
        )

        assert is_available_now(schedule, Instant.at(Weekday.MONDAY, "19:00"))

    def test_with_pendulum_instant(self, lunch_schedule):
        """Test evaluation from a real datetime."""
        now = Instant.from_datetime(pendulum.parse("2024-11-25 12:30", tz="Europe/Berlin"))

        assert is_available_now(lunch_schedule, now)

    def test_idempotent(self, lunch_schedule):
        """Test that repeated calls give the same answer."""
        now = Instant.at(Weekday.THURSDAY, "14:00")

        first = is_available_now(lunch_schedule, now)
        assert all(is_available_now(lunch_schedule, now) == first for _ in range(5))

    def test_none_day_schedule_raises(self):
        """Test that a missing DaySchedule is a programming error."""
        with pytest.raises(MissingDayScheduleError):
            is_day_available(None, 0)


class TestDescribe:
    """Tests for describe() and evaluate()."""

    def test_no_schedule_has_no_label(self):
        """Test that nothing is shown without a schedule."""
        assert describe(None, Instant.at(Weekday.MONDAY, "12:00")) is None

    def test_available_shows_full_pattern(self, lunch_schedule):
        """Test the caption while available."""
        label = describe(lunch_schedule, Instant.at(Weekday.MONDAY, "12:00"))

        assert label == "Mon–Fri 11:00–15:00; Sat–Sun Closed"

    def test_unavailable_shows_available_only_sentence(self, lunch_schedule):
        """Test the caption while not available."""
        label = describe(lunch_schedule, Instant.at(Weekday.MONDAY, "16:00"))

        assert label == "Currently not available. Available only Mon–Fri 11:00–15:00"

    def test_never_available(self):
        """Test the caption for a schedule closed every day."""
        label = describe(WeeklySchedule.never_available(), Instant.at(Weekday.MONDAY, "12:00"))

        assert label == "Currently not available"

    def test_unrestricted_schedule_has_nothing_to_print(self):
        """Test that open days without hours render no caption."""
        schedule = WeeklySchedule.uniform(())

        assert is_available_now(schedule, Instant.at(Weekday.MONDAY, "03:00"))
        assert describe(schedule, Instant.at(Weekday.MONDAY, "03:00")) is None

    def test_custom_labels(self, lunch_schedule):
        """Test that injected labels are used."""
        labels = DisplayLabels(
            day_abbreviations=("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"),
            closed="Geschlossen",
            unavailable_template="Derzeit nicht verfügbar. Nur {schedule}",
        )

        label = describe(lunch_schedule, Instant.at(Weekday.SUNDAY, "12:00"), labels)

        assert label == "Derzeit nicht verfügbar. Nur Mo–Fr 11:00–15:00"

    def test_evaluate(self, lunch_schedule):
        """Test the combined result."""
        result = evaluate(lunch_schedule, Instant.at(Weekday.SATURDAY, "12:00"))

        assert result == AvailabilityResult(
            is_open_now=False,
            label="Currently not available. Available only Mon–Fri 11:00–15:00",
        )

    def test_evaluate_query(self, lunch_schedule):
        """Test evaluating a resolved schedule and instant bundled together."""
        query = AvailabilityQuery(schedule=lunch_schedule, instant=Instant.at(Weekday.MONDAY, "12:00"))

        assert evaluate_query(query) == evaluate(lunch_schedule, Instant.at(Weekday.MONDAY, "12:00"))
        assert evaluate_query(query).is_open_now

    def test_evaluate_without_schedule(self):
        """Test the combined result for no schedule."""
        result = evaluate(None, Instant.at(Weekday.SATURDAY, "12:00"))

        assert result.is_open_now
        assert result.label is None


class TestAvailabilityDisplay:
    """Tests for the AvailabilityDisplay wrapper."""

    def test_without_schedule(self):
        """Test that no schedule is never dimmed."""
        display = AvailabilityDisplay(None)
        now = Instant.at(Weekday.MONDAY, "03:00")

        assert not display.has_schedule
        assert display.is_available_now(now)
        assert not display.is_unavailable_now(now)
        assert display.label(now) is None

    def test_all_closed_schedule_is_present(self):
        """Test that an all-closed schedule still counts as a schedule."""
        display = AvailabilityDisplay(WeeklySchedule.never_available())
        now = Instant.at(Weekday.MONDAY, "12:00")

        assert display.has_schedule
        assert display.is_unavailable_now(now)

    def test_unavailable_now(self, lunch_schedule):
        """Test dimming outside declared hours."""
        display = AvailabilityDisplay(lunch_schedule)

        assert not display.is_unavailable_now(Instant.at(Weekday.MONDAY, "12:00"))
        assert display.is_unavailable_now(Instant.at(Weekday.MONDAY, "20:00"))
        assert display.label(Instant.at(Weekday.MONDAY, "12:00")) == "Mon–Fri 11:00–15:00; Sat–Sun Closed"
