"""
Tests for the schedule formatter.
"""

import pytest

from menuhours.domain.formatter import DisplayLabels, ScheduleFormatter, format_schedule
from menuhours.domain.models import DaySchedule, TimeRange, WeeklySchedule, Weekday

LUNCH = (TimeRange.parse("11:00", "15:00"),)
SPLIT = (TimeRange.parse("11:00", "15:00"), TimeRange.parse("18:00", "22:00"))
WEEKDAYS = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]


class TestScheduleFormatter:
    """Tests for format_schedule()."""

    def test_groups_weekdays_and_weekend(self):
        """Test collapsing Monday-Friday and a closed weekend."""
        schedule = WeeklySchedule.uniform(LUNCH, weekdays=WEEKDAYS)

        assert format_schedule(schedule) == "Mon–Fri 11:00–15:00; Sat–Sun Closed"

    def test_multiple_slots_joined_with_comma(self):
        """Test that slots within a group are comma separated."""
        schedule = WeeklySchedule.uniform(SPLIT, weekdays=WEEKDAYS)

        assert format_schedule(schedule) == "Mon–Fri 11:00–15:00, 18:00–22:00; Sat–Sun Closed"

    def test_slots_render_in_stored_order(self):
        """Test that slots are not re-sorted."""
        schedule = WeeklySchedule.uniform(tuple(reversed(SPLIT)))

        assert format_schedule(schedule) == "Mon–Sun 18:00–22:00, 11:00–15:00"

    def test_single_days_render_without_range(self):
        """Test non-consecutive days render individually."""
        schedule = WeeklySchedule.uniform(LUNCH, weekdays=[Weekday.MONDAY, Weekday.WEDNESDAY])

        assert format_schedule(schedule) == (
            "Mon 11:00–15:00; Tue Closed; Wed 11:00–15:00; Thu–Sun Closed"
        )

    def test_different_hours_break_groups(self):
        """Test that only identical hours are grouped."""
        schedule = WeeklySchedule.from_days(
            [DaySchedule(weekday=w, is_open=True, slots=LUNCH) for w in WEEKDAYS]
            + [
                DaySchedule(weekday=Weekday.SATURDAY, is_open=True, slots=[TimeRange.parse("12:00", "24:00")]),
                DaySchedule(weekday=Weekday.SUNDAY, is_open=True, slots=[TimeRange.parse("12:00", "24:00")]),
            ]
        )

        assert format_schedule(schedule) == "Mon–Fri 11:00–15:00; Sat–Sun 12:00–24:00"

    def test_no_wrap_around(self):
        """Test that Sunday and Monday are not grouped together."""
        schedule = WeeklySchedule.uniform(LUNCH, weekdays=[Weekday.SUNDAY, Weekday.MONDAY])

        assert format_schedule(schedule) == "Mon 11:00–15:00; Tue–Sat Closed; Sun 11:00–15:00"

    def test_closed_days_with_stray_slots_group_as_closed(self):
        """Test that slots on closed days are ignored for grouping."""
        schedule = WeeklySchedule.from_days(
            [DaySchedule(weekday=Weekday.SATURDAY, is_open=False, slots=LUNCH)]
        )

        assert format_schedule(schedule) == "Mon–Sun Closed"

    def test_all_closed(self):
        """Test a schedule closed every day."""
        assert format_schedule(WeeklySchedule.never_available()) == "Mon–Sun Closed"

    def test_open_day_without_slots_prints_nothing(self):
        """Test that unrestricted days are omitted."""
        schedule = WeeklySchedule.from_days([DaySchedule(weekday=Weekday.MONDAY, is_open=True)])

        assert format_schedule(schedule) == "Tue–Sun Closed"

    def test_inverted_slot_skipped(self):
        """Test that inverted legacy slots are not printed."""
        schedule = WeeklySchedule.from_days(
            [
                DaySchedule(
                    weekday=Weekday.MONDAY,
                    is_open=True,
                    slots=[TimeRange.parse("11:00", "15:00"), TimeRange.parse("16:00", "14:00")],
                )
            ]
        )

        assert format_schedule(schedule) == "Mon 11:00–15:00; Tue–Sun Closed"

    def test_only_inverted_slots_render_closed(self):
        """Test that a day with only inverted slots is shown as closed."""
        schedule = WeeklySchedule.from_days(
            [DaySchedule(weekday=Weekday.MONDAY, is_open=True, slots=[TimeRange.parse("16:00", "14:00")])]
        )

        assert format_schedule(schedule) == "Mon–Sun Closed"

    def test_open_hours_only(self):
        """Test rendering without the closed groups."""
        schedule = WeeklySchedule.uniform(LUNCH, weekdays=WEEKDAYS)

        assert ScheduleFormatter().format_open_hours(schedule) == "Mon–Fri 11:00–15:00"

    def test_format_day(self):
        """Test rendering a single day's hours."""
        formatter = ScheduleFormatter()

        assert formatter.format_day(DaySchedule(weekday=Weekday.MONDAY, is_open=True, slots=SPLIT)) == (
            "11:00–15:00, 18:00–22:00"
        )
        assert formatter.format_day(DaySchedule.closed(Weekday.MONDAY)) == "Closed"

    def test_injected_labels(self):
        """Test rendering with another locale's strings."""
        labels = DisplayLabels(
            day_abbreviations=("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"),
            closed="Geschlossen",
            day_range_separator="-",
            group_separator=" | ",
        )
        schedule = WeeklySchedule.uniform(LUNCH, weekdays=WEEKDAYS)

        assert format_schedule(schedule, labels) == "Mo-Fr 11:00–15:00 | Sa-So Geschlossen"

    def test_deterministic(self):
        """Test that identical input gives identical output."""
        schedule = WeeklySchedule.uniform(SPLIT, weekdays=WEEKDAYS)

        assert format_schedule(schedule) == format_schedule(schedule)


class TestDisplayLabels:
    """Tests for DisplayLabels validation."""

    def test_requires_seven_days(self):
        """Test that a short day list is rejected."""
        with pytest.raises(ValueError, match="7 day abbreviations"):
            DisplayLabels(day_abbreviations=("Mon", "Tue"))

    def test_template_needs_placeholder(self):
        """Test that the unavailable template must contain {schedule}."""
        with pytest.raises(ValueError, match="schedule"):
            DisplayLabels(unavailable_template="Not available")
