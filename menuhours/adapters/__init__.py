"""
Adapters layer - Storage shape, schedule files and locale data.
"""

from .locale_labels import day_abbreviations, labels_for_locale
from .schedule_file import ScheduleSet, load_schedule_file
from .wire import (
    schedule_from_json,
    schedule_from_wire,
    schedule_to_json,
    schedule_to_wire,
)

__all__ = [
    "ScheduleSet",
    "day_abbreviations",
    "labels_for_locale",
    "load_schedule_file",
    "schedule_from_json",
    "schedule_from_wire",
    "schedule_to_json",
    "schedule_to_wire",
]
