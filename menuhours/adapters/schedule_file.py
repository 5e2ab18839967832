"""
Load item, category and restaurant schedules from a YAML (or JSON) document.

Expected layout::

    restaurant:
      monday: {open: true, slots: [{from: "09:00", to: "22:00"}]}
      ...
    category: null
    item:
      monday: {open: false, slots: []}

Quote times in YAML: unquoted values like ``11:00`` are read as integers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from ..domain.exceptions import ScheduleFormatError
from ..domain.models import WeeklySchedule
from ..domain.overrides import ScheduleLevel
from .wire import schedule_from_wire

LEVEL_KEYS = [level.value for level in ScheduleLevel]


@dataclass(frozen=True)
class ScheduleSet:
    """The three optional schedule levels for one menu item."""
    item: Optional[WeeklySchedule] = None
    category: Optional[WeeklySchedule] = None
    restaurant: Optional[WeeklySchedule] = None

    def get(self, level: ScheduleLevel) -> Optional[WeeklySchedule]:
        return getattr(self, level.value)


def load_schedule_file(path: Path, strict: bool = True) -> ScheduleSet:
    """
    Load a schedule document.

    Args:
        path: Path to the YAML/JSON file
        strict: Reject malformed schedules instead of dropping bad entries

    Returns:
        ScheduleSet with every level that the document declares

    Raises:
        FileNotFoundError: If the file doesn't exist
        ScheduleFormatError: If the document or a schedule is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Schedule file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ScheduleFormatError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ScheduleFormatError("Schedule file must contain a mapping at the root level.")

    unknown = sorted(str(key) for key in data if key not in LEVEL_KEYS)
    if unknown:
        raise ScheduleFormatError(
            f"Unknown schedule level(s): {', '.join(unknown)}. "
            f"Use {', '.join(LEVEL_KEYS)}."
        )

    levels = {}
    for key in LEVEL_KEYS:
        try:
            levels[key] = schedule_from_wire(data.get(key), strict=strict)
        except ScheduleFormatError as exc:
            raise ScheduleFormatError(f"{key}: {exc}") from exc

    return ScheduleSet(**levels)
