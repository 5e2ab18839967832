"""
Item / category / restaurant schedule precedence.
"""

from enum import Enum
from typing import Optional, Tuple

from .models import WeeklySchedule


class ScheduleLevel(str, Enum):
    ITEM = "item"
    CATEGORY = "category"
    RESTAURANT = "restaurant"


def resolve_effective_level(
    item_schedule: Optional[WeeklySchedule],
    category_schedule: Optional[WeeklySchedule],
    restaurant_schedule: Optional[WeeklySchedule],
) -> Tuple[Optional[ScheduleLevel], Optional[WeeklySchedule]]:
    """
    Pick the most specific schedule that is present.

    Returns the winning level and its schedule, or ``(None, None)`` when no
    level declares one. An all-closed schedule is present, not absent.
    """
    for level, schedule in (
        (ScheduleLevel.ITEM, item_schedule),
        (ScheduleLevel.CATEGORY, category_schedule),
        (ScheduleLevel.RESTAURANT, restaurant_schedule),
    ):
        if schedule is not None:
            return level, schedule
    return None, None


def resolve_effective_schedule(
    item_schedule: Optional[WeeklySchedule],
    category_schedule: Optional[WeeklySchedule],
    restaurant_schedule: Optional[WeeklySchedule],
) -> Optional[WeeklySchedule]:
    """Effective schedule for an item; None means always available."""
    _, schedule = resolve_effective_level(
        item_schedule, category_schedule, restaurant_schedule
    )
    return schedule
