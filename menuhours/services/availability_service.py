"""
Application service for evaluating menu availability.

The service resolves the effective schedule for an item from its three
optional levels and delegates the actual checks to the domain functions.
Labels and validator are injected, so the same service can serve any locale.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.availability import AvailabilityDisplay, evaluate_query
from ..domain.formatter import DEFAULT_LABELS, DisplayLabels, ScheduleFormatter
from ..domain.models import (
    AvailabilityQuery,
    AvailabilityResult,
    Instant,
    ValidationResult,
    WeeklySchedule,
)
from ..domain.overrides import resolve_effective_level
from ..domain.validator import ScheduleValidator

logger = logging.getLogger(__name__)


class AvailabilityService:
    """
    Orchestrates override resolution, availability and formatting.
    """

    def __init__(
        self,
        labels: DisplayLabels = DEFAULT_LABELS,
        validator: Optional[ScheduleValidator] = None,
    ) -> None:
        self._labels = labels
        self._validator = validator or ScheduleValidator()
        self._formatter = ScheduleFormatter(labels)

    @property
    def labels(self) -> DisplayLabels:
        return self._labels

    def effective_display(
        self,
        *,
        item: Optional[WeeklySchedule] = None,
        category: Optional[WeeklySchedule] = None,
        restaurant: Optional[WeeklySchedule] = None,
    ) -> AvailabilityDisplay:
        """Display wrapper around the effective schedule of an item."""
        level, schedule = resolve_effective_level(item, category, restaurant)
        if level is None:
            logger.debug("No schedule at any level; always available")
        else:
            logger.debug("Effective schedule taken from %s level", level.value)
        return AvailabilityDisplay(schedule, self._labels)

    def evaluate(
        self,
        now: Instant,
        *,
        item: Optional[WeeklySchedule] = None,
        category: Optional[WeeklySchedule] = None,
        restaurant: Optional[WeeklySchedule] = None,
    ) -> AvailabilityResult:
        """
        Resolve the effective schedule and evaluate it at ``now``.
        """
        display = self.effective_display(item=item, category=category, restaurant=restaurant)
        query = AvailabilityQuery(schedule=display.schedule, instant=now)
        result = evaluate_query(query, self._labels)
        logger.debug("Evaluated at %s: open=%s", now, result.is_open_now)
        return result

    def validate(self, schedule: WeeklySchedule) -> ValidationResult:
        """Validate a schedule before it is accepted for storage."""
        return self._validator.validate(schedule)

    def format(self, schedule: Optional[WeeklySchedule]) -> Optional[str]:
        """Weekly pattern for a schedule, or None when there is none."""
        if schedule is None:
            return None
        return self._formatter.format(schedule)
