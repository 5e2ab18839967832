"""
Codec for the stored/submitted schedule shape.

Each weekday maps to ``{"open": bool, "slots": [{"from": "HH:MM", "to": "HH:MM"}]}``;
a missing (or empty) structure means "no schedule".

Strict decoding is used for data entering the system (forms, API payloads)
and raises ScheduleFormatError. Lenient decoding is used for data already
stored: malformed entries are dropped with a warning so rendering never fails.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from ..domain.exceptions import ScheduleFormatError, UnknownWeekdayError
from ..domain.models import (
    DaySchedule,
    TimeRange,
    WeeklySchedule,
    Weekday,
    format_wall_clock,
    parse_wall_clock,
)

logger = logging.getLogger(__name__)

DAY_KEYS = [weekday.key for weekday in Weekday]


class SlotPayload(BaseModel):
    """One ``{from, to}`` slot as stored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start: str = Field(alias="from")
    end: str = Field(alias="to")

    @field_validator("start", "end")
    @classmethod
    def validate_time_format(cls, value: str, info: ValidationInfo) -> str:
        """Ensure the value is a 24h HH:MM or HH:MM:SS string."""
        try:
            parse_wall_clock(value)
        except ValueError:
            field_name = "from" if info.field_name == "start" else "to"
            raise ValueError(
                f'Invalid time format for "{field_name}" (use HH:MM or HH:MM:SS, 24h): {value}.'
            ) from None
        return value

    def to_time_range(self) -> TimeRange:
        return TimeRange.parse(self.start, self.end)


class DayPayload(BaseModel):
    """One weekday entry as stored."""
    model_config = ConfigDict(extra="ignore")

    open: StrictBool
    slots: List[SlotPayload]

    def to_day_schedule(self, weekday: Weekday) -> DaySchedule:
        return DaySchedule(
            weekday=weekday,
            is_open=self.open,
            slots=tuple(slot.to_time_range() for slot in self.slots),
        )


def _describe_validation_error(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def schedule_from_wire(
    data: Optional[Mapping[str, Any]],
    strict: bool = True,
) -> Optional[WeeklySchedule]:
    """
    Decode the stored shape into a WeeklySchedule.

    Args:
        data: Mapping keyed by lowercase weekday name, or None
        strict: Raise on malformed data instead of dropping it

    Returns:
        WeeklySchedule, or None when there is no schedule

    Raises:
        ScheduleFormatError: In strict mode, if the data has the wrong shape
    """
    if data is None:
        return None

    if not isinstance(data, Mapping):
        if strict:
            raise ScheduleFormatError(
                "Schedule must be an object keyed by day (monday through sunday)."
            )
        logger.warning("Ignoring schedule that is not a mapping: %r", type(data).__name__)
        return None

    if not data:
        return None

    if strict:
        return _decode_strict(data)
    return _decode_lenient(data)


def _decode_strict(data: Mapping[str, Any]) -> WeeklySchedule:
    days: List[DaySchedule] = []

    for key, value in data.items():
        try:
            weekday = Weekday.from_key(key)
        except UnknownWeekdayError as exc:
            raise ScheduleFormatError(
                f"Schedule may only contain day keys: {', '.join(DAY_KEYS)} (got {key!r})."
            ) from exc

        if not isinstance(value, Mapping):
            raise ScheduleFormatError(
                f'Schedule for {weekday.key} must be an object with "open" and "slots".'
            )

        try:
            payload = DayPayload.model_validate(value)
        except ValidationError as exc:
            raise ScheduleFormatError(
                f"Schedule for {weekday.key}: {_describe_validation_error(exc)}"
            ) from exc

        days.append(payload.to_day_schedule(weekday))

    return WeeklySchedule.from_days(days)


def _decode_lenient(data: Mapping[str, Any]) -> WeeklySchedule:
    days: List[DaySchedule] = []

    for key, value in data.items():
        try:
            weekday = Weekday.from_key(key)
        except UnknownWeekdayError:
            logger.warning("Dropping unknown day key %r from stored schedule", key)
            continue

        if not isinstance(value, Mapping):
            logger.warning("Treating malformed entry for %s as closed", weekday.key)
            days.append(DaySchedule.closed(weekday))
            continue

        raw_slots = value.get("slots") or []
        if not isinstance(raw_slots, list):
            logger.warning("Ignoring non-list slots for %s", weekday.key)
            raw_slots = []

        slots: List[TimeRange] = []
        for raw_slot in raw_slots:
            try:
                slots.append(SlotPayload.model_validate(raw_slot).to_time_range())
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed slot on %s: %s",
                    weekday.key,
                    _describe_validation_error(exc),
                )

        days.append(
            DaySchedule(weekday=weekday, is_open=value.get("open") is True, slots=tuple(slots))
        )

    return WeeklySchedule.from_days(days)


def schedule_to_wire(schedule: Optional[WeeklySchedule]) -> Optional[Dict[str, Any]]:
    """Encode a schedule into the stored shape, Monday through Sunday."""
    if schedule is None:
        return None

    return {
        day.weekday.key: {
            "open": day.is_open,
            "slots": [
                {"from": format_wall_clock(slot.start), "to": format_wall_clock(slot.end)}
                for slot in day.slots
            ],
        }
        for day in schedule
    }


def schedule_from_json(raw: Optional[str], strict: bool = True) -> Optional[WeeklySchedule]:
    """Decode a JSON-encoded schedule column; empty text means no schedule."""
    if raw is None or not raw.strip():
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        if strict:
            raise ScheduleFormatError(f"Schedule is not valid JSON: {exc}") from exc
        logger.warning("Ignoring stored schedule that is not valid JSON: %s", exc)
        return None

    return schedule_from_wire(data, strict=strict)


def schedule_to_json(schedule: Optional[WeeklySchedule]) -> Optional[str]:
    payload = schedule_to_wire(schedule)
    return None if payload is None else json.dumps(payload)
