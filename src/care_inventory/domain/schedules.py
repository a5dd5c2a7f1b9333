"""Serving schedule models.

A serving schedule is a closed union of four variants discriminated by
``type``. Stored payloads use camelCase keys (``startDate``, ``timeSlot``);
both spellings are accepted on input.
"""

import logging
from datetime import date as date_type
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

_logger = logging.getLogger(__name__)

Weekday = Annotated[int, Field(ge=0, le=6)]


class ServingTimeSlot(StrEnum):
    """Time of day an item is meant to be served."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    ANYTIME = "anytime"


TIME_SLOT_LABELS: dict[ServingTimeSlot, str] = {
    ServingTimeSlot.BREAKFAST: "breakfast",
    ServingTimeSlot.LUNCH: "lunch",
    ServingTimeSlot.DINNER: "dinner",
    ServingTimeSlot.SNACK: "snack time",
    ServingTimeSlot.ANYTIME: "any time",
}


class _ScheduleBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time_slot: ServingTimeSlot | None = Field(default=None, alias="timeSlot")
    note: str | None = None


class OnceSchedule(_ScheduleBase):
    """Serve on a single date."""

    type: Literal["once"] = "once"
    date: date_type | None = None


class DailySchedule(_ScheduleBase):
    """Serve every day, optionally from a start date."""

    type: Literal["daily"] = "daily"
    start_date: date_type | None = Field(default=None, alias="startDate")


class WeeklySchedule(_ScheduleBase):
    """Serve on selected weekdays (0 = Sunday), optionally from a start date."""

    type: Literal["weekly"] = "weekly"
    start_date: date_type | None = Field(default=None, alias="startDate")
    weekdays: frozenset[Weekday] = frozenset()


class SpecificDatesSchedule(_ScheduleBase):
    """Serve on an explicit list of dates."""

    type: Literal["specific_dates"] = "specific_dates"
    dates: tuple[date_type, ...] = ()

    @field_validator("dates")
    @classmethod
    def _sort_unique(cls, value: tuple[date_type, ...]) -> tuple[date_type, ...]:
        return tuple(sorted(set(value)))


ServingSchedule = Annotated[
    OnceSchedule | DailySchedule | WeeklySchedule | SpecificDatesSchedule,
    Field(discriminator="type"),
]

SCHEDULE_VARIANTS = (OnceSchedule, DailySchedule, WeeklySchedule, SpecificDatesSchedule)

_schedule_adapter: TypeAdapter[ServingSchedule] = TypeAdapter(ServingSchedule)


def parse_schedule(raw: object) -> ServingSchedule | None:
    """Parse a stored schedule payload, returning None when it is unusable."""
    if raw is None:
        return None
    if isinstance(raw, SCHEDULE_VARIANTS):
        return raw
    if not isinstance(raw, dict):
        _logger.debug("Ignoring non-mapping schedule payload: %r", raw)
        return None
    try:
        return _schedule_adapter.validate_python(raw)
    except ValidationError as exc:
        _logger.debug("Ignoring invalid schedule payload: %s", exc.errors())
        return None


def dump_schedule(schedule: ServingSchedule) -> dict[str, object]:
    """Serialize a schedule to its stored camelCase form."""
    payload = schedule.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(schedule, WeeklySchedule):
        payload["weekdays"] = sorted(schedule.weekdays)
    return payload


def schedule_from_planned_date(planned: date_type | None) -> OnceSchedule | None:
    """Convert a legacy planned serve date into a one-off schedule."""
    if planned is None:
        return None
    return OnceSchedule(date=planned, time_slot=ServingTimeSlot.ANYTIME)


def planned_date_from_schedule(schedule: ServingSchedule | None) -> date_type | None:
    """Return the legacy planned serve date for one-off schedules."""
    if isinstance(schedule, OnceSchedule):
        return schedule.date
    return None
