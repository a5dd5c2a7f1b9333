"""Classification of items whose scheduled serving was missed."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from care_inventory.domain.calendar import days_between
from care_inventory.domain.items import CareItem
from care_inventory.domain.schedules import (
    DailySchedule,
    OnceSchedule,
    SpecificDatesSchedule,
    WeeklySchedule,
)
from care_inventory.services.expiration import (
    EXPIRING_SOON_DAYS,
    is_expired,
    is_expiring_soon,
)
from care_inventory.services.fifo import order_fifo
from care_inventory.services.recurrence import is_covered, is_valid_schedule

STALENESS_DAYS = 3


def is_missed(
    item: CareItem,
    today: date,
    last_consumption_date: date | None = None,
    staleness_days: int = STALENESS_DAYS,
) -> bool:
    """Return True if a past occurrence was due and never recorded.

    Recurring schedules use a staleness heuristic: they count as missed only
    when nothing was ever recorded and they started more than
    ``staleness_days`` ago.
    """
    schedule = item.schedule
    if not item.is_active or not is_valid_schedule(schedule):
        return False
    if is_covered(schedule, today):
        return False
    if last_consumption_date == today:
        return False
    match schedule:
        case OnceSchedule(date=scheduled):
            return scheduled < today and _not_recorded_since(
                last_consumption_date, scheduled
            )
        case SpecificDatesSchedule(dates=dates):
            past = [day for day in dates if day < today]
            if not past:
                return False
            return _not_recorded_since(last_consumption_date, past[-1])
        case DailySchedule(start_date=start) | WeeklySchedule(start_date=start):
            if last_consumption_date is not None or start is None:
                return False
            return days_between(start, today) > staleness_days
    return False


def _not_recorded_since(last: date | None, occurrence: date) -> bool:
    return last is None or last < occurrence


@dataclass
class ItemPartition:
    """Active items bucketed for the staff's daily view.

    Expired and expiring units only land in their own buckets when nothing
    about their schedule puts them somewhere earlier.
    """

    missed: list[CareItem] = field(default_factory=list)
    scheduled_today: list[CareItem] = field(default_factory=list)
    recorded_today: list[CareItem] = field(default_factory=list)
    expired: list[CareItem] = field(default_factory=list)
    expiring: list[CareItem] = field(default_factory=list)
    other: list[CareItem] = field(default_factory=list)


def partition_items(
    items: Iterable[CareItem],
    today: date,
    last_consumption_dates: Mapping[UUID, date],
    staleness_days: int = STALENESS_DAYS,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> ItemPartition:
    """Split active items by what staff should look at first."""
    partition = ItemPartition()
    for item in items:
        if not item.is_active:
            continue
        last = last_consumption_dates.get(item.id)
        if is_missed(item, today, last, staleness_days):
            partition.missed.append(item)
        elif last == today:
            partition.recorded_today.append(item)
        elif is_covered(item.schedule, today):
            partition.scheduled_today.append(item)
        elif is_expired(item, today):
            partition.expired.append(item)
        elif is_expiring_soon(item, today, expiring_soon_days):
            partition.expiring.append(item)
        else:
            partition.other.append(item)
    return ItemPartition(
        missed=order_fifo(partition.missed),
        scheduled_today=order_fifo(partition.scheduled_today),
        recorded_today=order_fifo(partition.recorded_today),
        expired=order_fifo(partition.expired),
        expiring=order_fifo(partition.expiring),
        other=order_fifo(partition.other),
    )
