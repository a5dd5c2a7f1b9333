"""Detection of dates with no serving coverage."""

from collections.abc import Iterable
from datetime import date
from enum import StrEnum

from care_inventory.domain.calendar import date_range, is_weekend, weekday_index
from care_inventory.domain.items import CareItem, UnscheduledDate
from care_inventory.domain.schedules import DailySchedule, WeeklySchedule
from care_inventory.services.recurrence import is_covered


class ScheduleExclusion(StrEnum):
    """Schedule types a caller may ignore to surface sparser gaps."""

    DAILY = "daily"
    WEEKLY = "weekly"


_EXCLUDED_TYPES = {
    ScheduleExclusion.DAILY: DailySchedule,
    ScheduleExclusion.WEEKLY: WeeklySchedule,
}


def find_gaps(
    items: Iterable[CareItem],
    skip_dates: Iterable[date],
    today: date,
    horizon_days: int,
    exclusions: Iterable[ScheduleExclusion] = (),
) -> list[UnscheduledDate]:
    """Return dates in [today, today + horizon_days) that nothing covers."""
    excluded = tuple(_EXCLUDED_TYPES[exclusion] for exclusion in set(exclusions))
    schedules = [
        item.schedule
        for item in items
        if item.is_active
        and item.schedule is not None
        and not isinstance(item.schedule, excluded)
    ]
    skipped = set(skip_dates)
    gaps: list[UnscheduledDate] = []
    for day in date_range(today, horizon_days):
        if day in skipped:
            continue
        if any(is_covered(schedule, day) for schedule in schedules):
            continue
        gaps.append(
            UnscheduledDate(
                date=day,
                day_of_week=weekday_index(day),
                is_weekend=is_weekend(day),
            )
        )
    return gaps
