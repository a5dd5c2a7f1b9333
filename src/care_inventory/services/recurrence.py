"""Serving schedule evaluation.

Every function here is total: an absent or malformed schedule is simply
never covered, has no next occurrence and renders as an empty label.
"""

from datetime import date, timedelta

from care_inventory.domain.calendar import (
    WEEKDAY_LABELS,
    WEEKDAY_NAMES,
    format_short,
    format_with_weekday,
    weekday_index,
)
from care_inventory.domain.schedules import (
    TIME_SLOT_LABELS,
    DailySchedule,
    OnceSchedule,
    ServingSchedule,
    SpecificDatesSchedule,
    WeeklySchedule,
)

DEFAULT_HORIZON_DAYS = 30
MAX_LISTED_DATES = 3


def is_valid_schedule(schedule: ServingSchedule | None) -> bool:
    """Return True if the schedule has everything its variant requires."""
    match schedule:
        case OnceSchedule(date=day):
            return day is not None
        case DailySchedule():
            return True
        case WeeklySchedule(weekdays=weekdays):
            return bool(weekdays)
        case SpecificDatesSchedule(dates=dates):
            return bool(dates)
        case _:
            return False


def is_covered(schedule: ServingSchedule | None, day: date) -> bool:
    """Return True if the schedule expects the item to be served on the day."""
    match schedule:
        case OnceSchedule(date=scheduled):
            return scheduled is not None and scheduled == day
        case DailySchedule(start_date=start):
            return start is None or day >= start
        case WeeklySchedule(start_date=start, weekdays=weekdays):
            if start is not None and day < start:
                return False
            return weekday_index(day) in weekdays
        case SpecificDatesSchedule(dates=dates):
            return day in dates
        case _:
            return False


def next_covered(
    schedule: ServingSchedule | None,
    from_date: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> date | None:
    """Return the first covered date within the horizon, starting at from_date."""
    if not is_valid_schedule(schedule) or horizon_days <= 0:
        return None
    horizon_end = from_date + timedelta(days=horizon_days)
    match schedule:
        case OnceSchedule(date=scheduled):
            if from_date <= scheduled < horizon_end:
                return scheduled
            return None
        case SpecificDatesSchedule(dates=dates):
            for candidate in dates:
                if candidate >= horizon_end:
                    return None
                if candidate >= from_date:
                    return candidate
            return None
        case DailySchedule(start_date=start) | WeeklySchedule(start_date=start):
            # The scan window opens at the start date when that is later.
            cursor = max(from_date, start) if start is not None else from_date
            for offset in range(horizon_days):
                candidate = cursor + timedelta(days=offset)
                if is_covered(schedule, candidate):
                    return candidate
            return None
    return None


def next_covered_display(
    schedule: ServingSchedule | None,
    from_date: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> str | None:
    """Return the next covered date as M/D (Wkd), or None."""
    upcoming = next_covered(schedule, from_date, horizon_days)
    if upcoming is None:
        return None
    return format_with_weekday(upcoming)


def display_schedule(schedule: ServingSchedule | None, today: date) -> str:
    """Return a short label for cards and lists.

    A start date only shows up when it is still in the future.
    """
    if not is_valid_schedule(schedule):
        return ""
    match schedule:
        case OnceSchedule(date=scheduled):
            return format_short(scheduled)
        case DailySchedule(start_date=start):
            return "daily" + _future_start_suffix(start, today)
        case WeeklySchedule(start_date=start, weekdays=weekdays):
            return _weekday_list(weekdays) + _future_start_suffix(start, today)
        case SpecificDatesSchedule(dates=dates):
            if len(dates) <= MAX_LISTED_DATES:
                return ", ".join(format_short(day) for day in dates)
            return f"{len(dates)} dates"
    return ""


def describe_schedule(schedule: ServingSchedule | None) -> str:
    """Return a long label including the start date and time slot."""
    if schedule is None:
        return ""
    text = ""
    if is_valid_schedule(schedule):
        match schedule:
            case OnceSchedule(date=scheduled):
                text = format_short(scheduled)
            case DailySchedule(start_date=start):
                text = "daily" + _start_suffix(start)
            case WeeklySchedule(start_date=start, weekdays=weekdays):
                text = _weekday_list(weekdays) + _start_suffix(start)
            case SpecificDatesSchedule(dates=dates):
                text = ", ".join(format_short(day) for day in dates)
    slot = TIME_SLOT_LABELS[schedule.time_slot] if schedule.time_slot else ""
    if text and slot:
        return f"{text} {slot}"
    return text or slot


def today_message(schedule: ServingSchedule | None, today: date) -> str | None:
    """Return a staff-facing hint when the item is due today."""
    if not is_covered(schedule, today):
        return None
    match schedule:
        case DailySchedule():
            return "served daily"
        case WeeklySchedule():
            return f"today is {WEEKDAY_NAMES[weekday_index(today)]}"
        case _:
            return "scheduled for today"


def _weekday_list(weekdays: frozenset[int]) -> str:
    return ", ".join(WEEKDAY_LABELS[day] for day in sorted(weekdays))


def _future_start_suffix(start: date | None, today: date) -> str:
    if start is None or start <= today:
        return ""
    return _start_suffix(start)


def _start_suffix(start: date | None) -> str:
    if start is None:
        return ""
    return f" (from {format_short(start)})"
