"""Calendar helpers shared by the scheduling code.

Weekdays are indexed Sunday-first (0 = Sunday, 6 = Saturday) to match how
serving schedules store them.
"""

from datetime import date, datetime, timedelta

DECEMBER = 12
SATURDAY = 6
SUNDAY = 0

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def weekday_index(day: date) -> int:
    """Return the Sunday-first weekday index of a date."""
    return (day.weekday() + 1) % 7


def is_weekend(day: date) -> bool:
    """Return True for Saturdays and Sundays."""
    return weekday_index(day) in {SATURDAY, SUNDAY}


def format_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.isoformat()


def format_short(day: date) -> str:
    """Format a date as M/D for compact display."""
    return f"{day.month}/{day.day}"


def format_with_weekday(day: date) -> str:
    """Format a date as M/D (Wkd)."""
    return f"{format_short(day)} ({WEEKDAY_LABELS[weekday_index(day)]})"


def parse_date(value: object) -> date | None:
    """Parse a date from a date, datetime or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return date.fromisoformat(cleaned[:10])
        except ValueError:
            return None
    return None


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Sunday and Saturday of the week containing the date."""
    start = day - timedelta(days=weekday_index(day))
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing the date."""
    start = day.replace(day=1)
    if start.month == DECEMBER:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, next_month - timedelta(days=1)


def date_range(start: date, days: int) -> list[date]:
    """Return consecutive dates beginning at start."""
    return [start + timedelta(days=offset) for offset in range(max(days, 0))]


def days_between(start: date, end: date) -> int:
    """Return the signed number of days from start to end."""
    return (end - start).days
