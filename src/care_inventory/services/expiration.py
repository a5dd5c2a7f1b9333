"""Expiration urgency of care item units."""

from datetime import date

from care_inventory.domain.calendar import days_between
from care_inventory.domain.items import CareItem

EXPIRING_SOON_DAYS = 3


def days_until_expiration(unit: CareItem, today: date) -> int | None:
    """Return days left before the unit expires, negative once expired."""
    if unit.expiration_date is None:
        return None
    return days_between(today, unit.expiration_date)


def is_expired(unit: CareItem, today: date) -> bool:
    """Return True if the expiration date is already behind us."""
    days = days_until_expiration(unit, today)
    return days is not None and days < 0


def is_expiring_soon(
    unit: CareItem, today: date, window_days: int = EXPIRING_SOON_DAYS
) -> bool:
    """Return True if the unit expires today or within the window."""
    days = days_until_expiration(unit, today)
    return days is not None and 0 <= days <= window_days
