"""First-expired-first-out ordering of care item units."""

from collections.abc import Iterable
from datetime import date

from care_inventory.domain.items import CareItem


def fifo_key(unit: CareItem) -> tuple[bool, date, date]:
    """Sort key: dated units first, by expiration then arrival."""
    if unit.expiration_date is None:
        return (True, date.max, unit.sent_date)
    return (False, unit.expiration_date, unit.sent_date)


def order_fifo(units: Iterable[CareItem]) -> list[CareItem]:
    """Return units ordered so the one to serve first comes first.

    Units sharing both dates keep their input order.
    """
    return sorted(units, key=fifo_key)


def recommend_unit(units: Iterable[CareItem]) -> CareItem | None:
    """Return the unit that should be served next, if any."""
    ordered = order_fifo(units)
    return ordered[0] if ordered else None


def group_by_name(units: Iterable[CareItem]) -> dict[str, list[CareItem]]:
    """Group active units by name, each group in FIFO order."""
    groups: dict[str, list[CareItem]] = {}
    for unit in units:
        if not unit.is_active:
            continue
        groups.setdefault(unit.grouping_key, []).append(unit)
    return {key: order_fifo(group) for key, group in groups.items()}


def same_name_units(units: Iterable[CareItem], unit: CareItem) -> list[CareItem]:
    """Return other active units sharing the unit's name, in FIFO order."""
    return order_fifo(
        other
        for other in units
        if other.id != unit.id
        and other.is_active
        and other.grouping_key == unit.grouping_key
    )


def fifo_position(units: Iterable[CareItem], unit: CareItem) -> int | None:
    """Return the zero-based FIFO rank of the unit among its namesakes."""
    group = order_fifo(
        other
        for other in units
        if other.is_active and other.grouping_key == unit.grouping_key
    )
    for index, candidate in enumerate(group):
        if candidate.id == unit.id:
            return index
    return None
