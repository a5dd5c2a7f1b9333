"""Supabase repository for care items."""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from care_inventory.domain.calendar import parse_date
from care_inventory.domain.items import (
    CareItem,
    ConsumptionOutcome,
    ItemCategory,
    ItemStatus,
)
from care_inventory.domain.schedules import parse_schedule
from care_inventory.services.care_items import CareItemRepository

_logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, resident_id, item_name, normalized_name, category, sent_date, "
    "expiration_date, unit, initial_quantity, current_quantity, status, "
    "serving_schedule"
)


@dataclass
class SupabaseCareItemRepository(CareItemRepository):
    """Supabase-backed repository for care items."""

    client: Client

    def list_items(
        self, resident_id: UUID, statuses: Collection[ItemStatus] | None = None
    ) -> list[CareItem]:
        """Return a resident's items, optionally filtered by status."""
        query = (
            self.client.table("care_items")
            .select(_COLUMNS)
            .eq("resident_id", str(resident_id))
        )
        if statuses:
            query = query.in_("status", sorted(str(status) for status in statuses))
        response = query.order("sent_date", desc=False).execute()
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, item_id: UUID) -> CareItem | None:
        """Return an item by id, if present."""
        response = (
            self.client.table("care_items")
            .select(_COLUMNS)
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def apply_outcome(self, item_id: UUID, outcome: ConsumptionOutcome) -> None:
        """Update remaining quantity and status after a serving."""
        payload: dict[str, object] = {"status": str(outcome.status)}
        if outcome.new_current_quantity is not None:
            payload["current_quantity"] = float(outcome.new_current_quantity)
        response = (
            self.client.table("care_items")
            .update(payload)
            .eq("id", str(item_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update care item")


def _parse_item(row: dict[str, object]) -> CareItem:
    schedule = parse_schedule(row.get("serving_schedule"))
    if schedule is None and row.get("serving_schedule"):
        _logger.warning("Ignoring unreadable schedule for care item %s", row["id"])
    sent_date = parse_date(row.get("sent_date"))
    if sent_date is None:
        raise RuntimeError(f"Care item {row['id']} has no sent date")
    return CareItem(
        id=UUID(str(row["id"])),
        resident_id=UUID(str(row["resident_id"])),
        name=str(row.get("item_name") or ""),
        normalized_name=_optional_str(row.get("normalized_name")),
        category=_parse_category(row.get("category")),
        sent_date=sent_date,
        expiration_date=parse_date(row.get("expiration_date")),
        unit=_optional_str(row.get("unit")),
        initial_quantity=_optional_float(row.get("initial_quantity")),
        current_quantity=_optional_float(row.get("current_quantity")),
        status=ItemStatus(str(row.get("status") or ItemStatus.PENDING)),
        schedule=schedule,
    )


def _parse_category(value: object) -> ItemCategory:
    try:
        return ItemCategory(str(value))
    except ValueError:
        return ItemCategory.OTHER


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
