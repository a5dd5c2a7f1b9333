"""Supabase repository for consumption events."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from care_inventory.domain.calendar import parse_date
from care_inventory.domain.items import ConsumptionEvent
from care_inventory.services.care_items import ConsumptionLogRepository


@dataclass
class SupabaseConsumptionLogRepository(ConsumptionLogRepository):
    """Supabase implementation for consumption logs."""

    client: Client

    def create_event(self, event: ConsumptionEvent) -> None:
        """Insert a consumption log row."""
        response = (
            self.client.table("consumption_logs")
            .insert(
                {
                    "id": str(event.id),
                    "item_id": str(event.item_id),
                    "served_on": event.served_on.isoformat(),
                    "served_quantity": event.served_quantity,
                    "consumed_quantity": event.consumed_quantity,
                    "consumption_rate": event.consumption_rate,
                    "wasted_quantity": event.wasted_quantity,
                    "remaining_handling": str(event.remaining_handling),
                    "quantity_before": event.quantity_before,
                    "quantity_after": event.quantity_after,
                    "recorded_by": event.recorded_by,
                    "recorded_at": event.recorded_at.isoformat(),
                    "note": event.note,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create consumption log")

    def last_consumption_dates(self, item_ids: list[UUID]) -> dict[UUID, date]:
        """Return the latest serving date for each item with a log."""
        if not item_ids:
            return {}
        response = (
            self.client.table("consumption_logs")
            .select("item_id, served_on")
            .in_("item_id", [str(item_id) for item_id in item_ids])
            .order("served_on", desc=True)
            .execute()
        )
        latest: dict[UUID, date] = {}
        for row in response.data or []:
            served_on = parse_date(row.get("served_on"))
            if served_on is None:
                continue
            item_id = UUID(str(row["item_id"]))
            if item_id not in latest or served_on > latest[item_id]:
                latest[item_id] = served_on
        return latest
