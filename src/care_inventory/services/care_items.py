"""Care item use cases backed by the item and consumption repositories."""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from care_inventory.domain.items import (
    ACTIVE_STATUSES,
    CareItem,
    ConsumptionEvent,
    ConsumptionOutcome,
    ItemStatus,
    RemainingHandling,
)
from care_inventory.services.clock import Clock
from care_inventory.services.expiration import EXPIRING_SOON_DAYS
from care_inventory.services.fifo import order_fifo, recommend_unit
from care_inventory.services.ledger import apply_consumption
from care_inventory.services.missed import STALENESS_DAYS, ItemPartition, partition_items

_logger = logging.getLogger(__name__)


class CareItemRepository(Protocol):
    """Persistence interface for care items."""

    def list_items(
        self, resident_id: UUID, statuses: Collection[ItemStatus] | None = None
    ) -> list[CareItem]:
        """Return a resident's items, optionally filtered by status."""

    def get_item(self, item_id: UUID) -> CareItem | None:
        """Return an item by id, if present."""

    def apply_outcome(self, item_id: UUID, outcome: ConsumptionOutcome) -> None:
        """Persist the quantity and status produced by the ledger."""


class ConsumptionLogRepository(Protocol):
    """Persistence interface for consumption events."""

    def create_event(self, event: ConsumptionEvent) -> None:
        """Persist a consumption event."""

    def last_consumption_dates(self, item_ids: list[UUID]) -> dict[UUID, date]:
        """Return the latest serving date per item that has any event."""


class ConsumptionValidationError(ValueError):
    """Raised when a consumption request fails a precondition."""


class CareItemNotFoundError(ConsumptionValidationError):
    """Raised when the referenced care item does not exist."""


class InactiveItemError(ConsumptionValidationError):
    """Raised when the care item is no longer being served."""


class QuantityExceededError(ConsumptionValidationError):
    """Raised when more is served than is left in stock."""


@dataclass(frozen=True)
class RecordedConsumption:
    """Event written for a serving and the ledger outcome behind it."""

    event: ConsumptionEvent
    outcome: ConsumptionOutcome


@dataclass
class CareItemService:
    """Application service for serving care items."""

    items: CareItemRepository
    consumption_logs: ConsumptionLogRepository
    clock: Clock
    missed_staleness_days: int = STALENESS_DAYS
    expiring_soon_days: int = EXPIRING_SOON_DAYS

    def list_active(self, resident_id: UUID) -> list[CareItem]:
        """Return a resident's items that can still be served."""
        return self.items.list_items(resident_id, statuses=ACTIVE_STATUSES)

    def fifo_candidates(self, resident_id: UUID, name: str) -> list[CareItem]:
        """Return active units matching the name, soonest-expiring first."""
        key = name.strip().casefold()
        return order_fifo(
            item for item in self.list_active(resident_id) if item.grouping_key == key
        )

    def recommended_unit(self, resident_id: UUID, name: str) -> CareItem | None:
        """Return the unit staff should serve next for the name."""
        return recommend_unit(self.fifo_candidates(resident_id, name))

    def daily_overview(self, resident_id: UUID) -> ItemPartition:
        """Bucket active items for today's serving round."""
        items = self.list_active(resident_id)
        last_dates = self.consumption_logs.last_consumption_dates(
            [item.id for item in items]
        )
        return partition_items(
            items,
            today=self.clock.today(),
            last_consumption_dates=last_dates,
            staleness_days=self.missed_staleness_days,
            expiring_soon_days=self.expiring_soon_days,
        )

    def record_consumption(  # noqa: PLR0913
        self,
        item_id: UUID,
        served_quantity: float,
        consumption_rate: float,
        remaining_handling: RemainingHandling | None,
        recorded_by: str,
        note: str | None = None,
    ) -> RecordedConsumption:
        """Validate a serving, run it through the ledger and persist it."""
        item = self.items.get_item(item_id)
        if item is None:
            raise CareItemNotFoundError(f"Care item {item_id} not found")
        if not item.is_active:
            raise InactiveItemError(f"Care item {item_id} is {item.status}")
        if served_quantity <= 0:
            raise ConsumptionValidationError("Served quantity must be positive")
        if not 0 <= consumption_rate <= 1:
            raise ConsumptionValidationError("Consumption rate must be between 0 and 1")
        if item.current_quantity is not None and served_quantity > item.current_quantity:
            raise QuantityExceededError(
                f"Served quantity {served_quantity} exceeds remaining stock "
                f"{item.current_quantity}"
            )

        outcome = apply_consumption(
            item, served_quantity, consumption_rate, remaining_handling
        )
        event = ConsumptionEvent(
            id=uuid4(),
            item_id=item.id,
            served_on=self.clock.today(),
            served_quantity=served_quantity,
            consumed_quantity=float(outcome.consumed),
            wasted_quantity=float(outcome.wasted),
            remaining_handling=remaining_handling or RemainingHandling.NONE,
            quantity_before=item.current_quantity,
            quantity_after=(
                float(outcome.new_current_quantity)
                if outcome.new_current_quantity is not None
                else None
            ),
            recorded_by=recorded_by,
            recorded_at=datetime.now(tz=UTC),
            note=note,
        )
        self.consumption_logs.create_event(event)
        self.items.apply_outcome(item.id, outcome)
        _logger.info(
            "Recorded consumption: item_id=%s served=%s consumed=%s wasted=%s "
            "remaining=%s status=%s",
            item.id,
            served_quantity,
            outcome.consumed,
            outcome.wasted,
            outcome.new_current_quantity,
            outcome.status,
        )
        return RecordedConsumption(event=event, outcome=outcome)
