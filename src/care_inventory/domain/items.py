"""Domain models for care items and their consumption."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from care_inventory.domain.schedules import ServingSchedule


class ItemCategory(StrEnum):
    """Kind of care item."""

    FRUIT = "fruit"
    SNACK = "snack"
    DRINK = "drink"
    DAIRY = "dairy"
    PREPARED = "prepared"
    SUPPLEMENT = "supplement"
    OTHER = "other"


class ItemStatus(StrEnum):
    """Lifecycle status of a care item."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    CONSUMED = "consumed"
    DISCARDED = "discarded"
    PENDING_DISCARD = "pending_discard"


ACTIVE_STATUSES = frozenset({ItemStatus.PENDING, ItemStatus.IN_PROGRESS})


class RemainingHandling(StrEnum):
    """What happened to the served portion that was not eaten."""

    DISCARDED = "discarded"
    STORED = "stored"
    OTHER = "other"
    NONE = "none"


@dataclass(frozen=True)
class CareItem:
    """One physical batch of a consumable brought in for a resident.

    ``current_quantity`` of None means the quantity is not tracked and the
    item is only ever served or not served.
    """

    id: UUID
    resident_id: UUID
    name: str
    category: ItemCategory
    sent_date: date
    status: ItemStatus = ItemStatus.PENDING
    normalized_name: str | None = None
    expiration_date: date | None = None
    unit: str | None = None
    initial_quantity: float | None = None
    current_quantity: float | None = None
    schedule: ServingSchedule | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def quantity_tracked(self) -> bool:
        return self.current_quantity is not None

    @property
    def grouping_key(self) -> str:
        """Key used to group physical units of the same item."""
        if self.normalized_name and self.normalized_name.strip():
            return self.normalized_name.strip().casefold()
        return self.name.strip().casefold()


@dataclass(frozen=True)
class ConsumptionEvent:
    """A serve-and-consume record for a care item."""

    id: UUID
    item_id: UUID
    served_on: date
    served_quantity: float
    consumed_quantity: float
    wasted_quantity: float
    remaining_handling: RemainingHandling
    quantity_before: float | None
    quantity_after: float | None
    recorded_by: str
    recorded_at: datetime
    note: str | None = None

    @property
    def consumption_rate(self) -> float:
        if self.served_quantity <= 0:
            return 0.0
        return self.consumed_quantity / self.served_quantity


@dataclass(frozen=True)
class ConsumptionOutcome:
    """Ledger result for one consumption event, ready to be persisted.

    Amounts are in hundredths; ``consumed + wasted == deducted`` exactly.
    """

    consumed: Decimal
    wasted: Decimal
    deducted: Decimal
    new_current_quantity: Decimal | None
    status: ItemStatus
    status_changed: bool


@dataclass(frozen=True)
class SkipDate:
    """A date on which no service is expected for a resident."""

    id: UUID
    resident_id: UUID
    date: date
    created_at: datetime
    created_by: str
    reason: str | None = None


@dataclass(frozen=True)
class UnscheduledDate:
    """A date not covered by any active item schedule nor skipped."""

    date: date
    day_of_week: int
    is_weekend: bool
