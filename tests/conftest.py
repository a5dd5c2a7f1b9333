"""Shared test fixtures."""

from collections.abc import Collection
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from care_inventory.config import Settings
from care_inventory.containers import AppContainer
from care_inventory.domain.items import (
    CareItem,
    ConsumptionEvent,
    ConsumptionOutcome,
    ItemCategory,
    ItemStatus,
    SkipDate,
)
from care_inventory.services.care_items import (
    CareItemRepository,
    CareItemService,
    ConsumptionLogRepository,
)
from care_inventory.services.clock import Clock
from care_inventory.services.schedules import ScheduleService
from care_inventory.services.skip_dates import SkipDateRepository, SkipDateService

RESIDENT_ID = UUID("00000000-0000-0000-0000-000000000001")
# Wednesday
TODAY = date(2024, 1, 3)


def make_item(**overrides: object) -> CareItem:
    """Build a care item with sensible defaults."""
    values: dict[str, object] = {
        "id": uuid4(),
        "resident_id": RESIDENT_ID,
        "name": "Apple",
        "category": ItemCategory.FRUIT,
        "sent_date": date(2024, 1, 1),
    }
    values.update(overrides)
    return CareItem(**values)  # type: ignore[arg-type]


@dataclass
class FixedClock(Clock):
    """Clock pinned to a single date."""

    day: date = TODAY

    def today(self) -> date:
        return self.day


@dataclass
class InMemoryCareItemRepository(CareItemRepository):
    """In-memory care item repository for tests."""

    items: dict[UUID, CareItem] = field(default_factory=dict)
    outcomes: list[tuple[UUID, ConsumptionOutcome]] = field(default_factory=list)

    def add(self, *items: CareItem) -> None:
        for item in items:
            self.items[item.id] = item

    def list_items(
        self, resident_id: UUID, statuses: Collection[ItemStatus] | None = None
    ) -> list[CareItem]:
        return [
            item
            for item in self.items.values()
            if item.resident_id == resident_id
            and (not statuses or item.status in statuses)
        ]

    def get_item(self, item_id: UUID) -> CareItem | None:
        return self.items.get(item_id)

    def apply_outcome(self, item_id: UUID, outcome: ConsumptionOutcome) -> None:
        self.outcomes.append((item_id, outcome))
        current = self.items[item_id]
        self.items[item_id] = replace(
            current,
            current_quantity=(
                float(outcome.new_current_quantity)
                if outcome.new_current_quantity is not None
                else None
            ),
            status=outcome.status,
        )


@dataclass
class InMemoryConsumptionLogRepository(ConsumptionLogRepository):
    """In-memory consumption log repository for tests."""

    events: list[ConsumptionEvent] = field(default_factory=list)
    served_dates: dict[UUID, list[date]] = field(default_factory=dict)

    def create_event(self, event: ConsumptionEvent) -> None:
        self.events.append(event)
        self.served_dates.setdefault(event.item_id, []).append(event.served_on)

    def last_consumption_dates(self, item_ids: list[UUID]) -> dict[UUID, date]:
        return {
            item_id: max(self.served_dates[item_id])
            for item_id in item_ids
            if self.served_dates.get(item_id)
        }


@dataclass
class InMemorySkipDateRepository(SkipDateRepository):
    """In-memory skip date repository for tests."""

    skip_dates: dict[UUID, SkipDate] = field(default_factory=dict)

    def list_skip_dates(self, resident_id: UUID) -> list[SkipDate]:
        return [
            skip for skip in self.skip_dates.values() if skip.resident_id == resident_id
        ]

    def create_skip_date(
        self, resident_id: UUID, day: date, reason: str | None, created_by: str
    ) -> SkipDate:
        skip = SkipDate(
            id=uuid4(),
            resident_id=resident_id,
            date=day,
            reason=reason,
            created_at=datetime.now(tz=UTC),
            created_by=created_by,
        )
        self.skip_dates[skip.id] = skip
        return skip

    def delete_skip_date(self, skip_date_id: UUID) -> None:
        self.skip_dates.pop(skip_date_id, None)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def item_repository() -> InMemoryCareItemRepository:
    return InMemoryCareItemRepository()


@pytest.fixture
def consumption_log_repository() -> InMemoryConsumptionLogRepository:
    return InMemoryConsumptionLogRepository()


@pytest.fixture
def skip_date_repository() -> InMemorySkipDateRepository:
    return InMemorySkipDateRepository()


@pytest.fixture
def care_item_service(
    item_repository: InMemoryCareItemRepository,
    consumption_log_repository: InMemoryConsumptionLogRepository,
    clock: FixedClock,
) -> CareItemService:
    return CareItemService(
        items=item_repository,
        consumption_logs=consumption_log_repository,
        clock=clock,
    )


@pytest.fixture
def skip_date_service(
    skip_date_repository: InMemorySkipDateRepository,
) -> SkipDateService:
    return SkipDateService(skip_date_repository)


@pytest.fixture
def schedule_service(
    care_item_service: CareItemService,
    skip_date_service: SkipDateService,
    clock: FixedClock,
) -> ScheduleService:
    return ScheduleService(
        care_item_service=care_item_service,
        skip_date_service=skip_date_service,
        clock=clock,
        gap_horizon_days=7,
    )


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    care_item_service: CareItemService,
    skip_date_service: SkipDateService,
    schedule_service: ScheduleService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        clock=clock,
        care_item_service=care_item_service,
        skip_date_service=skip_date_service,
        schedule_service=schedule_service,
    )
