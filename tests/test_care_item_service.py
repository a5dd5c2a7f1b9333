"""Tests for the care item service."""

from datetime import date
from uuid import uuid4

import pytest

from care_inventory.domain.items import ItemStatus, RemainingHandling
from care_inventory.domain.schedules import DailySchedule, OnceSchedule
from care_inventory.services.care_items import (
    CareItemNotFoundError,
    ConsumptionValidationError,
    InactiveItemError,
    QuantityExceededError,
)
from tests.conftest import RESIDENT_ID, TODAY, make_item


def test_list_active_filters_statuses(care_item_service, item_repository) -> None:
    pending = make_item(status=ItemStatus.PENDING)
    in_progress = make_item(status=ItemStatus.IN_PROGRESS)
    consumed = make_item(status=ItemStatus.CONSUMED)
    elsewhere = make_item(resident_id=uuid4())
    item_repository.add(pending, in_progress, consumed, elsewhere)

    active = care_item_service.list_active(RESIDENT_ID)

    assert {item.id for item in active} == {pending.id, in_progress.id}


def test_fifo_candidates_match_name_case_insensitively(
    care_item_service, item_repository
) -> None:
    later = make_item(name="Apple", expiration_date=date(2024, 1, 20))
    sooner = make_item(name="APPLE", expiration_date=date(2024, 1, 10))
    other = make_item(name="Yogurt")
    item_repository.add(later, sooner, other)

    candidates = care_item_service.fifo_candidates(RESIDENT_ID, "  apple ")

    assert candidates == [sooner, later]
    assert care_item_service.recommended_unit(RESIDENT_ID, "apple") == sooner
    assert care_item_service.recommended_unit(RESIDENT_ID, "pear") is None


def test_record_consumption_updates_stock_and_logs_event(
    care_item_service, item_repository, consumption_log_repository
) -> None:
    item = make_item(current_quantity=4.0, initial_quantity=4.0)
    item_repository.add(item)

    recorded = care_item_service.record_consumption(
        item_id=item.id,
        served_quantity=2,
        consumption_rate=0.5,
        remaining_handling=RemainingHandling.STORED,
        recorded_by="staff-1",
        note="ate slowly",
    )

    assert recorded.outcome.new_current_quantity == 3
    assert recorded.outcome.status == ItemStatus.IN_PROGRESS
    assert item_repository.items[item.id].current_quantity == 3
    assert isinstance(item_repository.items[item.id].current_quantity, float)
    assert item_repository.items[item.id].status == ItemStatus.IN_PROGRESS
    [event] = consumption_log_repository.events
    assert event == recorded.event
    assert event.served_on == TODAY
    assert event.quantity_before == 4.0
    assert event.quantity_after == 3
    assert event.consumed_quantity == 1
    assert event.wasted_quantity == 0
    assert event.consumption_rate == 0.5
    assert event.note == "ate slowly"


def test_record_consumption_defaults_handling_to_none(
    care_item_service, item_repository
) -> None:
    item = make_item()
    item_repository.add(item)

    recorded = care_item_service.record_consumption(
        item_id=item.id,
        served_quantity=1,
        consumption_rate=1.0,
        remaining_handling=None,
        recorded_by="staff-1",
    )

    assert recorded.event.remaining_handling == RemainingHandling.NONE
    assert recorded.outcome.status == ItemStatus.CONSUMED
    assert item_repository.items[item.id].status == ItemStatus.CONSUMED


def test_record_consumption_rejects_unknown_item(care_item_service) -> None:
    with pytest.raises(CareItemNotFoundError):
        care_item_service.record_consumption(
            item_id=make_item().id,
            served_quantity=1,
            consumption_rate=1.0,
            remaining_handling=None,
            recorded_by="staff-1",
        )


def test_record_consumption_rejects_inactive_item(
    care_item_service, item_repository
) -> None:
    item = make_item(status=ItemStatus.DISCARDED, current_quantity=2.0)
    item_repository.add(item)

    with pytest.raises(InactiveItemError):
        care_item_service.record_consumption(
            item_id=item.id,
            served_quantity=1,
            consumption_rate=1.0,
            remaining_handling=None,
            recorded_by="staff-1",
        )


@pytest.mark.parametrize(
    ("served", "rate", "error"),
    [
        (0, 0.5, ConsumptionValidationError),
        (-1, 0.5, ConsumptionValidationError),
        (1, 1.5, ConsumptionValidationError),
        (1, -0.1, ConsumptionValidationError),
        (3, 0.5, QuantityExceededError),
    ],
)
def test_record_consumption_validates_request(
    care_item_service, item_repository, consumption_log_repository, served, rate, error
) -> None:
    item = make_item(current_quantity=2.0)
    item_repository.add(item)

    with pytest.raises(error):
        care_item_service.record_consumption(
            item_id=item.id,
            served_quantity=served,
            consumption_rate=rate,
            remaining_handling=RemainingHandling.DISCARDED,
            recorded_by="staff-1",
        )

    assert consumption_log_repository.events == []
    assert item_repository.outcomes == []


def test_daily_overview_uses_last_consumption_dates(
    care_item_service, item_repository, consumption_log_repository
) -> None:
    overdue = make_item(name="Pudding", schedule=OnceSchedule(date=date(2024, 1, 1)))
    served = make_item(name="Milk", schedule=DailySchedule(), current_quantity=5.0)
    item_repository.add(overdue, served)
    care_item_service.record_consumption(
        item_id=served.id,
        served_quantity=1,
        consumption_rate=1.0,
        remaining_handling=None,
        recorded_by="staff-1",
    )

    overview = care_item_service.daily_overview(RESIDENT_ID)

    assert [item.id for item in overview.missed] == [overdue.id]
    assert [item.id for item in overview.recorded_today] == [served.id]
    assert overview.scheduled_today == []


def test_daily_overview_uses_expiring_window(
    care_item_service, item_repository
) -> None:
    unit = make_item(expiration_date=date(2024, 1, 8))
    item_repository.add(unit)

    assert care_item_service.daily_overview(RESIDENT_ID).other == [unit]

    care_item_service.expiring_soon_days = 5

    assert care_item_service.daily_overview(RESIDENT_ID).expiring == [unit]
