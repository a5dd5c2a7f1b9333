"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status

from care_inventory.api.models import ConsumptionRequest, SkipDateRequest
from care_inventory.app_logging import configure_logging
from care_inventory.containers import AppContainer
from care_inventory.domain.calendar import format_date
from care_inventory.domain.items import CareItem, SkipDate
from care_inventory.domain.schedules import dump_schedule
from care_inventory.services.care_items import (
    CareItemNotFoundError,
    ConsumptionValidationError,
)
from care_inventory.services.expiration import days_until_expiration
from care_inventory.services.gaps import ScheduleExclusion
from care_inventory.services.recurrence import display_schedule, today_message


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/residents/{resident_id}/unscheduled-dates")
    async def unscheduled_dates(
        resident_id: UUID,
        request: Request,
        horizon_days: int | None = Query(default=None, ge=1, le=366),
        exclude: list[ScheduleExclusion] | None = Query(default=None),
    ) -> dict[str, object]:
        """Return upcoming dates with no scheduled item and no skip mark."""
        state_container: AppContainer = request.app.state.container
        gaps = state_container.schedule_service.unscheduled_dates(
            resident_id, horizon_days=horizon_days, exclusions=exclude
        )
        return {
            "unscheduled_dates": [
                {
                    "date": format_date(gap.date),
                    "day_of_week": gap.day_of_week,
                    "is_weekend": gap.is_weekend,
                }
                for gap in gaps
            ]
        }

    @app.get("/residents/{resident_id}/overview")
    async def overview(resident_id: UUID, request: Request) -> dict[str, object]:
        """Return active items bucketed for today's serving round."""
        state_container: AppContainer = request.app.state.container
        today = state_container.clock.today()
        partition = state_container.care_item_service.daily_overview(resident_id)
        return {
            "date": format_date(today),
            "missed": [_item_payload(item, today) for item in partition.missed],
            "scheduled_today": [
                _item_payload(item, today) for item in partition.scheduled_today
            ],
            "recorded_today": [
                _item_payload(item, today) for item in partition.recorded_today
            ],
            "expired": [_item_payload(item, today) for item in partition.expired],
            "expiring": [_item_payload(item, today) for item in partition.expiring],
            "other": [_item_payload(item, today) for item in partition.other],
        }

    @app.get("/residents/{resident_id}/fifo")
    async def fifo(
        resident_id: UUID, request: Request, name: str = Query(min_length=1)
    ) -> dict[str, object]:
        """Return same-named units in the order they should be served."""
        state_container: AppContainer = request.app.state.container
        today = state_container.clock.today()
        units = state_container.care_item_service.fifo_candidates(resident_id, name)
        return {
            "recommended_id": str(units[0].id) if units else None,
            "units": [_item_payload(unit, today) for unit in units],
        }

    @app.post("/items/{item_id}/consumption")
    async def record_consumption(
        item_id: UUID, payload: ConsumptionRequest, request: Request
    ) -> dict[str, object]:
        """Record a serving and return the resulting stock."""
        state_container: AppContainer = request.app.state.container
        try:
            recorded = state_container.care_item_service.record_consumption(
                item_id=item_id,
                served_quantity=payload.served_quantity,
                consumption_rate=payload.consumption_rate,
                remaining_handling=payload.remaining_handling,
                recorded_by=payload.recorded_by,
                note=payload.note,
            )
        except CareItemNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except ConsumptionValidationError as exc:
            logger.info("Rejected consumption for %s: %s", item_id, exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        outcome = recorded.outcome
        return {
            "event_id": str(recorded.event.id),
            "consumed": float(outcome.consumed),
            "wasted": float(outcome.wasted),
            "deducted": float(outcome.deducted),
            "current_quantity": (
                float(outcome.new_current_quantity)
                if outcome.new_current_quantity is not None
                else None
            ),
            "status": str(outcome.status),
            "status_changed": outcome.status_changed,
        }

    @app.get("/residents/{resident_id}/skip-dates")
    async def list_skip_dates(resident_id: UUID, request: Request) -> dict[str, object]:
        """Return the resident's skip dates."""
        state_container: AppContainer = request.app.state.container
        skips = state_container.skip_date_service.list_skip_dates(resident_id)
        return {"skip_dates": [_skip_payload(skip) for skip in skips]}

    @app.post("/residents/{resident_id}/skip-dates", status_code=201)
    async def add_skip_date(
        resident_id: UUID, payload: SkipDateRequest, request: Request
    ) -> dict[str, object]:
        """Mark a date as "no service" for the resident."""
        state_container: AppContainer = request.app.state.container
        skip = state_container.skip_date_service.add(
            resident_id, payload.date, payload.reason, payload.created_by
        )
        return _skip_payload(skip)

    @app.delete("/skip-dates/{skip_date_id}", status_code=204)
    async def remove_skip_date(skip_date_id: UUID, request: Request) -> None:
        """Remove a skip date."""
        state_container: AppContainer = request.app.state.container
        state_container.skip_date_service.remove(skip_date_id)

    return app


def _item_payload(item: CareItem, today: date) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "category": str(item.category),
        "status": str(item.status),
        "sent_date": format_date(item.sent_date),
        "expiration_date": (
            format_date(item.expiration_date) if item.expiration_date else None
        ),
        "days_until_expiration": days_until_expiration(item, today),
        "current_quantity": item.current_quantity,
        "unit": item.unit,
        "schedule": dump_schedule(item.schedule) if item.schedule else None,
        "schedule_label": display_schedule(item.schedule, today),
        "today_message": today_message(item.schedule, today),
    }


def _skip_payload(skip: SkipDate) -> dict[str, object]:
    return {
        "id": str(skip.id),
        "date": format_date(skip.date),
        "reason": skip.reason,
        "created_by": skip.created_by,
        "created_at": skip.created_at.isoformat(),
    }
