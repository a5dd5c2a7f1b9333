"""Schedule coverage queries over a resident's items."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from care_inventory.domain.items import CareItem, UnscheduledDate
from care_inventory.services.care_items import CareItemService
from care_inventory.services.clock import Clock
from care_inventory.services.gaps import ScheduleExclusion, find_gaps
from care_inventory.services.recurrence import (
    DEFAULT_HORIZON_DAYS,
    display_schedule,
    next_covered,
)
from care_inventory.services.skip_dates import SkipDateService


@dataclass(frozen=True)
class UpcomingServing:
    """Next expected serving of an item."""

    item: CareItem
    next_date: date | None
    label: str


@dataclass
class ScheduleService:
    """Service answering coverage questions for the family's planning view."""

    care_item_service: CareItemService
    skip_date_service: SkipDateService
    clock: Clock
    gap_horizon_days: int = 14
    next_occurrence_horizon_days: int = DEFAULT_HORIZON_DAYS
    default_exclusions: frozenset[ScheduleExclusion] = frozenset()

    def unscheduled_dates(
        self,
        resident_id: UUID,
        horizon_days: int | None = None,
        exclusions: Iterable[ScheduleExclusion] | None = None,
    ) -> list[UnscheduledDate]:
        """Return upcoming dates no item covers and nobody skipped."""
        return find_gaps(
            self.care_item_service.list_active(resident_id),
            self.skip_date_service.dates(resident_id),
            today=self.clock.today(),
            horizon_days=(
                self.gap_horizon_days if horizon_days is None else horizon_days
            ),
            exclusions=(
                self.default_exclusions if exclusions is None else exclusions
            ),
        )

    def next_occurrences(self, resident_id: UUID) -> list[UpcomingServing]:
        """Return each scheduled item's next serving date, soonest first."""
        today = self.clock.today()
        upcoming = [
            UpcomingServing(
                item=item,
                next_date=next_covered(
                    item.schedule, today, self.next_occurrence_horizon_days
                ),
                label=display_schedule(item.schedule, today),
            )
            for item in self.care_item_service.list_active(resident_id)
            if item.schedule is not None
        ]
        return sorted(
            upcoming,
            key=lambda entry: (entry.next_date is None, entry.next_date or date.max),
        )
