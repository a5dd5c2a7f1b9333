"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from care_inventory.adapters.supabase_care_item_repository import (
    SupabaseCareItemRepository,
)
from care_inventory.adapters.supabase_consumption_log_repository import (
    SupabaseConsumptionLogRepository,
)
from care_inventory.adapters.supabase_skip_date_repository import (
    SupabaseSkipDateRepository,
)
from care_inventory.config import Settings, parse_schedule_exclusions
from care_inventory.services.care_items import CareItemService
from care_inventory.services.clock import Clock, SystemClock
from care_inventory.services.schedules import ScheduleService
from care_inventory.services.skip_dates import SkipDateService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    care_item_service: CareItemService
    skip_date_service: SkipDateService
    schedule_service: ScheduleService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock(resolved_settings.facility_timezone)
    care_item_service = CareItemService(
        items=SupabaseCareItemRepository(supabase_client),
        consumption_logs=SupabaseConsumptionLogRepository(supabase_client),
        clock=clock,
        missed_staleness_days=resolved_settings.missed_staleness_days,
        expiring_soon_days=resolved_settings.expiring_soon_days,
    )
    skip_date_service = SkipDateService(SupabaseSkipDateRepository(supabase_client))
    schedule_service = ScheduleService(
        care_item_service=care_item_service,
        skip_date_service=skip_date_service,
        clock=clock,
        gap_horizon_days=resolved_settings.gap_horizon_days,
        next_occurrence_horizon_days=resolved_settings.next_occurrence_horizon_days,
        default_exclusions=parse_schedule_exclusions(resolved_settings.gap_exclusions),
    )
    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        care_item_service=care_item_service,
        skip_date_service=skip_date_service,
        schedule_service=schedule_service,
    )
