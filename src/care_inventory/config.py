"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from care_inventory.services.gaps import ScheduleExclusion

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    facility_timezone: str = "Asia/Tokyo"
    gap_horizon_days: int = 14
    next_occurrence_horizon_days: int = 30
    missed_staleness_days: int = 3
    expiring_soon_days: int = 3
    log_level: str = "INFO"
    gap_exclusions: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_schedule_exclusions(raw: str | None) -> frozenset[ScheduleExclusion]:
    """Parse schedule types to ignore during gap detection from env."""
    if raw is None:
        return frozenset()
    exclusions: set[ScheduleExclusion] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if not value:
            continue
        try:
            exclusions.add(ScheduleExclusion(value))
        except ValueError:
            continue
    return frozenset(exclusions)
