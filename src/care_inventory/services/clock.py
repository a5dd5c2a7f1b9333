"""Clock abstractions supplying the facility's current date."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current calendar date."""

    def today(self) -> date:
        """Return today's date."""


@dataclass(frozen=True)
class SystemClock(Clock):
    """Clock reading the wall time in the facility's timezone."""

    timezone_name: str = "UTC"

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
