"""Resident-level dates with no service expected."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from care_inventory.domain.items import SkipDate


class SkipDateRepository(Protocol):
    """Persistence interface for skip dates."""

    def list_skip_dates(self, resident_id: UUID) -> list[SkipDate]:
        """Return a resident's skip dates."""

    def create_skip_date(
        self, resident_id: UUID, day: date, reason: str | None, created_by: str
    ) -> SkipDate:
        """Create a skip date and return it."""

    def delete_skip_date(self, skip_date_id: UUID) -> None:
        """Delete a skip date."""


@dataclass
class SkipDateService:
    """Application service for marking days as "no service"."""

    repository: SkipDateRepository

    def list_skip_dates(self, resident_id: UUID) -> list[SkipDate]:
        """Return skip dates in date order."""
        return sorted(
            self.repository.list_skip_dates(resident_id), key=lambda skip: skip.date
        )

    def dates(self, resident_id: UUID) -> set[date]:
        """Return the skipped dates as a set."""
        return {skip.date for skip in self.repository.list_skip_dates(resident_id)}

    def add(
        self,
        resident_id: UUID,
        day: date,
        reason: str | None = None,
        created_by: str = "family",
    ) -> SkipDate:
        """Mark a date as skipped, returning the existing entry if already set."""
        for existing in self.repository.list_skip_dates(resident_id):
            if existing.date == day:
                return existing
        return self.repository.create_skip_date(resident_id, day, reason, created_by)

    def remove(self, skip_date_id: UUID) -> None:
        """Remove a skip date."""
        self.repository.delete_skip_date(skip_date_id)
