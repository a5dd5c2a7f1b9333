"""Supabase repository for resident skip dates."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from care_inventory.domain.calendar import parse_date
from care_inventory.domain.items import SkipDate
from care_inventory.services.skip_dates import SkipDateRepository


@dataclass
class SupabaseSkipDateRepository(SkipDateRepository):
    """Supabase implementation for skip dates."""

    client: Client

    def list_skip_dates(self, resident_id: UUID) -> list[SkipDate]:
        """Return a resident's skip dates."""
        response = (
            self.client.table("skip_dates")
            .select("id, resident_id, date, reason, created_at, created_by")
            .eq("resident_id", str(resident_id))
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create_skip_date(
        self, resident_id: UUID, day: date, reason: str | None, created_by: str
    ) -> SkipDate:
        """Create a skip date row and return it."""
        response = (
            self.client.table("skip_dates")
            .insert(
                {
                    "resident_id": str(resident_id),
                    "date": day.isoformat(),
                    "reason": reason,
                    "created_by": created_by,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create skip date")
        return _parse_row(response.data[0])

    def delete_skip_date(self, skip_date_id: UUID) -> None:
        """Delete a skip date row."""
        self.client.table("skip_dates").delete().eq("id", str(skip_date_id)).execute()


def _parse_row(row: dict[str, object]) -> SkipDate:
    created_at_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_at_raw)
        if isinstance(created_at_raw, str) and created_at_raw
        else datetime.min.replace(tzinfo=UTC)
    )
    day = parse_date(row.get("date"))
    if day is None:
        raise RuntimeError(f"Skip date {row.get('id')} has no date")
    return SkipDate(
        id=UUID(str(row["id"])),
        resident_id=UUID(str(row["resident_id"])),
        date=day,
        reason=row.get("reason") if isinstance(row.get("reason"), str) else None,
        created_at=created_at,
        created_by=str(row.get("created_by") or ""),
    )
