"""Supabase repository for insulin records."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.adapters.supabase_rows import (
    optional_uuid,
    parse_datetime,
    required_datetime,
    serialize_values,
    to_float,
)
from diabetes_tracker.domain.insulin import InsulinRecord
from diabetes_tracker.services.insulin import InsulinRepository

_COLUMNS = (
    "id, user_id, insulin_type, dose_units, injected_at, injection_site, notes, "
    "meal_id, created_at"
)


@dataclass
class SupabaseInsulinRepository(InsulinRepository):
    """Supabase implementation for insulin records."""

    client: Client

    def list_records(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[InsulinRecord]:
        """Return records in the inclusive range, newest first."""
        query = (
            self.client.table("insulin_records")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("injected_at", start.isoformat())
        if end is not None:
            query = query.lte("injected_at", end.isoformat())
        response = query.order("injected_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def get_record(self, record_id: UUID) -> InsulinRecord | None:
        """Return a record by id."""
        response = (
            self.client.table("insulin_records")
            .select(_COLUMNS)
            .eq("id", str(record_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_record(self, user_id: UUID, values: dict[str, object]) -> InsulinRecord:
        """Insert a record row and return it."""
        payload = serialize_values(values)
        payload["user_id"] = str(user_id)
        payload["created_at"] = datetime.now(tz=UTC).isoformat()
        response = self.client.table("insulin_records").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create insulin record")
        return _parse_row(response.data[0])

    def update_record(
        self, record_id: UUID, values: dict[str, object]
    ) -> InsulinRecord | None:
        """Update a record row and return it."""
        response = (
            self.client.table("insulin_records")
            .update(serialize_values(values))
            .eq("id", str(record_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_record(self, record_id: UUID) -> bool:
        """Delete a record row."""
        response = (
            self.client.table("insulin_records")
            .delete()
            .eq("id", str(record_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> InsulinRecord:
    return InsulinRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        insulin_type=str(row.get("insulin_type") or ""),
        dose_units=to_float(row.get("dose_units")),
        injected_at=required_datetime(row.get("injected_at")),
        injection_site=row.get("injection_site"),
        notes=row.get("notes"),
        meal_id=optional_uuid(row.get("meal_id")),
        created_at=parse_datetime(row.get("created_at")),
    )
