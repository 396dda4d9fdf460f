"""Supabase repository for glucose readings."""

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
from diabetes_tracker.domain.glucose import GlucoseReading
from diabetes_tracker.services.glucose import GlucoseRepository

_COLUMNS = (
    "id, user_id, value, measured_at, measurement_type, mood, notes, meal_id, "
    "created_at"
)


@dataclass
class SupabaseGlucoseRepository(GlucoseRepository):
    """Supabase implementation for glucose readings."""

    client: Client

    def list_readings(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[GlucoseReading]:
        """Return readings in the inclusive range, newest first."""
        query = (
            self.client.table("glucose_readings")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("measured_at", start.isoformat())
        if end is not None:
            query = query.lte("measured_at", end.isoformat())
        response = query.order("measured_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def get_reading(self, reading_id: UUID) -> GlucoseReading | None:
        """Return a reading by id."""
        response = (
            self.client.table("glucose_readings")
            .select(_COLUMNS)
            .eq("id", str(reading_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_reading(
        self, user_id: UUID, values: dict[str, object]
    ) -> GlucoseReading:
        """Insert a reading row and return it."""
        payload = serialize_values(values)
        payload["user_id"] = str(user_id)
        payload["created_at"] = datetime.now(tz=UTC).isoformat()
        response = self.client.table("glucose_readings").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create glucose reading")
        return _parse_row(response.data[0])

    def update_reading(
        self, reading_id: UUID, values: dict[str, object]
    ) -> GlucoseReading | None:
        """Update a reading row and return it."""
        response = (
            self.client.table("glucose_readings")
            .update(serialize_values(values))
            .eq("id", str(reading_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_reading(self, reading_id: UUID) -> bool:
        """Delete a reading row."""
        response = (
            self.client.table("glucose_readings")
            .delete()
            .eq("id", str(reading_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> GlucoseReading:
    return GlucoseReading(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        value=to_float(row.get("value")),
        measured_at=required_datetime(row.get("measured_at")),
        measurement_type=str(row.get("measurement_type") or "Random"),
        mood=row.get("mood"),
        notes=row.get("notes"),
        meal_id=optional_uuid(row.get("meal_id")),
        created_at=parse_datetime(row.get("created_at")),
    )
