"""Supabase repository for daily notes."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.adapters.supabase_rows import (
    parse_date,
    parse_datetime,
    serialize_values,
)
from diabetes_tracker.domain.daily_notes import DailyNote
from diabetes_tracker.services.daily_notes import DailyNoteRepository


@dataclass
class SupabaseDailyNoteRepository(DailyNoteRepository):
    """Supabase implementation for daily notes."""

    client: Client

    def list_notes(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[DailyNote]:
        """Return notes dated within the inclusive range, newest first."""
        query = self.client.table("daily_notes").select("*").eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("note_date", start.isoformat())
        if end is not None:
            query = query.lte("note_date", end.isoformat())
        response = query.order("note_date", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def get_note(self, note_id: UUID) -> DailyNote | None:
        response = (
            self.client.table("daily_notes")
            .select("*")
            .eq("id", str(note_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_by_date(self, user_id: UUID, note_date: date) -> DailyNote | None:
        response = (
            self.client.table("daily_notes")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("note_date", note_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_note(self, user_id: UUID, values: dict[str, object]) -> DailyNote:
        """Insert a note row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        payload = serialize_values(values)
        payload.update({"user_id": str(user_id), "created_at": now, "updated_at": now})
        response = self.client.table("daily_notes").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create daily note")
        return _parse_row(response.data[0])

    def update_note(
        self, note_id: UUID, values: dict[str, object]
    ) -> DailyNote | None:
        payload = serialize_values(values)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("daily_notes")
            .update(payload)
            .eq("id", str(note_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_note(self, note_id: UUID) -> bool:
        response = (
            self.client.table("daily_notes").delete().eq("id", str(note_id)).execute()
        )
        return bool(response.data)


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _parse_row(row: dict[str, object]) -> DailyNote:
    return DailyNote(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        note_date=parse_date(row.get("note_date")) or date.min,
        notes=row.get("notes"),
        mood=row.get("mood"),
        physical_activity=row.get("physical_activity"),
        weight_kg=_optional_float(row.get("weight_kg")),
        hours_of_sleep=_optional_float(row.get("hours_of_sleep")),
        symptoms=row.get("symptoms"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
