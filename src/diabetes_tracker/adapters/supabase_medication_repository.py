"""Supabase repository for medications."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.adapters.supabase_rows import parse_datetime, serialize_values
from diabetes_tracker.domain.medications import Medication
from diabetes_tracker.services.medications import MedicationRepository


@dataclass
class SupabaseMedicationRepository(MedicationRepository):
    """Supabase implementation for medications."""

    client: Client

    def list_medications(self, user_id: UUID) -> list[Medication]:
        """Return a user's medications ordered by name."""
        response = (
            self.client.table("medications")
            .select("*")
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_medication(self, medication_id: UUID) -> Medication | None:
        response = (
            self.client.table("medications")
            .select("*")
            .eq("id", str(medication_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_medication(self, user_id: UUID, values: dict[str, object]) -> Medication:
        """Insert a medication row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        payload = serialize_values(values)
        payload.update({"user_id": str(user_id), "created_at": now, "updated_at": now})
        response = self.client.table("medications").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create medication")
        return _parse_row(response.data[0])

    def update_medication(
        self, medication_id: UUID, values: dict[str, object]
    ) -> Medication | None:
        payload = serialize_values(values)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("medications")
            .update(payload)
            .eq("id", str(medication_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_medication(self, medication_id: UUID) -> bool:
        response = (
            self.client.table("medications")
            .delete()
            .eq("id", str(medication_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> Medication:
    return Medication(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        medication_type=str(row.get("medication_type") or ""),
        brand=row.get("brand"),
        dosage=row.get("dosage"),
        instructions=row.get("instructions"),
        frequency=row.get("frequency"),
        prescribed_by=row.get("prescribed_by"),
        start_date=parse_datetime(row.get("start_date")),
        end_date=parse_datetime(row.get("end_date")),
        is_active=bool(row.get("is_active", True)),
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
