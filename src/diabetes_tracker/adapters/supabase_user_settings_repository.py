"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_settings(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored settings row for a user."""
        response = (
            self.client.table("user_settings")
            .select("target_low, target_high, carbs_per_insulin_unit, timezone")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def upsert_settings(self, user_id: UUID, values: dict[str, object]) -> None:
        """Create or update the user's settings row."""
        self.client.table("user_settings").upsert(
            {
                **values,
                "user_id": str(user_id),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
