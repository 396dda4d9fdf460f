"""Supabase repository for meals and meal items."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.adapters.supabase_rows import (
    parse_datetime,
    required_datetime,
    to_float,
)
from diabetes_tracker.domain.meals import MealDetails, MealItemRecord, MealRecord
from diabetes_tracker.domain.nutrition import MealTotals, PortionResult
from diabetes_tracker.services.meals import MealRepository

_TOTAL_COLUMNS = {
    "calories": "total_calories",
    "carbs_g": "total_carbs_g",
    "sugars_g": "total_sugars_g",
    "fiber_g": "total_fiber_g",
    "protein_g": "total_protein_g",
    "fat_g": "total_fat_g",
    "sodium_mg": "total_sodium_mg",
    "estimated_insulin_units": "estimated_insulin_units",
}
_ITEM_COLUMNS = {
    "calories": "calories",
    "carbs_g": "carbs_g",
    "sugars_g": "sugars_g",
    "fiber_g": "fiber_g",
    "protein_g": "protein_g",
    "fat_g": "fat_g",
    "sodium_mg": "sodium_mg",
}


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def list_meals(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        """Return meals in the inclusive range, newest first."""
        query = self.client.table("meals").select("*").eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("meal_time", start.isoformat())
        if end is not None:
            query = query.lte("meal_time", end.isoformat())
        response = query.order("meal_time", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal row by id."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(
        self, user_id: UUID, details: MealDetails, totals: MealTotals
    ) -> MealRecord:
        """Insert a meal row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        payload = {
            "user_id": str(user_id),
            **_details_payload(details),
            **_totals_payload(totals),
            "created_at": now,
            "updated_at": now,
        }
        response = self.client.table("meals").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def update_meal_details(
        self, meal_id: UUID, details: MealDetails
    ) -> MealRecord | None:
        """Update the editable meal columns."""
        payload = {
            **_details_payload(details),
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        response = (
            self.client.table("meals").update(payload).eq("id", str(meal_id)).execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def update_meal_totals(self, meal_id: UUID, totals: MealTotals) -> None:
        """Overwrite the total columns of a meal."""
        self.client.table("meals").update(
            {
                **_totals_payload(totals),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(meal_id)).execute()

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal and its items."""
        self.client.table("meal_items").delete().eq("meal_id", str(meal_id)).execute()
        response = self.client.table("meals").delete().eq("id", str(meal_id)).execute()
        return bool(response.data)

    def list_items(self, meal_id: UUID) -> list[MealItemRecord]:
        """Return the item rows of a meal."""
        response = (
            self.client.table("meal_items")
            .select("*")
            .eq("meal_id", str(meal_id))
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, item_id: UUID) -> MealItemRecord | None:
        """Return a meal item row by id."""
        response = (
            self.client.table("meal_items")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_item(
        self,
        meal_id: UUID,
        food_id: UUID,
        portion: PortionResult,
        notes: str | None,
    ) -> MealItemRecord:
        """Insert a meal item row and return it."""
        payload: dict[str, object] = {
            "meal_id": str(meal_id),
            "food_id": str(food_id),
            "quantity_g": portion.quantity_g,
            "notes": notes,
            "created_at": datetime.now(tz=UTC).isoformat(),
        }
        for field_name, column in _ITEM_COLUMNS.items():
            payload[column] = getattr(portion, field_name)
        response = self.client.table("meal_items").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal item")
        return _parse_item(response.data[0])

    def delete_item(self, item_id: UUID) -> bool:
        """Delete a meal item row."""
        response = (
            self.client.table("meal_items").delete().eq("id", str(item_id)).execute()
        )
        return bool(response.data)


def _details_payload(details: MealDetails) -> dict[str, object]:
    return {
        "meal_type": details.meal_type,
        "meal_time": details.meal_time.isoformat(),
        "name": details.name,
        "notes": details.notes,
        "photo_url": details.photo_url,
    }


def _totals_payload(totals: MealTotals) -> dict[str, object]:
    return {
        column: getattr(totals, field_name)
        for field_name, column in _TOTAL_COLUMNS.items()
    }


def _parse_meal(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        details=MealDetails(
            meal_type=str(row.get("meal_type") or ""),
            meal_time=required_datetime(row.get("meal_time")),
            name=row.get("name"),
            notes=row.get("notes"),
            photo_url=row.get("photo_url"),
        ),
        totals=MealTotals(
            **{
                field_name: to_float(row.get(column))
                for field_name, column in _TOTAL_COLUMNS.items()
            }
        ),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )


def _parse_item(row: dict[str, object]) -> MealItemRecord:
    return MealItemRecord(
        id=UUID(str(row["id"])),
        meal_id=UUID(str(row["meal_id"])),
        food_id=UUID(str(row["food_id"])),
        portion=PortionResult(
            quantity_g=to_float(row.get("quantity_g")),
            **{
                field_name: to_float(row.get(column))
                for field_name, column in _ITEM_COLUMNS.items()
            },
        ),
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
    )
