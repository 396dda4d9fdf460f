"""Supabase repository for the food catalog."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diabetes_tracker.adapters.supabase_rows import parse_datetime, to_float
from diabetes_tracker.domain.nutrition import FoodNutrientProfile, FoodProduct
from diabetes_tracker.services.foods import FoodRepository

_PROFILE_COLUMNS = {
    "calories": "calories_per_100g",
    "carbs_g": "carbs_per_100g",
    "sugars_g": "sugars_per_100g",
    "fiber_g": "fiber_per_100g",
    "protein_g": "protein_per_100g",
    "fat_g": "fat_per_100g",
    "sodium_mg": "sodium_mg_per_100g",
}


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for food products."""

    client: Client

    def search_foods(self, query: str, limit: int) -> list[FoodProduct]:
        """Return foods matching the query by name, then by brand."""
        pattern = f"%{query}%"
        by_name = (
            self.client.table("food_products")
            .select("*")
            .ilike("name", pattern)
            .limit(limit)
            .execute()
        )
        foods = [_parse_food(row) for row in by_name.data or []]
        if len(foods) >= limit:
            return foods

        seen = {food.id for food in foods}
        by_brand = (
            self.client.table("food_products")
            .select("*")
            .ilike("brand", pattern)
            .limit(limit)
            .execute()
        )
        for row in by_brand.data or []:
            food = _parse_food(row)
            if food.id not in seen:
                foods.append(food)
                seen.add(food.id)
        return foods[:limit]

    def get_food(self, food_id: UUID) -> FoodProduct | None:
        """Return a food by id."""
        response = (
            self.client.table("food_products")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_by_barcode(self, barcode: str) -> FoodProduct | None:
        """Return a food by barcode."""
        response = (
            self.client.table("food_products")
            .select("*")
            .eq("barcode", barcode)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_by_name(self, name: str, brand: str | None) -> FoodProduct | None:
        """Return a barcode-less food with this exact name and brand."""
        query = (
            self.client.table("food_products")
            .select("*")
            .is_("barcode", "null")
            .eq("name", name)
        )
        query = query.eq("brand", brand) if brand else query.is_("brand", "null")
        response = query.limit(1).execute()
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, product: FoodProduct) -> FoodProduct:
        """Insert a food row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        payload = _food_payload(product)
        payload.update(
            {
                "source": product.source,
                "is_verified": product.is_verified,
                "created_at": now,
                "updated_at": now,
            }
        )
        response = self.client.table("food_products").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food product")
        return _parse_food(response.data[0])

    def update_food(self, food_id: UUID, product: FoodProduct) -> FoodProduct | None:
        """Update the editable fields of a food row."""
        payload = _food_payload(product)
        payload.pop("barcode", None)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("food_products")
            .update(payload)
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food row."""
        response = (
            self.client.table("food_products")
            .delete()
            .eq("id", str(food_id))
            .execute()
        )
        return bool(response.data)

    def is_referenced(self, food_id: UUID) -> bool:
        """Return True when a meal item points at the food."""
        response = (
            self.client.table("meal_items")
            .select("id")
            .eq("food_id", str(food_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)


def _food_payload(product: FoodProduct) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": product.name,
        "brand": product.brand,
        "barcode": product.barcode,
        "description": product.description,
        "image_url": product.image_url,
        "glycemic_index": product.glycemic_index,
    }
    for field_name, column in _PROFILE_COLUMNS.items():
        payload[column] = getattr(product.profile, field_name)
    return payload


def _parse_food(row: dict[str, object]) -> FoodProduct:
    """Parse a food row into a domain model."""
    glycemic_index = row.get("glycemic_index")
    return FoodProduct(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        description=row.get("description"),
        image_url=row.get("image_url"),
        profile=FoodNutrientProfile(
            **{
                field_name: to_float(row.get(column))
                for field_name, column in _PROFILE_COLUMNS.items()
            }
        ),
        glycemic_index=int(glycemic_index) if glycemic_index is not None else None,
        source=str(row.get("source", "")),
        is_verified=bool(row.get("is_verified", False)),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
