"""Food catalog backed by local storage and Open Food Facts."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.nutrition import FoodProduct
from diabetes_tracker.services.nutrition import NutritionService

SOURCE_MANUAL = "manual"

_logger = logging.getLogger(__name__)


class FoodInUseError(ValueError):
    """Raised when deleting a food that meal items still reference."""


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def search_foods(self, query: str, limit: int) -> list[FoodProduct]:
        """Return foods whose name or brand matches the query."""

    def get_food(self, food_id: UUID) -> FoodProduct | None:
        """Return a food by id."""

    def get_by_barcode(self, barcode: str) -> FoodProduct | None:
        """Return a food by barcode."""

    def get_by_name(self, name: str, brand: str | None) -> FoodProduct | None:
        """Return a food without barcode matching name and brand exactly."""

    def create_food(self, product: FoodProduct) -> FoodProduct:
        """Insert a food and return it with its id."""

    def update_food(self, food_id: UUID, product: FoodProduct) -> FoodProduct | None:
        """Update a food's editable fields."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food, returning False when missing."""

    def is_referenced(self, food_id: UUID) -> bool:
        """Return True when any meal item references the food."""


@dataclass
class FoodCatalogService:
    """Application service for the shared food catalog."""

    repository: FoodRepository
    nutrition_service: NutritionService

    async def search(self, query: str, limit: int = 20) -> list[FoodProduct]:
        """Search the catalog, topping up from Open Food Facts."""
        cleaned = query.strip()
        if not cleaned:
            raise ValueError("Query cannot be empty")
        results = self.repository.search_foods(cleaned, limit)
        if len(results) >= limit:
            return results[:limit]

        seen = {food.id for food in results}
        remote = await self.nutrition_service.search(cleaned, limit - len(results))
        for product in remote:
            stored = self._store(product)
            if stored.id in seen:
                continue
            results.append(stored)
            seen.add(stored.id)
        return results[:limit]

    async def get_by_barcode(self, barcode: str) -> FoodProduct | None:
        """Return a food by barcode, importing it from Open Food Facts if needed."""
        local = self.repository.get_by_barcode(barcode)
        if local is not None:
            return local
        product = await self.nutrition_service.get_by_barcode(barcode)
        if product is None:
            return None
        return self.repository.create_food(product)

    def get_food(self, food_id: UUID) -> FoodProduct | None:
        return self.repository.get_food(food_id)

    def create_custom_food(self, product: FoodProduct) -> FoodProduct:
        """Add a user-entered food to the catalog."""
        return self.repository.create_food(
            replace(product, id=None, source=SOURCE_MANUAL, is_verified=False)
        )

    def update_food(self, food_id: UUID, product: FoodProduct) -> FoodProduct | None:
        return self.repository.update_food(food_id, product)

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food unless meal items still reference it."""
        if self.repository.get_food(food_id) is None:
            return False
        if self.repository.is_referenced(food_id):
            raise FoodInUseError("Cannot delete food product that is used in meals")
        return self.repository.delete_food(food_id)

    def _store(self, product: FoodProduct) -> FoodProduct:
        if product.barcode:
            existing = self.repository.get_by_barcode(product.barcode)
        else:
            existing = self.repository.get_by_name(product.name, product.brand)
        if existing is not None:
            return existing
        _logger.info(
            "Importing food from Open Food Facts: %s", product.barcode or product.name
        )
        return self.repository.create_food(product)
