"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.meals import (
    MealDetails,
    MealItemDraft,
    MealItemRecord,
    MealRecord,
)
from diabetes_tracker.domain.nutrition import MealTotals, PortionResult
from diabetes_tracker.services.foods import FoodRepository
from diabetes_tracker.services.portions import aggregate_meal, calculate_portion
from diabetes_tracker.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and their items."""

    def list_meals(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        """Return meals in the range, newest first, without items."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id, without items."""

    def create_meal(
        self, user_id: UUID, details: MealDetails, totals: MealTotals
    ) -> MealRecord:
        """Insert a meal and return it."""

    def update_meal_details(
        self, meal_id: UUID, details: MealDetails
    ) -> MealRecord | None:
        """Update the editable meal fields."""

    def update_meal_totals(self, meal_id: UUID, totals: MealTotals) -> None:
        """Overwrite the stored meal totals."""

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal and its items, returning False when missing."""

    def list_items(self, meal_id: UUID) -> list[MealItemRecord]:
        """Return the items of a meal."""

    def get_item(self, item_id: UUID) -> MealItemRecord | None:
        """Return a meal item by id."""

    def create_item(
        self,
        meal_id: UUID,
        food_id: UUID,
        portion: PortionResult,
        notes: str | None,
    ) -> MealItemRecord:
        """Insert a meal item and return it."""

    def delete_item(self, item_id: UUID) -> bool:
        """Delete a meal item, returning False when missing."""


@dataclass
class MealService:
    """Service that scales portions and keeps meal totals current."""

    repository: MealRepository
    food_repository: FoodRepository
    settings_service: UserSettingsService

    def list_meals(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[MealRecord]:
        return self.repository.list_meals(user_id, start, end)

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal with its items."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            return None
        return replace(meal, items=self.repository.list_items(meal_id))

    def create_meal(
        self,
        user_id: UUID,
        details: MealDetails,
        items: list[MealItemDraft] | None = None,
    ) -> MealRecord:
        """Create a meal with its items, then compute totals from stored items.

        Portions are validated before anything is written. If an item insert
        fails, the meal is deleted so no totals outlive their items.
        """
        drafts = items or []
        portions = [self._portion_for(draft) for draft in drafts]
        meal = self.repository.create_meal(user_id, details, MealTotals())
        try:
            created = [
                self.repository.create_item(
                    meal.id, draft.food_id, portion, draft.notes
                )
                for draft, portion in zip(drafts, portions, strict=True)
            ]
        except Exception:
            _logger.warning("Rolling back meal %s after item insert failure", meal.id)
            self.repository.delete_meal(meal.id)
            raise
        totals = self._recompute(meal)
        return replace(meal, totals=totals, items=created)

    def add_item(self, meal_id: UUID, draft: MealItemDraft) -> MealItemRecord:
        """Add an item to a meal and recompute the meal totals."""
        if draft.quantity_g <= 0:
            raise ValueError("quantity_g must be positive")
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise LookupError(f"Meal {meal_id} not found")
        portion = self._portion_for(draft)
        item = self.repository.create_item(meal_id, draft.food_id, portion, draft.notes)
        self._recompute(meal)
        return item

    def remove_item(self, item_id: UUID) -> bool:
        """Remove an item and recompute the totals of its meal."""
        item = self.repository.get_item(item_id)
        if item is None:
            return False
        self.repository.delete_item(item_id)
        meal = self.repository.get_meal(item.meal_id)
        if meal is not None:
            self._recompute(meal)
        return True

    def update_meal(self, meal_id: UUID, details: MealDetails) -> MealRecord | None:
        """Update meal metadata; totals are left untouched."""
        return self.repository.update_meal_details(meal_id, details)

    def delete_meal(self, meal_id: UUID) -> bool:
        return self.repository.delete_meal(meal_id)

    def recalculate(self, meal_id: UUID) -> MealTotals | None:
        """Recompute a meal's totals, e.g. after the user's carb ratio changed."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            return None
        return self._recompute(meal)

    def _portion_for(self, draft: MealItemDraft) -> PortionResult:
        food = self.food_repository.get_food(draft.food_id)
        if food is None:
            raise LookupError(f"Food product {draft.food_id} not found")
        return calculate_portion(food.profile, draft.quantity_g)

    def _recompute(self, meal: MealRecord) -> MealTotals:
        items = self.repository.list_items(meal.id)
        estimator = self.settings_service.get_insulin_estimator(meal.user_id)
        totals = aggregate_meal((item.portion for item in items), estimator)
        self.repository.update_meal_totals(meal.id, totals)
        _logger.debug(
            "Recomputed meal totals: meal=%s items=%s carbs=%.1f",
            meal.id,
            len(items),
            totals.carbs_g,
        )
        return totals
