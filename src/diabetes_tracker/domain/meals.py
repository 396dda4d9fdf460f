"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from diabetes_tracker.domain.nutrition import MealTotals, PortionResult


@dataclass(frozen=True)
class MealDetails:
    """User-editable meal fields."""

    meal_type: str
    meal_time: datetime
    name: str | None = None
    notes: str | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class MealItemRecord:
    """Meal item row with its portion nutrients."""

    id: UUID
    meal_id: UUID
    food_id: UUID
    portion: PortionResult
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealRecord:
    """Meal with stored totals and, when loaded, its items."""

    id: UUID
    user_id: UUID
    details: MealDetails
    totals: MealTotals
    items: list[MealItemRecord] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class MealItemDraft:
    """Requested meal item before nutrients are computed."""

    food_id: UUID
    quantity_g: float
    notes: str | None = None
