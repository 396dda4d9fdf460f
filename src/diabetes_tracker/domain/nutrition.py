"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodNutrientProfile:
    """Nutrient values per 100 grams of a food. Sodium is in milligrams."""

    calories: float = 0.0
    carbs_g: float = 0.0
    sugars_g: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    sodium_mg: float = 0.0


@dataclass(frozen=True)
class PortionResult:
    """Nutrients of a consumed quantity of a food."""

    quantity_g: float
    calories: float
    carbs_g: float
    sugars_g: float
    fiber_g: float
    protein_g: float
    fat_g: float
    sodium_mg: float


@dataclass(frozen=True)
class MealTotals:
    """Summed nutrients of a meal and the derived insulin estimate."""

    calories: float = 0.0
    carbs_g: float = 0.0
    sugars_g: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    sodium_mg: float = 0.0
    estimated_insulin_units: float = 0.0


@dataclass(frozen=True)
class FoodProduct:
    """Food catalog entry."""

    name: str
    profile: FoodNutrientProfile
    source: str
    id: UUID | None = None
    brand: str | None = None
    barcode: str | None = None
    description: str | None = None
    image_url: str | None = None
    glycemic_index: int | None = None
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
