"""Portion scaling and meal aggregation."""

from collections.abc import Callable, Iterable

from diabetes_tracker.domain.nutrition import (
    FoodNutrientProfile,
    MealTotals,
    PortionResult,
)

DEFAULT_CARBS_PER_UNIT = 12.0

InsulinEstimator = Callable[[float], float]


def carb_ratio_estimator(
    carbs_per_unit: float = DEFAULT_CARBS_PER_UNIT,
) -> InsulinEstimator:
    """Return an estimator giving one insulin unit per `carbs_per_unit` grams."""
    if carbs_per_unit <= 0:
        raise ValueError("carbs_per_unit must be positive")

    def estimate(total_carbs_g: float) -> float:
        return total_carbs_g / carbs_per_unit

    return estimate


def calculate_portion(
    profile: FoodNutrientProfile, quantity_g: float
) -> PortionResult:
    """Scale a per-100g profile to the consumed quantity."""
    if quantity_g <= 0:
        raise ValueError(f"quantity_g must be positive, got {quantity_g}")
    factor = quantity_g / 100.0
    return PortionResult(
        quantity_g=quantity_g,
        calories=_non_negative(profile.calories) * factor,
        carbs_g=_non_negative(profile.carbs_g) * factor,
        sugars_g=_non_negative(profile.sugars_g) * factor,
        fiber_g=_non_negative(profile.fiber_g) * factor,
        protein_g=_non_negative(profile.protein_g) * factor,
        fat_g=_non_negative(profile.fat_g) * factor,
        sodium_mg=_non_negative(profile.sodium_mg) * factor,
    )


def aggregate_meal(
    portions: Iterable[PortionResult],
    estimator: InsulinEstimator | None = None,
) -> MealTotals:
    """Sum portions into meal totals.

    Always a full pass over the given portions; callers pass the complete
    current item set of the meal.
    """
    estimate = estimator or carb_ratio_estimator()
    calories = carbs = sugars = fiber = protein = fat = sodium = 0.0
    for portion in portions:
        calories += portion.calories
        carbs += portion.carbs_g
        sugars += portion.sugars_g
        fiber += portion.fiber_g
        protein += portion.protein_g
        fat += portion.fat_g
        sodium += portion.sodium_mg
    return MealTotals(
        calories=calories,
        carbs_g=carbs,
        sugars_g=sugars,
        fiber_g=fiber,
        protein_g=protein,
        fat_g=fat,
        sodium_mg=sodium,
        estimated_insulin_units=estimate(carbs),
    )


def _non_negative(value: float) -> float:
    return value if value > 0 else 0.0
