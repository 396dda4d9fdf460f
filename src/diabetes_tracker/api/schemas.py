"""Request models for the HTTP API."""

from datetime import UTC, date, datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from diabetes_tracker.domain.glucose import TargetRange
from diabetes_tracker.domain.meals import MealDetails, MealItemDraft
from diabetes_tracker.domain.nutrition import FoodNutrientProfile, FoodProduct
from diabetes_tracker.domain.settings import UserSettings

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack"]
MeasurementType = Literal["Fasting", "PreMeal", "PostMeal", "Bedtime", "Random"]
InsulinType = Literal["Rapid", "Long", "Mixed"]
MedicationType = Literal["Insulin", "Oral", "Injectable"]


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class FoodIn(BaseModel):
    """Custom or edited food product, nutrients per 100 g."""

    name: str = Field(min_length=1)
    brand: str | None = None
    barcode: str | None = None
    description: str | None = None
    image_url: str | None = None
    calories: float = Field(default=0.0, ge=0, le=10000)
    carbs_g: float = Field(default=0.0, ge=0, le=100)
    sugars_g: float = Field(default=0.0, ge=0, le=100)
    fiber_g: float = Field(default=0.0, ge=0, le=100)
    protein_g: float = Field(default=0.0, ge=0, le=100)
    fat_g: float = Field(default=0.0, ge=0, le=100)
    sodium_mg: float = Field(default=0.0, ge=0, le=10000)
    glycemic_index: int | None = Field(default=None, ge=0, le=100)

    def to_product(self) -> FoodProduct:
        return FoodProduct(
            name=self.name.strip(),
            brand=self.brand,
            barcode=self.barcode,
            description=self.description,
            image_url=self.image_url,
            profile=FoodNutrientProfile(
                calories=self.calories,
                carbs_g=self.carbs_g,
                sugars_g=self.sugars_g,
                fiber_g=self.fiber_g,
                protein_g=self.protein_g,
                fat_g=self.fat_g,
                sodium_mg=self.sodium_mg,
            ),
            glycemic_index=self.glycemic_index,
            source="manual",
        )


class MealItemIn(BaseModel):
    """Food and quantity to add to a meal."""

    food_id: UUID
    quantity_g: float = Field(gt=0, le=10000)
    notes: str | None = None

    def to_draft(self) -> MealItemDraft:
        return MealItemDraft(
            food_id=self.food_id, quantity_g=self.quantity_g, notes=self.notes
        )


class MealDetailsIn(BaseModel):
    """Editable meal fields."""

    meal_type: MealType
    meal_time: UtcDatetime
    name: str | None = None
    notes: str | None = None
    photo_url: str | None = None

    def to_details(self) -> MealDetails:
        return MealDetails(
            meal_type=self.meal_type,
            meal_time=self.meal_time,
            name=self.name,
            notes=self.notes,
            photo_url=self.photo_url,
        )


class MealIn(MealDetailsIn):
    """New meal with optional items."""

    items: list[MealItemIn] = Field(default_factory=list)


class GlucoseReadingIn(BaseModel):
    """Glucose reading payload."""

    value: float = Field(ge=1, le=1000)
    measured_at: UtcDatetime
    measurement_type: MeasurementType
    mood: str | None = None
    notes: str | None = None
    meal_id: UUID | None = None


class InsulinRecordIn(BaseModel):
    """Insulin record payload."""

    insulin_type: InsulinType
    dose_units: float = Field(ge=0.1, le=100)
    injected_at: UtcDatetime
    injection_site: str | None = None
    notes: str | None = None
    meal_id: UUID | None = None


class MedicationIn(BaseModel):
    """Medication payload."""

    name: str = Field(min_length=1, max_length=200)
    medication_type: MedicationType
    brand: str | None = None
    dosage: str | None = None
    instructions: str | None = None
    frequency: str | None = None
    prescribed_by: str | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    is_active: bool = True
    notes: str | None = None


class DailyNoteIn(BaseModel):
    """Daily note payload; the date is fixed once the note exists."""

    note_date: date
    notes: str | None = None
    mood: str | None = None
    physical_activity: str | None = None
    weight_kg: float | None = Field(default=None, gt=0, le=500)
    hours_of_sleep: float | None = Field(default=None, ge=0, le=24)
    symptoms: str | None = None


class UserSettingsIn(BaseModel):
    """Per-user clinical settings."""

    target_low: float = Field(default=80.0, gt=0, le=1000)
    target_high: float = Field(default=180.0, gt=0, le=1000)
    carbs_per_insulin_unit: float = Field(default=12.0, gt=0, le=200)
    timezone: str = "UTC"

    def to_settings(self) -> UserSettings:
        return UserSettings(
            target_range=TargetRange(low=self.target_low, high=self.target_high),
            carbs_per_insulin_unit=self.carbs_per_insulin_unit,
            timezone=self.timezone,
        )
