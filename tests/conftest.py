"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from diabetes_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient
from diabetes_tracker.config import Settings
from diabetes_tracker.containers import AppContainer
from diabetes_tracker.domain.daily_notes import DailyNote
from diabetes_tracker.domain.glucose import GlucoseReading
from diabetes_tracker.domain.insulin import InsulinRecord
from diabetes_tracker.domain.meals import MealDetails, MealItemRecord, MealRecord
from diabetes_tracker.domain.medications import Medication
from diabetes_tracker.domain.nutrition import (
    FoodNutrientProfile,
    FoodProduct,
    MealTotals,
    PortionResult,
)
from diabetes_tracker.services.cache import InMemoryCache
from diabetes_tracker.services.daily_notes import DailyNoteRepository, DailyNoteService
from diabetes_tracker.services.foods import FoodCatalogService, FoodRepository
from diabetes_tracker.services.glucose import GlucoseRepository, GlucoseService
from diabetes_tracker.services.insulin import InsulinRepository, InsulinService
from diabetes_tracker.services.meals import MealRepository, MealService
from diabetes_tracker.services.medications import (
    MedicationRepository,
    MedicationService,
)
from diabetes_tracker.services.nutrition import NutritionService
from diabetes_tracker.services.reports import ReportService
from diabetes_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)

API_TOKEN = "api-token"


def _in_range(
    moment: datetime, start: datetime | None, end: datetime | None
) -> bool:
    if start is not None and moment < start:
        return False
    return end is None or moment <= end


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with canned responses."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "3017620422003": {
                "code": "3017620422003",
                "product_name": "Nutella",
                "brands": "Ferrero, Nutella",
                "generic_name": "Hazelnut spread",
                "image_front_url": "https://images.test/nutella.jpg",
                "nutriments": {
                    "energy-kcal_100g": 539,
                    "carbohydrates_100g": 57.5,
                    "sugars_100g": 56.3,
                    "fiber_100g": "0",
                    "proteins_100g": 6.3,
                    "fat_100g": 30.9,
                    "sodium_100g": 0.0428,
                },
            }
        }
    )
    search_calls: int = 0
    product_calls: int = 0

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.product_calls += 1
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "code": barcode, "product": product}

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        self.search_calls += 1
        matches = [
            product
            for product in self.products.values()
            if query.lower() in str(product.get("product_name", "")).lower()
        ]
        return {"count": len(matches), "page": 1, "products": matches[:page_size]}


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, FoodProduct] = field(default_factory=dict)
    referenced: set[UUID] = field(default_factory=set)

    def search_foods(self, query: str, limit: int) -> list[FoodProduct]:
        needle = query.lower()
        return [
            food
            for food in self.foods.values()
            if needle in food.name.lower() or needle in (food.brand or "").lower()
        ][:limit]

    def get_food(self, food_id: UUID) -> FoodProduct | None:
        return self.foods.get(food_id)

    def get_by_barcode(self, barcode: str) -> FoodProduct | None:
        for food in self.foods.values():
            if food.barcode == barcode:
                return food
        return None

    def get_by_name(self, name: str, brand: str | None) -> FoodProduct | None:
        for food in self.foods.values():
            if not food.barcode and food.name == name and food.brand == brand:
                return food
        return None

    def create_food(self, product: FoodProduct) -> FoodProduct:
        food = replace(product, id=uuid4(), created_at=datetime.now(tz=UTC))
        self.foods[food.id] = food
        return food

    def update_food(self, food_id: UUID, product: FoodProduct) -> FoodProduct | None:
        existing = self.foods.get(food_id)
        if existing is None:
            return None
        updated = replace(
            existing,
            name=product.name,
            brand=product.brand,
            description=product.description,
            image_url=product.image_url,
            profile=product.profile,
            glycemic_index=product.glycemic_index,
        )
        self.foods[food_id] = updated
        return updated

    def delete_food(self, food_id: UUID) -> bool:
        return self.foods.pop(food_id, None) is not None

    def is_referenced(self, food_id: UUID) -> bool:
        return food_id in self.referenced

    def add(self, name: str, **profile: float) -> FoodProduct:
        return self.create_food(
            FoodProduct(
                name=name,
                profile=FoodNutrientProfile(**profile),
                source="manual",
            )
        )


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    items: dict[UUID, MealItemRecord] = field(default_factory=dict)
    totals_writes: int = 0

    def list_meals(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        meals = [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id
            and _in_range(meal.details.meal_time, start, end)
        ]
        return sorted(meals, key=lambda meal: meal.details.meal_time, reverse=True)

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        return self.meals.get(meal_id)

    def create_meal(
        self, user_id: UUID, details: MealDetails, totals: MealTotals
    ) -> MealRecord:
        meal = MealRecord(id=uuid4(), user_id=user_id, details=details, totals=totals)
        self.meals[meal.id] = meal
        return meal

    def update_meal_details(
        self, meal_id: UUID, details: MealDetails
    ) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        if meal is None:
            return None
        self.meals[meal_id] = replace(meal, details=details)
        return self.meals[meal_id]

    def update_meal_totals(self, meal_id: UUID, totals: MealTotals) -> None:
        self.totals_writes += 1
        self.meals[meal_id] = replace(self.meals[meal_id], totals=totals)

    def delete_meal(self, meal_id: UUID) -> bool:
        for item_id in [i.id for i in self.items.values() if i.meal_id == meal_id]:
            del self.items[item_id]
        return self.meals.pop(meal_id, None) is not None

    def list_items(self, meal_id: UUID) -> list[MealItemRecord]:
        return [item for item in self.items.values() if item.meal_id == meal_id]

    def get_item(self, item_id: UUID) -> MealItemRecord | None:
        return self.items.get(item_id)

    def create_item(
        self,
        meal_id: UUID,
        food_id: UUID,
        portion: PortionResult,
        notes: str | None,
    ) -> MealItemRecord:
        item = MealItemRecord(
            id=uuid4(), meal_id=meal_id, food_id=food_id, portion=portion, notes=notes
        )
        self.items[item.id] = item
        return item

    def delete_item(self, item_id: UUID) -> bool:
        return self.items.pop(item_id, None) is not None


@dataclass
class InMemoryGlucoseRepository(GlucoseRepository):
    """In-memory glucose repository for tests."""

    readings: dict[UUID, GlucoseReading] = field(default_factory=dict)

    def list_readings(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[GlucoseReading]:
        readings = [
            reading
            for reading in self.readings.values()
            if reading.user_id == user_id
            and _in_range(reading.measured_at, start, end)
        ]
        return sorted(readings, key=lambda r: r.measured_at, reverse=True)

    def get_reading(self, reading_id: UUID) -> GlucoseReading | None:
        return self.readings.get(reading_id)

    def create_reading(
        self, user_id: UUID, values: dict[str, object]
    ) -> GlucoseReading:
        reading = GlucoseReading(id=uuid4(), user_id=user_id, **values)
        self.readings[reading.id] = reading
        return reading

    def update_reading(
        self, reading_id: UUID, values: dict[str, object]
    ) -> GlucoseReading | None:
        existing = self.readings.get(reading_id)
        if existing is None:
            return None
        self.readings[reading_id] = replace(existing, **values)
        return self.readings[reading_id]

    def delete_reading(self, reading_id: UUID) -> bool:
        return self.readings.pop(reading_id, None) is not None


@dataclass
class InMemoryInsulinRepository(InsulinRepository):
    """In-memory insulin repository for tests."""

    records: dict[UUID, InsulinRecord] = field(default_factory=dict)

    def list_records(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[InsulinRecord]:
        records = [
            record
            for record in self.records.values()
            if record.user_id == user_id and _in_range(record.injected_at, start, end)
        ]
        return sorted(records, key=lambda r: r.injected_at, reverse=True)

    def get_record(self, record_id: UUID) -> InsulinRecord | None:
        return self.records.get(record_id)

    def create_record(self, user_id: UUID, values: dict[str, object]) -> InsulinRecord:
        record = InsulinRecord(id=uuid4(), user_id=user_id, **values)
        self.records[record.id] = record
        return record

    def update_record(
        self, record_id: UUID, values: dict[str, object]
    ) -> InsulinRecord | None:
        existing = self.records.get(record_id)
        if existing is None:
            return None
        self.records[record_id] = replace(existing, **values)
        return self.records[record_id]

    def delete_record(self, record_id: UUID) -> bool:
        return self.records.pop(record_id, None) is not None


@dataclass
class InMemoryMedicationRepository(MedicationRepository):
    """In-memory medication repository for tests."""

    medications: dict[UUID, Medication] = field(default_factory=dict)

    def list_medications(self, user_id: UUID) -> list[Medication]:
        return sorted(
            (m for m in self.medications.values() if m.user_id == user_id),
            key=lambda m: m.name,
        )

    def get_medication(self, medication_id: UUID) -> Medication | None:
        return self.medications.get(medication_id)

    def create_medication(self, user_id: UUID, values: dict[str, object]) -> Medication:
        medication = Medication(id=uuid4(), user_id=user_id, **values)
        self.medications[medication.id] = medication
        return medication

    def update_medication(
        self, medication_id: UUID, values: dict[str, object]
    ) -> Medication | None:
        existing = self.medications.get(medication_id)
        if existing is None:
            return None
        self.medications[medication_id] = replace(existing, **values)
        return self.medications[medication_id]

    def delete_medication(self, medication_id: UUID) -> bool:
        return self.medications.pop(medication_id, None) is not None


@dataclass
class InMemoryDailyNoteRepository(DailyNoteRepository):
    """In-memory daily note repository for tests."""

    notes: dict[UUID, DailyNote] = field(default_factory=dict)

    def list_notes(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[DailyNote]:
        notes = [
            note
            for note in self.notes.values()
            if note.user_id == user_id
            and (start is None or note.note_date >= start)
            and (end is None or note.note_date <= end)
        ]
        return sorted(notes, key=lambda note: note.note_date, reverse=True)

    def get_note(self, note_id: UUID) -> DailyNote | None:
        return self.notes.get(note_id)

    def get_by_date(self, user_id: UUID, note_date: date) -> DailyNote | None:
        for note in self.notes.values():
            if note.user_id == user_id and note.note_date == note_date:
                return note
        return None

    def create_note(self, user_id: UUID, values: dict[str, object]) -> DailyNote:
        note = DailyNote(id=uuid4(), user_id=user_id, **values)
        self.notes[note.id] = note
        return note

    def update_note(
        self, note_id: UUID, values: dict[str, object]
    ) -> DailyNote | None:
        existing = self.notes.get(note_id)
        if existing is None:
            return None
        self.notes[note_id] = replace(existing, **values)
        return self.notes[note_id]

    def delete_note(self, note_id: UUID) -> bool:
        return self.notes.pop(note_id, None) is not None


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def get_settings(self, user_id: UUID) -> dict[str, object] | None:
        return self.rows.get(user_id)

    def upsert_settings(self, user_id: UUID, values: dict[str, object]) -> None:
        self.rows[user_id] = {**self.rows.get(user_id, {}), **values}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token=API_TOKEN,
    )


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def glucose_repository() -> InMemoryGlucoseRepository:
    return InMemoryGlucoseRepository()


@pytest.fixture
def insulin_repository() -> InMemoryInsulinRepository:
    return InMemoryInsulinRepository()


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def medication_repository() -> InMemoryMedicationRepository:
    return InMemoryMedicationRepository()


@pytest.fixture
def daily_note_repository() -> InMemoryDailyNoteRepository:
    return InMemoryDailyNoteRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    off_client: FakeOpenFoodFactsClient,
    food_repository: InMemoryFoodRepository,
    meal_repository: InMemoryMealRepository,
    glucose_repository: InMemoryGlucoseRepository,
    insulin_repository: InMemoryInsulinRepository,
    settings_repository: InMemoryUserSettingsRepository,
    medication_repository: InMemoryMedicationRepository,
    daily_note_repository: InMemoryDailyNoteRepository,
) -> AppContainer:
    user_settings_service = UserSettingsService(settings_repository)
    nutrition_service = NutritionService(
        client=off_client, cache=InMemoryCache(), retry_delay_seconds=0
    )
    food_service = FoodCatalogService(
        repository=food_repository, nutrition_service=nutrition_service
    )
    meal_service = MealService(
        repository=meal_repository,
        food_repository=food_repository,
        settings_service=user_settings_service,
    )
    glucose_service = GlucoseService(
        repository=glucose_repository, settings_service=user_settings_service
    )
    insulin_service = InsulinService(insulin_repository)
    report_service = ReportService(
        glucose_service=glucose_service,
        meal_service=meal_service,
        insulin_service=insulin_service,
        settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_service=nutrition_service,
        food_service=food_service,
        meal_service=meal_service,
        glucose_service=glucose_service,
        insulin_service=insulin_service,
        medication_service=MedicationService(medication_repository),
        daily_note_service=DailyNoteService(daily_note_repository),
        user_settings_service=user_settings_service,
        report_service=report_service,
        close_resources=close_resources,
    )
