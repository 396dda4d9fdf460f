"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

from diabetes_tracker.adapters.supabase_daily_note_repository import (
    SupabaseDailyNoteRepository,
)
from diabetes_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from diabetes_tracker.adapters.supabase_glucose_repository import (
    SupabaseGlucoseRepository,
)
from diabetes_tracker.adapters.supabase_insulin_repository import (
    SupabaseInsulinRepository,
)
from diabetes_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from diabetes_tracker.adapters.supabase_medication_repository import (
    SupabaseMedicationRepository,
)
from diabetes_tracker.adapters.supabase_rows import (
    parse_date,
    parse_datetime,
    serialize_values,
)
from diabetes_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from diabetes_tracker.domain.meals import MealDetails
from diabetes_tracker.domain.nutrition import (
    FoodNutrientProfile,
    FoodProduct,
    MealTotals,
)
from diabetes_tracker.services.portions import calculate_portion


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_upsert_conflict: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_upsert_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("ilike", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def is_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("is", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(food_id: str, name: str = "Rice") -> dict[str, object]:
    return {
        "id": food_id,
        "name": name,
        "brand": None,
        "barcode": "123",
        "calories_per_100g": 130,
        "carbs_per_100g": "28.5",
        "protein_per_100g": 2.7,
        "sodium_mg_per_100g": None,
        "glycemic_index": 73,
        "source": "manual",
        "is_verified": False,
        "created_at": "2024-03-01T12:00:00",
    }


def test_food_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_products")
    food_id = str(uuid4())
    table.queue("insert", [_food_row(food_id)])
    table.queue("select", [_food_row(food_id)])

    repository = SupabaseFoodRepository(client)
    created = repository.create_food(
        FoodProduct(
            name="Rice",
            barcode="123",
            profile=FoodNutrientProfile(calories=130, carbs_g=28.5),
            source="manual",
        )
    )
    fetched = repository.get_by_barcode("123")

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["carbs_per_100g"] == 28.5
    assert table.last_payload["source"] == "manual"
    assert str(created.id) == food_id
    assert created.profile.carbs_g == 28.5
    assert created.profile.sodium_mg == 0
    assert created.glycemic_index == 73
    assert created.created_at == datetime(2024, 3, 1, 12, tzinfo=UTC)
    assert fetched is not None
    assert ("eq", "barcode", "123") in table.last_filters


def test_food_repository_search_merges_brand_matches() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_products")
    shared_id = str(uuid4())
    brand_id = str(uuid4())
    table.queue("select", [_food_row(shared_id)])
    table.queue("select", [_food_row(shared_id), _food_row(brand_id, "Uncle Rice")])

    foods = SupabaseFoodRepository(client).search_foods("rice", limit=5)

    assert [str(food.id) for food in foods] == [shared_id, brand_id]
    assert ("ilike", "brand", "%rice%") in table.last_filters


def test_food_repository_reference_check_and_delete() -> None:
    client = FakeSupabaseClient()
    client.table("meal_items").queue("select", [{"id": str(uuid4())}])
    client.table("food_products").queue("delete", [])

    repository = SupabaseFoodRepository(client)

    assert repository.is_referenced(uuid4()) is True
    assert repository.delete_food(uuid4()) is False


def test_meal_repository_create_meal_and_item() -> None:
    client = FakeSupabaseClient()
    meals = client.table("meals")
    items = client.table("meal_items")
    user_id = str(uuid4())
    meal_id = str(uuid4())
    food_id = str(uuid4())
    meals.queue(
        "insert",
        [
            {
                "id": meal_id,
                "user_id": user_id,
                "meal_type": "Lunch",
                "meal_time": "2024-03-01T12:00:00+00:00",
                "total_carbs_g": 42,
                "estimated_insulin_units": 3.5,
            }
        ],
    )
    items.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "meal_id": meal_id,
                "food_id": food_id,
                "quantity_g": 150,
                "carbs_g": 42,
            }
        ],
    )

    repository = SupabaseMealRepository(client)
    meal = repository.create_meal(
        uuid4(),
        MealDetails(meal_type="Lunch", meal_time=datetime(2024, 3, 1, 12, tzinfo=UTC)),
        MealTotals(carbs_g=42, estimated_insulin_units=3.5),
    )
    assert isinstance(meals.last_payload, dict)
    assert meals.last_payload["total_carbs_g"] == 42
    assert meals.last_payload["meal_time"] == "2024-03-01T12:00:00+00:00"

    portion = calculate_portion(FoodNutrientProfile(carbs_g=28), 150)
    item = repository.create_item(meal.id, uuid4(), portion, notes=None)

    assert meal.totals.carbs_g == 42
    assert meal.totals.estimated_insulin_units == 3.5
    assert item.portion.quantity_g == 150
    assert item.portion.carbs_g == 42
    assert isinstance(items.last_payload, dict)
    assert items.last_payload["quantity_g"] == 150


def test_meal_repository_list_uses_inclusive_range() -> None:
    client = FakeSupabaseClient()
    meals = client.table("meals")
    start = datetime(2024, 3, 1, tzinfo=UTC)
    end = datetime(2024, 3, 2, tzinfo=UTC)

    SupabaseMealRepository(client).list_meals(uuid4(), start, end)

    assert ("gte", "meal_time", start.isoformat()) in meals.last_filters
    assert ("lte", "meal_time", end.isoformat()) in meals.last_filters


def test_meal_repository_delete_removes_items_first() -> None:
    client = FakeSupabaseClient()
    meal_id = uuid4()
    client.table("meals").queue("delete", [{"id": str(meal_id)}])

    deleted = SupabaseMealRepository(client).delete_meal(meal_id)

    assert deleted is True
    assert ("eq", "meal_id", str(meal_id)) in client.table("meal_items").last_filters


def test_glucose_repository_create_serializes_values() -> None:
    client = FakeSupabaseClient()
    table = client.table("glucose_readings")
    reading_id = str(uuid4())
    user_id = uuid4()
    measured_at = datetime(2024, 3, 1, 7, tzinfo=UTC)
    table.queue(
        "insert",
        [
            {
                "id": reading_id,
                "user_id": str(user_id),
                "value": 104,
                "measured_at": measured_at.isoformat(),
                "measurement_type": "Fasting",
                "meal_id": None,
            }
        ],
    )

    reading = SupabaseGlucoseRepository(client).create_reading(
        user_id,
        {"value": 104, "measured_at": measured_at, "measurement_type": "Fasting"},
    )

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["measured_at"] == measured_at.isoformat()
    assert table.last_payload["user_id"] == str(user_id)
    assert str(reading.id) == reading_id
    assert reading.value == 104
    assert reading.meal_id is None


def test_insulin_repository_list_and_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("insulin_records")
    row = {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "insulin_type": "Rapid",
        "dose_units": "4.5",
        "injected_at": "2024-03-01T12:05:00Z",
    }
    table.queue("select", [row])
    table.queue("select", [])

    repository = SupabaseInsulinRepository(client)
    records = repository.list_records(uuid4(), None, None)
    missing = repository.get_record(uuid4())

    assert records[0].dose_units == 4.5
    assert records[0].injected_at == datetime(2024, 3, 1, 12, 5, tzinfo=UTC)
    assert missing is None


def test_user_settings_repository_upserts_on_user_id() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_settings")
    user_id = uuid4()
    table.queue("select", [{"target_low": 70, "timezone": "UTC"}])

    repository = SupabaseUserSettingsRepository(client)
    row = repository.get_settings(user_id)
    repository.upsert_settings(user_id, {"target_low": 75})

    assert row == {"target_low": 70, "timezone": "UTC"}
    assert table.last_upsert_conflict == "user_id"
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["user_id"] == str(user_id)
    assert table.last_payload["target_low"] == 75


def test_row_helpers() -> None:
    user_id = uuid4()
    moment = datetime(2024, 3, 1, tzinfo=UTC)

    assert parse_datetime("2024-03-01T00:00:00") == moment
    assert parse_datetime(None) is None
    assert serialize_values({"user_id": user_id, "at": moment, "n": 1}) == {
        "user_id": str(user_id),
        "at": moment.isoformat(),
        "n": 1,
    }
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date("2024-03-01T08:00:00+00:00") == date(2024, 3, 1)
    assert parse_date(None) is None
    assert serialize_values({"note_date": date(2024, 3, 1)}) == {
        "note_date": "2024-03-01"
    }


def test_food_repository_matches_products_without_barcode() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_products")
    food_id = str(uuid4())
    row = _food_row(food_id, "Homemade bread")
    row["barcode"] = None
    table.queue("select", [row])

    repository = SupabaseFoodRepository(client)
    found = repository.get_by_name("Homemade bread", None)
    missing = repository.get_by_name("Homemade bread", "Baker")

    assert found is not None
    assert str(found.id) == food_id
    assert missing is None
    assert ("is", "barcode", "null") in table.last_filters
    assert ("is", "brand", "null") in table.last_filters
    assert ("eq", "brand", "Baker") in table.last_filters


def test_medication_repository_round_trip() -> None:
    client = FakeSupabaseClient()
    table = client.table("medications")
    user_id = uuid4()
    medication_id = str(uuid4())
    row = {
        "id": medication_id,
        "user_id": str(user_id),
        "name": "Metformin",
        "medication_type": "Oral",
        "dosage": "500 mg",
        "start_date": "2024-01-01T00:00:00",
        "end_date": None,
        "is_active": True,
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("update", [])

    repository = SupabaseMedicationRepository(client)
    created = repository.create_medication(
        user_id,
        {
            "name": "Metformin",
            "medication_type": "Oral",
            "start_date": datetime(2024, 1, 1, tzinfo=UTC),
        },
    )
    payload = table.last_payload
    listed = repository.list_medications(user_id)
    updated = repository.update_medication(created.id, {"is_active": False})

    assert isinstance(payload, dict)
    assert payload["user_id"] == str(user_id)
    assert payload["start_date"] == "2024-01-01T00:00:00+00:00"
    assert created.start_date == datetime(2024, 1, 1, tzinfo=UTC)
    assert created.end_date is None
    assert [str(item.id) for item in listed] == [medication_id]
    assert updated is None


def test_daily_note_repository_filters_by_date() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_notes")
    user_id = uuid4()
    note_id = str(uuid4())
    row = {
        "id": note_id,
        "user_id": str(user_id),
        "note_date": "2024-03-01",
        "mood": "good",
        "weight_kg": "72.5",
        "hours_of_sleep": None,
    }
    table.queue("select", [row])
    table.queue("select", [])

    repository = SupabaseDailyNoteRepository(client)
    notes = repository.list_notes(user_id, date(2024, 3, 1), date(2024, 3, 31))
    missing = repository.get_by_date(user_id, date(2024, 4, 1))

    assert [note.note_date for note in notes] == [date(2024, 3, 1)]
    assert notes[0].weight_kg == 72.5
    assert notes[0].hours_of_sleep is None
    assert missing is None
    assert ("gte", "note_date", "2024-03-01") in table.last_filters
    assert ("lte", "note_date", "2024-03-31") in table.last_filters
    assert ("eq", "note_date", "2024-04-01") in table.last_filters
