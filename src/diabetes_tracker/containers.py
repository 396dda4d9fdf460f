"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diabetes_tracker.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
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
from diabetes_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from diabetes_tracker.config import Settings
from diabetes_tracker.domain.glucose import TargetRange
from diabetes_tracker.services.cache import InMemoryCache
from diabetes_tracker.services.daily_notes import DailyNoteService
from diabetes_tracker.services.foods import FoodCatalogService
from diabetes_tracker.services.glucose import GlucoseService
from diabetes_tracker.services.insulin import InsulinService
from diabetes_tracker.services.meals import MealService
from diabetes_tracker.services.medications import MedicationService
from diabetes_tracker.services.nutrition import NutritionService
from diabetes_tracker.services.reports import ReportService
from diabetes_tracker.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    food_service: FoodCatalogService
    meal_service: MealService
    glucose_service: GlucoseService
    insulin_service: InsulinService
    medication_service: MedicationService
    daily_note_service: DailyNoteService
    user_settings_service: UserSettingsService
    report_service: ReportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client),
        default_target_range=TargetRange(
            low=resolved_settings.glucose_target_low,
            high=resolved_settings.glucose_target_high,
        ),
        default_carbs_per_unit=resolved_settings.carbs_per_insulin_unit,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        user_agent=resolved_settings.openfoodfacts_user_agent,
    )
    nutrition_service = NutritionService(client=off_client, cache=InMemoryCache())
    food_service = FoodCatalogService(
        repository=food_repository, nutrition_service=nutrition_service
    )
    meal_service = MealService(
        repository=SupabaseMealRepository(supabase_client),
        food_repository=food_repository,
        settings_service=user_settings_service,
    )
    glucose_service = GlucoseService(
        repository=SupabaseGlucoseRepository(supabase_client),
        settings_service=user_settings_service,
    )
    insulin_service = InsulinService(SupabaseInsulinRepository(supabase_client))
    report_service = ReportService(
        glucose_service=glucose_service,
        meal_service=meal_service,
        insulin_service=insulin_service,
        settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        food_service=food_service,
        meal_service=meal_service,
        glucose_service=glucose_service,
        insulin_service=insulin_service,
        medication_service=MedicationService(
            SupabaseMedicationRepository(supabase_client)
        ),
        daily_note_service=DailyNoteService(
            SupabaseDailyNoteRepository(supabase_client)
        ),
        user_settings_service=user_settings_service,
        report_service=report_service,
        close_resources=close_resources,
    )
