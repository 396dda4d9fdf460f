"""Period reports combining glucose, meals and insulin."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from diabetes_tracker.domain.insulin import InsulinRecord
from diabetes_tracker.domain.meals import MealRecord
from diabetes_tracker.domain.reports import DailyTotals, PeriodReport
from diabetes_tracker.services.glucose import GlucoseService
from diabetes_tracker.services.insulin import InsulinService
from diabetes_tracker.services.meals import MealService
from diabetes_tracker.services.user_settings import UserSettingsService

MAX_REPORT_DAYS = 366


@dataclass
class ReportService:
    """Builds period reports in the user's timezone."""

    glucose_service: GlucoseService
    meal_service: MealService
    insulin_service: InsulinService
    settings_service: UserSettingsService

    def build_report(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        timezone_name: str | None = None,
    ) -> PeriodReport:
        """Return glucose statistics and daily meal/insulin totals for a period."""
        if start > end:
            raise ValueError("start must not be after end")
        if end - start > timedelta(days=MAX_REPORT_DAYS):
            raise ValueError(f"report window must not exceed {MAX_REPORT_DAYS} days")
        name = timezone_name or self.settings_service.get_settings(user_id).timezone
        try:
            tz = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {name}") from exc
        try:
            days = _days_between(start.astimezone(tz), end.astimezone(tz))
        except OverflowError as exc:
            raise ValueError("report window is outside the supported dates") from exc

        glucose = self.glucose_service.get_statistics(user_id, start, end)
        meals = self.meal_service.list_meals(user_id, start, end)
        insulin = self.insulin_service.list_records(user_id, start, end)
        daily = [_aggregate_day(day, meals, insulin, tz) for day in days]
        total_carbs = sum(meal.totals.carbs_g for meal in meals)
        return PeriodReport(
            start=start,
            end=end,
            glucose=glucose,
            daily=daily,
            meal_count=len(meals),
            total_calories=sum(meal.totals.calories for meal in meals),
            total_carbs_g=total_carbs,
            avg_daily_carbs_g=total_carbs / max(len(daily), 1),
            estimated_insulin_units=sum(
                meal.totals.estimated_insulin_units for meal in meals
            ),
            insulin_units=self.insulin_service.total_units(user_id, start, end),
        )


def _days_between(start: datetime, end: datetime) -> list[date]:
    first = start.date()
    span = (end.date() - first).days
    return [first + timedelta(days=offset) for offset in range(span + 1)]


def _aggregate_day(
    day: date,
    meals: list[MealRecord],
    insulin: list[InsulinRecord],
    tz: ZoneInfo,
) -> DailyTotals:
    day_meals = [
        meal for meal in meals if meal.details.meal_time.astimezone(tz).date() == day
    ]
    return DailyTotals(
        day=day,
        calories=sum(meal.totals.calories for meal in day_meals),
        carbs_g=sum(meal.totals.carbs_g for meal in day_meals),
        estimated_insulin_units=sum(
            meal.totals.estimated_insulin_units for meal in day_meals
        ),
        insulin_units=sum(
            record.dose_units
            for record in insulin
            if record.injected_at.astimezone(tz).date() == day
        ),
    )
