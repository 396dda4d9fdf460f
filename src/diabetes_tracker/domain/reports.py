"""Domain models for reporting."""

from dataclasses import dataclass
from datetime import date, datetime

from diabetes_tracker.domain.glucose import GlucoseSummary


@dataclass(frozen=True)
class DailyTotals:
    """Per-day meal and insulin totals."""

    day: date
    calories: float
    carbs_g: float
    estimated_insulin_units: float
    insulin_units: float


@dataclass(frozen=True)
class PeriodReport:
    """Combined glucose, meal and insulin report for a period."""

    start: datetime
    end: datetime
    glucose: GlucoseSummary
    daily: list[DailyTotals]
    meal_count: int
    total_calories: float
    total_carbs_g: float
    avg_daily_carbs_g: float
    estimated_insulin_units: float
    insulin_units: float
