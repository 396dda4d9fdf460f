"""Domain models for per-user settings."""

from dataclasses import dataclass

from diabetes_tracker.domain.glucose import TargetRange


@dataclass(frozen=True)
class UserSettings:
    """Resolved clinical settings for a user."""

    target_range: TargetRange
    carbs_per_insulin_unit: float
    timezone: str = "UTC"
