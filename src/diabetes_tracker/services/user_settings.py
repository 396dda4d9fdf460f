"""User settings service."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from diabetes_tracker.domain.glucose import TargetRange
from diabetes_tracker.domain.settings import UserSettings
from diabetes_tracker.services.portions import (
    DEFAULT_CARBS_PER_UNIT,
    InsulinEstimator,
    carb_ratio_estimator,
)


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_settings(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored settings row for a user, if any."""

    def upsert_settings(self, user_id: UUID, values: dict[str, object]) -> None:
        """Create or update the settings row for a user."""


@dataclass
class UserSettingsService:
    """Resolves per-user clinical settings with configured fallbacks."""

    repository: UserSettingsRepository
    default_target_range: TargetRange = field(default_factory=TargetRange)
    default_carbs_per_unit: float = DEFAULT_CARBS_PER_UNIT

    def get_settings(self, user_id: UUID) -> UserSettings:
        """Return the user's settings, filling unset fields with defaults."""
        row = self.repository.get_settings(user_id) or {}
        low = row.get("target_low")
        high = row.get("target_high")
        ratio = row.get("carbs_per_insulin_unit")
        return UserSettings(
            target_range=TargetRange(
                low=float(low) if low is not None else self.default_target_range.low,
                high=(
                    float(high)
                    if high is not None
                    else self.default_target_range.high
                ),
            ),
            carbs_per_insulin_unit=(
                float(ratio)
                if ratio is not None and float(ratio) > 0
                else self.default_carbs_per_unit
            ),
            timezone=str(row.get("timezone") or "UTC"),
        )

    def get_target_range(self, user_id: UUID) -> TargetRange:
        return self.get_settings(user_id).target_range

    def get_insulin_estimator(self, user_id: UUID) -> InsulinEstimator:
        """Return the carb-ratio estimator configured for the user."""
        return carb_ratio_estimator(self.get_settings(user_id).carbs_per_insulin_unit)

    def update_settings(self, user_id: UUID, settings: UserSettings) -> UserSettings:
        """Validate and persist a user's settings."""
        if settings.target_range.low >= settings.target_range.high:
            raise ValueError("target range low must be below high")
        if settings.carbs_per_insulin_unit <= 0:
            raise ValueError("carbs_per_insulin_unit must be positive")
        try:
            ZoneInfo(settings.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {settings.timezone}") from exc
        self.repository.upsert_settings(
            user_id,
            {
                "target_low": settings.target_range.low,
                "target_high": settings.target_range.high,
                "carbs_per_insulin_unit": settings.carbs_per_insulin_unit,
                "timezone": settings.timezone,
            },
        )
        return settings
