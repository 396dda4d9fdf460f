"""Domain models for glucose readings and statistics."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TargetRange:
    """Glucose band in mg/dL counted as in range, inclusive on both ends."""

    low: float = 80.0
    high: float = 180.0


@dataclass(frozen=True)
class GlucoseSample:
    """Single glucose value in mg/dL."""

    value: float
    measured_at: datetime


@dataclass(frozen=True)
class GlucoseReading:
    """Persisted glucose reading."""

    id: UUID
    user_id: UUID
    value: float
    measured_at: datetime
    measurement_type: str
    mood: str | None = None
    notes: str | None = None
    meal_id: UUID | None = None
    created_at: datetime | None = None

    def as_sample(self) -> GlucoseSample:
        return GlucoseSample(value=self.value, measured_at=self.measured_at)


@dataclass(frozen=True)
class GlucoseSummary:
    """Descriptive statistics over readings in a time window."""

    reading_count: int = 0
    average: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    in_range_pct: float = 0.0
    below_range_pct: float = 0.0
    above_range_pct: float = 0.0
