"""Insulin domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class InsulinRecord:
    """Logged insulin injection."""

    id: UUID
    user_id: UUID
    insulin_type: str
    dose_units: float
    injected_at: datetime
    injection_site: str | None = None
    notes: str | None = None
    meal_id: UUID | None = None
    created_at: datetime | None = None
