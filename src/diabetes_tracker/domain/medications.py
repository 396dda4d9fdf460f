"""Medication domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Medication:
    """Medication a user takes, such as an oral drug or an injectable."""

    id: UUID
    user_id: UUID
    name: str
    medication_type: str
    brand: str | None = None
    dosage: str | None = None
    instructions: str | None = None
    frequency: str | None = None
    prescribed_by: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool = True
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
