"""Daily note domain models."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class DailyNote:
    """Per-day journal entry. Unsaved placeholders have no id."""

    user_id: UUID
    note_date: date
    id: UUID | None = None
    notes: str | None = None
    mood: str | None = None
    physical_activity: str | None = None
    weight_kg: float | None = None
    hours_of_sleep: float | None = None
    symptoms: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
