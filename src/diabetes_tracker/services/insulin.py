"""Insulin record service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.insulin import InsulinRecord


class InsulinRepository(Protocol):
    """Persistence interface for insulin records."""

    def list_records(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[InsulinRecord]:
        """Return records in the range, newest first."""

    def get_record(self, record_id: UUID) -> InsulinRecord | None:
        """Return a record by id."""

    def create_record(self, user_id: UUID, values: dict[str, object]) -> InsulinRecord:
        """Create a record and return it."""

    def update_record(
        self, record_id: UUID, values: dict[str, object]
    ) -> InsulinRecord | None:
        """Update a record and return it, or None when missing."""

    def delete_record(self, record_id: UUID) -> bool:
        """Delete a record, returning False when missing."""


@dataclass
class InsulinService:
    """Application service for insulin logging."""

    repository: InsulinRepository

    def list_records(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[InsulinRecord]:
        return self.repository.list_records(user_id, start, end)

    def get_record(self, record_id: UUID) -> InsulinRecord | None:
        return self.repository.get_record(record_id)

    def add_record(self, user_id: UUID, values: dict[str, object]) -> InsulinRecord:
        return self.repository.create_record(user_id, values)

    def update_record(
        self, record_id: UUID, values: dict[str, object]
    ) -> InsulinRecord | None:
        return self.repository.update_record(record_id, values)

    def delete_record(self, record_id: UUID) -> bool:
        return self.repository.delete_record(record_id)

    def total_units(self, user_id: UUID, start: datetime, end: datetime) -> float:
        """Return the total dose logged in the range."""
        records = self.repository.list_records(user_id, start, end)
        return sum(record.dose_units for record in records)
