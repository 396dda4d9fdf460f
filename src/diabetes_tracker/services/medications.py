"""Medication list service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.medications import Medication


class MedicationRepository(Protocol):
    """Persistence interface for medications."""

    def list_medications(self, user_id: UUID) -> list[Medication]:
        """Return a user's medications ordered by name."""

    def get_medication(self, medication_id: UUID) -> Medication | None:
        """Return a medication by id."""

    def create_medication(self, user_id: UUID, values: dict[str, object]) -> Medication:
        """Create a medication and return it."""

    def update_medication(
        self, medication_id: UUID, values: dict[str, object]
    ) -> Medication | None:
        """Update a medication and return it, or None when missing."""

    def delete_medication(self, medication_id: UUID) -> bool:
        """Delete a medication, returning False when missing."""


@dataclass
class MedicationService:
    """Application service for a user's medication list."""

    repository: MedicationRepository

    def list_medications(
        self, user_id: UUID, active_only: bool = False
    ) -> list[Medication]:
        medications = self.repository.list_medications(user_id)
        if active_only:
            return [medication for medication in medications if medication.is_active]
        return medications

    def get_medication(self, medication_id: UUID) -> Medication | None:
        return self.repository.get_medication(medication_id)

    def add_medication(self, user_id: UUID, values: dict[str, object]) -> Medication:
        """Persist a new medication after checking its date range."""
        _check_dates(values)
        return self.repository.create_medication(user_id, values)

    def update_medication(
        self, medication_id: UUID, values: dict[str, object]
    ) -> Medication | None:
        _check_dates(values)
        return self.repository.update_medication(medication_id, values)

    def delete_medication(self, medication_id: UUID) -> bool:
        return self.repository.delete_medication(medication_id)


def _check_dates(values: dict[str, object]) -> None:
    start = values.get("start_date")
    end = values.get("end_date")
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must not be before start_date")
