"""Daily note service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.daily_notes import DailyNote


class DailyNoteRepository(Protocol):
    """Persistence interface for daily notes."""

    def list_notes(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[DailyNote]:
        """Return notes dated within the inclusive range, newest first."""

    def get_note(self, note_id: UUID) -> DailyNote | None:
        """Return a note by id."""

    def get_by_date(self, user_id: UUID, note_date: date) -> DailyNote | None:
        """Return the user's note for a date."""

    def create_note(self, user_id: UUID, values: dict[str, object]) -> DailyNote:
        """Create a note and return it."""

    def update_note(
        self, note_id: UUID, values: dict[str, object]
    ) -> DailyNote | None:
        """Update a note and return it, or None when missing."""

    def delete_note(self, note_id: UUID) -> bool:
        """Delete a note, returning False when missing."""


@dataclass
class DailyNoteService:
    """One journal entry per user and day."""

    repository: DailyNoteRepository

    def list_notes(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DailyNote]:
        return self.repository.list_notes(user_id, start, end)

    def get_note(self, note_id: UUID) -> DailyNote | None:
        return self.repository.get_note(note_id)

    def get_for_date(self, user_id: UUID, note_date: date) -> DailyNote:
        """Return the note for a day, or an unsaved blank one."""
        note = self.repository.get_by_date(user_id, note_date)
        if note is None:
            return DailyNote(user_id=user_id, note_date=note_date)
        return note

    def add_note(self, user_id: UUID, values: dict[str, object]) -> DailyNote:
        """Create the note for a day; a day holds at most one note."""
        note_date = values["note_date"]
        if self.repository.get_by_date(user_id, note_date) is not None:
            raise ValueError(f"A note for {note_date} already exists")
        return self.repository.create_note(user_id, values)

    def update_note(
        self, note_id: UUID, values: dict[str, object]
    ) -> DailyNote | None:
        """Update a note's content; its date stays fixed."""
        content = {key: value for key, value in values.items() if key != "note_date"}
        return self.repository.update_note(note_id, content)

    def delete_note(self, note_id: UUID) -> bool:
        return self.repository.delete_note(note_id)
