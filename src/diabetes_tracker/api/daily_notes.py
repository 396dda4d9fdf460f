"""Daily note endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import DailyNoteIn  # noqa: TC001
from diabetes_tracker.domain.daily_notes import DailyNote  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["daily-notes"], dependencies=[Depends(require_api_token)]
)


@router.get("/users/{user_id}/daily-notes")
async def list_notes(
    user_id: UUID,
    request: Request,
    start: date | None = None,
    end: date | None = None,
) -> list[DailyNote]:
    """Return a user's notes, newest day first."""
    container: AppContainer = request.app.state.container
    return container.daily_note_service.list_notes(user_id, start, end)


@router.get("/users/{user_id}/daily-notes/date/{note_date}")
async def get_note_for_date(
    user_id: UUID, note_date: date, request: Request
) -> DailyNote:
    """Return the note for a day, or a blank unsaved one."""
    container: AppContainer = request.app.state.container
    return container.daily_note_service.get_for_date(user_id, note_date)


@router.post("/users/{user_id}/daily-notes", status_code=status.HTTP_201_CREATED)
async def add_note(user_id: UUID, payload: DailyNoteIn, request: Request) -> DailyNote:
    container: AppContainer = request.app.state.container
    return container.daily_note_service.add_note(user_id, payload.model_dump())


@router.get("/daily-notes/{note_id}")
async def get_note(note_id: UUID, request: Request) -> DailyNote:
    container: AppContainer = request.app.state.container
    note = container.daily_note_service.get_note(note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return note


@router.put("/daily-notes/{note_id}")
async def update_note(
    note_id: UUID, payload: DailyNoteIn, request: Request
) -> DailyNote:
    """Update a note's content; the date in the payload is ignored."""
    container: AppContainer = request.app.state.container
    note = container.daily_note_service.update_note(note_id, payload.model_dump())
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return note


@router.delete("/daily-notes/{note_id}")
async def delete_note(note_id: UUID, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    if not container.daily_note_service.delete_note(note_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
