"""Insulin record endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import InsulinRecordIn, ensure_utc  # noqa: TC001
from diabetes_tracker.domain.insulin import InsulinRecord  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["insulin"], dependencies=[Depends(require_api_token)]
)


@router.get("/users/{user_id}/insulin")
async def list_records(
    user_id: UUID,
    request: Request,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[InsulinRecord]:
    """Return a user's insulin records, newest first."""
    container: AppContainer = request.app.state.container
    return container.insulin_service.list_records(
        user_id,
        ensure_utc(start) if start else None,
        ensure_utc(end) if end else None,
    )


@router.post("/users/{user_id}/insulin", status_code=status.HTTP_201_CREATED)
async def add_record(
    user_id: UUID, payload: InsulinRecordIn, request: Request
) -> InsulinRecord:
    """Log an insulin injection."""
    container: AppContainer = request.app.state.container
    return container.insulin_service.add_record(user_id, payload.model_dump())


@router.get("/insulin/{record_id}")
async def get_record(record_id: UUID, request: Request) -> InsulinRecord:
    container: AppContainer = request.app.state.container
    record = container.insulin_service.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return record


@router.put("/insulin/{record_id}")
async def update_record(
    record_id: UUID, payload: InsulinRecordIn, request: Request
) -> InsulinRecord:
    container: AppContainer = request.app.state.container
    record = container.insulin_service.update_record(record_id, payload.model_dump())
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return record


@router.delete("/insulin/{record_id}")
async def delete_record(record_id: UUID, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    if not container.insulin_service.delete_record(record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
