"""Glucose reading endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import GlucoseReadingIn, ensure_utc  # noqa: TC001
from diabetes_tracker.domain.glucose import (  # noqa: TC001
    GlucoseReading,
    GlucoseSummary,
)

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["glucose"], dependencies=[Depends(require_api_token)]
)


@router.get("/users/{user_id}/glucose")
async def list_readings(
    user_id: UUID,
    request: Request,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[GlucoseReading]:
    """Return a user's readings, newest first."""
    container: AppContainer = request.app.state.container
    return container.glucose_service.list_readings(
        user_id,
        ensure_utc(start) if start else None,
        ensure_utc(end) if end else None,
    )


@router.post("/users/{user_id}/glucose", status_code=status.HTTP_201_CREATED)
async def add_reading(
    user_id: UUID, payload: GlucoseReadingIn, request: Request
) -> GlucoseReading:
    """Log a glucose reading."""
    container: AppContainer = request.app.state.container
    return container.glucose_service.add_reading(user_id, payload.model_dump())


@router.get("/users/{user_id}/glucose/statistics")
async def reading_statistics(
    user_id: UUID, start: datetime, end: datetime, request: Request
) -> GlucoseSummary:
    """Summarize readings in [start, end] against the user's target range."""
    container: AppContainer = request.app.state.container
    return container.glucose_service.get_statistics(
        user_id, ensure_utc(start), ensure_utc(end)
    )


@router.get("/glucose/{reading_id}")
async def get_reading(reading_id: UUID, request: Request) -> GlucoseReading:
    """Return a reading by id."""
    container: AppContainer = request.app.state.container
    reading = container.glucose_service.get_reading(reading_id)
    if reading is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return reading


@router.put("/glucose/{reading_id}")
async def update_reading(
    reading_id: UUID, payload: GlucoseReadingIn, request: Request
) -> GlucoseReading:
    """Replace a reading's editable fields."""
    container: AppContainer = request.app.state.container
    reading = container.glucose_service.update_reading(
        reading_id, payload.model_dump()
    )
    if reading is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return reading


@router.delete("/glucose/{reading_id}")
async def delete_reading(reading_id: UUID, request: Request) -> Response:
    """Delete a reading."""
    container: AppContainer = request.app.state.container
    if not container.glucose_service.delete_reading(reading_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
