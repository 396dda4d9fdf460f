"""Meal logging endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import (  # noqa: TC001
    MealDetailsIn,
    MealIn,
    MealItemIn,
    ensure_utc,
)
from diabetes_tracker.domain.meals import MealItemRecord, MealRecord  # noqa: TC001
from diabetes_tracker.domain.nutrition import MealTotals  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["meals"], dependencies=[Depends(require_api_token)]
)


@router.get("/users/{user_id}/meals")
async def list_meals(
    user_id: UUID,
    request: Request,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[MealRecord]:
    """Return a user's meals, newest first."""
    container: AppContainer = request.app.state.container
    return container.meal_service.list_meals(
        user_id,
        ensure_utc(start) if start else None,
        ensure_utc(end) if end else None,
    )


@router.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(user_id: UUID, payload: MealIn, request: Request) -> MealRecord:
    """Log a meal, optionally with its items."""
    container: AppContainer = request.app.state.container
    return container.meal_service.create_meal(
        user_id,
        payload.to_details(),
        [item.to_draft() for item in payload.items],
    )


@router.get("/meals/{meal_id}")
async def get_meal(meal_id: UUID, request: Request) -> MealRecord:
    """Return a meal with its items."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.get_meal(meal_id)
    if meal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return meal


@router.put("/meals/{meal_id}")
async def update_meal(
    meal_id: UUID, payload: MealDetailsIn, request: Request
) -> MealRecord:
    """Update meal type, time, name, notes and photo."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.update_meal(meal_id, payload.to_details())
    if meal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return meal


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: UUID, request: Request) -> Response:
    """Delete a meal and its items."""
    container: AppContainer = request.app.state.container
    if not container.meal_service.delete_meal(meal_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/meals/{meal_id}/items", status_code=status.HTTP_201_CREATED)
async def add_meal_item(
    meal_id: UUID, payload: MealItemIn, request: Request
) -> MealItemRecord:
    """Add a food portion to a meal."""
    container: AppContainer = request.app.state.container
    return container.meal_service.add_item(meal_id, payload.to_draft())


@router.delete("/meals/items/{item_id}")
async def remove_meal_item(item_id: UUID, request: Request) -> Response:
    """Remove a food portion from its meal."""
    container: AppContainer = request.app.state.container
    if not container.meal_service.remove_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/meals/{meal_id}/recalculate")
async def recalculate_meal(meal_id: UUID, request: Request) -> MealTotals:
    """Recompute a meal's totals with the user's current carb ratio."""
    container: AppContainer = request.app.state.container
    totals = container.meal_service.recalculate(meal_id)
    if totals is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return totals
