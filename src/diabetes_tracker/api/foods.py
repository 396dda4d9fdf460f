"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import FoodIn  # noqa: TC001
from diabetes_tracker.domain.nutrition import FoodProduct  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/foods", tags=["foods"], dependencies=[Depends(require_api_token)]
)


@router.get("/search")
async def search_foods(
    request: Request, query: str = "", limit: int = 20
) -> list[FoodProduct]:
    """Search the local catalog, then Open Food Facts."""
    container: AppContainer = request.app.state.container
    return await container.food_service.search(query, limit=max(1, min(limit, 100)))


@router.get("/barcode/{barcode}")
async def get_by_barcode(barcode: str, request: Request) -> FoodProduct:
    """Return a product by barcode."""
    container: AppContainer = request.app.state.container
    food = await container.food_service.get_by_barcode(barcode)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return food


@router.get("/{food_id}")
async def get_food(food_id: UUID, request: Request) -> FoodProduct:
    """Return a food by id."""
    container: AppContainer = request.app.state.container
    food = container.food_service.get_food(food_id)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return food


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(payload: FoodIn, request: Request) -> FoodProduct:
    """Add a custom food."""
    container: AppContainer = request.app.state.container
    return container.food_service.create_custom_food(payload.to_product())


@router.put("/{food_id}")
async def update_food(food_id: UUID, payload: FoodIn, request: Request) -> FoodProduct:
    """Update a food's name, description and nutrients."""
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food(food_id, payload.to_product())
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return food


@router.delete("/{food_id}")
async def delete_food(food_id: UUID, request: Request) -> Response:
    """Delete a food that no meal uses."""
    container: AppContainer = request.app.state.container
    if not container.food_service.delete_food(food_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
