"""Medication endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import MedicationIn  # noqa: TC001
from diabetes_tracker.domain.medications import Medication  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["medications"], dependencies=[Depends(require_api_token)]
)


@router.get("/users/{user_id}/medications")
async def list_medications(
    user_id: UUID, request: Request, active_only: bool = False
) -> list[Medication]:
    """Return a user's medications ordered by name."""
    container: AppContainer = request.app.state.container
    return container.medication_service.list_medications(
        user_id, active_only=active_only
    )


@router.post("/users/{user_id}/medications", status_code=status.HTTP_201_CREATED)
async def add_medication(
    user_id: UUID, payload: MedicationIn, request: Request
) -> Medication:
    container: AppContainer = request.app.state.container
    return container.medication_service.add_medication(user_id, payload.model_dump())


@router.get("/medications/{medication_id}")
async def get_medication(medication_id: UUID, request: Request) -> Medication:
    container: AppContainer = request.app.state.container
    medication = container.medication_service.get_medication(medication_id)
    if medication is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return medication


@router.put("/medications/{medication_id}")
async def update_medication(
    medication_id: UUID, payload: MedicationIn, request: Request
) -> Medication:
    """Replace a medication's fields, including its active flag."""
    container: AppContainer = request.app.state.container
    medication = container.medication_service.update_medication(
        medication_id, payload.model_dump()
    )
    if medication is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return medication


@router.delete("/medications/{medication_id}")
async def delete_medication(medication_id: UUID, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    if not container.medication_service.delete_medication(medication_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
