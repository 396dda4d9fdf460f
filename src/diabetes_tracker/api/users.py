"""Per-user settings and report endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from diabetes_tracker.api.auth import require_api_token
from diabetes_tracker.api.schemas import UserSettingsIn, ensure_utc  # noqa: TC001
from diabetes_tracker.domain.reports import PeriodReport  # noqa: TC001

if TYPE_CHECKING:
    from diabetes_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/users", tags=["users"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/settings")
async def get_settings(user_id: UUID, request: Request) -> UserSettingsIn:
    """Return the user's target range, carb ratio and timezone."""
    container: AppContainer = request.app.state.container
    settings = container.user_settings_service.get_settings(user_id)
    return UserSettingsIn(
        target_low=settings.target_range.low,
        target_high=settings.target_range.high,
        carbs_per_insulin_unit=settings.carbs_per_insulin_unit,
        timezone=settings.timezone,
    )


@router.put("/{user_id}/settings")
async def update_settings(
    user_id: UUID, payload: UserSettingsIn, request: Request
) -> UserSettingsIn:
    """Store the user's target range, carb ratio and timezone."""
    container: AppContainer = request.app.state.container
    container.user_settings_service.update_settings(user_id, payload.to_settings())
    return payload


@router.get("/{user_id}/report")
async def period_report(
    user_id: UUID,
    start: datetime,
    end: datetime,
    request: Request,
    timezone: str | None = None,
) -> PeriodReport:
    """Return glucose statistics with daily meal and insulin totals."""
    container: AppContainer = request.app.state.container
    return container.report_service.build_report(
        user_id, ensure_utc(start), ensure_utc(end), timezone
    )
