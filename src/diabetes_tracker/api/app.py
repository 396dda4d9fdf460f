"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from diabetes_tracker.api.daily_notes import router as daily_notes_router
from diabetes_tracker.api.foods import router as foods_router
from diabetes_tracker.api.glucose import router as glucose_router
from diabetes_tracker.api.insulin import router as insulin_router
from diabetes_tracker.api.meals import router as meals_router
from diabetes_tracker.api.medications import router as medications_router
from diabetes_tracker.api.users import router as users_router
from diabetes_tracker.app_logging import configure_logging
from diabetes_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Diabetes Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(glucose_router)
    app.include_router(insulin_router)
    app.include_router(medications_router)
    app.include_router(daily_notes_router)
    app.include_router(users_router)

    @app.exception_handler(LookupError)
    async def not_found(request: Request, exc: LookupError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ValueError)
    async def bad_request(request: Request, exc: ValueError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
