"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cravesmart.api.analysis import router as analysis_router
from cravesmart.api.auth import router as auth_router
from cravesmart.api.preferences import router as preferences_router
from cravesmart.api.profiles import router as profiles_router
from cravesmart.app_logging import configure_logging
from cravesmart.containers import AppContainer
from cravesmart.domain.analysis import MAX_MEALS_PER_DAY, MIN_MEALS_PER_DAY, PlanType
from cravesmart.domain.profiles import (
    MACRO_PREFERENCES,
    PROTEIN_PREFERENCES,
    ActivityLevel,
    DietType,
    FitnessGoal,
    Gender,
)
from cravesmart.errors import (
    AnalysisFailedError,
    AnalysisInProgressError,
    AuthenticationError,
    CraveSmartError,
    InputValidationError,
    NotFoundError,
)

_STATUS_BY_ERROR: dict[type[CraveSmartError], int] = {
    InputValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AnalysisInProgressError: status.HTTP_409_CONFLICT,
    AnalysisFailedError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="CraveSmart", lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(preferences_router)
    app.include_router(profiles_router)
    app.include_router(analysis_router)

    @app.exception_handler(CraveSmartError)
    async def handle_app_error(request: Request, exc: CraveSmartError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Request failed: %s %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status_code,
            content={"detail": _error_detail(request.app.state.container, exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "env": container.settings.environment}

    @app.get("/options")
    async def form_options() -> dict[str, object]:
        """Values accepted by the profile and analysis forms."""
        return {
            "gender": [item.value for item in Gender],
            "activity_level": [item.value for item in ActivityLevel],
            "goal": [item.value for item in FitnessGoal],
            "diet_type": [item.value for item in DietType],
            "plan_type": [item.value for item in PlanType],
            "meals_per_day": list(range(MIN_MEALS_PER_DAY, MAX_MEALS_PER_DAY + 1)),
            "macro_preference": [
                {"label": label, "value": value} for label, value in MACRO_PREFERENCES
            ],
            "protein_preference": [
                {"label": label, "value": value}
                for label, value in PROTEIN_PREFERENCES
            ],
        }

    return app


def _status_for(exc: CraveSmartError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error_detail(container: AppContainer, exc: CraveSmartError) -> str:
    """Return a user-facing message with local debug info for upstream failures."""
    cause = exc.__cause__
    if (
        isinstance(exc, AnalysisFailedError)
        and cause is not None
        and container.settings.environment == "local"
    ):
        detail = f"{type(cause).__name__}: {cause}".strip()
        return f"{exc.message} (debug: {detail})"
    return exc.message
