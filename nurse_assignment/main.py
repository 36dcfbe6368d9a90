"""FastAPI application bootstrap and service wiring."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from nurse_assignment.controllers.assignment_controller import router as assignment_router
from nurse_assignment.services.assignment_service import AssignmentCalculationService
from nurse_assignment.utils.config import Settings, get_settings
from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with its calculation service injected via ``app.state``."""
    settings = settings or get_settings()
    assignment_service = AssignmentCalculationService(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Startup complete | distribution=%s | total_care=%s | total_care_max_per_nurse=%s",
            settings.default_distribution_policy.value,
            settings.default_total_care_policy.value,
            settings.total_care_max_per_nurse,
        )
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.include_router(assignment_router)
    app.state.assignment_service = assignment_service

    return app


app = create_app()
