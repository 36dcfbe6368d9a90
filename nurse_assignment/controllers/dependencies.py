"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import Request

from nurse_assignment.services.assignment_service import AssignmentCalculationService
from nurse_assignment.utils.config import get_settings


def get_assignment_service(request: Request) -> AssignmentCalculationService:
    service = getattr(request.app.state, "assignment_service", None)
    if service is None:
        service = AssignmentCalculationService(settings=get_settings())
        request.app.state.assignment_service = service
    return service
