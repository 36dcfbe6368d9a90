"""HTTP controller layer for shift assignment calculation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from nurse_assignment.controllers.dependencies import get_assignment_service
from nurse_assignment.domain.errors import (
    InsufficientCapacityError,
    InvalidRangeError,
    InvalidStaffingError,
    RoomRangeTooLargeError,
)
from nurse_assignment.domain.models import (
    CalculationResult,
    DistributionPolicy,
    StaffAssignment,
    TotalCarePolicy,
)
from nurse_assignment.services.assignment_service import AssignmentCalculationService
from nurse_assignment.services.room_parser import format_room_list, parse_room_list
from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["assignments"])

MAX_ROOM_NUMBER = 99_999


class CalculateAssignmentsRequest(BaseModel):
    """Input DTO; room list fields use the ``101, 105, 110-115`` syntax."""

    room_range_start: int = Field(ge=0, le=MAX_ROOM_NUMBER)
    room_range_end: int = Field(ge=0, le=MAX_ROOM_NUMBER)
    excluded_rooms: str = ""
    discharges: str = ""
    admits: str = ""
    high_acuity_rooms: str = ""
    high_fall_risk_rooms: str = ""
    total_nurses: int
    total_aides: int = 0
    max_patients_per_nurse: int | None = None
    max_patients_per_aide: int | None = None
    distribution_policy: DistributionPolicy | None = None
    total_care_policy: TotalCarePolicy | None = None


class StaffAssignmentResponse(BaseModel):
    staff_number: int = Field(ge=1)
    assigned_rooms: list[int]
    patient_count: int = Field(ge=0)
    high_acuity_rooms: list[int]
    high_fall_risk_rooms: list[int]
    total_care_rooms: list[int]
    discharge_rooms: list[int]
    admit_rooms: list[int]


class CoverageResponse(BaseModel):
    total_aide_capacity: int = Field(ge=0)
    patients_without_aide_support: int = Field(ge=0)


class CalculateAssignmentsResponse(BaseModel):
    total_patient_count: int = Field(ge=0)
    rooms: list[int]
    coverage: CoverageResponse
    nurse_assignments: list[StaffAssignmentResponse]
    aide_assignments: list[StaffAssignmentResponse]
    processed_discharges: list[int]
    processed_admits: list[int]
    unassigned_total_care_count: int = Field(ge=0)
    distribution_policy: DistributionPolicy
    total_care_policy: TotalCarePolicy


class ParseRoomsRequest(BaseModel):
    room_input: str = ""


class ParseRoomsResponse(BaseModel):
    rooms: list[int]
    formatted: str


class HealthResponse(BaseModel):
    status: str
    app_name: str
    app_version: str


def _to_staff_response(assignment: StaffAssignment) -> StaffAssignmentResponse:
    return StaffAssignmentResponse(
        staff_number=assignment.staff_number,
        assigned_rooms=list(assignment.assigned_rooms),
        patient_count=assignment.patient_count,
        high_acuity_rooms=list(assignment.high_acuity_rooms),
        high_fall_risk_rooms=list(assignment.high_fall_risk_rooms),
        total_care_rooms=list(assignment.total_care_rooms),
        discharge_rooms=list(assignment.discharge_rooms),
        admit_rooms=list(assignment.admit_rooms),
    )


def _to_response(result: CalculationResult) -> CalculateAssignmentsResponse:
    return CalculateAssignmentsResponse(
        total_patient_count=result.total_patient_count,
        rooms=list(result.rooms),
        coverage=CoverageResponse(
            total_aide_capacity=result.coverage.total_aide_capacity,
            patients_without_aide_support=result.coverage.patients_without_aide_support,
        ),
        nurse_assignments=[_to_staff_response(item) for item in result.nurse_assignments],
        aide_assignments=[_to_staff_response(item) for item in result.aide_assignments],
        processed_discharges=list(result.processed_discharges),
        processed_admits=list(result.processed_admits),
        unassigned_total_care_count=result.unassigned_total_care_count,
        distribution_policy=result.distribution_policy,
        total_care_policy=result.total_care_policy,
    )


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(
    service: AssignmentCalculationService = Depends(get_assignment_service),
) -> HealthResponse:
    settings = service.settings
    return HealthResponse(
        status="ok",
        app_name=settings.app_name,
        app_version=settings.app_version,
    )


@router.post(
    "/parse_rooms",
    response_model=ParseRoomsResponse,
    status_code=status.HTTP_200_OK,
)
async def parse_rooms(
    payload: ParseRoomsRequest,
    service: AssignmentCalculationService = Depends(get_assignment_service),
) -> ParseRoomsResponse:
    """Normalize one room list string the same way the calculator does."""
    rooms = parse_room_list(payload.room_input, max_span=service.settings.max_room_span)
    return ParseRoomsResponse(rooms=rooms, formatted=format_room_list(rooms))


@router.post(
    "/calculate_assignments",
    response_model=CalculateAssignmentsResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_assignments(
    payload: CalculateAssignmentsRequest,
    service: AssignmentCalculationService = Depends(get_assignment_service),
) -> CalculateAssignmentsResponse:
    """Distribute the shift's rooms across nurses and aides."""
    max_span = service.settings.max_room_span
    try:
        data = service.build_input(
            room_range_start=payload.room_range_start,
            room_range_end=payload.room_range_end,
            excluded_rooms=parse_room_list(payload.excluded_rooms, max_span=max_span),
            discharges=parse_room_list(payload.discharges, max_span=max_span),
            admits=parse_room_list(payload.admits, max_span=max_span),
            high_acuity_rooms=parse_room_list(payload.high_acuity_rooms, max_span=max_span),
            high_fall_risk_rooms=parse_room_list(
                payload.high_fall_risk_rooms, max_span=max_span
            ),
            total_nurses=payload.total_nurses,
            total_aides=payload.total_aides,
            max_patients_per_nurse=payload.max_patients_per_nurse,
            max_patients_per_aide=payload.max_patients_per_aide,
        )
        result = service.calculate(
            data,
            distribution_policy=payload.distribution_policy,
            total_care_policy=payload.total_care_policy,
        )
        return _to_response(result)
    except (InvalidRangeError, RoomRangeTooLargeError, InvalidStaffingError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except InsufficientCapacityError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected assignment calculation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate assignments",
        ) from exc
