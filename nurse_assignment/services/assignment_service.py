"""Shift assignment orchestration: build, validate, classify, allocate."""

from __future__ import annotations

from typing import Optional

from nurse_assignment.domain.constraints import (
    EngineConfig,
    validate_engine_config,
    validate_room_span,
    validate_staffing,
)
from nurse_assignment.domain.errors import AssignmentCalculationError
from nurse_assignment.domain.models import (
    CalculationInput,
    CalculationResult,
    CalculationStage,
    DistributionPolicy,
    TotalCarePolicy,
)
from nurse_assignment.services.coverage import calculate_coverage, validate_nursing_capacity
from nurse_assignment.services.distribution import (
    create_aide_assignments,
    create_nurse_assignments,
)
from nurse_assignment.services.room_classifier import classify_rooms
from nurse_assignment.services.room_list_builder import build_room_list
from nurse_assignment.services.total_care import assign_total_care
from nurse_assignment.utils.config import Settings, get_settings
from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)


class StageTracker:
    """Records the calculation's walk through the stage machine."""

    def __init__(self) -> None:
        self.stage = CalculationStage.IDLE
        self.history: list[CalculationStage] = [CalculationStage.IDLE]

    def advance(self, stage: CalculationStage) -> None:
        logger.debug("Calculation stage | from=%s | to=%s", self.stage.value, stage.value)
        self.stage = stage
        self.history.append(stage)


def calculate_staff_assignments(
    data: CalculationInput,
    config: Optional[EngineConfig] = None,
    *,
    tracker: Optional[StageTracker] = None,
) -> CalculationResult:
    """Run one complete shift calculation.

    Fails with ``InvalidRangeError``, ``InvalidStaffingError`` or
    ``InsufficientCapacityError`` (or ``ValueError`` for a bad ``config``)
    before any staff allocation happens; no partial result is ever returned.
    """
    config = config or EngineConfig()
    tracker = tracker or StageTracker()

    tracker.advance(CalculationStage.VALIDATING)
    try:
        validate_engine_config(config)
        validate_staffing(data)
        room_list = build_room_list(
            range_start=data.room_range_start,
            range_end=data.room_range_end,
            excluded_rooms=data.excluded_rooms,
            discharges=data.discharges,
            admits=data.admits,
        )
        total_patient_count = len(room_list.rooms)
        validate_nursing_capacity(
            total_patient_count,
            data.total_nurses,
            data.max_patients_per_nurse,
        )
    except (AssignmentCalculationError, ValueError) as exc:
        tracker.advance(CalculationStage.FAILED)
        logger.warning("Calculation rejected | reason=%s", exc)
        raise

    tracker.advance(CalculationStage.BUILDING)
    coverage = calculate_coverage(
        total_patient_count,
        data.total_aides,
        data.max_patients_per_aide,
    )

    tracker.advance(CalculationStage.CLASSIFYING)
    classified = classify_rooms(
        room_list.rooms,
        data.high_acuity_rooms,
        data.high_fall_risk_rooms,
    )

    tracker.advance(CalculationStage.ALLOCATING)
    nurse_assignments = create_nurse_assignments(
        room_list=room_list,
        classified=classified,
        total_nurses=data.total_nurses,
        policy=config.distribution_policy,
    )
    aide_assignments = create_aide_assignments(
        room_list=room_list,
        total_aides=data.total_aides,
        total_aide_capacity=coverage.total_aide_capacity,
    )
    total_care = assign_total_care(
        nurse_assignments=nurse_assignments,
        uncovered_count=coverage.patients_without_aide_support,
        classified=classified,
        policy=config.total_care_policy,
        max_per_nurse=config.total_care_max_per_nurse,
    )

    tracker.advance(CalculationStage.DONE)
    logger.info(
        (
            "Calculation completed | patients=%s | nurses=%s | aides=%s | "
            "uncovered=%s | unassigned_total_care=%s | distribution=%s | total_care=%s"
        ),
        total_patient_count,
        data.total_nurses,
        data.total_aides,
        coverage.patients_without_aide_support,
        total_care.unassigned_count,
        config.distribution_policy.value,
        config.total_care_policy.value,
    )
    return CalculationResult(
        total_patient_count=total_patient_count,
        rooms=room_list.rooms,
        coverage=coverage,
        nurse_assignments=total_care.nurse_assignments,
        aide_assignments=aide_assignments,
        processed_discharges=room_list.processed_discharges,
        processed_admits=room_list.processed_admits,
        unassigned_total_care_count=total_care.unassigned_count,
        distribution_policy=config.distribution_policy,
        total_care_policy=config.total_care_policy,
    )


class AssignmentCalculationService:
    """Resolves deployment defaults and runs the assignment engine."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def build_config(
        self,
        *,
        distribution_policy: Optional[DistributionPolicy] = None,
        total_care_policy: Optional[TotalCarePolicy] = None,
    ) -> EngineConfig:
        config = EngineConfig(
            distribution_policy=(
                distribution_policy
                if distribution_policy is not None
                else self._settings.default_distribution_policy
            ),
            total_care_policy=(
                total_care_policy
                if total_care_policy is not None
                else self._settings.default_total_care_policy
            ),
            total_care_max_per_nurse=self._settings.total_care_max_per_nurse,
        )
        validate_engine_config(config)
        return config

    def calculate(
        self,
        data: CalculationInput,
        *,
        distribution_policy: Optional[DistributionPolicy] = None,
        total_care_policy: Optional[TotalCarePolicy] = None,
    ) -> CalculationResult:
        config = self.build_config(
            distribution_policy=distribution_policy,
            total_care_policy=total_care_policy,
        )
        return calculate_staff_assignments(data, config)

    def build_input(
        self,
        *,
        room_range_start: int,
        room_range_end: int,
        excluded_rooms: list[int] | None = None,
        discharges: list[int] | None = None,
        admits: list[int] | None = None,
        high_acuity_rooms: list[int] | None = None,
        high_fall_risk_rooms: list[int] | None = None,
        total_nurses: int,
        total_aides: int = 0,
        max_patients_per_nurse: Optional[int] = None,
        max_patients_per_aide: Optional[int] = None,
    ) -> CalculationInput:
        """Assemble engine input, filling per-staff limits from settings when omitted."""
        validate_room_span(room_range_start, room_range_end, self._settings.max_room_span)
        return CalculationInput(
            room_range_start=room_range_start,
            room_range_end=room_range_end,
            excluded_rooms=tuple(excluded_rooms or ()),
            discharges=tuple(discharges or ()),
            admits=tuple(admits or ()),
            high_acuity_rooms=tuple(high_acuity_rooms or ()),
            high_fall_risk_rooms=tuple(high_fall_risk_rooms or ()),
            total_nurses=total_nurses,
            total_aides=total_aides,
            max_patients_per_nurse=(
                max_patients_per_nurse
                if max_patients_per_nurse is not None
                else self._settings.default_max_patients_per_nurse
            ),
            max_patients_per_aide=(
                max_patients_per_aide
                if max_patients_per_aide is not None
                else self._settings.default_max_patients_per_aide
            ),
        )
