"""End-to-end tests for the assignment engine.

Each test pins its distribution/total-care policy pair through ``EngineConfig``.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from nurse_assignment.domain.constraints import EngineConfig
from nurse_assignment.domain.errors import (
    InsufficientCapacityError,
    InvalidRangeError,
    InvalidStaffingError,
    RoomRangeTooLargeError,
)
from nurse_assignment.domain.models import (
    CalculationInput,
    CalculationStage,
    DistributionPolicy,
    TotalCarePolicy,
)
from nurse_assignment.services.assignment_service import (
    AssignmentCalculationService,
    StageTracker,
    calculate_staff_assignments,
)
from nurse_assignment.utils.config import get_settings


ZONE_GLOBAL = EngineConfig(
    distribution_policy=DistributionPolicy.ZONE,
    total_care_policy=TotalCarePolicy.GLOBAL_PRIORITY,
)
ROUND_ROBIN_PER_NURSE = EngineConfig(
    distribution_policy=DistributionPolicy.ROUND_ROBIN,
    total_care_policy=TotalCarePolicy.PER_NURSE_PROPORTIONAL,
)
ALL_CONFIGS = [ZONE_GLOBAL, ROUND_ROBIN_PER_NURSE]


def _build_input(**overrides) -> CalculationInput:
    defaults = {
        "room_range_start": 101,
        "room_range_end": 120,
        "excluded_rooms": (104,),
        "discharges": (110, 300),
        "admits": (125,),
        "high_acuity_rooms": (102, 103, 105, 106),
        "high_fall_risk_rooms": (103, 107, 118),
        "total_nurses": 3,
        "total_aides": 1,
        "max_patients_per_nurse": 8,
        "max_patients_per_aide": 12,
    }
    defaults.update(overrides)
    return CalculationInput(**defaults)


def test_two_nurses_cover_ten_rooms_without_aides() -> None:
    result = calculate_staff_assignments(
        _build_input(
            room_range_start=101,
            room_range_end=110,
            excluded_rooms=(),
            discharges=(),
            admits=(),
            high_acuity_rooms=(),
            high_fall_risk_rooms=(),
            total_nurses=2,
            total_aides=0,
        ),
        ZONE_GLOBAL,
    )

    assert result.total_patient_count == 10
    assert result.coverage.patients_without_aide_support == 10
    assert result.aide_assignments == ()
    assert [item.assigned_rooms for item in result.nurse_assignments] == [
        (101, 102, 103, 104, 105),
        (106, 107, 108, 109, 110),
    ]
    assert [item.total_care_rooms for item in result.nurse_assignments] == [
        (101, 102, 103),
        (106, 107, 108),
    ]
    assert result.unassigned_total_care_count == 4


def test_understaffed_shift_is_rejected() -> None:
    with pytest.raises(InsufficientCapacityError) as exc_info:
        calculate_staff_assignments(
            _build_input(
                room_range_start=101,
                room_range_end=110,
                excluded_rooms=(),
                discharges=(),
                admits=(),
                total_nurses=5,
                max_patients_per_nurse=1,
            ),
            ZONE_GLOBAL,
        )

    assert exc_info.value.patient_count == 10
    assert exc_info.value.max_capacity == 5


def test_acuity_precedence_reaches_nurse_sub_lists() -> None:
    result = calculate_staff_assignments(
        _build_input(
            room_range_start=101,
            room_range_end=110,
            excluded_rooms=(),
            discharges=(),
            admits=(),
            high_acuity_rooms=(103,),
            high_fall_risk_rooms=(103, 107),
            total_nurses=2,
        ),
        ZONE_GLOBAL,
    )

    acuity = [room for item in result.nurse_assignments for room in item.high_acuity_rooms]
    fall_risk = [room for item in result.nurse_assignments for room in item.high_fall_risk_rooms]
    assert acuity == [103]
    assert fall_risk == [107]


def test_admit_of_existing_room_is_counted_once() -> None:
    result = calculate_staff_assignments(
        _build_input(
            room_range_start=110,
            room_range_end=120,
            excluded_rooms=(),
            discharges=(),
            admits=(115,),
            high_acuity_rooms=(),
            high_fall_risk_rooms=(),
        ),
        ZONE_GLOBAL,
    )

    assert result.rooms.count(115) == 1
    assert result.total_patient_count == 11
    assert result.processed_admits == (115,)


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_every_room_goes_to_exactly_one_nurse(config: EngineConfig) -> None:
    data = _build_input()
    result = calculate_staff_assignments(data, config)

    assigned = [room for item in result.nurse_assignments for room in item.assigned_rooms]
    assert sum(item.patient_count for item in result.nurse_assignments) == result.total_patient_count
    assert sorted(assigned) == list(result.rooms)
    assert all(item.patient_count <= data.max_patients_per_nurse for item in result.nurse_assignments)


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_aides_only_cover_working_rooms_within_capacity(config: EngineConfig) -> None:
    result = calculate_staff_assignments(_build_input(), config)

    nurse_rooms = {room for item in result.nurse_assignments for room in item.assigned_rooms}
    aide_rooms = [room for item in result.aide_assignments for room in item.assigned_rooms]
    assert set(aide_rooms) <= nurse_rooms
    assert len(aide_rooms) <= result.coverage.total_aide_capacity


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_sub_lists_are_subsets_of_assigned_rooms(config: EngineConfig) -> None:
    result = calculate_staff_assignments(_build_input(), config)

    for item in result.nurse_assignments + result.aide_assignments:
        assigned = set(item.assigned_rooms)
        for sub_list in (
            item.high_acuity_rooms,
            item.high_fall_risk_rooms,
            item.total_care_rooms,
            item.discharge_rooms,
            item.admit_rooms,
        ):
            assert set(sub_list) <= assigned


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_identical_input_gives_identical_output(config: EngineConfig) -> None:
    data = _build_input()

    assert calculate_staff_assignments(data, config) == calculate_staff_assignments(data, config)


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_no_aides_leaves_everyone_uncovered(config: EngineConfig) -> None:
    result = calculate_staff_assignments(_build_input(total_aides=0), config)

    assert result.aide_assignments == ()
    assert result.coverage.patients_without_aide_support == result.total_patient_count


@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_full_aide_coverage_means_no_total_care(config: EngineConfig) -> None:
    result = calculate_staff_assignments(_build_input(total_aides=2), config)

    assert result.coverage.patients_without_aide_support == 0
    assert all(item.total_care_rooms == () for item in result.nurse_assignments)
    assert result.unassigned_total_care_count == 0


def test_discharges_and_admits_are_reported() -> None:
    result = calculate_staff_assignments(_build_input(), ZONE_GLOBAL)

    assert result.processed_discharges == (110,)
    assert result.processed_admits == (125,)
    assert 110 not in result.rooms
    assert 125 in result.rooms
    admits = [room for item in result.nurse_assignments for room in item.admit_rooms]
    assert admits == [125]


def test_reversed_range_fails_before_allocation() -> None:
    tracker = StageTracker()

    with pytest.raises(InvalidRangeError):
        calculate_staff_assignments(
            _build_input(room_range_start=120, room_range_end=101),
            ZONE_GLOBAL,
            tracker=tracker,
        )

    assert tracker.history == [
        CalculationStage.IDLE,
        CalculationStage.VALIDATING,
        CalculationStage.FAILED,
    ]


def test_successful_calculation_walks_every_stage() -> None:
    tracker = StageTracker()

    calculate_staff_assignments(_build_input(), ZONE_GLOBAL, tracker=tracker)

    assert tracker.history == [
        CalculationStage.IDLE,
        CalculationStage.VALIDATING,
        CalculationStage.BUILDING,
        CalculationStage.CLASSIFYING,
        CalculationStage.ALLOCATING,
        CalculationStage.DONE,
    ]


def test_bad_engine_config_moves_tracker_to_failed() -> None:
    tracker = StageTracker()

    with pytest.raises(ValueError):
        calculate_staff_assignments(
            _build_input(),
            EngineConfig(total_care_max_per_nurse=0),
            tracker=tracker,
        )

    assert tracker.history == [
        CalculationStage.IDLE,
        CalculationStage.VALIDATING,
        CalculationStage.FAILED,
    ]


def test_zero_nurses_is_rejected() -> None:
    with pytest.raises(InvalidStaffingError):
        calculate_staff_assignments(_build_input(total_nurses=0), ZONE_GLOBAL)


def test_service_uses_settings_defaults() -> None:
    settings = replace(
        get_settings(),
        default_distribution_policy=DistributionPolicy.ROUND_ROBIN,
        default_total_care_policy=TotalCarePolicy.PER_NURSE_PROPORTIONAL,
        total_care_max_per_nurse=2,
        default_max_patients_per_nurse=10,
        default_max_patients_per_aide=4,
    )
    service = AssignmentCalculationService(settings=settings)

    data = service.build_input(
        room_range_start=101,
        room_range_end=110,
        total_nurses=2,
        total_aides=1,
    )
    result = service.calculate(data)

    assert data.max_patients_per_nurse == 10
    assert data.max_patients_per_aide == 4
    assert result.distribution_policy is DistributionPolicy.ROUND_ROBIN
    assert result.total_care_policy is TotalCarePolicy.PER_NURSE_PROPORTIONAL
    assert result.coverage.patients_without_aide_support == 6
    assert [item.assigned_rooms for item in result.nurse_assignments] == [
        (101, 103, 105, 107, 109),
        (102, 104, 106, 108, 110),
    ]
    # Quota pass gives each nurse 3 rooms even though the redistribution cap is 2.
    assert [item.total_care_rooms for item in result.nurse_assignments] == [
        (101, 103, 105),
        (102, 104, 106),
    ]
    assert result.unassigned_total_care_count == 0


def test_service_rejects_range_wider_than_max_span() -> None:
    service = AssignmentCalculationService(
        settings=replace(get_settings(), max_room_span=50),
    )

    with pytest.raises(RoomRangeTooLargeError):
        service.build_input(room_range_start=1, room_range_end=2_000_000_000, total_nurses=1)


def test_service_call_overrides_settings_policy() -> None:
    service = AssignmentCalculationService(settings=get_settings())
    data = service.build_input(room_range_start=101, room_range_end=110, total_nurses=2)

    result = service.calculate(
        data,
        distribution_policy=DistributionPolicy.ROUND_ROBIN,
        total_care_policy=TotalCarePolicy.GLOBAL_PRIORITY,
    )

    assert result.distribution_policy is DistributionPolicy.ROUND_ROBIN
    assert result.total_care_policy is TotalCarePolicy.GLOBAL_PRIORITY
