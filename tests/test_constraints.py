"""Tests for engine configuration and staffing validation."""

from __future__ import annotations

import pytest

from nurse_assignment.domain.constraints import (
    EngineConfig,
    validate_engine_config,
    validate_room_range,
    validate_room_span,
    validate_staffing,
)
from nurse_assignment.domain.errors import (
    InvalidRangeError,
    InvalidStaffingError,
    RoomRangeTooLargeError,
)
from nurse_assignment.domain.models import CalculationInput


def valid_input(**overrides) -> CalculationInput:
    """Return a valid baseline CalculationInput, optionally overriding fields."""
    defaults = {
        "room_range_start": 101,
        "room_range_end": 120,
        "total_nurses": 4,
        "total_aides": 2,
        "max_patients_per_nurse": 8,
        "max_patients_per_aide": 12,
    }
    defaults.update(overrides)
    return CalculationInput(**defaults)


def test_default_config_passes() -> None:
    validate_engine_config(EngineConfig())


def test_total_care_cap_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(EngineConfig(total_care_max_per_nurse=0))


def test_total_care_cap_negative_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(EngineConfig(total_care_max_per_nurse=-1))


def test_unknown_policy_value_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(EngineConfig(distribution_policy="nearest"))  # type: ignore[arg-type]


def test_equal_range_bounds_pass() -> None:
    validate_room_range(101, 101)


def test_reversed_range_raises() -> None:
    with pytest.raises(InvalidRangeError):
        validate_room_range(102, 101)


def test_room_span_at_limit_passes() -> None:
    validate_room_span(101, 110, 10)


def test_room_span_over_limit_raises() -> None:
    with pytest.raises(RoomRangeTooLargeError) as exc_info:
        validate_room_span(1, 2_000_000_000, 2000)

    assert exc_info.value.max_span == 2000
    assert "2000000000 rooms" in str(exc_info.value)


def test_valid_staffing_passes() -> None:
    validate_staffing(valid_input())


def test_zero_aides_and_zero_aide_limit_pass() -> None:
    validate_staffing(valid_input(total_aides=0, max_patients_per_aide=0))


@pytest.mark.parametrize(
    "overrides",
    [
        {"total_nurses": 0},
        {"total_nurses": -2},
        {"total_aides": -1},
        {"max_patients_per_nurse": -1},
        {"max_patients_per_aide": -1},
    ],
)
def test_invalid_staffing_raises(overrides: dict) -> None:
    with pytest.raises(InvalidStaffingError):
        validate_staffing(valid_input(**overrides))
