"""Domain-level validation rules for assignment calculation."""

from __future__ import annotations

from dataclasses import dataclass

from nurse_assignment.domain.errors import (
    InvalidRangeError,
    InvalidStaffingError,
    RoomRangeTooLargeError,
)
from nurse_assignment.domain.models import (
    CalculationInput,
    DistributionPolicy,
    TotalCarePolicy,
)


@dataclass(frozen=True)
class EngineConfig:
    distribution_policy: DistributionPolicy = DistributionPolicy.ZONE
    total_care_policy: TotalCarePolicy = TotalCarePolicy.GLOBAL_PRIORITY
    total_care_max_per_nurse: int = 3


def validate_engine_config(config: EngineConfig) -> None:
    if not isinstance(config.distribution_policy, DistributionPolicy):
        raise ValueError("distribution_policy must be a DistributionPolicy")
    if not isinstance(config.total_care_policy, TotalCarePolicy):
        raise ValueError("total_care_policy must be a TotalCarePolicy")
    if config.total_care_max_per_nurse <= 0:
        raise ValueError("total_care_max_per_nurse must be > 0")


def validate_room_range(range_start: int, range_end: int) -> None:
    if range_start > range_end:
        raise InvalidRangeError(range_start, range_end)


def validate_room_span(range_start: int, range_end: int, max_span: int) -> None:
    if range_end - range_start + 1 > max_span:
        raise RoomRangeTooLargeError(range_start, range_end, max_span)


def validate_staffing(data: CalculationInput) -> None:
    if data.total_nurses < 1:
        raise InvalidStaffingError("Must have at least 1 nurse")
    if data.total_aides < 0:
        raise InvalidStaffingError("total_aides must be >= 0")
    if data.max_patients_per_nurse < 0:
        raise InvalidStaffingError("max_patients_per_nurse must be >= 0")
    if data.max_patients_per_aide < 0:
        raise InvalidStaffingError("max_patients_per_aide must be >= 0")
