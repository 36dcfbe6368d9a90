"""Domain models for shift room assignment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StaffRole(str, Enum):
    NURSE = "nurse"
    AIDE = "aide"


class DistributionPolicy(str, Enum):
    """How rooms are spread across nurses."""

    ROUND_ROBIN = "round_robin"
    ZONE = "zone"


class TotalCarePolicy(str, Enum):
    """How uncovered patients are matched to nurses for total care."""

    GLOBAL_PRIORITY = "global_priority"
    PER_NURSE_PROPORTIONAL = "per_nurse_proportional"


class CalculationStage(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    FAILED = "failed"
    BUILDING = "building"
    CLASSIFYING = "classifying"
    ALLOCATING = "allocating"
    DONE = "done"


@dataclass(frozen=True)
class CalculationInput:
    room_range_start: int
    room_range_end: int
    excluded_rooms: tuple[int, ...] = ()
    discharges: tuple[int, ...] = ()
    admits: tuple[int, ...] = ()
    high_acuity_rooms: tuple[int, ...] = ()
    high_fall_risk_rooms: tuple[int, ...] = ()
    total_nurses: int = 1
    total_aides: int = 0
    max_patients_per_nurse: int = 8
    max_patients_per_aide: int = 12


@dataclass(frozen=True)
class RoomList:
    """Working room set for the shift plus the changes that produced it."""

    rooms: tuple[int, ...]
    processed_discharges: tuple[int, ...]
    processed_admits: tuple[int, ...]


@dataclass(frozen=True)
class ClassifiedRooms:
    high_acuity_rooms: tuple[int, ...]
    high_fall_risk_rooms: tuple[int, ...]
    regular_rooms: tuple[int, ...]


@dataclass(frozen=True)
class CoverageSummary:
    total_aide_capacity: int
    patients_without_aide_support: int


@dataclass(frozen=True)
class StaffAssignment:
    staff_number: int
    role: StaffRole
    assigned_rooms: tuple[int, ...]
    high_acuity_rooms: tuple[int, ...] = ()
    high_fall_risk_rooms: tuple[int, ...] = ()
    total_care_rooms: tuple[int, ...] = ()
    discharge_rooms: tuple[int, ...] = ()
    admit_rooms: tuple[int, ...] = ()

    @property
    def patient_count(self) -> int:
        return len(self.assigned_rooms)


@dataclass(frozen=True)
class CalculationResult:
    total_patient_count: int
    rooms: tuple[int, ...]
    coverage: CoverageSummary
    nurse_assignments: tuple[StaffAssignment, ...]
    aide_assignments: tuple[StaffAssignment, ...]
    processed_discharges: tuple[int, ...]
    processed_admits: tuple[int, ...]
    unassigned_total_care_count: int
    distribution_policy: DistributionPolicy
    total_care_policy: TotalCarePolicy
