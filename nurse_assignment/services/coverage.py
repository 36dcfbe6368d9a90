"""Aide coverage arithmetic and the nursing capacity gate."""

from __future__ import annotations

from nurse_assignment.domain.errors import InsufficientCapacityError
from nurse_assignment.domain.models import CoverageSummary


def calculate_coverage(
    total_patient_count: int,
    total_aides: int,
    max_patients_per_aide: int,
) -> CoverageSummary:
    total_aide_capacity = total_aides * max_patients_per_aide
    return CoverageSummary(
        total_aide_capacity=total_aide_capacity,
        patients_without_aide_support=max(0, total_patient_count - total_aide_capacity),
    )


def nursing_capacity(total_nurses: int, max_patients_per_nurse: int) -> int:
    return total_nurses * max_patients_per_nurse


def validate_nursing_capacity(
    total_patient_count: int,
    total_nurses: int,
    max_patients_per_nurse: int,
) -> None:
    """Raise ``InsufficientCapacityError`` when the census exceeds nurse capacity."""
    max_capacity = nursing_capacity(total_nurses, max_patients_per_nurse)
    if total_patient_count > max_capacity:
        raise InsufficientCapacityError(total_patient_count, max_capacity)
