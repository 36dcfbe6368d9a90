"""Total-care allocation for patients without aide coverage."""

from __future__ import annotations

from dataclasses import dataclass, replace

from nurse_assignment.domain.models import (
    ClassifiedRooms,
    StaffAssignment,
    TotalCarePolicy,
)
from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)

PRIORITY_FALL_RISK = 1
PRIORITY_ACUITY = 2
PRIORITY_REGULAR = 3


@dataclass(frozen=True)
class TotalCareOutcome:
    nurse_assignments: tuple[StaffAssignment, ...]
    unassigned_count: int


def room_priority(room: int, acuity: set[int], fall_risk: set[int]) -> int:
    if room in fall_risk:
        return PRIORITY_FALL_RISK
    if room in acuity:
        return PRIORITY_ACUITY
    return PRIORITY_REGULAR


def _ranked_rooms(rooms: tuple[int, ...], acuity: set[int], fall_risk: set[int]) -> list[int]:
    return sorted(rooms, key=lambda room: (room_priority(room, acuity, fall_risk), room))


def _allocate_global_priority(
    nurse_assignments: tuple[StaffAssignment, ...],
    uncovered_count: int,
    acuity: set[int],
    fall_risk: set[int],
    max_per_nurse: int,
) -> list[list[int]]:
    selected: list[list[int]] = [[] for _ in nurse_assignments]
    pool = sorted(
        (room_priority(room, acuity, fall_risk), room, nurse_index)
        for nurse_index, assignment in enumerate(nurse_assignments)
        for room in assignment.assigned_rooms
    )
    for _, room, nurse_index in pool[:uncovered_count]:
        if len(selected[nurse_index]) >= max_per_nurse:
            continue
        selected[nurse_index].append(room)
    return selected


def _allocate_per_nurse(
    nurse_assignments: tuple[StaffAssignment, ...],
    uncovered_count: int,
    acuity: set[int],
    fall_risk: set[int],
    max_per_nurse: int,
) -> list[list[int]]:
    total_nurses = len(nurse_assignments)
    base_quota, extra = divmod(uncovered_count, total_nurses)
    ranked = [
        _ranked_rooms(assignment.assigned_rooms, acuity, fall_risk)
        for assignment in nurse_assignments
    ]

    selected: list[list[int]] = []
    for nurse_index, candidates in enumerate(ranked):
        quota = base_quota + (1 if nurse_index < extra else 0)
        selected.append(candidates[:quota])

    leftover = uncovered_count - sum(len(rooms) for rooms in selected)
    while leftover > 0:
        progressed = False
        for nurse_index, candidates in enumerate(ranked):
            if leftover == 0:
                break
            taken = len(selected[nurse_index])
            if taken >= max_per_nurse or taken >= len(candidates):
                continue
            selected[nurse_index].append(candidates[taken])
            leftover -= 1
            progressed = True
        if not progressed:
            break
    return selected


def assign_total_care(
    *,
    nurse_assignments: tuple[StaffAssignment, ...],
    uncovered_count: int,
    classified: ClassifiedRooms,
    policy: TotalCarePolicy,
    max_per_nurse: int,
) -> TotalCareOutcome:
    """Return nurse assignments with total-care rooms filled in.

    Fall-risk rooms rank ahead of acuity rooms, which rank ahead of regular
    rooms; ties break on room number. Uncovered patients that cannot be placed
    because of ``max_per_nurse`` are reported in ``unassigned_count``.
    """
    if uncovered_count <= 0 or not nurse_assignments:
        return TotalCareOutcome(
            nurse_assignments=nurse_assignments,
            unassigned_count=max(0, uncovered_count),
        )

    acuity = set(classified.high_acuity_rooms)
    fall_risk = set(classified.high_fall_risk_rooms)

    if policy is TotalCarePolicy.GLOBAL_PRIORITY:
        selected = _allocate_global_priority(
            nurse_assignments, uncovered_count, acuity, fall_risk, max_per_nurse
        )
    elif policy is TotalCarePolicy.PER_NURSE_PROPORTIONAL:
        selected = _allocate_per_nurse(
            nurse_assignments, uncovered_count, acuity, fall_risk, max_per_nurse
        )
    else:
        raise ValueError(f"Unsupported total care policy: {policy!r}")

    updated = tuple(
        replace(assignment, total_care_rooms=tuple(sorted(rooms)))
        for assignment, rooms in zip(nurse_assignments, selected)
    )
    unassigned = uncovered_count - sum(len(rooms) for rooms in selected)
    if unassigned > 0:
        logger.warning(
            (
                "Total care shortfall | uncovered=%s | assigned=%s | unassigned=%s | "
                "max_per_nurse=%s | policy=%s"
            ),
            uncovered_count,
            uncovered_count - unassigned,
            unassigned,
            max_per_nurse,
            policy.value,
        )
    return TotalCareOutcome(nurse_assignments=updated, unassigned_count=unassigned)
