"""Room distribution across nurses and aides.

Two nurse policies are supported:

* round robin: acuity rooms, then fall-risk rooms, then regular rooms are dealt
  one at a time in staff order, with the cursor carried across categories so
  totals never differ by more than one;
* zone: the sorted room list is cut into contiguous blocks, then special-care
  rooms are swapped against regular rooms in other zones to even out each
  category.

Aides always receive contiguous slices of the first ``total_aide_capacity``
rooms. Every staff member is accumulated first and finalized once into an
immutable ``StaffAssignment``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from nurse_assignment.domain.models import (
    ClassifiedRooms,
    DistributionPolicy,
    RoomList,
    StaffAssignment,
    StaffRole,
)
from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass
class _StaffAccumulator:
    staff_number: int
    rooms: list[int] = field(default_factory=list)

    def finalize(
        self,
        *,
        role: StaffRole,
        room_list: RoomList,
        classified: ClassifiedRooms | None = None,
    ) -> StaffAssignment:
        assigned = tuple(sorted(self.rooms))
        discharges = set(room_list.processed_discharges)
        admits = set(room_list.processed_admits)

        if classified is not None:
            acuity = set(classified.high_acuity_rooms)
            fall_risk = set(classified.high_fall_risk_rooms)
        else:
            acuity = set()
            fall_risk = set()

        return StaffAssignment(
            staff_number=self.staff_number,
            role=role,
            assigned_rooms=assigned,
            high_acuity_rooms=tuple(room for room in assigned if room in acuity),
            high_fall_risk_rooms=tuple(room for room in assigned if room in fall_risk),
            discharge_rooms=tuple(room for room in assigned if room in discharges),
            admit_rooms=tuple(room for room in assigned if room in admits),
        )


def split_evenly(rooms: Sequence[int], parts: int) -> list[list[int]]:
    """Cut ``rooms`` into ``parts`` contiguous slices; the first ``n % parts`` get one extra."""
    if parts <= 0:
        return []
    base_size, extra = divmod(len(rooms), parts)
    slices: list[list[int]] = []
    cursor = 0
    for index in range(parts):
        size = base_size + (1 if index < extra else 0)
        slices.append(list(rooms[cursor:cursor + size]))
        cursor += size
    return slices


def distribute_round_robin(classified: ClassifiedRooms, total_nurses: int) -> list[list[int]]:
    buckets: list[list[int]] = [[] for _ in range(total_nurses)]
    if total_nurses <= 0:
        return buckets

    cursor = 0
    for category in (
        classified.high_acuity_rooms,
        classified.high_fall_risk_rooms,
        classified.regular_rooms,
    ):
        for room in category:
            buckets[cursor].append(room)
            cursor = (cursor + 1) % total_nurses
    return buckets


def create_geographic_zones(rooms: Sequence[int], total_nurses: int) -> list[list[int]]:
    return split_evenly(sorted(rooms), total_nurses)


def _first_matching(zone: list[int], candidates: set[int]) -> int | None:
    for position, room in enumerate(zone):
        if room in candidates:
            return position
    return None


def balance_special_care_across_zones(
    zones: list[list[int]],
    special_rooms: set[int],
    regular_rooms: set[int],
) -> list[list[int]]:
    """Swap special rooms out of overloaded zones in exchange for regular rooms.

    Each ordered zone pair gets at most one swap attempt, so the pass is bounded
    and may leave a gap of two or more when no regular room is available.
    """
    balanced = [list(zone) for zone in zones]
    if not special_rooms or len(balanced) < 2:
        return balanced

    counts = [sum(1 for room in zone if room in special_rooms) for zone in balanced]
    if max(counts) - min(counts) <= 1:
        return balanced

    for from_index in range(len(balanced)):
        for to_index in range(len(balanced)):
            if from_index == to_index:
                continue
            if counts[from_index] - counts[to_index] <= 1:
                continue

            special_position = _first_matching(balanced[from_index], special_rooms)
            regular_position = _first_matching(balanced[to_index], regular_rooms)
            if special_position is None or regular_position is None:
                continue

            special_room = balanced[from_index][special_position]
            regular_room = balanced[to_index][regular_position]
            balanced[from_index][special_position] = regular_room
            balanced[to_index][regular_position] = special_room
            counts[from_index] -= 1
            counts[to_index] += 1
            logger.debug(
                "Zone swap | from_zone=%s | to_zone=%s | special_room=%s | regular_room=%s",
                from_index + 1,
                to_index + 1,
                special_room,
                regular_room,
            )

    return balanced


def distribute_by_zone(
    rooms: Sequence[int],
    classified: ClassifiedRooms,
    total_nurses: int,
) -> list[list[int]]:
    zones = create_geographic_zones(rooms, total_nurses)
    regular = set(classified.regular_rooms)
    zones = balance_special_care_across_zones(zones, set(classified.high_acuity_rooms), regular)
    zones = balance_special_care_across_zones(zones, set(classified.high_fall_risk_rooms), regular)
    return zones


def create_nurse_assignments(
    *,
    room_list: RoomList,
    classified: ClassifiedRooms,
    total_nurses: int,
    policy: DistributionPolicy,
) -> tuple[StaffAssignment, ...]:
    if policy is DistributionPolicy.ROUND_ROBIN:
        buckets = distribute_round_robin(classified, total_nurses)
    elif policy is DistributionPolicy.ZONE:
        buckets = distribute_by_zone(room_list.rooms, classified, total_nurses)
    else:
        raise ValueError(f"Unsupported distribution policy: {policy!r}")

    return tuple(
        _StaffAccumulator(staff_number=index + 1, rooms=bucket).finalize(
            role=StaffRole.NURSE,
            room_list=room_list,
            classified=classified,
        )
        for index, bucket in enumerate(buckets)
    )


def create_aide_assignments(
    *,
    room_list: RoomList,
    total_aides: int,
    total_aide_capacity: int,
) -> tuple[StaffAssignment, ...]:
    """Give aides contiguous slices of the lowest-numbered rooms they can cover."""
    if total_aides <= 0:
        return ()

    covered = sorted(room_list.rooms)[:max(0, total_aide_capacity)]
    return tuple(
        _StaffAccumulator(staff_number=index + 1, rooms=slice_rooms).finalize(
            role=StaffRole.AIDE,
            room_list=room_list,
        )
        for index, slice_rooms in enumerate(split_evenly(covered, total_aides))
    )
