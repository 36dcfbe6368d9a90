"""Working room list construction from range, exclusions, discharges and admits."""

from __future__ import annotations

from collections.abc import Iterable

from nurse_assignment.domain.constraints import validate_room_range
from nurse_assignment.domain.models import RoomList


def generate_room_range(range_start: int, range_end: int) -> list[int]:
    """Return every room from ``range_start`` to ``range_end`` inclusive."""
    validate_room_range(range_start, range_end)
    return list(range(range_start, range_end + 1))


def build_room_list(
    *,
    range_start: int,
    range_end: int,
    excluded_rooms: Iterable[int] = (),
    discharges: Iterable[int] = (),
    admits: Iterable[int] = (),
) -> RoomList:
    """Build the final sorted room set and record which changes took effect.

    Discharges only count when the room is occupied after exclusions. Admits
    are new rooms by definition, so they are reported as requested even when
    they collapse into a room already in the range.
    """
    excluded = set(excluded_rooms)
    discharge_set = set(discharges)
    admit_set = set(admits)

    available = [
        room
        for room in generate_room_range(range_start, range_end)
        if room not in excluded
    ]
    available_set = set(available)

    processed_discharges = tuple(sorted(discharge_set & available_set))
    remaining = available_set - discharge_set
    rooms = tuple(sorted(remaining | admit_set))

    return RoomList(
        rooms=rooms,
        processed_discharges=processed_discharges,
        processed_admits=tuple(sorted(admit_set)),
    )
