"""Clinical priority classification of the working room set."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from nurse_assignment.domain.models import ClassifiedRooms


def classify_rooms(
    rooms: Sequence[int],
    high_acuity_rooms: Iterable[int],
    high_fall_risk_rooms: Iterable[int],
) -> ClassifiedRooms:
    """Partition ``rooms`` into acuity, fall-risk and regular subsets.

    Flags for rooms outside the working set are dropped. A room flagged both
    ways is classified as acuity only.
    """
    working = set(rooms)
    acuity = set(high_acuity_rooms) & working
    fall_risk = (set(high_fall_risk_rooms) & working) - acuity
    regular = working - acuity - fall_risk

    return ClassifiedRooms(
        high_acuity_rooms=tuple(sorted(acuity)),
        high_fall_risk_rooms=tuple(sorted(fall_risk)),
        regular_rooms=tuple(sorted(regular)),
    )
