"""Failures surfaced by the assignment engine."""

from __future__ import annotations


class AssignmentCalculationError(Exception):
    """Base class for every engine failure."""


class InvalidRangeError(AssignmentCalculationError):
    """Raised when the room range start is greater than its end."""

    def __init__(self, range_start: int, range_end: int) -> None:
        self.range_start = range_start
        self.range_end = range_end
        super().__init__(
            f"Start room number cannot be greater than end room number "
            f"(start={range_start}, end={range_end})"
        )


class InsufficientCapacityError(AssignmentCalculationError):
    """Raised when the census exceeds what the nurses on shift can carry."""

    def __init__(self, patient_count: int, max_capacity: int) -> None:
        self.patient_count = patient_count
        self.max_capacity = max_capacity
        super().__init__(
            f"Insufficient nursing capacity: {patient_count} patients exceed "
            f"maximum capacity of {max_capacity}"
        )


class InvalidStaffingError(AssignmentCalculationError):
    """Raised when staff counts or per-staff limits are unusable."""


class RoomRangeTooLargeError(AssignmentCalculationError):
    """Raised when the unit range covers more rooms than the deployment allows."""

    def __init__(self, range_start: int, range_end: int, max_span: int) -> None:
        self.range_start = range_start
        self.range_end = range_end
        self.max_span = max_span
        super().__init__(
            f"Room range {range_start}-{range_end} covers "
            f"{range_end - range_start + 1} rooms; the maximum is {max_span}"
        )
