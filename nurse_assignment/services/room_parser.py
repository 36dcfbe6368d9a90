"""Parsing and formatting of comma/range room list strings.

Grammar: comma-separated tokens, each either a single integer (``105``) or an
inclusive range (``110-115``). Whitespace around tokens and around the hyphen
is ignored. Tokens that do not match are skipped rather than rejected, so a
stray letter in a free-text field never blocks a calculation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from nurse_assignment.utils.logger import get_logger


logger = get_logger(__name__)

_SINGLE_ROOM_PATTERN = re.compile(r"^-?\d+$")
_ROOM_RANGE_PATTERN = re.compile(r"^(-?\d+)\s*-\s*(-?\d+)$")
_MIN_RUN_FOR_RANGE = 3
DEFAULT_MAX_ROOM_SPAN = 2000


def _parse_token(token: str, max_span: int) -> list[int]:
    if _SINGLE_ROOM_PATTERN.match(token):
        return [int(token)]

    match = _ROOM_RANGE_PATTERN.match(token)
    if match is None:
        logger.debug("Skipping unparseable room token | token=%r", token)
        return []

    range_start, range_end = int(match.group(1)), int(match.group(2))
    if range_start > range_end:
        logger.debug("Skipping reversed room range | token=%r", token)
        return []
    if range_end - range_start + 1 > max_span:
        logger.debug(
            "Skipping oversized room range | token=%r | max_span=%s", token, max_span
        )
        return []
    return list(range(range_start, range_end + 1))


def parse_room_list(
    room_input: str | None,
    *,
    max_span: int = DEFAULT_MAX_ROOM_SPAN,
) -> list[int]:
    """Parse user input such as ``"101, 105, 110-115"`` into sorted unique rooms.

    A range token covering more than ``max_span`` rooms is skipped like any
    other invalid token, so one typo cannot expand into millions of rooms.
    """
    if room_input is None or not room_input.strip():
        return []

    parsed: set[int] = set()
    for segment in room_input.split(","):
        token = segment.strip()
        if not token:
            continue
        parsed.update(_parse_token(token, max_span))
    return sorted(parsed)


def format_room_list(rooms: Iterable[int]) -> str:
    """Render rooms in the parse grammar, collapsing long consecutive runs to ``A-B``."""
    ordered = sorted(set(rooms))
    if not ordered:
        return ""

    runs: list[list[int]] = [[ordered[0]]]
    for room in ordered[1:]:
        if room == runs[-1][-1] + 1:
            runs[-1].append(room)
        else:
            runs.append([room])

    tokens: list[str] = []
    for run in runs:
        if len(run) >= _MIN_RUN_FOR_RANGE:
            tokens.append(f"{run[0]}-{run[-1]}")
        else:
            tokens.extend(str(room) for room in run)
    return ", ".join(tokens)
