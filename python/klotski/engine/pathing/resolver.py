"""Decomposes a drag displacement into axis-aligned unit-step segments.

Diagonal motion is never legal, so a displacement ``(dx, dy)`` is tried
as horizontal-then-vertical first and vertical-then-horizontal second.
Only the dragged piece moves while a candidate is validated; every other
piece stays where *configuration* puts it.
"""

from __future__ import annotations

from dataclasses import dataclass

from klotski.engine.movement import can_move
from klotski.models.board import Configuration, Direction, Piece


@dataclass(frozen=True)
class PathSegment:
    direction: Direction
    steps: int


def resolve_path(
    piece: Piece, dx: int, dy: int, configuration: Configuration
) -> list[PathSegment]:
    """Return the segments moving *piece* by ``(dx, dy)``, or ``[]``.

    ``[]`` also comes back for a zero displacement, so callers must
    special-case the no-op themselves.
    """
    if dx == 0 and dy == 0:
        return []

    horizontal = _segment(dx, Direction.RIGHT, Direction.LEFT)
    vertical = _segment(dy, Direction.DOWN, Direction.UP)

    for ordering in ((horizontal, vertical), (vertical, horizontal)):
        segments = [s for s in ordering if s is not None]
        if _walk(piece, segments, configuration):
            return segments
    return []


def nearest_reachable(
    piece: Piece, dx: int, dy: int, configuration: Configuration
) -> tuple[int, int]:
    """Furthest legal stop along the dominant axis of ``(dx, dy)``.

    The displacement is projected onto its dominant axis (horizontal on
    a tie) and shortened one cell at a time until :func:`resolve_path`
    succeeds.  Returns ``(0, 0)`` when the piece cannot move that way.
    """
    if abs(dx) >= abs(dy):
        sign = 1 if dx > 0 else -1
        for steps in range(abs(dx), 0, -1):
            if resolve_path(piece, sign * steps, 0, configuration):
                return (sign * steps, 0)
    else:
        sign = 1 if dy > 0 else -1
        for steps in range(abs(dy), 0, -1):
            if resolve_path(piece, 0, sign * steps, configuration):
                return (0, sign * steps)
    return (0, 0)


# -- helpers ------------------------------------------------------------------


def _segment(delta: int, positive: Direction, negative: Direction) -> PathSegment | None:
    if delta == 0:
        return None
    return PathSegment(positive if delta > 0 else negative, abs(delta))


def _walk(
    piece: Piece, segments: list[PathSegment], configuration: Configuration
) -> bool:
    """Validate every unit-step of *segments* from the piece's position."""
    current = piece
    for segment in segments:
        for _ in range(segment.steps):
            if not can_move(current, segment.direction, configuration):
                return False
            current = current.shifted(segment.direction)
    return True
