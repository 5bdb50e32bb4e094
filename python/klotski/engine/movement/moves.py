"""Unit-step move validation and execution.

``move_piece`` succeeds exactly when ``can_move`` is true for the same
inputs; it is the only transition primitive and never moves a piece by
more than one cell.
"""

from __future__ import annotations

from dataclasses import dataclass

from klotski.exceptions import PieceNotFoundError
from klotski.models.board import Configuration, Direction, Piece


@dataclass(frozen=True)
class Move:
    """An authored move: *distance* unit-steps of one piece in one direction."""

    piece_id: int
    direction: Direction
    distance: int = 1

    def __post_init__(self) -> None:
        if self.distance < 1:
            raise ValueError(f"Move distance must be positive, got {self.distance}")


def can_move(piece: Piece, direction: Direction, configuration: Configuration) -> bool:
    """Return True if *piece* can shift one cell in *direction*.

    The piece's own current cells never block it.  *piece* may be a
    locally moved copy of a piece in *configuration*; only its id has to
    be present there.
    """
    if not configuration.has_piece(piece.id):
        raise PieceNotFoundError(piece.id)

    dx, dy = direction.delta
    tx, ty = piece.x + dx, piece.y + dy
    if (
        tx < 0
        or ty < 0
        or tx + piece.width > configuration.width
        or ty + piece.height > configuration.height
    ):
        return False

    grid = configuration.occupancy
    for y in range(ty, ty + piece.height):
        row = grid[y]
        for x in range(tx, tx + piece.width):
            owner = row[x]
            if owner is not None and owner != piece.id:
                return False
    return True


def move_piece(
    piece: Piece, direction: Direction, configuration: Configuration
) -> Configuration | None:
    """Shift *piece* one cell, returning the new configuration or ``None``."""
    if not can_move(piece, direction, configuration):
        return None
    return configuration.with_piece(piece.shifted(direction))


def apply_move(move: Move, configuration: Configuration) -> Configuration | None:
    """Apply an authored multi-cell move as successive unit-steps.

    Returns ``None`` (leaving the caller's configuration untouched) if
    any intermediate step is illegal.
    """
    current = configuration
    for _ in range(move.distance):
        moved = move_piece(current.piece(move.piece_id), move.direction, current)
        if moved is None:
            return None
        current = moved
    return current
