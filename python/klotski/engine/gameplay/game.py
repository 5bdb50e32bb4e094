"""Game sessions: applies player moves and drags, tracks undo and the win check."""

from __future__ import annotations

import math

from klotski.engine.gamesolver import Solver, SolverConfig
from klotski.engine.gamestate import GameState
from klotski.engine.movement import move_piece
from klotski.engine.pathing import PathSegment, nearest_reachable, resolve_path
from klotski.models.board import Configuration, Direction, Piece
from klotski.models.events import MoveEvent, diff_configurations
from klotski.models.level import Goal, GoalPredicate, Level


def cells_from_pixels(dx_px: float, dy_px: float, cell_size: float) -> tuple[int, int]:
    """Round a pointer-drag pixel delta to a whole-cell displacement."""
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    return (
        int(math.floor(dx_px / cell_size + 0.5)),
        int(math.floor(dy_px / cell_size + 0.5)),
    )


class GamePlay:
    """Orchestrates a single game session on one level."""

    def __init__(self, level: Level) -> None:
        self.level = level
        self.goal: GoalPredicate = level.goal
        self.state = GameState(level.configuration)

    @classmethod
    def from_configuration(
        cls, configuration: Configuration, goal: Goal
    ) -> "GamePlay":
        """Create a session from a bare board (e.g. an authored level)."""
        level = Level(
            id="custom",
            name="custom",
            difficulty="easy",
            configuration=configuration,
            goal=goal,
        )
        return cls(level)

    # -- queries --------------------------------------------------------------

    @property
    def configuration(self) -> Configuration:
        return self.state.configuration

    @property
    def is_won(self) -> bool:
        return self.goal(self.state.configuration)

    def piece_at(self, x: int, y: int) -> Piece | None:
        return self.state.configuration.piece_at(x, y)

    # -- movement -------------------------------------------------------------

    def move(self, piece_id: int, direction: Direction, distance: int = 1) -> bool:
        """Slide a piece *distance* cells in *direction*.

        All-or-nothing: returns False and leaves the board untouched if
        any unit-step is blocked.
        """
        if distance < 1:
            return False
        before = self.state.configuration
        current = before
        for _ in range(distance):
            moved = move_piece(current.piece(piece_id), direction, current)
            if moved is None:
                return False
            current = moved
        self.state.record(current, diff_configurations(before, current))
        return True

    def drag(self, piece_id: int, dx: int, dy: int) -> list[PathSegment]:
        """Move a piece by a drag displacement in whole cells.

        Tries the full displacement first, then snaps to the furthest
        reachable cell along the dominant axis.  Each applied segment is
        recorded as one move.  Returns the segments applied (``[]`` means
        the piece snapped back).
        """
        piece = self.state.configuration.piece(piece_id)
        segments = resolve_path(piece, dx, dy, self.state.configuration)
        if not segments and (dx or dy):
            sx, sy = nearest_reachable(piece, dx, dy, self.state.configuration)
            segments = resolve_path(piece, sx, sy, self.state.configuration)
        for segment in segments:
            self.move(piece_id, segment.direction, segment.steps)
        return segments

    def drag_pixels(
        self, piece_id: int, dx_px: float, dy_px: float, cell_size: float
    ) -> list[PathSegment]:
        dx, dy = cells_from_pixels(dx_px, dy_px, cell_size)
        return self.drag(piece_id, dx, dy)

    def undo(self) -> bool:
        return self.state.undo()

    def restart(self) -> None:
        self.state = GameState(self.level.configuration)

    # -- solver ---------------------------------------------------------------

    def hint(self, config: SolverConfig | None = None) -> MoveEvent | None:
        return Solver.hint(self.state.configuration, self.goal, config)
