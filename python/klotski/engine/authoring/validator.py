"""Level-authoring validation: structure first, then solvability."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace

from klotski.engine.gamesolver import (
    Metric,
    SolutionPath,
    SolveStatus,
    Solver,
    SolverConfig,
)
from klotski.exceptions import LevelDataError, SolveInconclusive
from klotski.models.board import Configuration, check_configuration
from klotski.models.level import Goal, Level
from klotski.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ValidationReport:
    """Outcome of validating an authored board.

    ``is_valid`` is the structural verdict.  ``is_solvable`` is ``None``
    when the board was invalid or the search was inconclusive.
    """

    is_valid: bool
    is_solvable: bool | None
    message: str
    min_steps: int | None = None
    solution: SolutionPath | None = field(default=None, repr=False)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.is_valid and self.is_solvable is True


class LevelValidator:
    """Runs the structural pre-check and the solver for authored boards.

    ``min_steps`` is reported in piece moves by default, the unit
    authored levels record their minimum step count in.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig(metric=Metric.PIECE_MOVE)

    def check_structure(self, configuration: Configuration, goal: Goal) -> None:
        """Raise :class:`LevelDataError` if the board must not be searched."""
        if not configuration.pieces:
            raise LevelDataError("Level must contain at least one piece")
        check_configuration(configuration)
        candidates = configuration.pieces_of_type(goal.type_id)
        if not candidates:
            raise LevelDataError(f"Level has no goal piece of type {goal.type_id!r}")
        piece = candidates[0]
        if (
            goal.x < 0
            or goal.y < 0
            or goal.x + piece.width > configuration.width
            or goal.y + piece.height > configuration.height
        ):
            raise LevelDataError(
                f"Goal ({goal.x},{goal.y}) puts {goal.type_id!r} outside the board"
            )

    def validate(self, configuration: Configuration, goal: Goal) -> ValidationReport:
        try:
            self.check_structure(configuration, goal)
        except LevelDataError as exc:
            LOGGER.error("Level data rejected: %s", exc)
            return ValidationReport(is_valid=False, is_solvable=None, message=str(exc))

        result = Solver.search(configuration, goal, self.config)
        if result.path is not None:
            return ValidationReport(
                is_valid=True,
                is_solvable=True,
                message=(
                    f"Level is solvable; minimum {result.path.cost} "
                    f"{self.config.metric.value}(s) ({result.elapsed * 1000:.0f} ms)"
                ),
                min_steps=result.path.cost,
                solution=result.path,
                elapsed=result.elapsed,
            )
        if result.status is SolveStatus.INCONCLUSIVE:
            exc = SolveInconclusive(result.explored, result.elapsed)
            return ValidationReport(
                is_valid=True, is_solvable=None, message=str(exc), elapsed=result.elapsed
            )
        return ValidationReport(
            is_valid=True,
            is_solvable=False,
            message=(
                f"Level is valid but has no solution "
                f"({result.explored} states, {result.elapsed * 1000:.0f} ms)"
            ),
            elapsed=result.elapsed,
        )

    def validate_level(self, level: Level) -> ValidationReport:
        """Validate a level and flag a mismatch with its authored minimum."""
        report = self.validate(level.configuration, level.goal)
        if (
            report.min_steps is not None
            and level.min_steps is not None
            and report.min_steps != level.min_steps
        ):
            LOGGER.warning(
                "Level %s records min_steps=%d but the solver found %d",
                level.id, level.min_steps, report.min_steps,
            )
            report = replace(
                report,
                message=f"{report.message}; authored minimum is {level.min_steps}",
            )
        return report

    async def validate_async(
        self, configuration: Configuration, goal: Goal
    ) -> ValidationReport:
        return await asyncio.to_thread(self.validate, configuration, goal)
