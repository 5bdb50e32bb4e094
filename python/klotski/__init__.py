"""Sliding-block (Klotski) puzzle engine.

This package exposes the public API surface via:

- ``klotski.models``: pieces, configurations, goals and the level catalog.
- ``klotski.engine.movement``: unit-step move validation and execution.
- ``klotski.engine.pathing``: drag displacement decomposition.
- ``klotski.engine.gamesolver``: breadth-first solvability search.
- ``klotski.engine.authoring``: level-authoring validation.
"""

from .engine.authoring import LevelValidator, ValidationReport
from .engine.gamesolver import Metric, SolutionPath, Solver, SolverConfig, canonical_key
from .engine.movement import can_move, move_piece
from .engine.pathing import PathSegment, resolve_path
from .models import Configuration, Direction, Goal, Level, Piece

__all__ = [
    "Configuration",
    "Direction",
    "Goal",
    "Level",
    "LevelValidator",
    "Metric",
    "PathSegment",
    "Piece",
    "SolutionPath",
    "Solver",
    "SolverConfig",
    "ValidationReport",
    "can_move",
    "canonical_key",
    "move_piece",
    "resolve_path",
]

__version__ = "0.1.0"
