"""Exception hierarchy for the puzzle engine.

Illegal moves, empty drag paths and unsolvable boards are ordinary
return values.  Only the conditions below are raised.
"""

from __future__ import annotations


class KlotskiError(Exception):
    """Base exception for engine failures."""


class LevelDataError(KlotskiError):
    """Raised when level data fails the structural pre-check."""


class PieceNotFoundError(KlotskiError, LookupError):
    """Raised when a piece id is not part of the configuration."""

    def __init__(self, piece_id: int) -> None:
        super().__init__(f"No piece with id {piece_id} in configuration")
        self.piece_id = piece_id


class SolveInconclusive(KlotskiError):
    """Raised when the solver budget runs out before a verdict."""

    def __init__(self, explored: int, elapsed: float) -> None:
        super().__init__(
            f"Search budget exhausted after {explored} states "
            f"({elapsed:.2f}s) without a verdict"
        )
        self.explored = explored
        self.elapsed = elapsed
