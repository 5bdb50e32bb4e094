"""Shared fixtures: small hand-built boards and the bundled levels."""

from __future__ import annotations

from typing import Callable

import pytest

from klotski.models.board import Configuration, Piece
from klotski.models.level import Goal, Level, get_level

BoardFactory = Callable[..., Configuration]


@pytest.fixture
def board() -> BoardFactory:
    """Build a validated configuration from ``(id, type, w, h, x, y)`` tuples."""

    def _build(width: int, height: int, *specs: tuple) -> Configuration:
        pieces = [Piece(i, t, w, h, x, y) for i, t, w, h, x, y in specs]
        return Configuration.from_pieces(width, height, pieces)

    return _build


@pytest.fixture
def general_goal() -> Goal:
    return Goal("caocao", 1, 3)


@pytest.fixture
def lone_general(board: BoardFactory) -> Configuration:
    """A single 2×2 piece at (1, 0) on an otherwise empty 4×5 board."""
    return board(4, 5, (1, "caocao", 2, 2, 1, 0))


@pytest.fixture
def jiezu() -> Level:
    return get_level("捷足先登")
