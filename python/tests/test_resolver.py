"""Drag path resolution and nearest-reachable snapping."""

from __future__ import annotations

from klotski.engine.pathing import PathSegment, nearest_reachable, resolve_path
from klotski.models.board import Direction


def test_zero_displacement_is_empty(lone_general) -> None:
    assert resolve_path(lone_general.piece(1), 0, 0, lone_general) == []


def test_straight_drag(lone_general) -> None:
    segments = resolve_path(lone_general.piece(1), 0, 3, lone_general)
    assert segments == [PathSegment(Direction.DOWN, 3)]


def test_horizontal_first_when_both_orders_work(board) -> None:
    config = board(3, 3, (1, "zu", 1, 1, 0, 0))
    segments = resolve_path(config.piece(1), 1, 1, config)
    assert segments == [PathSegment(Direction.RIGHT, 1), PathSegment(Direction.DOWN, 1)]


def test_vertical_first_when_horizontal_is_blocked(board) -> None:
    config = board(3, 3, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 1, 0))
    segments = resolve_path(config.piece(1), 1, 1, config)
    assert segments == [PathSegment(Direction.DOWN, 1), PathSegment(Direction.RIGHT, 1)]


def test_both_orders_blocked(board) -> None:
    config = board(
        3, 3, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 1, 0), (3, "zu", 1, 1, 0, 1)
    )
    assert resolve_path(config.piece(1), 1, 1, config) == []


def test_blocked_midway(board) -> None:
    config = board(4, 1, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 2, 0))
    assert resolve_path(config.piece(1), 3, 0, config) == []


def test_leaving_the_board_is_blocked(lone_general) -> None:
    assert resolve_path(lone_general.piece(1), 2, 0, lone_general) == []


def test_resolution_is_deterministic(board) -> None:
    config = board(3, 3, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 1, 0))
    first = resolve_path(config.piece(1), 2, 2, config)
    assert all(resolve_path(config.piece(1), 2, 2, config) == first for _ in range(5))


# -- nearest_reachable --------------------------------------------------------


def test_nearest_shortens_along_dominant_axis(board) -> None:
    config = board(4, 1, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 3, 0))
    assert nearest_reachable(config.piece(1), 3, 0, config) == (2, 0)


def test_nearest_prefers_horizontal_on_tie(board) -> None:
    config = board(3, 3, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 1, 1))
    assert nearest_reachable(config.piece(1), 2, 2, config) == (2, 0)


def test_nearest_vertical_when_dominant(lone_general) -> None:
    assert nearest_reachable(lone_general.piece(1), 1, 5, lone_general) == (0, 3)


def test_nearest_when_nothing_reachable(lone_general) -> None:
    assert nearest_reachable(lone_general.piece(1), 0, -2, lone_general) == (0, 0)
