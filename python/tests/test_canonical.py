"""Canonical visited-state keys."""

from __future__ import annotations

from klotski.engine.gamesolver import canonical_key
from klotski.engine.gamesolver.canonical import EMPTY


def test_key_is_row_major_with_empty_sentinel(board) -> None:
    config = board(3, 2, (1, "guanyu", 2, 1, 0, 0), (2, "zu", 1, 1, 2, 1))
    assert canonical_key(config) == ("guanyu", "guanyu", EMPTY, EMPTY, EMPTY, "zu")


def test_swapping_same_type_pieces_shares_a_key(board) -> None:
    a = board(2, 1, (1, "zu", 1, 1, 0, 0), (2, "zu", 1, 1, 1, 0))
    b = board(2, 1, (2, "zu", 1, 1, 0, 0), (1, "zu", 1, 1, 1, 0))
    assert canonical_key(a) == canonical_key(b)
    assert canonical_key(a, instance_keys=True) != canonical_key(b, instance_keys=True)


def test_same_shape_different_types_differ(board) -> None:
    a = board(1, 2, (1, "zhangfei", 1, 2, 0, 0))
    b = board(1, 2, (1, "zhaoyun", 1, 2, 0, 0))
    assert canonical_key(a) != canonical_key(b)


def test_piece_order_does_not_matter(board) -> None:
    a = board(3, 1, (1, "zu", 1, 1, 0, 0), (2, "guanyu", 2, 1, 1, 0))
    b = board(3, 1, (2, "guanyu", 2, 1, 1, 0), (1, "zu", 1, 1, 0, 0))
    assert canonical_key(a) == canonical_key(b)
