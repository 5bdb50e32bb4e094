"""Canonical visited-state keys for the solver."""

from __future__ import annotations

from klotski.models.board import Configuration

StateKey = tuple[str, ...]

EMPTY = ""


def canonical_key(configuration: Configuration, instance_keys: bool = False) -> StateKey:
    """Flatten the occupancy grid row-major into a hashable key.

    Cells hold the occupant's ``type_id``, so configurations that only
    swap interchangeable pieces share a key.  With *instance_keys* the
    piece id is used instead and every instance is told apart.
    """
    labels = {
        p.id: (str(p.id) if instance_keys else p.type_id)
        for p in configuration.pieces
    }
    return tuple(
        EMPTY if owner is None else labels[owner]
        for row in configuration.occupancy
        for owner in row
    )
