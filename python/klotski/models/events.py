"""Move events derived by diffing consecutive configurations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from klotski.models.board import Cell, Configuration, Direction


@dataclass(frozen=True)
class MoveEvent:
    """One piece's displacement between two configurations.

    ``direction`` is the dominant axis of the displacement (horizontal
    on a tie) and ``distance`` its Manhattan length, so a two-segment
    drag still yields a single event.
    """

    piece_id: int
    type_id: str
    from_position: Cell
    to_position: Cell
    direction: Direction
    distance: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "piece_id": self.piece_id,
            "type": self.type_id,
            "from": list(self.from_position),
            "to": list(self.to_position),
            "direction": self.direction.value,
            "distance": self.distance,
        }


def diff_configurations(before: Configuration, after: Configuration) -> list[MoveEvent]:
    """Return an event for every piece whose position changed, by piece id."""
    events: list[MoveEvent] = []
    for old in before.pieces:
        new = after.piece(old.id)
        dx, dy = new.x - old.x, new.y - old.y
        if dx == 0 and dy == 0:
            continue
        if abs(dx) >= abs(dy):
            direction = Direction.from_delta(dx, 0)
        else:
            direction = Direction.from_delta(0, dy)
        events.append(
            MoveEvent(
                piece_id=old.id,
                type_id=old.type_id,
                from_position=old.position,
                to_position=new.position,
                direction=direction,
                distance=abs(dx) + abs(dy),
            )
        )
    return events
