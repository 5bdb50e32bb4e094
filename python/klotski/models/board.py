"""Board model for the sliding-block puzzle.

A :class:`Configuration` is an immutable placement of rectangular
pieces on a fixed ``width × height`` grid.  Its occupancy grid is always
derived from the piece list and never stored as independent truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from functools import cached_property
from typing import Any, Iterator

from klotski.exceptions import LevelDataError, PieceNotFoundError

Cell = tuple[int, int]
OccupancyGrid = tuple[tuple[int | None, ...], ...]


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """``(dx, dy)`` of a single unit-step (y grows downwards)."""
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Direction:
        """Return the direction of a non-zero, axis-aligned delta."""
        if dx and dy:
            raise ValueError(f"Delta ({dx}, {dy}) is not axis-aligned")
        if dx > 0:
            return cls.RIGHT
        if dx < 0:
            return cls.LEFT
        if dy > 0:
            return cls.DOWN
        if dy < 0:
            return cls.UP
        raise ValueError("Zero delta has no direction")


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Piece:
    """A rectangular piece anchored at its top-left cell ``(x, y)``.

    ``id`` is unique per instance; ``type_id`` is shared by
    interchangeable pieces (e.g. the four soldiers).
    """

    id: int
    type_id: str
    width: int
    height: int
    x: int
    y: int
    name: str = field(default="", compare=False)

    # -- geometry -------------------------------------------------------------

    @property
    def position(self) -> Cell:
        return (self.x, self.y)

    @property
    def cells(self) -> Iterator[Cell]:
        """Footprint cells in row-major order."""
        for j in range(self.height):
            for i in range(self.width):
                yield (self.x + i, self.y + j)

    def covers(self, x: int, y: int) -> bool:
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )

    def at(self, x: int, y: int) -> Piece:
        """Return a copy of this piece anchored at ``(x, y)``."""
        return replace(self, x=x, y=y)

    def shifted(self, direction: Direction, steps: int = 1) -> Piece:
        dx, dy = direction.delta
        return replace(self, x=self.x + dx * steps, y=self.y + dy * steps)

    # -- serialisation --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type_id,
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
        }
        if self.name:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        templates: dict[str, dict[str, Any]] | None = None,
    ) -> Piece:
        """Build a piece, filling ``name``/``width``/``height`` from *templates*.

        Explicit values in *data* override the template, so an authored
        level may resize a piece.
        """
        try:
            type_id = str(data["type"])
            template = (templates or {}).get(type_id, {})
            merged = {**template, **data}
            return cls(
                id=int(merged["id"]),
                type_id=type_id,
                width=int(merged["width"]),
                height=int(merged["height"]),
                x=int(merged["x"]),
                y=int(merged["y"]),
                name=str(merged.get("name", "")),
            )
        except KeyError as exc:
            raise LevelDataError(f"Piece entry {data!r} is missing {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise LevelDataError(f"Piece entry {data!r} is malformed: {exc}") from exc


@dataclass(frozen=True)
class Configuration:
    """An immutable placement of pieces on the board.

    Construct through :meth:`from_pieces` to run the structural check;
    the engine's own transitions build new values directly because they
    only ever produce validated placements.
    """

    width: int
    height: int
    pieces: tuple[Piece, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.pieces, tuple):
            object.__setattr__(self, "pieces", tuple(self.pieces))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_pieces(
        cls, width: int, height: int, pieces: list[Piece] | tuple[Piece, ...]
    ) -> Configuration:
        """Create a configuration, raising :class:`LevelDataError` if invalid.

        Example::

            Configuration.from_pieces(4, 5, [Piece(1, "caocao", 2, 2, 1, 0)])
        """
        configuration = cls(width=width, height=height, pieces=tuple(pieces))
        check_configuration(configuration)
        return configuration

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        templates: dict[str, dict[str, Any]] | None = None,
    ) -> Configuration:
        try:
            width = int(data["width"])
            height = int(data["height"])
            raw_pieces = data["pieces"]
        except KeyError as exc:
            raise LevelDataError(f"Board data is missing {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise LevelDataError(f"Board size is malformed: {exc}") from exc
        if not isinstance(raw_pieces, list):
            raise LevelDataError(f"Board pieces must be a list, not {type(raw_pieces).__name__}")
        pieces = [Piece.from_dict(p, templates) for p in raw_pieces]
        return cls.from_pieces(width, height, pieces)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "pieces": [p.to_dict() for p in self.pieces],
        }

    # -- derived state --------------------------------------------------------

    @cached_property
    def occupancy(self) -> OccupancyGrid:
        """``height × width`` grid of owning piece ids (``None`` = empty)."""
        grid: list[list[int | None]] = [
            [None] * self.width for _ in range(self.height)
        ]
        for piece in self.pieces:
            for x, y in piece.cells:
                grid[y][x] = piece.id
        return tuple(tuple(row) for row in grid)

    @cached_property
    def _index(self) -> dict[int, int]:
        return {piece.id: i for i, piece in enumerate(self.pieces)}

    # -- queries --------------------------------------------------------------

    def piece(self, piece_id: int) -> Piece:
        """Return the piece with *piece_id* or raise :class:`PieceNotFoundError`."""
        try:
            return self.pieces[self._index[piece_id]]
        except KeyError:
            raise PieceNotFoundError(piece_id) from None

    def has_piece(self, piece_id: int) -> bool:
        return piece_id in self._index

    def piece_at(self, x: int, y: int) -> Piece | None:
        """Return the piece covering grid cell ``(x, y)``, if any."""
        if not self.in_bounds(x, y):
            return None
        owner = self.occupancy[y][x]
        return None if owner is None else self.piece(owner)

    def pieces_of_type(self, type_id: str) -> list[Piece]:
        return [p for p in self.pieces if p.type_id == type_id]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def empty_cells(self) -> list[Cell]:
        return [
            (x, y)
            for y, row in enumerate(self.occupancy)
            for x, owner in enumerate(row)
            if owner is None
        ]

    # -- transitions ----------------------------------------------------------

    def with_piece(self, piece: Piece) -> Configuration:
        """Return a new configuration with *piece* replacing its namesake."""
        index = self._index.get(piece.id)
        if index is None:
            raise PieceNotFoundError(piece.id)
        pieces = self.pieces[:index] + (piece,) + self.pieces[index + 1 :]
        return Configuration(width=self.width, height=self.height, pieces=pieces)

    # -- display --------------------------------------------------------------

    def render(self, empty: str = ".") -> str:
        """Plain-text grid, one symbol per cell (debug output)."""
        symbols = {p.id: _symbol(p.id) for p in self.pieces}
        return "\n".join(
            "".join(empty if owner is None else symbols[owner] for owner in row)
            for row in self.occupancy
        )


def _symbol(piece_id: int) -> str:
    if 0 <= piece_id < 10:
        return str(piece_id)
    return chr(ord("A") + (piece_id - 10) % 26)


def check_configuration(configuration: Configuration) -> None:
    """Raise :class:`LevelDataError` unless every board invariant holds.

    Checks: positive board and piece sizes, unique ids, non-empty type
    ids, every footprint in bounds, and no two footprints overlapping.
    """
    width, height = configuration.width, configuration.height
    if width <= 0 or height <= 0:
        raise LevelDataError(f"Board size {width}x{height} must be positive")

    owners: dict[Cell, Piece] = {}
    seen_ids: set[int] = set()
    for piece in configuration.pieces:
        label = piece.name or f"#{piece.id}"
        if piece.id in seen_ids:
            raise LevelDataError(f"Duplicate piece id {piece.id}")
        seen_ids.add(piece.id)
        if not piece.type_id:
            raise LevelDataError(f"Piece {label} has an empty type id")
        if piece.width <= 0 or piece.height <= 0:
            raise LevelDataError(
                f"Piece {label} has non-positive size {piece.width}x{piece.height}"
            )
        if (
            piece.x < 0
            or piece.y < 0
            or piece.x + piece.width > width
            or piece.y + piece.height > height
        ):
            raise LevelDataError(
                f"Piece {label} at ({piece.x},{piece.y}) lies outside the "
                f"{width}x{height} board"
            )
        for cell in piece.cells:
            other = owners.get(cell)
            if other is not None:
                raise LevelDataError(
                    f"Piece {label} overlaps {other.name or f'#{other.id}'} "
                    f"at {cell}"
                )
            owners[cell] = piece
