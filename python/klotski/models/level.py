"""Levels, goals and the bundled level catalog."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable

from klotski.exceptions import LevelDataError
from klotski.models.board import Configuration

GoalPredicate = Callable[[Configuration], bool]

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
LEVELS_FILE = DATA_DIR / "levels.json"

_DIFFICULTY_ORDER = {"easy": 1, "medium": 2, "hard": 3}


@dataclass(frozen=True)
class Goal:
    """Goal predicate: some piece of ``type_id`` is anchored at ``(x, y)``."""

    type_id: str
    x: int
    y: int

    def __call__(self, configuration: Configuration) -> bool:
        return any(
            p.type_id == self.type_id and p.x == self.x and p.y == self.y
            for p in configuration.pieces
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Goal:
        try:
            return cls(type_id=str(data["type"]), x=int(data["x"]), y=int(data["y"]))
        except KeyError as exc:
            raise LevelDataError(f"Goal entry {data!r} is missing {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise LevelDataError(f"Goal entry {data!r} is malformed: {exc}") from exc


@dataclass(frozen=True)
class Level:
    """A named starting configuration together with its goal."""

    id: str
    name: str
    difficulty: str
    configuration: Configuration
    goal: Goal
    min_steps: int | None = None

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        templates: dict[str, dict[str, Any]] | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> Level:
        """Parse a level entry.

        *defaults* supplies ``width``, ``height`` and ``goal`` shared by
        every level of a catalog; the entry itself may override them.
        """
        merged = {**(defaults or {}), **data}
        templates = {**merged.get("templates", {}), **(templates or {})}
        if "goal" not in merged:
            raise LevelDataError(f"Level {data.get('id')!r} has no goal")
        try:
            level_id = str(merged["id"])
        except KeyError as exc:
            raise LevelDataError(f"Level entry is missing {exc}") from exc
        min_steps = merged.get("min_steps")
        if min_steps is not None:
            try:
                min_steps = int(min_steps)
            except (TypeError, ValueError) as exc:
                raise LevelDataError(
                    f"Level {level_id!r} has a non-integer min_steps {min_steps!r}"
                ) from exc
        return cls(
            id=level_id,
            name=str(merged.get("name", level_id)),
            difficulty=str(merged.get("difficulty", "easy")),
            configuration=Configuration.from_dict(merged, templates),
            goal=Goal.from_dict(merged["goal"]),
            min_steps=min_steps,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "difficulty": self.difficulty,
            **self.configuration.to_dict(),
            "goal": self.goal.to_dict(),
        }
        if self.min_steps is not None:
            data["min_steps"] = self.min_steps
        return data


# -- catalog ------------------------------------------------------------------


def load_levels(path: Path | None = None) -> list[Level]:
    """Load a level catalog (defaults to the bundled one)."""
    if path is None:
        return list(_bundled_levels())
    return _parse_catalog(json.loads(Path(path).read_text(encoding="utf-8")))


def load_level_file(path: Path) -> Level:
    """Load a single authored level, or the first level of a catalog file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LevelDataError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LevelDataError(f"{path} must hold a JSON object, not {type(data).__name__}")
    if "levels" in data:
        levels = _parse_catalog(data)
        if not levels:
            raise LevelDataError(f"{path} contains no levels")
        return levels[0]
    return Level.from_dict(data)


def get_level(level_id: str) -> Level:
    for level in _bundled_levels():
        if level.id == level_id:
            return level
    raise KeyError(level_id)


def sorted_levels(levels: list[Level] | None = None) -> list[Level]:
    """Order by difficulty, then by authored minimum step count."""
    levels = list(_bundled_levels()) if levels is None else levels
    return sorted(
        levels,
        key=lambda lv: (
            _DIFFICULTY_ORDER.get(lv.difficulty, 4),
            lv.min_steps if lv.min_steps is not None else 0,
        ),
    )


@lru_cache(maxsize=1)
def _bundled_levels() -> tuple[Level, ...]:
    data = json.loads(LEVELS_FILE.read_text(encoding="utf-8"))
    return tuple(_parse_catalog(data))


def _parse_catalog(data: dict[str, Any]) -> list[Level]:
    templates = data.get("templates", {})
    defaults = {
        k: data[k] for k in ("width", "height", "goal") if k in data
    }
    return [
        Level.from_dict(entry, templates, defaults)
        for entry in data.get("levels", [])
    ]
