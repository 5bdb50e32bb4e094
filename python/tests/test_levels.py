"""Bundled level catalog and level file loading."""

from __future__ import annotations

import json

import pytest

from klotski.engine.authoring import LevelValidator
from klotski.exceptions import LevelDataError
from klotski.models.level import (
    Goal,
    Level,
    get_level,
    load_level_file,
    load_levels,
    sorted_levels,
)

_SINGLE_LEVEL = {
    "id": "tiny",
    "width": 4,
    "height": 5,
    "goal": {"type": "caocao", "x": 1, "y": 3},
    "pieces": [{"id": 1, "type": "caocao", "width": 2, "height": 2, "x": 1, "y": 0}],
}


# -- bundled catalog ----------------------------------------------------------


def test_catalog_loads_every_level() -> None:
    levels = load_levels()
    assert len(levels) == 16
    assert len({lv.id for lv in levels}) == 16


def test_every_bundled_level_passes_the_structural_check() -> None:
    validator = LevelValidator()
    for level in load_levels():
        validator.check_structure(level.configuration, level.goal)
        assert len(level.configuration.pieces_of_type("caocao")) == 1


def test_templates_fill_piece_sizes(jiezu) -> None:
    general = jiezu.configuration.pieces_of_type("caocao")[0]
    assert (general.width, general.height, general.name) == (2, 2, "曹操")
    assert jiezu.goal == Goal("caocao", 1, 3)
    assert jiezu.min_steps == 32


def test_sorted_by_difficulty_then_min_steps() -> None:
    ordered = [lv.id for lv in sorted_levels()]
    assert ordered[:3] == ["简易", "捷足先登", "兵临曹营"]
    assert ordered[-2:] == ["兵分两路", "横刀立马"]
    ranks = {"easy": 0, "medium": 1, "hard": 2}
    difficulties = [ranks[lv.difficulty] for lv in sorted_levels()]
    assert difficulties == sorted(difficulties)


def test_get_level_unknown_id() -> None:
    with pytest.raises(KeyError):
        get_level("no-such-level")


def test_level_round_trips_through_dict(jiezu) -> None:
    assert Level.from_dict(jiezu.to_dict()) == jiezu


# -- goal predicate -----------------------------------------------------------


def test_goal_matches_anchor_of_goal_type(board) -> None:
    goal = Goal("caocao", 1, 3)
    assert goal(board(4, 5, (1, "caocao", 2, 2, 1, 3)))
    assert not goal(board(4, 5, (1, "caocao", 2, 2, 0, 3)))
    assert not goal(board(4, 5, (1, "guanyu", 2, 2, 1, 3)))


# -- level files --------------------------------------------------------------


def test_load_single_level_file(tmp_path) -> None:
    path = tmp_path / "tiny.json"
    path.write_text(json.dumps(_SINGLE_LEVEL), encoding="utf-8")
    level = load_level_file(path)
    assert level.id == "tiny"
    assert level.configuration.piece(1).position == (1, 0)
    assert level.min_steps is None


def test_load_first_level_of_catalog_file(tmp_path) -> None:
    catalog = {
        "width": 4,
        "height": 5,
        "goal": {"type": "caocao", "x": 1, "y": 3},
        "templates": {"caocao": {"width": 2, "height": 2}},
        "levels": [
            {"id": "a", "pieces": [{"id": 1, "type": "caocao", "x": 0, "y": 0}]},
            {"id": "b", "pieces": [{"id": 1, "type": "caocao", "x": 2, "y": 0}]},
        ],
    }
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")
    assert load_level_file(path).id == "a"
    assert [lv.id for lv in load_levels(path)] == ["a", "b"]


def test_invalid_json_is_level_data_error(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LevelDataError, match="not valid JSON"):
        load_level_file(path)


def test_level_without_goal() -> None:
    data = {k: v for k, v in _SINGLE_LEVEL.items() if k != "goal"}
    with pytest.raises(LevelDataError, match="no goal"):
        Level.from_dict(data)


@pytest.mark.parametrize(
    ("override", "message"),
    [
        ({"goal": {"type": "caocao", "x": "one", "y": 3}}, "Goal entry"),
        ({"goal": "bottom-middle"}, "Goal entry"),
        ({"width": "four"}, "Board size"),
        ({"height": None}, "Board size"),
        ({"pieces": 3}, "must be a list"),
        ({"min_steps": "many"}, "min_steps"),
    ],
    ids=["goal-x", "goal-not-object", "width", "height", "pieces", "min-steps"],
)
def test_malformed_values_are_level_data_errors(override: dict, message: str) -> None:
    with pytest.raises(LevelDataError, match=message):
        Level.from_dict({**_SINGLE_LEVEL, **override})


def test_level_file_must_hold_an_object(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text(json.dumps([_SINGLE_LEVEL]), encoding="utf-8")
    with pytest.raises(LevelDataError, match="JSON object"):
        load_level_file(path)


def test_overlapping_level_is_rejected() -> None:
    data = dict(_SINGLE_LEVEL)
    data["pieces"] = _SINGLE_LEVEL["pieces"] + [
        {"id": 2, "type": "zu", "width": 1, "height": 1, "x": 2, "y": 1}
    ]
    with pytest.raises(LevelDataError, match="overlaps"):
        Level.from_dict(data)
