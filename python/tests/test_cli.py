"""Command-line interface and terminal helpers."""

from __future__ import annotations

import json

from rich.console import Console
from typer.testing import CliRunner

from klotski.cli import app
from klotski.frontend.cli.input_handler import resolve_key
from klotski.frontend.cli.rich import render_board

runner = CliRunner()

_TINY = {
    "id": "tiny",
    "width": 4,
    "height": 5,
    "goal": {"type": "caocao", "x": 1, "y": 3},
    "pieces": [{"id": 1, "type": "caocao", "width": 2, "height": 2, "x": 1, "y": 0}],
}


# -- commands -----------------------------------------------------------------


def test_levels_lists_the_catalog() -> None:
    result = runner.invoke(app, ["levels"])
    assert result.exit_code == 0
    assert "捷足先登" in result.output
    assert "横刀立马" in result.output


def test_solve_piece_moves() -> None:
    result = runner.invoke(app, ["solve", "捷足先登", "--metric", "piece-move"])
    assert result.exit_code == 0, result.output
    assert "optimal 32 piece-move" in result.output


def test_solve_unit_steps_with_path() -> None:
    result = runner.invoke(app, ["solve", "简易", "--show-path"])
    assert result.exit_code == 0, result.output
    assert "optimal 1 unit-step" in result.output
    assert "down" in result.output


def test_solve_unknown_level() -> None:
    result = runner.invoke(app, ["solve", "nowhere"])
    assert result.exit_code == 2
    assert "Unknown level" in result.output


def test_solve_out_of_budget() -> None:
    result = runner.invoke(app, ["solve", "捷足先登", "--max-states", "1"])
    assert result.exit_code == 2
    assert "Inconclusive" in result.output


def test_validate_good_level(tmp_path) -> None:
    path = tmp_path / "tiny.json"
    path.write_text(json.dumps(_TINY), encoding="utf-8")
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 0, result.output
    assert "solvable" in result.output


def test_validate_overlapping_level(tmp_path) -> None:
    data = dict(_TINY)
    data["pieces"] = _TINY["pieces"] + [
        {"id": 2, "type": "zu", "width": 1, "height": 1, "x": 1, "y": 1}
    ]
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "Invalid level data" in result.output


def test_validate_malformed_value(tmp_path) -> None:
    data = {**_TINY, "goal": {"type": "caocao", "x": "one", "y": 3}}
    path = tmp_path / "bad-goal.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "Invalid level data" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


# -- terminal helpers ---------------------------------------------------------


def test_resolve_key() -> None:
    assert resolve_key("W") == "up"
    assert resolve_key("\t") == "next"
    assert resolve_key("[") == "prev"
    assert resolve_key("\x03") == "quit"
    assert resolve_key("x") == "x"
    assert resolve_key("\x01") == ""


def test_render_board_draws_every_cell(jiezu) -> None:
    table = render_board(jiezu.configuration, jiezu.goal, selected=1)
    assert len(table.columns) == 4
    assert table.row_count == 5

    console = Console(width=60, record=True)
    console.print(table)
    assert "曹" in console.export_text()
