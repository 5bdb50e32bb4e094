"""Klotski command-line interface.

Usage::

    klotski levels                      # list the bundled levels
    klotski solve 捷足先登 --metric piece-move
    klotski validate my-level.json      # authoring check
    klotski play --level 横刀立马        # Rich terminal game
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import rich.box
import typer
from rich.console import Console
from rich.table import Table

from klotski.engine.authoring import LevelValidator
from klotski.engine.gamesolver import Metric, Solver, SolverConfig
from klotski.exceptions import LevelDataError, SolveInconclusive
from klotski.models.level import get_level, load_level_file, sorted_levels
from klotski.utils.logger import configure_logging

console = Console()

app = typer.Typer(add_completion=False, help="Sliding-block puzzle engine.")


# -- helpers ------------------------------------------------------------------


def _lookup(level_id: str):
    try:
        return get_level(level_id)
    except KeyError:
        console.print(f"[red]Unknown level {level_id!r}.[/red] Try `klotski levels`.")
        raise typer.Exit(code=2)


def _solver_config(
    metric: Metric,
    max_states: Optional[int],
    time_limit: Optional[float],
    instance_keys: bool,
) -> SolverConfig:
    return SolverConfig(
        metric=metric,
        max_states=max_states,
        time_limit=time_limit,
        instance_keys=instance_keys,
    )


# -- commands -----------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging."),
) -> None:
    """Sliding-block puzzle engine."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("levels")
def list_levels() -> None:
    """List the bundled levels."""
    table = Table(box=rich.box.ROUNDED, border_style="dim")
    table.add_column("Level", style="bold")
    table.add_column("Difficulty")
    table.add_column("Pieces", justify="right")
    table.add_column("Min steps", justify="right", style="yellow")
    for level in sorted_levels():
        table.add_row(
            level.id,
            level.difficulty,
            str(len(level.configuration.pieces)),
            "-" if level.min_steps is None else str(level.min_steps),
        )
    console.print(table)


@app.command()
def solve(
    level_id: str = typer.Argument(..., help="Level id (see `klotski levels`)."),
    metric: Metric = typer.Option(Metric.UNIT_STEP, "-m", "--metric", help="Edge cost."),
    max_states: Optional[int] = typer.Option(None, "--max-states", min=1),
    time_limit: Optional[float] = typer.Option(None, "--time-limit", min=0.0),
    instance_keys: bool = typer.Option(
        False, "--instance-keys", help="Tell same-type pieces apart."
    ),
    show_path: bool = typer.Option(False, "--show-path", help="Print every step."),
) -> None:
    """Find a shortest solution for a bundled level."""
    level = _lookup(level_id)
    config = _solver_config(metric, max_states, time_limit, instance_keys)
    try:
        path = Solver.solve(level.configuration, level.goal, config)
    except SolveInconclusive as exc:
        console.print(f"[yellow]Inconclusive:[/yellow] {exc}")
        raise typer.Exit(code=2)

    if path is None:
        console.print(f"[red]{level.id} is unsolvable.[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]{level.id}[/green]: optimal {path.cost} {metric.value}(s), "
        f"{path.steps} unit-steps"
    )
    if show_path:
        for i, event in enumerate(path.events(), 1):
            console.print(
                f"{i:>4}. piece {event.piece_id} ({event.type_id}) "
                f"{event.direction.value} {event.from_position} -> {event.to_position}"
            )
        console.print(path.final.render())


@app.command()
def validate(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    metric: Metric = typer.Option(Metric.PIECE_MOVE, "-m", "--metric"),
    time_limit: Optional[float] = typer.Option(None, "--time-limit", min=0.0),
) -> None:
    """Check an authored level file for structure and solvability."""
    try:
        level = load_level_file(path)
    except LevelDataError as exc:
        console.print(f"[red]Invalid level data:[/red] {exc}")
        raise typer.Exit(code=1)

    validator = LevelValidator(SolverConfig(metric=metric, time_limit=time_limit))
    report = validator.validate_level(level)
    style = "green" if report.ok else "red"
    console.print(f"[{style}]{report.message}[/{style}]")
    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def play(
    level_id: Optional[str] = typer.Option(None, "-l", "--level", help="Start on this level."),
) -> None:
    """Play in the terminal."""
    from klotski.frontend.cli.rich import run

    if level_id is not None:
        _lookup(level_id)
    run(level_id=level_id)


if __name__ == "__main__":
    app()
