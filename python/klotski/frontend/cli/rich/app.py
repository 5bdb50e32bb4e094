"""Rich terminal frontend: coloured board, level menu and solution replay.

The solver runs on a worker thread behind a spinner, so the terminal
stays responsive while a large board is searched.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from klotski.engine.gameplay import GamePlay
from klotski.engine.gamesolver import Metric, SolutionPath, Solver, SolverConfig
from klotski.exceptions import SolveInconclusive
from klotski.frontend.cli.input_handler import get_key
from klotski.models.board import Configuration, Direction
from klotski.models.level import Goal, Level, sorted_levels

console = Console()

_PALETTE = (
    "bold white on red",
    "bold black on yellow",
    "bold white on blue",
    "bold black on green",
    "bold white on magenta",
    "bold black on cyan",
    "bold black on bright_white",
)

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _type_styles(configuration: Configuration) -> dict[str, str]:
    types = sorted({p.type_id for p in configuration.pieces})
    return {t: _PALETTE[i % len(_PALETTE)] for i, t in enumerate(types)}


# -- board rendering ----------------------------------------------------------


def render_board(
    configuration: Configuration,
    goal: Goal | None = None,
    selected: int | None = None,
) -> Table:
    """Return a Rich Table drawing *configuration*, one column per cell."""
    styles = _type_styles(configuration)
    goal_cells: set[tuple[int, int]] = set()
    if goal is not None:
        target = next(iter(configuration.pieces_of_type(goal.type_id)), None)
        if target is not None:
            goal_cells = set(target.at(goal.x, goal.y).cells)

    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(configuration.width):
        table.add_column(width=4, justify="center")

    for y, row in enumerate(configuration.occupancy):
        cells: list[Text] = []
        for x, owner in enumerate(row):
            if owner is None:
                mark = "◇" if (x, y) in goal_cells else "·"
                cells.append(Text(f" {mark}  ", style="dim"))
                continue
            piece = configuration.piece(owner)
            label = (piece.name or piece.type_id)[:1]
            style = styles[piece.type_id]
            if owner == selected:
                style += " reverse"
            cells.append(Text(f" {label} ", style=style))
        table.add_row(*cells)

    return table


# -- solver helpers -----------------------------------------------------------


def _solve_in_background(game: GamePlay, metric: Metric) -> SolutionPath | None:
    config = SolverConfig(metric=metric, time_limit=60.0)
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(Solver.solve, game.configuration, game.goal, config)
        with console.status("[cyan]Searching for a shortest solution…[/cyan]"):
            return future.result()


def _apply_hint(game: GamePlay) -> str:
    if game.is_won:
        return "[green]Already solved![/green]"
    try:
        hint = game.hint(SolverConfig(time_limit=30.0))
    except SolveInconclusive:
        return "[yellow]No hint: the search ran out of time.[/yellow]"
    if hint is None:
        return "[red]No solution from this position. Try undo.[/red]"
    game.move(hint.piece_id, hint.direction)
    return f"[cyan]Hint:[/cyan] moved piece {hint.piece_id} [bold]{hint.direction.value}[/bold]"


def _replay(title: str, goal: Goal, path: SolutionPath, delay: float = 0.15) -> None:
    """Animate a solution path, one unit-step per frame."""
    for i, configuration in enumerate(path):
        console.clear()
        progress = Text()
        progress.append(f"  Step {i}/{path.steps} ", style="bold cyan")
        progress.append(f"(optimal {path.cost} {path.metric.value}s)", style="dim")
        panel = Panel(
            Align.center(render_board(configuration, goal)),
            title=f"[bold cyan]Replay  {title}[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        time.sleep(delay)


def _auto_solve(game: GamePlay) -> str:
    if game.is_won:
        return "[green]Already solved![/green]"
    try:
        path = _solve_in_background(game, Metric.PIECE_MOVE)
    except SolveInconclusive:
        return "[yellow]The search ran out of time.[/yellow]"
    if path is None:
        return "[red]No solution from this position.[/red]"
    _replay(game.level.name, game.level.goal, path)
    return f"[bold green]Solvable in {path.cost} moves ({path.steps} unit-steps).[/bold green]"


# -- screens ------------------------------------------------------------------


def _draw_menu(levels: list[Level], index: int) -> None:
    console.clear()
    level = levels[index]

    table = Table(box=rich.box.SIMPLE, show_edge=False, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Level")
    table.add_column("Difficulty")
    table.add_column("Min steps", justify="right")
    for i, lv in enumerate(levels):
        style = "bold green on #313244" if i == index else ""
        table.add_row(
            str(i + 1),
            lv.name,
            lv.difficulty,
            "-" if lv.min_steps is None else str(lv.min_steps),
            style=style,
        )

    opts = Text()
    opts.append("  ↑↓", style="bold cyan")
    opts.append("  choose   ", style="dim")
    opts.append("Enter", style="bold cyan")
    opts.append("  play   ", style="dim")
    opts.append("V", style="bold yellow")
    opts.append("  watch solution   ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  quit", style="dim")

    body = Group(
        Align.center(table),
        Align.center(render_board(level.configuration, level.goal)),
        Text(""),
        Align.center(opts),
    )
    console.print()
    console.print(
        Align.center(
            Panel(body, title="[bold]K L O T S K I[/bold]", border_style="bright_blue")
        )
    )


def _draw_game(game: GamePlay, selected: int, status: str = "") -> None:
    console.clear()

    stats = Text()
    stats.append("  Steps: ", style="dim")
    stats.append(str(game.state.steps), style="bold yellow")
    if game.level.min_steps is not None:
        stats.append(f" / {game.level.min_steps}", style="dim")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    controls = Text()
    controls.append("  Tab", style="bold cyan")
    controls.append(" select   ", style="dim")
    controls.append("↑↓←→/WASD", style="bold cyan")
    controls.append(" move   ", style="dim")
    controls.append("U", style="bold cyan")
    controls.append(" undo   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append(" hint   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append(" solve   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append(" restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append(" back", style="dim")

    panel = Panel(
        Align.center(render_board(game.configuration, game.level.goal, selected)),
        title=f"[bold cyan]{game.level.name}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("SOLVED!", style="bold green")
    congrats.append(f"  {game.state.steps} moves in ", style="green")
    congrats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    congrats.append("  ★\n", style="bold yellow")

    panel = Panel(
        Group(
            Align.center(render_board(game.configuration, game.level.goal)),
            Align.center(congrats),
        ),
        title=f"[bold green]{game.level.name}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press R to play again, Q to go back.\n", style="dim")))


# -- game loops ---------------------------------------------------------------


def _play_level(level: Level) -> None:
    game = GamePlay(level)
    ids = [p.id for p in level.configuration.pieces]
    cursor = 0
    status = ""

    while True:
        while not game.is_won:
            _draw_game(game, ids[cursor], status)
            status = ""
            key = get_key()

            if key in _DIRECTIONS:
                if not game.move(ids[cursor], _DIRECTIONS[key]):
                    status = "[dim]Blocked.[/dim]"
            elif key == "next":
                cursor = (cursor + 1) % len(ids)
            elif key == "prev":
                cursor = (cursor - 1) % len(ids)
            elif key.isdigit() and 0 < int(key) <= len(ids):
                cursor = int(key) - 1
            elif key == "undo":
                if not game.undo():
                    status = "[dim]Nothing to undo.[/dim]"
            elif key == "hint":
                status = _apply_hint(game)
            elif key == "solve":
                status = _auto_solve(game)
            elif key == "restart":
                game.restart()
            elif key == "quit":
                return

        game.state.pause()
        _draw_win(game)
        while True:
            key = get_key()
            if key == "restart":
                game.restart()
                break
            if key == "quit":
                return


def _watch_solution(level: Level) -> None:
    game = GamePlay(level)
    status = _auto_solve(game)
    console.print(Align.center(Text.from_markup(f"\n  {status}\n")))
    console.print(Align.center(Text("  Press any key to go back.", style="dim")))
    get_key()


def _menu_loop(levels: list[Level], index: int) -> None:
    while True:
        _draw_menu(levels, index)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        if key in ("up", "left", "prev"):
            index = (index - 1) % len(levels)
        elif key in ("down", "right", "next"):
            index = (index + 1) % len(levels)
        elif key == "enter":
            _play_level(levels[index])
        elif key == "solve":
            _watch_solution(levels[index])


# -- public entry point -------------------------------------------------------


def run(level_id: str | None = None) -> None:
    """Launch the Rich frontend, optionally straight into one level."""
    levels = sorted_levels()
    index = 0
    if level_id is not None:
        index = next(i for i, lv in enumerate(levels) if lv.id == level_id)
        _play_level(levels[index])
    _menu_loop(levels, index)
