"""Rich terminal frontend: coloured board, move counter and clock.

Uses the ``rich`` library for styled output.  The frontend only builds a
``GamePlay`` from level text, forwards moves / undo / restart to it, polls the
keyboard while the solver runs, and reads the board back for display.
"""

from __future__ import annotations

import time

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sokoban.engine.gameplay import GamePlay
from sokoban.engine.gamesolver import SolveOutcome
from sokoban.errors import ParseError
from sokoban.frontend.cli.input_handler import get_key, read_key
from sokoban.models.board import Board, Direction
from sokoban.models.cell import Cell, to_char

console = Console()

# Keyboard is checked for a cancel request every this many solver steps.
_CANCEL_POLL_EVERY = 500
_REPLAY_DELAY = 0.05

_CELL_STYLES: dict[Cell, str] = {
    Cell.EMPTY: "",
    Cell.WALL: "grey50 on grey35",
    Cell.PLACE: "bold green",
    Cell.WORKER: "bold white on red",
    Cell.WORKER | Cell.PLACE: "bold white on red",
    Cell.BOX: "bold black on yellow",
    Cell.BOX | Cell.PLACE: "bold black on green_yellow",
}

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


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table with one two-character column per board cell."""
    table = Table(show_header=False, show_edge=False, box=None, padding=0)
    for _ in range(board.width):
        table.add_column(width=2, no_wrap=True)

    for row in board.tiles:
        cells: list[Text] = []
        for kind in row:
            glyph = to_char(kind) if kind not in (Cell.EMPTY, Cell.WALL) else " "
            cells.append(Text(f"{glyph} ", style=_CELL_STYLES[kind]))
        table.add_row(*cells)

    return table


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    return stats


# -- solver helpers -----------------------------------------------------------


def _auto_solve(game: GamePlay) -> str:
    """Search from the current position; any key cancels the search."""
    polls = 0

    def cancelled() -> bool:
        nonlocal polls
        polls += 1
        if polls % _CANCEL_POLL_EVERY:
            return False
        return read_key(0) is not None

    with console.status("[bold cyan]Solving… press any key to cancel[/bold cyan]"):
        outcome, moves = game.solve(cancelled)

    if outcome is SolveOutcome.CANCELLED:
        return "[yellow]Search cancelled.[/yellow]"
    if outcome is SolveOutcome.EXHAUSTED:
        return "[red]No solution from this position.[/red]"
    if not moves:
        return "[green]Already solved![/green]"

    for i, ch in enumerate(moves):
        game.apply_moves(ch)
        progress = Text()
        progress.append(f"  Replaying… move {i + 1}/{len(moves)} ", style="bold cyan")
        progress.append(f"({ch})", style="dim")
        _draw_game(game, footer=progress)
        time.sleep(_REPLAY_DELAY)

    return f"[bold green]Solved in {len(moves)} moves:[/bold green] {moves}"


# -- menu screen --------------------------------------------------------------


def _draw_menu(names: list[str], selected: int) -> None:
    console.clear()

    entries = Text()
    for i, name in enumerate(names):
        if i == selected:
            entries.append(f" ▶ {name} \n", style="bold green on #313244")
        else:
            entries.append(f"   {name} \n", style="dim")

    opts = Text()
    opts.append("  ↑↓", style="bold cyan")
    opts.append("  choose   ")
    opts.append("Enter", style="bold cyan")
    opts.append("  play   ")
    opts.append("Q", style="dim bold")
    opts.append("  quit", style="dim")

    panel = Panel(
        Group(Text(""), Align.center(entries), Align.center(opts), Text("")),
        title="[bold]S O K O B A N[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _draw_game(game: GamePlay, status: str = "", footer: Text | None = None) -> None:
    console.clear()

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Z", style="bold cyan")
    controls.append("  undo   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  print   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    title = game.name or "Sokoban"
    panel = Panel(
        Align.center(_render_board(game.state.board)),
        title=f"[bold cyan]{title}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game)))
    if footer is not None:
        console.print(Align.center(footer))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay, status: str = "") -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("SOLVED!", style="bold green")
    congrats.append("  All boxes are in place.  ", style="green")
    congrats.append("★\n", style="bold yellow")

    parts = [
        Align.center(_render_board(game.state.board)),
        Align.center(congrats),
        Align.center(_stats(game)),
    ]
    if status:
        parts.append(Align.center(Text.from_markup(status)))

    panel = Panel(
        Group(*parts),
        title=f"[bold green]{game.name or 'Sokoban'}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


# -- game loop ----------------------------------------------------------------


def _play_game(game: GamePlay) -> None:
    status = ""
    while True:
        while not game.is_won:
            _draw_game(game, status)
            status = ""

            # Redraw once a second so the clock keeps ticking.
            key = read_key(1.0)
            while key is None:
                _draw_game(game)
                key = read_key(1.0)

            if key in _DIRECTIONS:
                game.move(_DIRECTIONS[key])
            elif key == "undo":
                if not game.undo():
                    status = "[dim]Nothing to undo.[/dim]"
            elif key == "restart":
                game.restart()
            elif key == "solve":
                status = _auto_solve(game)
            elif key == "print":
                status = f"[dim]{game.state.board.render()}[/dim]"
            elif key == "quit":
                return

        _draw_win(game, status)
        status = ""
        console.print(
            Align.center(
                Text("\n  Press Z to undo, R to play again, Q to go back.\n", style="dim")
            )
        )

        while True:
            key = get_key()
            if key == "undo":
                game.undo()
                break
            if key == "restart":
                game.restart()
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(levels: list[tuple[str, str]]) -> None:
    names = [name for name, _ in levels]
    selected = 0

    while True:
        _draw_menu(names, selected)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("up", "left"):
            selected = (selected - 1) % len(levels)
        elif key in ("down", "right"):
            selected = (selected + 1) % len(levels)
        elif key == "enter":
            name, text = levels[selected]
            try:
                game = GamePlay(text, name=name)
            except ParseError as exc:
                console.print(Align.center(Text(f"\n  {exc}\n", style="bold red")))
                get_key()
                continue
            _play_game(game)


# -- public entry point -------------------------------------------------------


def run(levels: list[tuple[str, str]]) -> None:
    """Launch the Rich frontend.

    *levels* is a list of ``(name, description)`` pairs.  With a single level
    the game starts straight away; otherwise a selection menu is shown.
    """
    if len(levels) == 1:
        name, text = levels[0]
        _play_game(GamePlay(text, name=name))
        return
    _menu_loop(levels)
