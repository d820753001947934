"""Sokoban command line.

Usage::

    sokoban levels                          # list built-in levels
    sokoban show -l microcosmos --letters   # render a level
    sokoban solve -l corner                 # print a solution
    sokoban solve -f pack.txt -i 3 -t 30    # third level of a collection file
    sokoban play                            # Rich terminal game with a level menu
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from sokoban.engine.gamesolver import SolveOutcome, Solver
from sokoban.engine.levelparser import parse_level
from sokoban.errors import ParseError
from sokoban.levels import BUILTIN_LEVELS, get_level, load_collection

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

app = typer.Typer(add_completion=False, help="Sokoban puzzle engine.")
err_console = Console(stderr=True)


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_levels(level: Optional[str], file: Optional[Path], index: Optional[int]) -> list[tuple[str, str]]:
    """Resolve the level options to ``(name, description)`` pairs."""
    if level is not None and file is not None:
        raise typer.BadParameter("Use either --level or --file, not both.")

    if file is not None:
        try:
            texts = load_collection(file)
        except OSError as exc:
            raise typer.BadParameter(f"Cannot read {file}: {exc}") from None
        if not texts:
            raise typer.BadParameter(f"No levels found in {file}.")
        levels = [(f"{file.name} #{i}", text) for i, text in enumerate(texts, 1)]
        if index is None:
            return levels
        if not 1 <= index <= len(levels):
            raise typer.BadParameter(f"--index must be between 1 and {len(levels)}.")
        return [levels[index - 1]]

    if level is not None:
        try:
            return [(level, get_level(level))]
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0])) from None

    return list(BUILTIN_LEVELS.items())


def _single_level(level: Optional[str], file: Optional[Path], index: Optional[int]) -> tuple[str, str]:
    """Like ``_load_levels`` but for commands that take one level (the first one)."""
    if file is None and level is None:
        raise typer.BadParameter("Pick a level with --level or --file.")
    return _load_levels(level, file, index)[0]


def _deadline(timeout: float) -> Callable[[], bool] | None:
    """Return a cancellation predicate that fires after *timeout* seconds."""
    if timeout <= 0:
        return None
    end = time.monotonic() + timeout
    return lambda: time.monotonic() >= end


# -- options ------------------------------------------------------------------

LevelOption = typer.Option(None, "-l", "--level", help="Built-in level name.")
FileOption = typer.Option(
    None, "-f", "--file", exists=True, dir_okay=False,
    help="Level collection file (';' comments, blank line between levels).",
)
IndexOption = typer.Option(None, "-i", "--index", min=1, help="Level number within --file (1-based).")


# -- commands -----------------------------------------------------------------


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="SOKOBAN_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Sokoban puzzle engine."""
    _configure_logging(log_level)


@app.command("levels")
def list_levels() -> None:
    """List the built-in levels."""
    for name, text in BUILTIN_LEVELS.items():
        board = parse_level(text)
        typer.echo(f"{name:<12} {board.width}x{board.height}")


@app.command()
def show(
    level: Optional[str] = LevelOption,
    file: Optional[Path] = FileOption,
    index: Optional[int] = IndexOption,
    letters: bool = typer.Option(False, "--letters", help="Use the letter glyphs."),
) -> None:
    """Parse a level and print it back."""
    name, text = _single_level(level, file, index)
    try:
        board = parse_level(text)
    except ParseError as exc:
        err_console.print(f"[bold red]{name}:[/bold red] {exc}")
        raise typer.Exit(code=2) from None
    typer.echo(board.render(letters=letters), nl=False)


@app.command()
def solve(
    level: Optional[str] = LevelOption,
    file: Optional[Path] = FileOption,
    index: Optional[int] = IndexOption,
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT, "-t", "--timeout",
        envvar="SOKOBAN_TIMEOUT", min=0,
        help="Give up after this many seconds (0 = no limit).",
    ),
    max_steps: Optional[int] = typer.Option(
        None, "--max-steps",
        envvar="SOKOBAN_MAX_STEPS", min=0,
        help="Give up after this many search steps.",
    ),
) -> None:
    """Search for a solution and print it as lurd/LURD moves."""
    name, text = _single_level(level, file, index)
    try:
        board = parse_level(text)
    except ParseError as exc:
        err_console.print(f"[bold red]{name}:[/bold red] {exc}")
        raise typer.Exit(code=2) from None

    solver = Solver(board, max_steps=max_steps)
    started = time.monotonic()
    outcome = solver.solve(_deadline(timeout))
    logger.info("%s: %s in %.2fs", name, outcome, time.monotonic() - started)

    if outcome is SolveOutcome.SOLVED:
        typer.echo(solver.solution)
        return
    if outcome is SolveOutcome.EXHAUSTED:
        err_console.print(f"[red]{name}: no solution found.[/red]")
    else:
        err_console.print(f"[yellow]{name}: search stopped after {solver.steps_taken} steps.[/yellow]")
    raise typer.Exit(code=1)


@app.command()
def play(
    level: Optional[str] = LevelOption,
    file: Optional[Path] = FileOption,
    index: Optional[int] = IndexOption,
) -> None:
    """Play in the terminal.  Without a level, pick one from a menu."""
    from sokoban.frontend.cli.rich import app as rich_app

    rich_app.run(_load_levels(level, file, index))


if __name__ == "__main__":
    app()
