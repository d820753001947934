"""Core gameplay logic: processes moves and checks the win condition."""

from __future__ import annotations

from sokoban.engine.gamesolver import SolveOutcome, Solver, replay
from sokoban.engine.gamesolver.solver import Canceller
from sokoban.engine.gamestate import GameState
from sokoban.engine.levelparser import parse_grid, parse_level
from sokoban.models.board import Direction


class GamePlay:
    """Orchestrates a single game session on one level."""

    def __init__(self, level: str, name: str = "") -> None:
        self.level = level
        self.name = name
        self.state = GameState(parse_level(level))

    # -- movement -------------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Move the worker; returns True if the move was applied."""
        return self.state.board.move(direction)

    def undo(self) -> bool:
        """Take back the last move; returns False if there was none."""
        return self.state.board.undo() is not None

    def restart(self) -> None:
        """Put the level back to its initial position and clear the history."""
        tiles, worker = parse_grid(self.level)
        self.state.board.reset(tiles, worker)

    def apply_moves(self, moves: str) -> None:
        """Play a solution string (``lurd``/``LURD``) from the current position."""
        replay(self.state.board, moves)

    # -- solving --------------------------------------------------------------

    def solve(
        self,
        is_cancelled: Canceller | None = None,
        max_steps: int | None = None,
    ) -> tuple[SolveOutcome, str]:
        """Search for a solution from the current position.

        The search runs on a history-free copy, so the session board is left
        untouched.  Returns the outcome and the moves found (empty unless the
        outcome is ``SOLVED``).
        """
        board = parse_level(self.state.board.render())
        solver = Solver(board, max_steps=max_steps)
        outcome = solver.solve(is_cancelled)
        if outcome is SolveOutcome.SOLVED:
            return outcome, solver.solution
        return outcome, ""

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
