"""Depth-first Sokoban solver.

The search keeps no state of its own beyond a cursor over the four
directions: the board's move history is the search stack.  A forward step is
``board.move``; backtracking is ``board.undo`` followed by trying the next
direction after the one just undone.  Positions that are deadlocked (repeated
or with a frozen box) are abandoned straight away.

Any solution is accepted; the search does not look for a short one.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from sokoban.engine.deadlock import is_deadlocked
from sokoban.models.board import Board, Direction

logger = logging.getLogger(__name__)

SEARCH_ORDER: tuple[Direction, ...] = (
    Direction.LEFT,
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
)

# Cursor sentinels around the indices of SEARCH_ORDER.
START = -1
STOP = len(SEARCH_ORDER)

_PROGRESS_EVERY = 10_000

Canceller = Callable[[], bool]


class SolveOutcome(StrEnum):
    SOLVED = "solved"
    CANCELLED = "cancelled"
    EXHAUSTED = "exhausted"


def _never() -> bool:
    return False


class Solver:
    """Runs the backtracking search on *board*, mutating it in place.

    ``step_delay`` sleeps after every search step (useful to watch the
    search); ``max_steps`` stops the search after that many steps.
    """

    def __init__(
        self,
        board: Board,
        *,
        step_delay: float = 0.0,
        max_steps: int | None = None,
    ) -> None:
        if step_delay < 0:
            raise ValueError("step_delay must not be negative")
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must not be negative")
        self.board = board
        self.step_delay = step_delay
        self.max_steps = max_steps
        self.cursor: int = START
        self.steps_taken: int = 0

    # -- search ---------------------------------------------------------------

    def move_next(self) -> bool:
        """Advance to the next position in depth-first order.

        Tries the directions after the cursor; when none works, undoes the
        last move and carries on from the direction that was undone.
        Returns False once the whole search space has been tried.
        """
        board = self.board
        while True:
            while self.cursor < STOP:
                self.cursor += 1
                if self.cursor < STOP and board.move(SEARCH_ORDER[self.cursor]):
                    return True

            last = board.peek_step()
            if last is None:
                return False
            board.undo()
            self.cursor = SEARCH_ORDER.index(last.direction)

    def step(self) -> bool:
        """Make one search step.  Returns False when the search is exhausted."""
        if not self.move_next():
            return False
        self.steps_taken += 1
        # A dead end makes the next call backtrack immediately.
        self.cursor = STOP if is_deadlocked(self.board) else START
        if self.steps_taken % _PROGRESS_EVERY == 0:
            logger.debug(
                "Search step %d, depth %d", self.steps_taken, self.board.move_count
            )
        return True

    def solve(self, is_cancelled: Canceller | None = None) -> SolveOutcome:
        """Search until solved, exhausted or cancelled.

        *is_cancelled* is polled once per step, after the solved check.  A
        cancelled search leaves the board at the position it reached, history
        intact.
        """
        is_cancelled = is_cancelled or _never
        while True:
            # A solved board wins over a pending cancel or a spent budget.
            if self.board.is_solved():
                outcome = SolveOutcome.SOLVED
                break
            if is_cancelled():
                outcome = SolveOutcome.CANCELLED
                break
            if self.max_steps is not None and self.steps_taken >= self.max_steps:
                logger.info("Step budget of %d exhausted", self.max_steps)
                outcome = SolveOutcome.CANCELLED
                break
            if not self.step():
                outcome = SolveOutcome.EXHAUSTED
                break
            if self.step_delay:
                time.sleep(self.step_delay)

        logger.info(
            "Search %s after %d steps (%d moves on the stack)",
            outcome,
            self.steps_taken,
            self.board.move_count,
        )
        return outcome

    @property
    def solution(self) -> str:
        return self.board.solution()


# -- collaborator API ---------------------------------------------------------


def solve(board: Board, is_cancelled: Canceller | None = None, **options: Any) -> bool:
    """Solve *board* in place.  Returns True if it ends up solved.

    Keyword *options* are passed on to :class:`Solver`.
    """
    return Solver(board, **options).solve(is_cancelled) is SolveOutcome.SOLVED


def solution(board: Board) -> str:
    return board.solution()


def replay(board: Board, moves: str) -> None:
    """Apply a solution string such as ``"lUrrD"`` to *board*.

    Raises ``ValueError`` when a move is blocked or when its case does not
    match whether it pushed a box.  Moves before the failing one stay applied.
    """
    for i, ch in enumerate(moves):
        direction = Direction.from_letter(ch)
        if not board.move(direction):
            raise ValueError(f"Move {i} ({ch!r}) is blocked at {board.worker}")
        step = board.peek_step()
        if step is not None and step.box_moved != ch.isupper():
            raise ValueError(
                f"Move {i} ({ch!r}) {'pushed' if step.box_moved else 'did not push'} a box"
            )
