"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from sokoban.models.board import Board


class GameState:
    """Holds the current board and the elapsed time.

    The clock stops by itself when the board becomes solved and starts again
    if a move is undone afterwards.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True
        board.subscribe(self._on_board_change)

    def close(self) -> None:
        """Stop listening to the board."""
        self.board.unsubscribe(self._on_board_change)

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    def restart_clock(self) -> None:
        self._start_time = time.time()
        self._elapsed_banked = 0.0
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    # -- board ----------------------------------------------------------------

    @property
    def moves(self) -> int:
        return self.board.move_count

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()

    def _on_board_change(self, board: Board, change: str) -> None:
        if change == "reset":
            self.restart_clock()
        elif board.is_solved():
            self.pause()
        else:
            self.resume()
