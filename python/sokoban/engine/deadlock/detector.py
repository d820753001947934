"""Early detection of positions that cannot lead to a solution.

Two independent tests are used:

* **cycle** - the current position already occurred earlier in the move
  history, so continuing from here only repeats work;
* **frozen box** - a box that is not on a place can no longer be pushed
  along either axis.

Both are pure queries; the board is never modified.
"""

from __future__ import annotations

from sokoban.models.board import Board, Direction
from sokoban.models.cell import Cell, is_box_off_place

_Visited = set[tuple[int, int]]


def is_deadlocked(board: Board) -> bool:
    return has_repeated_position(board) or has_frozen_box(board)


def has_repeated_position(board: Board) -> bool:
    return board.has_snapshot(board.render(letters=True))


def has_frozen_box(board: Board) -> bool:
    """Return True if any box off a place is pinned on both axes."""
    for y in range(1, board.height - 1):
        for x in range(1, board.width - 1):
            if is_box_off_place(board.get_cell(x, y)) and is_frozen(board, x, y):
                return True
    return False


def is_frozen(board: Board, x: int, y: int) -> bool:
    """Check whether the box at ``(x, y)`` is pinned vertically and horizontally."""
    visited: _Visited = {(x, y)}

    def pinned(direction: Direction) -> bool:
        return cannot_push(board, x, y, direction, visited)

    return (pinned(Direction.UP) or pinned(Direction.DOWN)) and (
        pinned(Direction.LEFT) or pinned(Direction.RIGHT)
    )


def cannot_push(
    board: Board,
    x: int,
    y: int,
    direction: Direction,
    visited: _Visited | None = None,
) -> bool:
    """Return True if the box at ``(x, y)`` is blocked in *direction*.

    A wall beyond the box blocks it.  A neighbouring box blocks it when that
    box is itself pinned on both axes, where the side facing back towards
    ``(x, y)`` counts as pinned.  *visited* collects every box examined during
    one check and is updated in place; reaching one of them again does not
    block, so each box is expanded at most once.
    """
    dx, dy = direction.delta
    nx, ny = x + dx, y + dy
    kind = board.get_cell(nx, ny)

    if kind == Cell.WALL:
        return True
    if visited is None:
        visited = set()
    if Cell.BOX not in kind or (nx, ny) in visited:
        return False

    visited.add((nx, ny))
    back = direction.opposite

    def pinned(toward: Direction) -> bool:
        return toward is back or cannot_push(board, nx, ny, toward, visited)

    return (pinned(Direction.UP) or pinned(Direction.DOWN)) and (
        pinned(Direction.LEFT) or pinned(Direction.RIGHT)
    )
