"""Board model for the Sokoban puzzle."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum

from sokoban.errors import InvalidMoveError
from sokoban.models.cell import Cell, is_empty, render_rows


class Direction(StrEnum):
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"

    @property
    def delta(self) -> tuple[int, int]:
        """``(dx, dy)`` for one step; y grows downwards."""
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def letter(self) -> str:
        return self.value[0]

    @classmethod
    def from_letter(cls, ch: str) -> Direction:
        """Map a solution character (``l u r d``, any case) to a direction."""
        for direction in cls:
            if direction.letter == ch.lower():
                return direction
        raise InvalidMoveError(f"Not a move character: {ch!r}")


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.LEFT: Direction.RIGHT,
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
}


@dataclass(frozen=True)
class UndoStep:
    """One applied move.

    ``snapshot`` is the letter rendering of the board *before* the move.  It
    is history data for cycle detection, never used to restore the board.
    """

    direction: Direction
    box_moved: bool
    snapshot: str

    def to_char(self) -> str:
        ch = self.direction.letter
        return ch.upper() if self.box_moved else ch


BoardListener = Callable[["Board", str], None]


class Board:
    """Mutable Sokoban grid with the worker position and move history.

    Tiles are stored row-major as ``tiles[y][x]``.  Boards are normally
    created through :func:`sokoban.engine.levelparser.parse_level`, which
    validates the level; the constructor only checks the grid shape.

    The history stack serves three purposes: undo log, depth-first search
    stack for the solver and set of visited positions for cycle detection.
    """

    def __init__(self, tiles: Sequence[Sequence[Cell]], worker: tuple[int, int]) -> None:
        self.tiles: list[list[Cell]] = []
        self.width: int = 0
        self.height: int = 0
        self.worker: tuple[int, int] = (0, 0)
        self._steps: list[UndoStep] = []
        self._snapshots: Counter[str] = Counter()
        self._listeners: list[BoardListener] = []
        self.reset(tiles, worker)

    # -- construction ---------------------------------------------------------

    def reset(self, tiles: Sequence[Sequence[Cell]], worker: tuple[int, int]) -> None:
        """Replace the grid and discard the move history."""
        rows = [list(row) for row in tiles]
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("Board tiles must form a non-empty rectangle.")
        x, y = worker
        if not (0 <= y < len(rows) and 0 <= x < len(rows[0])) or Cell.WORKER not in rows[y][x]:
            raise ValueError(f"No worker at {worker}.")

        self.tiles = rows
        self.width = len(rows[0])
        self.height = len(rows)
        self.worker = (x, y)
        self._steps.clear()
        self._snapshots.clear()
        self._notify("reset")

    # -- observers ------------------------------------------------------------

    def subscribe(self, listener: BoardListener) -> None:
        """Call *listener* with ``(board, change)`` after every mutation.

        ``change`` is one of ``"move"``, ``"undo"`` or ``"reset"``.
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener: BoardListener) -> None:
        self._listeners.remove(listener)

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            listener(self, change)

    # -- queries --------------------------------------------------------------

    def get_cell(self, x: int, y: int) -> Cell:
        if not 0 <= x < self.width:
            raise IndexError(f"x={x} outside [0, {self.width})")
        if not 0 <= y < self.height:
            raise IndexError(f"y={y} outside [0, {self.height})")
        return self.tiles[y][x]

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in grid order (row by row)."""
        for row in self.tiles:
            yield from row

    def is_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def is_solved(self) -> bool:
        """Check if every place holds a box."""
        return all(Cell.BOX in kind for kind in self.cells() if Cell.PLACE in kind)

    def render(self, letters: bool = False) -> str:
        return render_rows(self.tiles, letters)

    @property
    def move_count(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> tuple[UndoStep, ...]:
        """The move history, oldest first."""
        return tuple(self._steps)

    def solution(self) -> str:
        """Render the history as ``lurd`` characters, upper-cased for pushes."""
        return "".join(step.to_char() for step in self._steps)

    # -- history --------------------------------------------------------------

    def push_step(self, step: UndoStep) -> None:
        self._steps.append(step)
        self._snapshots[step.snapshot] += 1

    def pop_step(self) -> UndoStep:
        if not self._steps:
            raise IndexError("pop from empty move history")
        step = self._steps.pop()
        self._snapshots[step.snapshot] -= 1
        if not self._snapshots[step.snapshot]:
            del self._snapshots[step.snapshot]
        return step

    def peek_step(self) -> UndoStep | None:
        return self._steps[-1] if self._steps else None

    def has_snapshot(self, snapshot: str) -> bool:
        """Return True if a position rendered as *snapshot* is in the history."""
        return snapshot in self._snapshots

    # -- moves ----------------------------------------------------------------

    def move(self, direction: Direction | str) -> bool:
        """Move the worker one cell, pushing a box if there is one.

        Returns False, leaving the board untouched, when the move is blocked.
        """
        direction = _as_direction(direction)
        dx, dy = direction.delta
        x, y = self.worker
        nx, ny = x + dx, y + dy
        if not self.is_interior(nx, ny):
            return False

        target = self.tiles[ny][nx]
        if is_empty(target):
            snapshot = self.render(letters=True)
            self._walk(nx, ny)
            self.push_step(UndoStep(direction, False, snapshot))
            self._notify("move")
            return True

        if Cell.BOX in target:
            bx, by = nx + dx, ny + dy
            if not self.is_interior(bx, by) or not is_empty(self.tiles[by][bx]):
                return False
            snapshot = self.render(letters=True)
            self._clear(nx, ny, Cell.BOX)
            self._set(bx, by, Cell.BOX)
            self._walk(nx, ny)
            self.push_step(UndoStep(direction, True, snapshot))
            self._notify("move")
            return True

        return False

    def undo(self) -> UndoStep | None:
        """Reverse the last move.  Does nothing if there is no history."""
        if not self._steps:
            return None

        step = self.pop_step()
        dx, dy = step.direction.delta
        x, y = self.worker
        self._walk(x - dx, y - dy)
        if step.box_moved:
            self._clear(x + dx, y + dy, Cell.BOX)
            self._set(x, y, Cell.BOX)
        self._notify("undo")
        return step

    # -- helpers --------------------------------------------------------------

    def _walk(self, x: int, y: int) -> None:
        wx, wy = self.worker
        self._clear(wx, wy, Cell.WORKER)
        self._set(x, y, Cell.WORKER)
        self.worker = (x, y)

    def _set(self, x: int, y: int, flag: Cell) -> None:
        self.tiles[y][x] = Cell(self.tiles[y][x] | flag)

    def _clear(self, x: int, y: int, flag: Cell) -> None:
        self.tiles[y][x] = Cell(self.tiles[y][x] & ~flag)


def _as_direction(value: Direction | str) -> Direction:
    try:
        return Direction(value)
    except ValueError:
        raise InvalidMoveError(f"Not a move direction: {value!r}") from None
