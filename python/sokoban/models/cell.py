"""Cell kinds and their two textual encodings.

Every cell is a bit-set of ``Cell`` flags.  The legend below is the closed
table of valid combinations; each one has a *symbol* glyph (the classic
``#@$.`` notation) and a *letter* glyph that avoids punctuation::

    kind            symbol  letter
    EMPTY             ' '     ' '
    WALL              '#'     '#'
    WORKER            '@'     'p'
    WORKER | PLACE    '+'     'P'
    BOX               '$'     'b'
    BOX | PLACE       '*'     'B'
    PLACE             '.'     'o'
    EMPTY             '-'     '_'
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntFlag

from sokoban.errors import InvalidCharacterError


class Cell(IntFlag):
    EMPTY = 0
    WALL = 1  # never combined with other flags
    PLACE = 2
    WORKER = 4
    BOX = 8


@dataclass(frozen=True)
class CellLegend:
    kind: Cell
    symbol: str
    letter: str


LEGEND: tuple[CellLegend, ...] = (
    CellLegend(Cell.EMPTY, " ", " "),
    CellLegend(Cell.WALL, "#", "#"),
    CellLegend(Cell.WORKER, "@", "p"),
    CellLegend(Cell.WORKER | Cell.PLACE, "+", "P"),
    CellLegend(Cell.BOX, "$", "b"),
    CellLegend(Cell.BOX | Cell.PLACE, "*", "B"),
    CellLegend(Cell.PLACE, ".", "o"),
    CellLegend(Cell.EMPTY, "-", "_"),
)

_BY_CHAR: dict[str, Cell] = {}
_SYMBOLS: dict[Cell, str] = {}
_LETTERS: dict[Cell, str] = {}
for _entry in LEGEND:
    _BY_CHAR.setdefault(_entry.symbol, _entry.kind)
    _BY_CHAR.setdefault(_entry.letter, _entry.kind)
    # First entry wins, so the alternate empty glyphs render as a space.
    _SYMBOLS.setdefault(_entry.kind, _entry.symbol)
    _LETTERS.setdefault(_entry.kind, _entry.letter)
del _entry


# -- lookups ------------------------------------------------------------------


def from_char(ch: str) -> Cell:
    """Decode a single level character."""
    try:
        return _BY_CHAR[ch]
    except KeyError:
        raise InvalidCharacterError(ch) from None


def to_char(kind: Cell, letters: bool = False) -> str:
    table = _LETTERS if letters else _SYMBOLS
    try:
        return table[kind]
    except KeyError:
        raise ValueError(f"Incorrect cell kind {kind!r} encountered in board") from None


# -- predicates ---------------------------------------------------------------


def is_empty(kind: Cell) -> bool:
    """Return True if the worker or a box may enter a cell of this kind."""
    return kind == Cell.EMPTY or kind == Cell.PLACE


def has(kind: Cell, mask: Cell) -> bool:
    """Bit-mask containment, e.g. ``has(BOX | PLACE, BOX)`` is True."""
    return kind & mask == mask


def is_box_off_place(kind: Cell) -> bool:
    return kind & (Cell.BOX | Cell.PLACE) == Cell.BOX


# -- rendering ----------------------------------------------------------------


def render_row(row: Iterable[Cell], letters: bool = False) -> str:
    return "".join(to_char(kind, letters) for kind in row)


def render_rows(tiles: Sequence[Sequence[Cell]], letters: bool = False) -> str:
    """Render a grid, one line per row, each terminated by ``\\n``."""
    return "".join(render_row(row, letters) + "\n" for row in tiles)
