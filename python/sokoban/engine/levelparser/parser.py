"""Builds validated boards from textual level descriptions."""

from __future__ import annotations

import logging
import re

from sokoban.errors import (
    BoxPlaceMismatchError,
    EmptyDescriptionError,
    InvalidCharacterError,
    MultipleWorkersError,
    NoBoxesError,
    NoWorkerError,
    OccupiedBorderError,
    TooFewColumnsError,
    TooFewRowsError,
)
from sokoban.models.board import Board
from sokoban.models.cell import Cell, from_char

logger = logging.getLogger(__name__)

MIN_SIZE = 3

# Rows end with a newline; "|" is accepted as an alternate separator so a
# level fits on a single line.
_ROW_SEPARATOR = re.compile(r"\r?\n|\|")


def split_rows(text: str) -> list[str]:
    """Split a level description into rows, ignoring trailing line breaks."""
    return _ROW_SEPARATOR.split(text.rstrip("\r\n"))


def parse_grid(text: str | None) -> tuple[list[list[Cell]], tuple[int, int]]:
    """Decode and validate *text*.

    Returns ``(tiles, worker)`` where ``tiles[y][x]`` holds the cell kinds and
    ``worker`` is the ``(x, y)`` of the single worker.  Raises a
    :class:`~sokoban.errors.ParseError` subclass if the description is not a
    valid level.
    """
    if not text:
        raise EmptyDescriptionError()

    rows = split_rows(text)
    height = len(rows)
    if height < MIN_SIZE:
        raise TooFewRowsError(height)
    width = max(len(row) for row in rows)
    if width < MIN_SIZE:
        raise TooFewColumnsError(width)

    tiles: list[list[Cell]] = []
    worker: tuple[int, int] | None = None
    boxes = 0
    places = 0

    for y, row in enumerate(rows):
        line: list[Cell] = []
        for x, ch in enumerate(row):
            try:
                kind = from_char(ch)
            except InvalidCharacterError:
                raise InvalidCharacterError(ch, x, y) from None

            if kind not in (Cell.EMPTY, Cell.WALL) and _on_border(x, y, width, height):
                raise OccupiedBorderError(x, y)
            if Cell.WORKER in kind:
                if worker is not None:
                    raise MultipleWorkersError(x, y)
                worker = (x, y)
            if Cell.BOX in kind:
                boxes += 1
            if Cell.PLACE in kind:
                places += 1
            line.append(kind)

        # Short rows are padded with empty cells on the right.
        line.extend([Cell.EMPTY] * (width - len(line)))
        tiles.append(line)

    if boxes != places:
        raise BoxPlaceMismatchError(boxes, places)
    if boxes == 0:
        raise NoBoxesError()
    if worker is None:
        raise NoWorkerError()

    logger.debug("Parsed %dx%d level with %d boxes", width, height, boxes)
    return tiles, worker


def parse_level(text: str | None) -> Board:
    """Parse *text* into a new :class:`Board` with an empty history."""
    tiles, worker = parse_grid(text)
    return Board(tiles, worker)


def _on_border(x: int, y: int, width: int, height: int) -> bool:
    return x == 0 or y == 0 or x == width - 1 or y == height - 1
