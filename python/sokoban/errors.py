"""Exceptions raised by the Sokoban engine."""

from __future__ import annotations


class ParseError(ValueError):
    """A level description was rejected. No board is created."""


class EmptyDescriptionError(ParseError):
    def __init__(self) -> None:
        super().__init__("Empty board description.")


class TooFewRowsError(ParseError):
    def __init__(self, rows: int) -> None:
        super().__init__(f"Board description has {rows} rows, need at least 3.")
        self.rows = rows


class TooFewColumnsError(ParseError):
    def __init__(self, columns: int) -> None:
        super().__init__(
            f"Board description has {columns} columns, need at least 3."
        )
        self.columns = columns


class InvalidCharacterError(ParseError):
    """Raised for a character outside the cell legend.

    ``x`` and ``y`` are filled in by the parser; a bare cell lookup leaves
    them as ``None``.
    """

    def __init__(self, char: str, x: int | None = None, y: int | None = None) -> None:
        where = "" if x is None else f" at ({x}, {y})"
        super().__init__(f"Unrecognized character {char!r}{where}.")
        self.char = char
        self.x = x
        self.y = y


class OccupiedBorderError(ParseError):
    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"Worker, box or place on the border at ({x}, {y}).")
        self.x = x
        self.y = y


class BoxPlaceMismatchError(ParseError):
    def __init__(self, boxes: int, places: int) -> None:
        super().__init__(
            f"Number of boxes ({boxes}) does not match number of places ({places})."
        )
        self.boxes = boxes
        self.places = places


class NoBoxesError(ParseError):
    def __init__(self) -> None:
        super().__init__("No boxes on board.")


class NoWorkerError(ParseError):
    def __init__(self) -> None:
        super().__init__("No worker on board.")


class MultipleWorkersError(ParseError):
    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"More than one worker on board (second at ({x}, {y})).")
        self.x = x
        self.y = y


class InvalidMoveError(ValueError):
    """Raised when something other than a ``Direction`` is applied to a board."""
