"""Sokoban puzzle engine.

Parses text levels, applies and undoes moves, detects deadlocks and searches
for solutions.
"""

from sokoban.errors import InvalidMoveError, ParseError
from sokoban.models import Board, Cell, Direction, UndoStep
from sokoban.engine.deadlock import is_deadlocked
from sokoban.engine.gamesolver import SolveOutcome, Solver, replay, solution, solve
from sokoban.engine.levelparser import parse_level

__all__ = [
    "Board",
    "Cell",
    "Direction",
    "InvalidMoveError",
    "ParseError",
    "SolveOutcome",
    "Solver",
    "UndoStep",
    "is_deadlocked",
    "parse_level",
    "replay",
    "solution",
    "solve",
]
