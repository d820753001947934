from sokoban.models.board import Board, Direction, UndoStep
from sokoban.models.cell import Cell

__all__ = ["Board", "Cell", "Direction", "UndoStep"]
