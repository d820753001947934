from sokoban.engine.gamesolver.solver import (
    SEARCH_ORDER,
    SolveOutcome,
    Solver,
    replay,
    solution,
    solve,
)

__all__ = ["SEARCH_ORDER", "SolveOutcome", "Solver", "replay", "solution", "solve"]
