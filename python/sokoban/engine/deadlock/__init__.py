from sokoban.engine.deadlock.detector import (
    cannot_push,
    has_frozen_box,
    has_repeated_position,
    is_deadlocked,
    is_frozen,
)

__all__ = [
    "cannot_push",
    "has_frozen_box",
    "has_repeated_position",
    "is_deadlocked",
    "is_frozen",
]
