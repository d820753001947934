"""Deadlock detection: repeated positions and frozen boxes."""

from __future__ import annotations

import pytest

from sokoban.engine.deadlock import (
    cannot_push,
    has_frozen_box,
    has_repeated_position,
    is_deadlocked,
    is_frozen,
)
from sokoban.engine.levelparser import parse_level
from sokoban.models.board import Direction


def _level(*rows: str) -> str:
    return "\n".join(rows)


# -- frozen boxes -------------------------------------------------------------


def test_box_pushed_into_corner_is_deadlocked() -> None:
    board = parse_level(
        _level(
            "#####",
            "#   #",
            "#$ .#",
            "#  @#",
            "#####",
        )
    )
    assert board.move(Direction.LEFT)
    assert board.move(Direction.LEFT)
    assert not is_deadlocked(board)

    assert board.move(Direction.UP)

    assert has_frozen_box(board)
    assert is_frozen(board, 1, 1)
    assert is_deadlocked(board)


def test_box_along_one_wall_is_not_frozen() -> None:
    board = parse_level(
        _level(
            "#####",
            "#   #",
            "#$ .#",
            "#  @#",
            "#####",
        )
    )
    assert cannot_push(board, 1, 2, Direction.LEFT)
    assert not cannot_push(board, 1, 2, Direction.UP)
    assert not cannot_push(board, 1, 2, Direction.DOWN)
    assert not has_frozen_box(board)


def test_box_on_place_in_corner_is_fine() -> None:
    board = parse_level(_level("#####", "#*  #", "#  @#", "#####"))
    assert not has_frozen_box(board)
    assert not is_deadlocked(board)


def test_two_boxes_side_by_side_against_wall() -> None:
    board = parse_level(
        _level(
            "######",
            "# $$ #",
            "#..@ #",
            "######",
        )
    )
    # Each box holds the other in place along the wall.
    assert cannot_push(board, 2, 1, Direction.RIGHT)
    assert cannot_push(board, 3, 1, Direction.LEFT)
    assert has_frozen_box(board)


def test_neighbour_box_that_can_move_does_not_pin() -> None:
    board = parse_level(
        _level(
            "######",
            "#    #",
            "# $$ #",
            "#..@ #",
            "######",
        )
    )
    assert not cannot_push(board, 2, 2, Direction.RIGHT)
    assert not has_frozen_box(board)


def test_ring_of_boxes_terminates() -> None:
    board = parse_level(
        _level(
            "########",
            "#      #",
            "# $$   #",
            "# $$ @ #",
            "#  ....#",
            "########",
        )
    )
    # The chain of checks around the 2x2 block comes back to its start;
    # a box already on the chain does not count as pinning.
    assert has_frozen_box(board) is False


# -- repeated positions -------------------------------------------------------


def test_walking_back_and_forth_repeats_a_position() -> None:
    board = parse_level(
        _level(
            "######",
            "#    #",
            "# @$.#",
            "#    #",
            "######",
        )
    )
    assert board.move(Direction.LEFT)
    assert not has_repeated_position(board)

    assert board.move(Direction.RIGHT)

    assert has_repeated_position(board)
    assert is_deadlocked(board)


def test_undo_forgets_the_position() -> None:
    board = parse_level(_level("######", "#    #", "# @$.#", "#    #", "######"))
    board.move(Direction.LEFT)
    board.move(Direction.RIGHT)
    board.undo()
    assert not has_repeated_position(board)


def test_queries_do_not_mutate() -> None:
    board = parse_level(_level("######", "# $$ #", "#..@ #", "######"))
    before = (board.render(), board.worker, board.move_count)
    is_deadlocked(board)
    assert (board.render(), board.worker, board.move_count) == before


@pytest.mark.timeout(2)
def test_large_box_block_is_checked_quickly() -> None:
    # A 7x7 block of boxes in open space, 49 places below it.
    board = parse_level(
        _level(
            "#" * 13,
            "#@" + " " * 10 + "#",
            *["# " + "$" * 7 + " " * 3 + "#"] * 7,
            "#" + " " * 11 + "#",
            *["#" + "." * 11 + "#"] * 4,
            "#" + "." * 5 + " " * 6 + "#",
            "#" * 13,
        )
    )
    assert not has_frozen_box(board)


def test_shared_visit_set_is_filled_in_place() -> None:
    board = parse_level(_level("######", "# $$ #", "#..@ #", "######"))
    visited: set[tuple[int, int]] = set()
    assert cannot_push(board, 2, 1, Direction.RIGHT, visited)
    assert visited == {(3, 1)}
    # A box already examined no longer pins.
    assert not cannot_push(board, 2, 1, Direction.RIGHT, visited)
