"""Level parsing and validation."""

from __future__ import annotations

import pytest

from sokoban.engine.levelparser import parse_grid, parse_level, split_rows
from sokoban.errors import (
    BoxPlaceMismatchError,
    EmptyDescriptionError,
    InvalidCharacterError,
    MultipleWorkersError,
    NoBoxesError,
    NoWorkerError,
    OccupiedBorderError,
    ParseError,
    TooFewColumnsError,
    TooFewRowsError,
)
from sokoban.levels import BUILTIN_LEVELS, MICROCOSMOS, STARTER
from sokoban.models.cell import Cell


def _level(*rows: str) -> str:
    return "\n".join(rows)


# -- valid levels -------------------------------------------------------------


def test_starter_level() -> None:
    board = parse_level(STARTER)
    assert (board.width, board.height) == (5, 3)
    assert board.worker == (1, 1)
    assert board.get_cell(2, 1) == Cell.BOX
    assert board.get_cell(3, 1) == Cell.PLACE
    assert board.move_count == 0


def test_short_rows_are_padded_with_empty_cells() -> None:
    board = parse_level(MICROCOSMOS)
    assert (board.width, board.height) == (9, 9)
    assert board.worker == (4, 3)
    assert board.get_cell(7, 0) == Cell.EMPTY
    assert board.get_cell(8, 8) == Cell.EMPTY
    assert board.render().splitlines()[0] == "  #####  "


def test_alternate_row_separator_and_letter_glyphs() -> None:
    board = parse_level("#####|#pbo#|#####")
    assert board.render() == parse_level(STARTER).render()


def test_alternate_empty_glyph() -> None:
    board = parse_level(_level("#####", "#@$.#", "#-_-#", "#####"))
    assert board.render().splitlines()[2] == "#   #"


def test_trailing_line_breaks_are_ignored() -> None:
    assert split_rows("###\n#@#\n###\n\n") == ["###", "#@#", "###"]
    board = parse_level(STARTER + "\n")
    assert board.height == 3


def test_windows_line_endings() -> None:
    board = parse_level(STARTER.replace("\n", "\r\n"))
    assert board.render() == parse_level(STARTER).render()


def test_parse_grid_returns_tiles_and_worker() -> None:
    tiles, worker = parse_grid(STARTER)
    assert worker == (1, 1)
    assert tiles[1] == [Cell.WALL, Cell.WORKER, Cell.BOX, Cell.PLACE, Cell.WALL]


@pytest.mark.parametrize("letters", [False, True], ids=["symbols", "letters"])
@pytest.mark.parametrize("name", sorted(BUILTIN_LEVELS))
def test_render_round_trip(name: str, letters: bool) -> None:
    board = parse_level(BUILTIN_LEVELS[name])
    text = board.render(letters=letters)

    again = parse_level(text)

    assert again.render(letters=letters) == text
    assert again.tiles == board.tiles
    assert again.worker == board.worker


# -- rejected levels ----------------------------------------------------------


@pytest.mark.parametrize("text", [None, ""])
def test_empty_description(text) -> None:
    with pytest.raises(EmptyDescriptionError):
        parse_grid(text)


def test_too_few_rows() -> None:
    with pytest.raises(TooFewRowsError) as info:
        parse_level(_level("#####", "#@$.#"))
    assert info.value.rows == 2


def test_too_few_columns() -> None:
    with pytest.raises(TooFewColumnsError):
        parse_level(_level("##", "##", "##"))


def test_invalid_character_reports_position() -> None:
    with pytest.raises(InvalidCharacterError) as info:
        parse_level(_level("#####", "#@$x#", "#####"))
    assert (info.value.char, info.value.x, info.value.y) == ("x", 3, 1)


def test_place_on_border() -> None:
    with pytest.raises(OccupiedBorderError) as info:
        parse_level(_level("#.###", "#@$ #", "#####"))
    assert (info.value.x, info.value.y) == (1, 0)


def test_worker_on_padded_right_edge() -> None:
    with pytest.raises(OccupiedBorderError):
        parse_level(_level("#####", "#$. @", "#####"))


def test_box_place_mismatch() -> None:
    with pytest.raises(BoxPlaceMismatchError) as info:
        parse_level(_level("#######", "#@$$$.#", "#  .  #", "#######"))
    assert (info.value.boxes, info.value.places) == (3, 2)


def test_no_boxes() -> None:
    with pytest.raises(NoBoxesError):
        parse_level(_level("#####", "#@  #", "#####"))


def test_no_worker() -> None:
    with pytest.raises(NoWorkerError):
        parse_level(_level("#####", "# $.#", "#####"))


def test_multiple_workers() -> None:
    with pytest.raises(MultipleWorkersError) as info:
        parse_level(_level("######", "#@@$.#", "######"))
    assert (info.value.x, info.value.y) == (2, 1)


def test_all_errors_are_parse_errors() -> None:
    with pytest.raises(ParseError):
        parse_level(_level("#####", "# $.#", "#####"))
    with pytest.raises(ValueError):
        parse_level("")
