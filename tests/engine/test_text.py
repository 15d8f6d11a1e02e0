"""Tests for the plain-text board format."""

import pytest

from battleships.engine.errors import BoardParseError
from battleships.engine.layout import Coordinate
from battleships.engine.square import UNKNOWN, WATER, ShipShape, Square
from battleships.engine.text import board_lines, format_board, format_manifest, parse_board


def test_parse_board_without_manifest() -> None:
    board = parse_board("  123\n1|~  \n2|  *\n")
    assert board.layout.num_rows == 2
    assert board.layout.num_cols == 3
    assert board.ship_squares_remaining_for_col == (1, 2, 3)
    assert board.ship_squares_remaining_for_row == (1, 2)
    assert board[Coordinate(0, 0)] == WATER
    assert board[Coordinate(0, 1)] == UNKNOWN
    assert board[Coordinate(1, 2)] == Square.ship(ShipShape.ANY)
    assert board.ship_sizes() == []
    assert format_manifest(board) is None


def test_parse_board_with_manifest() -> None:
    board = parse_board("ships: 2sq x 1, 1sq x 3.\n  123\n1|~  \n2|  *\n")
    assert board.ships_to_find_for_size(3) == 0
    assert board.ships_to_find_for_size(2) == 1
    assert board.ships_to_find_for_size(1) == 3


def test_parse_five_ship_sizes() -> None:
    board = parse_board(
        "ships: 5sq x 1, 4sq x 1, 3sq x 2, 2sq x 3, 1sq x 4.\n  00000\n0|     \n"
    )
    assert board.ship_sizes() == [5, 4, 3, 2, 1]
    assert [board.ships_to_find_for_size(size) for size in board.ship_sizes()] == [1, 1, 2, 3, 4]


def test_manifest_may_wrap_lines() -> None:
    board = parse_board("ships: 5sq x 1,\n\t4sq x 2.\n  00\n0|  \n")
    assert board.ships_to_find_for_size(5) == 1
    assert board.ships_to_find_for_size(4) == 2


def test_manifest_is_printed_largest_first() -> None:
    board = parse_board("ships: 1sq x 2, 4sq x 1.\n  00\n0|  \n")
    assert format_manifest(board) == "ships: 4sq x 1, 1sq x 2."


def test_end_marker_is_accepted() -> None:
    board = parse_board("  123\n1|~  \n2|  *\n.")
    assert board.layout.num_rows == 2
    assert format_board(board) == "  123\n1|~  \n2|  *\n"


def test_round_trip_keeps_text() -> None:
    text = "ships: 4sq x 1, 1sq x 2.\n  01111\n4|~    \n0|~~~~~\n"
    assert format_board(parse_board(text)) == text

    every_char = "  000000000\n0| ~*•<>^v|\n0|-☐       \n"
    assert format_board(parse_board(every_char)) == every_char


def test_found_ships_are_taken_off_the_written_manifest() -> None:
    board = parse_board("ships: 1sq x 2.\n  001\n1|•~ \n")
    assert board.ships_to_find_for_size(1) == 1
    assert format_board(board) == "ships: 1sq x 1.\n  001\n1|•~ \n"

    board = parse_board("ships: 1sq x 1.\n  000\n0|•~ \n")
    assert board.ships_to_find_for_size(1) == 0
    assert format_board(board) == "ships: 1sq x 0.\n  000\n0|•~ \n"


def test_board_lines_have_no_terminators() -> None:
    board = parse_board("  0011\n0|~*  \n2|~*  \n")
    assert board_lines(board) == ["  0011", "0|~*  ", "2|~*  "]


def test_crlf_line_endings() -> None:
    board = parse_board("  01\r\n0|~ \r\n")
    assert board.layout.num_cols == 2


@pytest.mark.parametrize(
    ("text", "line_number"),
    [
        ("  12\n1|~ \n2|~\n", 3),
        ("  12\n1|~x\n", 2),
        ("  12\n1~~\n", 2),
        ("ships: 2sq x 1\n  12\n1|~~\n", 1),
        ("ships: 2sq y 1.\n  12\n1|~~\n", 1),
        ("ships: 2sq x 1, 2sq x 2.\n  12\n1|~~\n", 1),
        ("  1a\n1|~~\n", 1),
        (" 12\n1|~~\n", 1),
        ("  12\n", 1),
        ("  12\n1|~~\n.\n1|~~\n", 3),
    ],
)
def test_parse_errors_carry_line_numbers(text: str, line_number: int) -> None:
    with pytest.raises(BoardParseError) as excinfo:
        parse_board(text)
    assert excinfo.value.line_number == line_number
    assert str(excinfo.value).startswith(f"line {line_number}:")


def test_empty_text_is_an_error() -> None:
    with pytest.raises(BoardParseError):
        parse_board("\n\n")
    with pytest.raises(BoardParseError):
        parse_board("ships: 1sq x 1.\n")
