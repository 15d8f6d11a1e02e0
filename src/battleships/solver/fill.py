"""Rules that fill whole rows and columns from their counts."""

from __future__ import annotations

from battleships.engine.board import Board
from battleships.engine.square import UNKNOWN, WATER, ShipShape, Square


def fill_with_water(board: Board) -> None:
    """A row or column with no ship squares left is water wherever still unknown."""
    for row_or_col in board.layout.rows_and_cols():
        if board.ship_squares_remaining(row_or_col) == 0:
            board.replace_unknown(row_or_col, WATER)


def fill_with_ships(board: Board) -> None:
    """If a row or column has exactly as many unknowns as ship squares left, they are all ships."""
    for row_or_col in board.layout.rows_and_cols():
        remaining = board.ship_squares_remaining(row_or_col)
        if remaining == 0:
            continue
        num_unknown = sum(
            1 for coord in board.layout.coordinates_for(row_or_col) if board[coord] == UNKNOWN
        )
        if num_unknown == remaining:
            board.replace_unknown(row_or_col, Square.ship(ShipShape.ANY))
