"""Rule that extends ships from their end caps."""

from __future__ import annotations

from battleships.engine.board import Board
from battleships.engine.square import END_OPENINGS

from .surround import require_ship_at


def place_ships_next_to_ends(board: Board) -> None:
    """The square on the open side of an end cap is part of the same ship.

    A ``<`` at the right edge of the grid has nowhere to go and raises
    :class:`~battleships.engine.errors.ContradictionError`.
    """
    ends = [
        (coord, END_OPENINGS[board[coord].shape])
        for coord in board.layout.all_coordinates()
        if board[coord].shape in END_OPENINGS
    ]
    for coord, direction in ends:
        require_ship_at(board, coord, direction)
