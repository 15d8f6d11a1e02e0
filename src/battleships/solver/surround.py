"""Rules that fill in the squares around known ship squares."""

from __future__ import annotations

import logging

from battleships.engine.board import Board
from battleships.engine.errors import ContradictionError
from battleships.engine.layout import Coordinate, Direction
from battleships.engine.square import WATER, ShipShape, Square

logger = logging.getLogger(__name__)

_MIDDLE_EXTENSIONS: dict[ShipShape, tuple[Direction, Direction]] = {
    ShipShape.VERTICAL_MIDDLE: (Direction.N, Direction.S),
    ShipShape.HORIZONTAL_MIDDLE: (Direction.E, Direction.W),
}


def surround_with_water(board: Board) -> None:
    """Set the water neighbours of every ship square to water."""
    layout = board.layout
    water_coords: list[Coordinate] = []
    for coord in layout.all_coordinates():
        shape = board[coord].shape
        if shape is not None:
            water_coords.extend(layout.neighbors(coord, shape.water_neighbors))

    for coord in water_coords:
        board.set(coord, WATER)


def require_ship_at(board: Board, coord: Coordinate, direction: Direction) -> None:
    """Make the neighbour of ``coord`` in ``direction`` a ship square.

    Unknown squares become ``ANY``; existing ship squares are left alone. A
    neighbour that is off the grid or already water cannot hold the rest of
    the ship and raises :class:`ContradictionError`.
    """
    source = board[coord]
    neighbour = board.layout.neighbor(coord, direction)
    if neighbour is None or board[neighbour].is_water:
        where = "off the grid" if neighbour is None else "water"
        logger.error(
            "forced_ship_square_unavailable",
            extra={
                "row": coord.row,
                "col": coord.col,
                "square": source.char,
                "direction": direction.name,
                "reason": where,
            },
        )
        raise ContradictionError(
            f"Square {source.char!r} at (row={coord.row}, col={coord.col}) needs a ship "
            f"square to the {direction.name}, but that square is {where}."
        )
    if not board[neighbour].is_ship:
        board.set(neighbour, Square.ship(ShipShape.ANY))


def surround_middles_with_ships(board: Board) -> None:
    """A resolved middle has ship squares on both sides along its orientation."""
    middles = [
        (coord, _MIDDLE_EXTENSIONS[board[coord].shape])
        for coord in board.layout.all_coordinates()
        if board[coord].shape in _MIDDLE_EXTENSIONS
    ]
    for coord, directions in middles:
        for direction in directions:
            require_ship_at(board, coord, direction)
