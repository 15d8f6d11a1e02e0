"""Rules that narrow generic ship squares to specific shapes."""

from __future__ import annotations

import logging

from battleships.engine.board import Board
from battleships.engine.errors import ContradictionError
from battleships.engine.layout import Axis, Coordinate, Direction
from battleships.engine.square import ShipShape, Square

logger = logging.getLogger(__name__)

ANY_SHIP = Square.ship(ShipShape.ANY)
ANY_MIDDLE = Square.ship(ShipShape.ANY_MIDDLE)


def _shape_fits(board: Board, coord: Coordinate, shape: ShipShape) -> bool:
    layout = board.layout
    # Ship neighbours must exist: a RIGHT_END in column 0 has nowhere for its ship to go.
    for direction in shape.ship_neighbors:
        neighbour = layout.neighbor(coord, direction)
        if neighbour is None or not board[neighbour].is_ship:
            return False
    return all(board[neighbour].is_water for neighbour in layout.neighbors(coord, shape.water_neighbors))


def best_shape_for(board: Board, coord: Coordinate) -> ShipShape | None:
    """Return the resolved shape whose neighbour pattern the board already shows.

    Every pair of resolved shapes disagrees on at least one neighbour, so at
    most one can fit. None means the neighbours are not settled yet.
    """
    for shape in ShipShape.resolved():
        if _shape_fits(board, coord, shape):
            return shape
    return None


def refine_ship_squares(board: Board) -> None:
    """Upgrade ``ANY`` squares whose surroundings pin down their shape."""
    for coord in board.layout.all_coordinates():
        if board[coord] != ANY_SHIP:
            continue
        shape = best_shape_for(board, coord)
        if shape is not None:
            board.set(coord, Square.ship(shape))


def _middle_possible(board: Board, coord: Coordinate, axis: Axis) -> bool:
    """Could the middle at ``coord`` run along ``axis`` (``Axis.ROW`` = vertically)?"""
    layout = board.layout
    if axis is Axis.ROW:
        along, across = (Direction.N, Direction.S), (Direction.E, Direction.W)
    else:
        along, across = (Direction.E, Direction.W), (Direction.N, Direction.S)

    if any(board[neighbour].is_ship for neighbour in layout.neighbors(coord, across)):
        return False

    needed = 0
    for direction in along:
        neighbour = layout.neighbor(coord, direction)
        if neighbour is None or board[neighbour].is_water:
            return False
        if not board[neighbour].is_ship:
            needed += 1
    # The middle lies in one column when vertical, one row when horizontal.
    line = coord.row_or_col(axis.cross())
    return needed <= board.ship_squares_remaining(line)


def specify_middles(board: Board) -> None:
    """Orient each ``ANY_MIDDLE`` square once only one orientation is still possible."""
    coords = [coord for coord in board.layout.all_coordinates() if board[coord] == ANY_MIDDLE]
    for coord in coords:
        vertical = _middle_possible(board, coord, Axis.ROW)
        horizontal = _middle_possible(board, coord, Axis.COL)
        if vertical and horizontal:
            continue
        if vertical:
            board.set(coord, Square.ship(ShipShape.VERTICAL_MIDDLE))
        elif horizontal:
            board.set(coord, Square.ship(ShipShape.HORIZONTAL_MIDDLE))
        else:
            logger.error("middle_cannot_be_oriented", extra={"row": coord.row, "col": coord.col})
            raise ContradictionError(
                f"Middle square at (row={coord.row}, col={coord.col}) fits neither "
                "vertically nor horizontally."
            )
