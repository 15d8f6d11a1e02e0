"""The "only place it can go" rule.

For every ship size still to be found, enumerate every placement that is
consistent with the board. When there are exactly as many placements as
ships, each placement is a ship. Otherwise, overlapping placements are
grouped. When there are as many groups as ships and no group has room for
two of them, each group holds exactly one ship and the squares shared by
every placement in a group are ship squares.

The room-for-two check is stricter than plain "one ship per group". If one
group could take two ships, any other group may be the one left empty, so
none of their shared squares are certain. The roomy group itself gains
nothing either: two placements that can both be ships share no squares.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TypeVar

from battleships.engine.board import Board
from battleships.engine.errors import ContradictionError
from battleships.engine.layout import Coordinate, Direction, Layout
from battleships.engine.ship import Ship
from battleships.engine.square import UNKNOWN, ShipShape, Square

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_DIRECTIONS = tuple(Direction)


def occupied_squares(board: Board, ship: Ship) -> int | None:
    """Return how many squares of ``ship`` are already ship squares.

    Returns None if the ship cannot go here: it runs off the grid, a square
    holds water or an incompatible shape, or every square already matches
    exactly (the ship has already been found).
    """
    coords = board.layout.ship_coordinates(ship)
    if coords is None:
        return None

    num_ship_squares = 0
    all_exact = True
    for index, coord in enumerate(coords):
        square = board[coord]
        expected = ship.expected_shape(index)
        exact = square.shape is expected
        compatible = (
            exact
            or square == UNKNOWN
            or square.shape is ShipShape.ANY
            or (square.shape is ShipShape.ANY_MIDDLE and expected.is_middle)
        )
        if not compatible:
            return None
        all_exact = all_exact and exact
        if square.is_ship:
            num_ship_squares += 1

    if all_exact:
        return None
    return num_ship_squares


def is_clear_of_other_ships(board: Board, ship: Ship) -> bool:
    """False if placing ``ship`` would make it touch another ship, diagonally or end to end."""
    layout = board.layout
    for index, coord in enumerate(ship.coordinates()):
        water_neighbors = ship.expected_shape(index).water_neighbors
        if any(board[neighbour].is_ship for neighbour in layout.neighbors(coord, water_neighbors)):
            return False
    return True


def enough_on_constant_axis(board: Board, ship: Ship, num_ship_squares: int) -> bool:
    """The ship's row (or column) must still have room for the squares it would add."""
    line = ship.origin.row_or_col(ship.constant_axis)
    return board.ship_squares_remaining(line) >= ship.size - num_ship_squares


def enough_on_incrementing_axis(board: Board, ship: Ship) -> bool:
    """Each square the ship would add needs a free ship square in its own column (or row)."""
    return all(
        board[coord].is_ship or board.ship_squares_remaining(coord.row_or_col(ship.axis)) >= 1
        for coord in ship.coordinates()
    )


def feasible_placements(board: Board, size: int) -> list[Ship]:
    """Every placement of a ``size`` ship that the current board allows."""
    placements = []
    for ship in board.layout.possible_ship_origins(size):
        num_ship_squares = occupied_squares(board, ship)
        if num_ship_squares is None:
            continue
        if (
            is_clear_of_other_ships(board, ship)
            and enough_on_constant_axis(board, ship, num_ship_squares)
            and enough_on_incrementing_axis(board, ship)
        ):
            placements.append(ship)
    return placements


def common_coordinates(sets: Iterable[set[T]]) -> set[T] | None:
    """Intersection of all ``sets``, or None when there are none."""
    result: set[T] | None = None
    for current in sets:
        result = set(current) if result is None else result & current
    return result


def group_overlapping(sets: Sequence[set[T]]) -> list[list[set[T]]]:
    """Group sets that share members, transitively.

    If A overlaps B and B overlaps C, all three land in one group even when A
    and C are disjoint.
    """
    # Each entry is (union of members, members); unions stay pairwise disjoint.
    groups: list[tuple[set[T], list[set[T]]]] = []
    for current in sets:
        union = set(current)
        members = [current]
        untouched = []
        for group_union, group_members in groups:
            if group_union & union:
                union |= group_union
                members = group_members + members
            else:
                untouched.append((group_union, group_members))
        untouched.append((union, members))
        groups = untouched
    return [members for _, members in groups]


def partition(sets: Sequence[set[T]]) -> list[set[T]]:
    """Group overlapping sets transitively and return each group's intersection."""
    return [common_coordinates(members) or set() for members in group_overlapping(sets)]


def _footprint(layout: Layout, coords: Iterable[Coordinate]) -> set[Coordinate]:
    """The squares plus all their in-bounds neighbours."""
    area: set[Coordinate] = set()
    for coord in coords:
        area.add(coord)
        area.update(layout.neighbors(coord, ALL_DIRECTIONS))
    return area


def _can_hold_two_ships(layout: Layout, members: Sequence[set[Coordinate]]) -> bool:
    """True if two placements in the group could both be ships at once."""
    footprints = [_footprint(layout, coords) for coords in members]
    for first in range(len(members)):
        for second in range(first + 1, len(members)):
            if not footprints[first] & members[second]:
                return True
    return False


def _place_ship(board: Board, ship: Ship) -> None:
    for index, coord in enumerate(ship.coordinates()):
        board.set(coord, Square.ship(ship.expected_shape(index)))


def place_ships_of_size(board: Board, size: int, num_ships: int) -> None:
    """Apply the rule for one ship size with ``num_ships`` still to find."""
    placements = feasible_placements(board, size)
    coordinate_sets = [set(ship.coordinates()) for ship in placements]

    if len(placements) == num_ships:
        claimed: set[Coordinate] = set()
        for ship, coords in zip(placements, coordinate_sets):
            if claimed & coords:
                logger.error(
                    "forced_placements_overlap",
                    extra={"size": size, "row": ship.origin.row, "col": ship.origin.col},
                )
                raise ContradictionError(
                    f"The only {num_ships} places for {size}-square ships overlap."
                )
            claimed |= coords
        logger.debug("ships_placed", extra={"size": size, "count": len(placements)})
        for ship in placements:
            _place_ship(board, ship)
        return

    groups = group_overlapping(coordinate_sets)
    if len(groups) != num_ships:
        return

    # A group with room for two ships lets another group stay empty.
    if any(_can_hold_two_ships(board.layout, members) for members in groups):
        return

    for members in groups:
        common = common_coordinates(members) or set()
        for coord in sorted(common):
            if board[coord] == UNKNOWN:
                board.set(coord, Square.ship(ShipShape.ANY))


def only_place_it_can_go(board: Board) -> None:
    """Place ships, or the parts of them that are certain, for every size still to find."""
    for size in list(board.remaining_ship_sizes()):
        num_ships = board.ships_to_find_for_size(size)
        if num_ships > 0:
            place_ships_of_size(board, size, num_ships)
