"""Grid geometry for the Battleships solver."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .ship import Ship


@dataclass(frozen=True, order=True)
class Coordinate:
    """Immutable grid coordinate."""

    row: int
    col: int

    def row_or_col(self, axis: Axis) -> RowOrCol:
        """Return the row (``Axis.ROW``) or column (``Axis.COL``) holding this coordinate."""
        if axis is Axis.ROW:
            return RowOrCol(Axis.ROW, self.row)
        return RowOrCol(Axis.COL, self.col)


class Axis(Enum):
    """A grid axis. Moving along ``COL`` changes the column number."""

    ROW = "row"
    COL = "col"

    def cross(self) -> Axis:
        """Return the perpendicular axis."""
        return Axis.COL if self is Axis.ROW else Axis.ROW


class Direction(Enum):
    """Compass directions to the eight neighbours of a square, as (row, col) deltas."""

    N = (-1, 0)
    NE = (-1, 1)
    E = (0, 1)
    SE = (1, 1)
    S = (1, 0)
    SW = (1, -1)
    W = (0, -1)
    NW = (-1, -1)

    @property
    def delta_row(self) -> int:
        return self.value[0]

    @property
    def delta_col(self) -> int:
        return self.value[1]


DIAGONALS: frozenset[Direction] = frozenset({Direction.NE, Direction.SE, Direction.SW, Direction.NW})


@dataclass(frozen=True)
class RowOrCol:
    """Selects a single row or column of the grid."""

    axis: Axis
    index: int


@dataclass(frozen=True)
class Layout:
    """Coordinate arithmetic for a ``num_rows`` x ``num_cols`` grid."""

    num_rows: int
    num_cols: int

    def contains(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the grid."""
        return 0 <= coord.row < self.num_rows and 0 <= coord.col < self.num_cols

    def all_coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate in row-major order."""
        for row in range(self.num_rows):
            for col in range(self.num_cols):
                yield Coordinate(row, col)

    def rows_and_cols(self) -> Iterator[RowOrCol]:
        """Yield every row selector, then every column selector."""
        for row in range(self.num_rows):
            yield RowOrCol(Axis.ROW, row)
        for col in range(self.num_cols):
            yield RowOrCol(Axis.COL, col)

    def coordinates_for(self, row_or_col: RowOrCol) -> Iterator[Coordinate]:
        """Yield the coordinates along one row or column."""
        if row_or_col.axis is Axis.ROW:
            for col in range(self.num_cols):
                yield Coordinate(row_or_col.index, col)
        else:
            for row in range(self.num_rows):
                yield Coordinate(row, row_or_col.index)

    def neighbor(self, coord: Coordinate, direction: Direction) -> Coordinate | None:
        """Return the neighbouring coordinate, or None when it falls off the grid."""
        candidate = Coordinate(coord.row + direction.delta_row, coord.col + direction.delta_col)
        if not self.contains(candidate):
            return None
        return candidate

    def neighbors(self, coord: Coordinate, directions: Iterable[Direction]) -> Iterator[Coordinate]:
        """Yield the in-bounds neighbours of ``coord`` in the given directions."""
        for direction in directions:
            neighbour = self.neighbor(coord, direction)
            if neighbour is not None:
                yield neighbour

    def offset(self, coord: Coordinate, count: int, axis: Axis) -> Coordinate | None:
        """Move ``count`` squares along ``axis``; None when the result is off the grid."""
        if axis is Axis.ROW:
            candidate = Coordinate(coord.row + count, coord.col)
        else:
            candidate = Coordinate(coord.row, coord.col + count)
        if not self.contains(candidate):
            return None
        return candidate

    def ship_coordinates(self, ship: Ship) -> list[Coordinate] | None:
        """Return the ship's coordinates, or None if any part of it is off the grid."""
        coords = ship.coordinates()
        if not all(self.contains(coord) for coord in coords):
            return None
        return coords

    def possible_ship_origins(self, size: int) -> Iterator[Ship]:
        """Yield every in-bounds placement of a ship of ``size`` squares.

        A single square looks the same along either axis, so size 1 only
        produces the ``Axis.ROW`` variant to avoid counting each square twice.
        """
        from .ship import Ship

        if size < 1:
            raise ValueError(f"Ship size must be positive, got {size}.")
        axes = (Axis.ROW,) if size == 1 else (Axis.ROW, Axis.COL)
        for origin in self.all_coordinates():
            for axis in axes:
                if self.offset(origin, size - 1, axis) is not None:
                    yield Ship(origin, axis, size)
