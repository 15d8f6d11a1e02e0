"""Ship placements for the Battleships solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .layout import Axis, Coordinate
from .square import ShipShape


class ShipRole(Enum):
    """Position of a square within its ship."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


_SHAPE_FOR_ROLE: dict[tuple[ShipRole, Axis], ShipShape] = {
    (ShipRole.START, Axis.COL): ShipShape.LEFT_END,
    (ShipRole.START, Axis.ROW): ShipShape.TOP_END,
    (ShipRole.MIDDLE, Axis.COL): ShipShape.HORIZONTAL_MIDDLE,
    (ShipRole.MIDDLE, Axis.ROW): ShipShape.VERTICAL_MIDDLE,
    (ShipRole.END, Axis.COL): ShipShape.RIGHT_END,
    (ShipRole.END, Axis.ROW): ShipShape.BOTTOM_END,
}


@dataclass(frozen=True)
class Ship:
    """A straight run of ``size`` squares starting at ``origin``.

    ``axis`` is the incrementing axis: successive squares step along it, while
    the constant axis (its cross axis) names the single row or column the ship
    sits in.
    """

    origin: Coordinate
    axis: Axis
    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Ship size must be positive, got {self.size}.")

    @property
    def constant_axis(self) -> Axis:
        return self.axis.cross()

    def coordinates(self) -> list[Coordinate]:
        """Return the ordered coordinates of the ship, without bounds checks."""
        if self.axis is Axis.ROW:
            return [Coordinate(self.origin.row + idx, self.origin.col) for idx in range(self.size)]
        return [Coordinate(self.origin.row, self.origin.col + idx) for idx in range(self.size)]

    def role_for_index(self, index: int) -> ShipRole:
        if not 0 <= index < self.size:
            raise IndexError(f"Square index {index} outside ship of size {self.size}.")
        if index == 0:
            return ShipRole.START
        if index == self.size - 1:
            return ShipRole.END
        return ShipRole.MIDDLE

    def expected_shape(self, index: int) -> ShipShape:
        """Return the shape the square at ``index`` has once the ship is fully resolved.

        A horizontal ship of size 3 reads LEFT_END, HORIZONTAL_MIDDLE, RIGHT_END;
        any ship of size 1 is a DOT.
        """
        role = self.role_for_index(index)
        if self.size == 1:
            return ShipShape.DOT
        return _SHAPE_FOR_ROLE[(role, self.axis)]

    def expected_shapes(self) -> list[ShipShape]:
        return [self.expected_shape(index) for index in range(self.size)]
