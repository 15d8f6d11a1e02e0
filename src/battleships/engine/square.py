"""Cell states for the Battleships grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .layout import DIAGONALS, Direction

ALL_DIRECTIONS: frozenset[Direction] = frozenset(Direction)


class ShipShape(Enum):
    """Every kind of ship square, keyed by the character used in the text format."""

    ANY = "*"
    DOT = "•"
    LEFT_END = "<"
    RIGHT_END = ">"
    TOP_END = "^"
    BOTTOM_END = "v"
    VERTICAL_MIDDLE = "|"
    HORIZONTAL_MIDDLE = "-"
    ANY_MIDDLE = "☐"

    @property
    def char(self) -> str:
        return self.value

    @property
    def water_neighbors(self) -> frozenset[Direction]:
        """Neighbours that must be water (or off the grid) around this shape."""
        return _WATER_NEIGHBORS[self]

    @property
    def ship_neighbors(self) -> frozenset[Direction]:
        """Neighbours that must be ship squares for this shape to be possible."""
        return _SHIP_NEIGHBORS[self]

    @property
    def is_resolved(self) -> bool:
        """True for the seven shapes whose orientation is fully known."""
        return self not in (ShipShape.ANY, ShipShape.ANY_MIDDLE)

    @property
    def is_middle(self) -> bool:
        return self in MIDDLE_SHAPES

    @property
    def is_end(self) -> bool:
        return self in END_OPENINGS

    @classmethod
    def resolved(cls) -> tuple[ShipShape, ...]:
        """Return the concrete shapes in declaration order."""
        return tuple(shape for shape in cls if shape.is_resolved)


MIDDLE_SHAPES = frozenset(
    {ShipShape.VERTICAL_MIDDLE, ShipShape.HORIZONTAL_MIDDLE, ShipShape.ANY_MIDDLE}
)

# Direction in which each end cap continues into the rest of its ship.
END_OPENINGS: dict[ShipShape, Direction] = {
    ShipShape.LEFT_END: Direction.E,
    ShipShape.RIGHT_END: Direction.W,
    ShipShape.TOP_END: Direction.S,
    ShipShape.BOTTOM_END: Direction.N,
}

_SHIP_NEIGHBORS: dict[ShipShape, frozenset[Direction]] = {
    ShipShape.ANY: frozenset(),
    ShipShape.ANY_MIDDLE: frozenset(),
    ShipShape.DOT: frozenset(),
    ShipShape.LEFT_END: frozenset({Direction.E}),
    ShipShape.RIGHT_END: frozenset({Direction.W}),
    ShipShape.TOP_END: frozenset({Direction.S}),
    ShipShape.BOTTOM_END: frozenset({Direction.N}),
    ShipShape.VERTICAL_MIDDLE: frozenset({Direction.N, Direction.S}),
    ShipShape.HORIZONTAL_MIDDLE: frozenset({Direction.E, Direction.W}),
}

# Unresolved shapes only know their diagonals; every resolved shape is water
# everywhere except where the ship continues.
_WATER_NEIGHBORS: dict[ShipShape, frozenset[Direction]] = {
    shape: (ALL_DIRECTIONS - _SHIP_NEIGHBORS[shape]) if shape.is_resolved else DIAGONALS
    for shape in ShipShape
}


class SquareKind(Enum):
    """Top-level state of a grid square."""

    UNKNOWN = "unknown"
    WATER = "water"
    SHIP = "ship"


@dataclass(frozen=True)
class Square:
    """State of one grid square: unknown, water, or a ship square of some shape."""

    kind: SquareKind
    shape: ShipShape | None = None

    def __post_init__(self) -> None:
        if (self.kind is SquareKind.SHIP) != (self.shape is not None):
            raise ValueError("Only ship squares carry a shape.")

    @classmethod
    def ship(cls, shape: ShipShape) -> Square:
        return cls(SquareKind.SHIP, shape)

    @classmethod
    def from_char(cls, char: str) -> Square:
        """Decode a text-format character; raises ValueError for unknown characters."""
        if char == " ":
            return UNKNOWN
        if char == "~":
            return WATER
        try:
            return cls.ship(ShipShape(char))
        except ValueError as exc:
            raise ValueError(f"Unknown square character {char!r}.") from exc

    @property
    def char(self) -> str:
        if self.shape is not None:
            return self.shape.char
        return " " if self.kind is SquareKind.UNKNOWN else "~"

    @property
    def is_unknown(self) -> bool:
        return self.kind is SquareKind.UNKNOWN

    @property
    def is_water(self) -> bool:
        return self.kind is SquareKind.WATER

    @property
    def is_ship(self) -> bool:
        return self.kind is SquareKind.SHIP

    def can_become(self, new_value: Square) -> bool:
        """Whether replacing this state with ``new_value`` only narrows it."""
        if new_value == self:
            return True
        if self.is_unknown:
            return True
        if self.shape is ShipShape.ANY:
            return new_value.is_ship
        if self.shape is ShipShape.ANY_MIDDLE:
            return new_value.shape in (ShipShape.VERTICAL_MIDDLE, ShipShape.HORIZONTAL_MIDDLE)
        return False

    def __str__(self) -> str:
        return self.char


UNKNOWN = Square(SquareKind.UNKNOWN)
WATER = Square(SquareKind.WATER)
