"""Tests for ship placements."""

import pytest

from battleships.engine.layout import Axis, Coordinate
from battleships.engine.ship import Ship, ShipRole
from battleships.engine.square import ShipShape


def test_ship_coordinates_horizontal() -> None:
    ship = Ship(Coordinate(0, 0), Axis.COL, 2)
    assert ship.coordinates() == [Coordinate(0, 0), Coordinate(0, 1)]
    assert ship.constant_axis is Axis.ROW


def test_ship_coordinates_vertical() -> None:
    ship = Ship(Coordinate(1, 2), Axis.ROW, 3)
    assert ship.coordinates() == [Coordinate(1, 2), Coordinate(2, 2), Coordinate(3, 2)]


def test_expected_shapes_horizontal() -> None:
    ship = Ship(Coordinate(0, 0), Axis.COL, 4)
    assert ship.expected_shapes() == [
        ShipShape.LEFT_END,
        ShipShape.HORIZONTAL_MIDDLE,
        ShipShape.HORIZONTAL_MIDDLE,
        ShipShape.RIGHT_END,
    ]


def test_expected_shapes_vertical() -> None:
    ship = Ship(Coordinate(0, 0), Axis.ROW, 3)
    assert ship.expected_shapes() == [
        ShipShape.TOP_END,
        ShipShape.VERTICAL_MIDDLE,
        ShipShape.BOTTOM_END,
    ]


def test_single_square_ship_is_a_dot() -> None:
    for axis in Axis:
        ship = Ship(Coordinate(3, 3), axis, 1)
        assert ship.expected_shape(0) is ShipShape.DOT
        assert ship.role_for_index(0) is ShipRole.START


def test_expected_shape_rejects_bad_index() -> None:
    ship = Ship(Coordinate(0, 0), Axis.ROW, 2)
    with pytest.raises(IndexError):
        ship.expected_shape(2)


def test_ship_requires_positive_size() -> None:
    with pytest.raises(ValueError):
        Ship(Coordinate(0, 0), Axis.ROW, 0)
