"""Board state for a Battleships puzzle."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator, Mapping, Sequence

from battleships.telemetry import get_meter

from .errors import ContradictionError, InvalidTransitionError
from .layout import Axis, Coordinate, Layout, RowOrCol
from .ship import Ship
from .square import UNKNOWN, Square

logger = logging.getLogger(__name__)
meter = get_meter("battleships.engine.board")

CELL_UPDATE_COUNTER = meter.create_counter(
    "battleships_board_cell_updates",
    unit="1",
    description="Number of squares changed on a board",
)


class Board:
    """A puzzle grid plus the counts still needed to solve it.

    ``ship_squares_remaining_for_row``/``_for_col`` count ship squares that are
    still to be placed in each row/column. ``ship_totals`` maps ship size to
    how many ships of that size the puzzle holds, including any already
    complete on the grid.
    All changes to the grid go through :meth:`set`, which keeps the counters
    in sync.
    """

    def __init__(
        self,
        squares: Sequence[Sequence[Square]],
        ship_squares_remaining_for_row: Sequence[int],
        ship_squares_remaining_for_col: Sequence[int],
        ship_totals: Mapping[int, int] | None = None,
    ) -> None:
        if not squares:
            raise ValueError("A board needs at least one row.")
        num_cols = len(squares[0])
        if num_cols == 0:
            raise ValueError("A board needs at least one column.")
        if any(len(row) != num_cols for row in squares):
            raise ValueError("All rows must have the same number of columns.")
        if len(ship_squares_remaining_for_row) != len(squares):
            raise ValueError(
                f"Expected {len(squares)} row counts, got {len(ship_squares_remaining_for_row)}."
            )
        if len(ship_squares_remaining_for_col) != num_cols:
            raise ValueError(
                f"Expected {num_cols} column counts, got {len(ship_squares_remaining_for_col)}."
            )
        counts = [*ship_squares_remaining_for_row, *ship_squares_remaining_for_col]
        if any(count < 0 for count in counts):
            raise ValueError("Ship square counts cannot be negative.")

        self.layout = Layout(num_rows=len(squares), num_cols=num_cols)
        self._squares: list[list[Square]] = [list(row) for row in squares]
        self._remaining_for_row: list[int] = list(ship_squares_remaining_for_row)
        self._remaining_for_col: list[int] = list(ship_squares_remaining_for_col)
        self._dirty = False

        self._ship_totals: dict[int, int] = {}
        for size, count in (ship_totals or {}).items():
            if size < 1 or count < 0:
                raise ValueError(f"Invalid ship manifest entry {size}sq x {count}.")
            self._ship_totals[size] = count

    # ------------------------------------------------------------------
    # Reading

    def __getitem__(self, coord: Coordinate) -> Square:
        return self._squares[coord.row][coord.col]

    @property
    def squares(self) -> tuple[tuple[Square, ...], ...]:
        """Read-only snapshot of the grid."""
        return tuple(tuple(row) for row in self._squares)

    @property
    def ship_squares_remaining_for_row(self) -> tuple[int, ...]:
        return tuple(self._remaining_for_row)

    @property
    def ship_squares_remaining_for_col(self) -> tuple[int, ...]:
        return tuple(self._remaining_for_col)

    def ship_squares_remaining(self, row_or_col: RowOrCol) -> int:
        """Number of ship squares still to be placed in a row or column."""
        if row_or_col.axis is Axis.ROW:
            return self._remaining_for_row[row_or_col.index]
        return self._remaining_for_col[row_or_col.index]

    def is_solved(self) -> bool:
        """True once no square is unknown.

        This does not cross-check the result against the ship manifest.
        """
        return all(not self[coord].is_unknown for coord in self.layout.all_coordinates())

    # ------------------------------------------------------------------
    # Ship manifest

    def ship_sizes(self) -> list[int]:
        """All sizes named in the manifest, largest first."""
        return sorted(self._ship_totals, reverse=True)

    def ships_to_find_for_size(self, size: int) -> int:
        """How many ships of ``size`` are still to be located."""
        total = self._ship_totals.get(size, 0)
        if total == 0:
            return 0
        found = self.count_found_ships(size)
        if found > total:
            logger.warning(
                "more_ships_found_than_expected",
                extra={"size": size, "found": found, "expected": total},
            )
            return 0
        return total - found

    def remaining_ship_sizes(self) -> Iterator[int]:
        """Yield the sizes that still have ships to find, largest first."""
        for size in self.ship_sizes():
            if self.ships_to_find_for_size(size) > 0:
                yield size

    def ship_exists(self, ship: Ship) -> bool:
        """True if every square of ``ship`` already has exactly its expected shape."""
        coords = self.layout.ship_coordinates(ship)
        if coords is None:
            return False
        return all(
            self[coord] == Square.ship(ship.expected_shape(index))
            for index, coord in enumerate(coords)
        )

    def count_found_ships(self, size: int) -> int:
        return sum(1 for ship in self.layout.possible_ship_origins(size) if self.ship_exists(ship))

    # ------------------------------------------------------------------
    # Writing

    @property
    def dirty(self) -> bool:
        """Whether any square changed since the last :meth:`clear_dirty`."""
        return self._dirty

    def clear_dirty(self) -> None:
        self._dirty = False

    def set(self, coord: Coordinate, new_value: Square) -> None:
        """Narrow the square at ``coord`` to ``new_value``.

        Setting the current value is a no-op. Any change that does not narrow
        the square raises :class:`InvalidTransitionError`; a change that needs
        more ship squares than a row or column has left raises
        :class:`ContradictionError`. Neither leaves a partial update behind.
        """
        current = self[coord]
        if new_value == current:
            return
        if not current.can_become(new_value):
            logger.error(
                "invalid_square_transition",
                extra={
                    "row": coord.row,
                    "col": coord.col,
                    "current": current.char,
                    "attempted": new_value.char,
                },
            )
            raise InvalidTransitionError(coord, current, new_value)

        becomes_ship = new_value.is_ship and not current.is_ship
        if becomes_ship:
            if self._remaining_for_row[coord.row] == 0 or self._remaining_for_col[coord.col] == 0:
                logger.error(
                    "ship_square_count_exhausted",
                    extra={
                        "row": coord.row,
                        "col": coord.col,
                        "row_remaining": self._remaining_for_row[coord.row],
                        "col_remaining": self._remaining_for_col[coord.col],
                    },
                )
                raise ContradictionError(
                    f"No ship squares left in row {coord.row} or column {coord.col} "
                    f"to place {new_value.char!r} at (row={coord.row}, col={coord.col})."
                )
            self._remaining_for_row[coord.row] -= 1
            self._remaining_for_col[coord.col] -= 1

        self._squares[coord.row][coord.col] = new_value
        self._dirty = True
        CELL_UPDATE_COUNTER.add(1, attributes={"kind": new_value.kind.value})
        logger.debug(
            "square_set",
            extra={"row": coord.row, "col": coord.col, "value": new_value.char},
        )

    def replace_unknown(self, row_or_col: RowOrCol, new_value: Square) -> None:
        """Set every unknown square in a row or column to ``new_value``."""
        for coord in self.layout.coordinates_for(row_or_col):
            if self[coord] == UNKNOWN:
                self.set(coord, new_value)

    def copy(self) -> Board:
        """Return an independent copy of this board."""
        return copy.deepcopy(self)
