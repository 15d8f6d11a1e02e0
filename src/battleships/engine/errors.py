"""Exceptions raised while loading or solving a Battleships board."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .layout import Coordinate
    from .square import Square


class BoardParseError(ValueError):
    """The text representation of a board is malformed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class SolverError(RuntimeError):
    """Base class for failures while solving; the board may be partially updated."""


class InvalidTransitionError(SolverError):
    """A square was asked to change in a way that does not narrow its state."""

    def __init__(self, coord: Coordinate, current: Square, attempted: Square) -> None:
        self.coord = coord
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"Cannot change square at (row={coord.row}, col={coord.col}) "
            f"from {current.kind.value} {current.char!r} to {attempted.kind.value} {attempted.char!r}."
        )


class ContradictionError(SolverError):
    """The board demands something impossible, e.g. a ship running off the grid."""


class ConvergenceError(SolverError):
    """The rules kept changing the board past the configured pass limit."""
