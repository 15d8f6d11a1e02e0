"""Reading and writing boards in the plain-text puzzle format.

Example::

    ships: 4sq x 1, 1sq x 2.
      01111
    4|~
    0|~~~~~

The optional first line lists every ship in the puzzle, including any already
complete on the grid, and may wrap over several lines until the terminating
period. Written boards list the ships still to find. The header holds one digit per
column: the ship squares still to place in that column. Every other line is
the row's count, a ``|`` and one character per square. A final line holding
just ``.`` is accepted as an end marker.
"""

from __future__ import annotations

import logging
import re

from .board import Board
from .errors import BoardParseError
from .square import Square

logger = logging.getLogger(__name__)

MANIFEST_PREFIX = "ships:"
HEADER_PREFIX = "  "
END_MARKER = "."

_MANIFEST_ENTRY = re.compile(r"^(\d+)\s*sq\s*x\s*(\d+)$")
_ROW = re.compile(r"^(\d)\|(.*)$")


def _parse_manifest(text: str, line_number: int) -> dict[int, int]:
    body = text[len(MANIFEST_PREFIX) :].strip()
    if not body.endswith("."):
        raise BoardParseError("ship list must end with a period", line_number)
    body = body[:-1].strip()
    if not body:
        raise BoardParseError("ship list is empty", line_number)

    ships: dict[int, int] = {}
    for entry in body.split(","):
        match = _MANIFEST_ENTRY.match(entry.strip())
        if match is None:
            raise BoardParseError(f"cannot read ship entry {entry.strip()!r}", line_number)
        size, count = int(match.group(1)), int(match.group(2))
        if size < 1:
            raise BoardParseError(f"ship size must be positive, got {size}", line_number)
        if size in ships:
            raise BoardParseError(f"ship size {size} listed twice", line_number)
        ships[size] = count
    return ships


def _parse_header(line: str, line_number: int) -> list[int]:
    digits = line[len(HEADER_PREFIX) :]
    if not line.startswith(HEADER_PREFIX) or not digits or not digits.isdigit():
        raise BoardParseError(
            "column header must be two spaces followed by one digit per column", line_number
        )
    return [int(digit) for digit in digits]


def _parse_row(line: str, line_number: int) -> tuple[int, list[Square]]:
    match = _ROW.match(line)
    if match is None:
        raise BoardParseError("row must start with a digit followed by '|'", line_number)
    squares: list[Square] = []
    for col, char in enumerate(match.group(2)):
        try:
            squares.append(Square.from_char(char))
        except ValueError as exc:
            raise BoardParseError(f"column {col}: {exc}", line_number) from exc
    return int(match.group(1)), squares


def parse_board(text: str) -> Board:
    """Build a :class:`Board` from its text representation.

    Raises :class:`BoardParseError` for malformed input; no board is returned
    in that case.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    numbered = [(index + 1, line) for index, line in enumerate(lines) if line != ""]
    if not numbered:
        raise BoardParseError("board text is empty")

    position = 0
    ship_totals: dict[int, int] = {}
    first_number, first_line = numbered[0]
    if first_line.startswith(MANIFEST_PREFIX):
        manifest_text = first_line
        while not manifest_text.rstrip().endswith("."):
            position += 1
            if position >= len(numbered):
                raise BoardParseError("ship list must end with a period", first_number)
            manifest_text += " " + numbered[position][1].strip()
        ship_totals = _parse_manifest(manifest_text, first_number)
        position += 1

    if position >= len(numbered):
        raise BoardParseError("missing column header")
    header_number, header_line = numbered[position]
    col_counts = _parse_header(header_line, header_number)

    body = numbered[position + 1 :]
    if body and body[-1][1] == END_MARKER:
        body = body[:-1]

    row_counts: list[int] = []
    squares: list[list[Square]] = []
    for line_number, line in body:
        if line == END_MARKER:
            raise BoardParseError("unexpected lines after the end of the board", line_number)
        count, row = _parse_row(line, line_number)
        if len(row) != len(col_counts):
            raise BoardParseError(
                f"row has {len(row)} squares but the header has {len(col_counts)} columns",
                line_number,
            )
        row_counts.append(count)
        squares.append(row)

    if not squares:
        raise BoardParseError("board has no rows", header_number)

    board = Board(squares, row_counts, col_counts, ship_totals)
    logger.debug(
        "board_parsed",
        extra={
            "num_rows": board.layout.num_rows,
            "num_cols": board.layout.num_cols,
            "ship_sizes": board.ship_sizes(),
        },
    )
    return board


def format_manifest(board: Board) -> str | None:
    """Return the ``ships:`` line, or None when the board has no manifest."""
    sizes = board.ship_sizes()
    if not sizes:
        return None
    entries = ", ".join(f"{size}sq x {board.ships_to_find_for_size(size)}" for size in sizes)
    return f"{MANIFEST_PREFIX} {entries}."


def board_lines(board: Board) -> list[str]:
    """Return the text lines for a board, without line terminators."""
    lines: list[str] = []
    manifest = format_manifest(board)
    if manifest is not None:
        lines.append(manifest)
    lines.append(HEADER_PREFIX + "".join(str(count) for count in board.ship_squares_remaining_for_col))
    for row_count, row in zip(board.ship_squares_remaining_for_row, board.squares):
        lines.append(f"{row_count}|" + "".join(square.char for square in row))
    return lines


def format_board(board: Board) -> str:
    """Serialise a board; the inverse of :func:`parse_board`."""
    return "".join(f"{line}\n" for line in board_lines(board))
