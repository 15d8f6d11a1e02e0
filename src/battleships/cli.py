"""Command-line driver that solves a Battleships puzzle and prints each step."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from opentelemetry.instrumentation.logging import LoggingInstrumentor
from pydantic import ValidationError

from battleships.engine.board import Board
from battleships.engine.errors import BoardParseError, SolverError
from battleships.engine.text import format_board, parse_board
from battleships.puzzles import DEFAULT_PUZZLE, PUZZLES
from battleships.solver import SolverConfig, solve
from battleships.telemetry import configure_console_logging, init_telemetry


def _load_puzzle_text(args: argparse.Namespace) -> str:
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    return PUZZLES[args.puzzle]


def _print_step(rule_name: str, board: Board) -> None:
    print(f"\nAfter {rule_name.replace('_', ' ')}:")
    print(format_board(board), end="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve a Battleships puzzle by deduction.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--puzzle",
        choices=sorted(PUZZLES),
        default=DEFAULT_PUZZLE,
        help="Name of a built-in puzzle to solve.",
    )
    source.add_argument("--file", type=str, default=None, help="Read the puzzle from a text file.")
    parser.add_argument(
        "--list", action="store_true", help="List the built-in puzzles and exit."
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only print the starting and final boards."
    )
    parser.add_argument(
        "--max-passes",
        type=int,
        default=None,
        help="Give up after this many passes over the rules.",
    )
    return parser


def run(argv: Sequence[str] | None = None) -> bool:
    """Parse arguments, solve the chosen puzzle and return whether it was solved."""
    args = build_parser().parse_args(argv)
    if args.list:
        for name in sorted(PUZZLES):
            print(name)
        return True

    config = SolverConfig.from_env(max_passes=args.max_passes)
    board = parse_board(_load_puzzle_text(args))
    print(format_board(board), end="")

    solved = solve(board, config=config, on_change=None if args.quiet else _print_step)

    print("\nFinal board:")
    print(format_board(board), end="")
    print("Solved" if solved else "Not solved")
    return solved


def main(argv: Sequence[str] | None = None) -> None:
    configure_console_logging()
    telemetry = init_telemetry()
    if telemetry.enable_logging:
        LoggingInstrumentor().instrument()
    try:
        run(argv)
    except (BoardParseError, SolverError, ValidationError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
