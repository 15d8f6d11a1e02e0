"""Fixed-point loop that runs the deduction rules."""

from __future__ import annotations

import logging
from typing import Callable

from battleships.engine.board import Board
from battleships.engine.errors import ConvergenceError
from battleships.telemetry import get_tracer, record_solver_metric

from .config import SolverConfig
from .ends import place_ships_next_to_ends
from .fill import fill_with_ships, fill_with_water
from .placement import only_place_it_can_go
from .refine import refine_ship_squares, specify_middles
from .surround import surround_middles_with_ships, surround_with_water

logger = logging.getLogger(__name__)
tracer = get_tracer("battleships.solver.loop")

Rule = Callable[[Board], None]
ChangeCallback = Callable[[str, Board], None]

# Earlier rules produce facts that later rules use within the same pass.
RULES: tuple[Rule, ...] = (
    fill_with_water,
    fill_with_ships,
    surround_with_water,
    place_ships_next_to_ends,
    refine_ship_squares,
    only_place_it_can_go,
    specify_middles,
    surround_middles_with_ships,
)


def apply_rule(board: Board, rule: Rule) -> bool:
    """Run one rule and report whether it changed the board."""
    board.clear_dirty()
    with tracer.start_as_current_span(f"solver.rule.{rule.__name__}") as span:
        rule(board)
        changed = board.dirty
        span.set_attribute("rule.changed", changed)
    record_solver_metric(
        "battleships_solver_rule_runs", 1, {"rule": rule.__name__, "changed": changed}
    )
    return changed


def run_pass(board: Board, on_change: ChangeCallback | None = None) -> bool:
    """Run every rule once, in order. Returns True if any of them changed the board."""
    changed_in_pass = False
    for rule in RULES:
        if apply_rule(board, rule):
            changed_in_pass = True
            logger.debug("rule_changed_board", extra={"rule": rule.__name__})
            if on_change is not None:
                on_change(rule.__name__, board)
    return changed_in_pass


def solve(
    board: Board,
    config: SolverConfig | None = None,
    on_change: ChangeCallback | None = None,
) -> bool:
    """Apply the rules until none of them changes the board.

    ``on_change`` is called with the rule name and the board after every rule
    that changed something. Errors from the rules propagate; the board keeps
    whatever progress was made before the failure. Returns whether the board
    ended up solved.
    """
    config = config or SolverConfig()
    with tracer.start_as_current_span("solver.solve") as span:
        span.set_attribute("board.num_rows", board.layout.num_rows)
        span.set_attribute("board.num_cols", board.layout.num_cols)
        logger.info(
            "solve_started",
            extra={"num_rows": board.layout.num_rows, "num_cols": board.layout.num_cols},
        )

        passes = 0
        while True:
            if passes >= config.max_passes:
                logger.error("solve_did_not_converge", extra={"passes": passes})
                raise ConvergenceError(
                    f"Board still changing after {passes} passes; a rule is not converging."
                )
            passes += 1
            with tracer.start_as_current_span("solver.pass") as pass_span:
                pass_span.set_attribute("pass.number", passes)
                changed = run_pass(board, on_change)
                pass_span.set_attribute("pass.changed", changed)
            record_solver_metric("battleships_solver_passes", 1)
            if not changed:
                break

        solved = board.is_solved()
        span.set_attribute("solve.passes", passes)
        span.set_attribute("solve.solved", solved)
        record_solver_metric("battleships_solver_solves", 1, {"solved": solved})
        logger.info("solve_finished", extra={"passes": passes, "solved": solved})
        return solved
