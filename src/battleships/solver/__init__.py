"""Deduction rules and the loop that applies them."""

from .config import SolverConfig
from .ends import place_ships_next_to_ends
from .fill import fill_with_ships, fill_with_water
from .loop import RULES, apply_rule, run_pass, solve
from .placement import only_place_it_can_go, partition
from .refine import refine_ship_squares, specify_middles
from .surround import surround_middles_with_ships, surround_with_water

__all__ = [
    "RULES",
    "SolverConfig",
    "apply_rule",
    "fill_with_ships",
    "fill_with_water",
    "only_place_it_can_go",
    "partition",
    "place_ships_next_to_ends",
    "refine_ship_squares",
    "run_pass",
    "solve",
    "specify_middles",
    "surround_middles_with_ships",
    "surround_with_water",
]
