"""Example puzzles for the command-line solver."""

from __future__ import annotations


def _puzzle(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


PUZZLES: dict[str, str] = {
    "small": _puzzle(
        "  112121",
        "2|      ",
        "0|      ",
        "4| >    ",
        "0|      ",
        "2|     •",
        "0|      ",
    ),
    "sparse": _puzzle(
        "  1304131",
        "0|       ",
        "5|       ",
        "0|       ",
        "1| >     ",
        "2|       ",
        "2|       ",
        "3|       ",
    ),
    "classic": _puzzle(
        "ships: 5sq x 1, 4sq x 1, 3sq x 2, ",
        "       2sq x 3, 1sq x 4.",
        "  3014161320",
        "0|         •",
        "4|          ",
        "1| <        ",
        "0|          ",
        "3|          ",
        "2|        v ",
        "2|v         ",
        "4|          ",
        "2|          ",
        "3|   ~      ",
    ),
    # Row counts total one less than column counts; kept as published.
    "large": _puzzle(
        "ships: 5sq x 1, 4sq x 2, 3sq x 3, ",
        "       2sq x 4, 1sq x 4.",
        "  021343411141121",
        "0|       •       ",
        "3|               ",
        "1|          ☐    ",
        "0|               ",
        "1|               ",
        "1|               ",
        "4|     v     ☐   ",
        "1|               ",
        "5|               ",
        "0|          v    ",
        "5|               ",
        "4|        •      ",
        "3|               ",
        "0|               ",
        "0|               ",
    ),
    "large-hints": _puzzle(
        "ships: 5sq x 1, 4sq x 2, 3sq x 3, ",
        "       2sq x 4, 1sq x 4.",
        "  150405130033020",
        "2|         •     ",
        "3|               ",
        "5|               ",
        "4|               ",
        "0|     v         ",
        "3|   ~           ",
        "1|               ",
        "0|          ☐    ",
        "4|        >      ",
        "0|   ☐           ",
        "1|               ",
        "2|               ",
        "0|               ",
        "1|             ^ ",
        "1|          v    ",
    ),
    "seven": _puzzle(
        "ships: 4sq x 1, 3sq x 1, ",
        "       2sq x 2, 1sq x 3.",
        "  3141401",
        "2|  ~    ",
        "1|       ",
        "4|       ",
        "0|       ",
        "1|       ",
        "3|       ",
        "3|       ",
    ),
}

DEFAULT_PUZZLE = "seven"
