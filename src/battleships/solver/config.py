"""Solver configuration."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_MAX_PASSES = 10_000


class SolverConfig(BaseModel):
    """Runtime knobs for :func:`battleships.solver.solve`."""

    # Every productive pass narrows at least one square, so real puzzles stop
    # far below this; hitting it means a rule keeps undoing another.
    max_passes: int = Field(default=DEFAULT_MAX_PASSES, ge=1)

    @classmethod
    def from_env(cls, **overrides: Any) -> "SolverConfig":
        """Construct config from `BATTLESHIPS_MAX_PASSES`, letting overrides win."""

        data: dict[str, Any] = {}
        max_passes = os.getenv("BATTLESHIPS_MAX_PASSES")
        if max_passes is not None and max_passes.strip():
            data["max_passes"] = max_passes.strip()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
