"""Locating the player's spawn point on a map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence

_ANGLES = {
    "N": math.pi + math.pi / 2,
    "E": 0.0,
    "S": math.pi - math.pi / 2,
    "W": math.pi,
}


def start_angle(direction: str) -> float:
    """Return the view angle in radians for a spawn letter (N, E, S, W)."""
    return _ANGLES.get(direction, 0.0)


def find_player_start(grid: Sequence[str]) -> tuple[int, int, float] | None:
    """Return (x, y, angle) of the first spawn letter in the grid, or None."""
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell in _ANGLES:
                return x, y, start_angle(cell)
    return None