"""Base (tool store) placement."""
from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from .cells import Coord, ElevationField, Grid
from .tiles import GROUND, POWER_PATH
from .traversal import spiral


def footprint(base: Coord) -> List[Coord]:
    r, c = base
    return [(r, c), (r + 1, c), (r, c + 1), (r + 1, c + 1)]


def is_buildable(grid: Grid, base: Coord) -> bool:
    return all(grid[i][j].type == GROUND for i, j in footprint(base))


def choose_base(grid: Grid, rng: random.Random) -> Optional[Coord]:
    """Pick the top-left corner of a 2x2 all-ground footprint.

    Every spiral cell draws a preference, buildable or not; the buildable
    cell with the lowest preference wins. Returns None when nothing fits.
    """
    size = len(grid)
    possible: List[Tuple[int, int, float]] = []
    for i, j in spiral(size):
        preference = rng.random()
        if is_buildable(grid, (i, j)):
            possible.append((i, j, preference))
    if not possible:
        return None
    possible.sort(key=lambda p: p[2])
    i, j, _ = possible[0]
    return (i, j)


def set_base(base: Coord, grid: Grid, height: ElevationField) -> None:
    """Lay power paths under the tool store and flatten its tile."""
    r, c = base
    grid[r][c].type = POWER_PATH
    grid[r + 1][c].type = POWER_PATH
    corners = footprint(base)
    average = math.floor(sum(height[i][j] for i, j in corners) / 4)
    for i, j in corners:
        height[i][j] = average


__all__ = ["footprint", "is_buildable", "choose_base", "set_base"]
