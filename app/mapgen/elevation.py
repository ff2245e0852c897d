"""Height map synthesis and liquid flooding.

Heights live on tile corners: a grid of N x N tiles has an (N+1) x (N+1)
elevation field.
"""
from __future__ import annotations

import math
import random

from .cells import ElevationField, Grid, new_elevation
from .seeds import randint_range
from .tiles import GROUND
from .traversal import spiral

HEIGHT_SQUARES = "squares"
HEIGHT_WAVES = "waves"
HEIGHT_ALGORITHMS = (HEIGHT_SQUARES, HEIGHT_WAVES)

WAVE_COUNT = 10
WAVE_SCALE = 1 / 20


def fill_square(row: int, col: int, array: ElevationField, half_width: int, value: int) -> None:
    """Add ``value`` to every corner in ``[row-w, row+w) x [col-w, col+w)`` inside the field."""
    limit = len(array)
    for k in range(max(row - half_width, 0), min(row + half_width, limit)):
        line = array[k]
        for m in range(max(col - half_width, 0), min(col + half_width, limit)):
            line[m] += value


def height_map_squares(size: int, rng: random.Random, height_range: int, square_width: int) -> ElevationField:
    """Blocky plateau terrain from overlapping random square offsets.

    The traversal runs ``square_width`` rings past the map edge so edge
    corners receive as many stamps as central ones.
    """
    array = new_elevation(size)
    spread = math.floor(height_range)
    for i, j in spiral(size, border=-square_width):
        value = randint_range(rng, -spread, spread + 1)
        fill_square(i, j, array, square_width, value)
    return array


def height_map_waves(size: int, rng: random.Random, height_range: float) -> ElevationField:
    """Smooth rolling terrain from summed sine waves along each axis."""
    array = new_elevation(size)
    max_height = height_range * 1.2
    c = max_height / WAVE_COUNT
    waves = []
    for i in range(1, WAVE_COUNT + 1):
        fx = i * (rng.random() + 0.5)
        ax = rng.random() * (c / i) * max_height
        fy = i * (rng.random() + 0.5)
        ay = rng.random() * (c / i) * max_height
        ox = rng.random() * math.pi * 2
        oy = rng.random() * math.pi * 2
        waves.append((fx, ax, ox, fy, ay, oy))

    for i in range(size + 1):
        y = i - size / 2
        for j in range(size + 1):
            x = j - size / 2
            total = array[i][j]
            for fx, ax, ox, fy, ay, oy in waves:
                total += ax * math.sin(fx * (WAVE_SCALE * x + ox))
                total += ay * math.sin(fy * (WAVE_SCALE * y + oy))
            array[i][j] = total
    return array


def build_height_map(size: int, rng: random.Random, algo: str, height_range: int, square_width: int) -> ElevationField:
    if algo == HEIGHT_SQUARES:
        return height_map_squares(size, rng, height_range, square_width)
    if algo == HEIGHT_WAVES:
        return height_map_waves(size, rng, height_range)
    raise ValueError(f"unknown height algorithm: {algo!r}")


def flood_height(square_width: int, height_range: float, flood_level: float) -> float:
    difference = square_width**2 * height_range
    return difference * flood_level - difference / 2


def flood(grid: Grid, height: ElevationField, level: float, liquid: int) -> int:
    """Raise every corner to ``level`` and pour ``liquid`` onto submerged ground.

    A ground tile is submerged when all four of its corners sit exactly at
    ``level`` afterwards. Returns the number of tiles flooded.
    """
    for line in height:
        for j, h in enumerate(line):
            if h < level:
                line[j] = level

    flooded = 0
    size = len(grid)
    for i in range(size):
        for j in range(size):
            if (
                grid[i][j].type == GROUND
                and height[i][j] == level
                and height[i + 1][j] == level
                and height[i][j + 1] == level
                and height[i + 1][j + 1] == level
            ):
                grid[i][j].type = liquid
                flooded += 1
    return flooded


__all__ = [
    "HEIGHT_SQUARES",
    "HEIGHT_WAVES",
    "HEIGHT_ALGORITHMS",
    "fill_square",
    "height_map_squares",
    "height_map_waves",
    "build_height_map",
    "flood_height",
    "flood",
]
