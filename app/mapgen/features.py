"""Resource and decoration features stamped onto the typed grid.

Slug holes, crystal/ore seams and recharge seams. Each pass runs on its own
RNG stream after flooding, so they only see finished terrain.
"""
from __future__ import annotations

import random

from .cells import Grid
from .seeds import randomize
from .tiles import DIGGABLE, GROUND, RECHARGE_SEAM, SLUG_HOLE, SOLID_ROCK
from .traversal import interior, spiral


def strip_invalid_resources(grid: Grid) -> None:
    """Zero crystal/ore counts on anything that is not diggable rock."""
    for row in grid:
        for t in row:
            if t.type not in DIGGABLE:
                t.crystals = 0
                t.ore = 0


def add_slug_holes(grid: Grid, rng: random.Random, density: float) -> int:
    """Scatter Slimy Slug holes over open ground.

    Density is cubed so useful values stay small. Edge cells are never drawn
    and default to holes, although the solid rock rim keeps them from being
    stamped.
    """
    size = len(grid)
    for row in grid:
        for t in row:
            t.slug = SLUG_HOLE
    for i, j in spiral(size):
        grid[i][j].slug = randomize(rng, 1 - density**3, SLUG_HOLE)

    placed = 0
    for row in grid:
        for t in row:
            if t.slug and t.type == GROUND:
                t.type = SLUG_HOLE
                placed += 1
    return placed


def add_seams(grid: Grid, rng: random.Random, resource: str, density: float, seam_type: int) -> int:
    """Turn rich resource cells (count > 2) into seams of ``seam_type``."""
    size = len(grid)
    placed = 0
    for i, j in spiral(size):
        if rng.random() < density:
            tile = grid[i][j]
            if getattr(tile, resource) > 2:
                tile.type = seam_type
                placed += 1
    return placed


def add_recharge_seams(grid: Grid, rng: random.Random, density: float) -> int:
    """Replace exposed solid rock faces with recharge seams.

    A candidate is solid rock flanked by solid rock on two opposite sides
    with at least one non-solid neighbour.
    """
    size = len(grid)
    for i, j in spiral(size):
        grid[i][j].recharge = randomize(rng, 1 - density, 1)

    placed = 0
    for i, j in interior(size):
        tile = grid[i][j]
        if tile.type != SOLID_ROCK:
            continue
        down, up = grid[i + 1][j].type, grid[i - 1][j].type
        right, left = grid[i][j + 1].type, grid[i][j - 1].type
        flanked = (down == SOLID_ROCK and up == SOLID_ROCK) or (right == SOLID_ROCK and left == SOLID_ROCK)
        exposed = not all(t == SOLID_ROCK for t in (down, up, right, left))
        if flanked and exposed and tile.recharge > 0:
            tile.type = RECHARGE_SEAM
            placed += 1
    return placed


__all__ = ["strip_invalid_resources", "add_slug_holes", "add_seams", "add_recharge_seams"]
