"""Cellular automaton shaping passes.

All passes operate on one scalar Tile field chosen by name, so the same logic
shapes walls, solid rock, ore, crystals, landslides and monster habitat.
Values in those fields are EMPTY (0), FILLED (-1) or, after ``details``, a
positive distance tier.
"""
from __future__ import annotations

import random

from .cells import EMPTY, FILLED, Grid, field_snapshot
from .seeds import randint_range, randomize
from .traversal import interior, spiral


def fill_noise(grid: Grid, field: str, rng: random.Random, density: float, original: int = FILLED) -> None:
    """Seed ``field`` with random noise: ``original`` with probability ``density``, else EMPTY."""
    size = len(grid)
    for i, j in spiral(size):
        setattr(grid[i][j], field, randomize(rng, 1 - density, original))


def speleogenesis(grid: Grid, field: str) -> int:
    """Shape random noise into caves; returns the number of passes run.

    Each pass reads a snapshot of the previous one. An interior cell with no
    filled orthogonal neighbours empties, one with three or more fills, any
    other is left alone. Stops once a pass changes nothing.
    """
    size = len(grid)
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        snap = field_snapshot(grid, field)
        for i, j in interior(size):
            adjacent = (
                (snap[i + 1][j] == FILLED)
                + (snap[i - 1][j] == FILLED)
                + (snap[i][j + 1] == FILLED)
                + (snap[i][j - 1] == FILLED)
            )
            tile = grid[i][j]
            if adjacent == 0:
                if getattr(tile, field) != EMPTY:
                    setattr(tile, field, EMPTY)
                    changed = True
            elif adjacent >= 3:
                if getattr(tile, field) != FILLED:
                    setattr(tile, field, FILLED)
                    changed = True
    return passes


def cleanup(grid: Grid, field: str) -> None:
    """Clear one-cell-thick features squeezed between two empty cells."""
    size = len(grid)
    changed = True
    while changed:
        changed = False
        for i, j in interior(size):
            if (getattr(grid[i - 1][j], field) == EMPTY and getattr(grid[i + 1][j], field) == EMPTY) or (
                getattr(grid[i][j - 1], field) == EMPTY and getattr(grid[i][j + 1], field) == EMPTY
            ):
                if getattr(grid[i][j], field) != EMPTY:
                    setattr(grid[i][j], field, EMPTY)
                    changed = True


def details(grid: Grid, field: str, max_distance: int, rng: random.Random) -> None:
    """Replace filled cells with their distance tier from open space, then blur.

    Tiers run 1..max_distance. The blur pass draws one value per spiral cell
    whether or not the cell is changed, keeping the stream aligned.
    """
    size = len(grid)
    for n in range(max_distance):
        for i, j in interior(size):
            tile = grid[i][j]
            if getattr(tile, field) != FILLED:
                continue
            if (
                getattr(grid[i - 1][j], field) == n
                or getattr(grid[i + 1][j], field) == n
                or getattr(grid[i][j - 1], field) == n
                or getattr(grid[i][j + 1], field) == n
            ):
                setattr(tile, field, n + 1)

    # Fix anything the distance sweep never reached
    for i, j in interior(size):
        if getattr(grid[i][j], field) == FILLED:
            setattr(grid[i][j], field, max_distance)

    for i, j in spiral(size):
        blur = randint_range(rng, -1, 2)
        tile = grid[i][j]
        value = getattr(tile, field)
        if value >= 1:
            value = min(max(value + blur, 1), max_distance)
            setattr(tile, field, value)


def is_converged(grid: Grid, field: str) -> bool:
    """True when ``field`` is a fixed point of :func:`speleogenesis`."""
    size = len(grid)
    for i, j in interior(size):
        adjacent = sum(
            getattr(grid[ni][nj], field) == FILLED for ni, nj in ((i + 1, j), (i - 1, j), (i, j + 1), (i, j - 1))
        )
        value = getattr(grid[i][j], field)
        if adjacent == 0 and value != EMPTY:
            return False
        if adjacent >= 3 and value != FILLED:
            return False
    return True


__all__ = ["fill_noise", "speleogenesis", "cleanup", "details", "is_converged"]
