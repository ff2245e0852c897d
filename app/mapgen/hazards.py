"""Monster emerge points and the triggers that wake them.

Wiring is stored as coordinates: a trigger tile lists the ``(row, col)`` of
every emerge tile it fires. Emerge and trigger ids come from one counter so
each id names exactly one script block.
"""
from __future__ import annotations

import itertools
import random
from typing import Iterable, List, Tuple

from .automaton import fill_noise, speleogenesis
from .cells import FILLED, Coord, Grid
from .traversal import spiral

TRIGGER_REACH = 3  # 7x7 neighbourhood


def trigger_candidates(grid: Grid, emerge: Coord, trigger_types: Iterable[int]) -> List[Coord]:
    size = len(grid)
    allowed = set(trigger_types)
    ei, ej = emerge
    found = []
    for i in range(max(ei - TRIGGER_REACH, 0), min(ei + TRIGGER_REACH + 1, size)):
        for j in range(max(ej - TRIGGER_REACH, 0), min(ej + TRIGGER_REACH + 1, size)):
            if (i, j) != emerge and grid[i][j].type in allowed:
                found.append((i, j))
    return found


def place_monsters(
    grid: Grid,
    rng: random.Random,
    density: float,
    emerge_types: Iterable[int],
    trigger_types: Iterable[int],
) -> Tuple[int, int]:
    """Shape monster habitat and wire emerge cells to nearby triggers.

    Every habitat cell draws exactly one value on the spiral walk, eligible or
    not. For eligible cells that draw picks the trigger. Returns
    ``(emerge_count, trigger_count)``.
    """
    size = len(grid)
    fill_noise(grid, "monster", rng, density)
    speleogenesis(grid, "monster")

    emerge_allowed = set(emerge_types)
    trigger_types = tuple(trigger_types)
    ids = itertools.count(1)
    emerges = triggers = 0
    for i, j in spiral(size):
        tile = grid[i][j]
        if tile.monster != FILLED:
            continue
        pick = rng.random()
        if tile.type not in emerge_allowed:
            continue
        tile.emerge_id = next(ids)
        emerges += 1
        candidates = trigger_candidates(grid, (i, j), trigger_types)
        if not candidates:
            continue
        ti, tj = candidates[int(pick * len(candidates))]
        trigger = grid[ti][tj]
        trigger.add_trigger((i, j))
        if not trigger.trigger_id:
            trigger.trigger_id = next(ids)
            triggers += 1
    return emerges, triggers


def wires(grid: Grid) -> List[Tuple[int, int]]:
    """``(trigger_id, emerge_id)`` pairs ordered by trigger id then link order."""
    pairs = []
    for row in grid:
        for t in row:
            for ei, ej in t.triggers:
                pairs.append((t.trigger_id, grid[ei][ej].emerge_id))
    pairs.sort(key=lambda p: p[0])
    return pairs


__all__ = ["TRIGGER_REACH", "trigger_candidates", "place_monsters", "wires"]
