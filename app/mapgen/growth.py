"""Growth simulations: lava spread (erosion) and landslides.

Both produce timed event lists consumed by the serializer:
    * flow list: one breadth-first wave of coordinates per lava source.
    * landslide list: three buckets, one per landslide frequency tier.
"""
from __future__ import annotations

import random
from typing import List

from .automaton import details, fill_noise, speleogenesis
from .cells import Coord, ElevationField, Grid, corner_sum
from .tiles import GROUND, LAVA, RUBBLE, SOLID_ROCK
from .traversal import interior, spiral

LANDSLIDE_TIERS = 3

# erosion field states
UNCLAIMED = 0
CLAIMED = 1


def _adjacent(cell: Coord) -> List[Coord]:
    i, j = cell
    return [(i + 1, j), (i - 1, j), (i, j + 1), (i, j - 1)]


def create_flow_list(
    grid: Grid,
    rng: random.Random,
    density: float,
    height: ElevationField,
    pre_flow: int,
    height_range: float,
) -> List[List[Coord]]:
    """Pick lava sources and record how each would spread over time.

    Lava spreads into any non-solid neighbour that is not much higher than
    the cell it spreads from (``height_range * 3`` of slope tolerance on
    four-corner sums). Claims are released after each wave, so waves from
    different sources may overlap.

    Afterwards ``pre_flow`` rings of ground around every source are turned to
    lava up front so sources are not lonely single lava tiles. Each ring only
    expands the sources known when the ring started.
    """
    size = len(grid)
    sources: List[Coord] = []
    for i, j in spiral(size):
        tile = grid[i][j]
        if rng.random() < density and tile.type == GROUND:
            sources.append((i, j))
        if tile.type < SOLID_ROCK:
            tile.erosion = UNCLAIMED

    spill_list: List[List[Coord]] = []
    for source in sources:
        si, sj = source
        grid[si][sj].type = LAVA
        grid[si][sj].erosion = CLAIMED
        flow = [source]
        index = 0
        while index < len(flow):
            source_elevation = corner_sum(height, *flow[index])
            for ni, nj in _adjacent(flow[index]):
                elevation = corner_sum(height, ni, nj)
                neighbour = grid[ni][nj]
                if neighbour.erosion == UNCLAIMED and source_elevation > elevation - height_range * 3:
                    flow.append((ni, nj))
                    neighbour.erosion = CLAIMED
            index += 1
        spill_list.append(flow)
        for i, j in flow:
            grid[i][j].erosion = UNCLAIMED

    for _ in range(pre_flow):
        total = len(sources)
        for k in range(total):
            for ni, nj in _adjacent(sources[k]):
                if grid[ni][nj].type == GROUND:
                    grid[ni][nj].type = LAVA
                    sources.append((ni, nj))

    return spill_list


def create_landslide_list(grid: Grid, rng: random.Random, density: float) -> List[List[Coord]]:
    """Classify unstable ground and schedule landslides.

    Unstable ground becomes rubble; unstable diggable rock is filed into the
    bucket for its tier (1..3 -> index 0..2).
    """
    fill_noise(grid, "landslide", rng, density)
    speleogenesis(grid, "landslide")
    details(grid, "landslide", LANDSLIDE_TIERS, rng)
    return classify_landslides(grid)


def classify_landslides(grid: Grid) -> List[List[Coord]]:
    size = len(grid)
    buckets: List[List[Coord]] = [[] for _ in range(LANDSLIDE_TIERS)]
    for i, j in interior(size):
        tile = grid[i][j]
        if tile.landslide <= 0:
            continue
        if tile.type == GROUND:
            tile.type = RUBBLE
        if 0 < tile.type < SOLID_ROCK:
            buckets[tile.landslide - 1].append((i, j))
    return buckets


__all__ = ["LANDSLIDE_TIERS", "create_flow_list", "create_landslide_list", "classify_landslides"]
