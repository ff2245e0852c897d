"""Connectivity utilities: flood fill, largest-region isolation, reachability.

One breadth-first primitive (:func:`open_spaces`) serves three jobs: keeping
only the largest cavern after solid rock shaping, counting the crystals
reachable from the base and listing caverns the player has not discovered.
"""
from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, List, Optional

from .cells import EMPTY, FILLED, Coord, Grid
from .tiles import ACCESSIBLE, ACCESSIBLE_VEHICLES, OPEN_FLOOR
from .traversal import interior, spiral

ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))


def open_spaces(grid: Grid, is_open: Callable[[int, int], bool], corners: bool = False) -> List[List[Coord]]:
    """Return maximal connected open regions in discovery order.

    Regions are seeded from interior cells in row-major order; each region
    lists its coordinates in breadth-first order. ``corners`` adds diagonal
    adjacency.
    """
    size = len(grid)
    steps = ORTHOGONAL + DIAGONAL if corners else ORTHOGONAL
    checked = [[False] * size for _ in range(size)]
    spaces: List[List[Coord]] = []
    for i, j in interior(size):
        if checked[i][j] or not is_open(i, j):
            continue
        checked[i][j] = True
        space = [(i, j)]
        q = deque(space)
        while q:
            ci, cj = q.popleft()
            for di, dj in steps:
                ni, nj = ci + di, cj + dj
                if 0 <= ni < size and 0 <= nj < size and not checked[ni][nj] and is_open(ni, nj):
                    checked[ni][nj] = True
                    space.append((ni, nj))
                    q.append((ni, nj))
        spaces.append(space)
    return spaces


def field_regions(grid: Grid, field: str) -> List[List[Coord]]:
    """Orthogonally connected regions where ``field`` is EMPTY."""
    return open_spaces(grid, lambda i, j: getattr(grid[i][j], field) == EMPTY)


def isolate_largest_region(grid: Grid, field: str) -> bool:
    """Fill every open region of ``field`` except the largest.

    Returns False when there is no open region at all, meaning the map is
    unplayable. Ties keep the region discovered last.
    """
    spaces = field_regions(grid, field)
    if not spaces:
        return False
    spaces.sort(key=len)
    spaces.pop()
    for space in spaces:
        for i, j in space:
            setattr(grid[i][j], field, FILLED)
    return True


def _typed_mask(grid: Grid, types: Iterable[int]) -> List[List[bool]]:
    """Mark spiral (non-edge) cells whose type is in ``types``."""
    size = len(grid)
    allowed = set(types)
    mask = [[False] * size for _ in range(size)]
    for i, j in spiral(size):
        if grid[i][j].type in allowed:
            mask[i][j] = True
    return mask


def reachable_from(grid: Grid, start: Coord, types: Iterable[int]) -> List[Coord]:
    """Breadth-first walk from ``start`` over cells of the given types.

    ``start`` itself is always included, whatever its type.
    """
    size = len(grid)
    mask = _typed_mask(grid, types)
    si, sj = start
    seen = [[False] * size for _ in range(size)]
    seen[si][sj] = True
    visited = [start]
    q = deque(visited)
    while q:
        ci, cj = q.popleft()
        for di, dj in ORTHOGONAL:
            ni, nj = ci + di, cj + dj
            if 0 <= ni < size and 0 <= nj < size and mask[ni][nj] and not seen[ni][nj]:
                seen[ni][nj] = True
                visited.append((ni, nj))
                q.append((ni, nj))
    return visited


def count_accessible_crystals(grid: Grid, base: Coord, vehicles: bool = False) -> int:
    """Count crystals a player starting at ``base`` can reach.

    Vehicles can also cross water and lava.
    """
    types = ACCESSIBLE_VEHICLES if vehicles else ACCESSIBLE
    return sum(grid[i][j].crystals for i, j in reachable_from(grid, base, types))


def find_caves(grid: Grid, base: Optional[Coord]) -> List[List[Coord]]:
    """List open caverns (diagonals included) not connected to the base."""
    mask = _typed_mask(grid, OPEN_FLOOR)
    caves = open_spaces(grid, lambda i, j: mask[i][j], corners=True)
    if base is None:
        return caves
    return [cave for cave in caves if tuple(base) not in cave]


__all__ = [
    "open_spaces",
    "field_regions",
    "isolate_largest_region",
    "reachable_from",
    "count_accessible_crystals",
    "find_caves",
]
