"""Spiral traversal from the map centre outward.

Per-cell random draws are consumed in this order so the centre of a map
generates the same way at different map sizes.
"""
from __future__ import annotations

from typing import Iterator, Tuple


def spiral(size: int, border: int = 1) -> Iterator[Tuple[int, int]]:
    """Yield ``(row, col)`` ring by ring, innermost ring first.

    ``border`` is the outermost ring visited: 1 skips the map edge, 0 covers
    the whole map and negative values run past the edge (callers clip).
    Each ring starts at ``(layer, layer)`` and walks rows down, columns
    right, rows up, then columns left.
    """
    for layer in range(size // 2 - 1, border - 1, -1):
        far = size - layer - 1
        direction = 0
        row = col = layer
        while True:
            yield row, col
            if direction == 0:
                row += 1
                if row >= far:
                    direction = 1
            elif direction == 1:
                col += 1
                if col >= far:
                    direction = 2
            elif direction == 2:
                row -= 1
                if row <= layer:
                    direction = 3
            else:
                col -= 1
                if col <= layer:
                    direction = 0
            if row == layer and col == layer:
                break


def interior(size: int) -> Iterator[Tuple[int, int]]:
    """Row-major walk over every cell not on the map edge."""
    for i in range(1, size - 1):
        for j in range(1, size - 1):
            yield i, j


__all__ = ["spiral", "interior"]
