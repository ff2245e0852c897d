from typing import List, Tuple

from .tiles import UNSET

# Scalar field states shared by the shaping passes. Cells a fill pass never
# touches keep UNDECIDED, which the shaper reads as filled.
EMPTY = 0
FILLED = -1
UNDECIDED = FILLED

NOISE_FIELDS = ("wall", "solid", "crystals", "ore", "recharge", "landslide", "erosion", "slug", "monster")


class Tile:
    """Generation state for a single grid cell."""

    __slots__ = (
        "row",
        "col",
        "type",
        "wall",
        "solid",
        "crystals",
        "ore",
        "recharge",
        "landslide",
        "erosion",
        "slug",
        "monster",
        "trigger_id",
        "emerge_id",
        "triggers",
    )

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.type = UNSET
        for name in NOISE_FIELDS:
            setattr(self, name, UNDECIDED)
        self.trigger_id = 0
        self.emerge_id = 0
        self.triggers: List[Tuple[int, int]] = []

    def add_trigger(self, target: Tuple[int, int]) -> None:
        self.triggers.append(target)

    def __repr__(self):
        return f"Tile({self.row}, {self.col}, type={self.type})"


Grid = List[List[Tile]]
Coord = Tuple[int, int]
ElevationField = List[List[float]]


def new_grid(size: int) -> Grid:
    return [[Tile(i, j) for j in range(size)] for i in range(size)]


def new_elevation(size: int, fill: float = 0) -> ElevationField:
    """Return a zeroed corner field for a ``size`` x ``size`` grid."""
    return [[fill for _ in range(size + 1)] for _ in range(size + 1)]


def field_snapshot(grid: Grid, field: str) -> List[List[int]]:
    return [[getattr(t, field) for t in row] for row in grid]


def corner_sum(height: ElevationField, row: int, col: int) -> float:
    """Sum of the four corners of tile (row, col). Not really elevation but close enough."""
    return height[row][col] + height[row + 1][col] + height[row][col + 1] + height[row + 1][col + 1]


def count_types(grid: Grid) -> dict:
    counts: dict = {}
    for row in grid:
        for t in row:
            counts[t.type] = counts.get(t.type, 0) + 1
    return counts
