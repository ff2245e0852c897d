import random

import pytest

from app.mapgen.cells import new_elevation, new_grid
from app.mapgen.elevation import (
    HEIGHT_WAVES,
    build_height_map,
    fill_square,
    flood,
    flood_height,
    height_map_squares,
    height_map_waves,
)
from app.mapgen.tiles import DIRT, GROUND, LAVA, WATER


def test_height_maps_cover_every_corner():
    squares = height_map_squares(16, random.Random(1), 12, 8)
    waves = height_map_waves(16, random.Random(1), 12)
    for field in (squares, waves):
        assert len(field) == 17
        assert all(len(row) == 17 for row in field)


def test_height_map_is_seeded():
    a = build_height_map(16, random.Random("h"), HEIGHT_WAVES, 12, 8)
    b = build_height_map(16, random.Random("h"), HEIGHT_WAVES, 12, 8)
    assert a == b


def test_unknown_height_algorithm():
    with pytest.raises(ValueError):
        build_height_map(16, random.Random(1), "ridges", 12, 8)


def test_fill_square_clips_to_field():
    field = new_elevation(4)
    fill_square(0, 0, field, 2, 3)
    assert field[0][0] == 3 and field[1][1] == 3
    assert field[2][2] == 0
    assert sum(map(sum, field)) == 3 * 4


def test_flood_height_formula():
    assert flood_height(8, 12, 0.5) == 0
    assert flood_height(8, 12, 0.0) == -384
    assert flood_height(8, 12, 1.0) == 384


def test_flood_raises_corners_and_fills_submerged_ground():
    grid = new_grid(4)
    for row in grid:
        for t in row:
            t.type = GROUND
    grid[2][2].type = DIRT
    height = new_elevation(4, fill=10)
    for i, j in ((1, 1), (2, 1), (1, 2), (2, 2), (3, 2), (2, 3), (3, 3)):
        height[i][j] = -5

    flooded = flood(grid, height, 0, WATER)

    assert flooded == 1
    assert grid[1][1].type == WATER
    # all four corners at level, but only ground floods
    assert grid[2][2].type == DIRT
    assert all(h >= 0 for row in height for h in row)
    assert height[1][1] == 0 and height[0][0] == 10


def test_flood_with_lava():
    grid = new_grid(4)
    for row in grid:
        for t in row:
            t.type = GROUND
    height = new_elevation(4)
    assert flood(grid, height, 0, LAVA) == 16
    assert grid[0][0].type == LAVA
