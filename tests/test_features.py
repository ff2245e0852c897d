import random

from app.mapgen.features import add_recharge_seams, add_seams, add_slug_holes, strip_invalid_resources
from app.mapgen.tiles import CRYSTAL_SEAM, DIRT, GROUND, RECHARGE_SEAM, SLUG_HOLE, SOLID_ROCK, WATER


def test_strip_invalid_resources(grid_factory):
    grid = grid_factory(8, GROUND, crystals=3, ore=2)
    grid[2][2].type = DIRT
    grid[3][3].type = WATER
    strip_invalid_resources(grid)
    assert (grid[2][2].crystals, grid[2][2].ore) == (3, 2)
    assert (grid[3][3].crystals, grid[3][3].ore) == (0, 0)
    assert grid[1][1].crystals == 0


def test_slug_holes_density_extremes(grid_factory):
    grid = grid_factory(8, SOLID_ROCK)
    for i in range(1, 7):
        for j in range(1, 7):
            grid[i][j].type = GROUND
    assert add_slug_holes(grid, random.Random(1), 0.0) == 0
    assert grid[3][3].type == GROUND

    assert add_slug_holes(grid, random.Random(1), 1.0) == 36
    assert all(grid[i][j].type == SLUG_HOLE for i in range(1, 7) for j in range(1, 7))


def test_slug_holes_default_on_edges(grid_factory):
    # edges are never drawn, so open edge ground always gets a hole
    grid = grid_factory(8, GROUND)
    assert add_slug_holes(grid, random.Random(1), 0.0) == 28
    assert grid[0][0].type == SLUG_HOLE and grid[3][3].type == GROUND


def test_slug_holes_only_on_ground(grid_factory):
    grid = grid_factory(8, DIRT)
    assert add_slug_holes(grid, random.Random(1), 1.0) == 0


def test_seams_need_rich_cells(grid_factory):
    grid = grid_factory(8, DIRT, crystals=2)
    grid[3][3].crystals = 3
    grid[4][4].crystals = 5
    placed = add_seams(grid, random.Random(1), "crystals", 1.0, CRYSTAL_SEAM)
    assert placed == 2
    assert grid[3][3].type == CRYSTAL_SEAM and grid[4][4].type == CRYSTAL_SEAM
    assert grid[2][2].type == DIRT


def test_seams_zero_density(grid_factory):
    grid = grid_factory(8, DIRT, crystals=5)
    assert add_seams(grid, random.Random(1), "crystals", 0.0, CRYSTAL_SEAM) == 0


def test_recharge_seams_on_exposed_faces(grid_factory):
    grid = grid_factory(8, SOLID_ROCK)
    grid[4][4].type = GROUND
    placed = add_recharge_seams(grid, random.Random(3), 1.0)

    # Faces facing the hole first
    assert grid[3][4].type == RECHARGE_SEAM
    assert grid[4][3].type == RECHARGE_SEAM
    # Seams are written in place, so later cells see earlier seams as open
    # faces: (3,5) follows (3,4) and (5,3) follows (4,3).
    assert grid[3][5].type == RECHARGE_SEAM
    assert grid[5][3].type == RECHARGE_SEAM
    # (3,5) turned before (4,5) was visited, so (4,5) lost its vertical
    # flank; (5,4) lost its horizontal one to (5,3).
    assert grid[4][5].type == SOLID_ROCK
    assert grid[5][4].type == SOLID_ROCK

    seams = {(i, j) for i in range(8) for j in range(8) if grid[i][j].type == RECHARGE_SEAM}
    assert seams == {(3, 4), (3, 5), (3, 6), (4, 3), (4, 6), (5, 3), (5, 6), (6, 3), (6, 4), (6, 5)}
    assert placed == len(seams)
    # buried rock never becomes a seam
    assert grid[1][1].type == SOLID_ROCK


def test_recharge_seams_zero_density(grid_factory):
    grid = grid_factory(8, SOLID_ROCK)
    grid[4][4].type = GROUND
    assert add_recharge_seams(grid, random.Random(3), 0.0) == 0
