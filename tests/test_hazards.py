import random

from app.mapgen.hazards import place_monsters, trigger_candidates, wires
from app.mapgen.tiles import DIRT, GROUND, SOLID_ROCK

EMERGE = (1, 2, 3)
TRIGGER = (0, 8)


def test_trigger_candidates_clip_and_exclude_emerge(grid_factory):
    grid = grid_factory(8, GROUND)
    assert len(trigger_candidates(grid, (0, 0), TRIGGER)) == 15
    found = trigger_candidates(grid, (4, 4), TRIGGER)
    assert len(found) == 48 and (4, 4) not in found


def test_monsters_wire_to_single_trigger(grid_factory):
    grid = grid_factory(8, DIRT)
    grid[4][4].type = GROUND

    emerges, triggers = place_monsters(grid, random.Random(1), 1.0, EMERGE, TRIGGER)

    assert (emerges, triggers) == (35, 1)
    hub = grid[4][4]
    assert hub.trigger_id and not hub.emerge_id
    assert len(hub.triggers) == 35
    pairs = wires(grid)
    assert {t for t, _ in pairs} == {hub.trigger_id}
    assert len({e for _, e in pairs}) == 35


def test_ids_unique_across_emerges_and_triggers(grid_factory):
    grid = grid_factory(8, DIRT)
    grid[4][4].type = GROUND
    place_monsters(grid, random.Random(1), 1.0, EMERGE, TRIGGER)
    ids = [t.emerge_id for row in grid for t in row if t.emerge_id]
    ids += [t.trigger_id for row in grid for t in row if t.trigger_id]
    assert sorted(ids) == list(range(1, 37))
    # first spiral cell claims the first id
    assert grid[3][3].emerge_id == 1


def test_draws_do_not_depend_on_eligibility(grid_factory, seq_rng):
    grid = grid_factory(8, DIRT)
    for j in range(1, 7):
        grid[2][j].type = SOLID_ROCK
    rng = seq_rng(default=0.0)
    place_monsters(grid, rng, 1.0, EMERGE, TRIGGER)
    # 36 noise draws plus one pick per habitat cell
    assert rng.calls == 72


def test_no_habitat_without_density(grid_factory):
    grid = grid_factory(8, DIRT)
    grid[4][4].type = GROUND
    assert place_monsters(grid, random.Random(1), 0.0, EMERGE, TRIGGER) == (0, 0)
    assert wires(grid) == []
