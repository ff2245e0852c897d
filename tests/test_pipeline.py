import pytest

from app.mapgen import NO_BASE_SITE, NO_OPEN_SPACE, LevelNotGeneratedError, Mapgen, MapgenConfig
from app.mapgen import generate_with_retries, round_size
from app.mapgen.cells import EMPTY
from app.mapgen.connectivity import field_regions
from app.mapgen.placement import footprint
from app.mapgen.tiles import CRYSTAL_SEAM, DIGGABLE, GROUND, LAVA, ORE_SEAM, POWER_PATH


def _tiles_block(text):
    start = text.index("tiles{\n")
    return text[start : text.index("}\n", start)]


@pytest.fixture(scope="module")
def gen42():
    gen = Mapgen(seed="42", size=32)
    assert gen.generate()
    return gen


def test_round_size():
    assert round_size(1) == 8
    assert round_size(32) == 32
    assert round_size(33) == 40
    with pytest.raises(ValueError):
        round_size(0)


def test_round_trip_is_deterministic(gen42):
    again = Mapgen(seed="42", size=32)
    assert again.generate()
    assert _tiles_block(again.to_level()) == _tiles_block(gen42.to_level())
    assert again.to_level() == gen42.to_level()


def test_int_and_str_seeds_generate_same_level(gen42):
    gen = Mapgen(seed=42, size=32)
    assert gen.generate()
    assert gen.to_level() == gen42.to_level()


def test_different_seeds_differ(gen42):
    other = Mapgen(seed="43", size=32)
    other.generate()
    assert [[t.type for t in row] for row in other.grid] != [[t.type for t in row] for row in gen42.grid]


def test_single_open_region(gen42):
    assert len(field_regions(gen42.grid, "solid")) == 1


def test_base_footprint(gen42):
    r, c = gen42.base
    assert gen42.grid[r][c].type == POWER_PATH
    assert gen42.grid[r + 1][c].type == POWER_PATH
    assert gen42.grid[r][c + 1].type == GROUND
    assert gen42.grid[r + 1][c + 1].type == GROUND
    assert len({gen42.height[i][j] for i, j in footprint(gen42.base)}) == 1


def test_resource_counts_bounded(gen42):
    for row in gen42.grid:
        for t in row:
            assert 0 <= t.crystals <= 5
            assert 0 <= t.ore <= 4
            if t.type not in DIGGABLE + (CRYSTAL_SEAM, ORE_SEAM):
                assert t.crystals == 0 and t.ore == 0


def test_edges_stay_solid(gen42):
    size = gen42.size
    edge = [gen42.grid[0][j].type for j in range(size)] + [gen42.grid[i][0].type for i in range(size)]
    assert GROUND not in edge


def test_oxygen_defaults_to_area(gen42):
    assert gen42.oxygen == 32 * 32 * 3
    assert Mapgen(seed="1", size=16, config=MapgenConfig(oxygen=500)).oxygen == 500


def test_metrics_collected(gen42):
    m = gen42.metrics
    assert m["base"] == list(gen42.base)
    assert m["failure_reason"] is None
    assert m["landslides"] == sum(len(b) for b in gen42.landslide_list)
    assert "solid" in m["phase_ms"] and "choose_base" in m["phase_ms"]
    assert sum(v for k, v in m.items() if k.startswith("tiles_")) == 32 * 32


def test_metrics_can_be_disabled(monkeypatch):
    monkeypatch.setenv("MAPGEN_ENABLE_METRICS", "0")
    gen = Mapgen(seed="42", size=16)
    gen.generate()
    assert gen.metrics == {}


def test_solid_walls_fail_without_base():
    gen = Mapgen(seed="42", size=32, config=MapgenConfig(wall_density=1.0))
    assert gen.generate() is False
    assert gen.base is None
    assert gen.failure_reason == NO_BASE_SITE
    assert gen.metrics["failure_reason"] == NO_BASE_SITE
    with pytest.raises(LevelNotGeneratedError):
        gen.to_level()


def test_solid_rock_everywhere_is_unplayable():
    gen = Mapgen(seed="42", size=16, config=MapgenConfig(solid_density=1.0))
    assert gen.generate() is False
    assert gen.failure_reason == NO_OPEN_SPACE


def test_generate_resets_state(gen42):
    gen = Mapgen(seed="42", size=32)
    gen.generate()
    first = gen.to_level()
    gen.generate()
    assert gen.to_level() == first


def test_retries_derive_seeds():
    gen = generate_with_retries("cave", 16, MapgenConfig(wall_density=1.0), attempts=3)
    assert not gen.succeeded
    assert gen.seed == "cave-2"


def test_retries_return_first_success():
    gen = generate_with_retries("42", 32, attempts=3)
    assert gen.succeeded and gen.seed == "42"


def test_lava_floods_build_flow_list():
    cfg = MapgenConfig(flood_type=LAVA, flow_density=0.05, flood_level=0.5)
    gen = Mapgen(seed="lava", size=32, config=cfg)
    gen.generate()
    assert gen.flow_list
    assert all(gen.grid[i][j].type == LAVA for i, j in (flow[0] for flow in gen.flow_list))


def test_water_floods_skip_erosion(gen42):
    assert gen42.flow_list == []


def test_invalid_config_rejected_up_front():
    with pytest.raises(ValueError):
        Mapgen(seed="1", config=MapgenConfig(ore_density=2.0))


def test_solid_field_is_open_where_not_solid_rock(gen42):
    assert all(t.solid == EMPTY or t.type != GROUND for row in gen42.grid for t in row)
