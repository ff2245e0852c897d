import random

import pytest

from app.mapgen.config import BIOMES, MapgenConfig
from app.mapgen.tiles import LAVA, WATER


def test_defaults_are_valid():
    cfg = MapgenConfig()
    cfg.validate()
    assert cfg.flood_type == WATER
    assert cfg.liquid_name == "water"


def test_from_mapping_coerces_strings():
    cfg = MapgenConfig.from_mapping(
        {"flood_type": "lava", "wall_density": "0.5", "pre_flow": "3", "emerge_types": "1,2", "biome": "ice"}
    )
    assert cfg.flood_type == LAVA and cfg.liquid_name == "lava"
    assert cfg.wall_density == 0.5
    assert cfg.pre_flow == 3
    assert cfg.emerge_types == (1, 2)
    assert cfg.biome == "ice"


def test_from_mapping_keeps_base_values():
    base = MapgenConfig(biome="lava", slug_density=0.2)
    cfg = MapgenConfig.from_mapping({"monster_density": 0.1}, base=base)
    assert cfg.biome == "lava" and cfg.slug_density == 0.2 and cfg.monster_density == 0.1
    assert base.monster_density == 0.05


@pytest.mark.parametrize(
    "mapping",
    [
        {"no_such_option": "1"},
        {"wall_density": "1.5"},
        {"wall_density": "dense"},
        {"flood_type": "mud"},
        {"biome": "moon"},
        {"height_algo": "ridges"},
        {"pre_flow": "-1"},
        {"oxygen": "-7"},
        {"level_name": "x\n}\nscript{"},
        {"level_name": "two\rlines"},
        {"level_name": "open { brace"},
        {"level_name": "close } brace"},
    ],
)
def test_from_mapping_rejects_bad_input(mapping):
    with pytest.raises(ValueError):
        MapgenConfig.from_mapping(mapping)


def test_shuffled_is_seeded_and_valid():
    a = MapgenConfig.shuffled(random.Random("7"))
    b = MapgenConfig.shuffled(random.Random("7"))
    assert a == b
    a.validate()
    assert a.biome in BIOMES
    assert a.flood_type in (WATER, LAVA)
    assert 3 <= a.pre_flow <= 8


def test_to_dict_uses_lists():
    d = MapgenConfig().to_dict()
    assert d["emerge_types"] == [1, 2, 3]
    assert d["trigger_types"] == [0, 8]
    assert d["level_name"] == "Generated Level"


@pytest.mark.parametrize("oxygen", [-1, 0, 500])
def test_oxygen_auto_and_explicit_values_are_valid(oxygen):
    assert MapgenConfig.from_mapping({"oxygen": str(oxygen)}).oxygen == oxygen


def test_plain_level_name_is_accepted():
    cfg = MapgenConfig.from_mapping({"level_name": "  Deep Cave (v2)  "})
    assert cfg.level_name == "Deep Cave (v2)"


def test_validate_catches_direct_assignment():
    cfg = MapgenConfig(level_name="a}b")
    with pytest.raises(ValueError, match="level_name"):
        cfg.validate()
    cfg = MapgenConfig(oxygen=-2)
    with pytest.raises(ValueError, match="oxygen"):
        cfg.validate()
