from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from .elevation import HEIGHT_ALGORITHMS, HEIGHT_SQUARES
from .seeds import randint_range
from .tiles import DIRT, GROUND, HARD_ROCK, LAVA, LOOSE_ROCK, RUBBLE, WATER

BIOMES = ("ice", "rock", "lava")
# level_name is written raw into the info block
_LEVEL_NAME_FORBIDDEN = ("\n", "\r", "{", "}")
LIQUIDS = {"water": WATER, "lava": LAVA}

_DENSITY_FIELDS = (
    "solid_density",
    "wall_density",
    "ore_density",
    "crystal_density",
    "ore_seam_density",
    "crystal_seam_density",
    "recharge_seam_density",
    "flood_level",
    "flow_density",
    "landslide_density",
    "slug_density",
    "monster_density",
)


@dataclass
class MapgenConfig:
    # Walls
    solid_density: float = 0.3
    wall_density: float = 0.45
    ore_density: float = 0.45
    crystal_density: float = 0.35
    ore_seam_density: float = 0.12
    crystal_seam_density: float = 0.25
    recharge_seam_density: float = 0.05
    # Water/Lava
    flood_level: float = 0.3
    flood_type: int = WATER
    # Erosion
    flow_density: float = 0.0025
    flow_interval: int = 100
    pre_flow: int = 5
    # Landslides
    landslide_density: float = 0.2
    landslide_interval: int = 50
    # Slugs
    slug_density: float = 0.1
    # Monsters
    monster_density: float = 0.05
    emerge_types: Tuple[int, ...] = (DIRT, LOOSE_ROCK, HARD_ROCK)
    trigger_types: Tuple[int, ...] = (GROUND, RUBBLE)
    # Height
    height_algo: str = HEIGHT_SQUARES
    height_range: int = 12
    height_square_width: int = 8
    # -1 = size * size * 3
    oxygen: int = -1
    biome: str = "rock"
    level_name: str = "Generated Level"

    @classmethod
    def shuffled(cls, rng: random.Random) -> "MapgenConfig":
        """Draw a fresh parameter set, one value per parameter in declaration order."""
        return cls(
            solid_density=rng.random() * 0.3 + 0.2,
            wall_density=rng.random() * 0.3 + 0.3,
            ore_density=rng.random() * 0.3 + 0.3,
            crystal_density=rng.random() * 0.3 + 0.2,
            ore_seam_density=rng.random() * 0.25,
            crystal_seam_density=rng.random() * 0.5,
            recharge_seam_density=rng.random() * 0.08 + 0.01,
            flood_level=rng.random() * 0.75,
            flood_type=randint_range(rng, WATER, LAVA + 1),
            flow_density=rng.random() * 0.005,
            flow_interval=randint_range(rng, 20, 181),
            pre_flow=randint_range(rng, 3, 9),
            landslide_density=rng.random() * 0.4,
            landslide_interval=randint_range(rng, 10, 91),
            slug_density=rng.random() * 0.2,
            monster_density=rng.random() * 0.1,
            height_range=randint_range(rng, 1, 26),
            biome=BIOMES[randint_range(rng, 0, len(BIOMES))],
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], base: "MapgenConfig | None" = None) -> "MapgenConfig":
        """Build a config from loosely typed values (query args, CLI ``key=value`` pairs).

        Values are coerced by field type. ``flood_type`` also accepts
        ``water``/``lava``; tuple fields accept comma separated ints.
        Unknown keys raise ValueError.
        """
        cfg = dataclasses.replace(base) if base is not None else cls()
        names = {f.name for f in dataclasses.fields(cls)}
        for key, raw in mapping.items():
            if key not in names:
                raise ValueError(f"unknown config option: {key}")
            setattr(cfg, key, _coerce(key, getattr(cfg, key), raw))
        cfg.validate()
        return cfg

    @property
    def liquid_name(self) -> str:
        return "lava" if self.flood_type == LAVA else "water"

    def validate(self) -> None:
        for name in _DENSITY_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.flood_type not in LIQUIDS.values():
            raise ValueError(f"flood_type must be water ({WATER}) or lava ({LAVA}), got {self.flood_type}")
        if self.biome not in BIOMES:
            raise ValueError(f"biome must be one of {', '.join(BIOMES)}, got {self.biome!r}")
        if self.height_algo not in HEIGHT_ALGORITHMS:
            raise ValueError(f"height_algo must be one of {', '.join(HEIGHT_ALGORITHMS)}, got {self.height_algo!r}")
        if self.height_range < 0 or self.height_square_width < 1:
            raise ValueError("height_range must be >= 0 and height_square_width >= 1")
        if self.pre_flow < 0 or self.flow_interval < 0 or self.landslide_interval < 0:
            raise ValueError("pre_flow and event intervals must be non-negative")
        if self.oxygen < -1:
            raise ValueError(f"oxygen must be -1 (auto) or non-negative, got {self.oxygen}")
        if any(ch in self.level_name for ch in _LEVEL_NAME_FORBIDDEN):
            raise ValueError("level_name must be a single line without braces")

    def to_dict(self) -> dict:
        d = dataclasses.asdict(self)
        d["emerge_types"] = list(self.emerge_types)
        d["trigger_types"] = list(self.trigger_types)
        return d


def _coerce(key: str, current: Any, raw: Any) -> Any:
    if not isinstance(raw, str):
        return tuple(raw) if isinstance(current, tuple) else raw
    s = raw.strip()
    try:
        if key == "flood_type" and s.lower() in LIQUIDS:
            return LIQUIDS[s.lower()]
        if isinstance(current, tuple):
            return tuple(int(p) for p in s.split(",") if p.strip())
        if isinstance(current, bool):
            return s.lower() in ("1", "true", "yes", "on")
        if isinstance(current, int):
            return int(s)
        if isinstance(current, float):
            return float(s)
    except ValueError:
        raise ValueError(f"invalid value for {key}: {raw!r}") from None
    return s


__all__ = ["MapgenConfig", "BIOMES", "LIQUIDS"]
