"""Public map generator package interface."""

from .config import BIOMES, MapgenConfig
from .pipeline import NO_BASE_SITE, NO_OPEN_SPACE, Mapgen, generate_with_retries, round_size
from .serializer import LevelNotGeneratedError, serialize
from .tiles import (
    CRYSTAL_SEAM,
    DIRT,
    GROUND,
    HARD_ROCK,
    LAVA,
    LOOSE_ROCK,
    ORE_SEAM,
    POWER_PATH,
    RECHARGE_SEAM,
    RUBBLE,
    SLUG_HOLE,
    SOLID_ROCK,
    WATER,
)  # noqa: F401

__all__ = [
    "Mapgen",
    "MapgenConfig",
    "BIOMES",
    "NO_BASE_SITE",
    "NO_OPEN_SPACE",
    "LevelNotGeneratedError",
    "generate_with_retries",
    "round_size",
    "serialize",
    "GROUND",
    "DIRT",
    "LOOSE_ROCK",
    "HARD_ROCK",
    "SOLID_ROCK",
    "WATER",
    "LAVA",
    "RUBBLE",
    "SLUG_HOLE",
    "CRYSTAL_SEAM",
    "ORE_SEAM",
    "RECHARGE_SEAM",
    "POWER_PATH",
]
