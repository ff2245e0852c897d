# Tile type constants centralized for modular imports
UNSET = -1
GROUND = 0
DIRT = 1
LOOSE_ROCK = 2
HARD_ROCK = 3
SOLID_ROCK = 4
WATER = 6
LAVA = 7
RUBBLE = 8
SLUG_HOLE = 9
CRYSTAL_SEAM = 10
ORE_SEAM = 11
RECHARGE_SEAM = 12
POWER_PATH = 13

TILE_NAMES = {
    GROUND: "ground",
    DIRT: "dirt",
    LOOSE_ROCK: "loose_rock",
    HARD_ROCK: "hard_rock",
    SOLID_ROCK: "solid_rock",
    WATER: "water",
    LAVA: "lava",
    RUBBLE: "rubble",
    SLUG_HOLE: "slug_hole",
    CRYSTAL_SEAM: "crystal_seam",
    ORE_SEAM: "ore_seam",
    RECHARGE_SEAM: "recharge_seam",
    POWER_PATH: "power_path",
}

# Internal type -> level file tile code
OUTPUT_CODES = {
    GROUND: 1,
    DIRT: 26,
    LOOSE_ROCK: 30,
    HARD_ROCK: 34,
    SOLID_ROCK: 38,
    WATER: 11,
    LAVA: 6,
    RUBBLE: 63,
    SLUG_HOLE: 12,
    CRYSTAL_SEAM: 42,
    ORE_SEAM: 46,
    RECHARGE_SEAM: 50,
    POWER_PATH: 14,
}
UNDISCOVERED_OFFSET = 100

DIGGABLE = (DIRT, LOOSE_ROCK, HARD_ROCK)
LIQUIDS = (WATER, LAVA)

# Walkable by miners; vehicles additionally cross liquids
ACCESSIBLE = (GROUND, DIRT, LOOSE_ROCK, HARD_ROCK, RUBBLE, SLUG_HOLE, CRYSTAL_SEAM, ORE_SEAM, POWER_PATH)
ACCESSIBLE_VEHICLES = ACCESSIBLE + LIQUIDS
# Open floor used when searching for undiscovered caverns
OPEN_FLOOR = (GROUND, WATER, LAVA, RUBBLE, SLUG_HOLE, POWER_PATH)

__all__ = [
    "UNSET",
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
    "TILE_NAMES",
    "OUTPUT_CODES",
    "UNDISCOVERED_OFFSET",
    "DIGGABLE",
    "LIQUIDS",
    "ACCESSIBLE",
    "ACCESSIBLE_VEHICLES",
    "OPEN_FLOOR",
]
