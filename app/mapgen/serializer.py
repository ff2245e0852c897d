"""Level file serialization.

Renders a finished :class:`~app.mapgen.pipeline.Mapgen` into the
block-structured text format (``name{`` ... ``}``) read by the game. The
function is pure: it only reads generator state.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, List

from .cells import Coord
from .connectivity import count_accessible_crystals, find_caves
from .hazards import wires
from .tiles import OUTPUT_CODES, UNDISCOVERED_OFFSET

if TYPE_CHECKING:  # pragma: no cover
    from .pipeline import Mapgen

CREATOR = "Map Generator for Manic Miners"
EROSION_INITIAL_WAIT = 10
OBJECTIVE_CAP = 999
# Reachable crystals needed before vehicles (which cross liquids) count
VEHICLE_CRYSTALS = 14
TILE_SIZE = 300
CHUNK = 8

CREATURES = {
    "ice": "CreatureIceMonster_C",
    "rock": "CreatureRockMonster_C",
    "lava": "CreatureLavaMonster_C",
}


class LevelNotGeneratedError(RuntimeError):
    """Raised when serializing a generator that has no successful map."""


def objective_crystals(mapgen: "Mapgen") -> int:
    """Half the reachable crystals, capped at 999."""
    count = count_accessible_crystals(mapgen.grid, mapgen.base, vehicles=False)
    if count >= VEHICLE_CRYSTALS:
        count = count_accessible_crystals(mapgen.grid, mapgen.base, vehicles=True)
    return min(count // 2, OBJECTIVE_CAP)


def _block(name: str, lines: List[str]) -> str:
    return f"{name}{{\n" + "".join(line + "\n" for line in lines) + "}\n"


def _grid_rows(rows) -> List[str]:
    return ["".join(f"{v}," for v in row) for row in rows]


def _event_lines(buckets: List[List[Coord]], interval: int) -> List[str]:
    lines = []
    for index, bucket in enumerate(buckets, start=1):
        if bucket:
            lines.append(f"{index * interval}:" + "".join(f"{j},{i}/" for i, j in bucket))
    return lines


def _power_path(size: int, row: int, col: int) -> str:
    chunk = (size // CHUNK) * (row // CHUNK) + col // CHUNK
    return f"X={chunk} Y={row % CHUNK} Z={col % CHUNK}"


def info_block(mapgen: "Mapgen") -> str:
    r, c = mapgen.base
    z = mapgen.height[r][c]
    lines = [
        f"rowcount:{mapgen.size}",
        f"colcount:{mapgen.size}",
        f"camerapos:Translation: X={c * TILE_SIZE + TILE_SIZE} Y={r * TILE_SIZE + TILE_SIZE} Z={z}"
        " Rotation: P=44.999992 Y=180.000000 R=0.000000 Scale X=1.000 Y=1.000 Z=1.000",
        f"biome:{mapgen.config.biome}",
        f"creator:{CREATOR}",
    ]
    if mapgen.oxygen:
        lines.append(f"oxygen:{mapgen.oxygen}/{mapgen.oxygen}")
    lines.append(f"levelname:{mapgen.config.level_name}")
    lines.append(f"erosioninitialwaittime:{EROSION_INITIAL_WAIT}")
    return _block("info", lines)


def tiles_block(mapgen: "Mapgen") -> str:
    converted = [[OUTPUT_CODES[t.type] for t in row] for row in mapgen.grid]
    for cave in find_caves(mapgen.grid, mapgen.base):
        for i, j in cave:
            converted[i][j] += UNDISCOVERED_OFFSET
    return _block("tiles", _grid_rows(converted))


def height_block(mapgen: "Mapgen") -> str:
    return _block("height", _grid_rows([[math.floor(h) for h in row] for row in mapgen.height]))


def resources_block(mapgen: "Mapgen") -> str:
    lines = ["crystals:"]
    lines += _grid_rows([[t.crystals for t in row] for row in mapgen.grid])
    lines.append("ore:")
    lines += _grid_rows([[t.ore for t in row] for row in mapgen.grid])
    return _block("resources", lines)


def buildings_block(mapgen: "Mapgen") -> str:
    r, c = mapgen.base
    z = mapgen.height[r][c]
    lines = [
        "BuildingToolStore_C",
        f"Translation: X={c * TILE_SIZE + TILE_SIZE // 2} Y={r * TILE_SIZE + TILE_SIZE // 2} Z={z}"
        " Rotation: P=0.000000 Y=89.999992 R=0.000000 Scale X=1.000 Y=1.000 Z=1.000",
        "Level=1",
        "Teleport=True",
        "Health=MAX",
        f"Powerpaths={_power_path(mapgen.size, r, c)}/{_power_path(mapgen.size, r + 1, c)}/",
    ]
    return _block("buildings", lines)


def blocks_block(mapgen: "Mapgen") -> str:
    creature = CREATURES[mapgen.config.biome]
    entries = []
    for row in mapgen.grid:
        for t in row:
            if t.emerge_id:
                entries.append((t.emerge_id, f"{t.emerge_id}/EventEmergeCreature:{t.row},{t.col},A,{creature},0"))
            if t.trigger_id:
                entries.append((t.trigger_id, f"{t.trigger_id}/TriggerEnter:{t.row},{t.col},true,true,false"))
    entries.sort(key=lambda e: e[0])
    lines = [line for _, line in entries]
    lines += [f"{trigger_id}-{emerge_id}" for trigger_id, emerge_id in wires(mapgen.grid)]
    return _block("blocks", lines)


def serialize(mapgen: "Mapgen") -> str:
    """Return the full level text for a successfully generated map."""
    if mapgen.base is None or not mapgen.grid:
        raise LevelNotGeneratedError(f"no level generated for seed {mapgen.seed!r}")
    objective = objective_crystals(mapgen)
    cfg = mapgen.config
    parts = [
        info_block(mapgen),
        tiles_block(mapgen),
        height_block(mapgen),
        resources_block(mapgen),
        _block("objectives", [f"resources: {objective},0,0"]),
        buildings_block(mapgen),
        _block("landslideFrequency", _event_lines(mapgen.landslide_list, cfg.landslide_interval)),
        _block("lavaspread", _event_lines(mapgen.flow_list, cfg.flow_interval)),
        _block("miners", []),
        _block("briefing", [f"You must collect {objective} energy crystals.  "]),
        _block("briefingsuccess", [f"Mission complete! You collected {objective} energy crystals."]),
        _block("briefingfailure", [f"Mission failed. The {objective} energy crystals remain buried."]),
        blocks_block(mapgen),
        _block("script", []),
    ]
    return "".join(parts)


__all__ = ["LevelNotGeneratedError", "serialize", "objective_crystals", "CREATURES"]
