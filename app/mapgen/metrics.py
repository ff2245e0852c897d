from typing import Any, Dict

from .cells import Grid, count_types
from .tiles import TILE_NAMES


def init_metrics() -> Dict[str, Any]:
    return {
        'flow_waves': 0,
        'landslides': 0,
        'emerge_count': 0,
        'trigger_count': 0,
        'flooded_tiles': 0,
        'slug_holes': 0,
        'crystal_seams': 0,
        'ore_seams': 0,
        'recharge_seams': 0,
        'undiscovered_caves': 0,
        'base': None,
        'failure_reason': None,
        'runtime_ms': 0,
    }


def tile_counts(grid: Grid) -> Dict[str, int]:
    counts = count_types(grid)
    return {f'tiles_{name}': counts.get(code, 0) for code, name in TILE_NAMES.items()}
