"""Pipeline orchestration for cave level generation.

Provides the public Mapgen class: it owns one grid and elevation field per
``generate()`` call and runs the feature passes in a fixed order, each on its
own RNG stream derived from the master seed.
"""
from __future__ import annotations

import os
import time
from typing import Any, Dict, List, Optional

from app.logging_utils import get_logger

from .automaton import cleanup, details, fill_noise, speleogenesis
from .cells import FILLED, Coord, ElevationField, Grid, new_grid
from .config import MapgenConfig
from .connectivity import find_caves, isolate_largest_region
from .elevation import build_height_map, flood, flood_height
from .features import add_recharge_seams, add_seams, add_slug_holes, strip_invalid_resources
from .growth import LANDSLIDE_TIERS, create_flow_list, create_landslide_list
from .hazards import place_monsters
from .metrics import init_metrics, tile_counts
from .placement import choose_base, set_base
from .seeds import SeedBundle, SeedLike, fresh_rng, normalize_seed
from .tiles import CRYSTAL_SEAM, LAVA, ORE_SEAM, SOLID_ROCK

log = get_logger("mapgen")

CHUNK = 8

NO_OPEN_SPACE = "no_open_space"
NO_BASE_SITE = "no_base_site"


def round_size(size: int) -> int:
    """Round a size request up to the next whole chunk."""
    if size < 1:
        raise ValueError(f"size must be positive, got {size}")
    return (size + CHUNK - 1) // CHUNK * CHUNK


class Mapgen:
    def __init__(
        self,
        seed: Optional[SeedLike] = None,
        size: int = 32,
        config: Optional[MapgenConfig] = None,
        enable_metrics: Optional[bool] = None,
    ):
        self.seed = normalize_seed(seed)
        self.size = round_size(size)
        self._log = log.bind(seed=self.seed, size=self.size)
        self.config = config if config is not None else MapgenConfig()
        self.config.validate()
        if enable_metrics is None:
            enable_metrics = os.getenv("MAPGEN_ENABLE_METRICS", "1").lower() not in {"0", "false", "no", ""}
        self.enable_metrics = enable_metrics
        self.oxygen = self.config.oxygen if self.config.oxygen != -1 else self.size * self.size * 3
        self._reset()

    def _reset(self):
        self.grid: Grid = []
        self.height: ElevationField = []
        self.flow_list: List[List[Coord]] = []
        self.landslide_list: List[List[Coord]] = [[] for _ in range(LANDSLIDE_TIERS)]
        self.base: Optional[Coord] = None
        self.failure_reason: Optional[str] = None
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}

    @property
    def succeeded(self) -> bool:
        return self.base is not None

    def generate(self) -> bool:
        """Run every pass; returns False when the map is unplayable.

        Failure leaves the grid partially built and ``base`` unset. It is an
        expected outcome; retry with another seed.
        """
        self._reset()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            self._log.debug(event="mapgen_phase", phase=label, ms=phase_times[label])
            return r

        start = time.perf_counter()
        self._log.debug(event="mapgen_start")
        cfg = self.config
        seeds = SeedBundle.derive(self.seed)
        self.grid = new_grid(self.size)

        if not _phase("solid", self._solid_rock, seeds):
            return self._fail(NO_OPEN_SPACE, phase_times, start)
        _phase("walls", self._walls, seeds)
        _phase("ore", self._resource, "ore", seeds.ore, cfg.ore_density, 4)
        _phase("crystals", self._resource, "crystals", seeds.crystal, cfg.crystal_density, 5)
        self.height = _phase(
            "height",
            build_height_map,
            self.size,
            fresh_rng(seeds.height),
            cfg.height_algo,
            cfg.height_range,
            cfg.height_square_width,
        )
        level = flood_height(cfg.height_square_width, cfg.height_range, cfg.flood_level)
        flooded = _phase("flood", flood, self.grid, self.height, level, cfg.flood_type)
        strip_invalid_resources(self.grid)
        slugs = _phase("slugs", add_slug_holes, self.grid, fresh_rng(seeds.slug), cfg.slug_density)
        crystal_seams = _phase(
            "crystal_seams",
            add_seams,
            self.grid,
            fresh_rng(seeds.crystal_seam),
            "crystals",
            cfg.crystal_seam_density,
            CRYSTAL_SEAM,
        )
        ore_seams = _phase(
            "ore_seams", add_seams, self.grid, fresh_rng(seeds.ore_seam), "ore", cfg.ore_seam_density, ORE_SEAM
        )
        recharge = _phase(
            "recharge_seams", add_recharge_seams, self.grid, fresh_rng(seeds.recharge_seam), cfg.recharge_seam_density
        )
        if cfg.flood_type == LAVA:
            self.flow_list = _phase(
                "erosion",
                create_flow_list,
                self.grid,
                fresh_rng(seeds.erosion),
                cfg.flow_density,
                self.height,
                cfg.pre_flow,
                cfg.height_range,
            )
        self.landslide_list = _phase(
            "landslides", create_landslide_list, self.grid, fresh_rng(seeds.landslide), cfg.landslide_density
        )
        emerges, triggers = _phase(
            "monsters",
            place_monsters,
            self.grid,
            fresh_rng(seeds.monster),
            cfg.monster_density,
            cfg.emerge_types,
            cfg.trigger_types,
        )
        base = _phase("choose_base", choose_base, self.grid, fresh_rng(seeds.base))
        if base is None:
            return self._fail(NO_BASE_SITE, phase_times, start)
        set_base(base, self.grid, self.height)
        self.base = base

        runtime_ms = int((time.perf_counter() - start) * 1000)
        if self.enable_metrics:
            self.metrics.update(
                {
                    "flow_waves": len(self.flow_list),
                    "landslides": sum(len(b) for b in self.landslide_list),
                    "emerge_count": emerges,
                    "trigger_count": triggers,
                    "flooded_tiles": flooded,
                    "slug_holes": slugs,
                    "crystal_seams": crystal_seams,
                    "ore_seams": ore_seams,
                    "recharge_seams": recharge,
                    "undiscovered_caves": len(find_caves(self.grid, base)),
                    "base": list(base),
                    "runtime_ms": runtime_ms,
                    "phase_ms": phase_times,
                }
            )
            self.metrics.update(tile_counts(self.grid))
        self._log.info(event="mapgen_complete", base=f"{base[0]},{base[1]}", ms=runtime_ms)
        return True

    def _fail(self, reason: str, phase_times: Dict[str, int], start: float) -> bool:
        self.failure_reason = reason
        if self.enable_metrics:
            self.metrics["failure_reason"] = reason
            self.metrics["phase_ms"] = phase_times
            self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        self._log.warn(event="mapgen_failed", reason=reason)
        return False

    # ------------------------------------------------------------------
    # Terrain passes
    # ------------------------------------------------------------------
    def _solid_rock(self, seeds: SeedBundle) -> bool:
        rng = fresh_rng(seeds.solid)
        fill_noise(self.grid, "solid", rng, self.config.solid_density)
        speleogenesis(self.grid, "solid")
        cleanup(self.grid, "solid")
        return isolate_largest_region(self.grid, "solid")

    def _walls(self, seeds: SeedBundle) -> None:
        fill_noise(self.grid, "wall", fresh_rng(seeds.wall), self.config.wall_density)
        speleogenesis(self.grid, "wall")
        cleanup(self.grid, "wall")
        # Fresh RNG so the detail blur does not depend on how much noise was drawn
        details(self.grid, "wall", 3, fresh_rng(seeds.wall))
        for row in self.grid:
            for t in row:
                t.type = SOLID_ROCK if t.solid == FILLED else t.wall

    def _resource(self, field: str, seed: str, density: float, max_distance: int) -> None:
        fill_noise(self.grid, field, fresh_rng(seed), density)
        speleogenesis(self.grid, field)
        cleanup(self.grid, field)
        details(self.grid, field, max_distance, fresh_rng(seed))

    def to_level(self) -> str:
        from .serializer import serialize

        return serialize(self)


def generate_with_retries(
    seed: Optional[SeedLike] = None,
    size: int = 32,
    config: Optional[MapgenConfig] = None,
    attempts: int = 1,
) -> Mapgen:
    """Generate, retrying failed maps with derived seeds ``<seed>-1``, ``<seed>-2`` ...

    Returns the last Mapgen tried; check ``succeeded``.
    """
    base_seed = normalize_seed(seed)
    gen = Mapgen(seed=base_seed, size=size, config=config)
    for attempt in range(1, max(attempts, 1)):
        if gen.generate():
            return gen
        gen = Mapgen(seed=f"{base_seed}-{attempt}", size=size, config=config)
    gen.generate()
    return gen


__all__ = ["Mapgen", "MapgenConfig", "round_size", "generate_with_retries", "NO_OPEN_SPACE", "NO_BASE_SITE"]
