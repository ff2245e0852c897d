"""
project: Cavegen
module: level_api.py

Level generation API routes.

    GET /api/level           -> level file as text/plain
    GET /api/level/metrics   -> JSON generation metrics and effective config

Query parameters (all optional):
    seed      master seed, any string; integers and their decimal form match
    random    1 to ignore ``seed`` and pick a fresh one
    size      requested side length (rounded up to a multiple of 8)
    shuffle   1 to draw every parameter from the seed instead of defaults
    retries   extra attempts with derived seeds when a map is unplayable
    <field>   any MapgenConfig field, e.g. ``flood_type=lava&biome=ice``
"""

from __future__ import annotations

import os
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from app.logging_utils import get_logger
from app.mapgen import Mapgen, MapgenConfig, generate_with_retries
from app.mapgen.seeds import fresh_rng, normalize_seed

bp_level = Blueprint("level_api", __name__)
log = get_logger("level_api")

_RESERVED = {"seed", "random", "size", "shuffle", "retries"}
_TRUE = {"1", "true", "yes", "on"}

# Simple in-process cache (seed,size,config)->Mapgen. Small manual cap.
_level_cache: dict = {}
_level_cache_lock = threading.Lock()
_LEVEL_CACHE_MAX = 8


def _flag(name: str) -> bool:
    return request.args.get(name, "").strip().lower() in _TRUE


def _parse_request():
    """Return ``(seed, size, config, retries)`` from query args; ValueError on bad input."""
    seed = normalize_seed(None if _flag("random") else request.args.get("seed"))
    raw_size = request.args.get("size", str(current_app.config["MAPGEN_DEFAULT_SIZE"]))
    try:
        size = int(raw_size)
    except ValueError:
        raise ValueError(f"size must be an integer, got {raw_size!r}") from None
    max_size = current_app.config["MAPGEN_MAX_SIZE"]
    if not 1 <= size <= max_size:
        raise ValueError(f"size must be between 1 and {max_size}")
    try:
        retries = int(request.args.get("retries", "0"))
    except ValueError:
        raise ValueError("retries must be an integer") from None
    retries = max(0, min(retries, current_app.config["MAPGEN_MAX_RETRIES"]))
    base = MapgenConfig.shuffled(fresh_rng(seed)) if _flag("shuffle") else None
    overrides = {k: v for k, v in request.args.items() if k not in _RESERVED}
    config = MapgenConfig.from_mapping(overrides, base=base)
    return seed, size, config, retries


def get_cached_level(seed: str, size: int, config: MapgenConfig, retries: int) -> Mapgen:
    if os.environ.get("MAPGEN_DISABLE_CACHE") == "1":
        return generate_with_retries(seed, size, config, attempts=retries + 1)
    key = (seed, size, retries, repr(sorted(config.to_dict().items())))
    with _level_cache_lock:
        gen = _level_cache.get(key)
        if gen is not None:
            return gen
    gen = generate_with_retries(seed, size, config, attempts=retries + 1)
    with _level_cache_lock:
        if len(_level_cache) >= _LEVEL_CACHE_MAX:
            _level_cache.pop(next(iter(_level_cache)))
        _level_cache[key] = gen
    return gen


def _failure(gen: Mapgen):
    return jsonify({"error": "generation failed", "reason": gen.failure_reason, "seed": gen.seed}), 422


@bp_level.route("/api/level", methods=["GET"])
def get_level():
    try:
        seed, size, config, retries = _parse_request()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    gen = get_cached_level(seed, size, config, retries)
    if not gen.succeeded:
        return _failure(gen)
    log.info(event="level_served", seed=gen.seed, size=gen.size)
    resp = Response(gen.to_level(), mimetype="text/plain")
    resp.headers["X-Level-Seed"] = gen.seed
    return resp


@bp_level.route("/api/level/metrics", methods=["GET"])
def get_level_metrics():
    try:
        seed, size, config, retries = _parse_request()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    gen = get_cached_level(seed, size, config, retries)
    payload = {
        "seed": gen.seed,
        "size": gen.size,
        "success": gen.succeeded,
        "failure_reason": gen.failure_reason,
        "base": list(gen.base) if gen.base else None,
        "metrics": gen.metrics,
        "config": config.to_dict(),
        "liquid": config.liquid_name,
    }
    return jsonify(payload), (200 if gen.succeeded else 422)
