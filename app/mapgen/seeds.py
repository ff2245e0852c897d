"""Seed derivation and small RNG helpers.

Every pass gets its own ``random.Random`` stream seeded from a sub-seed drawn
once from the master seed, so a pass can change how much randomness it
consumes without reshuffling any other pass.
"""
from __future__ import annotations

import math
import random
from typing import NamedTuple, Optional, Union

SeedLike = Union[int, str]


class SeedBundle(NamedTuple):
    solid: str
    wall: str
    ore: str
    crystal: str
    height: str
    slug: str
    crystal_seam: str
    ore_seam: str
    recharge_seam: str
    erosion: str
    landslide: str
    monster: str
    base: str

    @classmethod
    def derive(cls, master_seed: SeedLike) -> "SeedBundle":
        # Drawn in field declaration order; appending new fields keeps old seeds stable
        rng = fresh_rng(master_seed)
        return cls(*(str(rng.random()) for _ in cls._fields))


def normalize_seed(seed: Optional[SeedLike]) -> str:
    """Return the canonical string form of a master seed.

    ``None`` picks a random 15 digit seed. Integers and their decimal strings
    map to the same value so ``42`` and ``"42"`` generate the same level.
    """
    if seed is None:
        return str(random.randint(0, 10**15 - 1))
    if isinstance(seed, bool):
        raise ValueError("seed must be an int or str")
    if isinstance(seed, int):
        return str(seed)
    s = str(seed).strip()
    if not s:
        return str(random.randint(0, 10**15 - 1))
    return s


def fresh_rng(seed: SeedLike) -> random.Random:
    return random.Random(str(seed))


def randint_range(rng: random.Random, a: int, b: int) -> int:
    """Random integer ``a <= x < b`` built on a single float draw."""
    return math.floor(rng.random() * (b - a)) + a


def randomize(rng: random.Random, probability: float, original: int) -> int:
    if rng.random() < probability:
        return 0
    return original


__all__ = ["SeedBundle", "normalize_seed", "fresh_rng", "randint_range", "randomize"]
