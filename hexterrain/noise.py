"""Deterministic smooth 2D gradient noise used by the terrain pipeline."""
from __future__ import annotations

import math
import struct
from typing import Optional, Tuple, Union

from .cache import NoiseCache, UnboundedCache

Seed = Union[int, float]


# -- Hash helpers ---------------------------------------------------------

def _seed_bits(seed: Seed) -> int:
    # Fold the IEEE pattern so fractional seeds stay distinct.
    bits = struct.unpack("<Q", struct.pack("<d", float(seed)))[0]
    return (bits ^ (bits >> 32)) & 0xFFFFFFFF


def _hash2(seed_bits: int, ix: int, iy: int) -> int:
    value = (seed_bits * 374761393 + ix * 668265263 + iy * 2147483647) & 0xFFFFFFFF
    value ^= value >> 13
    value = (value * 1274126177) & 0xFFFFFFFF
    value ^= value >> 16
    return value


def _gradient(seed_bits: int, ix: int, iy: int) -> Tuple[float, float]:
    angle = math.tau * (_hash2(seed_bits, ix, iy) / 4294967296.0)
    return math.cos(angle), math.sin(angle)


def fade(t: float) -> float:
    """Quintic smootherstep ``6t^5 - 15t^4 + 10t^3``."""

    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# -- Noise field ----------------------------------------------------------

class NoiseField:
    """Seeded gradient noise returning values in ``[0, 1]``.

    Unit gradients are anchored on the integer lattice and derived from a
    hash of the lattice coordinates and the seed, so two fields with the
    same seed agree bit for bit. Samples are memoized in ``cache``; pass a
    :class:`hexterrain.cache.BoundedCache` for long-lived fields.
    """

    def __init__(self, seed: Seed, cache: Optional[NoiseCache] = None) -> None:
        self._seed = seed
        self._seed_bits = _seed_bits(seed)
        self._cache: NoiseCache = cache if cache is not None else UnboundedCache()

    @property
    def seed(self) -> Seed:
        return self._seed

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _dot_grid_gradient(self, ix: int, iy: int, x: float, y: float) -> float:
        gx, gy = _gradient(self._seed_bits, ix, iy)
        return (x - ix) * gx + (y - iy) * gy

    def _sample(self, x: float, y: float) -> float:
        x0 = math.floor(x)
        y0 = math.floor(y)
        x1 = x0 + 1
        y1 = y0 + 1

        sx = fade(x - x0)
        sy = fade(y - y0)

        ix0 = lerp(self._dot_grid_gradient(x0, y0, x, y), self._dot_grid_gradient(x1, y0, x, y), sx)
        ix1 = lerp(self._dot_grid_gradient(x0, y1, x, y), self._dot_grid_gradient(x1, y1, x, y), sx)

        # Interpolated dot products lie in [-1, 1]; remap to [0, 1].
        value = lerp(ix0, ix1, sy) * 0.5 + 0.5
        return min(1.0, max(0.0, value))

    def get(self, x: float, y: float) -> float:
        key = (x, y)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = self._sample(x, y)
        self._cache.put(key, value)
        return value
