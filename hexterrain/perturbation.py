"""Noise-driven elevation and positional jitter for hex terrain."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .cache import make_cache
from .errors import InvalidParameterError
from .noise import NoiseField, Seed


@dataclass(frozen=True)
class PerturbationParams:
    """Shaping constants for :class:`TerrainPerturbation`.

    ``perturbation_scale`` is expressed in hex radii: callers that place
    rim vertices multiply it by the effective radius. ``base_height`` is the
    5 cm floor of a 25 cm hex expressed in world units.
    """

    perturbation_scale: float = 0.5
    noise_scale: float = 0.1
    elevation_noise_scale: float = 0.025
    elevation_scale: float = 12.0
    elevation_perturbation_scale: float = 3.0
    base_height: float = 5.0 / 25.0
    ridge_influence: float = 0.4
    valley_depth: float = 0.6
    secondary_seed_offset: float = 5432.0

    def validate(self) -> None:
        for name in ("noise_scale", "elevation_noise_scale"):
            if getattr(self, name) <= 0.0:
                raise InvalidParameterError(f"{name} must be positive")
        for name in (
            "perturbation_scale",
            "elevation_scale",
            "elevation_perturbation_scale",
            "ridge_influence",
            "valley_depth",
        ):
            if getattr(self, name) < 0.0:
                raise InvalidParameterError(f"{name} must not be negative")


def _round2(value: float) -> float:
    # Half-up, not banker's rounding.
    return math.floor(value * 100.0 + 0.5) / 100.0


def biome_index(elevation: float, biome_count: int) -> int:
    """Classify an elevation into a biome slot.

    The result is intentionally unclamped; use
    :func:`hexterrain.palette.resolve_biome_slot` before indexing a table.
    """

    return math.floor(elevation * biome_count)


class TerrainPerturbation:
    """Combines a primary and a secondary noise field into terrain signals."""

    def __init__(
        self,
        seed: Seed,
        params: Optional[PerturbationParams] = None,
        *,
        cache_capacity: Optional[int] = None,
    ) -> None:
        self.params = params or PerturbationParams()
        self.params.validate()
        self.seed = seed
        self.primary = NoiseField(seed, cache=make_cache(cache_capacity))
        self.secondary = NoiseField(
            seed + self.params.secondary_seed_offset, cache=make_cache(cache_capacity)
        )

    def elevation(self, x: float, z: float) -> float:
        """Fractal height at ``(x, z)`` rounded to two decimals."""

        p = self.params
        s = p.elevation_noise_scale
        primary_noise = self.primary.get(x * s, z * s)
        secondary_noise = self.secondary.get(x * s * 1.3, z * s * 1.3)

        primary = primary_noise
        primary += 0.5 * self.primary.get(x * s * 2, z * s * 2)
        primary += 0.25 * self.primary.get(x * s * 4, z * s * 4)
        primary += 0.125 * self.primary.get(x * s * 8, z * s * 8)

        secondary = secondary_noise
        secondary += 0.4 * self.secondary.get(x * s * 2.5, z * s * 2.5)
        secondary += 0.2 * self.secondary.get(x * s * 5, z * s * 5)

        ridge = abs(primary_noise * 2 - 1) ** 1.5 * p.ridge_influence
        valley = (1 - abs(secondary_noise * 2 - 1)) ** 2 * p.valley_depth

        # Normalise each octave stack by its weight sum before mixing.
        height = (primary / 1.875) * 0.65 + (secondary / 1.6) * 0.35 + ridge - valley
        height = height * p.elevation_scale + p.base_height
        return _round2(height)

    def perturb_y(self, x: float, y: float, z: float) -> float:
        """Add bounded vertical jitter to ``y`` sampled at ``(x, z)``."""

        p = self.params
        s = p.elevation_noise_scale
        primary_noise = self.primary.get(x * s + 300, z * s + 300)
        secondary_noise = self.secondary.get(x * s * 1.7 + 500, z * s * 1.7 + 500)

        ridge = abs(primary_noise * 2 - 1) * p.ridge_influence
        valley = (1 - abs(secondary_noise * 2 - 1)) * p.valley_depth

        combined = primary_noise * 0.6 + ridge * 0.3 - valley * 0.3 + secondary_noise * 0.4
        combined += self.primary.get(x * s * 5 + 700, z * s * 5 + 700) * 0.2

        perturbation = (combined * 2 - 1) * p.elevation_perturbation_scale
        return _round2(y + perturbation)

    def perturb_xz(
        self, x: float, z: float, magnitude: Optional[float] = None
    ) -> Tuple[float, float]:
        """Displace ``(x, z)`` horizontally with flow-like jitter.

        ``magnitude`` overrides ``params.perturbation_scale``.
        """

        p = self.params
        scale = p.perturbation_scale if magnitude is None else magnitude
        n = p.noise_scale

        primary_x = self.primary.get(x * n, z * n)
        primary_z = self.primary.get(x * n + 200, z * n + 200)

        secondary_x = self.secondary.get(x * n * 1.7 + 300, z * n * 1.7)
        secondary_z = self.secondary.get(x * n * 1.7, z * n * 1.7 + 300)

        detail_x = self.primary.get(x * n * 4 + 700, z * n * 4) * 0.2
        detail_z = self.primary.get(x * n * 4, z * n * 4 + 700) * 0.2

        combined_x = primary_x * 0.6 + secondary_x * 0.3 + detail_x
        combined_z = primary_z * 0.6 + secondary_z * 0.3 + detail_z

        # Each axis is biased by the other axis' primary sample.
        final_x = combined_x * 0.85 + primary_z * 0.15
        final_z = combined_z * 0.85 + primary_x * 0.15

        offset_x = (final_x * 2 - 1) * scale * (1 + secondary_x * 0.5)
        offset_z = (final_z * 2 - 1) * scale * (1 + secondary_z * 0.5)
        return x + offset_x, z + offset_z

    def biome_index(self, elevation: float, biome_count: int) -> int:
        return biome_index(elevation, biome_count)
