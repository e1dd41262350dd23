"""High-level hex terrain generation entry point."""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

from .config import GenerationParams, Seed
from .coords import HexCoordinateSystem
from .geometry import Mesh
from .grid import HexGrid, HexGridBuilder
from .palette import TextureAtlas
from .perturbation import PerturbationParams, TerrainPerturbation
from .stitcher import HexMeshStitcher

LOGGER = logging.getLogger(__name__)


class HexTerrainGenerator:
    """Wires the noise, coordinate, grid and stitching stages together.

    Each generator owns fresh noise fields, so two generators built from
    equal parameters produce identical meshes and share no state.
    """

    def __init__(
        self,
        params: GenerationParams,
        *,
        perturbation_params: Optional[PerturbationParams] = None,
        atlas: Optional[TextureAtlas] = None,
        extrapolate_boundary: bool = False,
    ) -> None:
        self.params = params.validate()
        self.perturbation = TerrainPerturbation(
            params.resolved_seed,
            perturbation_params,
            cache_capacity=params.cache_capacity,
        )
        self.coords = HexCoordinateSystem(
            params.grid_size,
            params.hex_size,
            params.hex_gap,
            self.perturbation,
            biome_count=params.biome_count,
        )
        self.builder = HexGridBuilder(self.coords, workers=params.workers)
        self.stitcher = HexMeshStitcher(
            self.coords, atlas=atlas, extrapolate_boundary=extrapolate_boundary
        )

    def build_grid(self) -> HexGrid:
        return self.builder.build()

    def generate(self) -> Mesh:
        started = time.perf_counter()
        grid = self.build_grid()
        mesh = self.stitcher.build(grid)
        LOGGER.info(
            "Generated %dx%d hex terrain (seed=%s) in %.3fs",
            self.params.grid_size,
            self.params.grid_size,
            self.params.resolved_seed,
            time.perf_counter() - started,
        )
        return mesh


def generate(
    grid_size: int,
    hex_size: float,
    hex_gap: float,
    seed: Optional[Seed] = None,
    **options: Any,
) -> Mesh:
    """Build the stitched mesh for a ``grid_size x grid_size`` hex grid.

    ``options`` accepts the remaining :class:`GenerationParams` fields
    (``biome_count``, ``workers``, ``cache_capacity``) plus the generator
    keywords ``perturbation_params``, ``atlas`` and ``extrapolate_boundary``.
    Invalid sizes raise :class:`hexterrain.errors.InvalidParameterError`.
    """

    generator_keys = ("perturbation_params", "atlas", "extrapolate_boundary")
    generator_options = {key: options.pop(key) for key in generator_keys if key in options}
    params = GenerationParams(
        grid_size=grid_size,
        hex_size=hex_size,
        hex_gap=hex_gap,
        seed=seed,
        **options,
    )
    return HexTerrainGenerator(params, **generator_options).generate()
