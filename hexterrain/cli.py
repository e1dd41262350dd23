"""Command line interface for generating hex terrain and reporting metrics."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import GenerationParams, load_generation_params, load_params_file
from .errors import InvalidParameterError
from .generator import HexTerrainGenerator
from .metrics import collect_mesh_metrics, export_mesh_metrics

LOGGER = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    # //1.- Construct the parser shared across tests and runtime execution.
    parser = argparse.ArgumentParser(description="Generate a stitched hexagonal terrain mesh")
    parser.add_argument("--grid-size", type=int, help="Number of hexes along each side of the grid")
    parser.add_argument("--hex-size", type=float, help="Nominal hex circumradius in world units")
    parser.add_argument("--hex-gap", type=float, help="Gap subtracted from the radius between hexes")
    parser.add_argument("--seed", type=float, help="Noise seed (defaults to 0)")
    parser.add_argument("--biome-count", type=int, help="Number of biome classes")
    parser.add_argument("--workers", type=int, help="Threads used to build grid rows")
    parser.add_argument("--cache-capacity", type=int, help="Bound each noise cache to this many samples")
    parser.add_argument("--params", help="JSON file with generation parameters")
    parser.add_argument("--env-prefix", default="HEXTERRAIN", help="Prefix of environment overrides")
    parser.add_argument("--metrics", help="Write mesh metrics as JSON to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_params(parsed: argparse.Namespace) -> GenerationParams:
    # //2.- Layer explicit flags over the parameter file or the environment.
    if parsed.params:
        base = load_params_file(parsed.params)
    else:
        base = load_generation_params(env_prefix=parsed.env_prefix)
    seed = parsed.seed
    if seed is not None and float(seed).is_integer():
        seed = int(seed)
    return base.with_overrides(
        grid_size=parsed.grid_size,
        hex_size=parsed.hex_size,
        hex_gap=parsed.hex_gap,
        seed=seed,
        biome_count=parsed.biome_count,
        workers=parsed.workers,
        cache_capacity=parsed.cache_capacity,
    )


def run(args: Sequence[str] | None = None) -> int:
    # //3.- Parse arguments, generate the mesh and report what was built.
    parser = create_parser()
    parsed = parser.parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )
    try:
        params = _resolve_params(parsed)
        mesh = HexTerrainGenerator(params).generate()
    except InvalidParameterError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(mesh.summary())
    metrics = collect_mesh_metrics(mesh, biome_count=params.biome_count)
    print(
        f"Elevation: min={metrics.min_elevation:.2f}, max={metrics.max_elevation:.2f}, "
        f"mean={metrics.mean_elevation:.2f}; out-of-range biomes={metrics.out_of_range_biomes}"
    )
    if parsed.metrics:
        export_mesh_metrics(metrics, filepath=parsed.metrics)
        LOGGER.info("Wrote metrics to %s", parsed.metrics)
    return 0


def main() -> int:
    """Console script entry point."""

    return run()


if __name__ == "__main__":  # pragma: no cover - exercised by manual runs
    sys.exit(main())
