"""Pytest configuration for hexterrain tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# //1.- Ensure repository root is available on the Python path for package imports.
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hexterrain.coords import HexCoordinateSystem  # noqa: E402
from hexterrain.perturbation import TerrainPerturbation  # noqa: E402


@pytest.fixture
def coords_factory():
    # //2.- Build coordinate systems over fresh noise so tests never share caches.
    def _make(grid_size: int = 4, hex_size: float = 1.0, hex_gap: float = 0.1, seed: int = 42, **kwargs):
        perturbation = TerrainPerturbation(seed, kwargs.pop("params", None))
        return HexCoordinateSystem(grid_size, hex_size, hex_gap, perturbation, **kwargs)

    return _make
