"""Procedural hexagonal terrain mesh generation.

The package turns a grid size, hex radius, gap and seed into a single
indexed triangle mesh: seeded gradient noise drives elevation and rim
jitter, an offset flat-top hex grid places the cells, and a stitcher joins
neighbouring caps with skirts and corner triangles so no seams show.
"""

from .cache import BoundedCache, NoiseCache, UnboundedCache, make_cache
from .config import DEFAULT_SEED, GenerationParams, load_generation_params, load_params_file
from .coords import HexCoordinateSystem
from .directions import DIRECTION_TABLE, SKIRT_DIRECTIONS, Direction, DirectionInfo
from .errors import InvalidParameterError
from .generator import HexTerrainGenerator, generate
from .geometry import HexCell, Mesh, TriangleKind
from .grid import HexGrid, HexGridBuilder
from .metrics import MeshMetrics, collect_mesh_metrics, export_mesh_metrics
from .noise import NoiseField
from .palette import BIOME_COLORS, TextureAtlas, biome_color, resolve_biome_slot
from .perturbation import PerturbationParams, TerrainPerturbation, biome_index
from .stitcher import HexMeshStitcher

__all__ = [
    "BoundedCache",
    "NoiseCache",
    "UnboundedCache",
    "make_cache",
    "DEFAULT_SEED",
    "GenerationParams",
    "load_generation_params",
    "load_params_file",
    "HexCoordinateSystem",
    "DIRECTION_TABLE",
    "SKIRT_DIRECTIONS",
    "Direction",
    "DirectionInfo",
    "InvalidParameterError",
    "HexTerrainGenerator",
    "generate",
    "HexCell",
    "Mesh",
    "TriangleKind",
    "HexGrid",
    "HexGridBuilder",
    "MeshMetrics",
    "collect_mesh_metrics",
    "export_mesh_metrics",
    "NoiseField",
    "BIOME_COLORS",
    "TextureAtlas",
    "biome_color",
    "resolve_biome_slot",
    "PerturbationParams",
    "TerrainPerturbation",
    "biome_index",
    "HexMeshStitcher",
]
