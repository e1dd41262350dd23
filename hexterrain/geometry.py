"""Data structures describing generated hex cells and the stitched mesh."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple

import numpy as np

Point3 = Tuple[float, float, float]
GridCoords = Tuple[int, int]


class TriangleKind(IntEnum):
    CAP = 0
    SKIRT = 1
    CORNER = 2


@dataclass(frozen=True)
class HexCell:
    """A single hexagon of the grid.

    ``vertices`` holds the six perturbed rim points in clockwise order
    starting at the east corner; ``center[1]`` equals ``elevation``.
    """

    grid_coords: GridCoords
    center: Point3
    vertices: Tuple[Point3, ...]
    elevation: float
    biome_index: int
    feature_index: int = 0

    def __post_init__(self) -> None:
        if len(self.vertices) != 6:
            raise ValueError(f"HexCell requires 6 rim vertices, got {len(self.vertices)}")

    def edge(self, vertex_pair: Tuple[int, int]) -> Tuple[Point3, Point3]:
        return self.vertices[vertex_pair[0]], self.vertices[vertex_pair[1]]


def _empty(shape: Tuple[int, ...], dtype: type) -> np.ndarray:
    return np.zeros(shape, dtype=dtype)


@dataclass
class Mesh:
    """Indexed triangle mesh ready for upload to a renderer.

    ``triangle_kinds`` and ``triangle_cells`` run parallel to the triangles
    in ``indices`` and record what emitted each one.
    """

    positions: np.ndarray = field(default_factory=lambda: _empty((0, 3), np.float32))
    normals: np.ndarray = field(default_factory=lambda: _empty((0, 3), np.float32))
    uvs: np.ndarray = field(default_factory=lambda: _empty((0, 2), np.float32))
    indices: np.ndarray = field(default_factory=lambda: _empty((0,), np.uint32))
    texture_indices: np.ndarray = field(default_factory=lambda: _empty((0,), np.int32))
    triangle_kinds: np.ndarray = field(default_factory=lambda: _empty((0,), np.uint8))
    triangle_cells: np.ndarray = field(default_factory=lambda: _empty((0,), np.int32))
    cells: Tuple[HexCell, ...] = ()

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0] // 3)

    def triangles(self) -> np.ndarray:
        return self.indices.reshape(-1, 3)

    def count_kind(self, kind: TriangleKind) -> int:
        return int(np.count_nonzero(self.triangle_kinds == int(kind)))

    def cell_triangle_count(self, cell_index: int) -> int:
        return int(np.count_nonzero(self.triangle_cells == cell_index))

    def summary(self) -> str:
        return (
            f"Mesh: cells={len(self.cells)}, vertices={self.vertex_count}, "
            f"triangles={self.triangle_count} (cap={self.count_kind(TriangleKind.CAP)}, "
            f"skirt={self.count_kind(TriangleKind.SKIRT)}, "
            f"corner={self.count_kind(TriangleKind.CORNER)})"
        )
