"""Seam-free triangle mesh construction over a grid of hex cells.

Each cell contributes a cap fan. Edges towards the SE, S and SW neighbours
get a two-triangle skirt bridging the height difference between the two
rims, and the hole left where three cells meet is closed by one corner
triangle. The other three directions are some neighbour's SE/S/SW, so
every interior edge is bridged exactly once.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from .coords import HexCoordinateSystem
from .directions import SKIRT_DIRECTIONS, Direction
from .geometry import GridCoords, HexCell, Mesh, Point3, TriangleKind
from .grid import HexGrid
from .palette import TextureAtlas, resolve_biome_slot

LOGGER = logging.getLogger(__name__)

UP: Point3 = (0.0, 1.0, 0.0)
SKIRT_FALLBACK_NORMAL: Point3 = (0.0, 0.0, -1.0)
CENTER_UV: Tuple[float, float] = (0.5, 0.5)

CornerId = Tuple[GridCoords, GridCoords, GridCoords]


def _rim_uv(i: int) -> Tuple[float, float]:
    angle = (math.pi / 3.0) * i
    return 0.5 + 0.5 * math.cos(angle), 0.5 + 0.5 * math.sin(angle)


def triangle_normal(a: Point3, b: Point3, c: Point3, fallback: Point3) -> Point3:
    """Unit normal of ``(a, b, c)`` wound counter-clockwise, or ``fallback``."""

    ux, uy, uz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    vx, vy, vz = c[0] - a[0], c[1] - a[1], c[2] - a[2]
    nx = uy * vz - uz * vy
    ny = uz * vx - ux * vz
    nz = ux * vy - uy * vx
    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length < 1e-12:
        return fallback
    return nx / length, ny / length, nz / length


def corner_id(*coords: GridCoords) -> CornerId:
    """Order-independent key for the corner shared by three cells."""

    first, second, third = sorted(coords)
    return first, second, third


class _MeshBuffers:
    def __init__(self) -> None:
        self.positions: List[Point3] = []
        self.normals: List[Point3] = []
        self.uvs: List[Tuple[float, float]] = []
        self.texture_indices: List[int] = []
        self.indices: List[int] = []
        self.kinds: List[int] = []
        self.owners: List[int] = []

    def add_vertex(self, position: Point3, normal: Point3, uv: Tuple[float, float], texture: int) -> int:
        self.positions.append(position)
        self.normals.append(normal)
        self.uvs.append(uv)
        self.texture_indices.append(texture)
        return len(self.positions) - 1

    def add_triangle(self, a: int, b: int, c: int, kind: TriangleKind, owner: int) -> None:
        self.indices.extend((a, b, c))
        self.kinds.append(int(kind))
        self.owners.append(owner)

    def add_flat_triangle(
        self,
        points: Tuple[Point3, Point3, Point3],
        fallback: Point3,
        texture: int,
        kind: TriangleKind,
        owner: int,
    ) -> None:
        normal = triangle_normal(points[0], points[1], points[2], fallback)
        a, b, c = (self.add_vertex(point, normal, CENTER_UV, texture) for point in points)
        self.add_triangle(a, b, c, kind, owner)

    def to_mesh(self, cells: Tuple[HexCell, ...]) -> Mesh:
        return Mesh(
            positions=np.asarray(self.positions, dtype=np.float32).reshape(-1, 3),
            normals=np.asarray(self.normals, dtype=np.float32).reshape(-1, 3),
            uvs=np.asarray(self.uvs, dtype=np.float32).reshape(-1, 2),
            indices=np.asarray(self.indices, dtype=np.uint32),
            texture_indices=np.asarray(self.texture_indices, dtype=np.int32),
            triangle_kinds=np.asarray(self.kinds, dtype=np.uint8),
            triangle_cells=np.asarray(self.owners, dtype=np.int32),
            cells=cells,
        )


class HexMeshStitcher:
    """Turns a :class:`HexGrid` into a single indexed :class:`Mesh`.

    Neighbours are rebuilt through the coordinate system rather than looked
    up in the grid. With ``extrapolate_boundary`` the outermost cells also
    get skirts towards off-grid neighbours; by default those edges stay open.
    """

    def __init__(
        self,
        coords: HexCoordinateSystem,
        *,
        atlas: Optional[TextureAtlas] = None,
        extrapolate_boundary: bool = False,
    ) -> None:
        self._coords = coords
        self._atlas = atlas
        self._extrapolate = extrapolate_boundary

    def _texture_slot(self, cell: HexCell) -> int:
        if self._atlas is not None:
            return self._atlas.slot_for(cell.biome_index)
        return resolve_biome_slot(cell.biome_index, self._coords.biome_count)

    def _emit_cap(self, buffers: _MeshBuffers, cell: HexCell, owner: int, texture: int) -> None:
        # Reuse the first rim height for the centre instead of sampling again.
        center = (cell.center[0], cell.vertices[0][1], cell.center[2])
        center_index = buffers.add_vertex(center, UP, CENTER_UV, texture)
        rim = [buffers.add_vertex(vertex, UP, _rim_uv(i), texture) for i, vertex in enumerate(cell.vertices)]
        for i in range(6):
            # (centre, next, current) faces +Y for clockwise-from-east rims.
            buffers.add_triangle(center_index, rim[(i + 1) % 6], rim[i], TriangleKind.CAP, owner)

    def build(self, grid: HexGrid) -> Mesh:
        if self._atlas is not None and not self._atlas.slots:
            # Register the grid's biomes so every vertex resolves to a real slot.
            self._atlas.build_slot_map(sorted({cell.biome_index for cell in grid.cells}))

        buffers = _MeshBuffers()
        emitted_corners: Set[CornerId] = set()
        skipped_edges = 0

        for owner, cell in enumerate(grid.cells):
            texture = self._texture_slot(cell)
            self._emit_cap(buffers, cell, owner, texture)

            neighbors: Dict[Direction, Optional[HexCell]] = {}

            def neighbor(direction: Direction) -> Optional[HexCell]:
                if direction not in neighbors:
                    neighbors[direction] = self._coords.neighbor_hex(
                        cell, direction, bounded=not self._extrapolate
                    )
                return neighbors[direction]

            for direction in SKIRT_DIRECTIONS:
                other = neighbor(direction)
                if other is None:
                    skipped_edges += 1
                    LOGGER.debug("No %s neighbour for hex %s, skirt skipped", direction.value, cell.grid_coords)
                    continue

                v1, v2 = cell.edge(direction.edge_vertices)
                nv1, nv2 = other.edge(direction.opposite.edge_vertices)
                buffers.add_flat_triangle((v1, v2, nv1), SKIRT_FALLBACK_NORMAL, texture, TriangleKind.SKIRT, owner)
                buffers.add_flat_triangle((v1, nv1, nv2), SKIRT_FALLBACK_NORMAL, texture, TriangleKind.SKIRT, owner)

                clockwise = direction.clockwise
                cw_other = neighbor(clockwise)
                if cw_other is None:
                    continue
                key = corner_id(cell.grid_coords, other.grid_coords, cw_other.grid_coords)
                if key in emitted_corners:
                    continue
                emitted_corners.add(key)
                cwv2 = cw_other.vertices[clockwise.opposite.edge_vertices[1]]
                # (v2, cwv2, nv1) keeps the fill facing +Y like the caps and skirts.
                buffers.add_flat_triangle((v2, cwv2, nv1), UP, texture, TriangleKind.CORNER, owner)

        mesh = buffers.to_mesh(tuple(grid.cells))
        LOGGER.info(
            "Stitched %d cells into %d vertices / %d triangles (%d corners, %d open edges)",
            len(grid.cells),
            mesh.vertex_count,
            mesh.triangle_count,
            len(emitted_corners),
            skipped_edges,
        )
        return mesh
