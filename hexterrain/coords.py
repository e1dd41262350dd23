"""Hex metrics, neighbour lookup and closed-form cell construction."""
from __future__ import annotations

import math
from typing import Optional, Tuple

from .directions import Direction
from .errors import InvalidParameterError
from .geometry import GridCoords, HexCell, Point3
from .perturbation import TerrainPerturbation, biome_index

SQRT3 = math.sqrt(3.0)
VERTEX_ANGLES_DEG: Tuple[int, ...] = (0, 60, 120, 180, 240, 300)


class HexCoordinateSystem:
    """Maps offset grid coordinates of flat-top hexes to world space.

    Every cell is a pure function of its coordinates, so a neighbour can be
    rebuilt without consulting a materialised grid; this is what lets the
    stitcher join cells across chunk boundaries.
    """

    def __init__(
        self,
        grid_size: int,
        hex_size: float,
        hex_gap: float,
        perturbation: TerrainPerturbation,
        *,
        biome_count: int = 4,
    ) -> None:
        # Non-positive sizes describe an empty grid.
        if isinstance(grid_size, bool) or not isinstance(grid_size, int):
            raise InvalidParameterError(f"grid_size must be an integer, got {grid_size!r}")
        if not hex_size > 0:
            raise InvalidParameterError(f"hex_size must be positive, got {hex_size}")
        if not hex_gap >= 0:
            raise InvalidParameterError(f"hex_gap must not be negative, got {hex_gap}")
        if hex_gap >= hex_size:
            raise InvalidParameterError("hex_gap must be smaller than hex_size")
        if biome_count <= 0:
            raise InvalidParameterError("biome_count must be positive")

        self.grid_size = grid_size
        self.hex_size = float(hex_size)
        self.hex_gap = float(hex_gap)
        self.biome_count = biome_count
        self.perturbation = perturbation

        self.effective_size = self.hex_size - self.hex_gap
        self.width = self.effective_size * 2.0
        self.height = SQRT3 * self.effective_size
        self.col_spacing = self.width * 3.0 / 4.0 + self.hex_gap
        self.row_spacing = self.height + self.hex_gap
        self.jitter_magnitude = perturbation.params.perturbation_scale * self.effective_size

    def in_bounds(self, coords: GridCoords) -> bool:
        col, row = coords
        return 0 <= col < self.grid_size and 0 <= row < self.grid_size

    def offset_coords(self, coords: GridCoords, direction: Direction) -> GridCoords:
        """Apply ``direction`` without bounds checking."""

        col, row = coords
        dcol, drow = direction.delta(col)
        return col + dcol, row + drow

    def neighbor_coords(self, coords: GridCoords, direction: Direction) -> Optional[GridCoords]:
        target = self.offset_coords(coords, direction)
        if not self.in_bounds(target):
            return None
        return target

    def center_xz(self, coords: GridCoords) -> Tuple[float, float]:
        """Un-perturbed world position of a cell centre."""

        col, row = coords
        x = col * self.col_spacing
        z = row * self.row_spacing + (col % 2) * (self.row_spacing / 2.0)
        return x, z

    def hex_vertex(self, center_x: float, center_z: float, i: int) -> Point3:
        angle = math.radians(VERTEX_ANGLES_DEG[i])
        x = center_x + self.effective_size * math.cos(angle)
        z = center_z + self.effective_size * math.sin(angle)

        px, pz = self.perturbation.perturb_xz(x, z, self.jitter_magnitude)
        base = self.perturbation.elevation(center_x, center_z)
        py = self.perturbation.perturb_y(px, base, pz)
        return px, py, pz

    def hex_vertices(self, center_x: float, center_z: float) -> Tuple[Point3, ...]:
        return tuple(self.hex_vertex(center_x, center_z, i) for i in range(6))

    def build_cell(self, coords: GridCoords) -> HexCell:
        """Compute a full cell for ``coords``, inside the grid or not."""

        x, z = self.center_xz(coords)
        raw = self.perturbation.elevation(x, z)
        elevation = self.perturbation.perturb_y(x, raw, z)
        return HexCell(
            grid_coords=(coords[0], coords[1]),
            center=(x, elevation, z),
            vertices=self.hex_vertices(x, z),
            elevation=elevation,
            biome_index=biome_index(elevation, self.biome_count),
            feature_index=0,
        )

    def neighbor_hex(
        self, cell: HexCell, direction: Direction, *, bounded: bool = True
    ) -> Optional[HexCell]:
        """Rebuild the neighbour of ``cell`` in ``direction``.

        With ``bounded`` the result is ``None`` outside the grid; otherwise
        the off-grid cell is extrapolated from the same noise.
        """

        target = self.offset_coords(cell.grid_coords, direction)
        if bounded and not self.in_bounds(target):
            return None
        return self.build_cell(target)
