"""Materialisation of a square grid of hex cells."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .coords import HexCoordinateSystem
from .errors import InvalidParameterError
from .geometry import GridCoords, HexCell

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HexGrid:
    """Read-only ``grid_size x grid_size`` collection keyed by ``(col, row)``."""

    grid_size: int
    cells: Tuple[HexCell, ...]
    _index: Mapping[GridCoords, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[GridCoords, int] = {}
        for position, cell in enumerate(self.cells):
            if cell.grid_coords in index:
                raise ValueError(f"Duplicate grid coordinates {cell.grid_coords}")
            index[cell.grid_coords] = position
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[HexCell]:
        return iter(self.cells)

    def __contains__(self, coords: object) -> bool:
        return coords in self._index

    def get(self, coords: GridCoords) -> Optional[HexCell]:
        position = self._index.get(coords)
        return None if position is None else self.cells[position]

    def index_of(self, coords: GridCoords) -> int:
        return self._index[coords]

    def __getitem__(self, coords: GridCoords) -> HexCell:
        return self.cells[self._index[coords]]


class HexGridBuilder:
    """Builds every cell of a grid from the closed-form coordinate pipeline."""

    def __init__(self, coords: HexCoordinateSystem, *, workers: int = 1) -> None:
        if isinstance(workers, bool) or not isinstance(workers, int) or workers <= 0:
            raise InvalidParameterError(f"workers must be a positive integer, got {workers!r}")
        self._coords = coords
        self._workers = workers

    def _build_row(self, row: int) -> List[HexCell]:
        return [self._coords.build_cell((col, row)) for col in range(self._coords.grid_size)]

    def build(self) -> HexGrid:
        size = self._coords.grid_size
        if size <= 0:
            return HexGrid(grid_size=0, cells=())

        rows = range(size)
        if self._workers > 1 and size > 1:
            LOGGER.debug("Building %d rows across %d workers", size, self._workers)
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                # map() preserves row order, keeping insertion row-major.
                built_rows = list(pool.map(self._build_row, rows))
        else:
            built_rows = [self._build_row(row) for row in rows]

        cells = tuple(cell for row_cells in built_rows for cell in row_cells)
        LOGGER.debug("Built grid of %d cells", len(cells))
        return HexGrid(grid_size=size, cells=cells)
