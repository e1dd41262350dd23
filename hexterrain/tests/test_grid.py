"""Tests for grid materialisation."""
from __future__ import annotations

import math

import pytest

from hexterrain.errors import InvalidParameterError
from hexterrain.grid import HexGrid, HexGridBuilder


def test_grid_covers_every_coordinate_once(coords_factory) -> None:
    grid = HexGridBuilder(coords_factory(grid_size=5)).build()
    coords = [cell.grid_coords for cell in grid]
    assert len(grid) == 25
    assert len(set(coords)) == 25
    assert set(coords) == {(col, row) for col in range(5) for row in range(5)}


def test_cells_are_inserted_row_major(coords_factory) -> None:
    grid = HexGridBuilder(coords_factory(grid_size=3)).build()
    assert [cell.grid_coords for cell in grid][:4] == [(0, 0), (1, 0), (2, 0), (0, 1)]
    assert grid.index_of((2, 1)) == 5


def test_lookup_by_coordinates(coords_factory) -> None:
    grid = HexGridBuilder(coords_factory(grid_size=3)).build()
    assert (1, 2) in grid
    assert (3, 0) not in grid
    assert grid.get((3, 0)) is None
    assert grid[(1, 2)].grid_coords == (1, 2)


def test_cell_metadata_follows_elevation(coords_factory) -> None:
    grid = HexGridBuilder(coords_factory(grid_size=3, biome_count=4)).build()
    for cell in grid:
        assert cell.center[1] == cell.elevation
        assert cell.biome_index == math.floor(cell.elevation * 4)
        assert cell.feature_index == 0
        assert len(cell.vertices) == 6


def test_non_positive_size_builds_empty_grid(coords_factory) -> None:
    grid = HexGridBuilder(coords_factory(grid_size=0)).build()
    assert len(grid) == 0
    assert HexGridBuilder(coords_factory(grid_size=-2)).build().cells == ()


def test_parallel_rows_match_sequential_build(coords_factory) -> None:
    sequential = HexGridBuilder(coords_factory(grid_size=6, seed=17)).build()
    parallel = HexGridBuilder(coords_factory(grid_size=6, seed=17), workers=4).build()
    assert parallel == sequential


@pytest.mark.parametrize("workers", [0, -1, 1.5, True])
def test_invalid_worker_count_is_rejected(coords_factory, workers) -> None:
    with pytest.raises(InvalidParameterError):
        HexGridBuilder(coords_factory(), workers=workers)


def test_duplicate_coordinates_are_rejected(coords_factory) -> None:
    cell = coords_factory().build_cell((0, 0))
    with pytest.raises(ValueError):
        HexGrid(grid_size=1, cells=(cell, cell))
