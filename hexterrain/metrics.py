"""Summary statistics for a generated hex terrain mesh."""
from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from typing import Dict

from .geometry import Mesh, TriangleKind


# //1.- Aggregate counts and elevation statistics for one generation pass.
@dataclass(frozen=True)
class MeshMetrics:
    grid_size: int
    cell_count: int
    vertex_count: int
    triangle_count: int
    cap_triangles: int
    skirt_triangles: int
    corner_triangles: int
    min_elevation: float
    max_elevation: float
    mean_elevation: float
    biome_histogram: Dict[int, int]
    out_of_range_biomes: int


# //2.- Derive metrics from the mesh and the cells it carries.
def collect_mesh_metrics(mesh: Mesh, *, biome_count: int = 4) -> MeshMetrics:
    elevations = [cell.elevation for cell in mesh.cells]
    cell_count = len(mesh.cells)
    grid_size = max((max(cell.grid_coords) for cell in mesh.cells), default=-1) + 1
    histogram = Counter(cell.biome_index for cell in mesh.cells)
    out_of_range = sum(count for index, count in histogram.items() if not 0 <= index < biome_count)
    return MeshMetrics(
        grid_size=grid_size,
        cell_count=cell_count,
        vertex_count=mesh.vertex_count,
        triangle_count=mesh.triangle_count,
        cap_triangles=mesh.count_kind(TriangleKind.CAP),
        skirt_triangles=mesh.count_kind(TriangleKind.SKIRT),
        corner_triangles=mesh.count_kind(TriangleKind.CORNER),
        min_elevation=min(elevations, default=0.0),
        max_elevation=max(elevations, default=0.0),
        mean_elevation=sum(elevations) / cell_count if cell_count else 0.0,
        biome_histogram=dict(sorted(histogram.items())),
        out_of_range_biomes=out_of_range,
    )


# //3.- Export metrics to JSON for CI checks or dashboards.
def export_mesh_metrics(metrics: MeshMetrics, *, filepath: str) -> None:
    payload = {
        "grid_size": metrics.grid_size,
        "cell_count": metrics.cell_count,
        "vertex_count": metrics.vertex_count,
        "triangle_count": metrics.triangle_count,
        "triangles": {
            "cap": metrics.cap_triangles,
            "skirt": metrics.skirt_triangles,
            "corner": metrics.corner_triangles,
        },
        "elevation": {
            "min": metrics.min_elevation,
            "max": metrics.max_elevation,
            "mean": metrics.mean_elevation,
        },
        "biome_histogram": {str(index): count for index, count in metrics.biome_histogram.items()},
        "out_of_range_biomes": metrics.out_of_range_biomes,
    }
    with open(filepath, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
