"""Neighbour algebra for an offset grid of flat-top hexagons.

Odd columns sit half a row lower than even columns, so the row delta of
the diagonal directions depends on column parity. Rim vertices are
numbered clockwise from the east corner (0 deg, 60 deg, ... 300 deg), which
fixes the pair of vertices bounding each edge.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class Direction(Enum):
    N = "N"
    NE = "NE"
    SE = "SE"
    S = "S"
    SW = "SW"
    NW = "NW"

    @classmethod
    def parse(cls, name: str) -> "Direction":
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown hex direction '{name}'") from None

    @property
    def opposite(self) -> "Direction":
        return DIRECTION_TABLE[self].opposite

    @property
    def clockwise(self) -> "Direction":
        return DIRECTION_TABLE[self].clockwise

    @property
    def edge_vertices(self) -> Tuple[int, int]:
        return DIRECTION_TABLE[self].edge_vertices

    def delta(self, col: int) -> Tuple[int, int]:
        """Return ``(dcol, drow)`` for a step from a cell in column ``col``."""

        info = DIRECTION_TABLE[self]
        drow = info.delta_row_odd if col % 2 == 1 else info.delta_row_even
        return info.delta_col, drow


@dataclass(frozen=True)
class DirectionInfo:
    delta_col: int
    delta_row_even: int
    delta_row_odd: int
    edge_vertices: Tuple[int, int]
    opposite: Direction
    clockwise: Direction


DIRECTION_TABLE: Mapping[Direction, DirectionInfo] = MappingProxyType(
    {
        Direction.N: DirectionInfo(0, -1, -1, (4, 5), Direction.S, Direction.NE),
        Direction.NE: DirectionInfo(1, -1, 0, (5, 0), Direction.SW, Direction.SE),
        Direction.SE: DirectionInfo(1, 0, 1, (0, 1), Direction.NW, Direction.S),
        Direction.S: DirectionInfo(0, 1, 1, (1, 2), Direction.N, Direction.SW),
        Direction.SW: DirectionInfo(-1, 0, 1, (2, 3), Direction.NE, Direction.NW),
        Direction.NW: DirectionInfo(-1, -1, 0, (3, 4), Direction.SE, Direction.N),
    }
)

# Each interior edge is owned by exactly one of its two cells.
SKIRT_DIRECTIONS: Tuple[Direction, ...] = (Direction.SE, Direction.S, Direction.SW)

ALL_DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)
