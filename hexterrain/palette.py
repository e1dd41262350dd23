"""Biome colour table and texture-atlas slot assignment.

Biome indices come straight from ``floor(elevation * biome_count)`` and are
routinely out of range for tall terrain, so every lookup here resolves
through :func:`resolve_biome_slot` instead of indexing directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Union

BIOME_COLORS = (
    0x8BC34A,  # grass / plains
    0x4CAF50,  # forest
    0x795548,  # mountains
    0xFFEB3B,  # desert
)

DEFAULT_KEY = "default"

AtlasKey = Union[int, str]


def resolve_biome_slot(index: int, count: int, fallback: int = 0) -> int:
    if 0 <= index < count:
        return index
    return fallback


def biome_color(index: int) -> int:
    return BIOME_COLORS[resolve_biome_slot(index, len(BIOME_COLORS))]


def _default_texture_map() -> Dict[AtlasKey, str]:
    return {
        0: "grass",
        1: "rock",
        2: "mud",
        3: "snow",
        4: "sand",
        DEFAULT_KEY: "blue",
    }


@dataclass
class TextureAtlas:
    """Maps biome indices to texture names and to slots in a packed atlas."""

    textures: Dict[AtlasKey, str] = field(default_factory=_default_texture_map)
    slots: Dict[AtlasKey, int] = field(default_factory=dict)

    def texture_names(self, biome_indices: Iterable[int]) -> List[str]:
        # Unknown biomes borrow biome 0's texture, not the default one.
        return [self.textures.get(index, self.textures[0]) for index in biome_indices]

    def build_slot_map(self, biome_indices: Iterable[AtlasKey]) -> Mapping[AtlasKey, int]:
        keys: List[AtlasKey] = []
        for index in biome_indices:
            if index not in keys:
                keys.append(index)
        if DEFAULT_KEY not in keys:
            keys.append(DEFAULT_KEY)
        self.slots = {key: slot for slot, key in enumerate(keys)}
        return dict(self.slots)

    @property
    def default_slot(self) -> int:
        return self.slots.get(DEFAULT_KEY, 0)

    def slot_for(self, biome_index: int) -> int:
        return self.slots.get(biome_index, self.default_slot)
