"""Configuration helpers for deterministic hex terrain generation."""
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .errors import InvalidParameterError

Seed = Union[int, float]

DEFAULT_SEED: Seed = 0

# //1.- Accept both the snake_case field names and the camelCase query keys.
_KEY_ALIASES = {
    "gridSize": "grid_size",
    "hexSize": "hex_size",
    "hexGap": "hex_gap",
    "biomeCount": "biome_count",
    "cacheCapacity": "cache_capacity",
}


def _parse_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidParameterError(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidParameterError(f"{name} must be an integer, got {raw!r}")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidParameterError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise InvalidParameterError(f"{name} must be a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {raw!r}") from None


def _parse_seed(name: str, raw: Any) -> Optional[Seed]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        return _parse_float(name, text)


def _parse_optional_int(name: str, raw: Any) -> Optional[int]:
    if raw is None or (isinstance(raw, str) and raw.strip().lower() in ("", "none")):
        return None
    return _parse_int(name, raw)


_PARSERS: Dict[str, Callable[[str, Any], Any]] = {
    "grid_size": _parse_int,
    "hex_size": _parse_float,
    "hex_gap": _parse_float,
    "seed": _parse_seed,
    "biome_count": _parse_int,
    "workers": _parse_int,
    "cache_capacity": _parse_optional_int,
}


# //2.- Immutable bundle of everything a generation request depends on.
@dataclass(frozen=True)
class GenerationParams:
    """Inputs of one generation request.

    ``cache_capacity`` bounds each noise field's memo cache; ``None`` keeps
    every sample, which is fine for a single pass over a finite grid.
    """

    grid_size: int = 16
    hex_size: float = 1.0
    hex_gap: float = 0.1
    seed: Optional[Seed] = None
    biome_count: int = 4
    workers: int = 1
    cache_capacity: Optional[int] = None

    @property
    def resolved_seed(self) -> Seed:
        return DEFAULT_SEED if self.seed is None else self.seed

    # //3.- Reject parameters that would produce degenerate or infinite geometry.
    def validate(self) -> "GenerationParams":
        if isinstance(self.grid_size, bool) or not isinstance(self.grid_size, int):
            raise InvalidParameterError(f"grid_size must be an integer, got {self.grid_size!r}")
        if self.grid_size <= 0:
            raise InvalidParameterError(f"grid_size must be positive, got {self.grid_size}")
        if self.seed is not None and (
            isinstance(self.seed, bool)
            or not isinstance(self.seed, (int, float))
            or (isinstance(self.seed, float) and not math.isfinite(self.seed))
        ):
            raise InvalidParameterError(f"seed must be a finite number or None, got {self.seed!r}")
        if not self.hex_size > 0:
            raise InvalidParameterError(f"hex_size must be positive, got {self.hex_size}")
        if not self.hex_gap >= 0:
            raise InvalidParameterError(f"hex_gap must not be negative, got {self.hex_gap}")
        if self.hex_gap >= self.hex_size:
            raise InvalidParameterError(
                f"hex_gap ({self.hex_gap}) must be smaller than hex_size ({self.hex_size})"
            )
        if isinstance(self.biome_count, bool) or not isinstance(self.biome_count, int) or self.biome_count <= 0:
            raise InvalidParameterError(f"biome_count must be a positive integer, got {self.biome_count!r}")
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers <= 0:
            raise InvalidParameterError(f"workers must be a positive integer, got {self.workers!r}")
        if self.cache_capacity is not None and (
            isinstance(self.cache_capacity, bool)
            or not isinstance(self.cache_capacity, int)
            or self.cache_capacity <= 0
        ):
            raise InvalidParameterError(
                f"cache_capacity must be a positive integer or None, got {self.cache_capacity!r}"
            )
        return self

    # //4.- Build parameters from an arbitrary mapping such as parsed query strings.
    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]] = None) -> "GenerationParams":
        if not payload:
            return cls()
        values: Dict[str, Any] = {}
        for key, raw in payload.items():
            name = _KEY_ALIASES.get(key, key)
            parser = _PARSERS.get(name)
            if parser is None:
                continue
            values[name] = parser(name, raw)
        return cls(**values).validate()

    # //5.- Allow overriding parameters through environment variables.
    @classmethod
    def from_environment(
        cls, prefix: str = "HEXTERRAIN", env: Optional[Mapping[str, str]] = None
    ) -> "GenerationParams":
        source = env if env is not None else os.environ
        mapping: Dict[str, str] = {}
        for item in fields(cls):
            value = source.get(f"{prefix}_{item.name.upper()}")
            if value is not None:
                mapping[item.name] = value
        return cls.from_mapping(mapping)

    def with_overrides(self, **overrides: Any) -> "GenerationParams":
        present = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **present).validate()


# //6.- Canonical accessor used by the generator and the command line.
def load_generation_params(
    mapping: Optional[Mapping[str, Any]] = None,
    *,
    env_prefix: str = "HEXTERRAIN",
) -> GenerationParams:
    if mapping is not None:
        return GenerationParams.from_mapping(mapping)
    return GenerationParams.from_environment(prefix=env_prefix)


# //7.- Load a JSON object from disk and interpret it as generation parameters.
def load_params_file(path: str) -> GenerationParams:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise InvalidParameterError(f"{path} must contain a JSON object")
    return GenerationParams.from_mapping(payload)
