"""Tests for generation parameter loading."""
from __future__ import annotations

import json

import pytest

from hexterrain.config import (
    DEFAULT_SEED,
    GenerationParams,
    load_generation_params,
    load_params_file,
)
from hexterrain.errors import InvalidParameterError


def test_defaults_are_valid() -> None:
    params = GenerationParams()
    assert params.validate() is params
    assert params.resolved_seed == DEFAULT_SEED


def test_from_mapping_accepts_camel_case_and_strings() -> None:
    params = GenerationParams.from_mapping(
        {"gridSize": "8", "hexSize": "2.5", "hexGap": 0.5, "seed": "42", "biomeCount": 6, "extra": "ignored"}
    )
    assert params.grid_size == 8
    assert params.hex_size == 2.5
    assert params.hex_gap == 0.5
    assert params.seed == 42
    assert params.biome_count == 6


def test_from_mapping_keeps_fractional_seed() -> None:
    assert GenerationParams.from_mapping({"seed": "1.25"}).seed == 1.25
    assert GenerationParams.from_mapping({"seed": ""}).seed is None


@pytest.mark.parametrize(
    "payload",
    [
        {"grid_size": "abc"},
        {"grid_size": 2.5},
        {"grid_size": True},
        {"grid_size": 0},
        {"hex_size": "wide"},
        {"hex_size": -1},
        {"hex_gap": -0.1},
        {"hex_size": 1.0, "hex_gap": 1.0},
        {"workers": 0},
        {"cache_capacity": 0},
        {"seed": "twelve"},
    ],
)
def test_from_mapping_rejects_invalid_values(payload) -> None:
    with pytest.raises(InvalidParameterError):
        GenerationParams.from_mapping(payload)


def test_cache_capacity_none_string() -> None:
    assert GenerationParams.from_mapping({"cacheCapacity": "none"}).cache_capacity is None
    assert GenerationParams.from_mapping({"cacheCapacity": "128"}).cache_capacity == 128


def test_from_environment_reads_prefixed_variables() -> None:
    env = {"HEXTERRAIN_GRID_SIZE": "6", "HEXTERRAIN_SEED": "9", "OTHER_GRID_SIZE": "99"}
    params = GenerationParams.from_environment(env=env)
    assert params.grid_size == 6
    assert params.seed == 9
    assert params.hex_size == 1.0


def test_load_generation_params_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("TERRAIN_HEX_GAP", "0.25")
    monkeypatch.setenv("TERRAIN_WORKERS", "2")
    params = load_generation_params(env_prefix="TERRAIN")
    assert params.hex_gap == 0.25
    assert params.workers == 2


def test_explicit_mapping_wins_over_environment(monkeypatch) -> None:
    monkeypatch.setenv("HEXTERRAIN_GRID_SIZE", "12")
    params = load_generation_params({"grid_size": 3})
    assert params.grid_size == 3


def test_load_params_file(tmp_path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"gridSize": 5, "seed": 3.5}), encoding="utf-8")
    params = load_params_file(str(path))
    assert params.grid_size == 5
    assert params.seed == 3.5


def test_load_params_file_requires_object(tmp_path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(InvalidParameterError):
        load_params_file(str(path))


def test_with_overrides_skips_none_and_validates() -> None:
    params = GenerationParams(grid_size=4)
    updated = params.with_overrides(grid_size=None, seed=7)
    assert updated.grid_size == 4
    assert updated.seed == 7
    with pytest.raises(InvalidParameterError):
        params.with_overrides(hex_gap=2.0)


def test_from_mapping_rejects_infinite_seed() -> None:
    with pytest.raises(InvalidParameterError):
        GenerationParams.from_mapping({"seed": "inf"})
