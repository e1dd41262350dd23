"""Memoization caches backing :class:`hexterrain.noise.NoiseField`."""
from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, Hashable, Optional, Protocol

from .errors import InvalidParameterError


class NoiseCache(Protocol):
    """Minimal mapping contract a noise field needs from its memo cache."""

    def get(self, key: Hashable) -> Optional[float]:
        ...

    def put(self, key: Hashable, value: float) -> None:
        ...

    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        ...


class UnboundedCache:
    """Dictionary cache that never evicts.

    Suitable for a single generation pass where the number of distinct
    sample points is bounded by the grid size.
    """

    def __init__(self) -> None:
        self._values: Dict[Hashable, float] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[float]:
        with self._lock:
            return self._values.get(key)

    def put(self, key: Hashable, value: float) -> None:
        with self._lock:
            self._values[key] = value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


class BoundedCache:
    """Least-recently-used cache holding at most ``capacity`` entries."""

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidParameterError("cache capacity must be a positive integer")
        self._capacity = capacity
        self._values: "OrderedDict[Hashable, float]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: Hashable) -> Optional[float]:
        with self._lock:
            value = self._values.get(key)
            if value is not None:
                self._values.move_to_end(key)
            return value

    def put(self, key: Hashable, value: float) -> None:
        with self._lock:
            self._values[key] = value
            self._values.move_to_end(key)
            while len(self._values) > self._capacity:
                self._values.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


def make_cache(capacity: Optional[int] = None) -> NoiseCache:
    """Return an unbounded cache for ``None`` and an LRU cache otherwise."""

    if capacity is None:
        return UnboundedCache()
    return BoundedCache(capacity)
