"""Exception types raised at the generation boundary."""
from __future__ import annotations


class InvalidParameterError(ValueError):
    """Raised when a size, gap, seed or capacity cannot produce valid geometry."""
