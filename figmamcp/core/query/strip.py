"""Result-size mitigation for query output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

GEOMETRY_KEYS = frozenset({"fillGeometry", "strokeGeometry"})
GEOMETRY_PLACEHOLDER = "[Geometry data removed]"
MAX_DEPTH_PLACEHOLDER = "[Max depth reached]"
DEFAULT_MAX_DEPTH = 50


def strip_heavy_data(
    value: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
    current_depth: int = 0,
) -> Any:
    """Replace fill/stroke geometry payloads with a placeholder marker.

    Only path/point geometry is stripped; style data is kept. Recursion is
    bounded so self-referencing results still terminate.
    """
    if current_depth > max_depth:
        return MAX_DEPTH_PLACEHOLDER

    if value is None:
        return None

    if isinstance(value, (list, tuple)):
        return [strip_heavy_data(item, max_depth, current_depth + 1) for item in value]

    if isinstance(value, Mapping):
        stripped: dict[Any, Any] = {}
        for key, item in value.items():
            if key in GEOMETRY_KEYS:
                stripped[key] = GEOMETRY_PLACEHOLDER
                continue
            stripped[key] = strip_heavy_data(item, max_depth, current_depth + 1)
        return stripped

    return value
