"""
Prop merging: shared data + page props into one canonical mapping.

Both sides are normalized first so that keys spelled differently in shared
data and page props (a str and an Enum member, say) land on one entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from inertia.props import PropMapping, to_prop_mapping


def merge_props(shared: Mapping[Any, Any] | None, local: Mapping[Any, Any] | None, deep: bool = False) -> PropMapping:
    """
    Merge shared data with page props. Page props win on conflicts.

    Args:
        shared: Shared data for the request
        local: Props passed to render (or the view assigns)
        deep: Recursively merge nested mappings present on both sides

    Returns:
        A new PropMapping in insertion order: shared keys first, then any
        keys only the page props define
    """
    merged = to_prop_mapping(shared)
    overrides = to_prop_mapping(local)
    if deep:
        return _deep_merge(merged, overrides)
    merged.update(overrides)
    return merged


def _deep_merge(base: PropMapping, overrides: PropMapping) -> PropMapping:
    result = dict(base)
    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _deep_merge(current, value)
        else:
            result[key] = value
    return result
