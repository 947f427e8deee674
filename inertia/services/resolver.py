"""
Deferred prop resolution.

Walks a filtered PropMapping depth-first and turns it into plain data.
Deferred props are called exactly once, in mapping order, with the
request's evaluation context when they accept one. Coroutine functions
are awaited.
"""

from __future__ import annotations

import inspect
from typing import Any

from inertia.errors import DeferredEvaluationError
from inertia.props import Deferred, Plain, PropEntry, PropMapping


async def resolve_props(mapping: PropMapping, context: Any = None) -> dict[str, Any]:
    """
    Resolve every prop in ``mapping`` to a concrete value.

    Args:
        mapping: Props that survived filtering
        context: Evaluation context handed to deferred callables

    Returns:
        A plain dict, same keys and order as ``mapping``

    Raises:
        DeferredEvaluationError: If a deferred callable raises
    """
    return await _resolve_mapping(mapping, context, "")


async def _resolve_mapping(mapping: PropMapping, context: Any, prefix: str) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for key, entry in mapping.items():
        resolved[key] = await _resolve_entry(entry, context, f"{prefix}{key}")
    return resolved


async def _resolve_entry(entry: PropEntry, context: Any, path: str) -> Any:
    if isinstance(entry, dict):
        return await _resolve_mapping(entry, context, f"{path}.")
    if isinstance(entry, Deferred):
        return await evaluate(entry, context, path)
    if isinstance(entry, Plain):
        return entry.value
    return entry


async def evaluate(prop: Deferred, context: Any, key: str) -> Any:
    """Call a deferred prop once and return its value."""
    try:
        value = prop.fn(context) if prop.takes_context else prop.fn()
        if inspect.isawaitable(value):
            value = await value
    except Exception as e:
        raise DeferredEvaluationError(key, e) from e
    return value
