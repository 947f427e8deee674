"""
Prop values: the tagged union every prop is classified into.

A prop is either:
  Plain     a value that was computed when the mapping was built
  Deferred  a callable evaluated on demand, once per response
  Lazy      a Deferred that full renders skip; only partial reloads
            that explicitly request it will evaluate it

Classification happens once, when a raw mapping is normalized into a
PropMapping. Nothing downstream probes values for callability.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Plain:
    """An eagerly computed prop value."""

    value: Any


@dataclass(frozen=True)
class Deferred:
    """A prop computed on demand by calling ``fn``."""

    fn: Callable[..., Any]
    takes_context: bool = False

    @classmethod
    def of(cls, fn: Callable[..., Any]) -> Deferred:
        return cls(fn=fn, takes_context=_accepts_context(fn))


@dataclass(frozen=True)
class Lazy(Deferred):
    """Opt-in deferred prop. Excluded unless a partial reload asks for it."""


PropValue: TypeAlias = Plain | Deferred
# Nested mappings stay as dicts so deep merges and recursive resolution can walk them
PropEntry: TypeAlias = "PropValue | dict[str, PropEntry]"
PropMapping: TypeAlias = "dict[str, PropEntry]"


def defer(fn: Callable[..., Any]) -> Deferred:
    """Wrap a callable as an ordinary deferred prop."""
    return Deferred.of(fn)


def lazy(fn: Callable[..., Any]) -> Lazy:
    """
    Wrap a callable as an opt-in lazy prop.

    Lazy props are left out of full page renders and only evaluated when a
    partial reload names them in X-Inertia-Partial-Data.
    """
    return Lazy.of(fn)


def normalize_key(key: Any) -> str:
    """
    Collapse a prop key to its canonical string form.

    Enum members collapse to their value, so ``Keys.user`` and ``"user"``
    name the same prop once serialized.
    """
    if isinstance(key, Enum):
        key = key.value
    return key if isinstance(key, str) else str(key)


def to_prop_mapping(raw: Mapping[Any, Any] | None) -> PropMapping:
    """
    Normalize a raw props mapping into a PropMapping.

    Keys are canonicalized recursively. Values already classified are kept,
    nested mappings are normalized in place, other callables become Deferred
    and everything else becomes Plain. When two keys collapse to the same
    canonical key the later one wins.
    """
    result: PropMapping = {}
    if not raw:
        return result
    for key, value in raw.items():
        result[normalize_key(key)] = _classify(value)
    return result


def _classify(value: Any) -> PropEntry:
    if isinstance(value, (Plain, Deferred)):
        return value
    if isinstance(value, Mapping):
        return to_prop_mapping(value)
    if callable(value) and not isinstance(value, type):
        return Deferred.of(value)
    return Plain(value)


def _accepts_context(fn: Callable[..., Any]) -> bool:
    """True if ``fn`` has a required positional parameter for the context."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD) and param.default is param.empty:
            return True
    return False
