"""
Inertia: server-side adapter for the Inertia.js protocol on FastAPI.

One route serves both the first full-page load (an HTML document with the
page object embedded, optionally server-side rendered) and the client's
follow-up visits (the page object as JSON).

  config      InertiaConfig, read once at start-up
  props       defer / lazy wrappers for on-demand props
  context     Inertia request context and the FastAPI dependency
  services    the page pipeline: merge, validate, filter, resolve, render
"""

from inertia.config import InertiaConfig
from inertia.context import Inertia, inertia_dependency
from inertia.errors import (
    ConfigError,
    DeferredEvaluationError,
    InertiaError,
    SSRError,
    SSRProtocolError,
    SSRTransportError,
    UnoptimizedPartialReloadError,
)
from inertia.models import PageEnvelope, RequestIntent, SSRResult
from inertia.props import Deferred, Lazy, Plain, defer, lazy

__all__ = [
    "InertiaConfig",
    "Inertia",
    "inertia_dependency",
    "defer",
    "lazy",
    "Plain",
    "Deferred",
    "Lazy",
    "PageEnvelope",
    "RequestIntent",
    "SSRResult",
    "InertiaError",
    "ConfigError",
    "UnoptimizedPartialReloadError",
    "DeferredEvaluationError",
    "SSRError",
    "SSRTransportError",
    "SSRProtocolError",
]
