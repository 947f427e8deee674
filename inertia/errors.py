"""
Inertia error hierarchy.

All adapter errors inherit from InertiaError. SSR errors never escape the
SSR client; the others propagate to the framework as request failures.
"""

from __future__ import annotations


class InertiaError(Exception):
    """Base error for all Inertia operations."""


class ConfigError(InertiaError):
    """Invalid configuration value."""


class UnoptimizedPartialReloadError(InertiaError):
    """A partial reload computed props it did not request."""


class SSRError(InertiaError):
    """Server-side rendering failed."""


class SSRTransportError(SSRError):
    """The SSR server is unreachable or answered with a non-2xx status."""


class SSRProtocolError(SSRError):
    """The SSR server answered with a malformed or incomplete payload."""


class DeferredEvaluationError(InertiaError):
    """A deferred prop raised while being evaluated."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        super().__init__(f"Deferred prop {key!r} failed: {cause}")
