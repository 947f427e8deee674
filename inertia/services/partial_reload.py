"""
Partial reloads: header parsing, prop selection, and eager-prop detection.

A partial reload asks for a subset of a component's props by naming them in
X-Inertia-Partial-Data. It only applies when X-Inertia-Partial-Component
matches the component being rendered; otherwise the request is served as a
full render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from inertia import headers
from inertia.errors import UnoptimizedPartialReloadError
from inertia.models import RequestIntent
from inertia.props import Deferred, Lazy, PropMapping

logger = logging.getLogger(__name__)


def parse_intent(request_headers: Mapping[str, str]) -> RequestIntent:
    """
    Read the protocol headers of a request.

    Header lookup is case-insensitive when given Starlette Headers.
    Partial keys are comma-separated; blanks are dropped.
    """
    raw_keys = request_headers.get(headers.PARTIAL_DATA) or ""
    keys = frozenset(k.strip() for k in raw_keys.split(",") if k.strip())
    return RequestIntent(
        is_inertia_request=bool(request_headers.get(headers.INERTIA)),
        partial_component=request_headers.get(headers.PARTIAL_COMPONENT),
        requested_keys=keys,
    )


def filter_props(merged: PropMapping, intent: RequestIntent, component: str) -> PropMapping:
    """
    Select the props that go into the response.

    Partial reload of ``component``: only requested keys that exist.
    Anything else: every prop except Lazy ones.
    """
    if intent.targets(component):
        return {key: value for key, value in merged.items() if key in intent.requested_keys}
    return {key: value for key, value in merged.items() if not isinstance(value, Lazy)}


def validate_partial_props(
    merged: PropMapping,
    intent: RequestIntent,
    component: str,
    raise_on_unoptimized: bool = False,
) -> None:
    """
    Flag props that were computed even though the partial reload skips them.

    Unrequested props that are not Deferred were evaluated when the props
    were built, so excluding them saves nothing. A nested mapping counts as
    one eager value; deferred values inside it are not inspected.

    Raises:
        UnoptimizedPartialReloadError: If eager props were found and
            ``raise_on_unoptimized`` is set
    """
    if not intent.targets(component):
        return

    eager = [
        key
        for key, value in merged.items()
        if key not in intent.requested_keys and not isinstance(value, Deferred)
    ]
    if not eager:
        return

    message = unoptimized_message(eager)
    if raise_on_unoptimized:
        raise UnoptimizedPartialReloadError(message)
    logger.warning(message)


def unoptimized_message(keys: list[str]) -> str:
    names = ", ".join(repr(k) for k in keys)
    if len(keys) > 1:
        verb = "props are"
        pronoun = "them because they are defined as values"
    else:
        verb = "prop is"
        pronoun = "it because it is defined as a value"
    return (
        f"The {names} {verb} being computed even though your partial reload did not request {pronoun}. "
        "You might want to wrap these in a callable like a lambda, inertia.defer() or inertia.lazy()."
    )
