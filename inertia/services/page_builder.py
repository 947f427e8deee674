"""
Page object construction.

Pipeline order matters: the validator sees the merged props before the
filter drops anything, and only the survivors of the filter are resolved.

    merge -> validate -> filter -> resolve -> PageEnvelope
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from starlette.requests import Request

from inertia.config import InertiaConfig
from inertia.models import PageEnvelope, RequestIntent
from inertia.services.merger import merge_props
from inertia.services.partial_reload import filter_props, validate_partial_props
from inertia.services.resolver import resolve_props

logger = logging.getLogger(__name__)


class PageController(Protocol):
    """What the page builder needs from the request's controller."""

    request: Request
    controller_path: str
    action_name: str

    def shared_data(self) -> Mapping[Any, Any]: ...

    def view_assigns(self) -> Mapping[Any, Any]: ...


def resolve_component(component: str | bool, controller: PageController, config: InertiaConfig) -> str:
    """
    Turn a component selector into a component name.

    ``True`` derives the name from the controller path and action through
    the configured resolver; a string is used verbatim.
    """
    if component is True:
        return config.resolve_component_path(controller.controller_path, controller.action_name)
    if not isinstance(component, str) or not component:
        raise TypeError(f"component must be a non-empty string or True, got {component!r}")
    return component


def request_url(request: Request) -> str:
    """
    Path plus query string, exactly as the client sent them.

    Built from the raw scope bytes; request.url.path is percent-decoded.
    """
    scope = request.scope
    root_path = scope.get("root_path", "")
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope["path"]
    if root_path and not path.startswith(root_path):
        path = f"{root_path}{path}"
    query = scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


async def build_page(
    component: str,
    controller: PageController,
    intent: RequestIntent,
    config: InertiaConfig,
    props: Mapping[Any, Any] | None = None,
    deep_merge: bool | None = None,
) -> PageEnvelope:
    """
    Build the page object for a render.

    Args:
        component: Resolved component name
        controller: Source of shared data, view assigns, and the deferred prop context
        intent: Parsed protocol headers
        config: Adapter configuration
        props: Page props; the controller's view assigns when None
        deep_merge: Override config.deep_merge_shared_data for this render

    Returns:
        The assembled PageEnvelope
    """
    if props is None:
        props = controller.view_assigns()
    if deep_merge is None:
        deep_merge = config.deep_merge_shared_data

    merged = merge_props(controller.shared_data(), props, deep=deep_merge)
    validate_partial_props(
        merged,
        intent,
        component,
        raise_on_unoptimized=config.raise_on_unoptimized_partial_reloads,
    )
    selected = filter_props(merged, intent, component)
    resolved = await resolve_props(selected, controller)

    logger.debug("inertia: built page %s with props %s", component, list(resolved))
    return PageEnvelope(
        component=component,
        props=resolved,
        url=request_url(controller.request),
        version=config.version,
    )
