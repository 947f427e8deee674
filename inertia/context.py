"""
Per-request Inertia context and its FastAPI dependency.

Usage:

    config = InertiaConfig.from_env(version="1")
    InertiaDep = Annotated[Inertia, Depends(inertia_dependency(config))]

    @app.get("/users")
    async def index(inertia: InertiaDep):
        return await inertia.render("users/index", {"users": lambda: load_users()})

The Inertia object is also the evaluation context handed to deferred props
that take an argument, so they can reach the request and its state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from inertia import headers as h
from inertia.config import InertiaConfig
from inertia.models import RequestIntent
from inertia.props import PropMapping, to_prop_mapping
from inertia.services.merger import merge_props
from inertia.services.partial_reload import parse_intent
from inertia.services.renderer import InertiaRenderer

SharedSource = Mapping[Any, Any] | Callable[[Request], Mapping[Any, Any]]


class Inertia:
    """
    Request-scoped controller for Inertia renders.

    Holds the shared data and view assigns for one request. Never shared
    across requests.
    """

    def __init__(
        self,
        request: Request,
        renderer: InertiaRenderer,
        shared: Iterable[SharedSource] = (),
    ):
        self.request = request
        self._renderer = renderer
        self._shared_sources = tuple(shared)
        self._shared: PropMapping = {}
        self._assigns: dict[Any, Any] = {}

        endpoint = request.scope.get("endpoint")
        self.controller_path = _controller_path(endpoint)
        self.action_name = getattr(endpoint, "__name__", "")

    @property
    def config(self) -> InertiaConfig:
        return self._renderer.config

    @property
    def intent(self) -> RequestIntent:
        return parse_intent(self.request.headers)

    @property
    def is_inertia(self) -> bool:
        return self.intent.is_inertia_request

    def share(self, **props: Any) -> None:
        """Add shared data for this request. Later calls win on conflicts."""
        self._shared.update(to_prop_mapping(props))

    def assign(self, **props: Any) -> None:
        """Set view assigns, used as the page props when render() gets none."""
        self._assigns.update(props)

    def shared_data(self) -> PropMapping:
        """
        Application-wide shared data followed by this request's share() calls.

        Callable sources are evaluated here, once per render. Sources are
        folded in order with deep_merge_shared_data deciding whether nested
        mappings are combined or replaced.
        """
        deep = self.config.deep_merge_shared_data
        data: PropMapping = {}
        for source in self._shared_sources:
            values = source(self.request) if callable(source) else source
            data = merge_props(data, values, deep=deep)
        return merge_props(data, self._shared, deep=deep)

    def view_assigns(self) -> dict[Any, Any]:
        return dict(self._assigns)

    async def render(
        self,
        component: str | bool = True,
        props: Mapping[Any, Any] | None = None,
        *,
        view_data: Mapping[str, Any] | None = None,
        deep_merge: bool | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Render a component. See InertiaRenderer.render."""
        return await self._renderer.render(
            self,
            component,
            props,
            view_data=view_data,
            deep_merge=deep_merge,
            status_code=status_code,
            headers=headers,
        )

    def location(self, url: str) -> Response:
        """
        Redirect to ``url``, leaving the single-page app if needed.

        Inertia requests get a 409 with X-Inertia-Location so the client
        performs a full page visit; other requests get a normal redirect.
        """
        if self.is_inertia:
            return Response(status_code=409, headers={h.LOCATION: url})
        status_code = 307 if self.request.method == "GET" else 303
        return RedirectResponse(url, status_code=status_code)


def inertia_dependency(
    config: InertiaConfig,
    *,
    shared: Iterable[SharedSource] = (),
    renderer: InertiaRenderer | None = None,
) -> Callable[[Request], Inertia]:
    """
    Build a FastAPI dependency yielding an Inertia context per request.

    Args:
        config: Adapter configuration, built once at start-up
        shared: Mappings, or callables taking the request, merged into every page's shared data
        renderer: Prebuilt renderer (custom templates or SSR client)

    Returns:
        A dependency function for Depends()
    """
    renderer = renderer or InertiaRenderer(config)
    sources = tuple(shared)

    def get_inertia(request: Request) -> Inertia:
        return Inertia(request, renderer, sources)

    return get_inertia


def _controller_path(endpoint: Any) -> str:
    module = getattr(endpoint, "__module__", None) or ""
    return module.rsplit(".", 1)[-1]
