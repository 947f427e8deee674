"""
Response dispatch: JSON page, inline document, or SSR document.

    X-Inertia request          -> JSON page object
    plain request, SSR off     -> document with the page embedded
    plain request, SSR on      -> document with SSR head/body, or the
                                  inline document if SSR fails
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape
from markupsafe import Markup
from starlette.responses import Response

from inertia import headers as h
from inertia.config import InertiaConfig
from inertia.models import SSRResult
from inertia.services.page_builder import PageController, build_page, resolve_component
from inertia.services.partial_reload import parse_intent
from inertia.services.ssr import SSRClient

logger = logging.getLogger(__name__)


def create_templates(config: InertiaConfig) -> Jinja2Templates:
    """
    Template set for document renders.

    config.templates_dir is searched first, then the packaged templates
    (which provide the default inertia.html layout).
    """
    loaders: list[FileSystemLoader | PackageLoader] = []
    if config.templates_dir is not None:
        loaders.append(FileSystemLoader(str(config.templates_dir)))
    loaders.append(PackageLoader("inertia", "templates"))
    env = Environment(loader=ChoiceLoader(loaders), autoescape=select_autoescape())
    return Jinja2Templates(env=env)


def append_vary(response_headers: dict[str, str], value: str = h.INERTIA) -> dict[str, str]:
    """Add ``value`` to the Vary header, keeping whatever it already lists."""
    for name, existing in response_headers.items():
        if name.lower() != h.VARY.lower():
            continue
        listed = [v.strip().lower() for v in existing.split(",") if v.strip()]
        if value.lower() not in listed:
            response_headers[name] = f"{existing}, {value}" if listed else value
        return response_headers
    response_headers[h.VARY] = value
    return response_headers


class InertiaRenderer:
    """Turns a render call into the right kind of response."""

    def __init__(
        self,
        config: InertiaConfig,
        templates: Jinja2Templates | None = None,
        ssr_client: SSRClient | None = None,
    ) -> None:
        self.config = config
        self.templates = templates or create_templates(config)
        self.ssr_client = ssr_client or SSRClient(config)

    async def render(
        self,
        controller: PageController,
        component: str | bool,
        props: Mapping[Any, Any] | None = None,
        *,
        view_data: Mapping[str, Any] | None = None,
        deep_merge: bool | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """
        Render ``component`` for the controller's request.

        Args:
            controller: Request collaborator (shared data, assigns, context)
            component: Component name, or True to derive it from the route
            props: Page props; the view assigns when None
            view_data: Extra template variables for document renders
            deep_merge: Per-render override of config.deep_merge_shared_data
            status_code: Response status
            headers: Headers already set on the response; Vary is appended to

        Returns:
            JSONResponse for X-Inertia requests, an HTML response otherwise
        """
        request = controller.request
        intent = parse_intent(request.headers)
        name = resolve_component(component, controller, self.config)
        page = await build_page(name, controller, intent, self.config, props=props, deep_merge=deep_merge)
        page_data = jsonable_encoder(page)

        response_headers = append_vary(dict(headers or {}))

        if intent.is_inertia_request:
            response_headers[h.INERTIA] = "true"
            logger.debug("inertia: JSON response for %s", name)
            return JSONResponse(page_data, status_code=status_code, headers=response_headers)

        ssr = None
        if self.config.ssr_enabled:
            ssr = await self.ssr_client.render(page_data)

        return self.render_document(
            controller,
            page_data,
            view_data=view_data,
            ssr=ssr,
            status_code=status_code,
            headers=response_headers,
        )

    def render_document(
        self,
        controller: PageController,
        page_data: dict[str, Any],
        *,
        view_data: Mapping[str, Any] | None = None,
        ssr: SSRResult | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Render the layout with the page embedded, using SSR output when given."""
        context: dict[str, Any] = {
            **(view_data or {}),
            "page": page_data,
            "inertia_ssr_head": Markup(ssr.head_html) if ssr else Markup(""),
            "inertia_ssr_body": Markup(ssr.body) if ssr else None,
        }
        return self.templates.TemplateResponse(
            controller.request,
            self.config.layout_template,
            context,
            status_code=status_code,
            headers=dict(headers or {}),
        )
