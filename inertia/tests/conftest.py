"""
Pytest configuration and fixtures for Inertia tests.
"""

from contextlib import asynccontextmanager
from typing import Annotated

import httpx
import pytest
from fastapi import Depends, FastAPI, Request

from inertia import Inertia, InertiaConfig, defer, inertia_dependency, lazy
from inertia.services.renderer import InertiaRenderer


def _current_user(request: Request) -> dict:
    return {"auth": {"user": request.headers.get("X-User")}}


def build_app(config: InertiaConfig, renderer: InertiaRenderer | None = None) -> FastAPI:
    """A small app exercising every render path."""
    get_inertia = inertia_dependency(
        config,
        shared=[{"app_name": "Demo"}, _current_user],
        renderer=renderer,
    )
    InertiaDep = Annotated[Inertia, Depends(get_inertia)]

    app = FastAPI()

    @app.get("/users")
    async def users(inertia: InertiaDep):
        return await inertia.render(
            "Users/Index",
            {
                "users": [{"id": 1, "name": "Ada"}],
                "stats": defer(lambda: {"total": 1}),
                "audit": lazy(lambda: ["created"]),
            },
            view_data={"title": "Users"},
        )

    @app.get("/dashboard")
    async def dashboard(inertia: InertiaDep):
        inertia.share(flash="Welcome")
        inertia.assign(widgets=["clock"], owner=lambda ctx: ctx.request.headers.get("X-User"))
        return await inertia.render()

    @app.get("/eager")
    async def eager(inertia: InertiaDep):
        return await inertia.render("Eager", {"a": 1, "b": defer(lambda: 3), "c": 2})

    @app.get("/status")
    async def with_status(inertia: InertiaDep):
        return await inertia.render("Status", {}, status_code=201, headers={"Vary": "Accept"})

    @app.get("/broken")
    async def broken(inertia: InertiaDep):
        return await inertia.render("Broken", {"oops": lambda: 1 / 0})

    @app.get("/away")
    async def away(inertia: InertiaDep):
        return inertia.location("https://example.com/login")

    return app


@pytest.fixture
def config() -> InertiaConfig:
    return InertiaConfig(version="abc123")


@pytest.fixture
def client_for():
    """Open an ASGI client against build_app(config)."""

    @asynccontextmanager
    async def _open(config: InertiaConfig, renderer: InertiaRenderer | None = None):
        app = build_app(config, renderer)
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client

    return _open


class FakeController:
    """Minimal controller for unit-testing the page pipeline."""

    def __init__(self, request, shared=None, assigns=None, controller_path="users", action_name="index"):
        self.request = request
        self.controller_path = controller_path
        self.action_name = action_name
        self._shared = shared or {}
        self._assigns = assigns or {}

    def shared_data(self):
        return self._shared

    def view_assigns(self):
        return self._assigns


def make_request(
    path: str = "/users",
    query: str = "",
    headers: dict[str, str] | None = None,
    raw_path: str | None = None,
    root_path: str = "",
) -> Request:
    """Build a Starlette request without running an app."""
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("test", 80),
        "path": path,
        "raw_path": (raw_path or path).encode(),
        "root_path": root_path,
        "query_string": query.encode(),
        "headers": raw_headers,
    }
    return Request(scope)


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def controller_factory(request_factory):
    """Build a FakeController; ``headers`` and ``query`` shape its request."""

    def _build(shared=None, assigns=None, headers=None, query="", **kwargs):
        return FakeController(request_factory(query=query, headers=headers), shared, assigns, **kwargs)

    return _build
