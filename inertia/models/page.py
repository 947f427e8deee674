"""Page object, SSR result, and request intent shapes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PageEnvelope(BaseModel):
    """The page object sent to the client: which component to mount, with which props."""

    component: str
    props: dict[str, Any] = Field(default_factory=dict)
    url: str
    version: str | None = None


class SSRResult(BaseModel):
    """What the SSR server returns for a rendered page."""

    model_config = {"frozen": True}

    head: list[str]
    body: str

    @property
    def head_html(self) -> str:
        return "".join(self.head)


class RequestIntent(BaseModel):
    """Protocol intent derived once from the request headers."""

    model_config = {"frozen": True}

    is_inertia_request: bool = False
    partial_component: str | None = None
    requested_keys: frozenset[str] = frozenset()

    @property
    def is_partial_reload(self) -> bool:
        return bool(self.requested_keys)

    def targets(self, component: str) -> bool:
        """True if this is a partial reload of ``component``."""
        return self.is_partial_reload and self.partial_component == component
