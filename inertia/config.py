"""
Inertia configuration: every adapter option in one place.

Built once at application start-up (usually via InertiaConfig.from_env())
and passed to inertia_dependency(). Frozen: request handling only reads it.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from inertia.errors import ConfigError

DEFAULT_LAYOUT = "inertia.html"
DEFAULT_SSR_URL = "http://localhost:13714"

_TRUTHY = {"true", "1", "yes", "on"}


def default_component_path_resolver(path: str, action: str) -> str:
    """Map a controller path and action to a component name, e.g. users/index."""
    return f"{path}/{action}"


class InertiaConfig(BaseModel):
    """Process-wide adapter configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    # Server-side rendering
    ssr_enabled: bool = False
    ssr_url: str = DEFAULT_SSR_URL
    ssr_timeout: float | None = None  # None = httpx default

    # Document rendering
    layout: str | None = None  # None = DEFAULT_LAYOUT
    templates_dir: Path | None = None

    # Page object
    version: str | None = None
    deep_merge_shared_data: bool = False
    raise_on_unoptimized_partial_reloads: bool = False
    component_path_resolver: Callable[[str, str], str] = default_component_path_resolver

    @property
    def layout_template(self) -> str:
        return self.layout or DEFAULT_LAYOUT

    def resolve_component_path(self, path: str, action: str) -> str:
        return self.component_path_resolver(path, action)

    @classmethod
    def from_env(cls, **overrides: Any) -> InertiaConfig:
        """
        Build a config from INERTIA_* environment variables.

        Keyword overrides take precedence over the environment.

        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        env: dict[str, Any] = {}

        if "INERTIA_SSR_ENABLED" in os.environ:
            env["ssr_enabled"] = _env_bool("INERTIA_SSR_ENABLED")
        if os.environ.get("INERTIA_SSR_URL"):
            env["ssr_url"] = os.environ["INERTIA_SSR_URL"].rstrip("/")
        if os.environ.get("INERTIA_SSR_TIMEOUT"):
            env["ssr_timeout"] = _env_float("INERTIA_SSR_TIMEOUT")
        if os.environ.get("INERTIA_LAYOUT"):
            env["layout"] = os.environ["INERTIA_LAYOUT"]
        if os.environ.get("INERTIA_TEMPLATES_DIR"):
            env["templates_dir"] = Path(os.environ["INERTIA_TEMPLATES_DIR"])
        if os.environ.get("INERTIA_VERSION"):
            env["version"] = os.environ["INERTIA_VERSION"]
        if "INERTIA_DEEP_MERGE_SHARED_DATA" in os.environ:
            env["deep_merge_shared_data"] = _env_bool("INERTIA_DEEP_MERGE_SHARED_DATA")
        if "INERTIA_RAISE_ON_UNOPTIMIZED_PARTIAL_RELOADS" in os.environ:
            env["raise_on_unoptimized_partial_reloads"] = _env_bool("INERTIA_RAISE_ON_UNOPTIMIZED_PARTIAL_RELOADS")

        return cls(**{**env, **overrides})


def _env_bool(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def _env_float(name: str) -> float:
    raw = os.environ[name]
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
