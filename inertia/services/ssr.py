"""HTTP client for the out-of-process SSR server."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from inertia.config import InertiaConfig
from inertia.errors import SSRError, SSRProtocolError, SSRTransportError
from inertia.models import SSRResult

logger = logging.getLogger(__name__)


class SSRClient:
    """HTTP client for the SSR server.

    POSTs the page object to ``{ssr_url}/render`` and reads back the rendered
    head fragments and body. One attempt, no retries. Any failure yields
    None so the caller can fall back to an inline render.
    """

    def __init__(self, config: InertiaConfig) -> None:
        self._url = f"{config.ssr_url.rstrip('/')}/render"
        self._timeout = config.ssr_timeout

    @property
    def url(self) -> str:
        return self._url

    async def render(self, page: dict[str, Any]) -> SSRResult | None:
        """
        Render a page on the SSR server.

        Args:
            page: JSON-ready page object

        Returns:
            SSRResult on success, None on any transport or payload failure
        """
        try:
            result = await self.request(page)
        except SSRError as e:
            logger.warning("inertia: SSR render failed at %s, rendering inline: %s", self._url, e)
            return None
        logger.debug("inertia: SSR rendered %s", page.get("component"))
        return result

    async def request(self, page: dict[str, Any]) -> SSRResult:
        """
        POST the page to the SSR server.

        Raises:
            SSRTransportError: If the server is unreachable or returns a non-2xx status
            SSRProtocolError: If the response is not a valid {head, body} object
        """
        client_kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.post(self._url, json=page)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SSRTransportError(f"SSR server returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SSRTransportError(f"SSR server unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SSRProtocolError("SSR server returned invalid JSON") from e

        return parse_ssr_payload(payload)


def parse_ssr_payload(payload: Any) -> SSRResult:
    """
    Validate an SSR response body.

    Raises:
        SSRProtocolError: If the payload is not a {head: [str], body: str} object
    """
    if not isinstance(payload, dict):
        raise SSRProtocolError(f"SSR server returned {type(payload).__name__}, expected an object")
    try:
        return SSRResult.model_validate(payload, strict=True)
    except ValidationError as e:
        raise SSRProtocolError(f"SSR server returned an invalid payload: {e.error_count()} error(s)") from e
