"""Tests for SSRClient with mocked HTTP."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from inertia.config import InertiaConfig
from inertia.errors import SSRTransportError
from inertia.models import SSRResult
from inertia.services.ssr import SSRClient

pytestmark = pytest.mark.asyncio(loop_scope="session")

PAGE = {"component": "Users/Index", "props": {}, "url": "/users", "version": None}


def mock_async_client(mock_client_cls, post):
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client.post = post
    mock_client_cls.return_value = mock_client
    return mock_client


def ok_response(payload):
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


async def test_render_success():
    """render POSTs the page to {ssr_url}/render and parses head/body."""
    client = SSRClient(InertiaConfig(ssr_url="http://ssr:13714/"))
    response = ok_response({"head": ["<title>Users</title>"], "body": "<div id=\"app\">Users</div>"})

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = mock_async_client(mock_client_cls, AsyncMock(return_value=response))
        result = await client.render(PAGE)

    assert result == SSRResult(head=["<title>Users</title>"], body="<div id=\"app\">Users</div>")
    mock_client.post.assert_called_once()
    call = mock_client.post.call_args
    assert call.args[0] == "http://ssr:13714/render"
    assert call.kwargs["json"] == PAGE


async def test_timeout_passed_when_configured():
    """A configured timeout is handed to the HTTP client."""
    client = SSRClient(InertiaConfig(ssr_timeout=1.5))

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(return_value=ok_response({"head": [], "body": ""})))
        await client.render(PAGE)

    assert mock_client_cls.call_args.kwargs == {"timeout": 1.5}


async def test_render_returns_none_on_http_500():
    """A non-2xx status falls back to None."""
    client = SSRClient(InertiaConfig())
    response = MagicMock()
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "500 Server Error", request=MagicMock(), response=MagicMock(status_code=500)
    )

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(return_value=response))
        assert await client.render(PAGE) is None


async def test_render_returns_none_when_unreachable(caplog):
    """Connection errors fall back to None and log a warning."""
    client = SSRClient(InertiaConfig())

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(side_effect=httpx.ConnectError("Connection refused")))
        assert await client.render(PAGE) is None

    assert "SSR render failed" in caplog.text


async def test_request_raises_transport_error():
    """request() itself surfaces the typed error."""
    client = SSRClient(InertiaConfig())

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(side_effect=httpx.ConnectError("Connection refused")))
        with pytest.raises(SSRTransportError):
            await client.request(PAGE)


async def test_render_returns_none_on_invalid_json():
    """Unparseable bodies fall back to None."""
    client = SSRClient(InertiaConfig())
    response = ok_response(None)
    response.json.side_effect = ValueError("Expecting value")

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(return_value=response))
        assert await client.render(PAGE) is None


async def test_render_returns_none_when_head_missing():
    """A 200 reply without the head field is a failed render."""
    client = SSRClient(InertiaConfig())

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_async_client(mock_client_cls, AsyncMock(return_value=ok_response({"body": "<div>x</div>"})))
        assert await client.render(PAGE) is None
