from __future__ import annotations

import json

import httpx
import pytest

from themesync.errors import InvalidProxyError
from themesync.transport import HttpxAdapter, validate_proxy_url


def _adapter(handler, **kwargs) -> HttpxAdapter:
    return HttpxAdapter(
        base_url="https://example.myshopify.com",
        access_token="shpat_token",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_adapter_sends_requests_relative_to_store():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    adapter = _adapter(handler)
    adapter.get("/admin/themes/123/assets.json?asset%5Bkey%5D=layout%2Ftheme.liquid")
    adapter.put("/admin/themes/123/assets.json", {"asset": {"key": "a.txt", "value": "hi"}})
    adapter.close()

    assert seen[0].method == "GET"
    assert str(seen[0].url) == (
        "https://example.myshopify.com/admin/themes/123/assets.json?asset%5Bkey%5D=layout%2Ftheme.liquid"
    )
    assert seen[0].headers["X-Shopify-Access-Token"] == "shpat_token"
    assert seen[1].method == "PUT"
    assert json.loads(seen[1].content) == {"asset": {"key": "a.txt", "value": "hi"}}


def test_adapter_returns_error_statuses_as_responses():
    adapter = _adapter(lambda request: httpx.Response(404, content=b"{}"))

    response = adapter.delete("/admin/themes/1/assets.json?asset%5Bkey%5D=x")

    assert response.status_code == 404


def test_adapter_lets_transport_errors_through():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    adapter = _adapter(handler)

    with pytest.raises(httpx.ConnectTimeout):
        adapter.get("/meta.json")


def test_adapter_rejects_invalid_proxy():
    with pytest.raises(InvalidProxyError, match="invalid proxy URI"):
        HttpxAdapter(base_url="https://example.myshopify.com", proxy="://foo.com")


def test_validate_proxy_url():
    assert validate_proxy_url("") is None
    assert validate_proxy_url("  ") is None
    assert validate_proxy_url("http://127.0.0.1:8080") == "http://127.0.0.1:8080"
    with pytest.raises(InvalidProxyError):
        validate_proxy_url("localhost")
