from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import urlsplit

import httpx

from themesync.errors import InvalidProxyError

logger = logging.getLogger(__name__)


class HttpAdapter(Protocol):
    def get(self, path: str) -> httpx.Response: ...

    def post(self, path: str, body: Any) -> httpx.Response: ...

    def put(self, path: str, body: Any) -> httpx.Response: ...

    def delete(self, path: str) -> httpx.Response: ...

    def close(self) -> None: ...


def validate_proxy_url(proxy: str) -> str | None:
    cleaned = (proxy or "").strip()
    if not cleaned:
        return None
    parts = urlsplit(cleaned)
    if not parts.scheme or not parts.netloc:
        raise InvalidProxyError(f"invalid proxy URI: {proxy!r}")
    return cleaned


class HttpxAdapter:
    """Sends admin API requests relative to a store's base URL.

    Transport failures (``httpx.HTTPError``) are left to propagate untouched.
    """

    def __init__(
        self,
        *,
        base_url: str,
        access_token: str = "",
        timeout: float = 30.0,
        proxy: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        proxy_url = validate_proxy_url(proxy)
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if access_token:
            headers["X-Shopify-Access-Token"] = access_token
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            proxy=proxy_url,
            transport=transport,
        )

    def _request(self, method: str, path: str, body: Any = None) -> httpx.Response:
        logger.debug("theme_api.request", extra={"method": method, "path": path})
        response = self._client.request(method, path, json=body)
        logger.debug(
            "theme_api.response",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )
        return response

    def get(self, path: str) -> httpx.Response:
        return self._request("GET", path)

    def post(self, path: str, body: Any) -> httpx.Response:
        return self._request("POST", path, body)

    def put(self, path: str, body: Any) -> httpx.Response:
        return self._request("PUT", path, body)

    def delete(self, path: str) -> httpx.Response:
        return self._request("DELETE", path)

    def close(self) -> None:
        self._client.close()
