from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

from themesync.client import ThemeClient  # noqa: E402
from themesync.filtering import FileFilter  # noqa: E402


def json_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=body.encode("utf-8"))


class FakeHttpAdapter:
    """Records requests and replays queued responses per (method, path).

    The last queued result for a route is repeated once the queue is drained.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.closed = False
        self._routes: dict[tuple[str, str], list[httpx.Response | Exception]] = {}

    def on(self, method: str, path: str, *results: httpx.Response | Exception) -> None:
        self._routes.setdefault((method, path), []).extend(results)

    def _dispatch(self, method: str, path: str, body: Any = None) -> httpx.Response:
        self.calls.append((method, path, body))
        queue = self._routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path}")
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, path: str) -> httpx.Response:
        return self._dispatch("GET", path)

    def post(self, path: str, body: Any) -> httpx.Response:
        return self._dispatch("POST", path, body)

    def put(self, path: str, body: Any) -> httpx.Response:
        return self._dispatch("PUT", path, body)

    def delete(self, path: str) -> httpx.Response:
        return self._dispatch("DELETE", path)

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def http() -> FakeHttpAdapter:
    return FakeHttpAdapter()


@pytest.fixture()
def make_client(http: FakeHttpAdapter):
    def _make(theme_id: str = "123", ignored: list[str] | None = None) -> ThemeClient:
        return ThemeClient(http=http, theme_id=theme_id, file_filter=FileFilter(ignored or []))

    return _make


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for name in ("DOMAIN", "PASSWORD", "THEME_ID", "PROXY", "TIMEOUT", "DIRECTORY", "IGNORED_FILES", "IGNORES"):
        monkeypatch.delenv(f"THEMEKIT_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
