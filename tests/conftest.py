"""Shared fixtures: isolated data/config dirs and an in-memory object store."""

from __future__ import annotations

import httpx
import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point data and config dirs at tmp_path and clear remote settings."""
    home = tmp_path / "linhelp-home"
    monkeypatch.setenv("LINHELP_HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NO_COLOR", "1")
    for var in ("LINHELP_BUCKET", "LINHELP_OBJECT_KEY", "LINHELP_REMOTE_TOKEN", "LINHELP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return home


class FakeObjectStore:
    """Whole-object GET/PUT store with ETags, served through httpx.MockTransport."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.versions: dict[str, int] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def etag(self, path: str) -> str:
        return f'"v{self.versions[path]}"'

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.fail_with is not None:
            return httpx.Response(self.fail_with)

        if request.method == "GET":
            if path not in self.objects:
                return httpx.Response(404)
            return httpx.Response(200, content=self.objects[path], headers={"ETag": self.etag(path)})

        if request.method == "PUT":
            if_match = request.headers.get("If-Match")
            if_none_match = request.headers.get("If-None-Match")
            if if_match is not None and (path not in self.objects or if_match != self.etag(path)):
                return httpx.Response(412)
            if if_none_match == "*" and path in self.objects:
                return httpx.Response(412)
            self.objects[path] = request.content
            self.versions[path] = self.versions.get(path, 0) + 1
            return httpx.Response(200, headers={"ETag": self.etag(path)})

        return httpx.Response(405)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def object_store():
    return FakeObjectStore()
