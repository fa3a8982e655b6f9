from __future__ import annotations

import io
import urllib.error

import pytest

from sketchfab_embed.adapters import http_client
from sketchfab_embed.adapters.http_client import UrllibHttpClient
from sketchfab_embed.core.errors import MetadataFetchError


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def _patch_urlopen(monkeypatch, handler) -> list:
    seen: list = []

    def fake_urlopen(request, timeout=None):
        seen.append((request, timeout))
        return handler(request)

    monkeypatch.setattr(http_client.urllib.request, "urlopen", fake_urlopen)
    return seen


def test_get_text_returns_body_and_sends_headers(monkeypatch) -> None:
    seen = _patch_urlopen(monkeypatch, lambda request: FakeResponse('{"name": "é"}'.encode("utf-8")))
    client = UrllibHttpClient(timeout=3, user_agent="tests/1.0")

    assert client.get_text("https://api.sketchfab.com/v2/models/abc") == '{"name": "é"}'

    request, timeout = seen[0]
    assert timeout == 3
    assert request.get_method() == "GET"
    assert request.full_url == "https://api.sketchfab.com/v2/models/abc"
    assert request.get_header("Accept") == "application/json"
    assert request.get_header("User-agent") == "tests/1.0"


def test_http_error_becomes_fetch_error(monkeypatch) -> None:
    def handler(request):
        raise urllib.error.HTTPError(request.full_url, 404, "Not Found", {}, io.BytesIO(b""))

    _patch_urlopen(monkeypatch, handler)

    with pytest.raises(MetadataFetchError, match="HTTP 404"):
        UrllibHttpClient().get_text("https://api.sketchfab.com/v2/models/missing")


def test_network_error_becomes_fetch_error(monkeypatch) -> None:
    def handler(request):
        raise urllib.error.URLError("no route")

    _patch_urlopen(monkeypatch, handler)

    with pytest.raises(MetadataFetchError, match="no route"):
        UrllibHttpClient().get_text("https://api.sketchfab.com/v2/models/abc")


def test_timeout_becomes_fetch_error(monkeypatch) -> None:
    def handler(request):
        raise TimeoutError("timed out")

    _patch_urlopen(monkeypatch, handler)

    with pytest.raises(MetadataFetchError):
        UrllibHttpClient().get_text("https://api.sketchfab.com/v2/models/abc")


def test_non_200_and_empty_bodies_are_failures(monkeypatch) -> None:
    _patch_urlopen(monkeypatch, lambda request: FakeResponse(b"{}", status=204))
    with pytest.raises(MetadataFetchError, match="HTTP 204"):
        UrllibHttpClient().get_text("https://api.sketchfab.com/v2/models/abc")

    _patch_urlopen(monkeypatch, lambda request: FakeResponse(b""))
    with pytest.raises(MetadataFetchError, match="Empty"):
        UrllibHttpClient().get_text("https://api.sketchfab.com/v2/models/abc")


def test_invalid_url_becomes_fetch_error() -> None:
    with pytest.raises(MetadataFetchError):
        UrllibHttpClient().get_text("not a url")
