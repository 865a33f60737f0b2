"""Tests for specout.sources.url."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from specout.exceptions import SourceUnavailableError
from specout.models import UrlOptions
from specout.sources.url import UrlSource


URL = "http://localhost:3000/api-json"


def _source(handler, url: str = URL, timeout: float = 30.0) -> UrlSource:
    return UrlSource(url, timeout=timeout, transport=httpx.MockTransport(handler))


def _acquire(source: UrlSource) -> bytes:
    return asyncio.run(source.acquire())


@pytest.mark.usefixtures("quiet_output")
class TestUrlSource:

    def test_returns_body_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == URL
            return httpx.Response(200, text="openapi: 3.0.0\n")

        assert _acquire(_source(handler)) == b"openapi: 3.0.0\n"

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api-json":
                return httpx.Response(302, headers={"location": "/openapi.json"})
            return httpx.Response(200, json={"openapi": "3.1.0"})

        assert b"3.1.0" in _acquire(_source(handler))

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_non_2xx_is_unavailable(self, status: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status)

        with pytest.raises(SourceUnavailableError, match=f"HTTP {status}") as excinfo:
            _acquire(_source(handler))
        assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)
        assert URL in str(excinfo.value)

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SourceUnavailableError, match="connection refused") as excinfo:
            _acquire(_source(handler))
        assert isinstance(excinfo.value.cause, httpx.ConnectError)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SourceUnavailableError, match="Timed out after 0.5s"):
            _acquire(_source(handler, timeout=0.5))

    def test_timeout_is_passed_to_the_client(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.extensions["timeout"])
            return httpx.Response(200, json={"openapi": "3.0.0"})

        _acquire(_source(handler, timeout=2.5))
        assert seen["read"] == 2.5
        assert seen["connect"] == 2.5

    def test_from_options(self) -> None:
        source = UrlSource.from_options(UrlOptions(url=URL, timeout=3))
        assert source.describe() == URL
