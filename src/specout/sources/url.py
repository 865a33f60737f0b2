"""Acquire a document from a running service over HTTP.

A single ``GET`` is issued with :class:`httpx.AsyncClient`; redirects are
followed and the whole exchange is bounded by the configured timeout. There
is no retry: a failing endpoint fails the export.
"""

from __future__ import annotations

from typing import Optional

import httpx

from specout.exceptions import SourceUnavailableError
from specout.models import CommandOptions, UrlOptions
from specout.output import debug
from specout.sources.base import DocumentSource


class UrlSource(DocumentSource):
    """Fetch the raw document body from *url*.

    Args:
        url: Absolute ``http``/``https`` URL of the document.
        timeout: Seconds allowed for connecting, reading and writing.
        transport: Optional ``httpx`` transport, used by tests to avoid
            network I/O.
    """

    name = "url"

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_options(cls, options: CommandOptions) -> UrlSource:
        assert isinstance(options, UrlOptions)
        return cls(options.url, timeout=options.timeout)

    def describe(self) -> str:
        return self._url

    async def acquire(self) -> bytes:
        """Return the response body.

        Raises:
            SourceUnavailableError: On timeouts, transport errors and non-2xx
                responses. The ``httpx`` exception is chained as the cause.
        """
        debug(f"GET {self._url} (timeout {self._timeout}s)")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(self._url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailableError(
                f"HTTP {exc.response.status_code} fetching document from {self._url}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise SourceUnavailableError(
                f"Timed out after {self._timeout}s fetching document from {self._url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(
                f"Failed to fetch document from {self._url}: {exc}"
            ) from exc

        debug(
            f"Received {len(response.content)} bytes "
            f"({response.headers.get('content-type', 'no content-type')})"
        )
        return response.content
