"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

HTTP transport (default).
"""

from __future__ import annotations

import time
from typing import AsyncIterator, Optional, Union

import httpx

from apifetch.exceptions import TransportError
from apifetch.http.body import FormData
from apifetch.logging_config import get_logger
from apifetch.transport.base import BaseTransport, ResponseBody, TransportRequest, TransportResponse

logger = get_logger(__name__)


class HttpxTransport(BaseTransport):
    """Default transport using ``httpx.AsyncClient``.

    Response bodies are streamed: the connection is released once the
    returned ``ResponseBody`` has been consumed or closed. Network failures
    while reading the body surface as ``TransportError`` as well.

    Args:
        timeout: Timeout in seconds applied to each exchange, None disables it.
        follow_redirects: Whether httpx follows redirects, on by default.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: Optional[float] = 30,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
                transport=self._transport,
            )
            self._connected = True
        return self._client

    @staticmethod
    def _content(body: Union[str, bytes, FormData, None]) -> Union[str, bytes, None]:
        if isinstance(body, FormData):
            return body.encode()
        return body

    @staticmethod
    async def _stream(resp: httpx.Response, request: TransportRequest) -> AsyncIterator[bytes]:
        try:
            async for chunk in resp.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            logger.debug(
                "transport_failure",
                method=request.method,
                url=request.url,
                error=str(e),
                stage="body",
            )
            raise TransportError(f"{type(e).__name__}: {e}") from e

    async def send(self, request: TransportRequest) -> TransportResponse:
        client = self._ensure_client()
        start = time.monotonic()

        try:
            http_request = client.build_request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=self._content(request.body),
            )
            resp = await client.send(http_request, stream=True)
        except httpx.HTTPError as e:
            logger.debug(
                "transport_failure",
                method=request.method,
                url=request.url,
                error=str(e),
            )
            raise TransportError(f"{type(e).__name__}: {e}") from e

        elapsed = (time.monotonic() - start) * 1000

        return TransportResponse(
            status=resp.status_code,
            status_text=resp.reason_phrase,
            ok=resp.is_success,
            headers=resp.headers,
            body=ResponseBody(self._stream(resp, request), on_close=resp.aclose),
            elapsed_ms=round(elapsed, 2),
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
