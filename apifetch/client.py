"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Request pipeline.

Builds the URL, encodes the body, merges headers, invokes the transport,
decodes the response and raises a RequestError for anything that did not
succeed. Nothing is retried at this layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from apifetch.exceptions import RequestError, TransportError
from apifetch.http.body import Body, FormData, encode_body, merge_headers
from apifetch.http.decode import decode_response
from apifetch.http.methods import HttpMethod
from apifetch.http.url import build_url
from apifetch.logging_config import get_logger, log_http_request, log_request_failure
from apifetch.transport.base import BaseTransport, ResponseBody, TransportRequest
from apifetch.transport.http import HttpxTransport

if TYPE_CHECKING:
    from apifetch.config.settings import ApifetchConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """What the caller asked for."""
    method: HttpMethod
    path: str
    body: Body = None
    query_params: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None
    bypass_base_url: bool = False


@dataclass(frozen=True)
class ResolvedRequest:
    """The fully computed request, ready for the transport."""
    method: HttpMethod
    url: str
    body: Union[str, FormData, None]
    headers: Dict[str, str]


def _utc_timestamp() -> str:
    """Current time as ISO-8601 with millisecond precision, e.g. ``2026-01-01T12:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def _render_error_body(decoded: Any) -> str:
    if isinstance(decoded, str):
        return decoded
    if isinstance(decoded, ResponseBody):
        return await decoded.text()
    return json.dumps(decoded, indent=2, ensure_ascii=False)


class HttpClient:
    """
    Asynchronous client issuing requests relative to a base URL.

    The base URL and default headers are fixed at construction. Instances
    hold no other state, so concurrent calls are independent.

    Example::

        async with HttpClient("https://api.example.com/") as client:
            users = await client.get("users", query_params={"limit": 10})
            await client.post("users", {"name": "ada"},
                              headers={"Content-Type": "application/json"})

    Args:
        base_url: Prefix for every request path, used verbatim
        default_headers: Headers sent with every request
        transport: Transport performing the exchange, HttpxTransport if omitted
    """

    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Mapping[str, str]] = None,
        transport: Optional[BaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._default_headers: Mapping[str, str] = MappingProxyType(dict(default_headers or {}))
        self._transport = transport if transport is not None else HttpxTransport()

    @classmethod
    def from_config(
        cls,
        config: ApifetchConfig,
        transport: Optional[BaseTransport] = None,
    ) -> "HttpClient":
        """Build a client from loaded configuration."""
        if transport is None:
            transport = HttpxTransport(
                timeout=config.client.timeout_seconds,
                follow_redirects=config.client.follow_redirects,
            )
        return cls(
            base_url=config.client.base_url,
            default_headers=config.client.default_headers,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_headers(self) -> Mapping[str, str]:
        return self._default_headers

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    def resolve(self, descriptor: RequestDescriptor) -> ResolvedRequest:
        """Compute URL, encoded body and merged headers for a request."""
        url = build_url(
            self._base_url,
            descriptor.path,
            descriptor.query_params,
            descriptor.bypass_base_url,
        )
        return ResolvedRequest(
            method=descriptor.method,
            url=url,
            body=encode_body(descriptor.body),
            headers=merge_headers(self._default_headers, descriptor.headers, descriptor.body),
        )

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """
        Issue a request and return the decoded response body.

        Returns:
            Parsed JSON for ``application/json`` responses, otherwise the
            unread ResponseBody stream

        Raises:
            RequestError: If the transport failed or the response was not successful
            json.JSONDecodeError: If a JSON response body could not be parsed
        """
        resolved = self.resolve(descriptor)
        method = str(resolved.method)

        request_timestamp = _utc_timestamp()

        try:
            response = await self._transport.send(
                TransportRequest(
                    method=method,
                    url=resolved.url,
                    headers=resolved.headers,
                    body=resolved.body,
                )
            )
        except TransportError as e:
            log_request_failure(logger, method, resolved.url, None, str(e))
            raise RequestError.from_transport_failure(
                method, resolved.url, request_timestamp, e
            ) from e

        # Bodies may still be streaming, so reading them can fail on the network too
        try:
            decoded = await decode_response(response)
            error_body = None if response.ok else await _render_error_body(decoded)
        except TransportError as e:
            log_request_failure(logger, method, resolved.url, None, str(e))
            raise RequestError.from_transport_failure(
                method, resolved.url, request_timestamp, e
            ) from e

        log_http_request(
            logger, method, resolved.url, response.status, response.elapsed_ms
        )

        if not response.ok:
            log_request_failure(
                logger, method, resolved.url, response.status, response.status_text
            )
            raise RequestError.from_response(
                method,
                resolved.url,
                request_timestamp,
                response.status,
                response.status_text,
                error_body,
            )

        return decoded

    async def get(
        self,
        path: str,
        *,
        query_params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        bypass_base_url: bool = False,
    ) -> Any:
        return await self.request(
            RequestDescriptor(HttpMethod.GET, path, None, query_params, headers, bypass_base_url)
        )

    async def post(
        self,
        path: str,
        body: Body,
        *,
        query_params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        bypass_base_url: bool = False,
    ) -> Any:
        return await self.request(
            RequestDescriptor(HttpMethod.POST, path, body, query_params, headers, bypass_base_url)
        )

    async def put(
        self,
        path: str,
        body: Body,
        *,
        query_params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        bypass_base_url: bool = False,
    ) -> Any:
        return await self.request(
            RequestDescriptor(HttpMethod.PUT, path, body, query_params, headers, bypass_base_url)
        )

    async def patch(
        self,
        path: str,
        body: Body,
        *,
        query_params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        bypass_base_url: bool = False,
    ) -> Any:
        return await self.request(
            RequestDescriptor(HttpMethod.PATCH, path, body, query_params, headers, bypass_base_url)
        )

    async def delete(
        self,
        path: str,
        *,
        query_params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        bypass_base_url: bool = False,
    ) -> Any:
        return await self.request(
            RequestDescriptor(HttpMethod.DELETE, path, None, query_params, headers, bypass_base_url)
        )

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
