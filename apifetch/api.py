"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Higher-level API client.

Translates list options (field selection, pagination) into query
parameters and reports rate limiting before handing errors back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from apifetch.client import HttpClient, RequestDescriptor
from apifetch.exceptions import RequestError
from apifetch.http.body import Body
from apifetch.http.methods import HttpMethod
from apifetch.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ApiOptions:
    """Field selection and pagination options for list endpoints."""
    fields: Optional[List[str]] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def to_query_params(self) -> Dict[str, Any]:
        return {
            "fields": ",".join(self.fields) if self.fields is not None else None,
            "limit": self.limit,
            "offset": self.offset,
        }


class ApiClient:
    """
    API client built on top of an HttpClient.

    Errors are never swallowed. A 429 response is logged as an error before
    it is re-raised, since the caller should stop issuing requests.

    Args:
        http_client: Configured request pipeline to issue calls through
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @classmethod
    def from_base_url(cls, base_url: str, **kwargs: Any) -> "ApiClient":
        """Create an ApiClient with its own HttpClient."""
        return cls(HttpClient(base_url, **kwargs))

    @property
    def http(self) -> HttpClient:
        return self._http

    async def _request(
        self,
        method: HttpMethod,
        path: str,
        body: Body,
        options: Optional[ApiOptions],
    ) -> Any:
        query_params = options.to_query_params() if options is not None else None

        try:
            return await self._http.request(
                RequestDescriptor(method, path, body, query_params)
            )
        except RequestError as e:
            if e.is_rate_limited:
                logger.error(
                    "Too many requests, stop issuing calls",
                    method=e.method,
                    resource=e.resource,
                    request_timestamp=e.request_timestamp,
                )
            raise

    async def get(self, path: str, options: Optional[ApiOptions] = None) -> Any:
        return await self._request(HttpMethod.GET, path, None, options)

    async def post(self, path: str, body: Body, options: Optional[ApiOptions] = None) -> Any:
        return await self._request(HttpMethod.POST, path, body, options)

    async def put(self, path: str, body: Body, options: Optional[ApiOptions] = None) -> Any:
        return await self._request(HttpMethod.PUT, path, body, options)

    async def delete(self, path: str, options: Optional[ApiOptions] = None) -> Any:
        return await self._request(HttpMethod.DELETE, path, None, options)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
