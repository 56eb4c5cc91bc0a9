"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Mock transport for local testing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple, Union

from apifetch.exceptions import TransportError
from apifetch.transport.base import BaseTransport, ResponseBody, TransportRequest, TransportResponse


@dataclass
class MockResponse:
    """Canned response. A fresh body stream is built for every send.

    ``body`` may be bytes, text, or any JSON-serializable value; the latter
    is encoded and gets ``Content-Type: application/json`` unless headers
    say otherwise.
    """
    status: int = 200
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    status_text: Optional[str] = None
    ok: Optional[bool] = None

    def build(self) -> TransportResponse:
        headers = dict(self.headers)
        if isinstance(self.body, bytes):
            data = self.body
        elif isinstance(self.body, str):
            data = self.body.encode("utf-8")
        elif self.body is None:
            data = b""
        else:
            data = json.dumps(self.body).encode("utf-8")
            if not any(key.lower() == "content-type" for key in headers):
                headers["Content-Type"] = "application/json"

        status_text = self.status_text
        if status_text is None:
            try:
                status_text = HTTPStatus(self.status).phrase
            except ValueError:
                status_text = ""

        ok = self.ok if self.ok is not None else 200 <= self.status < 300

        return TransportResponse(
            status=self.status,
            status_text=status_text,
            ok=ok,
            headers=headers,
            body=ResponseBody.from_bytes(data),
        )


class MockTransport(BaseTransport):
    """In-memory mock transport for unit tests.

    Args:
        responses: Mapping from ``(method, url)`` tuples to ``MockResponse``
            instances, or to exceptions that are raised as transport failures.

    Example::

        transport = MockTransport({
            ("GET", "https://api.test/users"): MockResponse(200, [{"id": 1}]),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], Union[MockResponse, Exception]]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], Union[MockResponse, Exception]] = dict(responses or {})
        self._sent: list[TransportRequest] = []

    def add(self, method: str, url: str, response: Union[MockResponse, Exception]) -> None:
        """Register a response for ``(method, url)``."""
        self._responses[(method.upper(), url)] = response

    async def send(self, request: TransportRequest) -> TransportResponse:
        self._sent.append(request)
        key = (str(request.method).upper(), request.url)
        if key not in self._responses:
            return MockResponse(status=404, body={"error": "not mocked"}).build()

        response = self._responses[key]
        if isinstance(response, TransportError):
            raise response
        if isinstance(response, Exception):
            raise TransportError(str(response)) from response
        return response.build()

    async def aclose(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> list[TransportRequest]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
