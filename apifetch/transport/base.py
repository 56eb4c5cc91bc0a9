"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Transport base class and data structures.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Callable, Dict, Mapping, Optional, Union

from apifetch.exceptions import ResponseConsumedError
from apifetch.http.body import FormData


class ResponseBody:
    """One-shot asynchronous response body stream.

    The body can be consumed exactly once, either by iterating over it or
    through one of ``read``, ``text`` or ``json``. A second attempt raises
    ``ResponseConsumedError``.
    """

    def __init__(
        self,
        chunks: AsyncIterable[bytes],
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._chunks = chunks
        self._on_close = on_close
        self._consumed = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "ResponseBody":
        async def _single() -> AsyncIterator[bytes]:
            if data:
                yield data

        return cls(_single())

    @property
    def consumed(self) -> bool:
        return self._consumed

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self._consumed:
            raise ResponseConsumedError("response body has already been consumed")
        self._consumed = True
        try:
            async for chunk in self._chunks:
                yield chunk
        finally:
            await self.aclose()

    async def read(self) -> bytes:
        """Buffer the whole body."""
        return b"".join([chunk async for chunk in self])

    async def text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        """Buffer the whole body and decode it as text."""
        return (await self.read()).decode(encoding, errors=errors)

    async def json(self) -> Any:
        """Buffer the whole body and parse it as JSON."""
        return json.loads(await self.read())

    async def aclose(self) -> None:
        if self._on_close is not None:
            on_close, self._on_close = self._on_close, None
            await on_close()

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "unread"
        return f"<ResponseBody {state}>"


@dataclass
class TransportRequest:
    """Outbound request handed to a transport."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Union[str, bytes, FormData, None] = None


@dataclass
class TransportResponse:
    """Inbound response produced by a transport.

    ``ok`` is the transport's own success indicator; the pipeline never
    re-derives success from ``status``.
    """
    status: int
    status_text: str
    ok: bool
    headers: Mapping[str, str] = field(default_factory=dict)
    body: ResponseBody = field(default_factory=lambda: ResponseBody.from_bytes(b""))
    elapsed_ms: float = 0.0

    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def content_type(self) -> Optional[str]:
        return self.get_header("content-type")


class BaseTransport(ABC):
    """Abstract base for all transports."""

    @abstractmethod
    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send a request and return the response.

        Raises:
            TransportError: If the exchange could not complete
        """
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release transport resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the transport is in a usable state."""
        ...
