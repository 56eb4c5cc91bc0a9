"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Transports performing the actual network exchange.
"""

from apifetch.transport.base import BaseTransport, ResponseBody, TransportRequest, TransportResponse
from apifetch.transport.http import HttpxTransport
from apifetch.transport.mock import MockResponse, MockTransport

__all__ = [
    "BaseTransport",
    "ResponseBody",
    "TransportRequest",
    "TransportResponse",
    "HttpxTransport",
    "MockResponse",
    "MockTransport",
]
