"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Apifetch - Minimal asynchronous HTTP request pipeline for API clients

Apifetch builds request URLs against a base URL, encodes bodies, merges
headers, decodes responses and reports failures as structured errors.
"""

from apifetch._version import __version__
from apifetch.api import ApiClient, ApiOptions
from apifetch.client import HttpClient, RequestDescriptor, ResolvedRequest
from apifetch.exceptions import (
    ApifetchError,
    RequestError,
    ResponseConsumedError,
    TransportError,
)
from apifetch.http import FormData, HttpMethod

__all__ = [
    "__version__",
    "ApiClient",
    "ApiOptions",
    "ApifetchError",
    "FormData",
    "HttpClient",
    "HttpMethod",
    "RequestDescriptor",
    "RequestError",
    "ResolvedRequest",
    "ResponseConsumedError",
    "TransportError",
]
