"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Request building and response decoding helpers.
"""

from apifetch.http.body import Body, FormData, encode_body, merge_headers
from apifetch.http.decode import JSON_CONTENT_TYPE, decode_response
from apifetch.http.methods import HttpMethod
from apifetch.http.url import build_query_string, build_url

__all__ = [
    "Body",
    "FormData",
    "HttpMethod",
    "JSON_CONTENT_TYPE",
    "build_query_string",
    "build_url",
    "decode_response",
    "encode_body",
    "merge_headers",
]
