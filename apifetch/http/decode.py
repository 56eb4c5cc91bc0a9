"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Response body decoding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from apifetch.transport.base import ResponseBody, TransportResponse

JSON_CONTENT_TYPE = "application/json"


async def decode_response(response: TransportResponse) -> Union[Any, ResponseBody]:
    """
    Decode a response body according to its content type.

    Only a content type of exactly ``application/json`` is parsed; a parse
    failure propagates as ``json.JSONDecodeError``. Any other content type
    returns the unread body stream, which the caller must consume.
    """
    if response.content_type == JSON_CONTENT_TYPE:
        return await response.body.json()
    return response.body
