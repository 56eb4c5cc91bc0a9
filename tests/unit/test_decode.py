"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Tests for response decoding and one-shot response bodies.
"""

import json

import pytest

from apifetch.exceptions import ResponseConsumedError
from apifetch.http.decode import decode_response
from apifetch.transport.base import ResponseBody, TransportResponse
from apifetch.transport.mock import MockResponse


class TestDecodeResponse:
    @pytest.mark.asyncio
    async def test_json_content_type_is_parsed(self):
        response = MockResponse(200, {"id": 1}).build()
        assert await decode_response(response) == {"id": 1}

    @pytest.mark.asyncio
    async def test_header_lookup_is_case_insensitive(self):
        response = TransportResponse(
            status=200,
            status_text="OK",
            ok=True,
            headers={"content-type": "application/json"},
            body=ResponseBody.from_bytes(b"[1, 2]"),
        )
        assert await decode_response(response) == [1, 2]

    @pytest.mark.asyncio
    async def test_text_plain_returns_raw_stream(self):
        response = MockResponse(200, "hello", headers={"Content-Type": "text/plain"}).build()
        decoded = await decode_response(response)
        assert isinstance(decoded, ResponseBody)
        assert decoded.consumed is False
        assert await decoded.text() == "hello"

    @pytest.mark.asyncio
    async def test_missing_content_type_returns_raw_stream(self):
        response = MockResponse(200, b"\x89PNG").build()
        decoded = await decode_response(response)
        assert isinstance(decoded, ResponseBody)
        assert await decoded.read() == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_json_with_parameters_is_not_parsed(self):
        response = MockResponse(
            200, '{"id": 1}', headers={"Content-Type": "application/json; charset=utf-8"}
        ).build()
        decoded = await decode_response(response)
        assert isinstance(decoded, ResponseBody)

    @pytest.mark.asyncio
    async def test_invalid_json_propagates_decode_error(self):
        response = MockResponse(
            200, "{not json", headers={"Content-Type": "application/json"}
        ).build()
        with pytest.raises(json.JSONDecodeError):
            await decode_response(response)


class TestResponseBody:
    @pytest.mark.asyncio
    async def test_second_read_raises(self):
        body = ResponseBody.from_bytes(b"data")
        assert await body.read() == b"data"
        assert body.consumed is True
        with pytest.raises(ResponseConsumedError):
            await body.read()

    @pytest.mark.asyncio
    async def test_iteration_streams_chunks_and_closes(self):
        closed = []

        async def chunks():
            yield b"ab"
            yield b"cd"

        async def on_close():
            closed.append(True)

        body = ResponseBody(chunks(), on_close=on_close)
        received = [chunk async for chunk in body]

        assert received == [b"ab", b"cd"]
        assert closed == [True]

    @pytest.mark.asyncio
    async def test_aclose_runs_callback_once(self):
        calls = []

        async def on_close():
            calls.append(1)

        body = ResponseBody.from_bytes(b"")
        body._on_close = on_close
        await body.aclose()
        await body.aclose()
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_empty_body(self):
        assert await ResponseBody.from_bytes(b"").read() == b""

    @pytest.mark.asyncio
    async def test_text_replaces_invalid_bytes(self):
        body = ResponseBody.from_bytes(b"ok \xff")
        assert await body.text() == "ok \ufffd"
