"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Tests for the higher-level ApiClient.
"""

from unittest.mock import MagicMock

import pytest

import apifetch.api as api_module
from apifetch.api import ApiClient, ApiOptions
from apifetch.client import HttpClient
from apifetch.exceptions import RequestError
from apifetch.transport.mock import MockResponse, MockTransport


BASE_URL = "https://jsonplaceholder.example.test/"


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def api(transport):
    return ApiClient(HttpClient(BASE_URL, transport=transport))


class TestApiOptions:
    def test_fields_joined_with_commas(self):
        options = ApiOptions(fields=["id", "title"], limit=5, offset=10)
        assert options.to_query_params() == {"fields": "id,title", "limit": 5, "offset": 10}

    def test_unset_options_are_none(self):
        assert ApiOptions().to_query_params() == {"fields": None, "limit": None, "offset": None}


class TestApiClient:
    @pytest.mark.asyncio
    async def test_get_without_options(self, api, transport):
        transport.add("GET", BASE_URL + "posts", MockResponse(200, [{"id": 1}]))

        assert await api.get("posts") == [{"id": 1}]
        assert transport.sent_requests[0].url == BASE_URL + "posts"

    @pytest.mark.asyncio
    async def test_get_with_options(self, api, transport):
        url = BASE_URL + "posts?fields=id%2Ctitle&limit=5"
        transport.add("GET", url, MockResponse(200, []))

        await api.get("posts", ApiOptions(fields=["id", "title"], limit=5))

        assert transport.sent_requests[0].url == url

    @pytest.mark.asyncio
    async def test_post_put_delete(self, api, transport):
        transport.add("POST", BASE_URL + "posts", MockResponse(201, {"id": 101}))
        transport.add("PUT", BASE_URL + "posts/1", MockResponse(200, {"id": 1}))
        transport.add("DELETE", BASE_URL + "posts/1", MockResponse(200, {}))

        assert await api.post("posts", {"title": "hi"}) == {"id": 101}
        assert await api.put("posts/1", {"title": "yo"}) == {"id": 1}
        assert await api.delete("posts/1") == {}

        sent = transport.sent_requests
        assert sent[0].body == '{"title":"hi"}'
        assert sent[2].body is None

    @pytest.mark.asyncio
    async def test_rate_limit_logged_and_reraised(self, api, transport, monkeypatch):
        fake_logger = MagicMock()
        monkeypatch.setattr(api_module, "logger", fake_logger)
        transport.add("GET", BASE_URL + "posts", MockResponse(429, {"error": "slow down"}))

        with pytest.raises(RequestError) as exc_info:
            await api.get("posts")

        assert exc_info.value.status == 429
        fake_logger.error.assert_called_once()
        assert len(transport.sent_requests) == 1

    @pytest.mark.asyncio
    async def test_other_errors_reraised_without_rate_limit_log(self, api, transport, monkeypatch):
        fake_logger = MagicMock()
        monkeypatch.setattr(api_module, "logger", fake_logger)

        with pytest.raises(RequestError) as exc_info:
            await api.get("missing")

        assert exc_info.value.status == 404
        fake_logger.error.assert_not_called()

    def test_from_base_url(self, transport):
        api = ApiClient.from_base_url(BASE_URL, transport=transport)
        assert api.http.base_url == BASE_URL
        assert api.http.transport is transport

    @pytest.mark.asyncio
    async def test_context_manager_closes_http_client(self, transport):
        transport.add("GET", BASE_URL + "x", MockResponse(200, {}))
        async with ApiClient.from_base_url(BASE_URL, transport=transport) as api:
            await api.get("x")
            assert len(transport.sent_requests) == 1
        # MockTransport forgets everything once closed
        assert transport.sent_requests == []
