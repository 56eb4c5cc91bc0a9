"""
Pytest configuration and shared fixtures for Apifetch tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from apifetch.client import HttpClient
from apifetch.transport.mock import MockResponse, MockTransport


BASE_URL = "https://api.example.test/v1/"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_transport() -> MockTransport:
    """Empty mock transport; tests register the responses they need."""
    return MockTransport()


@pytest.fixture
def client(mock_transport: MockTransport) -> HttpClient:
    """HttpClient against BASE_URL with a default Accept header."""
    return HttpClient(
        BASE_URL,
        default_headers={"Accept": "application/json", "X-Client": "apifetch-tests"},
        transport=mock_transport,
    )


@pytest.fixture
def json_response():
    """Factory for JSON MockResponses."""
    def _make(status: int = 200, body=None, **kwargs) -> MockResponse:
        return MockResponse(status=status, body=body, **kwargs)
    return _make
