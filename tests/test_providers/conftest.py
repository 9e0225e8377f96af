"""
Shared test configuration and fixtures for provider tests.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from fxconvert.providers import ExchangeRateAPIProvider, FrankfurterProvider, JSONRateProvider

TEST_TIMEOUT = 3


def make_response(url: str, json_data=None, status_code: int = 200, content: bytes | None = None) -> httpx.Response:
    """Build a real httpx.Response bound to a GET request for ``url``"""
    request = httpx.Request("GET", url)
    if content is not None:
        return httpx.Response(status_code, content=content, request=request)
    return httpx.Response(status_code, json=json_data, request=request)


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for testing"""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def exchangerate_provider(mock_http_client):
    return ExchangeRateAPIProvider(read_timeout=TEST_TIMEOUT, client=mock_http_client)


@pytest.fixture
def frankfurter_provider(mock_http_client):
    return FrankfurterProvider(read_timeout=TEST_TIMEOUT, client=mock_http_client)


@pytest.fixture
def generic_provider(mock_http_client):
    return JSONRateProvider(
        url_template="https://rates.example.com/latest/",
        read_timeout=TEST_TIMEOUT,
        client=mock_http_client,
    )
