from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from fxconvert.api.dependencies import get_conversion_engine
from fxconvert.api.main import app
from fxconvert.domain.exceptions import AllProvidersExhaustedError, ProviderUnavailableError
from fxconvert.services.conversion import ConversionEngine
from fxconvert.services.rate_source import StaticRateSource


@pytest.fixture
def static_engine():
    return ConversionEngine(rate_source=StaticRateSource())


@pytest.fixture
def client(static_engine):
    # Override the real dependency so no request leaves the process
    app.dependency_overrides[get_conversion_engine] = lambda: static_engine
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def unavailable_engine():
    """Engine whose every provider is down"""
    error = AllProvidersExhaustedError(ProviderUnavailableError("Frankfurter", status=503))
    mock_engine = MagicMock(spec=ConversionEngine)
    mock_engine.default_base = "USD"
    mock_engine.quote = AsyncMock(side_effect=error)
    mock_engine.rate_info = AsyncMock(side_effect=error)
    mock_engine.get_rate_table = AsyncMock(side_effect=error)
    mock_engine.list_currencies = AsyncMock(side_effect=error)
    mock_engine.batch_convert = AsyncMock(side_effect=error)
    return mock_engine


@pytest.fixture
def unavailable_client(unavailable_engine):
    app.dependency_overrides[get_conversion_engine] = lambda: unavailable_engine
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
