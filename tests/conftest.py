"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from trendcast.core.database import create_engine
from trendcast.core.logging import setup_logging
from trendcast.infrastructure.http_client import HTTPClient
from trendcast.services.alerts import AlertSink
from trendcast.storage import Storage

# Setup logging for tests
setup_logging()


@pytest_asyncio.fixture
async def storage() -> AsyncGenerator[Storage, None]:
    """Create a storage handle on a fresh in-memory SQLite database.

    Yields:
        Storage with all tables created
    """
    storage = Storage(create_engine("sqlite+aiosqlite:///:memory:"))
    await storage.create_schema()
    yield storage
    await storage.close()


@pytest.fixture
def mock_http_client() -> HTTPClient:
    """Create a mock HTTP client."""
    client = MagicMock(spec=HTTPClient)
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def make_response():
    """Factory for mock HTTP responses.

    Returns:
        Callable(json_data=None, text_data=None, status_code=200)
    """

    def create_mock_response(json_data=None, text_data=None, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.raise_for_status = MagicMock()

        if json_data is not None:
            response.json.return_value = json_data

        if text_data is not None:
            response.text = text_data

        return response

    return create_mock_response


@pytest.fixture
def alert_sink() -> AlertSink:
    """Create a mock alert sink that records sent alerts."""
    sink = MagicMock(spec=AlertSink)
    sink.send = AsyncMock()
    return sink


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"
