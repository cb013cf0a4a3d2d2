"""Unit tests for the shared HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from trendcast.infrastructure.http_client import HTTPClient

ASYNC_CLIENT = "trendcast.infrastructure.http_client.httpx.AsyncClient"


class TestHTTPClientInit:
    """Tests for HTTPClient construction."""

    @patch(ASYNC_CLIENT)
    def test_defaults(self, mock_async_client):
        """Test redirects are followed and limits applied."""
        HTTPClient()

        mock_async_client.assert_called_once()
        kwargs = mock_async_client.call_args.kwargs
        assert kwargs["follow_redirects"] is True
        assert kwargs["limits"].max_connections == 20
        assert kwargs["limits"].max_keepalive_connections == 10

    @patch(ASYNC_CLIENT)
    def test_custom_timeout_and_limits(self, mock_async_client):
        """Test constructor arguments reach httpx."""
        HTTPClient(timeout=5.0, max_connections=4, max_keepalive_connections=2)

        kwargs = mock_async_client.call_args.kwargs
        assert kwargs["timeout"].read == 5.0
        assert kwargs["limits"].max_connections == 4


class TestHTTPClientRequests:
    """Tests for request delegation."""

    @pytest.fixture
    def mock_client(self):
        with patch(ASYNC_CLIENT) as mock:
            instance = MagicMock()
            instance.get = AsyncMock()
            instance.post = AsyncMock()
            instance.aclose = AsyncMock()
            mock.return_value = instance
            yield HTTPClient(), instance

    @pytest.mark.asyncio
    async def test_get_with_params(self, mock_client):
        """Test GET forwards query parameters."""
        client, instance = mock_client
        params = {"part": "snippet,statistics", "chart": "mostPopular", "regionCode": "KR"}

        await client.get("https://www.googleapis.com/youtube/v3/videos", params=params)

        instance.get.assert_awaited_once_with(
            "https://www.googleapis.com/youtube/v3/videos", params=params
        )

    @pytest.mark.asyncio
    async def test_post_with_json_and_headers(self, mock_client):
        """Test POST forwards the JSON body and headers."""
        client, instance = mock_client
        body = {"startDate": "2024-01-01", "endDate": "2024-01-31", "timeUnit": "date"}
        headers = {"X-Naver-Client-Id": "id", "X-Naver-Client-Secret": "secret"}

        await client.post("https://openapi.naver.com/v1/datalab/search", json=body, headers=headers)

        instance.post.assert_awaited_once_with(
            "https://openapi.naver.com/v1/datalab/search", json=body, headers=headers
        )

    @pytest.mark.asyncio
    async def test_returns_response(self, mock_client):
        client, instance = mock_client
        response = MagicMock(status_code=204)
        instance.post.return_value = response

        assert await client.post("https://hooks.example.com/alerts", json={}) is response

    @pytest.mark.asyncio
    async def test_close(self, mock_client):
        """Test close releases the underlying client."""
        client, instance = mock_client

        await client.close()

        instance.aclose.assert_awaited_once()
