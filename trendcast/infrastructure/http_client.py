"""Shared outbound HTTP for TrendCast.

One httpx.AsyncClient serves every outbound call the service makes:
the Naver DataLab search POSTs, the YouTube most-popular chart GETs and
the failure alerts POSTed by WebhookAlertSink. pytrends keeps its own
requests session and does not go through here.
"""

import httpx

from trendcast.core.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Connection-pooled client injected into trend sources and alert sinks.

    The container builds a single instance per process. Callers decide how
    to treat HTTP errors: sources wrap them in SourceUnavailableError, the
    webhook sink logs them.

    Example:
        >>> http_client = HTTPClient(timeout=10.0)
        >>> response = await http_client.get("https://www.googleapis.com/youtube/v3/videos")
        >>> await http_client.close()
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            max_connections: Maximum number of connections
            max_keepalive_connections: Maximum keepalive connections
        """
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            follow_redirects=True,
        )
        logger.info(
            "HTTP client initialized",
            timeout=timeout,
            max_connections=max_connections,
            max_keepalive=max_keepalive_connections,
        )

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """GET, used for the YouTube Data API chart queries."""
        return await self._client.get(url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        """POST, used for Naver DataLab batches and alert webhooks."""
        return await self._client.post(url, **kwargs)

    async def close(self) -> None:
        """Release pooled connections (worker task or API shutdown)."""
        await self._client.aclose()
        logger.info("HTTP client closed")


__all__ = ["HTTPClient"]
