"""Infrastructure clients shared across services."""

from trendcast.infrastructure.http_client import HTTPClient

__all__ = ["HTTPClient"]
