"""Administration HTTP API."""

from trendcast.api.routes import router

__all__ = ["router"]
