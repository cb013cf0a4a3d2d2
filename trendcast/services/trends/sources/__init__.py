"""Trend source adapters."""

from trendcast.services.trends.sources.google_trends import GoogleTrendsSource
from trendcast.services.trends.sources.naver import NaverTrendsSource
from trendcast.services.trends.sources.youtube import YouTubeTrendsSource

__all__ = [
    "GoogleTrendsSource",
    "NaverTrendsSource",
    "YouTubeTrendsSource",
]
