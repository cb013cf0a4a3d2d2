"""YouTube most-popular chart trend source.

Collects the most popular videos of a region using the YouTube Data API v3
and turns each video title into a keyword observation.
Requires YOUTUBE_API_KEY.
"""

import contextlib
import re
from datetime import UTC, datetime
from typing import Any

import httpx

from trendcast.config.sources import YouTubeTrendsConfig
from trendcast.core.exceptions import SourceUnavailableError
from trendcast.core.logging import get_logger
from trendcast.infrastructure.http_client import HTTPClient
from trendcast.services.trends.base import TrendObservation, TrendSource, TrendSourceAdapter
from trendcast.services.trends.categories import TITLE_STOP_WORDS, map_youtube_category

logger = get_logger(__name__)

# YouTube Data API v3 endpoint
YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"

RECENCY_WINDOW_DAYS = 30
MAX_KEYWORD_LENGTH = 50
_TITLE_SPLIT = re.compile(r"[\s,.!?()\[\]{}\"'|#:]+")


def extract_main_keyword(title: str) -> str:
    """Take the first three meaningful words of a video title.

    Single-character words and stop words are skipped.

    Example:
        >>> extract_main_keyword("The BEST 아이폰 리뷰 (2024)")
        'BEST 아이폰 리뷰'
    """
    words = [
        word
        for word in _TITLE_SPLIT.split(title)
        if len(word) > 1 and word.lower() not in TITLE_STOP_WORDS
    ]
    return " ".join(words[:3])[:MAX_KEYWORD_LENGTH].strip()


class YouTubeTrendsSource(TrendSourceAdapter):
    """YouTube most-popular chart source.

    Per video:

    - recency = max(0, (30 - age_days) / 30)
    - engagement = (likes + comments) / views
    - trend score = views x engagement x recency
    - score = round(views / 10000), predicted views = views
    - volatility = min(engagement x 10 x recency, 1)
    - competitiveness = min(views / 1M, 1)
    """

    source = TrendSource.YOUTUBE

    def __init__(
        self,
        config: YouTubeTrendsConfig,
        http_client: HTTPClient,
        api_key: str = "",
    ) -> None:
        """Initialize YouTube source.

        Args:
            config: Typed source configuration
            http_client: Shared HTTP client
            api_key: YouTube Data API key
        """
        self._config = config
        self._http_client = http_client
        self._api_key = api_key

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_observations(
        self,
        region: str,
        window_days: int | None = None,
    ) -> list[TrendObservation]:
        """Fetch the most popular videos as keyword observations.

        Args:
            region: Region code (ISO 3166-1 alpha-2)
            window_days: Unused; the chart is always current

        Returns:
            Observations ordered by trend score

        Raises:
            SourceUnavailableError: If the API key is missing or the request fails
        """
        if not self.is_configured():
            raise SourceUnavailableError("YouTube API key not configured", source="youtube")

        logger.info("Collecting from YouTube most popular", region=region, limit=self._config.limit)

        params: dict[str, Any] = {
            "part": "snippet,statistics",
            "chart": "mostPopular",
            "regionCode": region,
            "maxResults": self._config.limit,
            "hl": self._config.language,
            "key": self._api_key,
        }
        try:
            response = await self._http_client.get(
                f"{YOUTUBE_API_BASE}/videos",
                params=params,
                timeout=self._config.request_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise SourceUnavailableError(
                f"YouTube API request failed: {e}", source="youtube"
            ) from e

        now = datetime.now(UTC)
        observations = [
            observation
            for item in data.get("items", [])
            if (observation := self._to_observation(item, region, now)) is not None
        ]
        observations.sort(key=lambda o: o.trend_score or 0, reverse=True)

        logger.info("YouTube collection complete", collected=len(observations))
        return observations

    def _to_observation(
        self, video: dict[str, Any], region: str, now: datetime
    ) -> TrendObservation | None:
        """Convert a video resource into an observation.

        Args:
            video: Video resource from the API
            region: Region code
            now: Reference time for recency

        Returns:
            TrendObservation or None if the title yields no keyword
        """
        snippet = video.get("snippet", {})
        statistics = video.get("statistics", {})
        keyword = extract_main_keyword(snippet.get("title", ""))
        if not keyword:
            return None

        views = int(statistics.get("viewCount", 0) or 0)
        likes = int(statistics.get("likeCount", 0) or 0)
        comments = int(statistics.get("commentCount", 0) or 0)

        published_at = None
        if snippet.get("publishedAt"):
            with contextlib.suppress(ValueError):
                published_at = datetime.fromisoformat(snippet["publishedAt"].replace("Z", "+00:00"))

        age_days = (now - published_at).total_seconds() / 86400 if published_at else 0.0
        recency = max(0.0, (RECENCY_WINDOW_DAYS - age_days) / RECENCY_WINDOW_DAYS)
        engagement = (likes + comments) / views if views > 0 else 0.0

        return TrendObservation(
            source=TrendSource.YOUTUBE,
            raw_keyword=keyword,
            score=round(views / 10_000),
            predicted_views=views,
            volatility=min(engagement * 10 * recency, 1.0),
            competitiveness=min(views / 1_000_000, 1.0),
            trend_score=round(views * engagement * recency),
            view_count=views,
            like_count=likes,
            comment_count=comments,
            published_at=published_at,
            category=map_youtube_category(snippet.get("categoryId")),
            region=region,
            related_queries=tuple((snippet.get("tags") or [])[:5]),
        )


__all__ = [
    "YOUTUBE_API_BASE",
    "YouTubeTrendsSource",
    "extract_main_keyword",
]
