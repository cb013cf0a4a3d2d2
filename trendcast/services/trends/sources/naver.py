"""Naver DataLab trend source.

Queries the DataLab search-trend API for a curated list of Korean seed
keywords and reports the ones whose search interest is growing.
Requires NAVER_CLIENT_ID and NAVER_CLIENT_SECRET.
"""

import asyncio
from datetime import UTC, date, datetime, timedelta
from typing import Any

import httpx

from trendcast.config.sources import NaverTrendsConfig
from trendcast.core.exceptions import SourceUnavailableError
from trendcast.core.logging import get_logger
from trendcast.infrastructure.http_client import HTTPClient
from trendcast.services.trends.base import TrendObservation, TrendSource, TrendSourceAdapter
from trendcast.services.trends.categories import categorize_keyword
from trendcast.services.trends.fallback import related_queries_for

logger = get_logger(__name__)

NAVER_DATALAB_SEARCH_URL = "https://openapi.naver.com/v1/datalab/search"

# Points compared at each end of the series to compute growth
GROWTH_WINDOW_POINTS = 7


class NaverTrendsSource(TrendSourceAdapter):
    """Naver DataLab search-trend source.

    Seed keywords are sent in batches (DataLab accepts at most five keyword
    groups per request) with a pause between batches. Each keyword's series
    of daily ratios is reduced to:

    - search volume: rounded mean ratio
    - growth: percent change of the mean of the last 7 points over the
      first 7 points

    Only keywords with positive volume and growth are kept, ordered by
    growth x volume.
    """

    source = TrendSource.NAVER

    def __init__(
        self,
        config: NaverTrendsConfig,
        http_client: HTTPClient,
        client_id: str = "",
        client_secret: str = "",
    ) -> None:
        """Initialize Naver source.

        Args:
            config: Typed source configuration
            http_client: Shared HTTP client
            client_id: DataLab client id
            client_secret: DataLab client secret
        """
        self._config = config
        self._http_client = http_client
        self._client_id = client_id
        self._client_secret = client_secret

    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    async def fetch_observations(
        self,
        region: str,
        window_days: int | None = None,
    ) -> list[TrendObservation]:
        """Fetch growing keywords from Naver DataLab.

        Args:
            region: Region code (DataLab only covers Korea; used as a label)
            window_days: Days of daily data (defaults to config)

        Returns:
            Growing keywords, best first

        Raises:
            SourceUnavailableError: If credentials are missing or every
                batch request failed
        """
        if not self.is_configured():
            raise SourceUnavailableError("Naver DataLab credentials not configured", source="naver")

        window_days = window_days or self._config.window_days
        end = datetime.now(UTC).date()
        start = end - timedelta(days=window_days)
        keywords = self._config.seed_keywords
        batch_size = self._config.batch_size
        batches = [keywords[i : i + batch_size] for i in range(0, len(keywords), batch_size)]

        logger.info("Collecting from Naver DataLab", keywords=len(keywords), batches=len(batches))

        observations: list[TrendObservation] = []
        failed_batches = 0
        for index, batch in enumerate(batches):
            try:
                results = await self._fetch_batch(batch, start, end)
            except httpx.HTTPError as e:
                failed_batches += 1
                logger.warning("Naver DataLab batch failed", batch=batch, error=str(e))
            else:
                for result in results:
                    observation = self._to_observation(result, region)
                    if observation is not None:
                        observations.append(observation)

            if index < len(batches) - 1 and self._config.batch_delay_seconds > 0:
                await asyncio.sleep(self._config.batch_delay_seconds)

        if batches and failed_batches == len(batches):
            raise SourceUnavailableError(
                "All Naver DataLab requests failed",
                source="naver",
                context={"batches": len(batches)},
            )

        growing = [o for o in observations if o.score > 0 and (o.growth or 0) > 0]
        growing.sort(key=lambda o: (o.growth or 0) * o.score, reverse=True)
        growing = growing[: self._config.limit]

        logger.info("Naver DataLab collection complete", collected=len(growing))
        return growing

    async def _fetch_batch(
        self, keywords: list[str], start: date, end: date
    ) -> list[dict[str, Any]]:
        body = {
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "timeUnit": "date",
            "keywordGroups": [{"groupName": kw, "keywords": [kw]} for kw in keywords],
        }
        response = await self._http_client.post(
            NAVER_DATALAB_SEARCH_URL,
            json=body,
            headers={
                "X-Naver-Client-Id": self._client_id,
                "X-Naver-Client-Secret": self._client_secret,
                "Content-Type": "application/json",
            },
            timeout=self._config.request_timeout,
        )
        response.raise_for_status()
        return response.json().get("results", [])

    def _to_observation(self, result: dict[str, Any], region: str) -> TrendObservation | None:
        """Convert one DataLab keyword group into an observation.

        Args:
            result: DataLab result entry (title, data[period, ratio])
            region: Region code

        Returns:
            TrendObservation or None if the entry has no data
        """
        keyword = result.get("title") or next(iter(result.get("keywords") or []), "")
        ratios = [float(point.get("ratio", 0)) for point in result.get("data") or []]
        if not keyword or not ratios:
            return None

        volume = round(sum(ratios) / len(ratios))
        older = ratios[:GROWTH_WINDOW_POINTS]
        recent = ratios[-GROWTH_WINDOW_POINTS:]
        older_avg = sum(older) / len(older)
        recent_avg = sum(recent) / len(recent)
        growth = round((recent_avg - older_avg) / older_avg * 100, 2) if older_avg > 0 else 0.0

        return TrendObservation(
            source=TrendSource.NAVER,
            raw_keyword=keyword,
            score=volume,
            predicted_views=volume * 100,
            volatility=max(growth, 0.0) / 100,
            competitiveness=min(volume / 100, 1.0),
            growth=growth,
            category=categorize_keyword(keyword, self._config.category_keywords),
            region=region,
            related_queries=related_queries_for(keyword),
        )


__all__ = [
    "NAVER_DATALAB_SEARCH_URL",
    "NaverTrendsSource",
]
