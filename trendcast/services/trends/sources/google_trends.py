"""Google Trends source.

Analyses interest over time for a list of seed keywords using pytrends.
pytrends is synchronous, so every call runs in a worker thread.
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from pytrends.exceptions import ResponseError
from pytrends.request import TrendReq

from trendcast.config.sources import GOOGLE_CATEGORY_KEYWORDS, GoogleTrendsConfig
from trendcast.core.exceptions import SourceUnavailableError
from trendcast.core.logging import get_logger
from trendcast.services.trends.base import TrendObservation, TrendSource, TrendSourceAdapter
from trendcast.services.trends.categories import categorize_keyword

logger = get_logger(__name__)

# Throttled requests come back as HTML, which pytrends surfaces as a JSON
# decode error (ValueError) or a ResponseError; network errors are OSError.
SKIPPABLE_ERRORS = (ResponseError, ValueError, OSError)


class GoogleTrendsSource(TrendSourceAdapter):
    """Google Trends keyword analysis source.

    For every seed keyword (one request each, with a pause in between):

    - average and max interest over the window
    - recent interest = mean of the last two points
    - volatility = min((recent - average) / 100, 1) when rising, else 0
    - predicted views = round(average x max x 100)
    - competitiveness = average / 100

    Keywords with average interest at or below ``min_interest`` are dropped.
    A throttled or malformed response skips that keyword only.
    """

    source = TrendSource.GOOGLE

    def __init__(
        self,
        config: GoogleTrendsConfig,
        trend_req_factory: Callable[[], TrendReq] | None = None,
    ) -> None:
        """Initialize Google Trends source.

        Args:
            config: Typed source configuration
            trend_req_factory: Builds the pytrends client (pytrends manages
                its own HTTP session)
        """
        self._config = config
        self._trend_req_factory = trend_req_factory or self._default_trend_req

    def _default_trend_req(self) -> TrendReq:
        return TrendReq(
            hl=self._config.language,
            tz=self._config.tz_offset_minutes,
            timeout=(10, 25),
        )

    async def fetch_observations(
        self,
        region: str,
        window_days: int | None = None,
    ) -> list[TrendObservation]:
        """Analyse seed keywords on Google Trends.

        Args:
            region: Region code used as the Trends geo
            window_days: Days of history (defaults to config)

        Returns:
            Observations for keywords with enough interest

        Raises:
            SourceUnavailableError: If the client cannot be created or every
                keyword request failed
        """
        window_days = window_days or self._config.window_days
        end = datetime.now(UTC).date()
        timeframe = f"{(end - timedelta(days=window_days)).isoformat()} {end.isoformat()}"
        keywords = self._config.keywords[: self._config.max_keywords]

        try:
            client = await asyncio.to_thread(self._trend_req_factory)
        except SKIPPABLE_ERRORS as e:
            raise SourceUnavailableError(
                f"Google Trends client unavailable: {e}", source="google"
            ) from e

        logger.info("Collecting from Google Trends", keywords=len(keywords), region=region)

        observations: list[TrendObservation] = []
        failures = 0
        for index, keyword in enumerate(keywords):
            try:
                observation = await asyncio.to_thread(
                    self._analyze_keyword, client, keyword, region, timeframe
                )
            except SKIPPABLE_ERRORS as e:
                failures += 1
                logger.warning("Skipping Google Trends keyword", keyword=keyword, error=str(e))
            else:
                if observation is not None:
                    observations.append(observation)

            if index < len(keywords) - 1 and self._config.request_delay_seconds > 0:
                await asyncio.sleep(self._config.request_delay_seconds)

        if keywords and failures == len(keywords):
            raise SourceUnavailableError(
                "All Google Trends keyword requests failed",
                source="google",
                context={"keywords": len(keywords)},
            )

        logger.info("Google Trends collection complete", collected=len(observations))
        return observations

    def _analyze_keyword(
        self, client: TrendReq, keyword: str, region: str, timeframe: str
    ) -> TrendObservation | None:
        """Fetch and reduce the interest series of one keyword (blocking)."""
        client.build_payload([keyword], timeframe=timeframe, geo=region)
        frame = client.interest_over_time()
        if frame is None or frame.empty or keyword not in frame:
            logger.debug("No Google Trends data", keyword=keyword)
            return None

        values = [float(v) for v in frame[keyword].tolist()]
        if not values:
            return None

        average = sum(values) / len(values)
        if average <= self._config.min_interest:
            return None

        peak = max(values)
        recent_points = values[-2:]
        recent = sum(recent_points) / len(recent_points)
        volatility = min((recent - average) / 100, 1.0) if recent > average else 0.0

        return TrendObservation(
            source=TrendSource.GOOGLE,
            raw_keyword=keyword,
            score=round(average),
            predicted_views=round(average * peak * 100),
            volatility=volatility,
            competitiveness=min(average / 100, 1.0),
            category=categorize_keyword(keyword, GOOGLE_CATEGORY_KEYWORDS),
            region=region,
            related_queries=tuple(self._related_queries(client, keyword)),
        )

    def _related_queries(self, client: TrendReq, keyword: str) -> list[str]:
        if not self._config.include_related_queries:
            return []
        try:
            related: dict[str, Any] = client.related_queries() or {}
        except SKIPPABLE_ERRORS as e:
            logger.debug("Related queries unavailable", keyword=keyword, error=str(e))
            return []
        top = (related.get(keyword) or {}).get("top")
        if top is None or top.empty:
            return []
        return [str(q) for q in top["query"].head(5).tolist()]


__all__ = ["GoogleTrendsSource"]
