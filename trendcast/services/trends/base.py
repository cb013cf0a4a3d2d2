"""Base interfaces and DTOs for trend discovery.

This module defines the canonical observation DTO produced by every trend
source, the source enumeration with its fixed resolution priority, and the
abstract adapter interface.
"""

import enum
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trendcast.services.trends.normalizer import normalize_keyword


class TrendSource(str, enum.Enum):
    """Trend signal sources."""

    NAVER = "naver"
    YOUTUBE = "youtube"
    GOOGLE = "google"


# Order in which sources are resolved into clusters. Resolution is
# order-sensitive (the first observation names the cluster), so this order
# is also the source priority: Naver, then YouTube, then Google.
SOURCE_PRIORITY: tuple[TrendSource, ...] = (
    TrendSource.NAVER,
    TrendSource.YOUTUBE,
    TrendSource.GOOGLE,
)

GENERAL_CATEGORY = "general"


class TrendObservation(BaseModel):
    """One source's report of a keyword's popularity.

    Immutable once created. ``score`` is the source's normalized metric
    (Naver search volume, YouTube views / 10k, Google average interest) and
    ``predicted_views`` is the source's own view estimate.

    Attributes:
        source: Reporting source
        raw_keyword: Keyword as reported
        normalized_keyword: Canonical keyword (derived from raw_keyword if omitted)
        score: Source-normalized popularity metric
        predicted_views: Source-specific view estimate
        volatility: How quickly interest is moving (0 = flat)
        competitiveness: Saturation of existing content (0-1)
        growth: Percent growth of search interest (Naver)
        trend_score: Views x engagement x recency (YouTube)
        view_count: Video views (YouTube)
        like_count: Video likes (YouTube)
        comment_count: Video comments (YouTube)
        published_at: Video publish time (YouTube)
        category: Content category
        region: Region code
        related_queries: Related search queries or tags
        observed_at: When the observation was fetched
    """

    model_config = ConfigDict(frozen=True)

    source: TrendSource
    raw_keyword: str
    normalized_keyword: str = ""
    score: float = Field(default=0.0, ge=0)
    predicted_views: int = Field(default=0, ge=0)
    volatility: float = Field(default=0.0, ge=0)
    competitiveness: float = Field(default=0.0, ge=0, le=1)
    growth: float | None = None
    trend_score: float | None = None
    view_count: int | None = Field(default=None, ge=0)
    like_count: int | None = Field(default=None, ge=0)
    comment_count: int | None = Field(default=None, ge=0)
    published_at: datetime | None = None
    category: str = GENERAL_CATEGORY
    region: str = "KR"
    related_queries: tuple[str, ...] = ()
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="before")
    @classmethod
    def fill_normalized_keyword(cls, data: Any) -> Any:
        """Derive normalized_keyword from raw_keyword when not supplied."""
        if isinstance(data, dict) and not data.get("normalized_keyword"):
            data = {**data, "normalized_keyword": normalize_keyword(data.get("raw_keyword", ""))}
        return data

    @property
    def engagement_rate(self) -> float:
        """(likes + comments) / views, or 0 without view data."""
        if not self.view_count:
            return 0.0
        return ((self.like_count or 0) + (self.comment_count or 0)) / self.view_count

    def age_days(self, now: datetime | None = None) -> float | None:
        """Days since publication, or None when the publish time is unknown."""
        if self.published_at is None:
            return None
        now = now or datetime.now(UTC)
        return (now - self.published_at).total_seconds() / 86400


class TrendSourceAdapter(ABC):
    """Abstract base class for trend sources.

    Each source fetches its raw data and converts it into
    ``TrendObservation`` objects. An empty list is a valid result.

    Attributes:
        source: Which TrendSource the adapter reports as
    """

    source: ClassVar[TrendSource]

    @abstractmethod
    async def fetch_observations(
        self,
        region: str,
        window_days: int | None = None,
    ) -> list[TrendObservation]:
        """Fetch current trend observations.

        Args:
            region: Region code (ISO 3166-1 alpha-2)
            window_days: History window; adapters use their configured
                default when None

        Returns:
            Observations for this source

        Raises:
            SourceUnavailableError: If the source cannot be reached or is
                not configured
        """

    def is_configured(self) -> bool:
        """Check whether credentials required by the source are present."""
        return True


__all__ = [
    "GENERAL_CATEGORY",
    "SOURCE_PRIORITY",
    "TrendObservation",
    "TrendSource",
    "TrendSourceAdapter",
]
