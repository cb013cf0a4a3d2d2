"""TrendingTopic ORM model."""

import uuid

from sqlalchemy import JSON, BigInteger, Boolean, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trendcast.models.base import Base, TimestampMixin, UUIDMixin


class TrendingTopic(Base, UUIDMixin, TimestampMixin):
    """Flattened snapshot of one aggregated trend at selection time.

    Attributes:
        trend_run_id: Run that produced this topic
        keyword: Display keyword (first-seen raw keyword of the cluster)
        canonical_keyword: Normalized keyword used for matching
        score: Weighted aggregated score
        predicted_views: Estimated view count
        confidence: Confidence in [0, 1]
        cross_platform_validated: Observed by more than one source
        trend_velocity: Growth/engagement velocity
        volatility: Source-weighted volatility
        competitiveness: Source-weighted competitiveness
        final_score: Selection score
        category: Content category
        region: Region code
        sources: Sources present in the cluster, in priority order
        related_queries: Related search queries
        rank_position: 1-based rank within the run
    """

    __tablename__ = "trending_topics"

    trend_run_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("trend_runs.id", ondelete="CASCADE"), nullable=False, index=True
    )

    keyword: Mapped[str] = mapped_column(String(255), nullable=False)
    canonical_keyword: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    predicted_views: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    cross_platform_validated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    trend_velocity: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    volatility: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    competitiveness: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    final_score: Mapped[float | None] = mapped_column(Float)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    region: Mapped[str] = mapped_column(String(10), nullable=False, default="KR")
    sources: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    related_queries: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    rank_position: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (Index("idx_trending_topic_run_rank", "trend_run_id", "rank_position"),)

    def __repr__(self) -> str:
        return f"<TrendingTopic(keyword={self.keyword!r}, rank={self.rank_position})>"


__all__ = ["TrendingTopic"]
