"""Cluster scoring.

Computes the weighted score, predicted views, category, confidence,
velocity and cross-platform flag for each cluster in place.
"""

from datetime import UTC, datetime

from trendcast.config.aggregation import AggregationConfig
from trendcast.core.logging import get_logger
from trendcast.services.trends.base import GENERAL_CATEGORY, TrendSource
from trendcast.services.trends.cluster import AggregatedTrend

logger = get_logger(__name__)

# Category precedence: Naver and Google categories come from curated keyword
# lists, YouTube's from a coarse category-id mapping.
CATEGORY_PRIORITY: tuple[TrendSource, ...] = (
    TrendSource.NAVER,
    TrendSource.GOOGLE,
    TrendSource.YOUTUBE,
)


class ScoreAggregator:
    """Scores aggregated trend clusters.

    Per cluster, with weights applied only for present sources:

    - aggregated_score = sum(score_i * weight_i) / sum(weight_i)
    - predicted_views = max of member view estimates
    - volatility, competitiveness = weighted means like the score
    - category = first non-general category in Naver > Google > YouTube order
    - confidence = base + bonuses, capped at 1.0
    - cross_platform_validated = more than one source present
    - trend_velocity = Naver growth / 100, else YouTube recency-weighted
      engagement, else the default velocity

    Example:
        >>> aggregator = ScoreAggregator()
        >>> aggregator.score_all(clusters)
    """

    def __init__(self, config: AggregationConfig | None = None) -> None:
        """Initialize aggregator.

        Args:
            config: Aggregation configuration
        """
        self.config = config or AggregationConfig()

    def score_all(
        self, clusters: list[AggregatedTrend], now: datetime | None = None
    ) -> list[AggregatedTrend]:
        """Score every cluster in place.

        Args:
            clusters: Clusters to score
            now: Reference time for recency (defaults to current UTC time)

        Returns:
            The same clusters, for chaining
        """
        now = now or datetime.now(UTC)
        for cluster in clusters:
            self.score(cluster, now)
        return clusters

    def score(self, cluster: AggregatedTrend, now: datetime | None = None) -> AggregatedTrend:
        """Score a single cluster in place."""
        now = now or datetime.now(UTC)
        weights = {
            source: self.config.source_weights.weight_for(source.value)
            for source in cluster.sources
        }
        total_weight = sum(weights.values())

        if total_weight > 0:
            cluster.aggregated_score = (
                sum(cluster.members[s].score * w for s, w in weights.items()) / total_weight
            )
            cluster.volatility = (
                sum(cluster.members[s].volatility * w for s, w in weights.items()) / total_weight
            )
            cluster.competitiveness = (
                sum(cluster.members[s].competitiveness * w for s, w in weights.items())
                / total_weight
            )
        cluster.predicted_views = max(
            (member.predicted_views for member in cluster.members.values()), default=0
        )
        cluster.category = self._category(cluster)
        cluster.cross_platform_validated = cluster.source_count > 1
        cluster.confidence = self._confidence(cluster)
        cluster.trend_velocity = self._velocity(cluster, now)
        return cluster

    def _category(self, cluster: AggregatedTrend) -> str:
        for source in CATEGORY_PRIORITY:
            member = cluster.member(source)
            if member is not None and member.category != GENERAL_CATEGORY:
                return member.category
        return GENERAL_CATEGORY

    def _confidence(self, cluster: AggregatedTrend) -> float:
        rules = self.config.confidence
        confidence = rules.base

        if cluster.source_count > 1:
            confidence += rules.multi_source_bonus

        naver = cluster.member(TrendSource.NAVER)
        if naver is not None:
            confidence += rules.naver_bonus
            if naver.growth is not None and naver.growth > rules.naver_growth_threshold:
                confidence += rules.growth_bonus

        youtube = cluster.member(TrendSource.YOUTUBE)
        if (
            youtube is not None
            and youtube.trend_score is not None
            and youtube.trend_score > rules.youtube_trend_score_threshold
        ):
            confidence += rules.engagement_bonus

        return max(0.0, min(confidence, 1.0))

    def _velocity(self, cluster: AggregatedTrend, now: datetime) -> float:
        naver = cluster.member(TrendSource.NAVER)
        if naver is not None and naver.growth is not None:
            return naver.growth / 100

        youtube = cluster.member(TrendSource.YOUTUBE)
        if youtube is not None:
            age = youtube.age_days(now)
            window = self.config.velocity_recency_days
            recency = max(0.0, (window - age) / window) if age is not None else 0.0
            return recency * youtube.engagement_rate * 10

        return self.config.default_velocity


__all__ = [
    "CATEGORY_PRIORITY",
    "ScoreAggregator",
]
