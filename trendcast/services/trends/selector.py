"""Topic ranking and final selection."""

from trendcast.config.aggregation import SelectionWeights
from trendcast.core.logging import get_logger
from trendcast.services.trends.cluster import AggregatedTrend

logger = get_logger(__name__)


class TopicSelector:
    """Ranks scored clusters and picks the topic to produce.

    final_score = w_views * predicted_views
                + w_volatility * (volatility * 100)
                + w_competition * ((1 - competitiveness) * 100)

    Predicted views dominate the formula; volatility and low competition
    only break near-ties between similarly sized topics.
    """

    def __init__(self, weights: SelectionWeights | None = None, ranking_limit: int = 10) -> None:
        """Initialize selector.

        Args:
            weights: Selection formula weights
            ranking_limit: Clusters kept by rank()
        """
        self.weights = weights or SelectionWeights()
        self.ranking_limit = ranking_limit

    def final_score(self, cluster: AggregatedTrend) -> float:
        """Compute the selection score of a cluster."""
        return (
            self.weights.predicted_views * cluster.predicted_views
            + self.weights.volatility * (cluster.volatility * 100)
            + self.weights.low_competition * ((1 - cluster.competitiveness) * 100)
        )

    def rank(
        self, clusters: list[AggregatedTrend], limit: int | None = None
    ) -> list[AggregatedTrend]:
        """Order clusters by predicted views and keep the top entries.

        Clusters without a keyword are dropped. The sort is stable, so equal
        predicted views keep discovery order.

        Args:
            clusters: Scored clusters
            limit: Maximum clusters kept (defaults to ranking_limit)

        Returns:
            Ranked clusters
        """
        limit = limit or self.ranking_limit
        candidates = [c for c in clusters if c.canonical_keyword.strip()]
        ranked = sorted(candidates, key=lambda c: c.predicted_views, reverse=True)
        return ranked[:limit]

    def select_final(self, clusters: list[AggregatedTrend]) -> AggregatedTrend | None:
        """Pick the highest scoring cluster.

        Ties go to the cluster discovered first. Every cluster gets its
        ``final_score`` set.

        Args:
            clusters: Candidate clusters

        Returns:
            The winning cluster, or None for empty input
        """
        if not clusters:
            logger.warning("No candidate topics to select from")
            return None

        for cluster in clusters:
            cluster.final_score = self.final_score(cluster)

        winner = max(clusters, key=lambda c: (c.final_score, -c.discovery_index))
        logger.info(
            "Final topic selected",
            keyword=winner.keyword,
            final_score=round(winner.final_score or 0.0, 2),
            candidates=len(clusters),
        )
        return winner


__all__ = ["TopicSelector"]
