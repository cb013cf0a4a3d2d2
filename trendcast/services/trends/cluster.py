"""Aggregated trend cluster.

A cluster is the merged view of the observations believed to describe the
same topic. It is built by the EntityResolver, scored in place by the
ScoreAggregator and discarded after the discovery run.
"""

from dataclasses import dataclass, field
from typing import Any

from trendcast.services.trends.base import (
    GENERAL_CATEGORY,
    SOURCE_PRIORITY,
    TrendObservation,
    TrendSource,
)


@dataclass
class AggregatedTrend:
    """Cross-source cluster of observations.

    Attributes:
        canonical_keyword: Normalized keyword of the first member
        keyword: Raw keyword of the first member, used as display label
        members: At most one observation per source
        aliases: Normalized keywords of every observation absorbed
        discovery_index: Order in which the cluster was created
        aggregated_score: Weighted mean of member scores
        predicted_views: Max of member view estimates
        confidence: Confidence in [0, 1]
        cross_platform_validated: More than one source present
        trend_velocity: Growth/engagement velocity
        category: Content category
        region: Region code of the first member
        volatility: Weighted mean of member volatility
        competitiveness: Weighted mean of member competitiveness
        final_score: Selection score, set by the TopicSelector
    """

    canonical_keyword: str
    keyword: str
    members: dict[TrendSource, TrendObservation] = field(default_factory=dict)
    aliases: set[str] = field(default_factory=set)
    discovery_index: int = 0
    aggregated_score: float = 0.0
    predicted_views: int = 0
    confidence: float = 0.5
    cross_platform_validated: bool = False
    trend_velocity: float = 0.5
    category: str = GENERAL_CATEGORY
    region: str = "KR"
    volatility: float = 0.0
    competitiveness: float = 0.0
    final_score: float | None = None

    @classmethod
    def from_observation(cls, observation: TrendObservation, index: int) -> "AggregatedTrend":
        """Start a single-member cluster."""
        return cls(
            canonical_keyword=observation.normalized_keyword,
            keyword=observation.raw_keyword.strip(),
            members={observation.source: observation},
            aliases={observation.normalized_keyword},
            discovery_index=index,
            region=observation.region,
        )

    @property
    def sources(self) -> list[TrendSource]:
        """Present sources in priority order."""
        return [source for source in SOURCE_PRIORITY if source in self.members]

    @property
    def source_count(self) -> int:
        return len(self.members)

    def member(self, source: TrendSource) -> TrendObservation | None:
        return self.members.get(source)

    def related_queries(self, limit: int = 10) -> list[str]:
        """Related queries of all members, deduplicated in priority order."""
        queries: list[str] = []
        for source in self.sources:
            for query in self.members[source].related_queries:
                if query not in queries:
                    queries.append(query)
        return queries[:limit]

    def absorb(self, observation: TrendObservation) -> bool:
        """Attach an observation, keeping one member per source.

        When the source is already present the observation with the higher
        score is kept (the existing member wins ties).

        Returns:
            True if the observation became a member
        """
        self.aliases.add(observation.normalized_keyword)
        current = self.members.get(observation.source)
        if current is not None and current.score >= observation.score:
            return False
        self.members[observation.source] = observation
        return True

    def to_summary(self) -> dict[str, Any]:
        """Serializable summary for logs and API responses."""
        return {
            "keyword": self.keyword,
            "canonical_keyword": self.canonical_keyword,
            "sources": [source.value for source in self.sources],
            "aggregated_score": round(self.aggregated_score, 2),
            "predicted_views": self.predicted_views,
            "confidence": round(self.confidence, 2),
            "cross_platform_validated": self.cross_platform_validated,
            "trend_velocity": round(self.trend_velocity, 3),
            "category": self.category,
            "volatility": round(self.volatility, 3),
            "competitiveness": round(self.competitiveness, 3),
            "final_score": round(self.final_score, 2) if self.final_score is not None else None,
        }


__all__ = ["AggregatedTrend"]
