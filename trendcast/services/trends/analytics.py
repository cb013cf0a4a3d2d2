"""Run-level analytics over scored clusters."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from trendcast.services.trends.base import SOURCE_PRIORITY, TrendSource
from trendcast.services.trends.cluster import AggregatedTrend

EMERGING_GROWTH_THRESHOLD = 50.0
HIGH_VELOCITY_THRESHOLD = 1.0
CONFLICT_THRESHOLD = 0.5


@dataclass
class TrendAnalytics:
    """Summary of one discovery run's clusters.

    Attributes:
        total_topics: Number of clusters
        source_distribution: Clusters each source contributed to
        category_distribution: Clusters per category
        average_confidence: Mean cluster confidence
        cross_validated_topics: Clusters seen by more than one source
        trending_categories: Up to five most common categories
        emerging_keywords: Naver keywords growing faster than 50%
        high_velocity_keywords: Clusters with velocity above 1.0
        conflicting_keywords: Clusters whose sources disagree strongly
    """

    total_topics: int = 0
    source_distribution: dict[str, int] = field(default_factory=dict)
    category_distribution: dict[str, int] = field(default_factory=dict)
    average_confidence: float = 0.0
    cross_validated_topics: int = 0
    trending_categories: list[str] = field(default_factory=list)
    emerging_keywords: list[str] = field(default_factory=list)
    high_velocity_keywords: list[str] = field(default_factory=list)
    conflicting_keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_topics": self.total_topics,
            "source_distribution": self.source_distribution,
            "category_distribution": self.category_distribution,
            "average_confidence": round(self.average_confidence, 3),
            "cross_validated_topics": self.cross_validated_topics,
            "trending_categories": self.trending_categories,
            "emerging_keywords": self.emerging_keywords,
            "high_velocity_keywords": self.high_velocity_keywords,
            "conflicting_keywords": self.conflicting_keywords,
        }


def is_conflicting(cluster: AggregatedTrend, threshold: float = CONFLICT_THRESHOLD) -> bool:
    """Check whether member scores disagree by more than the threshold.

    Disagreement is (max - min) / max over the members' scores; clusters
    with a single source never conflict.
    """
    if cluster.source_count < 2:
        return False
    scores = [member.score for member in cluster.members.values()]
    highest = max(scores)
    if highest <= 0:
        return False
    return (highest - min(scores)) / highest > threshold


def analyze_clusters(clusters: list[AggregatedTrend]) -> TrendAnalytics:
    """Build run analytics from scored clusters."""
    if not clusters:
        return TrendAnalytics()

    sources = Counter(source.value for c in clusters for source in c.sources)
    categories = Counter(c.category for c in clusters)

    emerging = [
        (c.keyword, naver.growth)
        for c in clusters
        if (naver := c.member(TrendSource.NAVER)) is not None
        and naver.growth is not None
        and naver.growth > EMERGING_GROWTH_THRESHOLD
    ]
    emerging.sort(key=lambda item: item[1], reverse=True)

    return TrendAnalytics(
        total_topics=len(clusters),
        source_distribution={s.value: sources.get(s.value, 0) for s in SOURCE_PRIORITY},
        category_distribution=dict(categories),
        average_confidence=sum(c.confidence for c in clusters) / len(clusters),
        cross_validated_topics=sum(1 for c in clusters if c.cross_platform_validated),
        trending_categories=[category for category, _ in categories.most_common(5)],
        emerging_keywords=[keyword for keyword, _ in emerging[:10]],
        high_velocity_keywords=[
            c.keyword for c in clusters if c.trend_velocity > HIGH_VELOCITY_THRESHOLD
        ],
        conflicting_keywords=[c.keyword for c in clusters if is_conflicting(c)],
    )


__all__ = [
    "TrendAnalytics",
    "analyze_clusters",
    "is_conflicting",
]
