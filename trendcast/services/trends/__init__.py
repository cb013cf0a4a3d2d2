"""Trend discovery: source adapters, entity resolution, scoring and selection."""

from trendcast.services.trends.aggregator import ScoreAggregator
from trendcast.services.trends.analytics import TrendAnalytics, analyze_clusters
from trendcast.services.trends.base import (
    SOURCE_PRIORITY,
    TrendObservation,
    TrendSource,
    TrendSourceAdapter,
)
from trendcast.services.trends.cluster import AggregatedTrend
from trendcast.services.trends.discovery import DiscoveryResult, TrendDiscoveryService
from trendcast.services.trends.normalizer import KeywordNormalizer, normalize_keyword
from trendcast.services.trends.resolver import EntityResolver, keyword_similarity
from trendcast.services.trends.selector import TopicSelector

__all__ = [
    "AggregatedTrend",
    "DiscoveryResult",
    "EntityResolver",
    "KeywordNormalizer",
    "SOURCE_PRIORITY",
    "ScoreAggregator",
    "TopicSelector",
    "TrendAnalytics",
    "TrendDiscoveryService",
    "TrendObservation",
    "TrendSource",
    "TrendSourceAdapter",
    "analyze_clusters",
    "keyword_similarity",
    "normalize_keyword",
]
