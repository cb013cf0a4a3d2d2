"""Typed configuration models for trend discovery and the job pipeline."""

from trendcast.config.aggregation import (
    AggregationConfig,
    ConfidenceRules,
    SelectionWeights,
    SourceWeights,
)
from trendcast.config.pipeline import (
    HousekeepingConfig,
    JobOptions,
    PipelineConfig,
    StageProgressTargets,
)
from trendcast.config.sources import (
    GoogleTrendsConfig,
    NaverTrendsConfig,
    YouTubeTrendsConfig,
)

__all__ = [
    "AggregationConfig",
    "ConfidenceRules",
    "SelectionWeights",
    "SourceWeights",
    "HousekeepingConfig",
    "JobOptions",
    "PipelineConfig",
    "StageProgressTargets",
    "GoogleTrendsConfig",
    "NaverTrendsConfig",
    "YouTubeTrendsConfig",
]
