"""Trend aggregation and topic selection configuration models."""

from pydantic import BaseModel, Field, model_validator

from trendcast.config.validators import validate_weights_sum


class SourceWeights(BaseModel):
    """Per-source weights used when combining source metrics.

    Attributes:
        naver: Naver DataLab weight
        youtube: YouTube weight
        google: Google Trends weight
    """

    naver: float = Field(default=1.5, gt=0, le=10)
    youtube: float = Field(default=1.2, gt=0, le=10)
    google: float = Field(default=1.0, gt=0, le=10)

    def weight_for(self, source: str) -> float:
        """Get the weight of a source by its name."""
        return float(getattr(self, str(source)))


class ConfidenceRules(BaseModel):
    """Confidence bonuses added on top of the base confidence.

    Attributes:
        base: Confidence of any cluster
        multi_source_bonus: Added when more than one source is present
        naver_bonus: Added when Naver is present
        engagement_bonus: Added when the YouTube trend score passes its threshold
        youtube_trend_score_threshold: YouTube trend score threshold
        growth_bonus: Added when Naver growth passes its threshold
        naver_growth_threshold: Naver growth percent threshold
    """

    base: float = Field(default=0.5, ge=0, le=1)
    multi_source_bonus: float = Field(default=0.3, ge=0, le=1)
    naver_bonus: float = Field(default=0.2, ge=0, le=1)
    engagement_bonus: float = Field(default=0.1, ge=0, le=1)
    youtube_trend_score_threshold: float = Field(default=1_000_000, ge=0)
    growth_bonus: float = Field(default=0.1, ge=0, le=1)
    naver_growth_threshold: float = Field(default=100.0, ge=0)


class SelectionWeights(BaseModel):
    """Weights of the final topic selection formula.

    Attributes:
        predicted_views: Weight of predicted views
        volatility: Weight of volatility (scaled to 0-100)
        low_competition: Weight of (1 - competitiveness) (scaled to 0-100)
    """

    predicted_views: float = Field(default=0.6, ge=0, le=1)
    volatility: float = Field(default=0.25, ge=0, le=1)
    low_competition: float = Field(default=0.15, ge=0, le=1)

    @model_validator(mode="after")
    def check_weights_sum(self) -> "SelectionWeights":
        """Validate that all weights sum to 1.0."""
        validate_weights_sum(
            {
                "predicted_views": self.predicted_views,
                "volatility": self.volatility,
                "low_competition": self.low_competition,
            }
        )
        return self


class AggregationConfig(BaseModel):
    """Trend aggregation configuration.

    Attributes:
        source_weights: Per-source weights
        similarity_threshold: Minimum keyword similarity to merge clusters
        confidence: Confidence bonus rules
        default_velocity: Velocity when no source provides growth or engagement
        velocity_recency_days: Recency window for YouTube engagement velocity
        selection: Final selection formula weights
        ranking_limit: Clusters kept after ranking by predicted views
        source_timeout_seconds: Bound on each source fetch
        fallback_jitter: Randomize fallback topic metrics
    """

    source_weights: SourceWeights = Field(default_factory=SourceWeights)
    similarity_threshold: float = Field(default=0.7, ge=0, le=1)
    confidence: ConfidenceRules = Field(default_factory=ConfidenceRules)
    default_velocity: float = Field(default=0.5, ge=0)
    velocity_recency_days: float = Field(default=7.0, gt=0)
    selection: SelectionWeights = Field(default_factory=SelectionWeights)
    ranking_limit: int = Field(default=10, ge=1, le=100)
    source_timeout_seconds: float = Field(default=180.0, gt=0, le=1800)
    fallback_jitter: bool = Field(default=True)


__all__ = [
    "SourceWeights",
    "ConfidenceRules",
    "SelectionWeights",
    "AggregationConfig",
]
