"""Unit tests for aggregation configuration."""

import pytest
from pydantic import ValidationError

from trendcast.config.aggregation import (
    AggregationConfig,
    ConfidenceRules,
    SelectionWeights,
    SourceWeights,
)


class TestSourceWeights:
    """Tests for SourceWeights."""

    def test_defaults(self):
        """Test Naver > YouTube > Google default weighting."""
        weights = SourceWeights()
        assert weights.weight_for("naver") == 1.5
        assert weights.weight_for("youtube") == 1.2
        assert weights.weight_for("google") == 1.0

    def test_weight_must_be_positive(self):
        """Test zero weights are rejected."""
        with pytest.raises(ValidationError):
            SourceWeights(google=0)


class TestSelectionWeights:
    """Tests for SelectionWeights."""

    def test_defaults_sum_to_one(self):
        """Test default weights are valid."""
        weights = SelectionWeights()
        assert weights.predicted_views + weights.volatility + weights.low_competition == (
            pytest.approx(1.0)
        )

    def test_invalid_sum_rejected(self):
        """Test weights not summing to 1.0 are rejected."""
        with pytest.raises(ValidationError, match="must sum to 1.0"):
            SelectionWeights(predicted_views=0.9, volatility=0.5, low_competition=0.1)


class TestAggregationConfig:
    """Tests for AggregationConfig."""

    def test_defaults(self):
        """Test default thresholds and nested models."""
        config = AggregationConfig()
        assert config.similarity_threshold == 0.7
        assert config.ranking_limit == 10
        assert isinstance(config.confidence, ConfidenceRules)
        assert config.confidence.base == 0.5

    def test_similarity_threshold_bounds(self):
        """Test threshold must be in [0, 1]."""
        with pytest.raises(ValidationError):
            AggregationConfig(similarity_threshold=1.5)

    def test_nested_override(self):
        """Test nested models accept dicts."""
        config = AggregationConfig(source_weights={"naver": 2.0})
        assert config.source_weights.naver == 2.0
        assert config.source_weights.google == 1.0
