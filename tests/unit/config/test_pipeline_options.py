"""Unit tests for pipeline configuration."""

import pytest
from pydantic import ValidationError

from trendcast.config.pipeline import (
    HousekeepingConfig,
    JobOptions,
    PipelineConfig,
    StageProgressTargets,
)


class TestJobOptions:
    """Tests for JobOptions."""

    def test_defaults(self):
        """Test default production options."""
        options = JobOptions()
        assert options.target_duration_seconds == 58
        assert options.content_style == "trendy"
        assert options.privacy_status == "private"
        assert options.skip_video_generation is False
        assert options.custom_topic is None

    def test_invalid_style_rejected(self):
        """Test content style is restricted."""
        with pytest.raises(ValidationError):
            JobOptions(content_style="sarcastic")

    def test_json_round_trip(self):
        """Test options survive JSON column storage."""
        options = JobOptions(custom_topic="AI 혁신", skip_upload=True)
        restored = JobOptions.model_validate(options.model_dump(mode="json"))
        assert restored == options


class TestStageProgressTargets:
    """Tests for StageProgressTargets."""

    def test_defaults(self):
        """Test default targets per stage."""
        targets = StageProgressTargets()
        assert targets.for_stage("script_generation") == 15
        assert targets.for_stage("video_synthesis") == 50
        assert targets.for_stage("completed") == 100

    def test_must_increase(self):
        """Test non-increasing targets are rejected."""
        with pytest.raises(ValidationError, match="increasing"):
            StageProgressTargets(narration=10)


class TestPipelineConfig:
    """Tests for PipelineConfig and HousekeepingConfig."""

    def test_defaults(self):
        """Test polling defaults."""
        config = PipelineConfig()
        assert config.video_poll_interval_seconds == 10.0
        assert config.video_poll_timeout_seconds == 600.0
        assert config.video_resolution == "1080x1920"

    def test_resolution_pattern(self):
        """Test malformed resolutions are rejected."""
        with pytest.raises(ValidationError):
            PipelineConfig(video_resolution="hd")

    def test_housekeeping_defaults(self):
        """Test cleanup defaults."""
        config = HousekeepingConfig()
        assert config.progress_cooldown_seconds == 60.0
        assert config.progress_stale_seconds == 3600.0
        assert ".mp4" in config.video_extensions
