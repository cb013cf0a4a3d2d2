"""Video job pipeline configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class JobOptions(BaseModel):
    """Per-job production options.

    Attributes:
        target_duration_seconds: Target length of the short
        content_style: Tone of the script
        language: Script and narration language
        custom_topic: Topic to use instead of running discovery
        custom_category: Category of the custom topic
        video_style: Visual style passed to video synthesis
        skip_video_generation: Omit the video synthesis stage
        skip_thumbnail_generation: Omit the thumbnail stage
        skip_upload: Omit the upload stage
        privacy_status: Visibility of the uploaded video
    """

    target_duration_seconds: int = Field(default=58, ge=5, le=180)
    content_style: Literal["informative", "entertaining", "educational", "trendy"] = Field(
        default="trendy"
    )
    language: str = Field(default="ko", min_length=2, max_length=5)
    custom_topic: str | None = Field(default=None, max_length=255)
    custom_category: str | None = Field(default=None, max_length=50)
    video_style: Literal["cinematic", "documentary", "animated", "minimal"] = Field(
        default="cinematic"
    )
    skip_video_generation: bool = False
    skip_thumbnail_generation: bool = False
    skip_upload: bool = False
    privacy_status: Literal["private", "unlisted", "public"] = Field(default="private")


class StageProgressTargets(BaseModel):
    """Percent complete reported when each stage starts.

    Values are calibrated to the relative cost of the stages and must
    increase along the pipeline.
    """

    script_generation: int = Field(default=15, ge=0, le=100)
    narration: int = Field(default=30, ge=0, le=100)
    video_synthesis: int = Field(default=50, ge=0, le=100)
    thumbnail_generation: int = Field(default=70, ge=0, le=100)
    upload: int = Field(default=85, ge=0, le=100)
    completed: int = Field(default=100, ge=0, le=100)

    @model_validator(mode="after")
    def check_increasing(self) -> "StageProgressTargets":
        """Validate that targets increase stage by stage."""
        values = list(self.model_dump().values())
        if any(later <= earlier for earlier, later in zip(values, values[1:], strict=False)):
            raise ValueError(f"Stage progress targets must be increasing: {values}")
        return self

    def for_stage(self, stage: str) -> int:
        """Get the target percent for a stage name."""
        return int(getattr(self, str(stage)))


class PipelineConfig(BaseModel):
    """Video job pipeline configuration.

    Attributes:
        default_options: Options applied when a job is created without any
        progress_targets: Percent reported per stage
        video_poll_interval_seconds: Pause between video status polls
        video_poll_timeout_seconds: Bound on video synthesis polling
        video_resolution: Resolution requested from video synthesis
        error_message_max_length: Longest error message persisted
    """

    default_options: JobOptions = Field(default_factory=JobOptions)
    progress_targets: StageProgressTargets = Field(default_factory=StageProgressTargets)
    video_poll_interval_seconds: float = Field(default=10.0, ge=0, le=300)
    video_poll_timeout_seconds: float = Field(default=600.0, gt=0, le=7200)
    video_resolution: str = Field(default="1080x1920", pattern=r"^\d+x\d+$")
    error_message_max_length: int = Field(default=500, ge=50, le=10000)


class HousekeepingConfig(BaseModel):
    """Periodic cleanup configuration.

    Attributes:
        sweep_interval_seconds: Pause between sweeps
        progress_cooldown_seconds: How long terminal progress stays visible
        progress_stale_seconds: Age after which unfinished progress is dropped
        audio_ttl_hours: Age after which narration files are deleted
        video_ttl_hours: Age after which video files are deleted
        audio_extensions: File suffixes treated as narration audio
        video_extensions: File suffixes treated as video
    """

    sweep_interval_seconds: float = Field(default=30.0, gt=0, le=3600)
    progress_cooldown_seconds: float = Field(default=60.0, ge=0, le=86400)
    progress_stale_seconds: float = Field(default=3600.0, gt=0)
    audio_ttl_hours: float = Field(default=24.0, gt=0)
    video_ttl_hours: float = Field(default=48.0, gt=0)
    audio_extensions: list[str] = Field(default_factory=lambda: [".mp3", ".wav", ".m4a"])
    video_extensions: list[str] = Field(default_factory=lambda: [".mp4", ".mov", ".webm"])


__all__ = [
    "JobOptions",
    "StageProgressTargets",
    "PipelineConfig",
    "HousekeepingConfig",
]
