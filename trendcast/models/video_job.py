"""VideoJob ORM model.

This module defines the VideoJob model, the persisted record of one topic
travelling through the production pipeline, together with its status enum
and the fixed stage order.
"""

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trendcast.models.base import Base, TimestampMixin, UUIDMixin


class JobStatus(str, enum.Enum):
    """Video job lifecycle status.

    Non-terminal values name the stage currently executing.
    """

    CREATED = "created"
    SCRIPT_GENERATION = "script_generation"
    NARRATION = "narration"
    VIDEO_SYNTHESIS = "video_synthesis"
    THUMBNAIL_GENERATION = "thumbnail_generation"
    UPLOAD = "upload"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Check whether the status is COMPLETED or FAILED."""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


# Strict forward order of the pipeline; FAILED sits outside it.
JOB_STAGE_ORDER: tuple[JobStatus, ...] = (
    JobStatus.CREATED,
    JobStatus.SCRIPT_GENERATION,
    JobStatus.NARRATION,
    JobStatus.VIDEO_SYNTHESIS,
    JobStatus.THUMBNAIL_GENERATION,
    JobStatus.UPLOAD,
    JobStatus.COMPLETED,
)


class VideoJob(Base, UUIDMixin, TimestampMixin):
    """A topic being produced into a published short video.

    Attributes:
        trend_run_id: Discovery run the topic came from (None for manual topics)
        retried_from_id: Failed job this job was created to retry
        status: Current status (see JobStatus)
        topic: Topic keyword
        category: Content category
        options: Job options (style, language, skip flags)
        script_title: Generated video title
        script_text: Generated narration script
        script_generation_time_ms: Script stage duration
        narration_path: Narration audio file path
        narration_duration_seconds: Narration length
        narration_generation_time_ms: Narration stage duration
        video_path: Synthesized video file path
        video_provider: Video synthesis provider name
        video_task_id: Provider task id used for polling
        video_prompt: Prompt sent to the video provider
        video_resolution: Output resolution
        video_generation_time_ms: Video stage duration (including polling)
        thumbnail_paths: Generated thumbnail image paths
        upload_video_id: Platform id of the uploaded video
        upload_url: Public URL of the uploaded video
        total_processing_time_ms: Wall-clock duration of the whole job
        completed_at: When the job reached a terminal status
        error_message: Failure reason when status is FAILED
    """

    __tablename__ = "video_jobs"

    trend_run_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("trend_runs.id", ondelete="SET NULL"), index=True
    )
    retried_from_id: Mapped[uuid.UUID | None] = mapped_column(index=True)

    status: Mapped[JobStatus] = mapped_column(
        String(30), nullable=False, default=JobStatus.CREATED, index=True
    )
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    options: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Script
    script_title: Mapped[str | None] = mapped_column(String(255))
    script_text: Mapped[str | None] = mapped_column(Text)
    script_generation_time_ms: Mapped[int | None] = mapped_column(Integer)

    # Narration
    narration_path: Mapped[str | None] = mapped_column(String(500))
    narration_duration_seconds: Mapped[float | None] = mapped_column(Float)
    narration_generation_time_ms: Mapped[int | None] = mapped_column(Integer)

    # Video
    video_path: Mapped[str | None] = mapped_column(String(500))
    video_provider: Mapped[str | None] = mapped_column(String(50))
    video_task_id: Mapped[str | None] = mapped_column(String(255))
    video_prompt: Mapped[str | None] = mapped_column(Text)
    video_resolution: Mapped[str | None] = mapped_column(String(20))
    video_generation_time_ms: Mapped[int | None] = mapped_column(Integer)

    # Thumbnails and upload
    thumbnail_paths: Mapped[list[str] | None] = mapped_column(JSON)
    upload_video_id: Mapped[str | None] = mapped_column(String(100))
    upload_url: Mapped[str | None] = mapped_column(String(500))

    # Lifecycle
    total_processing_time_ms: Mapped[int | None] = mapped_column(Integer)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    error_message: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (Index("idx_video_job_status_created", "status", "created_at"),)

    def __repr__(self) -> str:
        return f"<VideoJob(id={self.id}, topic={self.topic!r}, status={self.status})>"


__all__ = [
    "JOB_STAGE_ORDER",
    "JobStatus",
    "VideoJob",
]
