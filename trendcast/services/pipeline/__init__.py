"""Video job pipeline: orchestration, progress tracking and housekeeping."""

from trendcast.services.pipeline.collaborators import (
    NarrationRequest,
    NarrationResult,
    Narrator,
    ScriptRequest,
    ScriptResult,
    ScriptWriter,
    StageCollaborators,
    ThumbnailRenderer,
    ThumbnailRequest,
    ThumbnailResult,
    UploadRequest,
    UploadResult,
    VideoPublisher,
    VideoRequest,
    VideoResult,
    VideoSynthesizer,
    VideoTask,
    VideoTaskState,
    VideoTaskStatus,
)
from trendcast.services.pipeline.housekeeping import Housekeeper, SweepReport, cleanup_media
from trendcast.services.pipeline.orchestrator import JobOrchestrator, JobResult
from trendcast.services.pipeline.progress import JobProgress, JobProgressTracker

__all__ = [
    "Housekeeper",
    "JobOrchestrator",
    "JobProgress",
    "JobProgressTracker",
    "JobResult",
    "NarrationRequest",
    "NarrationResult",
    "Narrator",
    "ScriptRequest",
    "ScriptResult",
    "ScriptWriter",
    "StageCollaborators",
    "SweepReport",
    "ThumbnailRenderer",
    "ThumbnailRequest",
    "ThumbnailResult",
    "UploadRequest",
    "UploadResult",
    "VideoPublisher",
    "VideoRequest",
    "VideoResult",
    "VideoSynthesizer",
    "VideoTask",
    "VideoTaskState",
    "VideoTaskStatus",
    "cleanup_media",
]
