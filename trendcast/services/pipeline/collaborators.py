"""Stage collaborator boundary.

Each pipeline stage delegates its work to one external collaborator (an AI
model API, a speech engine, an upload API). Collaborators own their retry
and backoff; the orchestrator only sees a typed result or an exception.
"""

import enum
import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from trendcast.core.exceptions import CollaboratorsNotConfiguredError


# ============================================
# Script
# ============================================


@dataclass
class ScriptRequest:
    """Input of the script stage."""

    topic: str
    category: str
    content_style: str
    target_duration_seconds: int
    language: str
    include_hook: bool = True


@dataclass
class ScriptResult:
    """Generated script.

    Attributes:
        title: Video title
        text: Full narration script
        generation_time_ms: Time the collaborator spent
    """

    title: str
    text: str
    generation_time_ms: int = 0


class ScriptWriter(ABC):
    """Writes a short-form narration script for a topic."""

    @abstractmethod
    async def write_script(self, request: ScriptRequest) -> ScriptResult:
        """Generate a script.

        Raises:
            Exception: Any failure once the writer's own retries are exhausted
        """


# ============================================
# Narration
# ============================================


@dataclass
class NarrationRequest:
    """Input of the narration stage."""

    text: str
    language: str


@dataclass
class NarrationResult:
    """Synthesized narration audio."""

    audio_path: str
    duration_seconds: float
    generation_time_ms: int = 0


class Narrator(ABC):
    """Turns script text into narration audio."""

    @abstractmethod
    async def synthesize(self, request: NarrationRequest) -> NarrationResult:
        """Generate narration audio for the text."""


# ============================================
# Video synthesis
# ============================================


class VideoTaskState(str, enum.Enum):
    """State of an asynchronous video synthesis task."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class VideoRequest:
    """Input of the video synthesis stage."""

    prompt: str
    duration_seconds: int
    style: str
    resolution: str
    aspect_ratio: str = "9:16"
    audio_path: str | None = None


@dataclass
class VideoTask:
    """Handle of a submitted video synthesis task."""

    task_id: str
    provider: str


@dataclass
class VideoTaskStatus:
    """Polled state of a video synthesis task.

    Attributes:
        state: Task state
        video_path: Output file once SUCCEEDED
        error: Provider error once FAILED
    """

    state: VideoTaskState
    video_path: str | None = None
    error: str | None = None


@dataclass
class VideoResult:
    """Finished video synthesis."""

    video_path: str
    provider: str
    task_id: str
    prompt: str
    resolution: str
    generation_time_ms: int = 0


class VideoSynthesizer(ABC):
    """Submits video synthesis tasks and reports their state.

    Synthesis is asynchronous on the provider side: the orchestrator
    submits a task and polls get_status() until it succeeds, fails or
    the poll bound is exceeded.
    """

    @abstractmethod
    def build_prompt(self, script_text: str, style: str) -> str:
        """Derive the provider prompt from the script."""

    @abstractmethod
    async def submit(self, request: VideoRequest) -> VideoTask:
        """Start a synthesis task."""

    @abstractmethod
    async def get_status(self, task: VideoTask) -> VideoTaskStatus:
        """Poll a synthesis task."""


# ============================================
# Thumbnails
# ============================================


@dataclass
class ThumbnailRequest:
    """Input of the thumbnail stage."""

    title: str
    topic: str
    category: str
    video_path: str | None = None


@dataclass
class ThumbnailResult:
    paths: list[str] = field(default_factory=list)


class ThumbnailRenderer(ABC):
    """Renders thumbnail images for a video."""

    @abstractmethod
    async def render(self, request: ThumbnailRequest) -> ThumbnailResult:
        """Render thumbnails."""


# ============================================
# Upload
# ============================================


@dataclass
class UploadRequest:
    """Input of the upload stage."""

    title: str
    description: str
    video_path: str
    privacy_status: str
    thumbnail_path: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class UploadResult:
    video_id: str
    url: str


class VideoPublisher(ABC):
    """Publishes a finished video."""

    @abstractmethod
    async def upload(self, request: UploadRequest) -> UploadResult:
        """Upload the video and return its platform id and URL."""


# ============================================
# Bundle
# ============================================


@dataclass
class StageCollaborators:
    """Collaborators for every stage.

    Script and narration are mandatory. A missing optional collaborator
    makes its stage skipped.
    """

    script_writer: ScriptWriter
    narrator: Narrator
    video_synthesizer: VideoSynthesizer | None = None
    thumbnail_renderer: ThumbnailRenderer | None = None
    publisher: VideoPublisher | None = None


def load_stage_collaborators(import_path: str) -> StageCollaborators:
    """Build collaborators from a ``module:attribute`` import path.

    The attribute is either a StageCollaborators instance or a zero-argument
    callable returning one. Deployments set it with STAGE_COLLABORATORS.

    Raises:
        CollaboratorsNotConfiguredError: If the path is unset, cannot be
            imported, or does not produce StageCollaborators
    """
    if not import_path:
        raise CollaboratorsNotConfiguredError(
            "Stage collaborators are not configured (set STAGE_COLLABORATORS)"
        )

    module_name, _, attribute = import_path.partition(":")
    try:
        target = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError, ValueError) as e:
        raise CollaboratorsNotConfiguredError(
            f"Cannot import stage collaborators from '{import_path}': {e}",
            import_path=import_path,
        ) from e

    collaborators = target() if callable(target) else target
    if not isinstance(collaborators, StageCollaborators):
        raise CollaboratorsNotConfiguredError(
            f"'{import_path}' did not produce StageCollaborators",
            import_path=import_path,
        )
    return collaborators


__all__ = [
    "NarrationRequest",
    "NarrationResult",
    "Narrator",
    "ScriptRequest",
    "ScriptResult",
    "ScriptWriter",
    "StageCollaborators",
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
    "load_stage_collaborators",
]
