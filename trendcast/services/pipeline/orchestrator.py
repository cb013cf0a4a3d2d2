"""Video job orchestration.

A job carries one topic through the production stages in a fixed order:

    CREATED -> SCRIPT_GENERATION -> NARRATION -> VIDEO_SYNTHESIS
            -> THUMBNAIL_GENERATION -> UPLOAD -> COMPLETED

Stages run strictly one after another within a job; separate jobs run
concurrently. The first stage failure finalizes the job as FAILED. There
is no resume: retry_job() starts a new job from scratch for the same topic.
"""

import asyncio
import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from trendcast.config.pipeline import JobOptions, PipelineConfig
from trendcast.core.exceptions import (
    InvalidJobStateError,
    NoTopicSelectedError,
    PersistenceError,
    RecordNotFoundError,
    StageCollaboratorError,
    StageTimeoutError,
)
from trendcast.core.logging import get_logger
from trendcast.core.state_machine import StateMachine, create_job_state_machine
from trendcast.models import JobStatus, TrendRun, TrendRunStatus, VideoJob
from trendcast.models.base import utc_now
from trendcast.services.alerts import Alert, AlertKind, AlertSink
from trendcast.services.pipeline.collaborators import (
    NarrationRequest,
    NarrationResult,
    ScriptRequest,
    ScriptResult,
    StageCollaborators,
    ThumbnailRequest,
    UploadRequest,
    UploadResult,
    VideoRequest,
    VideoResult,
    VideoTaskState,
)
from trendcast.services.pipeline.progress import JobProgress, JobProgressTracker
from trendcast.services.trends.cluster import AggregatedTrend
from trendcast.services.trends.discovery import TrendDiscoveryService
from trendcast.storage import Storage

logger = get_logger(__name__)

T = TypeVar("T")

MANUAL_SOURCE = "manual"

# Stages executed by run_job, in order.
PIPELINE_STAGES: tuple[JobStatus, ...] = (
    JobStatus.SCRIPT_GENERATION,
    JobStatus.NARRATION,
    JobStatus.VIDEO_SYNTHESIS,
    JobStatus.THUMBNAIL_GENERATION,
    JobStatus.UPLOAD,
)

STAGE_MESSAGES: dict[JobStatus, str] = {
    JobStatus.SCRIPT_GENERATION: "Generating script",
    JobStatus.NARRATION: "Generating narration",
    JobStatus.VIDEO_SYNTHESIS: "Generating video",
    JobStatus.THUMBNAIL_GENERATION: "Rendering thumbnails",
    JobStatus.UPLOAD: "Uploading video",
}


@dataclass
class JobResult:
    """Outcome of one job execution.

    Attributes:
        job_id: Job id
        status: COMPLETED or FAILED
        topic: Topic keyword
        trend_run_id: Discovery run the topic came from
        retried_from_id: Failed job this job retries
        script: Script stage output
        narration: Narration stage output
        video: Video stage output
        thumbnail_paths: Thumbnail stage output
        upload: Upload stage output
        skipped_stages: Stages that did not run
        failed_stage: Stage that failed
        total_processing_time_ms: Wall-clock duration
        error_message: Failure reason
    """

    job_id: uuid.UUID
    status: JobStatus
    topic: str
    trend_run_id: uuid.UUID | None = None
    retried_from_id: uuid.UUID | None = None
    script: ScriptResult | None = None
    narration: NarrationResult | None = None
    video: VideoResult | None = None
    thumbnail_paths: list[str] = field(default_factory=list)
    upload: UploadResult | None = None
    skipped_stages: list[JobStatus] = field(default_factory=list)
    failed_stage: JobStatus | None = None
    total_processing_time_ms: int = 0
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status == JobStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": str(self.job_id),
            "status": self.status.value,
            "topic": self.topic,
            "trend_run_id": str(self.trend_run_id) if self.trend_run_id else None,
            "retried_from_id": str(self.retried_from_id) if self.retried_from_id else None,
            "script_title": self.script.title if self.script else None,
            "narration_path": self.narration.audio_path if self.narration else None,
            "video_path": self.video.video_path if self.video else None,
            "thumbnail_paths": self.thumbnail_paths,
            "upload_url": self.upload.url if self.upload else None,
            "skipped_stages": [stage.value for stage in self.skipped_stages],
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "total_processing_time_ms": self.total_processing_time_ms,
            "error_message": self.error_message,
        }


async def load_job_details(
    storage: Storage, progress: JobProgressTracker, job_id: uuid.UUID
) -> dict[str, Any] | None:
    """Persisted job fields merged with live progress.

    Returns:
        Details dict, or None if the job is unknown

    Raises:
        PersistenceError: If the read fails
    """
    job = await storage.jobs.get_by_id(job_id)
    current = progress.get(job_id)
    if job is None and current is None:
        return None
    details = job.to_dict() if job else {"id": str(job_id)}
    details["progress"] = current.to_dict() if current else None
    return details


class JobOrchestrator:
    """Drives video jobs through the production stages.

    Persistence is best-effort: a failed write is logged and the job keeps
    running, so storage outages never abort production. Collaborator
    failures and poll timeouts finalize the job as FAILED and raise an
    alert; they are never propagated to the caller of run_job().

    Example:
        >>> orchestrator = JobOrchestrator(storage, collaborators, discovery, tracker, sink)
        >>> job = await orchestrator.create_job_with_manual_topic("AI 혁신", "technology")
        >>> result = await orchestrator.run_job(job)
        >>> result.status
        <JobStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        storage: Storage,
        collaborators: StageCollaborators,
        discovery: TrendDiscoveryService,
        progress: JobProgressTracker,
        alert_sink: AlertSink,
        config: PipelineConfig | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize orchestrator.

        Args:
            storage: Persistence handle
            collaborators: Stage collaborators
            discovery: Trend discovery service used when a job has no topic
            progress: Shared progress tracker
            alert_sink: Destination for job failure alerts
            config: Pipeline configuration
            sleep: Coroutine used between video status polls
            monotonic: Clock used for the video poll bound
        """
        self.storage = storage
        self.collaborators = collaborators
        self.discovery = discovery
        self.progress = progress
        self.alert_sink = alert_sink
        self.config = config or PipelineConfig()
        self._sleep = sleep
        self._monotonic = monotonic
        self._tasks: set[asyncio.Task[JobResult]] = set()

    # ============================================
    # Job creation
    # ============================================

    async def create_job(
        self,
        options: JobOptions | None = None,
        topic: AggregatedTrend | None = None,
        trend_run_id: uuid.UUID | None = None,
    ) -> VideoJob:
        """Create a job in CREATED status.

        The topic comes from the argument, else from ``options.custom_topic``,
        else from a fresh discovery run.

        Args:
            options: Job options (defaults from configuration)
            topic: Already selected topic
            trend_run_id: Discovery run the topic came from

        Returns:
            The new job (persisted best-effort)

        Raises:
            NoTopicSelectedError: If discovery produced no topic
            ValueError: If the custom topic is blank
        """
        options = options or self.config.default_options.model_copy()

        if topic is None and options.custom_topic:
            topic = self.discovery.manual_topic(
                options.custom_topic, options.custom_category or "general"
            )
            trend_run_id = await self._record_manual_run(topic)
        elif topic is None:
            discovery = await self.discovery.trigger_discovery_run()
            if not discovery.success or discovery.selected is None:
                raise NoTopicSelectedError(
                    discovery.error_message or "No trending topic could be discovered",
                    run_id=str(discovery.run_id) if discovery.run_id else None,
                    status=discovery.status,
                )
            topic = discovery.selected
            trend_run_id = discovery.run_id

        return await self._register_job(
            topic=topic.keyword,
            category=topic.category,
            options=options,
            trend_run_id=trend_run_id,
        )

    async def create_job_with_manual_topic(
        self, keyword: str, category: str = "general", options: JobOptions | None = None
    ) -> VideoJob:
        """Create a job for a user-supplied topic, bypassing discovery."""
        base = options or self.config.default_options
        return await self.create_job(
            base.model_copy(update={"custom_topic": keyword, "custom_category": category})
        )

    async def create_video_only_job(
        self, keyword: str, category: str = "general", options: JobOptions | None = None
    ) -> VideoJob:
        """Create a job that stops after video synthesis.

        Thumbnails and upload are skipped; video synthesis is always on.
        """
        base = options or self.config.default_options
        return await self.create_job_with_manual_topic(
            keyword,
            category,
            base.model_copy(
                update={
                    "skip_video_generation": False,
                    "skip_thumbnail_generation": True,
                    "skip_upload": True,
                }
            ),
        )

    async def retry_job(self, job_id: uuid.UUID) -> VideoJob:
        """Create a fresh job for the topic of a failed job.

        The new job starts at CREATED with the failed job's options; no
        stage output is carried over.

        Raises:
            RecordNotFoundError: If the job does not exist
            InvalidJobStateError: If the job is not FAILED
        """
        failed = await self.storage.jobs.get_by_id(job_id)
        if failed is None:
            raise RecordNotFoundError("VideoJob", str(job_id))
        if JobStatus(failed.status) != JobStatus.FAILED:
            raise InvalidJobStateError(str(job_id), JobStatus(failed.status).value, "retry")

        logger.info("Retrying failed job", job_id=str(job_id), topic=failed.topic)
        return await self._register_job(
            topic=failed.topic,
            category=failed.category,
            options=JobOptions.model_validate(failed.options or {}),
            trend_run_id=failed.trend_run_id,
            retried_from_id=failed.id,
        )

    async def _register_job(
        self,
        topic: str,
        category: str,
        options: JobOptions,
        trend_run_id: uuid.UUID | None = None,
        retried_from_id: uuid.UUID | None = None,
    ) -> VideoJob:
        job = VideoJob(
            id=uuid.uuid4(),
            status=JobStatus.CREATED,
            topic=topic,
            category=category,
            options=options.model_dump(mode="json"),
            trend_run_id=trend_run_id,
            retried_from_id=retried_from_id,
        )
        await self._best_effort(self.storage.jobs.create(job), "create_job", job.id)
        self.progress.start(job.id)
        logger.info(
            "Video job created",
            job_id=str(job.id),
            topic=topic,
            category=category,
            retried_from_id=str(retried_from_id) if retried_from_id else None,
        )
        return job

    async def _record_manual_run(self, topic: AggregatedTrend) -> uuid.UUID:
        run = TrendRun(
            id=uuid.uuid4(),
            status=TrendRunStatus.COMPLETED,
            region=topic.region,
            sources_used=[MANUAL_SOURCE],
            total_observations=1,
            topics_found=1,
            selected_topic=topic.keyword,
            selected_topic_score=topic.final_score,
            execution_time_ms=0,
        )
        await self._best_effort(self.storage.trend_runs.create(run), "create_manual_run")
        return run.id

    # ============================================
    # Execution
    # ============================================

    async def run_job(self, job: VideoJob) -> JobResult:
        """Execute every stage of a CREATED job.

        Args:
            job: Job in CREATED status

        Returns:
            JobResult with status COMPLETED or FAILED

        Raises:
            InvalidJobStateError: If the job is not in CREATED status
        """
        status = JobStatus(job.status or JobStatus.CREATED)
        if status != JobStatus.CREATED:
            raise InvalidJobStateError(str(job.id), status.value, "run")

        started = time.perf_counter()
        state = create_job_state_machine()
        options = JobOptions.model_validate(job.options or {})
        result = JobResult(
            job_id=job.id,
            status=JobStatus.CREATED,
            topic=job.topic,
            trend_run_id=job.trend_run_id,
            retried_from_id=job.retried_from_id,
        )
        if self.progress.get(job.id) is None:
            self.progress.start(job.id)

        logger.info("Video job started", job_id=str(job.id), topic=job.topic)
        stage = JobStatus.CREATED
        try:
            for stage in PIPELINE_STAGES:
                reason = self._skip_reason(stage, options, result)
                if reason:
                    result.skipped_stages.append(stage)
                    logger.info(
                        "Stage skipped", job_id=str(job.id), stage=stage.value, reason=reason
                    )
                    continue
                await self._enter_stage(job, state, stage)
                stage_started = time.perf_counter()
                await self._run_stage(stage, job, options, result)
                logger.info(
                    "Stage completed",
                    job_id=str(job.id),
                    stage=stage.value,
                    elapsed_ms=int((time.perf_counter() - stage_started) * 1000),
                )
        except StageCollaboratorError as e:
            result.failed_stage = stage
            await self._fail(job, state, result, e, started)
            return result
        except Exception as e:
            logger.exception("Video job crashed", job_id=str(job.id), stage=stage.value)
            result.failed_stage = stage
            await self._fail(job, state, result, e, started)
            return result

        await self._complete(job, state, result, started)
        return result

    def submit_job(self, job: VideoJob) -> "asyncio.Task[JobResult]":
        """Run a job in the background on the current event loop.

        Returns:
            The task running the job
        """
        task = asyncio.create_task(self.run_job(job), name=f"video-job-{job.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("Video job submitted", job_id=str(job.id))
        return task

    async def produce_video(self, options: JobOptions | None = None) -> JobResult:
        """Create a job and run it to completion."""
        job = await self.create_job(options)
        return await self.run_job(job)

    def _skip_reason(self, stage: JobStatus, options: JobOptions, result: JobResult) -> str | None:
        collaborators = self.collaborators
        if stage == JobStatus.VIDEO_SYNTHESIS:
            if options.skip_video_generation:
                return "disabled by job options"
            if collaborators.video_synthesizer is None:
                return "no video synthesizer configured"
        elif stage == JobStatus.THUMBNAIL_GENERATION:
            if options.skip_thumbnail_generation:
                return "disabled by job options"
            if collaborators.thumbnail_renderer is None:
                return "no thumbnail renderer configured"
        elif stage == JobStatus.UPLOAD:
            if options.skip_upload:
                return "disabled by job options"
            if collaborators.publisher is None:
                return "no publisher configured"
            if result.video is None:
                return "no video to upload"
        return None

    async def _enter_stage(self, job: VideoJob, state: StateMachine, stage: JobStatus) -> None:
        previous = state.current
        state.transition(stage)
        job.status = stage
        self.progress.update(
            job.id,
            stage,
            self.config.progress_targets.for_stage(stage.value),
            STAGE_MESSAGES[stage],
        )
        await self._persist(job.id, status=stage)
        logger.info(
            "Job state changed",
            job_id=str(job.id),
            from_status=JobStatus(previous).value,
            to_status=stage.value,
        )

    async def _run_stage(
        self, stage: JobStatus, job: VideoJob, options: JobOptions, result: JobResult
    ) -> None:
        if stage == JobStatus.SCRIPT_GENERATION:
            result.script = await self._generate_script(job, options)
        elif stage == JobStatus.NARRATION:
            result.narration = await self._narrate(job, options, result)
        elif stage == JobStatus.VIDEO_SYNTHESIS:
            result.video = await self._synthesize_video(job, options, result)
        elif stage == JobStatus.THUMBNAIL_GENERATION:
            result.thumbnail_paths = await self._render_thumbnails(job, result)
        elif stage == JobStatus.UPLOAD:
            result.upload = await self._upload(job, options, result)

    # ============================================
    # Stages
    # ============================================

    async def _generate_script(self, job: VideoJob, options: JobOptions) -> ScriptResult:
        request = ScriptRequest(
            topic=job.topic,
            category=job.category,
            content_style=options.content_style,
            target_duration_seconds=options.target_duration_seconds,
            language=options.language,
        )
        script = await self._call(
            JobStatus.SCRIPT_GENERATION,
            lambda: self.collaborators.script_writer.write_script(request),
        )
        if not script.text.strip():
            raise StageCollaboratorError(
                "Script writer returned an empty script", stage=JobStatus.SCRIPT_GENERATION.value
            )
        await self._persist(
            job.id,
            script_title=script.title,
            script_text=script.text,
            script_generation_time_ms=script.generation_time_ms,
        )
        return script

    async def _narrate(
        self, job: VideoJob, options: JobOptions, result: JobResult
    ) -> NarrationResult:
        script = self._require(result.script, JobStatus.NARRATION, "script")
        request = NarrationRequest(text=script.text, language=options.language)
        narration = await self._call(
            JobStatus.NARRATION, lambda: self.collaborators.narrator.synthesize(request)
        )
        await self._persist(
            job.id,
            narration_path=narration.audio_path,
            narration_duration_seconds=narration.duration_seconds,
            narration_generation_time_ms=narration.generation_time_ms,
        )
        return narration

    async def _synthesize_video(
        self, job: VideoJob, options: JobOptions, result: JobResult
    ) -> VideoResult:
        stage = JobStatus.VIDEO_SYNTHESIS
        synthesizer = self._require(self.collaborators.video_synthesizer, stage, "synthesizer")
        script = self._require(result.script, stage, "script")
        started = time.perf_counter()

        try:
            prompt = synthesizer.build_prompt(script.text, options.video_style)
        except Exception as e:
            raise StageCollaboratorError(
                f"Video prompt could not be built: {e}", stage=stage.value
            ) from e
        request = VideoRequest(
            prompt=prompt,
            duration_seconds=options.target_duration_seconds,
            style=options.video_style,
            resolution=self.config.video_resolution,
            audio_path=result.narration.audio_path if result.narration else None,
        )
        task = await self._call(stage, lambda: synthesizer.submit(request))
        # Recorded before polling so an abandoned task can be traced after a restart.
        await self._persist(
            job.id,
            video_provider=task.provider,
            video_task_id=task.task_id,
            video_prompt=prompt,
            video_resolution=request.resolution,
        )
        logger.info(
            "Video synthesis submitted",
            job_id=str(job.id),
            provider=task.provider,
            task_id=task.task_id,
        )

        timeout = self.config.video_poll_timeout_seconds
        deadline = self._monotonic() + timeout
        polls = 0
        while True:
            status = await self._call(stage, lambda: synthesizer.get_status(task))
            polls += 1
            if status.state == VideoTaskState.SUCCEEDED:
                if not status.video_path:
                    raise StageCollaboratorError(
                        "Video task succeeded without an output file", stage=stage.value
                    )
                break
            if status.state == VideoTaskState.FAILED:
                raise StageCollaboratorError(
                    status.error or "Video synthesis failed",
                    stage=stage.value,
                    context={"task_id": task.task_id},
                )
            if self._monotonic() >= deadline:
                raise StageTimeoutError(stage.value, timeout, context={"task_id": task.task_id})
            self.progress.update(
                job.id,
                stage,
                self.config.progress_targets.for_stage(stage.value),
                f"Generating video ({status.state.value}, poll {polls})",
            )
            await self._sleep(self.config.video_poll_interval_seconds)

        video = VideoResult(
            video_path=status.video_path,
            provider=task.provider,
            task_id=task.task_id,
            prompt=prompt,
            resolution=request.resolution,
            generation_time_ms=int((time.perf_counter() - started) * 1000),
        )
        await self._persist(
            job.id,
            video_path=video.video_path,
            video_generation_time_ms=video.generation_time_ms,
        )
        return video

    async def _render_thumbnails(self, job: VideoJob, result: JobResult) -> list[str]:
        stage = JobStatus.THUMBNAIL_GENERATION
        renderer = self._require(self.collaborators.thumbnail_renderer, stage, "renderer")
        request = ThumbnailRequest(
            title=result.script.title if result.script else job.topic,
            topic=job.topic,
            category=job.category,
            video_path=result.video.video_path if result.video else None,
        )
        thumbnails = await self._call(stage, lambda: renderer.render(request))
        await self._persist(job.id, thumbnail_paths=list(thumbnails.paths))
        return list(thumbnails.paths)

    async def _upload(self, job: VideoJob, options: JobOptions, result: JobResult) -> UploadResult:
        stage = JobStatus.UPLOAD
        publisher = self._require(self.collaborators.publisher, stage, "publisher")
        video = self._require(result.video, stage, "video")
        script = self._require(result.script, stage, "script")
        request = UploadRequest(
            title=script.title,
            description=script.text,
            video_path=video.video_path,
            privacy_status=options.privacy_status,
            thumbnail_path=result.thumbnail_paths[0] if result.thumbnail_paths else None,
            tags=[job.topic, job.category],
        )
        upload = await self._call(stage, lambda: publisher.upload(request))
        await self._persist(job.id, upload_video_id=upload.video_id, upload_url=upload.url)
        return upload

    async def _call(self, stage: JobStatus, call: Callable[[], Awaitable[T]]) -> T:
        """Invoke a collaborator, converting any failure to StageCollaboratorError."""
        try:
            return await call()
        except StageCollaboratorError:
            raise
        except Exception as e:
            raise StageCollaboratorError(
                f"{stage.value} failed: {type(e).__name__}: {e}",
                stage=stage.value,
            ) from e

    @staticmethod
    def _require(value: T | None, stage: JobStatus, name: str) -> T:
        if value is None:
            raise StageCollaboratorError(f"Missing {name} for {stage.value}", stage=stage.value)
        return value

    # ============================================
    # Finalization
    # ============================================

    async def _complete(
        self, job: VideoJob, state: StateMachine, result: JobResult, started: float
    ) -> None:
        state.transition(JobStatus.COMPLETED)
        job.status = JobStatus.COMPLETED
        result.status = JobStatus.COMPLETED
        result.total_processing_time_ms = int((time.perf_counter() - started) * 1000)

        self.progress.update(
            job.id,
            JobStatus.COMPLETED,
            self.config.progress_targets.completed,
            "Video job completed",
        )
        await self._persist(
            job.id,
            status=JobStatus.COMPLETED,
            completed_at=utc_now(),
            total_processing_time_ms=result.total_processing_time_ms,
        )
        logger.info(
            "Video job completed",
            job_id=str(job.id),
            topic=job.topic,
            skipped=[s.value for s in result.skipped_stages],
            total_processing_time_ms=result.total_processing_time_ms,
        )

    async def _fail(
        self,
        job: VideoJob,
        state: StateMachine,
        result: JobResult,
        error: Exception,
        started: float,
    ) -> None:
        message = (str(error) or type(error).__name__)[: self.config.error_message_max_length]
        if state.can_transition(JobStatus.FAILED):
            state.transition(JobStatus.FAILED)
        job.status = JobStatus.FAILED
        result.status = JobStatus.FAILED
        result.error_message = message
        result.total_processing_time_ms = int((time.perf_counter() - started) * 1000)

        self.progress.mark_failed(job.id, f"Job failed: {message}")
        await self._persist(
            job.id,
            status=JobStatus.FAILED,
            error_message=message,
            completed_at=utc_now(),
            total_processing_time_ms=result.total_processing_time_ms,
        )
        logger.error(
            "Video job failed",
            job_id=str(job.id),
            topic=job.topic,
            stage=result.failed_stage.value if result.failed_stage else None,
            error=message,
        )
        await self.alert_sink.send(
            Alert(
                kind=AlertKind.JOB_FAILED,
                title="Video job failed",
                message=message,
                context={
                    "job_id": str(job.id),
                    "topic": job.topic,
                    "stage": result.failed_stage.value if result.failed_stage else None,
                },
            )
        )

    # ============================================
    # Persistence helpers
    # ============================================

    async def _persist(self, job_id: uuid.UUID, **fields: Any) -> None:
        await self._best_effort(self.storage.jobs.update(job_id, **fields), "update_job", job_id)

    async def _best_effort(
        self, operation: Awaitable[T], name: str, job_id: uuid.UUID | None = None
    ) -> T | None:
        try:
            return await operation
        except PersistenceError as e:
            logger.error(
                "Persistence failed, continuing",
                operation=name,
                job_id=str(job_id) if job_id else None,
                error=str(e),
            )
            return None

    # ============================================
    # Queries
    # ============================================

    def get_job_progress(self, job_id: uuid.UUID) -> JobProgress | None:
        return self.progress.get(job_id)

    def get_all_active_jobs(self) -> list[JobProgress]:
        """Progress of running jobs and of jobs finished within the cooldown."""
        return self.progress.all()

    async def get_job_details(self, job_id: uuid.UUID) -> dict[str, Any] | None:
        return await load_job_details(self.storage, self.progress, job_id)

    async def get_recent_jobs(self, limit: int = 10) -> list[VideoJob]:
        return await self.storage.jobs.get_recent(limit)

    async def get_jobs_by_status(self, status: JobStatus | str, limit: int = 50) -> list[VideoJob]:
        """Jobs with a given status, newest first.

        Raises:
            ValueError: If the status is not a JobStatus value
        """
        return await self.storage.jobs.get_by_status(JobStatus(status).value, limit)

    async def wait_for_background_jobs(self) -> None:
        """Wait for every job started with submit_job()."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)


__all__ = [
    "JobOrchestrator",
    "JobResult",
    "PIPELINE_STAGES",
    "load_job_details",
]
