"""Administration API: discovery runs, video jobs and live progress."""

import uuid

from fastapi import APIRouter, Query

from trendcast.api.dependencies import (
    Discovery,
    Orchestrator,
    OrchestratorFactory,
    ProgressTracker,
    StorageHandle,
)
from trendcast.api.schemas import (
    ApiResult,
    CreateJobRequest,
    DiscoveryRequest,
    ManualTopicJobRequest,
)
from trendcast.core.logging import get_logger
from trendcast.models import JobStatus
from trendcast.services.pipeline.orchestrator import load_job_details

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


# ============================================
# Discovery
# ============================================


@router.post("/discovery/run", response_model=ApiResult)
async def trigger_discovery(
    discovery: Discovery,
    orchestrator_factory: OrchestratorFactory,
    body: DiscoveryRequest | None = None,
) -> ApiResult:
    """Run trend discovery now, optionally starting a job for the selected topic."""
    body = body or DiscoveryRequest()
    result = await discovery.trigger_discovery_run(body.region)
    data = result.to_dict()

    if not result.success:
        return ApiResult.fail(result.error_message or f"Discovery {result.status}", data)

    if body.create_job and result.selected is not None:
        orchestrator = orchestrator_factory()
        job = await orchestrator.create_job(topic=result.selected, trend_run_id=result.run_id)
        orchestrator.submit_job(job)
        data["job_id"] = str(job.id)

    return ApiResult.ok(f"Selected topic: {result.selected.keyword}", data)


@router.get("/trend-runs", response_model=ApiResult)
async def recent_trend_runs(
    discovery: Discovery, limit: int = Query(default=20, ge=1, le=100)
) -> ApiResult:
    runs = await discovery.get_recent_runs(limit)
    return ApiResult.ok(f"{len(runs)} runs", [run.to_dict() for run in runs])


@router.get("/trend-runs/{run_id}/topics", response_model=ApiResult)
async def trend_run_topics(run_id: uuid.UUID, discovery: Discovery) -> ApiResult:
    topics = await discovery.get_run_topics(run_id)
    return ApiResult.ok(f"{len(topics)} topics", [topic.to_dict() for topic in topics])


# ============================================
# Jobs
# ============================================


@router.post("/jobs", response_model=ApiResult)
async def create_job(body: CreateJobRequest, orchestrator: Orchestrator) -> ApiResult:
    job = await orchestrator.create_job(body.options)
    if body.run_immediately:
        orchestrator.submit_job(job)
    return ApiResult.ok(f"Job created for topic: {job.topic}", {"job_id": str(job.id)})


@router.post("/jobs/manual", response_model=ApiResult)
async def create_manual_job(body: ManualTopicJobRequest, orchestrator: Orchestrator) -> ApiResult:
    if body.video_only:
        job = await orchestrator.create_video_only_job(body.keyword, body.category, body.options)
    else:
        job = await orchestrator.create_job_with_manual_topic(
            body.keyword, body.category, body.options
        )
    orchestrator.submit_job(job)
    return ApiResult.ok(f"Job created for topic: {job.topic}", {"job_id": str(job.id)})


@router.get("/jobs/active", response_model=ApiResult)
async def active_jobs(progress: ProgressTracker) -> ApiResult:
    jobs = progress.all()
    return ApiResult.ok(f"{len(jobs)} active jobs", [p.to_dict() for p in jobs])


@router.get("/jobs/recent", response_model=ApiResult)
async def recent_jobs(
    storage: StorageHandle, limit: int = Query(default=10, ge=1, le=100)
) -> ApiResult:
    jobs = await storage.jobs.get_recent(limit)
    return ApiResult.ok(f"{len(jobs)} jobs", [job.to_dict() for job in jobs])


@router.get("/jobs/status/{status}", response_model=ApiResult)
async def jobs_by_status(
    status: JobStatus,
    storage: StorageHandle,
    limit: int = Query(default=50, ge=1, le=200),
) -> ApiResult:
    jobs = await storage.jobs.get_by_status(status.value, limit)
    return ApiResult.ok(f"{len(jobs)} {status.value} jobs", [job.to_dict() for job in jobs])


@router.get("/jobs/{job_id}", response_model=ApiResult)
async def job_details(
    job_id: uuid.UUID, storage: StorageHandle, progress: ProgressTracker
) -> ApiResult:
    details = await load_job_details(storage, progress, job_id)
    if details is None:
        return ApiResult.fail(f"Job {job_id} not found")
    return ApiResult.ok("Job found", details)


@router.get("/jobs/{job_id}/progress", response_model=ApiResult)
async def job_progress(job_id: uuid.UUID, progress: ProgressTracker) -> ApiResult:
    current = progress.get(job_id)
    if current is None:
        return ApiResult.fail(f"No progress tracked for job {job_id}")
    return ApiResult.ok(f"{current.stage.value} ({current.percent}%)", current.to_dict())


@router.post("/jobs/{job_id}/retry", response_model=ApiResult)
async def retry_job(job_id: uuid.UUID, orchestrator: Orchestrator) -> ApiResult:
    job = await orchestrator.retry_job(job_id)
    orchestrator.submit_job(job)
    logger.info("Job retry submitted", failed_job_id=str(job_id), job_id=str(job.id))
    return ApiResult.ok(f"Retry started as job {job.id}", {"job_id": str(job.id)})


__all__ = ["router"]
