"""Celery tasks for discovery runs, video jobs and media cleanup.

Each task runs its coroutine with asyncio.run() inside a fresh singleton
scope, so engines and HTTP clients never outlive the event loop that
created them.

Tasks:
- run_discovery: Discover trends and optionally start a job for the topic
- run_video_job: Execute a persisted CREATED job
- cleanup_media: Delete generated media past its TTL
"""

import asyncio
import uuid
from typing import Any

from celery import shared_task
from celery.utils.log import get_task_logger

from trendcast.core.container import container
from trendcast.core.exceptions import PersistenceError, RecordNotFoundError
from trendcast.services.pipeline.housekeeping import cleanup_media as delete_old_media

logger = get_task_logger(__name__)


async def _close_clients() -> None:
    await container.http_client().close()
    await container.storage().close()


async def _run_discovery_async(region: str | None, create_job: bool | None) -> dict[str, Any]:
    discovery = container.discovery_service()
    try:
        result = await discovery.trigger_discovery_run(region)
        data = result.to_dict()

        if create_job is None:
            create_job = container.config().enable_auto_job_creation
        if create_job and result.success and result.selected is not None:
            orchestrator = container.orchestrator()
            job = await orchestrator.create_job(topic=result.selected, trend_run_id=result.run_id)
            job_result = await orchestrator.run_job(job)
            data["job"] = job_result.to_dict()
        return data
    finally:
        await _close_clients()


async def _run_video_job_async(job_id: str) -> dict[str, Any]:
    orchestrator = container.orchestrator()
    try:
        job = await container.storage().jobs.get_by_id(uuid.UUID(job_id))
        if job is None:
            raise RecordNotFoundError("VideoJob", job_id)
        result = await orchestrator.run_job(job)
        return result.to_dict()
    finally:
        await _close_clients()


# =============================================================================
# Celery Tasks
# =============================================================================


@shared_task(
    bind=True,
    name="trendcast.workers.tasks.run_discovery",
    max_retries=3,
    default_retry_delay=300,
)
def run_discovery(
    self, region: str | None = None, create_job: bool | None = None
) -> dict[str, Any]:
    """Run trend discovery.

    Args:
        region: Region code (defaults to configuration)
        create_job: Start a video job for the selected topic (defaults to
            the auto job creation flag)

    Returns:
        DiscoveryResult as dict, with the job result under "job" when a
        job was run
    """
    logger.info("Starting trend discovery")

    try:
        with container.reset_singletons():
            result = asyncio.run(_run_discovery_async(region, create_job))
        logger.info(f"Trend discovery finished with status {result['status']}")
        return result

    except PersistenceError as exc:
        logger.error(f"Trend discovery failed: {exc}", exc_info=True)
        raise self.retry(exc=exc) from exc


@shared_task(
    bind=True,
    name="trendcast.workers.tasks.run_video_job",
    max_retries=2,
    default_retry_delay=60,
)
def run_video_job(self, job_id: str) -> dict[str, Any]:
    """Execute a CREATED video job.

    Stage failures do not raise: they finalize the job as failed and are
    returned in the result. Only storage errors are retried.

    Args:
        job_id: VideoJob UUID

    Returns:
        JobResult as dict
    """
    logger.info(f"Running video job {job_id}")

    try:
        with container.reset_singletons():
            result = asyncio.run(_run_video_job_async(job_id))
        logger.info(f"Video job {job_id} finished with status {result['status']}")
        return result

    except RecordNotFoundError:
        logger.error(f"Video job {job_id} not found")
        raise
    except PersistenceError as exc:
        logger.error(f"Video job {job_id} could not be loaded: {exc}", exc_info=True)
        raise self.retry(exc=exc) from exc


@shared_task(
    name="trendcast.workers.tasks.cleanup_media",
)
def cleanup_media() -> dict[str, int]:
    """Delete narration and video files older than their TTL.

    Returns:
        Deleted file counts per media type
    """
    config = container.config()
    housekeeping = container.configs.housekeeping_config()
    deleted = {
        "audio": delete_old_media(
            config.audio_output_dir, housekeeping.audio_extensions, housekeeping.audio_ttl_hours
        ),
        "video": delete_old_media(
            config.video_output_dir, housekeeping.video_extensions, housekeeping.video_ttl_hours
        ),
    }
    logger.info(f"Media cleanup deleted {deleted['audio']} audio, {deleted['video']} video files")
    return deleted


__all__ = [
    "cleanup_media",
    "run_discovery",
    "run_video_job",
]
