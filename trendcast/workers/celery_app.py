"""Celery application configuration.

This module configures the Celery application for TrendCast background tasks.
Uses Redis as both broker and result backend.
"""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging

from trendcast.core.config import get_config
from trendcast.core.logging import setup_logging

_config = get_config()

# Create Celery app
celery_app = Celery(
    "trendcast",
    broker=str(_config.celery_broker_url),
    backend=str(_config.celery_result_backend),
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=1800,  # 30 minutes hard limit (video polling alone may take 10)
    task_soft_time_limit=1740,
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    # Result settings
    result_expires=86400,  # 24 hours
    result_extended=True,
    # Task routes
    task_routes={
        "trendcast.workers.tasks.run_discovery": {"queue": "discovery"},
        "trendcast.workers.tasks.run_video_job": {"queue": "production"},
    },
    # Default queue
    task_default_queue="default",
    beat_schedule={
        # Daily at 06:00 KST
        "daily-trend-discovery": {
            "task": "trendcast.workers.tasks.run_discovery",
            "schedule": crontab(hour=21, minute=0),
        },
        "hourly-media-cleanup": {
            "task": "trendcast.workers.tasks.cleanup_media",
            "schedule": crontab(minute=15),
        },
    },
)


@celery_setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Route worker logs through structlog instead of Celery's own handlers."""
    setup_logging()


# Auto-discover tasks from these modules
celery_app.autodiscover_tasks(
    [
        "trendcast.workers",
    ],
    related_name="tasks",
)

__all__ = ["celery_app", "configure_worker_logging"]
