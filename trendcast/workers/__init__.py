"""Celery workers for TrendCast.

This package contains the Celery application and the background tasks.

Modules:
- celery_app: Celery application configuration and beat schedule
- tasks: Discovery, video job and media cleanup tasks
"""

from trendcast.workers.celery_app import celery_app

__all__ = [
    "celery_app",
]
