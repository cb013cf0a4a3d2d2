"""ORM models for TrendCast."""

from trendcast.models.base import Base, TimestampMixin, UUIDMixin
from trendcast.models.trend_run import TrendRun, TrendRunStatus
from trendcast.models.trending_topic import TrendingTopic
from trendcast.models.video_job import JOB_STAGE_ORDER, JobStatus, VideoJob

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "TrendRun",
    "TrendRunStatus",
    "TrendingTopic",
    "JOB_STAGE_ORDER",
    "JobStatus",
    "VideoJob",
]
