"""In-memory job progress tracking.

Progress lives in a single lock-guarded map shared by every job running in
the process. It is lost on restart; the persisted VideoJob status remains
the source of truth.
"""

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Any

from trendcast.core.logging import get_logger
from trendcast.models.video_job import JobStatus

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class JobProgress:
    """Progress snapshot of one job.

    Attributes:
        job_id: Job id
        stage: Current status
        percent: Percent complete (never decreases)
        message: Human-readable status line
        started_at: When tracking started
        updated_at: Last update
        estimated_completion: Linear ETA, None at 0%
        finished_at: When the job reached a terminal status
    """

    job_id: uuid.UUID
    stage: JobStatus
    percent: int
    message: str
    started_at: datetime
    updated_at: datetime
    estimated_completion: datetime | None = None
    finished_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.stage.is_terminal

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": str(self.job_id),
            "stage": self.stage.value,
            "percent": self.percent,
            "message": self.message,
            "started_at": self.started_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "estimated_completion": (
                self.estimated_completion.isoformat() if self.estimated_completion else None
            ),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }


def estimate_completion(started_at: datetime, now: datetime, percent: int) -> datetime | None:
    """Extrapolate the finish time linearly from elapsed time and percent.

    Example:
        >>> start = datetime(2024, 1, 1, tzinfo=UTC)
        >>> estimate_completion(start, start + timedelta(seconds=30), 50)
        datetime.datetime(2024, 1, 1, 0, 1, tzinfo=datetime.timezone.utc)
    """
    if percent <= 0:
        return None
    elapsed = now - started_at
    return started_at + elapsed / percent * 100


class JobProgressTracker:
    """Thread-safe map of job id to progress.

    Percent is monotonic: an update with a lower percent keeps the
    previous value. Terminal entries stay visible until swept.

    Example:
        >>> tracker = JobProgressTracker()
        >>> tracker.start(job_id)
        >>> tracker.update(job_id, JobStatus.NARRATION, 30, "Generating narration")
        >>> tracker.get(job_id).percent
        30
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize tracker.

        Args:
            clock: Returns the current aware datetime (defaults to UTC now)
        """
        self._clock = clock or _utc_now
        self._entries: dict[uuid.UUID, JobProgress] = {}
        self._lock = threading.Lock()

    def start(self, job_id: uuid.UUID, message: str = "Job created") -> JobProgress:
        """Begin tracking a job at 0%."""
        now = self._clock()
        progress = JobProgress(
            job_id=job_id,
            stage=JobStatus.CREATED,
            percent=0,
            message=message,
            started_at=now,
            updated_at=now,
        )
        with self._lock:
            self._entries[job_id] = progress
            return replace(progress)

    def update(
        self, job_id: uuid.UUID, stage: JobStatus, percent: int, message: str
    ) -> JobProgress:
        """Record a stage change.

        Untracked jobs start tracking at this update.

        Args:
            job_id: Job id
            stage: New status
            percent: Target percent for the stage
            message: Status line

        Returns:
            Copy of the updated progress
        """
        now = self._clock()
        with self._lock:
            current = self._entries.get(job_id)
            started_at = current.started_at if current else now
            percent = max(min(percent, 100), current.percent if current else 0)
            progress = JobProgress(
                job_id=job_id,
                stage=stage,
                percent=percent,
                message=message,
                started_at=started_at,
                updated_at=now,
                estimated_completion=(
                    None if stage.is_terminal else estimate_completion(started_at, now, percent)
                ),
                finished_at=now if stage.is_terminal else None,
            )
            self._entries[job_id] = progress
        logger.debug(
            "Job progress updated",
            job_id=str(job_id),
            stage=stage.value,
            percent=percent,
            progress_message=message,
        )
        return replace(progress)

    def mark_failed(self, job_id: uuid.UUID, message: str) -> JobProgress:
        """Move a job to FAILED, keeping its last percent."""
        return self.update(job_id, JobStatus.FAILED, 0, message)

    def get(self, job_id: uuid.UUID) -> JobProgress | None:
        with self._lock:
            progress = self._entries.get(job_id)
            return replace(progress) if progress else None

    def all(self) -> list[JobProgress]:
        """Every tracked job (running or recently finished), oldest first."""
        with self._lock:
            entries = [replace(p) for p in self._entries.values()]
        return sorted(entries, key=lambda p: p.started_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def sweep(self, cooldown_seconds: float, stale_seconds: float | None = None) -> int:
        """Evict finished entries past the cooldown.

        Args:
            cooldown_seconds: How long a terminal entry stays visible
            stale_seconds: Also evict unfinished entries not updated for this
                long (abandoned jobs)

        Returns:
            Number of evicted entries
        """
        now = self._clock()
        cooldown = timedelta(seconds=cooldown_seconds)
        stale = timedelta(seconds=stale_seconds) if stale_seconds is not None else None

        with self._lock:
            expired = [
                job_id
                for job_id, progress in self._entries.items()
                if (progress.finished_at and now - progress.finished_at >= cooldown)
                or (
                    stale is not None
                    and not progress.is_terminal
                    and now - progress.updated_at >= stale
                )
            ]
            for job_id in expired:
                del self._entries[job_id]

        if expired:
            logger.debug("Progress entries evicted", count=len(expired))
        return len(expired)


__all__ = [
    "JobProgress",
    "JobProgressTracker",
    "estimate_completion",
]
