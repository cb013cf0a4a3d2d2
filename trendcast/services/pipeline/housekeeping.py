"""Periodic housekeeping.

One background task sweeps the progress map and deletes old generated
media. Media cleanup only looks at file age; it does not check whether a
VideoJob still references the file.
"""

import asyncio
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from trendcast.config.pipeline import HousekeepingConfig
from trendcast.core.logging import get_logger
from trendcast.services.pipeline.progress import JobProgressTracker

logger = get_logger(__name__)


@dataclass
class SweepReport:
    """Counts from one housekeeping sweep."""

    progress_evicted: int = 0
    audio_deleted: int = 0
    video_deleted: int = 0


def cleanup_media(
    directory: str | Path,
    extensions: Iterable[str],
    ttl_hours: float,
    now: float | None = None,
) -> int:
    """Delete files with matching suffixes older than the TTL.

    Args:
        directory: Directory scanned recursively (missing is fine)
        extensions: File suffixes to consider, e.g. ".mp3"
        ttl_hours: Maximum file age in hours
        now: Reference epoch time (defaults to now)

    Returns:
        Number of deleted files
    """
    root = Path(directory)
    if not root.is_dir():
        return 0

    suffixes = {ext.lower() for ext in extensions}
    cutoff = (now if now is not None else time.time()) - ttl_hours * 3600
    deleted = 0
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in suffixes:
            continue
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                deleted += 1
        except OSError as e:
            logger.warning("Failed to delete media file", path=str(path), error=str(e))

    if deleted:
        logger.info("Old media files deleted", directory=str(root), count=deleted)
    return deleted


class Housekeeper:
    """Runs progress eviction and media cleanup on a fixed interval.

    Example:
        >>> housekeeper = Housekeeper(tracker, config, "outputs/audio", "outputs/video")
        >>> housekeeper.start()
        >>> ...
        >>> await housekeeper.stop()
    """

    def __init__(
        self,
        progress: JobProgressTracker,
        config: HousekeepingConfig,
        audio_dir: str | Path,
        video_dir: str | Path,
    ) -> None:
        self.progress = progress
        self.config = config
        self.audio_dir = Path(audio_dir)
        self.video_dir = Path(video_dir)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> SweepReport:
        """Run one sweep synchronously."""
        report = SweepReport(
            progress_evicted=self.progress.sweep(
                self.config.progress_cooldown_seconds,
                self.config.progress_stale_seconds,
            ),
            audio_deleted=cleanup_media(
                self.audio_dir, self.config.audio_extensions, self.config.audio_ttl_hours
            ),
            video_deleted=cleanup_media(
                self.video_dir, self.config.video_extensions, self.config.video_ttl_hours
            ),
        )
        if report.audio_deleted or report.video_deleted or report.progress_evicted:
            logger.info(
                "Housekeeping sweep finished",
                progress_evicted=report.progress_evicted,
                audio_deleted=report.audio_deleted,
                video_deleted=report.video_deleted,
                tracked_jobs=len(self.progress),
            )
        return report

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop(), name="housekeeping")
        logger.info("Housekeeping started", interval_seconds=self.config.sweep_interval_seconds)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Housekeeping stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.sweep_interval_seconds)
            try:
                await asyncio.to_thread(self.sweep_once)
            except Exception:
                logger.exception("Housekeeping sweep failed")


__all__ = [
    "Housekeeper",
    "SweepReport",
    "cleanup_media",
]
