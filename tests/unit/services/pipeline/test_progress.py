"""Unit tests for JobProgressTracker."""

import threading
import uuid
from datetime import UTC, datetime, timedelta

import pytest

from trendcast.models import JobStatus
from trendcast.services.pipeline.progress import JobProgressTracker, estimate_completion

START = datetime(2024, 1, 1, 6, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(clock) -> JobProgressTracker:
    return JobProgressTracker(clock=clock)


class TestEstimateCompletion:
    """Tests for the linear ETA."""

    def test_no_estimate_at_zero(self):
        """Test 0% gives no estimate."""
        assert estimate_completion(START, START + timedelta(seconds=10), 0) is None

    def test_linear_extrapolation(self):
        """Test 30 seconds at 50% finishes after a minute."""
        eta = estimate_completion(START, START + timedelta(seconds=30), 50)
        assert eta == START + timedelta(seconds=60)


class TestJobProgressTracker:
    """Tests for JobProgressTracker."""

    def test_start(self, tracker):
        """Test tracking starts at CREATED with 0%."""
        job_id = uuid.uuid4()
        progress = tracker.start(job_id)

        assert progress.stage == JobStatus.CREATED
        assert progress.percent == 0
        assert progress.estimated_completion is None
        assert tracker.get(job_id) == progress

    def test_update_sets_eta(self, tracker, clock):
        """Test stage updates carry an ETA."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        clock.advance(30)

        progress = tracker.update(job_id, JobStatus.NARRATION, 30, "Generating narration")

        assert progress.percent == 30
        assert progress.estimated_completion == START + timedelta(seconds=100)
        assert progress.finished_at is None

    def test_percent_never_decreases(self, tracker):
        """Test a lower percent keeps the previous value."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        tracker.update(job_id, JobStatus.VIDEO_SYNTHESIS, 50, "Generating video")

        progress = tracker.update(job_id, JobStatus.VIDEO_SYNTHESIS, 20, "Polling")

        assert progress.percent == 50
        assert progress.message == "Polling"

    def test_percent_capped_at_100(self, tracker):
        """Test percent never exceeds 100."""
        job_id = uuid.uuid4()
        assert tracker.update(job_id, JobStatus.COMPLETED, 150, "done").percent == 100

    def test_terminal_update(self, tracker, clock):
        """Test terminal updates record the finish time and no ETA."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        clock.advance(5)

        progress = tracker.update(job_id, JobStatus.COMPLETED, 100, "Video job completed")

        assert progress.is_terminal
        assert progress.finished_at == clock.now
        assert progress.estimated_completion is None

    def test_mark_failed_keeps_percent(self, tracker):
        """Test failure keeps the last percent reached."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        tracker.update(job_id, JobStatus.NARRATION, 30, "Generating narration")

        progress = tracker.mark_failed(job_id, "Job failed: tts down")

        assert progress.stage == JobStatus.FAILED
        assert progress.percent == 30
        assert progress.message == "Job failed: tts down"

    def test_get_returns_copy(self, tracker):
        """Test callers cannot mutate tracked state."""
        job_id = uuid.uuid4()
        tracker.start(job_id)

        tracker.get(job_id).percent = 99

        assert tracker.get(job_id).percent == 0

    def test_get_unknown(self, tracker):
        """Test unknown jobs return None."""
        assert tracker.get(uuid.uuid4()) is None

    def test_all_sorted_by_start(self, tracker, clock):
        """Test all() lists entries oldest first."""
        first, second = uuid.uuid4(), uuid.uuid4()
        tracker.start(first)
        clock.advance(1)
        tracker.start(second)

        assert [p.job_id for p in tracker.all()] == [first, second]
        assert len(tracker) == 2

    def test_to_dict(self, tracker):
        """Test serialization uses plain values."""
        job_id = uuid.uuid4()
        data = tracker.start(job_id).to_dict()
        assert data["job_id"] == str(job_id)
        assert data["stage"] == "created"
        assert data["finished_at"] is None


class TestSweep:
    """Tests for sweep."""

    def test_finished_entries_evicted_after_cooldown(self, tracker, clock):
        """Test terminal entries stay visible for the cooldown only."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        tracker.update(job_id, JobStatus.COMPLETED, 100, "done")

        clock.advance(30)
        assert tracker.sweep(cooldown_seconds=60) == 0
        assert tracker.get(job_id) is not None

        clock.advance(31)
        assert tracker.sweep(cooldown_seconds=60) == 1
        assert tracker.get(job_id) is None

    def test_running_entries_kept(self, tracker, clock):
        """Test running jobs are never evicted by the cooldown."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        clock.advance(10_000)

        assert tracker.sweep(cooldown_seconds=60) == 0

    def test_stale_entries_evicted(self, tracker, clock):
        """Test abandoned running jobs are evicted after the stale age."""
        job_id = uuid.uuid4()
        tracker.start(job_id)
        clock.advance(3600)

        assert tracker.sweep(cooldown_seconds=60, stale_seconds=3600) == 1


class TestConcurrency:
    """Tests for concurrent updates."""

    def test_parallel_updates(self):
        """Test updates from many threads keep one entry per job."""
        tracker = JobProgressTracker()
        job_ids = [uuid.uuid4() for _ in range(20)]

        def work(job_id):
            tracker.start(job_id)
            for percent in (15, 30, 50, 70, 85):
                tracker.update(job_id, JobStatus.NARRATION, percent, "working")

        threads = [threading.Thread(target=work, args=(job_id,)) for job_id in job_ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(tracker) == 20
        assert all(p.percent == 85 for p in tracker.all())
