"""Unit tests for TrendDiscoveryService."""

import asyncio
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from trendcast.config.aggregation import AggregationConfig
from trendcast.core.exceptions import PersistenceError, SourceUnavailableError
from trendcast.models import TrendRunStatus
from trendcast.services.alerts import AlertKind
from trendcast.services.trends.base import TrendObservation, TrendSource, TrendSourceAdapter
from trendcast.services.trends.discovery import FALLBACK_SOURCE, TrendDiscoveryService
from trendcast.services.trends.fallback import FALLBACK_TOPICS
from trendcast.services.trends.selector import TopicSelector


class StubSource(TrendSourceAdapter):
    """Trend source returning canned observations or raising."""

    def __init__(
        self,
        source: TrendSource,
        observations: list[TrendObservation] | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
        delay: float = 0.0,
    ) -> None:
        self.source = source
        self.observations = observations or []
        self.error = error
        self.gate = gate
        self.delay = delay
        self.calls = 0

    async def fetch_observations(self, region, window_days=None):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.observations


def youtube_observations() -> list[TrendObservation]:
    return [
        TrendObservation(
            source=TrendSource.YOUTUBE,
            raw_keyword="K-pop 신곡",
            score=120,
            predicted_views=1_200_000,
            volatility=0.4,
            competitiveness=1.0,
            category="entertainment",
        ),
        TrendObservation(
            source=TrendSource.YOUTUBE,
            raw_keyword="겨울 여행",
            score=30,
            predicted_views=300_000,
            volatility=0.2,
            competitiveness=0.3,
            category="lifestyle",
        ),
    ]


def make_service(storage, alert_sink, adapters, **kwargs) -> TrendDiscoveryService:
    return TrendDiscoveryService(
        storage, adapters, alert_sink, rng=random.Random(42), **kwargs
    )


class TestDiscoveryRun:
    """Tests for trigger_discovery_run."""

    @pytest.mark.asyncio
    async def test_one_source_with_data_completes(self, storage, alert_sink):
        """Test a run completes when one of three sources returns data."""
        adapters = [
            StubSource(TrendSource.NAVER, error=SourceUnavailableError("no key", "naver")),
            StubSource(TrendSource.YOUTUBE, youtube_observations()),
            StubSource(TrendSource.GOOGLE, []),
        ]
        service = make_service(storage, alert_sink, adapters)

        result = await service.trigger_discovery_run("kr")

        assert result.success
        assert result.region == "KR"
        assert result.used_fallback is False
        assert result.sources_used == ["youtube"]
        assert set(result.source_errors) == {"naver"}
        assert result.total_observations == 2
        assert result.selected.keyword == "K-pop 신곡"
        assert result.analytics.total_topics == 2
        alert_sink.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_run_and_topics_persisted(self, storage, alert_sink):
        """Test the run is finalized and ranked topics are stored."""
        service = make_service(
            storage, alert_sink, [StubSource(TrendSource.YOUTUBE, youtube_observations())]
        )

        result = await service.trigger_discovery_run()

        run = await storage.trend_runs.get_by_id(result.run_id)
        assert run.status == TrendRunStatus.COMPLETED
        assert run.selected_topic == "K-pop 신곡"
        assert run.topics_found == 2
        assert run.sources_used == ["youtube"]

        topics = await service.get_run_topics(result.run_id)
        assert [t.rank_position for t in topics] == [1, 2]
        assert topics[0].keyword == "K-pop 신곡"
        assert topics[0].sources == ["youtube"]

        recent = await service.get_recent_runs(5)
        assert [r.id for r in recent] == [result.run_id]

    @pytest.mark.asyncio
    async def test_all_sources_empty_uses_fallback(self, storage, alert_sink):
        """Test the fallback list is used when no source returns anything."""
        adapters = [
            StubSource(TrendSource.NAVER, []),
            StubSource(TrendSource.YOUTUBE, []),
            StubSource(TrendSource.GOOGLE, []),
        ]
        service = make_service(storage, alert_sink, adapters)

        result = await service.trigger_discovery_run()

        assert result.success
        assert result.used_fallback is True
        assert result.sources_used == [FALLBACK_SOURCE]
        assert result.total_observations == len(FALLBACK_TOPICS)
        assert result.selected.keyword in {t.keyword for t in FALLBACK_TOPICS}

    @pytest.mark.asyncio
    async def test_all_sources_failing_uses_fallback(self, storage, alert_sink):
        """Test failing sources are recorded and the run still completes."""
        adapters = [
            StubSource(TrendSource.NAVER, error=SourceUnavailableError("down", "naver")),
            StubSource(TrendSource.YOUTUBE, error=RuntimeError("bad payload")),
            StubSource(TrendSource.GOOGLE, error=SourceUnavailableError("429", "google")),
        ]
        service = make_service(storage, alert_sink, adapters)

        result = await service.trigger_discovery_run()

        assert result.success
        assert result.used_fallback is True
        assert set(result.source_errors) == {"naver", "youtube", "google"}
        assert "RuntimeError" in result.source_errors["youtube"]

    @pytest.mark.asyncio
    async def test_slow_source_times_out(self, storage, alert_sink):
        """Test a source exceeding its timeout is skipped."""
        adapters = [
            StubSource(TrendSource.NAVER, youtube_observations(), delay=5),
            StubSource(TrendSource.YOUTUBE, youtube_observations()),
        ]
        service = make_service(
            storage,
            alert_sink,
            adapters,
            config=AggregationConfig(source_timeout_seconds=0.05),
        )

        result = await service.trigger_discovery_run()

        assert result.success
        assert result.sources_used == ["youtube"]
        assert "timed out" in result.source_errors["naver"]

    @pytest.mark.asyncio
    async def test_concurrent_run_skipped(self, storage, alert_sink):
        """Test a second run while one is in progress is skipped."""
        gate = asyncio.Event()
        source = StubSource(TrendSource.YOUTUBE, youtube_observations(), gate=gate)
        service = make_service(storage, alert_sink, [source])

        first = asyncio.create_task(service.trigger_discovery_run())
        while source.calls == 0:
            await asyncio.sleep(0)
        assert service.is_running

        second = await service.trigger_discovery_run()
        gate.set()
        first_result = await first

        assert second.status == "skipped"
        assert second.run_id is None
        assert first_result.success
        assert source.calls == 1

    @pytest.mark.asyncio
    async def test_no_topic_fails_run_and_alerts(self, storage, alert_sink):
        """Test a run with no selectable topic is failed and alerted."""
        selector = MagicMock(spec=TopicSelector)
        selector.rank.return_value = []
        selector.select_final.return_value = None
        service = make_service(
            storage,
            alert_sink,
            [StubSource(TrendSource.YOUTUBE, youtube_observations())],
            selector=selector,
        )

        result = await service.trigger_discovery_run()

        assert result.status == "failed"
        assert result.selected is None
        run = await storage.trend_runs.get_by_id(result.run_id)
        assert run.status == TrendRunStatus.FAILED
        assert run.error_message == result.error_message

        alert_sink.send.assert_awaited_once()
        alert = alert_sink.send.call_args.args[0]
        assert alert.kind == AlertKind.RUN_FAILED
        assert alert.context["run_id"] == str(result.run_id)

    @pytest.mark.asyncio
    async def test_persistence_failure_does_not_fail_run(self, alert_sink):
        """Test storage outages are logged and the run still completes."""
        storage = MagicMock()
        for repo in (storage.trend_runs, storage.topics):
            repo.create = AsyncMock(side_effect=PersistenceError("db down", operation="create"))
            repo.create_many = AsyncMock(side_effect=PersistenceError("db down"))
            repo.update = AsyncMock(side_effect=PersistenceError("db down", operation="update"))
        service = make_service(
            storage, alert_sink, [StubSource(TrendSource.YOUTUBE, youtube_observations())]
        )

        result = await service.trigger_discovery_run()

        assert result.success
        assert storage.trend_runs.create.await_count == 2


class TestManualTopic:
    """Tests for manual topics."""

    def test_manual_topic_scored(self, storage, alert_sink):
        """Test a manual topic carries a selection score."""
        service = make_service(storage, alert_sink, [])

        topic = service.manual_topic("AI 혁신", "technology")

        assert topic.keyword == "AI 혁신"
        assert topic.region == "KR"
        assert topic.final_score == pytest.approx(service.selector.final_score(topic))

    def test_adapters_sorted_by_priority(self, storage, alert_sink):
        """Test adapters are held in source priority order."""
        service = make_service(
            storage,
            alert_sink,
            [StubSource(TrendSource.GOOGLE), StubSource(TrendSource.NAVER)],
        )
        assert [a.source for a in service.adapters] == [TrendSource.NAVER, TrendSource.GOOGLE]
