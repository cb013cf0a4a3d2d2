"""Trend discovery runs.

A discovery run fans out to every trend source in parallel, merges the
observations into clusters, scores and ranks them, selects one topic and
records the run with its ranked topics.
"""

import asyncio
import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from trendcast.config.aggregation import AggregationConfig
from trendcast.core.exceptions import NoTopicSelectedError, PersistenceError, SourceUnavailableError
from trendcast.core.logging import get_logger
from trendcast.core.state_machine import StateMachine, create_trend_run_state_machine
from trendcast.models import TrendingTopic, TrendRun, TrendRunStatus
from trendcast.services.alerts import Alert, AlertKind, AlertSink
from trendcast.services.trends.aggregator import ScoreAggregator
from trendcast.services.trends.analytics import TrendAnalytics, analyze_clusters
from trendcast.services.trends.base import SOURCE_PRIORITY, TrendObservation, TrendSourceAdapter
from trendcast.services.trends.cluster import AggregatedTrend
from trendcast.services.trends.fallback import fallback_observations
from trendcast.services.trends.fallback import manual_topic as build_manual_topic
from trendcast.services.trends.resolver import EntityResolver
from trendcast.services.trends.selector import TopicSelector
from trendcast.storage import Storage

logger = get_logger(__name__)

FALLBACK_SOURCE = "fallback"


@dataclass
class DiscoveryResult:
    """Outcome of one discovery run.

    Attributes:
        status: "completed", "failed" or "skipped" (another run in progress)
        region: Region the run targeted
        run_id: Id of the persisted TrendRun
        selected: Selected topic, None unless completed
        topics: Ranked topics
        sources_used: Sources that returned observations
        source_errors: Error message per failed source
        total_observations: Observations fetched (or fallback entries used)
        used_fallback: The static fallback list was used
        analytics: Run analytics
        execution_time_ms: Wall-clock duration
        error_message: Failure reason
        started_at: Start time
        completed_at: End time
    """

    status: str
    region: str
    run_id: uuid.UUID | None = None
    selected: AggregatedTrend | None = None
    topics: list[AggregatedTrend] = field(default_factory=list)
    sources_used: list[str] = field(default_factory=list)
    source_errors: dict[str, str] = field(default_factory=dict)
    total_observations: int = 0
    used_fallback: bool = False
    analytics: TrendAnalytics | None = None
    execution_time_ms: int = 0
    error_message: str | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @property
    def success(self) -> bool:
        return self.status == TrendRunStatus.COMPLETED.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "region": self.region,
            "run_id": str(self.run_id) if self.run_id else None,
            "selected_topic": self.selected.to_summary() if self.selected else None,
            "topics": [topic.to_summary() for topic in self.topics],
            "sources_used": self.sources_used,
            "source_errors": self.source_errors,
            "total_observations": self.total_observations,
            "used_fallback": self.used_fallback,
            "analytics": self.analytics.to_dict() if self.analytics else None,
            "execution_time_ms": self.execution_time_ms,
            "error_message": self.error_message,
        }


class TrendDiscoveryService:
    """Runs trend discovery end to end.

    Sources are fetched concurrently, each bounded by a timeout. A source
    that fails or times out is skipped; the run only falls back to the
    static topic list when no source returned anything. Only one run
    executes at a time per service instance.

    Example:
        >>> service = TrendDiscoveryService(storage, adapters, alert_sink)
        >>> result = await service.trigger_discovery_run("KR")
        >>> result.selected.keyword
        'AI 혁신'
    """

    def __init__(
        self,
        storage: Storage,
        adapters: list[TrendSourceAdapter],
        alert_sink: AlertSink,
        config: AggregationConfig | None = None,
        resolver: EntityResolver | None = None,
        aggregator: ScoreAggregator | None = None,
        selector: TopicSelector | None = None,
        default_region: str = "KR",
        rng: random.Random | None = None,
    ) -> None:
        """Initialize discovery service.

        Args:
            storage: Persistence handle
            adapters: Trend sources (fetched in parallel)
            alert_sink: Destination for run failure alerts
            config: Aggregation configuration
            resolver: Entity resolver (built from config if omitted)
            aggregator: Score aggregator (built from config if omitted)
            selector: Topic selector (built from config if omitted)
            default_region: Region used when no region is given
            rng: Random generator for fallback jitter
        """
        self.config = config or AggregationConfig()
        self.storage = storage
        self.adapters = sorted(adapters, key=lambda a: SOURCE_PRIORITY.index(a.source))
        self.alert_sink = alert_sink
        self.resolver = resolver or EntityResolver(self.config.similarity_threshold)
        self.aggregator = aggregator or ScoreAggregator(self.config)
        self.selector = selector or TopicSelector(self.config.selection, self.config.ranking_limit)
        self.default_region = default_region
        self._rng = rng or random.Random()
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        """Check whether a run is in progress."""
        return self._lock.locked()

    async def trigger_discovery_run(self, region: str | None = None) -> DiscoveryResult:
        """Execute one discovery run.

        Never raises: failures are recorded on the run, alerted and
        returned as a failed result.

        Args:
            region: Region code (defaults to the service default)

        Returns:
            DiscoveryResult
        """
        region = (region or self.default_region).upper()
        if self._lock.locked():
            logger.warning("Discovery run already in progress, skipping", region=region)
            return DiscoveryResult(
                status="skipped",
                region=region,
                error_message="A discovery run is already in progress",
            )
        async with self._lock:
            return await self._run(region)

    async def _run(self, region: str) -> DiscoveryResult:
        started = time.perf_counter()
        result = DiscoveryResult(status=TrendRunStatus.RUNNING.value, region=region)
        run = TrendRun(id=uuid.uuid4(), status=TrendRunStatus.RUNNING, region=region)
        state = create_trend_run_state_machine()
        result.run_id = run.id

        logger.info("Discovery run started", run_id=str(run.id), region=region)
        await self._best_effort(self.storage.trend_runs.create(run), "create_trend_run")

        try:
            observations = await self._collect(region, result)
            if not observations:
                logger.warning("No source returned observations, using fallback topics")
                observations = fallback_observations(
                    region, jitter=self.config.fallback_jitter, rng=self._rng
                )
                result.used_fallback = True
                result.sources_used = [FALLBACK_SOURCE]
            result.total_observations = len(observations)

            clusters = self.resolver.resolve(observations)
            self.aggregator.score_all(clusters)
            ranked = self.selector.rank(clusters)
            selected = self.selector.select_final(ranked)
            if selected is None:
                raise NoTopicSelectedError(region=region)

            result.topics = ranked
            result.selected = selected
            result.analytics = analyze_clusters(clusters)
            result.status = TrendRunStatus.COMPLETED.value
        except NoTopicSelectedError as e:
            result.status = TrendRunStatus.FAILED.value
            result.error_message = str(e)
        except Exception as e:
            logger.exception("Discovery run crashed", run_id=str(run.id))
            result.status = TrendRunStatus.FAILED.value
            result.error_message = f"{type(e).__name__}: {e}"

        result.execution_time_ms = int((time.perf_counter() - started) * 1000)
        result.completed_at = datetime.now(UTC)

        if result.success:
            await self._persist_topics(run.id, result.topics)
        await self._finalize(run, state, result)

        if not result.success:
            await self.alert_sink.send(
                Alert(
                    kind=AlertKind.RUN_FAILED,
                    title="Trend discovery run failed",
                    message=result.error_message or "unknown error",
                    context={"run_id": str(run.id), "region": region},
                )
            )
        return result

    async def _collect(self, region: str, result: DiscoveryResult) -> list[TrendObservation]:
        """Fetch every source concurrently and merge their observations."""
        fetched = await asyncio.gather(
            *(self._fetch_source(adapter, region) for adapter in self.adapters)
        )

        observations: list[TrendObservation] = []
        for adapter, (source_observations, error) in zip(self.adapters, fetched, strict=True):
            if error is not None:
                result.source_errors[adapter.source.value] = error
            if source_observations:
                result.sources_used.append(adapter.source.value)
                observations.extend(source_observations)
        return observations

    async def _fetch_source(
        self, adapter: TrendSourceAdapter, region: str
    ) -> tuple[list[TrendObservation], str | None]:
        source = adapter.source.value
        try:
            observations = await asyncio.wait_for(
                adapter.fetch_observations(region),
                timeout=self.config.source_timeout_seconds,
            )
        except SourceUnavailableError as e:
            logger.warning("Trend source unavailable", source=source, error=str(e))
            return [], str(e)
        except TimeoutError:
            logger.warning(
                "Trend source timed out",
                source=source,
                timeout_seconds=self.config.source_timeout_seconds,
            )
            return [], f"timed out after {self.config.source_timeout_seconds:g}s"
        except Exception as e:
            logger.exception("Trend source failed unexpectedly", source=source)
            return [], f"{type(e).__name__}: {e}"

        logger.info("Trend source fetched", source=source, observations=len(observations))
        return observations, None

    async def _persist_topics(self, run_id: uuid.UUID, topics: list[AggregatedTrend]) -> None:
        rows = [
            TrendingTopic(
                trend_run_id=run_id,
                keyword=topic.keyword,
                canonical_keyword=topic.canonical_keyword,
                score=topic.aggregated_score,
                predicted_views=topic.predicted_views,
                confidence=topic.confidence,
                cross_platform_validated=topic.cross_platform_validated,
                trend_velocity=topic.trend_velocity,
                volatility=topic.volatility,
                competitiveness=topic.competitiveness,
                final_score=topic.final_score,
                category=topic.category,
                region=topic.region,
                sources=[source.value for source in topic.sources],
                related_queries=topic.related_queries(),
                rank_position=position,
            )
            for position, topic in enumerate(topics, start=1)
        ]
        await self._best_effort(self.storage.topics.create_many(rows), "create_trending_topics")

    async def _finalize(
        self, run: TrendRun, state: StateMachine, result: DiscoveryResult
    ) -> None:
        status = TrendRunStatus(result.status)
        state.transition(status)
        fields = {
            "status": status,
            "sources_used": result.sources_used,
            "total_observations": result.total_observations,
            "topics_found": len(result.topics),
            "selected_topic": result.selected.keyword if result.selected else None,
            "selected_topic_score": result.selected.final_score if result.selected else None,
            "execution_time_ms": result.execution_time_ms,
            "error_message": result.error_message,
        }
        updated = await self._best_effort(
            self.storage.trend_runs.update(run.id, **fields), "finalize_trend_run"
        )
        if updated is None:
            # The initial insert was lost; write the finished record instead.
            for key, value in fields.items():
                setattr(run, key, value)
            await self._best_effort(self.storage.trend_runs.create(run), "create_trend_run")

        log = logger.info if result.success else logger.error
        log(
            "Discovery run finished",
            run_id=str(run.id),
            status=status.value,
            selected=fields["selected_topic"],
            topics=fields["topics_found"],
            sources=result.sources_used,
            execution_time_ms=result.execution_time_ms,
        )

    async def _best_effort(self, operation: Any, name: str) -> Any:
        try:
            return await operation
        except PersistenceError as e:
            logger.error("Persistence failed, continuing", operation=name, error=str(e))
            return None

    def manual_topic(
        self, keyword: str, category: str = "general", region: str | None = None
    ) -> AggregatedTrend:
        """Build a scored topic for a user-supplied keyword.

        Raises:
            ValueError: If the keyword is blank
        """
        region = (region or self.default_region).upper()
        topic = build_manual_topic(keyword, category, region, self._rng)
        topic.final_score = self.selector.final_score(topic)
        return topic

    async def get_recent_runs(self, limit: int = 20) -> list[TrendRun]:
        """Most recent discovery runs, newest first."""
        return await self.storage.trend_runs.get_recent(limit)

    async def get_run_topics(self, run_id: uuid.UUID) -> list[TrendingTopic]:
        """Ranked topics persisted for a run."""
        return await self.storage.topics.list_by(order_by="rank_position", trend_run_id=run_id)


__all__ = [
    "DiscoveryResult",
    "FALLBACK_SOURCE",
    "TrendDiscoveryService",
]
