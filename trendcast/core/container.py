"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the process (storage, HTTP client, services
  that hold shared state such as the progress map or the discovery lock)
- Factory: New instance every time (stateless helpers)

Stage collaborators (script writer, narrator, video synthesizer, thumbnail
renderer, publisher) come from the deployment. STAGE_COLLABORATORS names a
`module:attribute` that is a StageCollaborators instance or a factory for one:

    STAGE_COLLABORATORS=myproduction.collaborators:build

They are loaded on first use of the orchestrator, so discovery and the
read-only job queries work without them.

Usage:
    # In FastAPI
    from trendcast.core.container import container

    orchestrator = container.orchestrator()

    # In tests
    with container.storage.override(test_storage):
        ...
"""

from dependency_injector import containers, providers

from trendcast.core.config import Config, get_config
from trendcast.services.pipeline.collaborators import (
    StageCollaborators,
    load_stage_collaborators,
)
from trendcast.storage.storage import Storage


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (storage, external clients)."""

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # Storage
    # ============================================

    storage = providers.Singleton(
        Storage.from_config,
        config=global_config,
    )

    # ============================================
    # HTTP Client
    # ============================================

    http_client = providers.Singleton(
        "trendcast.infrastructure.http_client.HTTPClient",
    )


class ConfigContainer(containers.DeclarativeContainer):
    """Configuration models container.

    Provides typed Pydantic config models for services.
    Configs are Singleton by default - loaded once and reused.
    """

    # Source configs
    naver_config = providers.Singleton(
        "trendcast.config.sources.NaverTrendsConfig",
    )

    youtube_config = providers.Singleton(
        "trendcast.config.sources.YouTubeTrendsConfig",
    )

    google_trends_config = providers.Singleton(
        "trendcast.config.sources.GoogleTrendsConfig",
    )

    # ============================================
    # Aggregation and pipeline configs
    # ============================================

    aggregation_config = providers.Singleton(
        "trendcast.config.aggregation.AggregationConfig",
    )

    pipeline_config = providers.Singleton(
        "trendcast.config.pipeline.PipelineConfig",
    )

    housekeeping_config = providers.Singleton(
        "trendcast.config.pipeline.HousekeepingConfig",
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    They receive infrastructure dependencies via injection.
    """

    global_config = providers.Dependency(instance_of=Config)
    stage_collaborators = providers.Dependency(instance_of=StageCollaborators)
    infrastructure = providers.DependenciesContainer()
    configs = providers.DependenciesContainer()

    # ============================================
    # Trend Sources
    # ============================================

    naver_source = providers.Singleton(
        "trendcast.services.trends.sources.naver.NaverTrendsSource",
        config=configs.naver_config,
        http_client=infrastructure.http_client,
        client_id=global_config.provided.naver_client_id,
        client_secret=global_config.provided.naver_client_secret,
    )

    youtube_source = providers.Singleton(
        "trendcast.services.trends.sources.youtube.YouTubeTrendsSource",
        config=configs.youtube_config,
        http_client=infrastructure.http_client,
        api_key=global_config.provided.youtube_api_key,
    )

    google_trends_source = providers.Singleton(
        "trendcast.services.trends.sources.google_trends.GoogleTrendsSource",
        config=configs.google_trends_config,
    )

    trend_sources = providers.List(naver_source, youtube_source, google_trends_source)

    # ============================================
    # Aggregation
    # ============================================

    entity_resolver = providers.Factory(
        "trendcast.services.trends.resolver.EntityResolver",
        similarity_threshold=configs.aggregation_config.provided.similarity_threshold,
    )

    score_aggregator = providers.Factory(
        "trendcast.services.trends.aggregator.ScoreAggregator",
        config=configs.aggregation_config,
    )

    topic_selector = providers.Factory(
        "trendcast.services.trends.selector.TopicSelector",
        weights=configs.aggregation_config.provided.selection,
        ranking_limit=configs.aggregation_config.provided.ranking_limit,
    )

    # ============================================
    # Alerts
    # ============================================

    alert_sink = providers.Singleton(
        "trendcast.services.alerts.create_alert_sink",
        http_client=infrastructure.http_client,
        webhook_url=global_config.provided.alert_webhook_url,
    )

    # ============================================
    # Discovery
    # ============================================

    discovery_service = providers.Singleton(
        "trendcast.services.trends.discovery.TrendDiscoveryService",
        storage=infrastructure.storage,
        adapters=trend_sources,
        alert_sink=alert_sink,
        config=configs.aggregation_config,
        resolver=entity_resolver,
        aggregator=score_aggregator,
        selector=topic_selector,
        default_region=global_config.provided.trend_region,
    )

    # ============================================
    # Pipeline
    # ============================================

    progress_tracker = providers.Singleton(
        "trendcast.services.pipeline.progress.JobProgressTracker",
    )

    orchestrator = providers.Singleton(
        "trendcast.services.pipeline.orchestrator.JobOrchestrator",
        storage=infrastructure.storage,
        collaborators=stage_collaborators,
        discovery=discovery_service,
        progress=progress_tracker,
        alert_sink=alert_sink,
        config=configs.pipeline_config,
    )

    housekeeper = providers.Singleton(
        "trendcast.services.pipeline.housekeeping.Housekeeper",
        progress=progress_tracker,
        config=configs.housekeeping_config,
        audio_dir=global_config.provided.audio_output_dir,
        video_dir=global_config.provided.video_output_dir,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Global Config singleton (environment variables)
    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Loaded from the STAGE_COLLABORATORS import path
    stage_collaborators = providers.Singleton(
        load_stage_collaborators,
        import_path=config.provided.stage_collaborators,
    )

    # Sub-containers
    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    configs = providers.Container(
        ConfigContainer,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        stage_collaborators=stage_collaborators,
        infrastructure=infrastructure,
        configs=configs,
    )

    # ============================================
    # Convenience accessors (shortcuts)
    # ============================================

    storage = providers.Singleton(
        lambda storage: storage,
        storage=infrastructure.storage,
    )

    http_client = providers.Singleton(
        lambda client: client,
        client=infrastructure.http_client,
    )

    discovery_service = providers.Singleton(
        lambda svc: svc,
        svc=services.discovery_service,
    )

    progress_tracker = providers.Singleton(
        lambda svc: svc,
        svc=services.progress_tracker,
    )

    orchestrator = providers.Singleton(
        lambda svc: svc,
        svc=services.orchestrator,
    )

    housekeeper = providers.Singleton(
        lambda svc: svc,
        svc=services.housekeeper,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


def get_container() -> ApplicationContainer:
    """Get the global container (for FastAPI Depends)."""
    return container


__all__ = [
    "ApplicationContainer",
    "ConfigContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
    "get_container",
]
