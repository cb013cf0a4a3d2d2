"""FastAPI dependencies resolved from the DI container."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from trendcast.core.container import container
from trendcast.services.pipeline.orchestrator import JobOrchestrator
from trendcast.services.pipeline.progress import JobProgressTracker
from trendcast.services.trends.discovery import TrendDiscoveryService
from trendcast.storage import Storage


def get_orchestrator() -> JobOrchestrator:
    return container.orchestrator()


def get_orchestrator_factory() -> Callable[[], JobOrchestrator]:
    """Deferred orchestrator lookup for routes that only sometimes start jobs."""
    return container.orchestrator


def get_discovery_service() -> TrendDiscoveryService:
    return container.discovery_service()


def get_progress_tracker() -> JobProgressTracker:
    return container.progress_tracker()


def get_storage() -> Storage:
    return container.storage()


# Type aliases for cleaner route signatures
Orchestrator = Annotated[JobOrchestrator, Depends(get_orchestrator)]
OrchestratorFactory = Annotated[Callable[[], JobOrchestrator], Depends(get_orchestrator_factory)]
Discovery = Annotated[TrendDiscoveryService, Depends(get_discovery_service)]
ProgressTracker = Annotated[JobProgressTracker, Depends(get_progress_tracker)]
StorageHandle = Annotated[Storage, Depends(get_storage)]

__all__ = [
    "Discovery",
    "Orchestrator",
    "OrchestratorFactory",
    "ProgressTracker",
    "StorageHandle",
    "get_discovery_service",
    "get_orchestrator",
    "get_orchestrator_factory",
    "get_progress_tracker",
    "get_storage",
]
