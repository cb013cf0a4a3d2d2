"""Storage handle bundling the repositories.

A Storage is constructed explicitly from an engine and passed to every
component that persists data. There is no module-level connection.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from trendcast.core.config import Config
from trendcast.core.database import (
    create_engine_from_config,
    create_session_factory,
    create_tables,
)
from trendcast.core.logging import get_logger
from trendcast.models import TrendingTopic, TrendRun, VideoJob
from trendcast.storage.repository import Repository

logger = get_logger(__name__)


class Storage:
    """Persistence handle for runs, topics and jobs.

    Attributes:
        trend_runs: Repository for TrendRun records
        topics: Repository for TrendingTopic records
        jobs: Repository for VideoJob records

    Example:
        >>> storage = Storage.from_config(get_config())
        >>> await storage.create_schema()
        >>> recent = await storage.jobs.get_recent(10)
        >>> await storage.close()
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize storage.

        Args:
            engine: Async engine the storage owns
        """
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self.trend_runs: Repository[TrendRun] = Repository(TrendRun, self.session_factory)
        self.topics: Repository[TrendingTopic] = Repository(TrendingTopic, self.session_factory)
        self.jobs: Repository[VideoJob] = Repository(VideoJob, self.session_factory)

    @classmethod
    def from_config(cls, config: Config) -> "Storage":
        """Build a storage handle from application configuration."""
        return cls(create_engine_from_config(config))

    async def create_schema(self) -> None:
        """Create tables for all models (development and tests)."""
        await create_tables(self.engine)

    async def close(self) -> None:
        """Dispose of the engine and its connections."""
        await self.engine.dispose()
        logger.info("Storage closed")


__all__ = ["Storage"]
