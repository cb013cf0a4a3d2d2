"""Generic async repository over one ORM model.

Each operation opens its own short-lived session from the injected session
factory, so a repository can be shared by concurrent jobs without sharing
a session between them.
"""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from trendcast.core.exceptions import PersistenceError
from trendcast.core.logging import get_logger
from trendcast.core.types import SessionFactory
from trendcast.models.base import Base

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """CRUD access for a single model.

    All SQLAlchemy errors are wrapped in PersistenceError so callers can
    decide whether a failed write is fatal.

    Example:
        >>> jobs = Repository(VideoJob, session_factory)
        >>> job = await jobs.create(VideoJob(topic="AI 혁신"))
        >>> await jobs.update(job.id, status=JobStatus.SCRIPT_GENERATION)
    """

    def __init__(self, model: type[ModelT], session_factory: SessionFactory) -> None:
        """Initialize repository.

        Args:
            model: ORM model class
            session_factory: Factory producing AsyncSession instances
        """
        self.model = model
        self._session_factory = session_factory

    @property
    def model_name(self) -> str:
        """Name of the managed model."""
        return self.model.__name__

    async def create(self, instance: ModelT) -> ModelT:
        """Insert a record, or overwrite it if the id already exists.

        Merge semantics make a replayed create after a restart harmless.

        Args:
            instance: Model instance to persist

        Returns:
            Persisted instance with server defaults loaded

        Raises:
            PersistenceError: If the write fails
        """
        try:
            async with self._session_factory() as session:
                merged = await session.merge(instance)
                await session.commit()
                await session.refresh(merged)
                return merged
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to create {self.model_name}: {e}",
                operation="create",
                context={"model": self.model_name},
            ) from e

    async def create_many(self, instances: list[ModelT]) -> list[ModelT]:
        """Insert several records in one transaction.

        Raises:
            PersistenceError: If the write fails
        """
        if not instances:
            return []
        try:
            async with self._session_factory() as session:
                session.add_all(instances)
                await session.commit()
                return instances
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to create {len(instances)} {self.model_name} records: {e}",
                operation="create_many",
                context={"model": self.model_name},
            ) from e

    async def update(self, record_id: uuid.UUID, **fields: Any) -> ModelT | None:
        """Update fields of an existing record.

        Args:
            record_id: Primary key
            **fields: Column values to set

        Returns:
            Updated instance, or None if no such record exists

        Raises:
            PersistenceError: If the write fails
        """
        try:
            async with self._session_factory() as session:
                instance = await session.get(self.model, record_id)
                if instance is None:
                    logger.warning(
                        "Update skipped, record not found",
                        model=self.model_name,
                        record_id=str(record_id),
                    )
                    return None
                for key, value in fields.items():
                    setattr(instance, key, value)
                await session.commit()
                await session.refresh(instance)
                return instance
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to update {self.model_name}: {e}",
                operation="update",
                context={"model": self.model_name, "record_id": str(record_id)},
            ) from e

    async def get_by_id(self, record_id: uuid.UUID) -> ModelT | None:
        """Fetch a record by primary key.

        Raises:
            PersistenceError: If the read fails
        """
        try:
            async with self._session_factory() as session:
                return await session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to load {self.model_name}: {e}",
                operation="get",
                context={"model": self.model_name, "record_id": str(record_id)},
            ) from e

    async def get_by_status(self, status: str, limit: int = 50) -> list[ModelT]:
        """Fetch the most recent records with a given status.

        Args:
            status: Status value to match
            limit: Maximum records to return

        Returns:
            Records ordered newest first

        Raises:
            PersistenceError: If the read fails
        """
        if not hasattr(self.model, "status"):
            raise TypeError(f"{self.model_name} has no status column")
        return await self._select(
            select(self.model)
            .where(self.model.status == status)
            .order_by(self.model.created_at.desc())
            .limit(limit),
            operation="get_by_status",
        )

    async def get_recent(self, limit: int = 20) -> list[ModelT]:
        """Fetch the most recently created records.

        Raises:
            PersistenceError: If the read fails
        """
        return await self._select(
            select(self.model).order_by(self.model.created_at.desc()).limit(limit),
            operation="get_recent",
        )

    async def list_by(self, order_by: str | None = None, **filters: Any) -> list[ModelT]:
        """Fetch all records whose columns equal the given values.

        Args:
            order_by: Optional column name to sort ascending
            **filters: Column equality filters

        Raises:
            PersistenceError: If the read fails
        """
        stmt = select(self.model).filter_by(**filters)
        if order_by:
            stmt = stmt.order_by(getattr(self.model, order_by))
        return await self._select(stmt, operation="list_by")

    async def _select(self, stmt: Any, operation: str) -> list[ModelT]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to query {self.model_name}: {e}",
                operation=operation,
                context={"model": self.model_name},
            ) from e


__all__ = ["Repository"]
