"""TrendRun ORM model.

This module defines the TrendRun model, the append-only audit record of
one discovery run across all trend sources.
"""

import enum

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trendcast.models.base import Base, TimestampMixin, UUIDMixin


class TrendRunStatus(str, enum.Enum):
    """Discovery run lifecycle status."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TrendRun(Base, UUIDMixin, TimestampMixin):
    """One discovery run.

    Created with status RUNNING when the run starts and finalized exactly
    once as COMPLETED or FAILED.

    Attributes:
        status: Current run status
        region: Region code the run targeted
        sources_used: Sources that contributed observations ("fallback" when
            the static topic list was used)
        total_observations: Number of observations fetched across sources
        topics_found: Number of ranked topics persisted for the run
        selected_topic: Keyword of the selected topic
        selected_topic_score: Final selection score of the selected topic
        execution_time_ms: Wall-clock duration of the run
        error_message: Failure reason when status is FAILED
    """

    __tablename__ = "trend_runs"

    status: Mapped[TrendRunStatus] = mapped_column(
        String(20), nullable=False, default=TrendRunStatus.RUNNING, index=True
    )
    region: Mapped[str] = mapped_column(String(10), nullable=False, default="KR")
    sources_used: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    total_observations: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    topics_found: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    selected_topic: Mapped[str | None] = mapped_column(String(255))
    selected_topic_score: Mapped[float | None] = mapped_column(Float)
    execution_time_ms: Mapped[int | None] = mapped_column(Integer)
    error_message: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<TrendRun(id={self.id}, status={self.status}, selected={self.selected_topic!r})>"


__all__ = [
    "TrendRun",
    "TrendRunStatus",
]
