"""Custom exceptions for the TrendCast application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from TrendCastError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from typing import Any


class TrendCastError(Exception):
    """Base exception for all TrendCast errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise TrendCastError("Something went wrong", context={"job_id": "123"})
        ... except TrendCastError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize TrendCastError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "TrendCastError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Persistence Errors
# ============================================


class PersistenceError(TrendCastError):
    """Raised when a storage read or write fails.

    The orchestrator treats this as best-effort: it is logged and the
    pipeline continues.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize PersistenceError.

        Args:
            message: Error message
            operation: Storage operation that failed (e.g., "create", "update")
            context: Additional context
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)
        self.operation = operation


class RecordNotFoundError(PersistenceError):
    """Raised when a record is not found.

    Attributes:
        model: The model class that was queried
        record_id: The ID that was not found
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", operation="get", context=ctx)
        self.model = model
        self.record_id = record_id


# ============================================
# Trend Discovery Errors
# ============================================


class TrendDiscoveryError(TrendCastError):
    """Base exception for trend discovery errors."""


class SourceUnavailableError(TrendDiscoveryError):
    """Raised when a trend source cannot be reached or is not configured.

    Recoverable: the discovery run skips the source and continues with
    whatever the other sources returned.
    """

    def __init__(
        self,
        message: str,
        source: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SourceUnavailableError.

        Args:
            message: Error message
            source: Name of the unavailable source
            context: Additional context
        """
        ctx = context or {}
        ctx["source"] = source
        super().__init__(message, context=ctx)
        self.source = source


class NoTopicSelectedError(TrendDiscoveryError):
    """Raised when neither the sources nor the fallback list produced a topic."""

    def __init__(self, message: str = "No topic could be selected", **kwargs: Any) -> None:
        super().__init__(message, context=kwargs or None)


# ============================================
# Pipeline Errors
# ============================================


class PipelineError(TrendCastError):
    """Base exception for video job pipeline errors."""


class StageCollaboratorError(PipelineError):
    """Raised when a stage collaborator fails after exhausting its own retries.

    Attributes:
        stage: Pipeline stage that failed
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize StageCollaboratorError.

        Args:
            message: Error message
            stage: Pipeline stage name
            context: Additional context
        """
        ctx = context or {}
        if stage:
            ctx["stage"] = stage
        super().__init__(message, context=ctx)
        self.stage = stage


class StageTimeoutError(StageCollaboratorError):
    """Raised when a stage poll loop exceeds its time bound.

    Attributes:
        timeout_seconds: The bound that was exceeded
    """

    def __init__(
        self,
        stage: str,
        timeout_seconds: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["timeout_seconds"] = timeout_seconds
        super().__init__(
            f"{stage} did not finish within {timeout_seconds:g} seconds",
            stage=stage,
            context=ctx,
        )
        self.timeout_seconds = timeout_seconds


class CollaboratorsNotConfiguredError(PipelineError):
    """Raised when jobs are requested but no stage collaborators are configured.

    Attributes:
        import_path: The configured factory path, empty when unset
    """

    def __init__(self, message: str, import_path: str = "") -> None:
        super().__init__(message, context={"import_path": import_path})
        self.import_path = import_path


class InvalidJobStateError(PipelineError):
    """Raised when an operation is not allowed for the job's current status."""

    def __init__(self, job_id: str, status: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} job {job_id} in status '{status}'",
            context={"job_id": job_id, "status": status, "operation": operation},
        )
        self.job_id = job_id
        self.status = status


__all__ = [
    "TrendCastError",
    "PersistenceError",
    "RecordNotFoundError",
    "TrendDiscoveryError",
    "SourceUnavailableError",
    "NoTopicSelectedError",
    "PipelineError",
    "StageCollaboratorError",
    "StageTimeoutError",
    "CollaboratorsNotConfiguredError",
    "InvalidJobStateError",
]
