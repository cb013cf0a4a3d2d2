"""Generic State Machine for model status transitions.

This module provides a reusable state machine pattern for managing
status transitions of persisted records (VideoJob, TrendRun).

Example:
    # Define transitions
    RUN_TRANSITIONS: TransitionMap[TrendRunStatus] = {
        TrendRunStatus.RUNNING: [TrendRunStatus.COMPLETED, TrendRunStatus.FAILED],
        TrendRunStatus.COMPLETED: [],
        TrendRunStatus.FAILED: [],
    }

    # Create state machine
    sm = StateMachine(TrendRunStatus.RUNNING, RUN_TRANSITIONS)

    # Check and perform transitions
    if sm.can_transition(TrendRunStatus.COMPLETED):
        sm.transition(TrendRunStatus.COMPLETED)
"""

from enum import Enum
from typing import Generic, TypeVar

from trendcast.core.exceptions import TrendCastError

T = TypeVar("T", bound=str | Enum)

# Type alias for transition maps
TransitionMap = dict[T, list[T]]


class InvalidTransitionError(TrendCastError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Provides a type-safe way to manage status transitions with
    explicit allowed transitions defined upfront.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state

    Example:
        sm = create_job_state_machine()
        sm.transition_to(JobStatus.SCRIPT_GENERATION)  # OK
        sm.transition_to(JobStatus.CREATED)            # Raises InvalidTransitionError
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    @property
    def is_terminal(self) -> bool:
        """Check whether no further transitions are possible."""
        return not self.allowed_transitions

    def can_transition(self, target: T) -> bool:
        """Check if transition to target state is allowed.

        Args:
            target: Target state to check

        Returns:
            True if transition is allowed, False otherwise
        """
        return target in self.allowed_transitions

    def transition(self, target: T) -> None:
        """Perform transition to target state.

        Args:
            target: Target state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target

    def transition_to(self, target: T) -> T:
        """Perform transition and return new state.

        Args:
            target: Target state

        Returns:
            The new current state (same as target)

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        self.transition(target)
        return self._current

    def __str__(self) -> str:
        return f"StateMachine(current={self._current})"

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


# ============================================
# Predefined Transition Maps
# ============================================


def get_job_transitions() -> TransitionMap:
    """Get transition map for JobStatus.

    Stages only move forward. Any later stage is reachable so that
    skipped stages can be jumped over, and FAILED is reachable from
    every non-terminal state.
    """
    from trendcast.models.video_job import JOB_STAGE_ORDER, JobStatus

    transitions: TransitionMap = {}
    for index, status in enumerate(JOB_STAGE_ORDER):
        later = list(JOB_STAGE_ORDER[index + 1 :])
        transitions[status] = later + [JobStatus.FAILED] if later else []
    transitions[JobStatus.FAILED] = []
    return transitions


def get_trend_run_transitions() -> TransitionMap:
    """Get transition map for TrendRunStatus."""
    from trendcast.models.trend_run import TrendRunStatus

    return {
        TrendRunStatus.RUNNING: [TrendRunStatus.COMPLETED, TrendRunStatus.FAILED],
        TrendRunStatus.COMPLETED: [],  # Terminal state
        TrendRunStatus.FAILED: [],  # Terminal state
    }


# ============================================
# Factory Functions
# ============================================


def create_job_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for VideoJob status.

    Args:
        initial_status: Initial status (default: CREATED)

    Returns:
        Configured StateMachine for VideoJob
    """
    from trendcast.models.video_job import JobStatus

    initial = JobStatus(initial_status) if initial_status else JobStatus.CREATED
    return StateMachine(initial, get_job_transitions())


def create_trend_run_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for TrendRun status.

    Args:
        initial_status: Initial status (default: RUNNING)

    Returns:
        Configured StateMachine for TrendRun
    """
    from trendcast.models.trend_run import TrendRunStatus

    initial = TrendRunStatus(initial_status) if initial_status else TrendRunStatus.RUNNING
    return StateMachine(initial, get_trend_run_transitions())


__all__ = [
    "InvalidTransitionError",
    "StateMachine",
    "TransitionMap",
    "get_job_transitions",
    "get_trend_run_transitions",
    "create_job_state_machine",
    "create_trend_run_state_machine",
]
