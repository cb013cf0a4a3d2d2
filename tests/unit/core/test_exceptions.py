"""Unit tests for custom exceptions."""

import pytest

from trendcast.core.exceptions import (
    InvalidJobStateError,
    NoTopicSelectedError,
    PersistenceError,
    PipelineError,
    RecordNotFoundError,
    SourceUnavailableError,
    StageCollaboratorError,
    StageTimeoutError,
    TrendCastError,
    TrendDiscoveryError,
)


@pytest.mark.unit
class TestTrendCastError:
    """Tests for the base exception."""

    def test_message_and_empty_context(self):
        """Test message is kept and context defaults to empty."""
        error = TrendCastError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}

    def test_with_context_chains(self):
        """Test with_context adds keys and returns self."""
        error = TrendCastError("boom", context={"job_id": "123"})
        returned = error.with_context(stage="narration")

        assert returned is error
        assert error.context == {"job_id": "123", "stage": "narration"}

    def test_to_dict(self):
        """Test serialization for structured logging."""
        error = TrendCastError("boom", context={"a": 1})
        assert error.to_dict() == {
            "error_type": "TrendCastError",
            "message": "boom",
            "context": {"a": 1},
        }


@pytest.mark.unit
class TestPersistenceErrors:
    """Tests for persistence exceptions."""

    def test_operation_in_context(self):
        """Test the failed operation is recorded."""
        error = PersistenceError("write failed", operation="update")
        assert error.operation == "update"
        assert error.context["operation"] == "update"

    def test_record_not_found(self):
        """Test RecordNotFoundError message and attributes."""
        error = RecordNotFoundError("VideoJob", "abc")

        assert isinstance(error, PersistenceError)
        assert str(error) == "VideoJob with id=abc not found"
        assert error.model == "VideoJob"
        assert error.record_id == "abc"
        assert error.context["operation"] == "get"


@pytest.mark.unit
class TestDiscoveryErrors:
    """Tests for trend discovery exceptions."""

    def test_source_unavailable(self):
        """Test source name is kept in attributes and context."""
        error = SourceUnavailableError("no key", source="youtube")

        assert isinstance(error, TrendDiscoveryError)
        assert error.source == "youtube"
        assert error.context["source"] == "youtube"

    def test_no_topic_selected_default_message(self):
        """Test default message and keyword context."""
        error = NoTopicSelectedError(region="KR")

        assert str(error) == "No topic could be selected"
        assert error.context == {"region": "KR"}


@pytest.mark.unit
class TestPipelineErrors:
    """Tests for pipeline exceptions."""

    def test_stage_collaborator_error(self):
        """Test stage is recorded."""
        error = StageCollaboratorError("tts down", stage="narration")

        assert isinstance(error, PipelineError)
        assert error.stage == "narration"
        assert error.context["stage"] == "narration"

    def test_stage_timeout_is_collaborator_error(self):
        """Test timeouts are handled like collaborator failures."""
        error = StageTimeoutError("video_synthesis", 600.0, context={"task_id": "t-1"})

        assert isinstance(error, StageCollaboratorError)
        assert str(error) == "video_synthesis did not finish within 600 seconds"
        assert error.timeout_seconds == 600.0
        assert error.context == {
            "task_id": "t-1",
            "timeout_seconds": 600.0,
            "stage": "video_synthesis",
        }

    def test_invalid_job_state(self):
        """Test message names the operation and status."""
        error = InvalidJobStateError("job-1", "completed", "retry")

        assert str(error) == "Cannot retry job job-1 in status 'completed'"
        assert error.status == "completed"
        assert error.context["operation"] == "retry"
