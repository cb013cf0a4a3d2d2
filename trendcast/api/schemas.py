"""API request and response schemas.

Every endpoint answers with ApiResult so callers always receive a success
flag and a human-readable message, never a raw exception.
"""

from typing import Any

from pydantic import BaseModel, Field

from trendcast.config.pipeline import JobOptions


class ApiResult(BaseModel):
    success: bool
    message: str
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ApiResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ApiResult":
        return cls(success=False, message=message, data=data)


# -- Discovery --


class DiscoveryRequest(BaseModel):
    region: str | None = Field(default=None, min_length=2, max_length=2)
    create_job: bool = False


# -- Jobs --


class CreateJobRequest(BaseModel):
    """Job creation body.

    Set ``options.custom_topic`` to skip discovery.
    """

    options: JobOptions = Field(default_factory=JobOptions)
    run_immediately: bool = True


class ManualTopicJobRequest(BaseModel):
    keyword: str = Field(min_length=1, max_length=255)
    category: str = Field(default="general", max_length=50)
    options: JobOptions | None = None
    video_only: bool = False


__all__ = [
    "ApiResult",
    "CreateJobRequest",
    "DiscoveryRequest",
    "ManualTopicJobRequest",
]
