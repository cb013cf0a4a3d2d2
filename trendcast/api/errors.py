"""Conversion of exceptions into ApiResult responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from trendcast.api.schemas import ApiResult
from trendcast.core.exceptions import (
    CollaboratorsNotConfiguredError,
    InvalidJobStateError,
    NoTopicSelectedError,
    RecordNotFoundError,
    TrendCastError,
)
from trendcast.core.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[TrendCastError], int] = {
    RecordNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidJobStateError: status.HTTP_409_CONFLICT,
    NoTopicSelectedError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CollaboratorsNotConfiguredError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(error: TrendCastError) -> int:
    for error_type, code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def trendcast_error_handler(request: Request, exc: TrendCastError) -> JSONResponse:
    logger.warning("Request failed", path=request.url.path, **exc.to_dict())
    return JSONResponse(
        status_code=status_code_for(exc),
        content=ApiResult.fail(str(exc)).model_dump(),
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Invalid request", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ApiResult.fail(str(exc)).model_dump(),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ApiResult.fail("Internal server error").model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so no raw exception reaches API callers."""
    app.add_exception_handler(TrendCastError, trendcast_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


__all__ = [
    "register_exception_handlers",
    "status_code_for",
]
