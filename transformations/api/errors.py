"""Structured error responses."""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from ..errors import DecodeError, TransformationError
from ..middleware import get_correlation_id

log = structlog.get_logger()


async def transformation_error_handler(request: Request, exc: TransformationError):
    correlation_id = get_correlation_id()
    log_fn = log.warning if isinstance(exc, DecodeError) else log.error
    log_fn(
        "event.failed",
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error,
            "message": exc.message,
            "status_code": exc.status_code,
            "correlation_id": correlation_id,
            "path": str(request.url.path),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    correlation_id = get_correlation_id()
    log.error(
        "unhandled.exception",
        error=str(exc),
        error_type=exc.__class__.__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
            "correlation_id": correlation_id,
            "path": str(request.url.path),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TransformationError, transformation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
