"""
FastAPI application for the dashdeck dashboard.

Every error leaves the API in one shape:

    {"error": str, "details": str (optional), "error_code": str, "request_id": str}

Client errors are logged at INFO, validation failures at WARNING and
server errors at ERROR.
"""

import logging
import traceback
from enum import Enum
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashdeck import __version__
from dashdeck.core.config import load_config
from dashdeck.core.dashboard.api.routes import data, notes, tasks

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable error categories."""

    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    FILE_ERROR = "FILE_ERROR"


def create_app(cors_origins: list[str] | None = None) -> FastAPI:
    """
    Build the dashboard API application.

    Args:
        cors_origins: Browser origins allowed to call the API
            (defaults to the configured server.cors_origins)
    """
    if cors_origins is None:
        cors_origins = load_config().server.cors_origins

    api = FastAPI(
        title="dashdeck API",
        description="Tasks, projects, facts and daily notes from a dashdeck workspace",
        version=__version__,
    )

    api.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module, tag in ((data, "data"), (tasks, "tasks"), (notes, "notes")):
        api.include_router(module.router, prefix="/api", tags=[tag])

    api.add_api_route("/", root, methods=["GET"])
    api.add_api_route("/health", health, methods=["GET"])

    api.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    api.add_exception_handler(
        RequestValidationError, validation_exception_handler  # type: ignore[arg-type]
    )
    api.add_exception_handler(Exception, general_exception_handler)

    return api


async def root() -> dict[str, str]:
    return {"status": "ok", "message": "dashdeck API"}


async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}


def _error_response(
    request: Request,
    status_code: int,
    error_code: ErrorCode,
    error: str,
    details: str | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "error": error,
        "error_code": error_code,
        "request_id": str(id(request)),
    }
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _classify(status_code: int, cause: BaseException | None = None) -> ErrorCode:
    if status_code == 404:
        return ErrorCode.NOT_FOUND
    if status_code < 500:
        return ErrorCode.INVALID_REQUEST
    if isinstance(cause, OSError):
        return ErrorCode.FILE_ERROR
    return ErrorCode.INTERNAL_ERROR


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Render an HTTPException.

    The detail may be a plain message or an ``{"error", "details"}`` dict.
    A 5xx raised from an OSError is tagged FILE_ERROR.
    """
    if isinstance(exc.detail, dict):
        error = str(exc.detail.get("error", "Request failed"))
        details = exc.detail.get("details")
    else:
        error, details = str(exc.detail), None

    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "HTTP %d on %s %s: %s%s",
        exc.status_code,
        request.method,
        request.url.path,
        error,
        f" ({details})" if details else "",
        extra={"request_id": id(request)},
    )

    return _error_response(
        request, exc.status_code, _classify(exc.status_code, exc.__cause__), error, details
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a request validation failure, naming the first bad field."""
    errors = exc.errors()
    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors,
        extra={"request_id": id(request)},
    )

    first = errors[0] if errors else {}
    location = " -> ".join(str(part) for part in first.get("loc", []))
    message = first.get("msg", "Invalid input")

    return _error_response(
        request,
        422,
        ErrorCode.VALIDATION_ERROR,
        "Request validation failed",
        f"{location}: {message}" if location else message,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log with traceback and answer 500."""
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        exc,
        traceback.format_exc(),
        extra={"request_id": id(request)},
    )

    return _error_response(
        request, 500, _classify(500, exc), "An internal server error occurred", str(exc)
    )


app = create_app()
