"""Error Handlers — map exceptions raised by routes to the Lucid error envelope.

Invariants:
    - LucidError → its own http_status and to_response() body
    - Provider errors carrying retry_after_ms also send a Retry-After header (seconds)
    - RequestValidationError → 400 VALIDATION_ERROR with one detail per failing field
    - Anything else → 500 INTERNAL_ERROR; the exception text never reaches the client

Design Decisions:
    - Client-side problems (4xx) log at WARNING, provider/database failures at ERROR
    - Handlers are plain module functions so tests can call them directly
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lucid.core.errors import ErrorCategory, ErrorSeverity, LucidError

logger = logging.getLogger(__name__)

# pydantic prefixes messages raised from field validators
_VALUE_ERROR_PREFIX = "Value error, "


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LucidError, handle_lucid_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_lucid_error(request: Request, exc: LucidError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "provider": exc.context.provider,
        },
    )
    headers = None
    if exc.context.retry_after_ms:
        headers = {"Retry-After": str(math.ceil(exc.context.retry_after_ms / 1000))}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_describe_field_error(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request body: {', '.join(d['field'] for d in details)}",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": details[0]["message"] if details else "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _describe_field_error(error: dict) -> dict:
    message = error["msg"]
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    return {
        "field": ".".join(str(loc) for loc in error["loc"]),
        "message": message,
        "type": error["type"],
    }
