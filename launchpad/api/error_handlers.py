"""Error Handlers — map LaunchPad failures to HTTP envelopes.

Invariants:
    - Every LaunchPadError renders through its own to_response(); status comes from
      http_status (ValidationError 400, ConcurrencyError 409, StoreError and
      CacheUnavailableError 503, CachePayloadError 500)
    - 503s from the cache or the store carry Retry-After: both are transient outages
    - Log level follows severity: 4xx and cache warnings at WARNING, the rest at ERROR
    - Unhandled exceptions never leak internals

Design Decisions:
    - Error context (item_id, order_id, cache_key, operation) is copied into the log
      record so JSONFormatter surfaces it as top-level keys
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from launchpad.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, LaunchPadError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 5
_TRANSIENT = {ErrorCategory.CACHE, ErrorCategory.DATABASE}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LaunchPadError, handle_launchpad_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_launchpad_error(request: Request, exc: LaunchPadError) -> JSONResponse:
    log = (
        logger.warning
        if exc.http_status < 500 or exc.severity == ErrorSeverity.WARNING
        else logger.error
    )
    log(
        f"{exc.code}: {exc.message}",
        extra=_log_extra(request, exc.code, exc.context),
    )
    headers = None
    if exc.http_status == status.HTTP_503_SERVICE_UNAVAILABLE and exc.category in _TRANSIENT:
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra=_log_extra(request, "INTERNAL_ERROR"),
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


def _log_extra(
    request: Request, code: str, context: ErrorContext | None = None,
) -> dict:
    extra = {"error_code": code, "path": request.url.path}
    if context is not None:
        for key in ("item_id", "order_id", "cache_key", "operation"):
            value = getattr(context, key)
            if value is not None:
                extra[key] = value
    return extra
