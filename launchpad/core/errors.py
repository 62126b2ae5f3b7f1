"""Error Hierarchy — typed, categorized exceptions for all LaunchPad failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) carry the offending field name
    - Absence is never an error: lookups return None / False instead
    - Cache errors are fail-open: callers log them, never surface them
    - Store errors (500-level) propagate to the caller, never retried by the core

Design Decisions:
    - Single hierarchy with LaunchPadError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CACHE = "cache"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    item_id: int | None = None
    order_id: int | None = None
    cache_key: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LaunchPadError(Exception):
    """Base exception for all LaunchPad errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "item_id": self.context.item_id,
                    "order_id": self.context.order_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(LaunchPadError):
    """Malformed input rejected before any engine or store work."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


# ─── Cache Errors (fail-open) ───────────────────────────────────

class CacheUnavailableError(LaunchPadError):
    """Cache backend unreachable or the command failed."""
    def __init__(
        self, message: str, operation: str, key: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.cache_key = key
        ctx.operation = operation
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_UNAVAILABLE", ErrorCategory.CACHE,
            ErrorSeverity.WARNING, ctx, 503,
        )
        self.operation = operation
        self.key = key


class CachePayloadError(LaunchPadError):
    """Cached value does not match any known payload schema."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.cache_key = key
        super().__init__(
            f"Cache payload for '{key}' is invalid: {message}",
            "CACHE_PAYLOAD_INVALID", ErrorCategory.CACHE,
            ErrorSeverity.WARNING, ctx, 500,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(LaunchPadError):
    """Persistence operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "STORE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        http_status: int = 503,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.operation = operation


class ConcurrencyError(StoreError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "update", context,
            code="CONCURRENCY_CONFLICT", category=ErrorCategory.CONFLICT,
            http_status=409,
        )
        self.severity = ErrorSeverity.ERROR
