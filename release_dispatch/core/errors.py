"""Error Hierarchy — typed, categorized exceptions for dispatch engine failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Dispatch outcomes are NOT errors: the loop never raises/catches for client failures
    - AcquisitionClientUnavailableError exists only for raw clients; the adapter in
      infrastructure/acquisition_client.py turns it into a tagged DispatchOutcome
    - Collaborator failures propagate and abort the whole pass

Design Decisions:
    - Single hierarchy with DispatchEngineError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from release_dispatch.core.domain_types import PassId


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    EXTERNAL_CLIENT = "external_client"
    COLLABORATOR = "collaborator"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pass_id: PassId | None = None
    release_title: str | None = None
    protocol: str | None = None
    debug_info: dict[str, Any] | None = None


class DispatchEngineError(Exception):
    """Base exception for all release_dispatch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def retryable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_log_extra(self) -> dict:
        """Fields for logger.*(extra=...), picked up by JSONFormatter."""
        extra = {
            "error_code": self.code,
            "pass_id": self.context.pass_id,
            "release_title": self.context.release_title,
            "protocol": self.context.protocol,
        }
        return {k: v for k, v in extra.items() if v is not None}


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidDecisionError(DispatchEngineError):
    """Decision or release built from malformed upstream data."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_DECISION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class AcquisitionClientUnavailableError(DispatchEngineError):
    """Raw acquisition client could not accept the release (down, full, unreachable)."""
    def __init__(self, message: str, client_name: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "CLIENT_UNAVAILABLE", ErrorCategory.EXTERNAL_CLIENT,
            ErrorSeverity.WARNING, context,
        )
        self.client_name = client_name


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(DispatchEngineError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class DispatchPassError(DispatchEngineError):
    """A collaborator failed mid-pass; the whole batch is unprocessed."""
    def __init__(self, message: str, pass_id: PassId, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pass_id = pass_id
        super().__init__(
            message, "DISPATCH_PASS_FAILED", ErrorCategory.COLLABORATOR,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.pass_id = pass_id
