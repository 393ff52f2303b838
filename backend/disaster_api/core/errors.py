"""Error Hierarchy - typed, categorized exceptions for all Disaster API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the uniform REST envelope: {status, message} or {status, errors}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DisasterApiError base: FastAPI global handler catches all
      (ADR: one envelope family for every error kind, not-found included)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from disaster_api.core.responses import error_envelope, validation_error_envelope


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    disaster_id: int | None = None
    user_id: int | None = None
    capability: str | None = None

    def log_fields(self) -> dict[str, Any]:
        """Non-empty fields, ready for logging `extra=`."""
        return {
            key: value for key, value in (
                ("disaster_id", self.disaster_id),
                ("user_id", self.user_id),
                ("capability", self.capability),
            )
            if value is not None
        }


class DisasterApiError(Exception):
    """Base exception for all Disaster API errors."""

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
        """Convert to standardized REST error envelope."""
        return error_envelope(self.http_status, self.message)


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(DisasterApiError):
    """Field-level validation failed (schema or referential checks)."""
    def __init__(
        self, errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            "The given data was invalid.", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return validation_error_envelope(self.http_status, self.errors)


class AuthenticationRequiredError(DisasterApiError):
    """Caller identity missing or malformed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class CapabilityDeniedError(DisasterApiError):
    """Caller lacks the capability for the requested action on a resource."""
    def __init__(
        self, capability: str, message: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.capability = capability
        super().__init__(
            message, "CAPABILITY_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.capability = capability


class ResourceNotFoundError(DisasterApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DisasterApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
