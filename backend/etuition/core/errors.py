"""Error Hierarchy — typed, categorized exceptions for all eTuition failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Authentication (401) and authorization (403) are distinct error types
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ETuitionError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_email: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class ETuitionError(Exception):
    """Base exception for all eTuition errors."""

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
            }
        }


# ─── Access Errors (401/403) ────────────────────────────────────

class UnauthenticatedError(ETuitionError):
    """No usable bearer credential on a protected operation."""
    def __init__(self, message: str = "Unauthorized access", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialError(ETuitionError):
    """Token is malformed, signed with another key, or expired."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid token: {reason}", "INVALID_CREDENTIAL",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class ForbiddenError(ETuitionError):
    """Verified identity is not allowed to touch this resource."""
    def __init__(self, message: str = "Forbidden access", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(ETuitionError):
    """Missing or malformed required field."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class DuplicateApplicationError(ETuitionError):
    """Tutor already has an application for this (student, subject) pair."""
    def __init__(self, subject: str, context: ErrorContext | None = None):
        super().__init__(
            f"You have already applied for {subject}",
            "ALREADY_APPLIED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.subject = subject


class InvalidTransitionError(ETuitionError):
    """Requested status change is not an edge of the lifecycle graph."""
    def __init__(
        self, entity: str, current: str, target: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{entity} cannot move from '{current}' to '{target}'",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.current = current
        self.target = target


class ResourceNotFoundError(ETuitionError):
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

class DatabaseError(ETuitionError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class PaymentProviderError(ETuitionError):
    """Charge provider call failed."""
    def __init__(
        self,
        message: str,
        provider_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Payment provider error ({provider_error_type}): {message}",
            "PAYMENT_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.provider_error_type = provider_error_type


class IdentityProviderError(ETuitionError):
    """Identity provider is unavailable or rejected the credential material."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "IDENTITY_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
