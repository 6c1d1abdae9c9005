"""Error Taxonomy — one tagged exception type for every upstream failure mode.

Invariants:
    - Every error has a kind (ErrorKind), code (str), category, severity, http_status
    - Exactly three kinds: NOT_FOUND, RATE_LIMIT_EXCEEDED, UPSTREAM
    - Errors are built through the classmethod constructors, one per kind
    - to_response() produces the REST error envelope; no internal details leaked

Design Decisions:
    - Tagged variant over subclass-per-kind: handlers and tests branch on
      exc.kind, and the HTTP status mapping lives in one table (_KIND_TRAITS)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RATE_LIMIT = "rate_limit"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """The three failure kinds surfaced by the employee client and service."""
    NOT_FOUND = "not_found"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class _KindTraits:
    code: str
    category: ErrorCategory
    severity: ErrorSeverity
    http_status: int


_KIND_TRAITS: dict[ErrorKind, _KindTraits] = {
    ErrorKind.NOT_FOUND: _KindTraits(
        "EMPLOYEE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
        ErrorSeverity.WARNING, 404,
    ),
    ErrorKind.RATE_LIMIT_EXCEEDED: _KindTraits(
        "RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMIT,
        ErrorSeverity.WARNING, 429,
    ),
    ErrorKind.UPSTREAM: _KindTraits(
        "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
        ErrorSeverity.CRITICAL, 500,
    ),
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    resource_id: str | None = None
    upstream_status: int | None = None
    attempts: int | None = None
    retry_after_ms: int | None = None


class EmployeeAPIError(Exception):
    """Single exception type for employee API failures, tagged by ErrorKind."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        traits = _KIND_TRAITS[kind]
        self.kind = kind
        self.message = message
        self.code = traits.code
        self.category = traits.category
        self.severity = traits.severity
        self.http_status = traits.http_status
        self.context = context or ErrorContext()

    def __repr__(self) -> str:
        return f"EmployeeAPIError({self.kind.value!r}, {self.message!r})"

    # ─── Constructors ────────────────────────────────────────────

    @classmethod
    def not_found(
        cls,
        resource_id: str,
        message: str | None = None,
        context: ErrorContext | None = None,
    ) -> "EmployeeAPIError":
        """Resource absent upstream, or a delete that removed nothing."""
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        return cls(
            ErrorKind.NOT_FOUND,
            message or f"Employee '{resource_id}' not found",
            ctx,
        )

    @classmethod
    def rate_limit_exceeded(
        cls,
        attempts: int,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ) -> "EmployeeAPIError":
        """Upstream kept throttling after every allowed attempt."""
        ctx = context or ErrorContext()
        ctx.attempts = attempts
        ctx.retry_after_ms = retry_after_ms
        return cls(
            ErrorKind.RATE_LIMIT_EXCEEDED,
            f"Rate limit exceeded after {attempts} attempts",
            ctx,
        )

    @classmethod
    def upstream(
        cls,
        status: int | None,
        message: str,
        context: ErrorContext | None = None,
    ) -> "EmployeeAPIError":
        """Any other transport, HTTP or protocol failure. status is None for transport errors."""
        ctx = context or ErrorContext()
        ctx.upstream_status = status
        label = f"HTTP {status}" if status is not None else "transport"
        return cls(
            ErrorKind.UPSTREAM,
            f"Upstream error ({label}): {message}",
            ctx,
        )

    # ─── Rendering ───────────────────────────────────────────────

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "kind": self.kind.value,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "resource_id": self.context.resource_id,
                    "upstream_status": self.context.upstream_status,
                    "attempts": self.context.attempts,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }
