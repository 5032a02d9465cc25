"""Error Hierarchy - typed, categorized exceptions for every simulation failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - "Not found" is an expected outcome (severity INFO), never logged as an anomaly
    - Upstream and configuration errors are critical; timeouts are retryable
    - to_response() produces the REST envelope; no internal details in messages

Design Decisions:
    - Single hierarchy with PensionSimError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - DatabaseError extends UpstreamError: a storage failure is one kind of upstream failure,
      so callers can catch the wider class
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    participant_id: str | None = None
    source: str | None = None
    timeout_ms: int | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class PensionSimError(Exception):
    """Base exception for all simulation service errors."""

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

    @property
    def retryable(self) -> bool:
        return self.category in (ErrorCategory.TIMEOUT, ErrorCategory.EXTERNAL_API)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "participant_id": self.context.participant_id,
                    "source": self.context.source,
                    "timeout_ms": self.context.timeout_ms,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ParticipantNotFoundError(PensionSimError):
    """Participant id does not resolve to a profile."""
    def __init__(self, participant_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.participant_id = participant_id
        super().__init__(
            f"Participant not found: {participant_id}",
            "PARTICIPANT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.participant_id = participant_id


class InvalidSimulationRequestError(PensionSimError):
    """Simulation request rejected before any lookup."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SIMULATION_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Runtime Errors (500-level) ─────────────────────────────────

class SimulationTimeoutError(PensionSimError):
    """Simulation did not complete within its deadline."""
    def __init__(
        self, participant_id: str, timeout_ms: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.participant_id = participant_id
        ctx.timeout_ms = timeout_ms
        super().__init__(
            f"Simulation for participant {participant_id} exceeded {timeout_ms}ms",
            "SIMULATION_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, ctx, 504,
        )
        self.participant_id = participant_id
        self.timeout_ms = timeout_ms


class UpstreamError(PensionSimError):
    """A data source failed for a reason other than absence."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.source = ctx.source or source
        super().__init__(
            f"Upstream {source} failed: {message}",
            "UPSTREAM_FAILURE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.source = source


class DatabaseError(UpstreamError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.source = ctx.source or "database"
        PensionSimError.__init__(
            self, f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.source = "database"
        self.operation = operation


class ConfigurationInvariantError(PensionSimError):
    """Configuration makes the calculation meaningless (e.g. zero benefit divisor)."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid configuration for {setting}: {message}",
            "CONFIGURATION_INVARIANT_VIOLATED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting

    @property
    def retryable(self) -> bool:
        return False


class EventPublishError(PensionSimError):
    """Publishing a simulation event to the event sink failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to publish simulation event: {message}",
            "EVENT_PUBLISH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
