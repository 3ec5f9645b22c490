"""Error Hierarchy — typed, categorized exceptions for LeadRelay failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors are 400-level; gateway/credential errors are 500-level
    - to_response() produces the REST envelope
    - Credentials never appear in messages or context

Design Decisions:
    - Single hierarchy with LeadRelayError base: one FastAPI handler catches all
    - dispatch() does NOT raise these for delivery failures; it returns a
      DispatchResult. Exceptions are for construction errors, status checks
      and the raising send_message() wrapper.
"""

from dataclasses import dataclass, field
from enum import Enum
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
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    recipient: str | None = None
    attempt: int | None = None
    user_message: str | None = None


class LeadRelayError(Exception):
    """Base exception for all LeadRelay errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "recipient": self.context.recipient,
                    "attempt": self.context.attempt,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class InvalidInputError(LeadRelayError):
    """Message or lead input is malformed (empty recipient, text, or url)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Gateway Errors (500-level) ─────────────────────────────────

class MissingCredentialError(LeadRelayError):
    """No gateway API key is configured yet."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Gateway API key not found. Set the messaging gateway API key.",
            "MISSING_CREDENTIAL", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, context, 503,
        )


class GatewayTransportError(LeadRelayError):
    """Connection-level failure talking to the gateway (DNS, refused, timeout)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Gateway unreachable: {message}",
            "GATEWAY_TRANSPORT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class GatewayRemoteError(LeadRelayError):
    """Gateway answered with a non-2xx status."""
    def __init__(
        self, status_code: int, message: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Gateway returned HTTP {status_code}: {message}",
            "GATEWAY_REMOTE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.status_code = status_code


class DeliveryFailedError(LeadRelayError):
    """A dispatch ended in a terminal failure (raised only by send_message)."""
    def __init__(
        self, message: str, failure_kind: str, attempts_made: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.attempt = attempts_made
        super().__init__(
            message, "DELIVERY_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.failure_kind = failure_kind
        self.attempts_made = attempts_made

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["failure_kind"] = self.failure_kind
        response["error"]["attempts_made"] = self.attempts_made
        return response
