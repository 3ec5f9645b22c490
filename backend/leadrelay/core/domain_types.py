"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PhoneNumber, MessageId and Credential wrap str; never pass bare strings through services
    - All dispatch outcomes and failure kinds encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity / Value Types ──────────────────────────────────────

PhoneNumber = NewType("PhoneNumber", str)
MessageId = NewType("MessageId", str)
Credential = NewType("Credential", str)


# ─── Enums ───────────────────────────────────────────────────────

class DispatchOutcome(str, Enum):
    """Terminal outcome of one dispatch call."""
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(str, Enum):
    """Why a dispatch failed (or, for RATE_LIMITED, why it is waiting)."""
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    RATE_LIMITED = "rate_limited"
    REMOTE_ERROR = "remote_error"
    TRANSPORT_ERROR = "transport_error"
    RETRY_EXHAUSTED = "retry_exhausted"
    CANCELLED = "cancelled"
    INVALID_INPUT = "invalid_input"
