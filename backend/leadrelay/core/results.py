"""Dispatch Results — the single immutable value returned by every dispatch call.

Invariants:
    - DispatchResult is frozen: never mutated after construction
    - SUCCESS carries message_id and no failure_kind; FAILURE carries failure_kind
    - attempts_made counts transport calls actually issued (0 only when none were)
"""

import time
from dataclasses import dataclass

from leadrelay.core.domain_types import DispatchOutcome, FailureKind, MessageId


def fallback_message_id() -> MessageId:
    """Locally generated id for gateways that accept a message without returning one."""
    return MessageId(f"msg_{int(time.time() * 1000)}")


@dataclass(frozen=True)
class DispatchResult:
    outcome: DispatchOutcome
    attempts_made: int
    message_id: MessageId | None = None
    error_message: str | None = None
    failure_kind: FailureKind | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is DispatchOutcome.SUCCESS

    @classmethod
    def success(cls, message_id: MessageId, attempts_made: int) -> "DispatchResult":
        return cls(
            outcome=DispatchOutcome.SUCCESS,
            attempts_made=attempts_made,
            message_id=message_id,
        )

    @classmethod
    def failure(
        cls, kind: FailureKind, error_message: str, attempts_made: int,
    ) -> "DispatchResult":
        return cls(
            outcome=DispatchOutcome.FAILURE,
            attempts_made=attempts_made,
            error_message=error_message,
            failure_kind=kind,
        )

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "message_id": self.message_id,
            "error_message": self.error_message,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "attempts_made": self.attempts_made,
        }
