"""Retry Policy — pure classification of one gateway attempt into a decision.

Invariants:
    - classify() is PURE apart from the injected id factory: no IO, no sleeping
    - 2xx                      -> Terminal(SUCCESS)
    - 401                      -> Terminal(INVALID_CREDENTIAL), regardless of attempts left
    - 429                      -> Retry(min(attempt * step, cap)), on every attempt
    - other status / conn err  -> Retry(retry_delay) unless attempt == max_attempts,
                                  then Terminal(REMOTE_ERROR / TRANSPORT_ERROR)
    - Rate-limit wait is keyed on the attempt index, not on a count of 429s seen

Design Decisions:
    - Three distinct backoff regimes instead of one formula: auth failures never
      retry, rate limits back off linearly with a cap, transient errors pause briefly
    - Loop exhaustion (final attempt rate-limited) is decided by the dispatcher,
      since only the loop knows it has run out
"""

from dataclasses import dataclass
from typing import Callable, Union

from leadrelay.core.domain_types import FailureKind, MessageId
from leadrelay.core.results import DispatchResult, fallback_message_id

HTTP_UNAUTHORIZED = 401
HTTP_TOO_MANY_REQUESTS = 429


@dataclass(frozen=True)
class HttpOutcome:
    """What one transport call observed: a status + body, or a connection error."""
    status_code: int | None = None
    body: dict | None = None
    text: str = ""
    connection_error: str | None = None

    @classmethod
    def connection_failed(cls, error: str) -> "HttpOutcome":
        return cls(connection_error=error)

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    def remote_message(self) -> str:
        """Error text for a non-2xx response: body 'message' when the gateway sent one."""
        if self.body and self.body.get("message"):
            return str(self.body["message"])
        return f"Request failed with status code {self.status_code}"


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff constants, in seconds."""
    retry_delay_s: float = 2.0
    rate_limit_step_s: float = 30.0
    rate_limit_cap_s: float = 300.0

    def rate_limit_wait(self, attempt: int) -> float:
        return min(attempt * self.rate_limit_step_s, self.rate_limit_cap_s)


DEFAULT_POLICY = RetryPolicy()


@dataclass(frozen=True)
class Terminal:
    result: DispatchResult


@dataclass(frozen=True)
class Retry:
    wait_seconds: float
    reason: FailureKind
    detail: str


Decision = Union[Terminal, Retry]


def classify(
    outcome: HttpOutcome,
    attempt: int,
    max_attempts: int,
    policy: RetryPolicy = DEFAULT_POLICY,
    id_factory: Callable[[], MessageId] = fallback_message_id,
) -> Decision:
    """Map one attempt's outcome to Terminal(result) or Retry(wait)."""
    if outcome.connection_error is not None:
        return _transient(
            FailureKind.TRANSPORT_ERROR, outcome.connection_error,
            attempt, max_attempts, policy,
        )

    if outcome.is_success:
        remote_id = (outcome.body or {}).get("id")
        message_id = MessageId(str(remote_id)) if remote_id else id_factory()
        return Terminal(DispatchResult.success(message_id, attempt))

    if outcome.status_code == HTTP_UNAUTHORIZED:
        return Terminal(DispatchResult.failure(
            FailureKind.INVALID_CREDENTIAL,
            "Invalid API key. Check the messaging gateway credentials.",
            attempt,
        ))

    if outcome.status_code == HTTP_TOO_MANY_REQUESTS:
        return Retry(
            wait_seconds=policy.rate_limit_wait(attempt),
            reason=FailureKind.RATE_LIMITED,
            detail=outcome.remote_message(),
        )

    return _transient(
        FailureKind.REMOTE_ERROR, outcome.remote_message(),
        attempt, max_attempts, policy,
    )


def _transient(
    kind: FailureKind, detail: str,
    attempt: int, max_attempts: int, policy: RetryPolicy,
) -> Decision:
    if attempt >= max_attempts:
        return Terminal(DispatchResult.failure(kind, detail, attempt))
    return Retry(wait_seconds=policy.retry_delay_s, reason=kind, detail=detail)
