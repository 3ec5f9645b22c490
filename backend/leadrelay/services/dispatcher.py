"""Message Dispatcher — deliver one outbound message through the gateway with bounded retries.

Invariants:
    - dispatch() returns exactly one DispatchResult and never raises for
      transport or remote failures
    - Credential resolved once per dispatch, before the first attempt; a missing
      credential returns MISSING_CREDENTIAL with attempts_made=0 and no HTTP call
    - max_attempts is a hard ceiling (default from config, minimum 1)
    - Attempt N+1 starts only after attempt N is classified and its wait elapsed
    - A set cancel event aborts the in-flight request and skips remaining waits,
      returning CANCELLED; task cancellation (CancelledError) still propagates
    - No state shared between concurrent dispatch() calls

Design Decisions:
    - Loop here, decisions in core/retry_policy.classify: the policy is testable
      without a network or an event loop
    - sleep injected (defaults to asyncio.sleep) so tests observe backoff
      durations without waiting for them
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from leadrelay.config import Settings
from leadrelay.core.domain_types import FailureKind
from leadrelay.core.errors import (
    DeliveryFailedError,
    ErrorContext,
    GatewayRemoteError,
    GatewayTransportError,
    MissingCredentialError,
)
from leadrelay.core.messages import OutboundMessage, build_text, to_payload
from leadrelay.core.results import DispatchResult
from leadrelay.core.retry_policy import (
    DEFAULT_POLICY,
    Retry,
    RetryPolicy,
    Terminal,
    classify,
)
from leadrelay.infrastructure.credentials import CredentialProvider
from leadrelay.infrastructure.gateway_client import GatewayClient

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
RemoteStatus = dict[str, Any]

MISSING_CREDENTIAL_MESSAGE = "API key not found. Set the messaging gateway API key."
RETRY_EXHAUSTED_MESSAGE = "Max retry attempts reached"
CANCELLED_MESSAGE = "Dispatch cancelled"

_CANCELLED = object()


@dataclass(frozen=True)
class DispatcherConfig:
    """Explicit dispatcher configuration (no module-level globals)."""
    base_url: str = "https://wasenderapi.com/api"
    send_timeout_s: float = 30.0
    status_timeout_s: float = 10.0
    max_attempts: int = 3
    policy: RetryPolicy = DEFAULT_POLICY

    @classmethod
    def from_settings(cls, settings: Settings) -> "DispatcherConfig":
        return cls(
            base_url=settings.gateway_base_url,
            send_timeout_s=settings.gateway_send_timeout_seconds,
            status_timeout_s=settings.gateway_status_timeout_seconds,
            max_attempts=settings.dispatch_max_attempts,
            policy=RetryPolicy(
                retry_delay_s=settings.dispatch_retry_delay_seconds,
                rate_limit_step_s=settings.dispatch_rate_limit_step_seconds,
                rate_limit_cap_s=settings.dispatch_rate_limit_cap_seconds,
            ),
        )


class MessageDispatcher:
    """Sends messages via GatewayClient, retrying per RetryPolicy."""

    def __init__(
        self,
        client: GatewayClient,
        credentials: CredentialProvider,
        config: DispatcherConfig | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._client = client
        self._credentials = credentials
        self.config = config or DispatcherConfig()
        self._sleep = sleep

    async def dispatch(
        self,
        message: OutboundMessage,
        max_attempts: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> DispatchResult:
        """Deliver one message. Worst case ~ max_attempts * (timeout + 300s)."""
        attempts = self._resolve_max_attempts(max_attempts)

        credential = await self._credentials.get_credential()
        if not credential:
            logger.warning(
                "Dispatch skipped: no gateway credential configured",
                extra={"failure_kind": FailureKind.MISSING_CREDENTIAL.value},
            )
            return DispatchResult.failure(
                FailureKind.MISSING_CREDENTIAL, MISSING_CREDENTIAL_MESSAGE, 0,
            )

        payload = to_payload(message)
        for attempt in range(1, attempts + 1):
            if cancel is not None and cancel.is_set():
                return self._cancelled(attempt - 1)

            outcome = await self._until_cancelled(
                self._client.send_message(
                    payload, credential, self.config.send_timeout_s,
                ),
                cancel,
            )
            if outcome is _CANCELLED:
                return self._cancelled(attempt)

            decision = classify(outcome, attempt, attempts, self.config.policy)
            if isinstance(decision, Terminal):
                self._log_terminal(decision.result, attempts)
                return decision.result

            self._log_retry(decision, attempt, attempts)
            waited = await self._until_cancelled(
                self._sleep(decision.wait_seconds), cancel,
            )
            if waited is _CANCELLED:
                return self._cancelled(attempt)

        logger.warning(
            f"Dispatch gave up after {attempts} rate-limited attempt(s)",
            extra={
                "attempt": attempts,
                "failure_kind": FailureKind.RETRY_EXHAUSTED.value,
            },
        )
        return DispatchResult.failure(
            FailureKind.RETRY_EXHAUSTED, RETRY_EXHAUSTED_MESSAGE, attempts,
        )

    async def send_single_message(
        self, phone_number: str, content: str,
    ) -> DispatchResult:
        """Build a text message and dispatch it with the default budget."""
        return await self.dispatch(build_text(phone_number, content))

    async def send_message(self, message: OutboundMessage) -> dict:
        """Dispatch and raise DeliveryFailedError on failure. Returns {"id": ...}."""
        result = await self.dispatch(message)
        if not result.succeeded:
            raise DeliveryFailedError(
                result.error_message or "Unknown error",
                failure_kind=result.failure_kind.value,
                attempts_made=result.attempts_made,
                context=ErrorContext(recipient=message.to),
            )
        return {"id": result.message_id}

    async def check_status(self) -> RemoteStatus:
        """Single diagnostic GET /status, no retry."""
        credential = await self._credentials.get_credential()
        if not credential:
            raise MissingCredentialError()
        outcome = await self._client.get_status(
            credential, self.config.status_timeout_s,
        )
        if outcome.connection_error is not None:
            logger.error(f"Gateway status check failed: {outcome.connection_error}")
            raise GatewayTransportError(outcome.connection_error)
        if not outcome.is_success:
            logger.error(
                "Gateway status check rejected",
                extra={"status_code": outcome.status_code},
            )
            raise GatewayRemoteError(outcome.status_code, outcome.remote_message())
        if outcome.body is not None:
            return outcome.body
        return {"status": outcome.text}

    def _resolve_max_attempts(self, max_attempts: int | None) -> int:
        attempts = self.config.max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {attempts}")
        return attempts

    async def _until_cancelled(
        self, coro: Awaitable[Any], cancel: asyncio.Event | None,
    ) -> Any:
        """Await coro, or return _CANCELLED if cancel is set first."""
        if cancel is None:
            return await coro
        work = asyncio.ensure_future(coro)
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait(
                {work, waiter}, return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not work.done():
                work.cancel()
        if work.done() and not work.cancelled():
            return work.result()
        await asyncio.wait({work})
        return _CANCELLED

    def _cancelled(self, attempts_made: int) -> DispatchResult:
        logger.info(
            "Dispatch cancelled",
            extra={
                "attempt": attempts_made,
                "failure_kind": FailureKind.CANCELLED.value,
            },
        )
        return DispatchResult.failure(
            FailureKind.CANCELLED, CANCELLED_MESSAGE, attempts_made,
        )

    def _log_retry(self, decision: Retry, attempt: int, max_attempts: int) -> None:
        if decision.reason is FailureKind.RATE_LIMITED:
            msg = f"Gateway rate limit hit, waiting {decision.wait_seconds}s"
        else:
            msg = (
                f"Gateway attempt failed ({decision.reason.value}: "
                f"{decision.detail}), retrying in {decision.wait_seconds}s"
            )
        logger.warning(
            msg,
            extra={
                "attempt": attempt,
                "max_attempts": max_attempts,
                "failure_kind": decision.reason.value,
                "wait_seconds": decision.wait_seconds,
            },
        )

    def _log_terminal(self, result: DispatchResult, max_attempts: int) -> None:
        if result.succeeded:
            logger.info(
                "Gateway message sent",
                extra={
                    "attempt": result.attempts_made,
                    "message_id": result.message_id,
                },
            )
            return
        logger.error(
            f"Gateway delivery failed: {result.error_message}",
            extra={
                "attempt": result.attempts_made,
                "max_attempts": max_attempts,
                "failure_kind": result.failure_kind.value,
            },
        )
