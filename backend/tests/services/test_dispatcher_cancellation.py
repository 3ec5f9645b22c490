"""Dispatcher Cancellation — external cancel event aborts requests and skips waits.

Invariants:
    - Event set before dispatch → CANCELLED, attempts_made=0, no HTTP call
    - Event set during backoff → CANCELLED without finishing the wait
    - Event set during an in-flight request → request abandoned, CANCELLED
    - Task cancellation (CancelledError) propagates instead of becoming a result
"""

import asyncio

import httpx
import pytest

from leadrelay.core.domain_types import FailureKind
from leadrelay.core.messages import build_text
from leadrelay.infrastructure.credentials import StaticCredentialProvider
from leadrelay.infrastructure.gateway_client import GatewayClient
from leadrelay.services.dispatcher import DispatcherConfig, MessageDispatcher

from tests.fake_gateway import BASE_URL, FakeGateway

MESSAGE = build_text("+15551234567", "hello")


async def test_cancel_before_dispatch_makes_no_request(make_dispatcher):
    dispatcher, gateway = make_dispatcher([(200, {"id": "x"})])
    cancel = asyncio.Event()
    cancel.set()

    result = await dispatcher.dispatch(MESSAGE, cancel=cancel)

    assert result.failure_kind is FailureKind.CANCELLED
    assert result.attempts_made == 0
    assert gateway.calls == 0


async def test_unset_cancel_event_does_not_interfere(make_dispatcher, fake_sleep):
    dispatcher, _ = make_dispatcher([500, (200, {"id": "x"})])

    result = await dispatcher.dispatch(MESSAGE, cancel=asyncio.Event())

    assert result.succeeded
    assert result.attempts_made == 2
    assert fake_sleep.calls == [2]


async def test_cancel_during_backoff_skips_wait():
    cancel = asyncio.Event()
    waits: list[float] = []

    async def blocking_sleep(seconds):
        waits.append(seconds)
        cancel.set()
        await asyncio.Event().wait()  # would block forever

    gateway = FakeGateway([429, (200, {"id": "never"})])
    async with httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler)) as http:
        dispatcher = MessageDispatcher(
            GatewayClient(http, BASE_URL),
            StaticCredentialProvider("tok"),
            DispatcherConfig(base_url=BASE_URL),
            sleep=blocking_sleep,
        )
        result = await asyncio.wait_for(
            dispatcher.dispatch(MESSAGE, cancel=cancel), timeout=5,
        )

    assert result.failure_kind is FailureKind.CANCELLED
    assert result.attempts_made == 1
    assert gateway.calls == 1
    assert waits == [30]


async def test_cancel_during_request_aborts_it():
    cancel = asyncio.Event()
    started = asyncio.Event()

    async def hanging_handler(request):
        started.set()
        await asyncio.Event().wait()

    async with httpx.AsyncClient(transport=httpx.MockTransport(hanging_handler)) as http:
        dispatcher = MessageDispatcher(
            GatewayClient(http, BASE_URL),
            StaticCredentialProvider("tok"),
            DispatcherConfig(base_url=BASE_URL),
        )
        task = asyncio.ensure_future(dispatcher.dispatch(MESSAGE, cancel=cancel))
        await asyncio.wait_for(started.wait(), timeout=5)
        cancel.set()
        result = await asyncio.wait_for(task, timeout=5)

    assert result.failure_kind is FailureKind.CANCELLED
    assert result.attempts_made == 1


async def test_task_cancellation_propagates():
    started = asyncio.Event()

    async def hanging_handler(request):
        started.set()
        await asyncio.Event().wait()

    async with httpx.AsyncClient(transport=httpx.MockTransport(hanging_handler)) as http:
        dispatcher = MessageDispatcher(
            GatewayClient(http, BASE_URL),
            StaticCredentialProvider("tok"),
        )
        task = asyncio.ensure_future(
            dispatcher.dispatch(MESSAGE, cancel=asyncio.Event()),
        )
        await asyncio.wait_for(started.wait(), timeout=5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
