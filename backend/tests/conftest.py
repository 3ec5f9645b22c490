"""Root conftest — shared test configuration and gateway fixtures."""

import os

import httpx
import pytest

# Ensure tests never pick up a real gateway key from the environment
os.environ["GATEWAY_API_KEY"] = ""
os.environ.setdefault("LOG_FORMAT", "text")

from leadrelay.infrastructure.credentials import StaticCredentialProvider  # noqa: E402
from leadrelay.infrastructure.gateway_client import GatewayClient  # noqa: E402
from leadrelay.services.dispatcher import (  # noqa: E402
    DispatcherConfig,
    MessageDispatcher,
)

from tests.fake_gateway import BASE_URL, FakeGateway, RecordingSleep  # noqa: E402


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
async def make_dispatcher(fake_sleep):
    """Factory: scripted FakeGateway + MessageDispatcher wired through httpx.MockTransport.

    Usage: dispatcher, gateway = make_dispatcher([500, (200, {"id": "x"})])
    """
    clients = []

    def _make(responses, token="test-token", max_attempts=3, credentials=None):
        gateway = FakeGateway(responses)
        http = httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler))
        clients.append(http)
        dispatcher = MessageDispatcher(
            GatewayClient(http, BASE_URL),
            credentials or StaticCredentialProvider(token),
            DispatcherConfig(base_url=BASE_URL, max_attempts=max_attempts),
            sleep=fake_sleep,
        )
        return dispatcher, gateway

    yield _make

    for http in clients:
        await http.aclose()
