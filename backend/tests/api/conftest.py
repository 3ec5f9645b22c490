"""API test fixtures — FastAPI app wired to a scripted fake gateway.

Invariants:
    - Every test gets fresh services (one in-memory config store shared by
      credential and template sources, new FakeGateway)
    - Route dependencies overridden; app lifespan (real httpx client) not run
    - Backoff sleeps recorded, never awaited

Design Decisions:
    - dependency_overrides over module patching: same seam the app uses
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from leadrelay.api.deps import (
    get_credential_provider,
    get_dispatcher,
    get_lead_notifier,
    get_template_source,
)
from leadrelay.infrastructure.config_store import InMemoryConfigStore
from leadrelay.infrastructure.credentials import (
    GATEWAY_API_KEY,
    StoredCredentialProvider,
)
from leadrelay.infrastructure.gateway_client import GatewayClient
from leadrelay.infrastructure.template_store import StoredTemplateSource
from leadrelay.main import app
from leadrelay.services.dispatcher import DispatcherConfig, MessageDispatcher
from leadrelay.services.lead_notifier import LeadNotifier

from tests.fake_gateway import BASE_URL, FakeGateway

SALES_NUMBER = "+971509999999"
DEFAULT_TEMPLATE = "Lead: {whatsapp_number}"


@pytest.fixture
def gateway():
    """Scripted gateway; tests append responses to gateway.responses."""
    return FakeGateway([])


@pytest.fixture
def config_store():
    return InMemoryConfigStore({GATEWAY_API_KEY: "admin-key"})


@pytest.fixture
async def client(gateway, config_store, fake_sleep):
    """FastAPI test client with dispatcher/credentials/notifier overridden."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler))
    credentials = StoredCredentialProvider(config_store)
    dispatcher = MessageDispatcher(
        GatewayClient(http, BASE_URL),
        credentials,
        DispatcherConfig(base_url=BASE_URL),
        sleep=fake_sleep,
    )
    templates = StoredTemplateSource(config_store, default=DEFAULT_TEMPLATE)
    notifier = LeadNotifier(dispatcher, SALES_NUMBER, templates)

    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_credential_provider] = lambda: credentials
    app.dependency_overrides[get_lead_notifier] = lambda: notifier
    app.dependency_overrides[get_template_source] = lambda: templates

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await http.aclose()
