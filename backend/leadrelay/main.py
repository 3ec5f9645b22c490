"""LeadRelay API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LeadRelayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One shared httpx.AsyncClient per process, closed on shutdown
    - Dispatcher, credential and template sources, and lead notifier built once
      in lifespan; credential and template share one ConfigStore
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadrelay.api.error_handlers import register_error_handlers
from leadrelay.api.routes import gateway, health, leads, messages, templates
from leadrelay.config import get_settings
from leadrelay.infrastructure.config_store import InMemoryConfigStore
from leadrelay.infrastructure.credentials import StoredCredentialProvider
from leadrelay.infrastructure.gateway_client import GatewayClient
from leadrelay.infrastructure.observability import setup_logging
from leadrelay.infrastructure.template_store import StoredTemplateSource
from leadrelay.services.dispatcher import DispatcherConfig, MessageDispatcher
from leadrelay.services.lead_notifier import LeadNotifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    http = httpx.AsyncClient(timeout=settings.gateway_send_timeout_seconds)
    store = InMemoryConfigStore()
    credentials = StoredCredentialProvider(
        store, fallback=settings.gateway_api_key,
    )
    template_source = StoredTemplateSource(store, default=settings.lead_message_template)
    dispatcher = MessageDispatcher(
        GatewayClient(http, settings.gateway_base_url),
        credentials,
        DispatcherConfig.from_settings(settings),
    )
    app.state.credentials = credentials
    app.state.dispatcher = dispatcher
    app.state.templates = template_source
    app.state.lead_notifier = LeadNotifier(
        dispatcher,
        settings.sales_team_number,
        template_source,
    )
    logger.info("LeadRelay API started")
    yield
    await http.aclose()
    logger.info("LeadRelay API shutting down")


app = FastAPI(title="LeadRelay API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(messages.router)
app.include_router(gateway.router)
app.include_router(leads.router)
app.include_router(templates.router)

register_error_handlers(app)
