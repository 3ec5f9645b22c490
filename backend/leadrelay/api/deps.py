"""Route Dependencies — hand the lifespan-built services to route handlers.

Invariants:
    - Services are created once in main.lifespan and stored on app.state
    - Tests replace them via app.dependency_overrides, never by patching modules
"""

from fastapi import Request

from leadrelay.infrastructure.credentials import StoredCredentialProvider
from leadrelay.infrastructure.template_store import StoredTemplateSource
from leadrelay.services.dispatcher import MessageDispatcher
from leadrelay.services.lead_notifier import LeadNotifier


def get_dispatcher(request: Request) -> MessageDispatcher:
    return request.app.state.dispatcher


def get_credential_provider(request: Request) -> StoredCredentialProvider:
    return request.app.state.credentials


def get_lead_notifier(request: Request) -> LeadNotifier:
    return request.app.state.lead_notifier


def get_template_source(request: Request) -> StoredTemplateSource:
    return request.app.state.templates
