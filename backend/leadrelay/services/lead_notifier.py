"""Lead Notifier — forward a captured landing-page lead to the sales team.

Invariants:
    - notify() never raises for delivery failures; the caller always gets a DispatchResult
    - Invalid visitor input (blank number) raises InvalidInputError before any dispatch
    - The lead is assumed already recorded upstream; failure here never reverses that

Design Decisions:
    - Recipient fixed at construction; the template is fetched from its source
      on every notify() so admin edits apply to the next lead
"""

import logging

from leadrelay.core.messages import build_text
from leadrelay.core.results import DispatchResult
from leadrelay.core.templates import render_lead_message
from leadrelay.infrastructure.template_store import (
    StaticTemplateSource,
    TemplateSource,
)
from leadrelay.services.dispatcher import MessageDispatcher

logger = logging.getLogger(__name__)


class LeadNotifier:
    """Renders the lead template and dispatches it to the sales team number."""

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        sales_team_number: str,
        templates: TemplateSource | None = None,
    ):
        self._dispatcher = dispatcher
        self._sales_team_number = sales_team_number
        self._templates = templates or StaticTemplateSource()

    async def notify(self, whatsapp_number: str) -> DispatchResult:
        template = await self._templates.get_active()
        text = render_lead_message(template, whatsapp_number)
        message = build_text(self._sales_team_number, text)
        result = await self._dispatcher.dispatch(message)
        if result.succeeded:
            logger.info(
                "Lead forwarded to sales team",
                extra={"message_id": result.message_id},
            )
        else:
            logger.warning(
                f"Lead notification not delivered: {result.error_message}",
                extra={"failure_kind": result.failure_kind.value},
            )
        return result
