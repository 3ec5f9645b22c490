"""Lead Template Sources — the active sales-team message template.

Invariants:
    - get_active() always returns a usable template: the admin-saved one when
      present and non-blank, otherwise the configured default
    - A failing config store falls back to the default, never raises
    - Saved templates are stored verbatim (line breaks and emoji preserved)
    - reset() removes the saved template so the default applies again

Design Decisions:
    - Read on every lead: an admin edit takes effect for the next submission
      without a restart
"""

import logging
from typing import Protocol

from leadrelay.core.errors import InvalidInputError
from leadrelay.core.templates import DEFAULT_LEAD_TEMPLATE
from leadrelay.infrastructure.config_store import ConfigStore

logger = logging.getLogger(__name__)

LEAD_TEMPLATE_KEY = "ppf_message_template"


class TemplateSource(Protocol):
    async def get_active(self) -> str: ...


class StaticTemplateSource:
    """Always the same template. For scripts and tests."""

    def __init__(self, template: str = DEFAULT_LEAD_TEMPLATE):
        self._template = template

    async def get_active(self) -> str:
        return self._template


class StoredTemplateSource:
    """Admin-edited template from a ConfigStore, configured default as fallback."""

    def __init__(
        self, store: ConfigStore, default: str = DEFAULT_LEAD_TEMPLATE,
        key: str = LEAD_TEMPLATE_KEY,
    ):
        self._store = store
        self.default = default
        self._key = key

    async def get_active(self) -> str:
        return await self._stored() or self.default

    async def is_customized(self) -> bool:
        return await self._stored() is not None

    async def save(self, template: str) -> None:
        if not template or not template.strip():
            raise InvalidInputError("'template' must not be empty", field="template")
        await self._store.set(self._key, template)
        logger.info("Lead message template saved")

    async def reset(self) -> None:
        await self._store.delete(self._key)
        logger.info("Lead message template reset to default")

    async def _stored(self) -> str | None:
        try:
            value = await self._store.get(self._key)
        except Exception:
            logger.warning(
                "Config store lookup failed, using default lead template",
                exc_info=True,
            )
            return None
        if value is None or not value.strip():
            return None
        return value
