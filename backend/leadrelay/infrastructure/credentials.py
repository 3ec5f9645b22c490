"""Credential Sources — supply the gateway bearer token to the dispatcher.

Invariants:
    - get_credential() returning None is a normal outcome ("not yet configured")
    - Providers are read-only from the dispatcher's view; only admin routes write
    - Blank or whitespace-only keys are treated as absent
    - A failing config store falls back to the environment key, never raises

Design Decisions:
    - Protocol over a base class: the dispatcher only needs get_credential()
    - The admin-managed key lives in the shared ConfigStore next to the lead template
"""

import logging
from typing import Protocol

from leadrelay.core.domain_types import Credential
from leadrelay.core.errors import InvalidInputError
from leadrelay.infrastructure.config_store import ConfigStore

logger = logging.getLogger(__name__)

GATEWAY_API_KEY = "wassender_api_key"


class CredentialProvider(Protocol):
    async def get_credential(self) -> Credential | None: ...


class StaticCredentialProvider:
    """Always returns the same token (or None). For scripts and tests."""

    def __init__(self, token: str | None):
        self._token = _clean(token)

    async def get_credential(self) -> Credential | None:
        return self._token


class StoredCredentialProvider:
    """Reads the admin-managed API key from a ConfigStore, env key as fallback."""

    def __init__(
        self, store: ConfigStore, fallback: str | None = None,
        key: str = GATEWAY_API_KEY,
    ):
        self._store = store
        self._fallback = _clean(fallback)
        self._key = key

    async def get_credential(self) -> Credential | None:
        try:
            value = await self._store.get(self._key)
        except Exception:
            logger.warning(
                "Config store lookup failed, using fallback credential",
                exc_info=True,
            )
            return self._fallback
        return _clean(value) or self._fallback

    async def save(self, api_key: str) -> None:
        """Persist a new API key. Rejects blank keys."""
        cleaned = _clean(api_key)
        if cleaned is None:
            raise InvalidInputError("'api_key' must not be empty", field="api_key")
        await self._store.set(self._key, cleaned)
        logger.info("Gateway API key saved")

    async def remove(self) -> None:
        await self._store.delete(self._key)
        logger.info("Gateway API key removed")

    async def is_configured(self) -> bool:
        return await self.get_credential() is not None


def _clean(value: str | None) -> Credential | None:
    if value is None:
        return None
    value = value.strip()
    return Credential(value) if value else None
