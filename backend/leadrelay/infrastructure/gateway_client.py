"""Gateway Client — thin async HTTP wrapper over the messaging gateway REST API.

Invariants:
    - One call = one HTTP request; no retry here (the dispatcher owns retries)
    - Request-level failures (DNS, refused, timeout, undecodable body,
      redirect loop) become HttpOutcome.connection_failed, never an exception
    - Non-2xx responses are returned as data with the decoded JSON body when present
    - The bearer credential is passed per call and never stored or logged

Design Decisions:
    - Shared httpx.AsyncClient injected by the caller: one connection pool per
      process, closed by the app lifespan
    - Per-call timeout overrides the client default (30s send, 10s status)
"""

import logging

import httpx

from leadrelay.core.domain_types import Credential
from leadrelay.core.retry_policy import HttpOutcome

logger = logging.getLogger(__name__)

SEND_MESSAGE_PATH = "/send-message"
STATUS_PATH = "/status"


class GatewayClient:
    """Issues single requests to the gateway and reports what happened."""

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self._http = http
        self.base_url = base_url.rstrip("/")

    async def send_message(
        self, payload: dict, credential: Credential, timeout: float,
    ) -> HttpOutcome:
        """POST {base}/send-message with the message payload."""
        return await self._request(
            "POST", SEND_MESSAGE_PATH, credential, timeout, json=payload,
        )

    async def get_status(self, credential: Credential, timeout: float) -> HttpOutcome:
        """GET {base}/status."""
        return await self._request("GET", STATUS_PATH, credential, timeout)

    async def _request(
        self, method: str, path: str, credential: Credential, timeout: float,
        json: dict | None = None,
    ) -> HttpOutcome:
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        try:
            resp = await self._http.request(
                method, f"{self.base_url}{path}",
                headers=headers, json=json, timeout=timeout,
            )
        except httpx.RequestError as e:
            detail = str(e) or type(e).__name__
            logger.debug(f"Gateway {method} {path} connection failure: {detail}")
            return HttpOutcome.connection_failed(detail)
        return HttpOutcome(
            status_code=resp.status_code,
            body=_json_body(resp),
            text=resp.text[:1000],
        )


def _json_body(resp: httpx.Response) -> dict | None:
    """Decoded JSON object body, or None for empty/non-JSON/non-object bodies."""
    try:
        data = resp.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
