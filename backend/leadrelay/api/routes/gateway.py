"""Gateway Admin Routes — API key management and gateway status diagnostics.

Invariants:
    - The stored API key is never echoed back; GET only reports whether one is set
    - /status is a single diagnostic call; its errors map through LeadRelayError handlers
"""

import logging

from fastapi import APIRouter, Depends, status

from leadrelay.api.deps import get_credential_provider, get_dispatcher
from leadrelay.infrastructure.credentials import StoredCredentialProvider
from leadrelay.schemas.gateway import (
    CredentialStatus,
    CredentialUpdate,
    GatewayStatusResponse,
)
from leadrelay.services.dispatcher import MessageDispatcher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/gateway", tags=["gateway"])


@router.get("/status", response_model=GatewayStatusResponse)
async def gateway_status(
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
):
    remote = await dispatcher.check_status()
    return GatewayStatusResponse(connected=True, remote=remote)


@router.get("/credential", response_model=CredentialStatus)
async def credential_status(
    credentials: StoredCredentialProvider = Depends(get_credential_provider),
):
    return CredentialStatus(configured=await credentials.is_configured())


@router.put("/credential", response_model=CredentialStatus)
async def save_credential(
    body: CredentialUpdate,
    credentials: StoredCredentialProvider = Depends(get_credential_provider),
):
    await credentials.save(body.api_key)
    return CredentialStatus(configured=True)


@router.delete("/credential", status_code=status.HTTP_204_NO_CONTENT)
async def remove_credential(
    credentials: StoredCredentialProvider = Depends(get_credential_provider),
):
    await credentials.remove()
