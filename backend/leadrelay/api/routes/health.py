"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 while no gateway credential is configured
    - Readiness never calls the gateway (no outbound traffic from probes)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from leadrelay.api.deps import get_credential_provider
from leadrelay.infrastructure.credentials import StoredCredentialProvider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "leadrelay-api"}


@router.get("/ready")
async def readiness_check(
    credentials: StoredCredentialProvider = Depends(get_credential_provider),
):
    if not await credentials.is_configured():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "gateway_credential_missing"},
        )
    return {"status": "ready", "checks": {"gateway_credential": "configured"}}
