"""Lead Routes — landing-page form submission.

Invariants:
    - Always 202 with the same visitor-facing acknowledgment, whether or not
      the sales-team notification was delivered
    - Delivery outcome is included for the frontend/admin, never as an HTTP error
"""

from fastapi import APIRouter, Depends, status

from leadrelay.api.deps import get_lead_notifier
from leadrelay.schemas.messages import (
    DispatchResultResponse,
    LeadAcknowledgement,
    LeadCreate,
)
from leadrelay.services.lead_notifier import LeadNotifier

router = APIRouter(prefix="/api/v1/leads", tags=["leads"])

ACKNOWLEDGEMENT = "Thank you! Our PPF specialists will contact you shortly."


@router.post(
    "", response_model=LeadAcknowledgement,
    status_code=status.HTTP_202_ACCEPTED,
)
async def submit_lead(
    body: LeadCreate,
    notifier: LeadNotifier = Depends(get_lead_notifier),
):
    result = await notifier.notify(body.whatsapp_number)
    return LeadAcknowledgement(
        message=ACKNOWLEDGEMENT,
        delivery=DispatchResultResponse.from_result(result),
    )
