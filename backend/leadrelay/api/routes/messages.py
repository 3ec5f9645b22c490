"""Message Routes — admin-triggered text/image sends through the dispatcher.

Invariants:
    - Delivery failures return 200 with outcome=failure (result is data, not an error)
    - Malformed input returns 400 before any gateway call
"""

from fastapi import APIRouter, Depends

from leadrelay.api.deps import get_dispatcher
from leadrelay.core.messages import build_image, build_text
from leadrelay.schemas.messages import (
    DispatchResultResponse,
    ImageMessageRequest,
    TextMessageRequest,
)
from leadrelay.services.dispatcher import MessageDispatcher

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post("/text", response_model=DispatchResultResponse)
async def send_text(
    body: TextMessageRequest,
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
):
    message = build_text(body.to, body.text)
    result = await dispatcher.dispatch(message, max_attempts=body.max_attempts)
    return DispatchResultResponse.from_result(result)


@router.post("/image", response_model=DispatchResultResponse)
async def send_image(
    body: ImageMessageRequest,
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
):
    message = build_image(body.to, body.url, body.caption)
    result = await dispatcher.dispatch(message, max_attempts=body.max_attempts)
    return DispatchResultResponse.from_result(result)
