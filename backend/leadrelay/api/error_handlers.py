"""Error Handlers — map LeadRelay failures onto the JSON error envelope.

Invariants:
    - Client-side failures (http_status < 500) log at warning, gateway and
      configuration failures at error
    - DeliveryFailedError carries failure_kind and attempts_made into both the
      log record and the envelope
    - Request body validation answers 400 with one entry per offending field
    - Anything else is a 500 that names no internals
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from leadrelay.core.errors import DeliveryFailedError, LeadRelayError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LeadRelayError, _handle_leadrelay_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_leadrelay_error(request: Request, exc: LeadRelayError):
    extra = {"error_code": exc.code, "path": request.url.path}
    if isinstance(exc, DeliveryFailedError):
        extra["failure_kind"] = exc.failure_kind
        extra["attempt"] = exc.attempts_made
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(level, f"{exc.code}: {exc.message}", extra=extra)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "details": details,
        }},
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": "internal",
        }},
    )
