"""Error Handlers — envelope contents and log levels per error type.

Invariants:
    - InvalidInputError → 400, logged at WARNING
    - DeliveryFailedError → 502, failure_kind/attempts_made in body and log extras
    - Unhandled exceptions → 500 with no internal detail
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from leadrelay.api.error_handlers import register_error_handlers
from leadrelay.core.errors import (
    DeliveryFailedError,
    ErrorContext,
    InvalidInputError,
)

LOGGER = "leadrelay.api.error_handlers"


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/invalid")
    async def invalid():
        raise InvalidInputError("'to' must not be empty", field="to")

    @app.get("/undelivered")
    async def undelivered():
        raise DeliveryFailedError(
            "Max retry attempts reached", "retry_exhausted", 3,
            context=ErrorContext(recipient="+971500000000"),
        )

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret connection string")

    return app


@pytest.fixture
async def error_client():
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_invalid_input_is_400_logged_as_warning(error_client, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)

    res = await error_client.get("/invalid")

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"
    records = [r for r in caplog.records if r.name == LOGGER]
    assert [r.levelno for r in records] == [logging.WARNING]


async def test_delivery_failure_carries_kind_and_attempts(error_client, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)

    res = await error_client.get("/undelivered")

    assert res.status_code == 502
    error = res.json()["error"]
    assert error["code"] == "DELIVERY_FAILED"
    assert error["failure_kind"] == "retry_exhausted"
    assert error["attempts_made"] == 3
    assert error["context"]["recipient"] == "+971500000000"

    record = next(r for r in caplog.records if r.name == LOGGER)
    assert record.levelno == logging.ERROR
    assert record.failure_kind == "retry_exhausted"
    assert record.attempt == 3


async def test_unexpected_error_hides_internals(error_client):
    res = await error_client.get("/boom")

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text
