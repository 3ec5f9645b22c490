"""Gateway Status Check — single diagnostic call, no retry.

Tests cover:
    - Returns the decoded status payload on 2xx
    - GET {base}/status with bearer auth and a 10s timeout
    - MissingCredentialError without any request
    - GatewayTransportError on connection failure, GatewayRemoteError on non-2xx
    - Never retries (one request per call)
"""

import httpx
import pytest

from leadrelay.core.errors import (
    GatewayRemoteError,
    GatewayTransportError,
    MissingCredentialError,
)

from tests.fake_gateway import BASE_URL


async def test_status_returns_remote_payload(make_dispatcher):
    dispatcher, gateway = make_dispatcher([(200, {"status": "connected"})])

    status = await dispatcher.check_status()

    assert status == {"status": "connected"}
    request = gateway.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}/status"
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.extensions["timeout"]["read"] == 10.0


async def test_status_without_credential_raises(make_dispatcher):
    dispatcher, gateway = make_dispatcher([], token=None)

    with pytest.raises(MissingCredentialError):
        await dispatcher.check_status()
    assert gateway.calls == 0


async def test_status_connection_failure_raises_transport_error(make_dispatcher, fake_sleep):
    dispatcher, gateway = make_dispatcher([httpx.ConnectError("refused")])

    with pytest.raises(GatewayTransportError):
        await dispatcher.check_status()
    assert gateway.calls == 1
    assert fake_sleep.calls == []


async def test_status_non_2xx_raises_remote_error(make_dispatcher):
    dispatcher, gateway = make_dispatcher([(401, {"message": "Unauthorized"})])

    with pytest.raises(GatewayRemoteError) as exc:
        await dispatcher.check_status()
    assert exc.value.status_code == 401
    assert "Unauthorized" in exc.value.message
    assert gateway.calls == 1


async def test_status_non_json_body_is_wrapped(make_dispatcher):
    dispatcher, _ = make_dispatcher([200])

    assert await dispatcher.check_status() == {"status": ""}
