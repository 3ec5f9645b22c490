"""Fake Messaging Gateway — scripted httpx.MockTransport handler for dispatcher tests.

Invariants:
    - One scripted entry consumed per request, in order
    - Entry forms: int status, (status, json_body), or an exception instance to raise
    - Every request recorded (method, url, headers, json body) for assertions
    - Running out of entries fails the test loudly
"""

import json

import httpx

BASE_URL = "https://gateway.test/api"


class FakeGateway:
    """Plays back scripted responses and records what it received."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected gateway request: {request.method} {request.url}")
        entry = self.responses.pop(0)
        if isinstance(entry, Exception):
            raise entry
        status, body = entry if isinstance(entry, tuple) else (entry, None)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


class RecordingSleep:
    """Drop-in for asyncio.sleep that records durations and returns immediately."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)
