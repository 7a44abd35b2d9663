"""
conftest.py — Shared fixtures: a fake transcription endpoint.

The fake endpoint is an httpx.MockTransport, so TranscriptClient runs its
real request/validation code without any network access.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from transcriptx.client import TranscriptClient

SAMPLE_BODY: dict[str, Any] = {
    "videoId": "abc123",
    "transcript": [
        {"start": 0, "duration": 2, "text": "hi"},
        {"start": 2, "duration": 3, "text": "there"},
    ],
}


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    """Build a response with a JSON content type."""
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode("utf-8"),
        headers={"content-type": "application/json; charset=utf-8"},
    )


class FakeEndpoint:
    """
    Records every request and answers with whatever `handler` returns.

    `handler` may be a plain function or a coroutine function (used to
    simulate a slow server).
    """

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    def client(self, timeout: float = 30.0) -> TranscriptClient:
        return TranscriptClient(
            endpoint="https://transcripts.test/api/GetTranscript",
            timeout=timeout,
            transport=httpx.MockTransport(self),
        )


@pytest.fixture()
def endpoint() -> FakeEndpoint:
    """A fake endpoint answering with the two-segment SAMPLE_BODY."""
    return FakeEndpoint(lambda request: json_response(SAMPLE_BODY))
