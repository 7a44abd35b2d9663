"""
test_client.py — Tests for TranscriptClient against a fake endpoint.

Every test drives the real client code through httpx.MockTransport, so the
request building, timeout handling and response validation all run; only
the network is replaced.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import FakeEndpoint, json_response
from transcriptx.errors import (
    EmptyTranscriptError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    UnexpectedContentTypeError,
)
from transcriptx.models import TranscriptSegment


def _fetch(endpoint: FakeEndpoint, video_id: str = "abc123", **kwargs):
    return asyncio.run(endpoint.client(**kwargs).fetch_transcript(video_id))


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------

class TestFetchTranscript:
    """Happy-path behaviour."""

    def test_builds_document(self, endpoint: FakeEndpoint) -> None:
        document = _fetch(endpoint)

        assert document.video_id == "abc123"
        assert document.title == "Video abc123"
        assert document.full_text == "hi\nthere"
        assert document.segments == (
            TranscriptSegment(start=0.0, duration=2.0, text="hi"),
            TranscriptSegment(start=2.0, duration=3.0, text="there"),
        )

    def test_sends_single_get_with_video_id(self, endpoint: FakeEndpoint) -> None:
        _fetch(endpoint, "dQw4w9WgXcQ")

        assert len(endpoint.requests) == 1
        request = endpoint.requests[0]
        assert request.method == "GET"
        assert request.url.host == "transcripts.test"
        assert request.url.path == "/api/GetTranscript"
        assert request.url.params["videoId"] == "dQw4w9WgXcQ"
        assert "authorization" not in request.headers

    def test_title_uses_returned_video_id(self) -> None:
        endpoint = FakeEndpoint(lambda request: json_response({
            "videoId": "canonical",
            "transcript": [{"start": 0, "duration": 1, "text": "x"}],
        }))
        document = _fetch(endpoint, "requested")
        assert document.video_id == "canonical"
        assert document.title == "Video canonical"

    def test_missing_video_id_falls_back_to_requested(self) -> None:
        endpoint = FakeEndpoint(lambda request: json_response({
            "transcript": [{"start": 0, "duration": 1, "text": "x"}],
        }))
        document = _fetch(endpoint, "requested")
        assert document.video_id == "requested"

    def test_content_type_match_is_case_insensitive(self) -> None:
        endpoint = FakeEndpoint(lambda request: httpx.Response(
            200,
            content=b'{"videoId": "a", "transcript": [{"start": 0, "duration": 1, "text": "x"}]}',
            headers={"content-type": "Application/JSON"},
        ))
        assert _fetch(endpoint).full_text == "x"


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------

class TestTransportErrors:
    """Timeouts and connection problems."""

    def test_slow_server_times_out(self) -> None:
        async def slow(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return json_response({})

        endpoint = FakeEndpoint(slow)

        with pytest.raises(RequestTimeoutError) as exc_info:
            _fetch(endpoint, timeout=0.05)

        assert exc_info.value.message.startswith("Request timed out")
        assert "shorter video" in exc_info.value.detail
        assert exc_info.value.http_status == 504
        assert len(endpoint.requests) == 1

    def test_httpx_timeout_maps_to_timeout(self) -> None:
        def raise_timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(RequestTimeoutError):
            _fetch(FakeEndpoint(raise_timeout))

    def test_connection_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        endpoint = FakeEndpoint(refuse)
        with pytest.raises(NetworkError) as exc_info:
            _fetch(endpoint)

        assert exc_info.value.message == "Network error or CORS issue detected."
        assert "cross-origin" in exc_info.value.detail
        # No retry.
        assert len(endpoint.requests) == 1


# ---------------------------------------------------------------------------
# Response validation
# ---------------------------------------------------------------------------

class TestResponseValidation:
    """Each validation step maps to its own error class."""

    def test_http_error_status(self) -> None:
        endpoint = FakeEndpoint(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(HttpStatusError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "API Error: 500 Internal Server Error"

    def test_http_error_checked_before_content_type(self) -> None:
        endpoint = FakeEndpoint(lambda request: json_response({"error": "nope"}, status_code=404))
        with pytest.raises(HttpStatusError):
            _fetch(endpoint)

    def test_non_json_content_type(self) -> None:
        endpoint = FakeEndpoint(lambda request: httpx.Response(
            200, text="<html>maintenance</html>", headers={"content-type": "text/html"},
        ))
        with pytest.raises(UnexpectedContentTypeError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.message == "Failed to parse API response."
        assert exc_info.value.detail == "Expected JSON response, got: text/html"

    def test_missing_content_type(self) -> None:
        endpoint = FakeEndpoint(lambda request: httpx.Response(200, content=b"{}"))
        with pytest.raises(UnexpectedContentTypeError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.detail == "Expected JSON response, got: unknown"

    def test_unparseable_body(self) -> None:
        endpoint = FakeEndpoint(lambda request: httpx.Response(
            200, content=b'{"videoId": "abc', headers={"content-type": "application/json"},
        ))
        with pytest.raises(ResponseParseError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.message == "Failed to parse API response."

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_number_is_rejected(self, constant: str) -> None:
        body = (
            '{"videoId": "abc123", "transcript": '
            f'[{{"start": {constant}, "duration": 1, "text": "x"}}]}}'
        )
        endpoint = FakeEndpoint(lambda request: httpx.Response(
            200, content=body.encode(), headers={"content-type": "application/json"},
        ))
        with pytest.raises(ResponseParseError):
            _fetch(endpoint)

    @pytest.mark.parametrize("body", [
        {"videoId": "abc123"},
        {"videoId": "abc123", "transcript": None},
        {"videoId": "abc123", "transcript": "hi there"},
        [{"start": 0, "duration": 1, "text": "x"}],
    ])
    def test_missing_transcript_array(self, body: object) -> None:
        endpoint = FakeEndpoint(lambda request: json_response(body))
        with pytest.raises(MalformedResponseError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.message.startswith("Invalid response format")

    def test_malformed_segment(self) -> None:
        endpoint = FakeEndpoint(lambda request: json_response({
            "videoId": "abc123",
            "transcript": [{"start": 0, "duration": 1}],
        }))
        with pytest.raises(MalformedResponseError):
            _fetch(endpoint)

    def test_empty_transcript(self) -> None:
        endpoint = FakeEndpoint(lambda request: json_response(
            {"videoId": "abc123", "transcript": []}
        ))
        with pytest.raises(EmptyTranscriptError) as exc_info:
            _fetch(endpoint)
        assert exc_info.value.message.startswith("No transcript available for this video")
        assert exc_info.value.http_status == 404
