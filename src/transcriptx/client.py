"""
client.py — HTTP client for the remote transcription API.

The service takes a video ID and answers with

    {"videoId": "...", "transcript": [{"start": 0, "duration": 2, "text": "hi"}, ...]}

TranscriptClient makes exactly one GET per call, bounds the whole exchange
by a timeout, and validates the response step by step so every failure maps
onto one TranscriptError subclass.  No retries.
"""

from __future__ import annotations

import asyncio
import json
import logging

import httpx

from transcriptx.errors import (
    EmptyTranscriptError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    UnexpectedContentTypeError,
)
from transcriptx.models import TranscriptDocument, TranscriptSegment

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_ENDPOINT = (
    "https://transcriberapi2-hahuhgd4caayd2by.centralindia-01.azurewebsites.net"
    "/api/GetTranscript"
)

# Long videos take the service 15-20 seconds; 30 leaves headroom.
DEFAULT_TIMEOUT_SECS = 30.0

_JSON_CONTENT_TYPE = "application/json"

# How much of an unexpected body to put in the debug log.
_LOG_PREVIEW_CHARS = 500


def _reject_constant(token: str) -> None:
    """json.loads hook: NaN and Infinity aren't valid JSON."""
    raise ValueError(f"Invalid JSON constant: {token}")


class TranscriptClient:
    """
    Fetches transcripts from the remote transcription API.

    Args:
        endpoint:  Base URL of the GetTranscript endpoint.  The video ID is
                   sent as the `videoId` query parameter.
        timeout:   Absolute bound, in seconds, on one fetch.
        transport: Optional httpx transport.  Tests pass an
                   httpx.MockTransport here instead of touching the network.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def fetch_transcript(self, video_id: str) -> TranscriptDocument:
        """
        Fetch and validate the transcript for one video.

        Args:
            video_id: The YouTube video ID (NOT a full URL).

        Returns:
            A TranscriptDocument with at least one segment.

        Raises:
            RequestTimeoutError:        No answer within `timeout` seconds.
            NetworkError:               Transport-level failure.
            HttpStatusError:            Non-2xx status.
            UnexpectedContentTypeError: Response isn't labelled as JSON.
            ResponseParseError:         Body isn't valid JSON.
            MalformedResponseError:     No usable `transcript` array.
            EmptyTranscriptError:       The array is empty.
        """
        logger.info("Fetching transcript for video ID: %s", video_id)

        try:
            response = await asyncio.wait_for(self._get(video_id), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.error("Transcript request for %s timed out after %ss", video_id, self.timeout)
            raise RequestTimeoutError(video_id, self.timeout) from exc
        except httpx.HTTPError as exc:
            logger.error("Transport error fetching %s: %s", video_id, exc)
            raise NetworkError(str(exc)) from exc

        return self._parse_response(video_id, response)

    async def _get(self, video_id: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
            return await http.get(self.endpoint, params={"videoId": video_id})

    def _parse_response(self, video_id: str, response: httpx.Response) -> TranscriptDocument:
        logger.debug("Response status: %s", response.status_code)

        if not response.is_success:
            logger.error("API error response: %s", response.text[:_LOG_PREVIEW_CHARS])
            raise HttpStatusError(response.status_code, response.reason_phrase)

        content_type = response.headers.get("content-type")
        logger.debug("Content-Type: %s", content_type)
        if not content_type or _JSON_CONTENT_TYPE not in content_type.lower():
            logger.error("Non-JSON response received: %s", response.text[:_LOG_PREVIEW_CHARS])
            raise UnexpectedContentTypeError(content_type)

        body = response.text
        logger.debug("Response size: %d characters", len(body))
        try:
            data = json.loads(body, parse_constant=_reject_constant)
        except ValueError as exc:
            logger.error("JSON parse error: %s", exc)
            raise ResponseParseError() from exc

        raw_segments = data.get("transcript") if isinstance(data, dict) else None
        if not isinstance(raw_segments, list):
            logger.error("Invalid response structure: %r", data)
            raise MalformedResponseError()

        if not raw_segments:
            raise EmptyTranscriptError(video_id)

        segments = [TranscriptSegment.from_dict(raw) for raw in raw_segments]

        # Fall back to the requested ID when the service omits it.
        returned_id = data.get("videoId")
        if not isinstance(returned_id, str) or not returned_id:
            returned_id = video_id

        document = TranscriptDocument.from_segments(
            returned_id, segments, title=f"Video {returned_id}"
        )
        logger.info(
            "Fetched %d segments (%d characters) for %s",
            len(document.segments), len(document.full_text), returned_id,
        )
        return document
