"""
errors.py — Exception hierarchy for transcriptx.

Every exception carries a short user-facing `message`, a secondary `detail`
hint, and an `http_status` so the FastAPI error handler and the CLI can both
report library-level errors without a separate mapping table.

Hierarchy:
    TranscriptError (base, 500)
    ├── EmptyInputError (400)
    ├── InvalidUrlError (400)
    ├── VideoIdNotFoundError (400)
    ├── RequestTimeoutError (504)
    ├── NetworkError (502)
    ├── HttpStatusError (502)
    ├── UnexpectedContentTypeError (502)
    ├── ResponseParseError (502)
    ├── MalformedResponseError (502)
    └── EmptyTranscriptError (404)
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for all transcript-related errors.

    Attributes:
        message:     Short human-readable description of what went wrong.
        detail:      Secondary hint telling the user what to try next.
        http_status: Suggested HTTP status code for the API layer.
    """

    def __init__(self, message: str, detail: str = "", http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.http_status = http_status


# ---------------------------------------------------------------------------
# Input errors, raised before any network traffic
# ---------------------------------------------------------------------------

class EmptyInputError(TranscriptError):
    """Raised when the submitted URL is blank."""

    def __init__(self) -> None:
        super().__init__(
            message="Please enter a YouTube URL",
            detail="Example: https://www.youtube.com/watch?v=XXXXXXXXXXX",
            http_status=400,
        )


class InvalidUrlError(TranscriptError):
    """
    Raised when the input doesn't look like a youtube.com/watch or youtu.be
    link.  Maps to HTTP 400.
    """

    def __init__(self, url: str) -> None:
        super().__init__(
            message="Please enter a valid YouTube URL",
            detail="Example: https://www.youtube.com/watch?v=XXXXXXXXXXX",
            http_status=400,
        )
        self.url = url


class VideoIdNotFoundError(TranscriptError):
    """
    Raised when the URL passes validation but no video ID can be pulled out
    of it.  Maps to HTTP 400.
    """

    def __init__(self, url: str) -> None:
        super().__init__(
            message="Could not extract video ID from URL",
            detail="Check that the link points at a single video.",
            http_status=400,
        )
        self.url = url


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class RequestTimeoutError(TranscriptError):
    """
    Raised when the transcript endpoint doesn't answer within the timeout.

    Long videos can take the service 15-20 seconds to transcribe.
    Maps to HTTP 504.
    """

    def __init__(self, video_id: str, timeout: float) -> None:
        super().__init__(
            message="Request timed out. The video may be too long or the server is busy.",
            detail="Try a shorter video or wait a moment and retry.",
            http_status=504,
        )
        self.video_id = video_id
        self.timeout = timeout


class NetworkError(TranscriptError):
    """
    Raised for transport-level failures: DNS errors, refused connections,
    TLS problems, or a cross-origin block in front of the endpoint.
    Maps to HTTP 502.
    """

    def __init__(self, reason: str = "") -> None:
        super().__init__(
            message="Network error or CORS issue detected.",
            detail=(
                "The transcript API may be unreachable or blocking requests from "
                "this origin. Check the endpoint's cross-origin policy."
            ),
            http_status=502,
        )
        self.reason = reason


# ---------------------------------------------------------------------------
# Response errors: the endpoint answered, but not with a usable transcript
# ---------------------------------------------------------------------------

class HttpStatusError(TranscriptError):
    """Raised when the endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(
            message=f"API Error: {status_code} {reason}".rstrip(),
            detail="Run with --verbose for the full error response.",
            http_status=502,
        )
        self.status_code = status_code
        self.reason = reason


class UnexpectedContentTypeError(TranscriptError):
    """Raised when the response isn't labelled as JSON."""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            message="Failed to parse API response.",
            detail=f"Expected JSON response, got: {content_type or 'unknown'}",
            http_status=502,
        )
        self.content_type = content_type


class ResponseParseError(TranscriptError):
    """Raised when the response claims to be JSON but doesn't parse."""

    def __init__(self) -> None:
        super().__init__(
            message="Failed to parse API response.",
            detail="The response may be malformed.",
            http_status=502,
        )


class MalformedResponseError(TranscriptError):
    """
    Raised when the JSON body has no usable `transcript` array, or one of
    its segments is missing `start`, `duration` or `text`.
    """

    def __init__(self, reason: str = "transcript array not found") -> None:
        super().__init__(
            message=f"Invalid response format: {reason}",
            detail="The transcript API returned an unexpected structure.",
            http_status=502,
        )
        self.reason = reason


class EmptyTranscriptError(TranscriptError):
    """
    Raised when the video has no caption segments at all.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            message="No transcript available for this video. It may not have captions.",
            detail=f"Video {video_id} returned zero transcript segments.",
            http_status=404,
        )
        self.video_id = video_id
