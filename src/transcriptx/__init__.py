"""
transcriptx — Fetch YouTube transcripts and export them as TXT, JSON or Markdown.

Public API:
    parse_video_id()      Validate a YouTube link and return its video ID.
    extract_video_id()    Pull a video ID out of a link (None if absent).
    TranscriptClient      Async client for the remote transcription API.
    RequestController     Per-view request lifecycle holding one transcript.
    export_text() / export_json() / export_markdown()
                          Render a TranscriptDocument as a downloadable file.

Exception hierarchy (all importable from this package):
    TranscriptError                  Base exception for all transcript errors.
    ├── EmptyInputError              Blank submission.
    ├── InvalidUrlError              Not a youtube.com/watch or youtu.be link.
    ├── VideoIdNotFoundError         Link carries no usable video ID.
    ├── RequestTimeoutError          Endpoint didn't answer in time.
    ├── NetworkError                 Transport-level failure.
    ├── HttpStatusError              Non-2xx response.
    ├── UnexpectedContentTypeError   Response isn't JSON.
    ├── ResponseParseError           JSON body doesn't parse.
    ├── MalformedResponseError       No usable transcript array.
    └── EmptyTranscriptError         Video has no captions.

Usage:
    import asyncio
    from transcriptx import RequestController, TranscriptClient

    controller = RequestController(TranscriptClient())
    asyncio.run(controller.submit("https://www.youtube.com/watch?v=dQw4w9WgXcQ"))
    print(controller.export("md").content)
"""

from transcriptx.client import TranscriptClient
from transcriptx.controller import (
    Failed,
    Idle,
    Loading,
    Ready,
    RequestController,
    RequestState,
)
from transcriptx.errors import (
    EmptyInputError,
    EmptyTranscriptError,
    HttpStatusError,
    InvalidUrlError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    TranscriptError,
    UnexpectedContentTypeError,
    VideoIdNotFoundError,
)
from transcriptx.extractor import (
    check_url,
    extract_video_id,
    is_valid_youtube_url,
    parse_video_id,
)
from transcriptx.formatting import (
    ExportFile,
    export,
    export_json,
    export_markdown,
    export_text,
    format_timestamp,
    preview_text,
)
from transcriptx.models import TranscriptDocument, TranscriptSegment

__all__ = [
    "parse_video_id",
    "extract_video_id",
    "is_valid_youtube_url",
    "check_url",
    "TranscriptClient",
    "RequestController",
    "RequestState",
    "Idle",
    "Loading",
    "Ready",
    "Failed",
    "TranscriptSegment",
    "TranscriptDocument",
    "ExportFile",
    "export",
    "export_text",
    "export_json",
    "export_markdown",
    "format_timestamp",
    "preview_text",
    "TranscriptError",
    "EmptyInputError",
    "InvalidUrlError",
    "VideoIdNotFoundError",
    "RequestTimeoutError",
    "NetworkError",
    "HttpStatusError",
    "UnexpectedContentTypeError",
    "ResponseParseError",
    "MalformedResponseError",
    "EmptyTranscriptError",
]
