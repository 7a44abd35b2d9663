"""
api.py — FastAPI web API for transcriptx.

Endpoints:
    GET /transcript?url=...&format=txt|json|md  — Fetch a transcript and return it as a download.
    GET /preview?url=...                        — Fetch a transcript and return a short preview.
    GET /health                                 — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn transcriptx.api:app

Each request runs its own RequestController, so there is no state shared
between requests.  The global exception handler converts any TranscriptError
into a JSON error body using the status code stored on the exception.
"""

from __future__ import annotations

from urllib.parse import quote

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from transcriptx.client import TranscriptClient
from transcriptx.controller import Failed, RequestController
from transcriptx.errors import TranscriptError
from transcriptx.formatting import EXPORTERS

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="TranscriptX API",
    description="Fetch YouTube video transcripts and download them as plain text, "
                "JSON with timestamps, or Markdown.",
    version="1.0.0",
)

_FORMAT_PATTERN = "^(" + "|".join(EXPORTERS) + ")$"


def get_transcript_client() -> TranscriptClient:
    """Dependency providing the client; override it to point elsewhere."""
    return TranscriptClient()


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """Translate any TranscriptError (or subclass) into an HTTP error response."""
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.message, "detail": exc.detail},
    )


def _content_disposition(filename: str) -> str:
    """
    Build an attachment header the same way Starlette's FileResponse does:
    a plain quoted filename when it is URL-safe, RFC 5987 `filename*`
    otherwise.
    """
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


async def _submit(url: str, client: TranscriptClient) -> RequestController:
    controller = RequestController(client)
    state = await controller.submit(url)
    if isinstance(state, Failed):
        raise state.error
    return controller


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/transcript", response_model=None)
async def download_transcript(
    url: str = Query(description="A youtube.com/watch?v=... or youtu.be/... link."),
    format: str = Query(
        default="txt",
        description="Export format: 'txt' for plain text, 'json' for structured data "
                    "with timestamps, 'md' for a Markdown document.",
        pattern=_FORMAT_PATTERN,
    ),
    client: TranscriptClient = Depends(get_transcript_client),
) -> Response:
    """
    Fetch the transcript for **url** and return it as a file download.

    The body is the export itself; `Content-Disposition` carries the
    generated `{videoId}-transcript.{ext}` filename.
    """
    controller = await _submit(url, client)
    export_file = controller.export(format)
    return Response(
        content=export_file.content,
        media_type=export_file.mime_type,
        headers={"Content-Disposition": _content_disposition(export_file.filename)},
    )


@app.get("/preview")
async def preview_transcript(
    url: str = Query(description="A youtube.com/watch?v=... or youtu.be/... link."),
    client: TranscriptClient = Depends(get_transcript_client),
) -> JSONResponse:
    """
    Fetch the transcript for **url** and return the first lines of it along
    with the segment count.
    """
    controller = await _submit(url, client)
    document = controller.document
    return JSONResponse(content={
        "videoId": document.video_id,
        "title": document.title,
        "segmentCount": len(document.segments),
        "preview": controller.preview(),
    })


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Minimal health-check endpoint.  Returns HTTP 200 with {"status": "ok"}."""
    return {"status": "ok"}
