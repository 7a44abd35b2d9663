"""
formatting.py — Export a TranscriptDocument as text, JSON or markdown.

Every exporter is a pure function: the same document always produces
byte-identical output.  New formats are added by writing a function and
registering it in EXPORTERS.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass

from transcriptx.models import TranscriptDocument

# Number of lines shown by preview_text() before the "... more lines" marker.
PREVIEW_LINES = 15

# Characters that are unsafe in filenames on Windows and/or POSIX systems,
# plus control characters.  Replaced with a hyphen in export filenames.
_UNSAFE_FILENAME_CHARS = re.compile(r'[:/\\?*<>|"\x00-\x1f]')


@dataclass(frozen=True)
class ExportFile:
    """
    A rendered export, ready to be written to disk or sent as a download.

    Attributes:
        content:   The file body.
        filename:  Suggested filename, e.g. "abc123-transcript.md".
        mime_type: MIME type for the body.
    """
    content: str
    filename: str
    mime_type: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def format_timestamp(seconds: float) -> str:
    """
    Convert seconds to a zero-padded HH:MM:SS clock time.

    The fractional part is dropped.  Hours keep counting past 24
    (90000 → "25:00:00").
    """
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def sanitize_filename(name: str) -> str:
    """
    Replace filesystem-unsafe characters with hyphens and clean up whitespace.

    The video ID comes from the remote service, so it may contain path
    separators or "..".  Leading and trailing dots and whitespace are
    stripped, which leaves no way to climb out of the target directory.

    Args:
        name: The raw string to sanitize (e.g. "../../escaped").

    Returns:
        A string safe to use as a filename (e.g. "-..-escaped").
    """
    sanitized = _UNSAFE_FILENAME_CHARS.sub("-", name)
    return sanitized.strip().strip(".")


def _filename(document: TranscriptDocument, extension: str) -> str:
    stem = sanitize_filename(document.video_id) or "video"
    return f"{stem}-transcript.{extension}"


# ---------------------------------------------------------------------------
# Exporters
# ---------------------------------------------------------------------------

def export_text(document: TranscriptDocument) -> ExportFile:
    """Plain text: the joined transcript, one segment per line."""
    return ExportFile(
        content=document.full_text,
        filename=_filename(document, "txt"),
        mime_type="text/plain",
    )


def export_json(document: TranscriptDocument) -> ExportFile:
    """
    Structured JSON holding both the full transcript and the timestamped
    segments.

    Keys follow the remote API's camelCase so the file can be fed back to
    tools that already speak it.
    """
    payload = {
        "videoId": document.video_id,
        "title": document.title,
        "fullTranscript": document.full_text,
        "segments": [segment.to_dict() for segment in document.segments],
    }
    return ExportFile(
        content=json.dumps(payload, indent=2, ensure_ascii=False),
        filename=_filename(document, "json"),
        mime_type="application/json",
    )


def export_markdown(document: TranscriptDocument) -> ExportFile:
    """
    Markdown document with a full-text section followed by one
    **[HH:MM:SS]** paragraph per segment.
    """
    parts = [
        f"# {document.title or 'Transcript'}\n\n",
        f"**Video ID:** {document.video_id}\n\n",
        f"## Full Transcript\n\n{document.full_text}\n\n",
        "## Transcript with Timestamps\n\n",
    ]
    for segment in document.segments:
        parts.append(f"**[{format_timestamp(segment.start)}]** {segment.text}\n\n")

    return ExportFile(
        content="".join(parts),
        filename=_filename(document, "md"),
        mime_type="text/markdown",
    )


# A registry mapping format names to their exporter.
EXPORTERS: dict[str, Callable[[TranscriptDocument], ExportFile]] = {
    "txt": export_text,
    "json": export_json,
    "md": export_markdown,
}


def export(document: TranscriptDocument, fmt: str) -> ExportFile:
    """
    Render `document` in the named format.

    Raises:
        ValueError: If fmt isn't one of EXPORTERS.
    """
    try:
        exporter = EXPORTERS[fmt]
    except KeyError:
        expected = ", ".join(repr(name) for name in EXPORTERS)
        raise ValueError(f"Unknown format {fmt!r}; expected one of {expected}") from None
    return exporter(document)


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

def preview_text(document: TranscriptDocument, max_lines: int = PREVIEW_LINES) -> str:
    """
    Return the first `max_lines` lines of the transcript.

    When lines are cut, a "... (N more lines)" marker is appended after a
    blank line.
    """
    lines = document.full_text.split("\n")
    preview = "\n".join(lines[:max_lines])
    hidden = len(lines) - max_lines
    if hidden > 0:
        preview += f"\n\n... ({hidden} more lines)"
    return preview
