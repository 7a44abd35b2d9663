"""
models.py — Transcript data structures.

The remote transcription API returns a flat list of caption segments.  This
module turns that list into immutable dataclasses and derives the joined
full text once, so every exporter sees the same string.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from transcriptx.errors import MalformedResponseError


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscriptSegment:
    """
    One caption fragment as returned by the transcription service.

    Attributes:
        start:    Offset from the start of the video, in seconds.
        duration: How long the caption is shown, in seconds.
        text:     The spoken words.
    """
    start: int | float
    duration: int | float
    text: str

    @classmethod
    def from_dict(cls, raw: Any) -> TranscriptSegment:
        """
        Build a segment from one entry of the API's `transcript` array.

        Raises:
            MalformedResponseError: If the entry isn't an object, or its
                `start` / `duration` aren't finite non-negative numbers, or its
                `text` isn't a string.
        """
        if not isinstance(raw, Mapping):
            raise MalformedResponseError("transcript segment is not an object")

        values: dict[str, int | float] = {}
        for key in ("start", "duration"):
            value = raw.get(key)
            # bool is an int subclass; reject it explicitly.
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedResponseError(f"segment {key} is not a number")
            if not math.isfinite(value):
                raise MalformedResponseError(f"segment {key} is not finite")
            if value < 0:
                raise MalformedResponseError(f"segment {key} is negative")
            # Kept as received: 0 stays 0, 2.5 stays 2.5.
            values[key] = value

        text = raw.get("text")
        if not isinstance(text, str):
            raise MalformedResponseError("segment text is not a string")

        return cls(start=values["start"], duration=values["duration"], text=text)

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "duration": self.duration, "text": self.text}


@dataclass(frozen=True)
class TranscriptDocument:
    """
    The in-memory aggregate for one fetched transcript.

    Attributes:
        video_id:  The video identifier echoed back by the service.
        title:     Display title.  The service doesn't supply one, so the
                   client fills in "Video {video_id}".
        full_text: Segment texts joined by newlines, in received order.
        segments:  The ordered caption segments.  Never empty for a
                   document produced by TranscriptClient.
    """
    video_id: str
    title: str | None
    full_text: str
    segments: tuple[TranscriptSegment, ...]

    @classmethod
    def from_segments(
        cls,
        video_id: str,
        segments: Sequence[TranscriptSegment],
        title: str | None = None,
    ) -> TranscriptDocument:
        """Build a document, deriving `full_text` from the segments."""
        segments = tuple(segments)
        return cls(
            video_id=video_id,
            title=title,
            full_text="\n".join(segment.text for segment in segments),
            segments=segments,
        )
