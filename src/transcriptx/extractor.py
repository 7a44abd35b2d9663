"""
extractor.py — Turn a user-supplied YouTube link into a video ID.

Extraction is two-tier:

    1. Validate the link against a permissive pattern  → is_valid_youtube_url()
    2. Pull out the ID with a strict URL parse, falling
       back to a regex for loosely-formed input        → extract_video_id()

check_url() rejects blank or non-YouTube input up front; parse_video_id()
chains it with extraction and raises the classified input errors the
controller and the CLI report to the user.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qs, urlsplit

from transcriptx.errors import EmptyInputError, InvalidUrlError, VideoIdNotFoundError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Accepted link shapes (scheme and "www." optional):
#   - youtube.com/watch?v=VIDEO_ID
#   - youtu.be/VIDEO_ID
# Only the start of the input is anchored; anything after the first ID
# character run (extra query params, timestamps) is allowed.
_VALID_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)[A-Za-z0-9_-]+"
)

# Used only when the input can't be parsed as an absolute URL.  The ID runs
# until whitespace, "&" or "?".
_FALLBACK_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^\s&?]+)")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def is_valid_youtube_url(url: str) -> bool:
    """Return True if the trimmed input looks like a watch or short link."""
    return _VALID_URL_PATTERN.match(url.strip()) is not None


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_video_id(url: str) -> str | None:
    """
    Extract the video ID from a YouTube link.

    A strict parse is tried first.  Links on a youtube.com host yield their
    `v` query parameter; youtu.be links yield the first path segment.  Input
    that isn't an absolute URL (no scheme or no host) goes through a regex
    instead.

    Args:
        url: The raw link as typed by the user.

    Returns:
        The video ID, or None if none could be found.
    """
    url = url.strip()

    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        # urlsplit rejects things like unbalanced IPv6 brackets.
        parts = None
        host = None

    if parts is None or not parts.scheme or not host:
        match = _FALLBACK_ID_PATTERN.search(url)
        return match.group(1) if match else None

    if "youtube.com" in host:
        values = parse_qs(parts.query).get("v")
        return values[0] if values and values[0] else None

    if "youtu.be" in host:
        first_segment = parts.path.lstrip("/").split("/", 1)[0]
        return first_segment or None

    return None


def check_url(url: str) -> None:
    """
    Reject input that can't be a YouTube link, before any parsing.

    Raises:
        EmptyInputError: The input is blank.
        InvalidUrlError: The input isn't a recognisable YouTube link.
    """
    if not url.strip():
        raise EmptyInputError()

    if not is_valid_youtube_url(url):
        raise InvalidUrlError(url)


def parse_video_id(url: str) -> str:
    """
    Validate a link and return its video ID.

    Args:
        url: The raw link as typed by the user.

    Returns:
        The video ID.

    Raises:
        EmptyInputError:      The input is blank.
        InvalidUrlError:      The input isn't a recognisable YouTube link.
        VideoIdNotFoundError: The link is valid but carries no usable ID.
    """
    check_url(url)

    video_id = extract_video_id(url)
    if not video_id:
        raise VideoIdNotFoundError(url)

    logger.debug("Extracted video ID %s from %r", video_id, url)
    return video_id
