"""
controller.py — Request lifecycle for one transcript view.

RequestController owns the single current TranscriptDocument and moves
through four states per submission:

    Idle / Ready / Failed  →  Loading  →  Ready | Failed

Input that is blank or not a YouTube link fails immediately, without
entering Loading and without touching the network.

Overlapping submissions are allowed.  Each one takes a generation number
and only the newest may write state; an older one finishing late is logged
and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from transcriptx.client import TranscriptClient
from transcriptx.errors import TranscriptError
from transcriptx.extractor import check_url, parse_video_id
from transcriptx.formatting import ExportFile, export, preview_text
from transcriptx.models import TranscriptDocument

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    """Nothing submitted yet."""


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight."""
    video_id: str | None = None


@dataclass(frozen=True)
class Ready:
    """The last submission produced a transcript."""
    document: TranscriptDocument


@dataclass(frozen=True)
class Failed:
    """The last submission failed; `error` says why."""
    error: TranscriptError

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def detail(self) -> str:
        return self.error.detail


RequestState = Union[Idle, Loading, Ready, Failed]


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------

class RequestController:
    """
    Orchestrates extractor → client for each submission and holds the result.

    Args:
        client: The TranscriptClient used for every fetch.
    """

    def __init__(self, client: TranscriptClient) -> None:
        self._client = client
        self._state: RequestState = Idle()
        self._generation = 0

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def document(self) -> TranscriptDocument | None:
        """The current transcript, or None unless the state is Ready."""
        if isinstance(self._state, Ready):
            return self._state.document
        return None

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    async def submit(self, raw_url: str) -> RequestState:
        """
        Run one submission and return its outcome.

        The outcome is returned even when a newer submission has since
        taken over; in that case it is not stored.

        Args:
            raw_url: The link exactly as the user typed it.

        Returns:
            The Ready or Failed state this submission ended in.
        """
        self._generation += 1
        generation = self._generation

        try:
            check_url(raw_url)
        except TranscriptError as exc:
            return self._fail(generation, exc)

        # Entering Loading drops the previous document.
        self._state = Loading()

        try:
            video_id = parse_video_id(raw_url)
            self._state = Loading(video_id)
            document = await self._client.fetch_transcript(video_id)
        except TranscriptError as exc:
            return self._fail(generation, exc)

        return self._settle(generation, Ready(document))

    def export(self, fmt: str) -> ExportFile | None:
        """
        Render the current transcript in `fmt` ("txt", "json" or "md").

        Returns None when there is no transcript to export.
        """
        document = self.document
        if document is None:
            logger.warning("Nothing to export: no transcript loaded")
            return None
        return export(document, fmt)

    def preview(self) -> str:
        """First lines of the current transcript, or "" if none is loaded."""
        document = self.document
        return preview_text(document) if document is not None else ""

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _fail(self, generation: int, error: TranscriptError) -> RequestState:
        logger.error("Error fetching transcript: %s (%s)", error.message, error.detail)
        return self._settle(generation, Failed(error))

    def _settle(self, generation: int, outcome: RequestState) -> RequestState:
        if generation != self._generation:
            logger.info(
                "Discarding stale result of submission %d (current is %d)",
                generation, self._generation,
            )
            return outcome
        self._state = outcome
        return outcome
