"""
cli.py — Command-line interface for transcriptx.

Provides the `transcriptx` command group (registered as a console script in
pyproject.toml):

    get     Fetch a transcript and print a preview or one export.
    export  Fetch a transcript and write export files to a directory.

Usage examples:
    transcriptx get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    transcriptx get https://youtu.be/dQw4w9WgXcQ --format md -o rick.md
    transcriptx export https://youtu.be/dQw4w9WgXcQ --dir ./out -f txt -f json
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

import click

from transcriptx.client import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT_SECS, TranscriptClient
from transcriptx.controller import Failed, RequestController
from transcriptx.formatting import EXPORTERS, ExportFile

logger = logging.getLogger(__name__)

_EXPORT_FORMATS = list(EXPORTERS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(ctx: click.Context, url: str) -> RequestController:
    """
    Run one submission for `url` and return the controller holding it.

    On failure, prints the message and hint to stderr and exits with 1.
    """
    client = TranscriptClient(
        endpoint=ctx.obj["endpoint"],
        timeout=ctx.obj["timeout"],
    )
    controller = RequestController(client)
    state = asyncio.run(controller.submit(url))

    if isinstance(state, Failed):
        click.echo(f"Error: {state.message}", err=True)
        if state.detail:
            click.echo(state.detail, err=True)
        sys.exit(1)

    document = controller.document
    click.echo(
        f"Transcript fetched successfully ({len(document.segments)} segments)",
        err=True,
    )
    return controller


def _write(export_file: ExportFile, path: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(export_file.content)
    click.echo(f"Transcript written to {path}", err=True)


# ---------------------------------------------------------------------------
# CLI group: the top-level `transcriptx` command
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--endpoint",
    envvar="TRANSCRIPTX_ENDPOINT",
    default=DEFAULT_ENDPOINT,
    show_default=True,
    help="URL of the GetTranscript endpoint.",
)
@click.option(
    "--timeout",
    envvar="TRANSCRIPTX_TIMEOUT",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT_SECS,
    show_default=True,
    help="Seconds to wait for the transcript before giving up.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every request step.")
@click.pass_context
def main(ctx: click.Context, endpoint: str, timeout: float, verbose: bool) -> None:
    """
    TranscriptX — fetch YouTube transcripts and export them as TXT, JSON or Markdown.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["endpoint"] = endpoint
    ctx.obj["timeout"] = timeout


# ---------------------------------------------------------------------------
# Subcommand: get
# ---------------------------------------------------------------------------

@main.command()
@click.argument("url")
@click.option(
    "--format", "-f",
    "fmt",
    type=click.Choice(["preview", *_EXPORT_FORMATS], case_sensitive=False),
    default="preview",
    show_default=True,
    help="Print a short preview, or the full transcript as plain text, JSON or Markdown.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the export to a file instead of stdout.",
)
@click.pass_context
def get(ctx: click.Context, url: str, fmt: str, output: str | None) -> None:
    """
    Fetch the transcript for URL.

    URL must be a youtube.com/watch?v=... or youtu.be/... link.
    """
    controller = _load(ctx, url)
    fmt = fmt.lower()

    if fmt == "preview":
        document = controller.document
        click.echo(document.title)
        click.echo()
        click.echo(controller.preview())
        return

    export_file = controller.export(fmt)
    if output:
        _write(export_file, output)
    else:
        click.echo(export_file.content)


# ---------------------------------------------------------------------------
# Subcommand: export
# ---------------------------------------------------------------------------

@main.command("export")
@click.argument("url")
@click.option(
    "--dir", "-d",
    "directory",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write the export files into (created if missing).",
)
@click.option(
    "--format", "-f",
    "formats",
    type=click.Choice(_EXPORT_FORMATS, case_sensitive=False),
    multiple=True,
    help="Format to export; repeat for several.  Defaults to all three.",
)
@click.pass_context
def export_cmd(ctx: click.Context, url: str, directory: str, formats: tuple[str, ...]) -> None:
    """
    Fetch the transcript for URL and save it as {videoId}-transcript.{txt,json,md}.
    """
    controller = _load(ctx, url)
    os.makedirs(directory, exist_ok=True)

    for fmt in formats or _EXPORT_FORMATS:
        export_file = controller.export(fmt.lower())
        _write(export_file, os.path.join(directory, export_file.filename))
