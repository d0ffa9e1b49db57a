"""Command line interface for orgscribe."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .client import openai_client
from .config import load_env, resolve_config
from .errors import OrgscribeError
from .models import OUTPUT_DIR
from .postprocess import run_post_process
from .transcriber import run_transcription

app = typer.Typer(
    add_completion=False,
    help="Transcribe audio with Whisper and optionally turn it into Emacs Org notes.",
)

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"orgscribe v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    file: Optional[str] = typer.Option(
        None, "--file", "-file", help="Path to the audio file to transcribe."
    ),
    transcription: Optional[str] = typer.Option(
        None, "--transcription", "-transcription", help="Path to an existing transcription file."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-output", help="Name of the output transcription file (default: transcription.txt)."
    ),
    post: Optional[str] = typer.Option(
        None, "--post", "-post", help="Post-processing to run afterwards (create_emacs_org_notes)."
    ),
    output_dir: Path = typer.Option(OUTPUT_DIR, "--output-dir", help="Directory for new transcriptions."),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Environment file to load (default: .env)."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Transcribe an audio file, or reuse a transcription, then post-process it."""

    _configure_logging(verbose)

    try:
        load_env(env_file)
        cfg = resolve_config(
            audio_path=file,
            transcription_path=transcription,
            output_name=output,
            post=post,
            output_dir=output_dir,
        )
        with openai_client(cfg.api_key) as client:
            outcome = run_transcription(cfg, client)
            run_post_process(cfg.post, outcome.text, outcome.reference_path, client)
    except OrgscribeError as exc:
        logging.error("%s", exc)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":  # pragma: no cover
    app()
