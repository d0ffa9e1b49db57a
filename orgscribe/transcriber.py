"""Speech to text through the hosted Whisper API."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from openai import OpenAI

from . import storage
from .client import APIError, api_errors
from .models import TRANSCRIPTION_MODEL, Config, TranscriptionOutcome

logger = logging.getLogger(__name__)


class TranscriptionError(APIError):
    """Raised when audio cannot be read or transcribed."""


def read_audio(audio_path: Path) -> bytes:
    logger.info("Reading audio file: %s", audio_path)
    try:
        return audio_path.read_bytes()
    except OSError as exc:
        raise TranscriptionError(f"Error reading audio file: {exc}") from exc


def read_existing_transcription(transcription_path: Path) -> str:
    logger.info("Reading existing transcription file: %s", transcription_path)
    try:
        return transcription_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TranscriptionError(f"Error reading transcription file: {exc}") from exc


def transcribe_audio(
    client: OpenAI,
    filename: str,
    audio_bytes: bytes,
    model: str = TRANSCRIPTION_MODEL,
) -> str:
    """Upload ``audio_bytes`` as ``filename`` and return the transcript text.

    The returned text is exactly the ``text`` field of the response.
    """

    logger.info("Sending request to Whisper API...")
    with api_errors("Whisper", TranscriptionError):
        response = client.audio.transcriptions.create(model=model, file=(filename, audio_bytes))
    text = getattr(response, "text", None)
    if not isinstance(text, str):
        raise TranscriptionError("Unexpected Whisper response: missing `text` field")
    return text


def run_transcription(
    config: Config,
    client: OpenAI,
    now: Optional[datetime] = None,
) -> TranscriptionOutcome:
    """Produce the transcript for this run.

    An audio path takes precedence over an existing transcription when both
    are configured. Fresh transcripts are written to a timestamped file in the
    output directory; existing transcripts are used in place.
    """

    if config.audio_path:
        audio_bytes = read_audio(config.audio_path)
        logger.info("Transcribing audio file...")
        text = transcribe_audio(client, config.audio_path.name, audio_bytes)

        output_dir = storage.ensure_output_dir(config.output_dir)
        output_path = storage.timestamped_path(output_dir, config.output_name, now=now)
        storage.write_text(output_path, text)
        return TranscriptionOutcome(text=text, reference_path=output_path)

    if config.transcription_path:
        text = read_existing_transcription(config.transcription_path)
        return TranscriptionOutcome(text=text, reference_path=config.transcription_path)

    raise TranscriptionError("No audio or transcription file configured.")
