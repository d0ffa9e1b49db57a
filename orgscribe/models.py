"""Dataclasses and fixed settings shared across orgscribe."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

API_BASE_URL = "https://api.openai.com/v1"
API_TIMEOUT = 10 * 60
API_KEY_ENV = "OPENAI_API_KEY"

TRANSCRIPTION_MODEL = "whisper-1"
COMPLETION_MODEL = "gpt-4"
COMPLETION_MAX_TOKENS = 1500
COMPLETION_TEMPERATURE = 0.7

ENV_FILE = Path(".env")
OUTPUT_DIR = Path("output")
DEFAULT_OUTPUT_NAME = "transcription.txt"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
NOTES_SUFFIX = "_emacs_org_notes"
NOTES_EXTENSION = ".org"


@dataclass(slots=True)
class Config:
    """Settings for a single run, resolved from flags and the environment."""

    api_key: str
    audio_path: Optional[Path] = None
    transcription_path: Optional[Path] = None
    output_name: Optional[str] = None
    post: Optional[str] = None
    output_dir: Path = OUTPUT_DIR


@dataclass(slots=True)
class TranscriptionOutcome:
    """Transcript text plus the file later stages derive their paths from."""

    text: str
    reference_path: Path
