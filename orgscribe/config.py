"""Run configuration resolved from command line values and the environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import OrgscribeError
from .models import API_KEY_ENV, ENV_FILE, OUTPUT_DIR, Config

logger = logging.getLogger(__name__)


class ConfigError(OrgscribeError):
    """Raised when required inputs or credentials are missing."""


def load_env(env_file: Optional[Path] = None) -> bool:
    """Load variables from a local environment file if one exists.

    Only ``env_file`` itself is read, defaulting to ``.env`` in the working
    directory. Variables already set in the process environment win over the file.
    """

    logger.info("Loading environment variables...")
    path = Path(env_file) if env_file is not None else ENV_FILE
    if not path.is_file():
        logger.info("No .env file found: %s", path)
        return False
    try:
        return load_dotenv(path, override=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error loading environment file {path}: {exc}") from exc


def get_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    value = env.get(API_KEY_ENV, "")
    if not value:
        raise ConfigError(f"{API_KEY_ENV} not set in environment")
    return value


def resolve_config(
    audio_path: Optional[Path] = None,
    transcription_path: Optional[Path] = None,
    output_name: Optional[str] = None,
    post: Optional[str] = None,
    output_dir: Path = OUTPUT_DIR,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Build the run configuration, failing before any file or network work."""

    api_key = get_api_key(environ)
    if not audio_path and not transcription_path:
        raise ConfigError("The -file or -transcription argument is required.")
    return Config(
        api_key=api_key,
        audio_path=Path(audio_path) if audio_path else None,
        transcription_path=Path(transcription_path) if transcription_path else None,
        output_name=output_name or None,
        post=post or None,
        output_dir=Path(output_dir),
    )
