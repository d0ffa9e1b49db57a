"""Flat-file output for transcripts and generated notes."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import OrgscribeError
from .models import (
    DEFAULT_OUTPUT_NAME,
    NOTES_EXTENSION,
    NOTES_SUFFIX,
    OUTPUT_DIR,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger(__name__)


class StorageError(OrgscribeError):
    """Raised when an output file or directory cannot be written."""


def ensure_output_dir(directory: Path = OUTPUT_DIR) -> Path:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"Error creating output directory: {exc}") from exc
    return directory


def timestamped_path(
    directory: Path,
    base_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Return ``directory/<stem>_<YYYYMMDD_HHMMSS><suffix>`` for ``base_name``."""

    name = Path(base_name or DEFAULT_OUTPUT_NAME)
    if name.name in ("", ".", ".."):
        raise StorageError(f"Invalid output file name: {base_name!r}")
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return directory / name.with_name(f"{name.stem}_{timestamp}{name.suffix}")


def notes_path(reference_path: Path) -> Path:
    reference_path = Path(reference_path)
    return reference_path.with_name(f"{reference_path.stem}{NOTES_SUFFIX}{NOTES_EXTENSION}")


def write_text(path: Path, content: str) -> Path:
    """Write ``content`` to ``path``, replacing whatever was there."""

    try:
        path.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        raise StorageError(f"Error writing to file: {exc}") from exc
    logger.info("Content successfully written to %s", path)
    return path
