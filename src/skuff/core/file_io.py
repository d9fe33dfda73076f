"""File I/O helpers.

Every ``OSError`` is mapped onto the storage error hierarchy so callers
only deal with ``SkuffError``.  Writes are flushed and ``fsync``-ed; there
is no locking (single writer per stream).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from .errors import (
    DeserializeFailed,
    FailedToReadDir,
    FailedToReadFile,
    FailedToWriteFile,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FailedToReadFile(f"{path}: {exc}") from exc


def write_bytes(path: Path, data: bytes) -> None:
    """Replace the contents of *path* with *data*.

    The caller is responsible for creating parent directories.
    """
    try:
        with open(path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
    except OSError as exc:
        raise FailedToWriteFile(f"{path}: {exc}") from exc
    logger.debug("wrote %d bytes to %s", len(data), path)


def read_text(path: Path) -> str:
    try:
        return read_bytes(path).decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise FailedToReadFile(f"{path}: {exc}") from exc


def write_text(path: Path, text: str) -> None:
    write_bytes(path, text.encode("utf-8"))


def read_json_model(path: Path, model: type[M]) -> M:
    """Load a JSON document at *path* into *model*."""
    raw = read_bytes(path)
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise DeserializeFailed(str(exc), source=str(path)) from exc


def list_dirs(path: Path) -> list[Path]:
    """Return the immediate subdirectories of *path*."""
    try:
        return [p for p in path.iterdir() if p.is_dir()]
    except OSError as exc:
        raise FailedToReadDir(f"{path}: {exc}") from exc
