"""Where skuff keeps its files.

Layouts are plain values built from ``Settings``; nothing here touches
the disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def default_storage_path() -> Path:
    return Path.home() / ".local" / "share" / "skuff"


@dataclass(frozen=True)
class SettingsLayout:
    """Files under the settings home (``~/.skuff``)."""

    home: Path

    def current_storage(self) -> Path:
        return self.home / "CURRENT_STORAGE"

    def config_path(self) -> Path:
        return self.home / "config.json"


@dataclass(frozen=True)
class StorageLayout:
    """Files under a storage root."""

    root: Path

    @classmethod
    def coalesce(
        cls,
        explicit: Path | None = None,
        settings: Path | None = None,
    ) -> StorageLayout:
        """Pick the root: explicit > settings > default."""
        return cls(root=explicit or settings or default_storage_path())

    def streams_path(self) -> Path:
        return self.root / "streams"

    def stream_path(self, stream: str) -> Path:
        return self.streams_path() / stream / "stream.json"

    def config_path(self, stream: str) -> Path:
        return self.streams_path() / stream / "config.json"

    def current_stream_path(self) -> Path:
        return self.root / "CURRENT_STREAM"
