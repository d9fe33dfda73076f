"""File-backed storage of named streams.

Layout under the storage root (see ``skuff.core.layout``)::

    CURRENT_STREAM                 name of the selected stream
    streams/<name>/stream.json     serialized event stream
    streams/<name>/config.json     optional per-stream StreamConfig

Appends are load-modify-store of the whole file.  There is no locking:
two concurrent writers on one stream can lose an event.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skuff.core import file_io
from skuff.core.config import Settings, StreamConfig
from skuff.core.enums import StreamOrder
from skuff.core.errors import (
    NoStreamSet,
    StreamAlreadyExists,
    StreamCreationFailed,
    StreamDoesNotExist,
)
from skuff.core.layout import SettingsLayout, StorageLayout
from skuff.core.timeparse import validate_stream
from skuff.domain.events import AnyEvent

from .stream import Stream

logger = logging.getLogger(__name__)


class Storage:
    """Named streams under one storage root."""

    def __init__(
        self,
        layout: StorageLayout,
        global_config: StreamConfig | None = None,
    ) -> None:
        self.layout = layout
        self._global_config = global_config

    @classmethod
    def from_settings(cls, settings: Settings, explicit: Path | None = None) -> Storage:
        """Build storage from settings.

        Root precedence: *explicit* > ``settings.storage`` >
        ``<home>/CURRENT_STORAGE`` > default.
        """
        home = SettingsLayout(settings.home)

        configured = settings.storage
        if configured is None and home.current_storage().exists():
            configured = Path(file_io.read_text(home.current_storage())).expanduser()

        global_config = None
        if home.config_path().exists():
            global_config = file_io.read_json_model(home.config_path(), StreamConfig)

        return cls(StorageLayout.coalesce(explicit, configured), global_config)

    # -- Current stream ----------------------------------------------------

    def current_stream(self) -> str | None:
        path = self.layout.current_stream_path()
        if not path.exists():
            return None
        return file_io.read_text(path) or None

    def set_current_stream(self, stream: str) -> None:
        validate_stream(stream)
        if not self.stream_exists(stream):
            raise StreamDoesNotExist(stream)
        self.layout.root.mkdir(parents=True, exist_ok=True)
        file_io.write_text(self.layout.current_stream_path(), stream)
        logger.info("current stream set to %s", stream)

    # -- Streams -----------------------------------------------------------

    def stream_exists(self, stream: str) -> bool:
        return self.layout.stream_path(stream).exists()

    def stream_create(self, stream: str) -> None:
        validate_stream(stream)
        path = self.layout.stream_path(stream)
        if path.exists():
            raise StreamAlreadyExists(stream)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StreamCreationFailed(f"{path.parent}: {exc}") from exc

        file_io.write_bytes(path, Stream().to_buffer())
        logger.info("created stream %s at %s", stream, path)

    def stream(self, stream: str | None = None, *, strict: bool = False) -> Stream:
        """Load *stream* (or the current one)."""
        name = self._resolve(stream)
        path = self.layout.stream_path(name)
        if not path.exists():
            raise StreamDoesNotExist(name)

        return Stream.from_buffer(file_io.read_bytes(path), strict=strict, source=str(path))

    def stream_append(self, event: AnyEvent, stream: str | None = None) -> Stream:
        """Validate and persist *event*.  Returns the updated stream.

        Validation errors propagate and nothing is written.
        """
        name = self._resolve(stream)
        if not self.stream_exists(name):
            raise StreamDoesNotExist(name)

        path = self.layout.stream_path(name)
        events = Stream.from_buffer(file_io.read_bytes(path), source=str(path))
        events.push(event)
        file_io.write_bytes(path, events.to_buffer())
        return events

    def streams(self, order: StreamOrder | None = None) -> list[str]:
        """Names of all streams.

        ``LAST_USED`` lists the most recently written stream first;
        ``LEXOGRAPHIC`` (and ``None``) sorts by name.
        """
        root = self.layout.streams_path()
        if not root.exists():
            return []

        dirs = file_io.list_dirs(root)
        if order is StreamOrder.LAST_USED:
            dirs.sort(key=lambda d: (-self._last_used(d), d.name))
        else:
            dirs.sort(key=lambda d: d.name)
        return [d.name for d in dirs]

    @staticmethod
    def _last_used(directory: Path) -> float:
        stream_file = directory / "stream.json"
        target = stream_file if stream_file.exists() else directory
        return target.stat().st_mtime

    # -- Config ------------------------------------------------------------

    def config_file(self, stream: str | None = None) -> StreamConfig | None:
        """Per-stream config, if the stream has one."""
        name = self._resolve(stream)
        path = self.layout.config_path(name)
        if not path.exists():
            return None
        return file_io.read_json_model(path, StreamConfig)

    def config(
        self,
        explicit: Path | None = None,
        stream: str | None = None,
    ) -> StreamConfig:
        """Coalesced config: explicit file > stream > global > default."""
        explicit_config = file_io.read_json_model(explicit, StreamConfig) if explicit else None
        name = stream or self.current_stream()
        local = self.config_file(name) if name else None
        return StreamConfig.coalesce(explicit_config, local, self._global_config)

    def _resolve(self, stream: str | None) -> str:
        if stream is not None:
            return validate_stream(stream)
        current = self.current_stream()
        if current is None:
            raise NoStreamSet()
        # CURRENT_STREAM may be hand-edited
        return validate_stream(current)
