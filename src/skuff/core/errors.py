"""Custom exception hierarchy for skuff."""

from __future__ import annotations

from uuid import UUID


class SkuffError(Exception):
    """Base exception for all skuff errors."""


# --- Append validation ---
class AppendError(SkuffError):
    """An event was rejected by the stream.  The stream is unchanged."""

    def __init__(self, entity_id: UUID, message: str):
        self.entity_id = entity_id
        super().__init__(message)


class EntityIdExists(AppendError):
    """A Create reused an entity id that already has a Create."""

    def __init__(self, entity_id: UUID):
        super().__init__(entity_id, f"Entity id already exists: {entity_id}")


class EntityDoesNotExist(AppendError):
    """An Edit or Delete referenced an entity that was never created."""

    def __init__(self, entity_id: UUID):
        super().__init__(entity_id, f"No such entity: {entity_id}")


class EntityAlreadyDeleted(AppendError):
    """A Delete targeted an entity that is already deleted."""

    def __init__(self, entity_id: UUID):
        super().__init__(entity_id, f"Entity already deleted: {entity_id}")


# --- Format ---
class FormatError(SkuffError):
    """Stream buffer could not be (de)serialized."""

    action = "Format"

    def __init__(self, detail: str, source: str | None = None):
        self.detail = detail
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"{self.action} failed{where}: {detail}")


class SerializeFailed(FormatError):
    action = "Serialize"


class DeserializeFailed(FormatError):
    action = "Deserialize"


# --- Storage ---
class StorageError(SkuffError):
    """File-system level failure.  Never retried."""


class StreamAlreadyExists(StorageError):
    def __init__(self, stream: str):
        self.stream = stream
        super().__init__(f"Stream already exists: {stream}")


class StreamDoesNotExist(StorageError):
    def __init__(self, stream: str):
        self.stream = stream
        super().__init__(f"Stream does not exist: {stream}")


class StreamCreationFailed(StorageError):
    """Stream directory could not be created."""


class FailedToReadFile(StorageError):
    """A file exists but could not be read."""


class FailedToWriteFile(StorageError):
    """A file could not be written."""


class FailedToReadDir(StorageError):
    """The streams directory could not be listed."""


class NoStreamSet(StorageError):
    """No stream was given and no current stream is set."""

    def __init__(self) -> None:
        super().__init__(
            "No stream selected. Pass --stream or run `skuff switch <stream>`."
        )


# --- Configuration / input ---
class ConfigError(SkuffError):
    """Invalid or missing configuration or user input."""


class InvalidStreamName(ConfigError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Invalid stream name {name!r}: stream names can only contain "
            "letters, numbers, '-' or '_'"
        )


class InvalidDateTime(ConfigError):
    """A date/time could not be parsed or does not map to one instant."""
