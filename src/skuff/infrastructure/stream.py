"""Append-only event stream for replay, audit, and state reconstruction.

Design invariants
-----------------
1.  ``push()`` validates every event against the full history before
    appending.  A rejected event leaves the stream unchanged.
2.  Iteration yields events in **append order**; the stream is never
    reordered or mutated after append.
3.  ``to_buffer()`` / ``from_buffer()`` use the persisted JSON layout
    (see ``skuff.domain.events``) which must stay byte-stable for files
    already on disk.

Validation rules
----------------
*  ``Create``: the entity id must not already have a ``Create``.
*  ``Edit``: the entity id must already have a ``Create``.  Editing a
   deleted entity is allowed.
*  ``Delete``: the entity id must have a ``Create`` and no ``Delete``.

No temporal ordering is enforced; backdated events are legal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from uuid import UUID

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from skuff.core.errors import (
    AppendError,
    DeserializeFailed,
    EntityAlreadyDeleted,
    EntityDoesNotExist,
    EntityIdExists,
    SerializeFailed,
)
from skuff.domain.entities import entity_id_of
from skuff.domain.events import AnyEvent, Create, Delete, Edit, Event, target_entity_id

logger = logging.getLogger(__name__)

_EVENTS: TypeAdapter[list[AnyEvent]] = TypeAdapter(list[Event])


class Stream:
    """Ordered, append-only sequence of events for one named stream."""

    def __init__(self) -> None:
        self._events: list[AnyEvent] = []

    # -- Serialization -----------------------------------------------------

    @classmethod
    def from_buffer(
        cls,
        buf: bytes | str,
        *,
        strict: bool = False,
        source: str | None = None,
    ) -> Stream:
        """Parse a JSON array of events.

        With ``strict=True`` every event is pushed through validation, so
        a hand-edited history (a dangling ``Delete``, a duplicate
        ``Create``) raises the corresponding ``AppendError``.  The default
        trusts the buffer as written.
        """
        try:
            events = _EVENTS.validate_json(buf)
        except ValidationError as exc:
            raise DeserializeFailed(str(exc), source=source) from exc

        return cls.from_events(events, strict=strict)

    @classmethod
    def from_events(cls, events: Iterable[AnyEvent], *, strict: bool = True) -> Stream:
        stream = cls()
        if strict:
            for event in events:
                stream.push(event)
        else:
            stream._events.extend(events)
        return stream

    def to_buffer(self) -> bytes:
        """Serialize to the persisted compact JSON array."""
        try:
            return _EVENTS.dump_json(self._events)
        except PydanticSerializationError as exc:
            raise SerializeFailed(str(exc)) from exc

    # -- Append ------------------------------------------------------------

    def push(self, event: AnyEvent) -> None:
        """Append *event* if it is valid against the history.

        Raises ``EntityIdExists``, ``EntityDoesNotExist`` or
        ``EntityAlreadyDeleted``; the stream is unchanged on failure.
        """
        entity_id = target_entity_id(event)
        try:
            self._validate(event, entity_id)
        except AppendError:
            logger.info("rejected %s for entity %s", event.op, entity_id)
            raise
        self._events.append(event)
        logger.debug(
            "appended %s for entity %s (length=%d)", event.op, entity_id, len(self._events)
        )

    def _validate(self, event: AnyEvent, entity_id: UUID) -> None:
        match event:
            case Create():
                # Ids are generated fresh; a clash means a caller bug.
                if self._create_exists(entity_id):
                    raise EntityIdExists(entity_id)
            case Edit():
                if not self._create_exists(entity_id):
                    raise EntityDoesNotExist(entity_id)
            case Delete():
                if not self._create_exists(entity_id):
                    raise EntityDoesNotExist(entity_id)
                if self._delete_exists(entity_id):
                    raise EntityAlreadyDeleted(entity_id)

    def _create_exists(self, entity_id: UUID) -> bool:
        return any(
            isinstance(e, Create) and entity_id_of(e.entity) == entity_id
            for e in self._events
        )

    def _delete_exists(self, entity_id: UUID) -> bool:
        return any(
            isinstance(e, Delete) and e.entity_id == entity_id
            for e in reversed(self._events)
        )

    # -- Read --------------------------------------------------------------

    @property
    def events(self) -> tuple[AnyEvent, ...]:
        """Snapshot of the events in append order."""
        return tuple(self._events)

    def __iter__(self) -> Iterator[AnyEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"Stream(events={len(self._events)})"
