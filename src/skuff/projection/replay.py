"""Replay: fold a stream into the current state.

Walks the events in append order keeping the latest value per entity id
(``Create``/``Edit`` assign, ``Delete`` removes), then orders the
survivors by timestamp.  The result is a pure function of the event
sequence.

A ``Delete`` for an id that is not present is a no-op, so a stream loaded
permissively from a hand-edited file still replays.  Load with
``strict=True`` to reject such streams up front.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from uuid import UUID

from skuff.domain.entities import AnyEntity, entity_id_of, timestamp_of
from skuff.domain.events import AnyEvent, Create, Delete, Edit

logger = logging.getLogger(__name__)


class State(Sequence[AnyEntity]):
    """Time-ordered snapshot of the live entities.  Never persisted."""

    __slots__ = ("_entities",)

    def __init__(self, entities: Iterable[AnyEntity] = ()) -> None:
        self._entities: tuple[AnyEntity, ...] = tuple(entities)

    @property
    def entities(self) -> tuple[AnyEntity, ...]:
        return self._entities

    def __getitem__(self, index):
        return self._entities[index]

    def __iter__(self) -> Iterator[AnyEntity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self._entities == other._entities

    def __hash__(self) -> int:
        return hash(self._entities)

    def __repr__(self) -> str:
        return f"State({list(self._entities)!r})"


def replay(events: Iterable[AnyEvent]) -> State:
    """Reconstruct the current state from *events*.

    Ties on timestamp keep the order in which each entity id first
    entered the fold (its ``Create`` in a valid stream); edits do not
    move an entity.
    """
    live: dict[UUID, AnyEntity] = {}

    for event in events:
        match event:
            case Create() | Edit():
                # dict assignment keeps the key's original position
                live[entity_id_of(event.entity)] = event.entity
            case Delete():
                live.pop(event.entity_id, None)

    state = State(sorted(live.values(), key=timestamp_of))
    logger.debug("replayed %d live entities", len(state))
    return state
