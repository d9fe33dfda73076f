"""Events: the unit of the append-only stream.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``).
2.  ``event_id`` is unique per record; ``entity_id`` is the logical
    identity the event operates on.  They are never interchangeable.
3.  ``Create`` and ``Edit`` carry a full entity; ``Delete`` carries only
    the target ``entity_id``.

Wire layout
-----------
Each event is one JSON object tagged by ``op``.  ``Create``/``Edit``
flatten their entity into the same object (its ``type`` tag and fields
sit next to ``op``), so there is no nested ``entity`` key::

    {"op":"create","event_id":"…","created_at":"…Z",
     "type":"break","entity_id":"…","timestamp":"…Z",
     "duration":600,"autoinsert":false}

    {"op":"delete","event_id":"…","created_at":"…Z","entity_id":"…"}
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, TypeVar, Union, assert_never
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from skuff.core.clock import IClock, WallClock
from skuff.core.ids import new_id

from .entities import AnyEntity, Entity, entity_id_of
from .fields import UtcInstant

_HEADER_KEYS = frozenset({"op", "event_id", "created_at"})

E = TypeVar("E", bound="_EntityEvent")


class _EntityEvent(BaseModel):
    """Shared wire handling for events that carry an entity."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _nest_entity(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "entity" in data:
            return data
        header = {k: v for k, v in data.items() if k in _HEADER_KEYS}
        header["entity"] = {k: v for k, v in data.items() if k not in _HEADER_KEYS}
        return header

    @model_serializer(mode="wrap")
    def _flatten_entity(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        entity = data.pop("entity")
        data.update(entity)
        return data

    @classmethod
    def of(cls: type[E], entity: AnyEntity, clock: IClock | None = None) -> E:
        """Wrap *entity* in a new event stamped by *clock*."""
        return cls(
            event_id=new_id(),
            created_at=(clock or WallClock()).now(),
            entity=entity,
        )


class Create(_EntityEvent):
    """Establishes a new entity identity."""

    op: Literal["create"] = "create"
    event_id: UUID
    created_at: UtcInstant
    entity: Entity


class Edit(_EntityEvent):
    """Replaces the value of an existing entity."""

    op: Literal["edit"] = "edit"
    event_id: UUID
    created_at: UtcInstant
    entity: Entity


class Delete(BaseModel):
    """Removes an entity from the projection."""

    model_config = ConfigDict(frozen=True)

    op: Literal["delete"] = "delete"
    event_id: UUID
    created_at: UtcInstant
    entity_id: UUID

    @classmethod
    def of(cls, entity_id: UUID, clock: IClock | None = None) -> Delete:
        return cls(
            event_id=new_id(),
            created_at=(clock or WallClock()).now(),
            entity_id=entity_id,
        )


AnyEvent = Union[Create, Edit, Delete]

Event = Annotated[AnyEvent, Field(discriminator="op")]


def target_entity_id(event: AnyEvent) -> UUID:
    """The entity id *event* operates on."""
    match event:
        case Create() | Edit():
            return entity_id_of(event.entity)
        case Delete():
            return event.entity_id
        case _:
            assert_never(event)
