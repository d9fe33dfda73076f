"""Time-tracking entities.

The set of entity kinds is closed: ``Login``, ``Logout``, ``Break`` and
``Activity``, discriminated on the wire by ``type``.  Entities are
immutable; editing one means appending a new value under the same
``entity_id``.

``entity_id_of`` and ``timestamp_of`` match exhaustively over the
variants and end in ``assert_never``, so a type checker rejects any new
variant that is not wired in.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union, assert_never
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .fields import Seconds, UtcInstant


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class Login(_Entity):
    type: Literal["login"] = "login"
    entity_id: UUID
    timestamp: UtcInstant


class Logout(_Entity):
    type: Literal["logout"] = "logout"
    entity_id: UUID
    timestamp: UtcInstant


class Break(_Entity):
    type: Literal["break"] = "break"
    entity_id: UUID
    timestamp: UtcInstant
    duration: Seconds
    autoinsert: bool = False


class Activity(_Entity):
    type: Literal["activity"] = "activity"
    entity_id: UUID
    timestamp: UtcInstant
    duration: Seconds
    value: str
    autoinsert: bool = False


AnyEntity = Union[Login, Logout, Break, Activity]

# Field annotation used wherever an entity is parsed from the wire.
Entity = Annotated[AnyEntity, Field(discriminator="type")]


def entity_id_of(entity: AnyEntity) -> UUID:
    match entity:
        case Login() | Logout() | Break() | Activity():
            return entity.entity_id
        case _:
            assert_never(entity)


def timestamp_of(entity: AnyEntity) -> datetime:
    match entity:
        case Login() | Logout() | Break() | Activity():
            return entity.timestamp
        case _:
            assert_never(entity)
