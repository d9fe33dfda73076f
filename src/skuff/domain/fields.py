"""Annotated pydantic field types shared by entities and events.

The JSON forms are part of the persisted stream format:

* instants are RFC 3339 UTC strings with a ``Z`` suffix,
* durations are signed integer seconds.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from skuff.core.ids import format_instant, parse_instant, to_utc


def _instant(value: Any) -> datetime:
    try:
        if isinstance(value, str):
            return parse_instant(value)
        if isinstance(value, datetime):
            return to_utc(value)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {value}") from exc
    raise ValueError(f"expected an RFC 3339 timestamp, got {type(value).__name__}")


def _seconds(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    # bool is an int subclass; reject it explicitly
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return timedelta(seconds=value)
        except OverflowError as exc:
            raise ValueError(f"duration out of range: {value}") from exc
    raise ValueError(f"expected integer seconds, got {type(value).__name__}")


def seconds_of(duration: timedelta) -> int:
    """Whole seconds of *duration*, truncated toward zero."""
    return int(duration.total_seconds())


UtcInstant = Annotated[
    datetime,
    BeforeValidator(_instant),
    PlainSerializer(format_instant, return_type=str, when_used="json"),
]

Seconds = Annotated[
    timedelta,
    BeforeValidator(_seconds),
    PlainSerializer(seconds_of, return_type=int, when_used="json"),
]
