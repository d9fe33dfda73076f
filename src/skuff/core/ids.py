"""Canonical ID and timestamp factories.

All modules import from here instead of calling ``uuid``/``datetime`` directly.

ID Categories
-------------
1. Event IDs: UUID v4, unique per record in a stream (``event_id``).
2. Entity IDs: UUID v4, stable across edits of the same logical
   occurrence (``entity_id``).

Both share one type; only their purpose differs.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``, never naive.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

_RFC3339 = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})$"
)


def new_id() -> uuid.UUID:
    """Generate a new random (v4) identifier."""
    return uuid.uuid4()


def parse_id(text: str) -> uuid.UUID:
    """Parse the textual form of an identifier.

    Raises ``ValueError`` when *text* is not a UUID.
    """
    return uuid.UUID(text.strip())


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to UTC.  Naive values are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"naive datetime is not allowed: {value.isoformat()}")
    return value.astimezone(timezone.utc)


def parse_instant(text: str) -> datetime:
    """Parse an RFC 3339 instant into an aware UTC datetime.

    Fractions longer than microsecond precision are truncated.
    """
    m = _RFC3339.match(text.strip())
    if m is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    frac = (m.group("frac") or "")[:6].ljust(6, "0")
    tz = m.group("tz")
    if tz in ("Z", "z"):
        tz = "+00:00"
    base = m.group("base").replace("t", "T").replace(" ", "T")
    return to_utc(datetime.fromisoformat(f"{base}.{frac}{tz}"))


def format_instant(value: datetime) -> str:
    """Format a datetime as RFC 3339 UTC with a ``Z`` suffix.

    Whole seconds carry no fraction; millisecond-aligned values carry
    three digits, everything else six.
    """
    value = to_utc(value)
    # strftime does not zero-pad years below 1000
    base = f"{value.year:04d}-{value.month:02d}-{value.day:02d}T{value:%H:%M:%S}"
    micros = value.microsecond
    if micros == 0:
        return f"{base}Z"
    if micros % 1000 == 0:
        return f"{base}.{micros // 1000:03d}Z"
    return f"{base}.{micros:06d}Z"
