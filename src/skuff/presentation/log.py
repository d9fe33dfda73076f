"""Terminal rendering of a replayed state."""

from __future__ import annotations

from datetime import timedelta, tzinfo
from typing import assert_never

import click

from skuff.domain.entities import Activity, AnyEntity, Break, Login, Logout
from skuff.projection.replay import State

_TIME_FORMAT = "%Y-%m-%d %H:%M"


def format_duration(duration: timedelta) -> str:
    """``1h05m`` style; negative durations get a leading ``-``."""
    total = int(duration.total_seconds())
    sign = "-" if total < 0 else ""
    minutes = abs(total) // 60
    return f"{sign}{minutes // 60}h{minutes % 60:02d}m"


def describe(entity: AnyEntity, tz: tzinfo | None = None) -> str:
    """One-line description of *entity* in local time."""
    when = entity.timestamp.astimezone(tz).strftime(_TIME_FORMAT)
    match entity:
        case Login():
            return f"Login @ {when}"
        case Logout():
            return f"Logout @ {when}"
        case Break():
            line = f"Break @ {when} for {format_duration(entity.duration)}"
        case Activity():
            line = f"Activity: {entity.value} @ {when} for {format_duration(entity.duration)}"
        case _:
            assert_never(entity)
    if entity.autoinsert:
        line += " (auto)"
    return line


def render(state: State, *, color: bool = True, tz: tzinfo | None = None) -> str:
    """Newest entity first, each as an id line plus a description line."""
    blocks = []
    for entity in reversed(state):
        ident = str(entity.entity_id)
        if color:
            ident = click.style(ident, fg="yellow")
        blocks.append(f"{ident}\n{describe(entity, tz)}\n")
    return "\n".join(blocks)
