"""CLI entry point for skuff."""

from __future__ import annotations

from datetime import date, time
from pathlib import Path
from typing import Any
from uuid import UUID

import click

from . import __version__
from .core.config import load_settings
from .core.context import SkuffContext
from .core.errors import SkuffError
from .core.ids import new_id, parse_id
from .core.timeparse import clock, from_local, parse_date, parse_time, today, validate_stream
from .domain.entities import Activity, AnyEntity, Break, Login, Logout
from .domain.events import Create, Delete, Edit
from .observability.logger import set_stream, setup_logging


class SkuffGroup(click.Group):
    """Turns ``SkuffError`` into a clean one-line failure."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except SkuffError as exc:
            raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Parameter callbacks
# ---------------------------------------------------------------------------

def _time_option(ctx: click.Context, param: click.Parameter, value: str | None) -> time | None:
    if value is None:
        return None
    try:
        return parse_time(value)
    except SkuffError as exc:
        raise click.BadParameter(str(exc)) from exc


def _date_option(ctx: click.Context, param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except SkuffError as exc:
        raise click.BadParameter(str(exc)) from exc


def _id_param(ctx: click.Context, param: click.Parameter, value: str | None) -> UUID | None:
    if value is None:
        return None
    try:
        return parse_id(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not a valid id") from exc


def _stream_param(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return validate_stream(value)
    except SkuffError as exc:
        raise click.BadParameter(str(exc)) from exc


def _when_options(f):
    f = click.option("-d", "--date", "day", default=None, callback=_date_option,
                     help="YYYY-MM-DD or DD.MM (default: today)")(f)
    f = click.option("-t", "--time", "at", default=None, callback=_time_option,
                     help="HH:MM or HH:MM:SS (default: now)")(f)
    return f


def _target_options(f):
    f = click.option("--stream", default=None, callback=_stream_param,
                     help="Stream to write to (default: current)")(f)
    f = click.option("-e", "--edit", "edit_id", default=None, callback=_id_param,
                     help="Replace the entity with this id instead of creating one")(f)
    return f


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@click.group(cls=SkuffGroup)
@click.option("--storage", type=click.Path(path_type=Path), default=None,
              help="Storage root (overrides settings)")
@click.option("--config", "config_path",
              type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None,
              help="TOML settings file")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
@click.option("--log-format", type=click.Choice(["console", "json"]), default=None)
@click.version_option(__version__, prog_name="skuff")
@click.pass_context
def main(
    ctx: click.Context,
    storage: Path | None,
    config_path: Path | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """Skuff: track logins, logouts, breaks and activities."""
    settings = load_settings(config_path)

    observability: dict[str, Any] = {}
    if log_level:
        observability["log_level"] = log_level
    if log_format:
        observability["log_format"] = log_format
    if observability:
        settings = settings.model_copy(
            update={"observability": settings.observability.model_copy(update=observability)}
        )

    setup_logging(settings.observability.log_level, settings.observability.log_format)
    if ctx.obj is None:
        ctx.obj = SkuffContext(settings=settings, storage_root=storage)


@main.command()
@click.argument("stream", callback=_stream_param)
@click.option("--set-current/--no-set-current", default=True,
              help="Make the new stream the current one")
@click.pass_obj
def new(obj: SkuffContext, stream: str, set_current: bool) -> None:
    """Create a new stream."""
    set_stream(stream)
    obj.storage.stream_create(stream)
    click.echo(f"Created stream: {stream}")

    if set_current:
        obj.storage.set_current_stream(stream)
        click.echo(f"Current stream is: {stream}")


@main.command("in")
@_when_options
@_target_options
@click.pass_obj
def login(obj: SkuffContext, at: time | None, day: date | None,
          edit_id: UUID | None, stream: str | None) -> None:
    """Register an "in" event."""
    _record(obj, stream, edit_id, lambda eid: Login(entity_id=eid, timestamp=_instant(day, at)))


@main.command("out")
@_when_options
@_target_options
@click.pass_obj
def logout(obj: SkuffContext, at: time | None, day: date | None,
           edit_id: UUID | None, stream: str | None) -> None:
    """Register an "out" event."""
    _record(obj, stream, edit_id, lambda eid: Logout(entity_id=eid, timestamp=_instant(day, at)))


@main.command("break")
@click.option("-m", "--minutes", type=int, required=True, help="Length of the break")
@_when_options
@_target_options
@click.pass_obj
def take_break(obj: SkuffContext, minutes: int, at: time | None, day: date | None,
               edit_id: UUID | None, stream: str | None) -> None:
    """Register a break."""
    _record(obj, stream, edit_id, lambda eid: Break(
        entity_id=eid,
        timestamp=_instant(day, at),
        duration=minutes * 60,
        autoinsert=False,
    ))


@main.command()
@click.argument("value")
@click.option("-m", "--minutes", type=int, required=True, help="Time spent")
@_when_options
@_target_options
@click.pass_obj
def activity(obj: SkuffContext, value: str, minutes: int, at: time | None, day: date | None,
             edit_id: UUID | None, stream: str | None) -> None:
    """Register an activity, e.g. ``skuff activity Coding -m 90``."""
    _record(obj, stream, edit_id, lambda eid: Activity(
        entity_id=eid,
        timestamp=_instant(day, at),
        duration=minutes * 60,
        value=value,
        autoinsert=False,
    ))


@main.command()
@click.argument("entity_id", callback=_id_param)
@click.option("--stream", default=None, callback=_stream_param)
@click.pass_obj
def rm(obj: SkuffContext, entity_id: UUID, stream: str | None) -> None:
    """Remove an entity."""
    set_stream(stream)
    obj.storage.stream_append(Delete.of(entity_id, obj.clock), stream)
    click.echo(f"Removed {entity_id}")


@main.command()
@click.argument("stream", required=False, callback=_stream_param)
@click.option("--strict", is_flag=True, help="Re-validate the whole history before replay")
@click.option("--pager/--no-pager", default=True)
@click.pass_obj
def log(obj: SkuffContext, stream: str | None, strict: bool, pager: bool) -> None:
    """Show the current state of a stream, newest first."""
    from .presentation.log import render
    from .projection.replay import replay

    set_stream(stream)
    state = replay(obj.storage.stream(stream, strict=strict))
    if not state:
        click.echo("Nothing logged yet.")
        return

    text = render(state, color=pager)
    if pager:
        click.echo_via_pager(text)
    else:
        click.echo(text, nl=False)


@main.command()
@click.option("--config-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="JSON config overriding stream and global config")
@click.pass_obj
def ls(obj: SkuffContext, config_file: Path | None) -> None:
    """List streams; the current one is marked with '*'."""
    storage = obj.storage
    config = storage.config(explicit=config_file)
    current = storage.current_stream()

    for name in storage.streams(config.stream_order):
        prefix = "* " if name == current else "  "
        click.echo(f"{prefix}{name}")


@main.command()
@click.argument("stream", callback=_stream_param)
@click.pass_obj
def switch(obj: SkuffContext, stream: str) -> None:
    """Switch the current stream."""
    obj.storage.set_current_stream(stream)
    click.echo(f"Switched to stream: {stream}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _instant(day: date | None, at: time | None):
    try:
        return from_local(day or today(), at or clock())
    except SkuffError as exc:
        raise click.BadParameter(str(exc)) from exc


def _record(obj: SkuffContext, stream: str | None, edit_id: UUID | None, build) -> None:
    """Append a Create (or an Edit when *edit_id* is given) for the built entity."""
    set_stream(stream)
    entity: AnyEntity = build(edit_id or new_id())
    if edit_id is None:
        event = Create.of(entity, obj.clock)
    else:
        event = Edit.of(entity, obj.clock)
    obj.storage.stream_append(event, stream)
    click.echo(str(entity.entity_id))


if __name__ == "__main__":
    main()
