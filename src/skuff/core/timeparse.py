"""Parsing of user-supplied dates, times and stream names."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone, tzinfo

from .errors import InvalidDateTime, InvalidStreamName

_STREAM_NAME = re.compile(r"^[A-Za-z0-9_-]+$")
_DAY_MONTH = re.compile(r"^(\d{1,2})\.(\d{1,2})\.?$")


def today() -> date:
    return datetime.now().date()


def clock() -> time:
    return datetime.now().time().replace(microsecond=0)


def parse_time(text: str) -> time:
    """Parse ``HH:MM:SS`` or ``HH:MM``."""
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(text.strip(), fmt).time()
        except ValueError:
            continue
    raise InvalidDateTime(f"Invalid time {text!r}: expected HH:MM or HH:MM:SS")


def parse_date(text: str, *, reference: date | None = None) -> date:
    """Parse ``YYYY-MM-DD`` or ``DD.MM`` (year taken from *reference*)."""
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    m = _DAY_MONTH.match(text)
    if m is None:
        raise InvalidDateTime(f"Invalid date {text!r}: expected YYYY-MM-DD or DD.MM")
    year = (reference or today()).year
    try:
        return date(year, int(m.group(2)), int(m.group(1)))
    except ValueError as exc:
        raise InvalidDateTime(f"Invalid date {text!r}: {exc}") from exc


def from_local(day: date, clock_time: time, tz: tzinfo | None = None) -> datetime:
    """Interpret a wall-clock date+time in *tz* (system local by default) as UTC.

    Raises ``InvalidDateTime`` when the wall-clock time is skipped or
    repeated by a DST transition.
    """
    naive = datetime.combine(day, clock_time)
    if tz is None:
        folds = [naive.replace(fold=f).astimezone() for f in (0, 1)]
    else:
        folds = [naive.replace(tzinfo=tz, fold=f) for f in (0, 1)]

    if folds[0].utcoffset() != folds[1].utcoffset():
        raise InvalidDateTime(
            f"Ambiguous or invalid local datetime (DST transition?): {naive.isoformat()}"
        )
    return folds[0].astimezone(timezone.utc)


def validate_stream(name: str) -> str:
    """Return *name* if it is a valid stream name."""
    if not _STREAM_NAME.match(name):
        raise InvalidStreamName(name)
    return name
