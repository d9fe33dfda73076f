"""Shared fixtures for the skuff test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from skuff.core.clock import FixedClock
from skuff.core.config import Settings
from skuff.core.context import SkuffContext
from skuff.core.ids import new_id
from skuff.core.layout import StorageLayout
from skuff.domain.entities import Activity, Break, Login, Logout
from skuff.infrastructure.storage import Storage


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    """UTC instant on 2023-01-<day>."""
    return datetime(2023, 1, day, hour, minute, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2025, 9, 1, 12, 0, 0, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@pytest.fixture
def make_login():
    def _make(timestamp: datetime | None = None, entity_id=None) -> Login:
        return Login(entity_id=entity_id or new_id(), timestamp=timestamp or at(9))

    return _make


@pytest.fixture
def sample_entities() -> list:
    """One entity of every kind, in time order."""
    return [
        Login(entity_id=new_id(), timestamp=at(8)),
        Activity(
            entity_id=new_id(),
            timestamp=at(9),
            duration=timedelta(minutes=90),
            value="Coding",
        ),
        Break(entity_id=new_id(), timestamp=at(12), duration=timedelta(minutes=30)),
        Logout(entity_id=new_id(), timestamp=at(17)),
    ]


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(home=tmp_path / "home")


@pytest.fixture
def storage(tmp_path) -> Storage:
    return Storage(StorageLayout.coalesce(None, tmp_path / "storage"))


@pytest.fixture
def skuff_context(tmp_path, settings, fixed_clock) -> SkuffContext:
    return SkuffContext(
        settings=settings,
        storage_root=tmp_path / "storage",
        clock=fixed_clock,
    )
