"""SkuffContext: everything a command needs, passed explicitly.

Replaces process-wide "current storage" state: each invocation builds one
context from settings and CLI options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from .clock import IClock, WallClock
from .config import Settings


@dataclass
class SkuffContext:
    settings: Settings
    storage_root: Path | None = None  # --storage
    clock: IClock = field(default_factory=WallClock)

    @cached_property
    def storage(self):
        from skuff.infrastructure.storage import Storage

        return Storage.from_settings(self.settings, explicit=self.storage_root)
