"""Configuration management.

Two layers:

* ``Settings``: process settings (where things live, logging).  Loaded
  from an optional TOML file + environment variables via
  pydantic-settings.
* ``StreamConfig``: user preferences stored as JSON, globally in the
  settings home and per stream in the storage root.  Merged by
  ``StreamConfig.coalesce``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from .enums import StreamOrder
from .errors import ConfigError


def _default_home() -> Path:
    return Path.home() / ".skuff"


class ObservabilityConfig(BaseModel):
    log_level: str = "WARNING"
    log_format: str = "console"  # "json" or "console"


class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from a TOML file, overridden by ``SKUFF_*`` environment
    variables.
    """

    home: Path = Field(default_factory=_default_home)
    storage: Path | None = None  # Overrides CURRENT_STORAGE when set
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "SKUFF_", "env_nested_delimiter": "__"}


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
    """
    data: dict[str, Any] = {}

    if config_path:
        import tomli

        path = Path(config_path)
        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid settings file {path}: {exc}") from exc

    return Settings(**data)


class StreamConfig(BaseModel):
    """JSON user config (``config.json``)."""

    model_config = ConfigDict(frozen=True)

    stream_order: StreamOrder | None = None

    @classmethod
    def default(cls) -> StreamConfig:
        return cls(stream_order=StreamOrder.LAST_USED)

    @classmethod
    def coalesce(
        cls,
        explicit: StreamConfig | None = None,
        local: StreamConfig | None = None,
        global_: StreamConfig | None = None,
    ) -> StreamConfig:
        """Merge configs.  Precedence: explicit > local > global > default."""
        merged = cls.default()
        for layer in (global_, local, explicit):
            merged = merged._overlay(layer)
        return merged

    def _overlay(self, rhs: StreamConfig | None) -> StreamConfig:
        if rhs is None:
            return self
        return StreamConfig(stream_order=rhs.stream_order or self.stream_order)
