# Service configuration loaded from the environment.
# Created: 2026-10-19
#
# DATA_ROOT is honoured without prefix so existing deployments keep working;
# everything else uses the DIRSTREAM_ prefix.

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_ROOT = "./data"


class Settings(BaseSettings):
    """Runtime settings for the listing service."""

    model_config = SettingsConfigDict(
        env_prefix="DIRSTREAM_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    data_root: Path = Field(
        default=Path(DEFAULT_DATA_ROOT),
        validation_alias=AliasChoices("DATA_ROOT", "DIRSTREAM_DATA_ROOT", "data_root"),
        description="Directory exposed to clients; nothing outside it is listed.",
    )
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"
    api_cors_allowed_origins: list[str] = Field(default_factory=list)
    stream_high_water_mark: int = Field(
        default=16384,
        ge=1,
        description="Bytes buffered per response before the writer waits for a drain.",
    )
    resolve_symlinks: bool = Field(
        default=False,
        description="Also check containment after resolving symlinks.",
    )

    @property
    def root_dir(self) -> Path:
        """Absolute root path (lexically normalized, symlinks untouched)."""
        return Path(os.path.abspath(os.path.expanduser(self.data_root)))

    @classmethod
    def load(cls) -> Settings:
        """Build settings from the current environment."""
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings; call ``get_settings.cache_clear()`` to reload."""
    return Settings.load()
