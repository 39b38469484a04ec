# src/ib_app/core/config.py
from __future__ import annotations

from functools import lru_cache

from pydantic import PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ib_app.core.errors import ConfigError
from ib_app.modules.browse.schemas import SubdirPolicy


class Settings(BaseSettings):
    """
    App settings (12-factor). Override via env vars, e.g.
      IB_ROWS=900  IB_COLS=1600  IB_LOG_LEVEL=INFO
    """

    # App
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    # Viewport (None => detect from the screen)
    ROWS: PositiveInt | None = None
    COLS: PositiveInt | None = None
    FALLBACK_ROWS: PositiveInt = 1080
    FALLBACK_COLS: PositiveInt = 1920

    # Display
    WINDOW_NAME: str = "Browser"

    # Scanning
    SUBDIR_POLICY: SubdirPolicy = SubdirPolicy.skip
    SORT_ENTRIES: bool = False

    model_config = SettingsConfigDict(
        env_prefix="IB_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("SUBDIR_POLICY", mode="before")
    @classmethod
    def _lower_policy(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached getter; call `get_settings.cache_clear()` after changing the env."""
    return Settings()


def load_settings() -> Settings:
    """`get_settings` for entry points: invalid values surface as ConfigError."""
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}") from e
