"""Configuration management for the gamebook companion.

Settings are loaded with pydantic-settings from environment variables and
an optional .env file.

Example:
    >>> from gamebook_companion.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.storage.database_path)
    data/gamebook.db

Environment Variables:
    GAMEBOOK_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    GAMEBOOK_DEBUG: Enable debug mode
    GAMEBOOK_DATABASE_PATH: Path to the SQLite character store
    GAMEBOOK_GAME_DICE_SEED: Seed for reproducible dice
    GAMEBOOK_GAME_DEFAULT_GAME_MODE: Game mode used when none is chosen
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gamebook_companion.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the local character store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/gamebook.db"),
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def ensure_file_path(cls, value: Path) -> Path:
        """Reject directory-like database paths.

        Raises:
            ConfigurationError: If the path has no file name.
        """
        if not value.name or value.name in {".", ".."}:
            raise ConfigurationError(
                f"database_path must name a file, got {value}",
                config_key="database_path",
            )
        return value


class GameSettings(BaseSettings):
    """Configuration for rules behaviour.

    Attributes:
        dice_seed: Optional seed making every default die draw reproducible.
        default_game_mode: Game mode assigned when creation omits one.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEBOOK_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dice_seed: int | None = Field(
        default=None,
        description="Seed for reproducible dice rolls",
    )
    default_game_mode: Literal["narrative", "simplified", "mortal"] = Field(
        default="mortal",
        description="Game mode used when none is provided",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        storage: Character store settings.
        game: Rules settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Gamebook Companion",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
