"""Configuration management for the Mythweaver session engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime overrides.

Example:
    >>> from mythweaver.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.combat_trigger_chance
    0.3

Environment Variables:
    MYTHWEAVER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MYTHWEAVER_DATABASE_PATH: Path to the SQLite campaign store
    MYTHWEAVER_GAME_COMBAT_TRIGGER_CHANCE: Escalation beat combat probability
    MYTHWEAVER_GAME_NARRATION_STRATEGY: 'fixed' or 'pooled'
    MYTHWEAVER_NARRATION_OPENING_URL: Opening-narration service endpoint
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mythweaver.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for rules and narrative behaviour.

    Attributes:
        attack_dc: Fixed DC every attack roll is made against.
        base_social_dc: DC of a social check against a neutral NPC.
        combat_trigger_chance: Probability that an Escalation beat turns
            the session into combat mode.
        tension_per_beat: Tension added by every narrative beat.
        narration_strategy: 'fixed' line per beat or 'pooled' random lines.
        target_mode: 'first' living enemy, or 'all' living enemies per attack.
        log_display_limit: Number of narrative lines shown to the player.
        feared_alignment_threshold: Alignment at or below which a successful
            intimidation earns the "Feared" trait.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHWEAVER_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    attack_dc: int = Field(default=12, ge=1, le=30, description="Attack DC")
    base_social_dc: int = Field(default=12, ge=1, le=30, description="Base social DC")
    combat_trigger_chance: float = Field(
        default=0.30,
        ge=0.0,
        le=1.0,
        description="Escalation combat trigger probability",
    )
    tension_per_beat: int = Field(default=5, ge=0, description="Tension per beat")
    narration_strategy: Literal["fixed", "pooled"] = Field(
        default="fixed",
        description="Narration strategy",
    )
    target_mode: Literal["first", "all"] = Field(
        default="first",
        description="Which living enemies a player attack hits",
    )
    log_display_limit: int = Field(default=30, ge=1, description="Visible log lines")
    feared_alignment_threshold: int = Field(
        default=-3,
        le=0,
        description="Alignment that earns the Feared trait",
    )


class StorageSettings(BaseSettings):
    """Configuration for campaign persistence.

    Attributes:
        database_path: Path to the SQLite campaign store.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHWEAVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path.home() / ".mythweaver" / "campaigns.db",
        description="Path to SQLite campaign store",
    )


class NarrationSettings(BaseSettings):
    """Configuration for the opening-narration service.

    Attributes:
        opening_url: Endpoint of the opening service. None uses the
            in-process placeholder.
        timeout_seconds: Request timeout.
        max_retries: Attempts made on transport errors before falling back.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHWEAVER_NARRATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    opening_url: str | None = Field(default=None, description="Opening service URL")
    timeout_seconds: float = Field(default=10.0, gt=0, le=120, description="Request timeout")
    max_retries: int = Field(default=1, ge=1, le=5, description="Attempts on transport errors")

    @model_validator(mode="after")
    def validate_url_scheme(self) -> "NarrationSettings":
        """Ensure the opening URL, when set, is an HTTP(S) URL.

        Raises:
            ConfigurationError: If the URL has another scheme.
        """
        if self.opening_url and not self.opening_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"opening_url must be an http(s) URL, got {self.opening_url!r}",
                config_key="opening_url",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        game: Rules and narrative settings.
        storage: Persistence settings.
        narration: Opening-narration service settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHWEAVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Mythweaver", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    narration: NarrationSettings = Field(default_factory=NarrationSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
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
    "GameSettings",
    "StorageSettings",
    "NarrationSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
