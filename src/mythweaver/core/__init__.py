"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        MythweaverError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from mythweaver.core.config import (
    GameSettings,
    NarrationSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from mythweaver.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    MalformedStateError,
    MythweaverError,
    NarrationServiceError,
    StorageError,
    ValidationError,
)
from mythweaver.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "MythweaverError",
    # Engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    # Storage exceptions
    "StorageError",
    "MalformedStateError",
    # Service exceptions
    "NarrationServiceError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "GameSettings",
    "StorageSettings",
    "NarrationSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
