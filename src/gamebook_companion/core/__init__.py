"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        GamebookError: Base exception for all application errors.
        ValidationError: Invalid values and rejected updates.
        BusinessRuleError: Game-rule violations (inventory, currency).

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from gamebook_companion.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from gamebook_companion.core.exceptions import (
    BusinessRuleError,
    CharacterNotFoundError,
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    GamebookError,
    InsufficientFundsError,
    InventoryFullError,
    PersistenceError,
    ProtectedItemError,
    ValidationError,
)
from gamebook_companion.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "GamebookError",
    "ValidationError",
    "BusinessRuleError",
    "InventoryFullError",
    "InsufficientFundsError",
    "ProtectedItemError",
    "GameEngineError",
    "CombatError",
    "DiceRollError",
    "ConfigurationError",
    "PersistenceError",
    "CharacterNotFoundError",
    # Configuration
    "Settings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
