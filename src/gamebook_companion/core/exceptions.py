"""Custom exception hierarchy for the gamebook companion.

All exceptions inherit from GamebookError so callers can handle every
failure of the core at a single boundary while still matching on the
precise domain error when they need to.

Example:
    >>> from gamebook_companion.core.exceptions import InsufficientFundsError
    >>> raise InsufficientFundsError("Not enough currency", requested=12, available=3)
"""

from __future__ import annotations

from typing import Any


class GamebookError(Exception):
    """Base exception for all gamebook companion errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(GamebookError):
    """Raised when a value object or the character aggregate is invalid.

    Covers construction of invalid values, rejected updates and
    corrupted records found during hydration.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class BusinessRuleError(ValidationError):
    """Raised when an otherwise well-formed change breaks a game rule."""


class InventoryFullError(BusinessRuleError):
    """Raised when adding an item to an inventory already at capacity."""

    def __init__(
        self,
        message: str,
        *,
        capacity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize inventory full error.

        Args:
            message: Human-readable error description.
            capacity: The inventory capacity that was reached.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if capacity is not None:
            combined_details["capacity"] = capacity
        super().__init__(message, field_name="items", details=combined_details)


class InsufficientFundsError(BusinessRuleError):
    """Raised when removing more currency than the character carries."""

    def __init__(
        self,
        message: str,
        *,
        requested: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient funds error.

        Args:
            message: Human-readable error description.
            requested: Amount the caller tried to remove.
            available: Amount currently held.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if requested is not None:
            combined_details["requested"] = requested
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, field_name="currency", details=combined_details)


class ProtectedItemError(BusinessRuleError):
    """Raised when trying to discard the purse."""


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(GamebookError):
    """Base exception for combat and dice errors."""


class CombatError(GameEngineError):
    """Raised when a combat session is driven incorrectly.

    Typically this means playing a round after the session ended.
    """

    def __init__(
        self,
        message: str,
        *,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            round_number: Combat round when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when a dice expression or an injected roll is invalid."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Persistence Exceptions
# =============================================================================


class ConfigurationError(GamebookError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class PersistenceError(GamebookError):
    """Base exception for storage collaborator errors."""


class CharacterNotFoundError(PersistenceError):
    """Raised when no stored record backs a character id."""

    def __init__(
        self,
        character_id: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error.

        Args:
            character_id: The id that has no backing record.
            details: Optional dictionary containing additional error context.
        """
        self.character_id = character_id
        combined_details = details or {}
        combined_details["character_id"] = character_id
        super().__init__(f"Character {character_id} not found", details=combined_details)


__all__ = [
    "GamebookError",
    # Validation
    "ValidationError",
    "BusinessRuleError",
    "InventoryFullError",
    "InsufficientFundsError",
    "ProtectedItemError",
    # Game engine
    "GameEngineError",
    "CombatError",
    "DiceRollError",
    # Configuration & persistence
    "ConfigurationError",
    "PersistenceError",
    "CharacterNotFoundError",
]
