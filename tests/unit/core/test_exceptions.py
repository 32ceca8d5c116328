"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestGamebookError:
    """Tests for the base GamebookError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = GamebookError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = GamebookError("Test error", details={"key": "value", "count": 42})
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(GamebookError("Test", details={"x": 1}))
        assert "GamebookError" in repr_str
        assert "x" in repr_str


class TestValidationExceptions:
    """Tests for validation and business rule exceptions."""

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError with field context."""
        exc = ValidationError("Bad value", field_name="luck", invalid_value=-1)
        assert exc.details["field_name"] == "luck"
        assert exc.details["invalid_value"] == -1

    def test_inventory_full_error(self) -> None:
        """Test InventoryFullError capacity context."""
        exc = InventoryFullError("Full", capacity=14)
        assert exc.details == {"capacity": 14, "field_name": "items"}
        assert isinstance(exc, BusinessRuleError)

    def test_insufficient_funds_error(self) -> None:
        """Test InsufficientFundsError amounts."""
        exc = InsufficientFundsError("Not enough", requested=10, available=3)
        assert exc.details["requested"] == 10
        assert exc.details["available"] == 3
        assert exc.details["field_name"] == "currency"

    @pytest.mark.parametrize(
        "exc_class",
        [BusinessRuleError, InventoryFullError, InsufficientFundsError, ProtectedItemError],
    )
    def test_business_rules_are_validation_errors(self, exc_class: type[GamebookError]) -> None:
        """Test that business rule errors are caught as validation errors."""
        with pytest.raises(ValidationError):
            raise exc_class("Rule broken")


class TestGameEngineExceptions:
    """Tests for game engine exceptions."""

    def test_combat_error_round(self) -> None:
        """Test CombatError with round number."""
        exc = CombatError("Over", round_number=4)
        assert exc.details["round_number"] == 4
        assert isinstance(exc, GameEngineError)

    def test_dice_roll_error_expression(self) -> None:
        """Test DiceRollError with expression."""
        exc = DiceRollError("Invalid", expression="2d6")
        assert exc.details["expression"] == "2d6"
        assert isinstance(exc, GameEngineError)


class TestConfigurationAndPersistenceExceptions:
    """Tests for configuration and persistence exceptions."""

    def test_configuration_error_key(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Missing", config_key="database_path")
        assert exc.details["config_key"] == "database_path"

    def test_character_not_found(self) -> None:
        """Test CharacterNotFoundError message and id."""
        exc = CharacterNotFoundError("abc")
        assert exc.character_id == "abc"
        assert str(exc).startswith("Character abc not found")
        assert isinstance(exc, PersistenceError)
        assert isinstance(exc, GamebookError)
