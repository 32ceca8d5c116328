"""Tests for dice rolling."""

from __future__ import annotations

import pytest

from gamebook_companion.core.exceptions import DiceRollError
from gamebook_companion.engine.dice import DiceExpression, DiceRoller, resolve_roll, validate_roll


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_two_dice(self, dice_roller: DiceRoller) -> None:
        """Test a 2d6 roll and its individual dice."""
        result = dice_roller.roll("2d6")

        assert isinstance(result, DiceExpression)
        assert 2 <= result.total <= 12
        assert len(result.dice) == 2
        assert sum(result.dice) == result.total

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll with a flat modifier."""
        result = dice_roller.roll("1d6+1")

        assert 2 <= result.total <= 7
        assert result.total == result.dice[0] + 1

    @pytest.mark.parametrize("attempt", range(20))
    def test_shortcuts_in_range(self, dice_roller: DiceRoller, attempt: int) -> None:
        """Test the 2d6 and 1d6 shortcuts."""
        assert 2 <= dice_roller.roll_two_dice() <= 12
        assert 1 <= dice_roller.roll_one_die() <= 6

    def test_seed_reproducible(self) -> None:
        """Test that the same seed gives the same first rolls."""
        first = DiceRoller(seed=7).roll("4d6").dice
        second = DiceRoller(seed=7).roll("4d6").dice

        assert first == second

    @pytest.mark.parametrize("expression", ["", "   ", "2d", "banana"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test that invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)


class TestInjectedRolls:
    """Tests for injected roll validation."""

    @pytest.mark.parametrize(("value", "expression"), [(2, "2d6"), (12, "2d6"), (1, "1d6"), (6, "1d6")])
    def test_valid_rolls(self, value: int, expression: str) -> None:
        """Test range limits are accepted."""
        assert validate_roll(value, expression=expression) == value

    @pytest.mark.parametrize(("value", "expression"), [(1, "2d6"), (13, "2d6"), (0, "1d6"), (7, "1d6")])
    def test_impossible_rolls(self, value: int, expression: str) -> None:
        """Test impossible values are rejected."""
        with pytest.raises(DiceRollError) as exc_info:
            validate_roll(value, expression=expression)

        assert exc_info.value.details["expression"] == expression

    def test_resolve_prefers_injected(self, dice_roller: DiceRoller) -> None:
        """Test that an injected value is used as is."""
        assert resolve_roll(5, expression="2d6", roller=dice_roller) == 5

    def test_resolve_rolls_when_missing(self, dice_roller: DiceRoller) -> None:
        """Test that missing values are rolled."""
        assert 1 <= resolve_roll(None, expression="1d6", roller=dice_roller) <= 6
