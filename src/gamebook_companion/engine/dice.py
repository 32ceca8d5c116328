"""Dice rolling for the gamebook rules.

The books only ever roll six-sided dice: 2d6 for hit and luck tests,
1d6 for damage and starting luck. Expressions are evaluated with the d20
library; every roll can alternatively be injected by callers, in which
case it is range-checked here.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

import d20

from gamebook_companion.core.constants import DAMAGE_DICE, HIT_DICE
from gamebook_companion.core.exceptions import DiceRollError
from gamebook_companion.core.logging import get_logger


logger = get_logger(__name__)

TWO_DICE_RANGE = (2, 12)
ONE_DIE_RANGE = (1, 6)


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Individual kept dice results.
    """

    expression: str
    total: int
    dice: list[int]


class DiceRoller:
    """Six-sided dice source used by the engine and character creation.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 2 <= roller.roll_two_dice() <= 12
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g. '2d6', '1d6+1').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=self._extract_dice_values(result.expr),
        )
        logger.debug("Dice rolled", expression=expression, total=rolled.total, dice=rolled.dice)
        return rolled

    def roll_two_dice(self) -> int:
        """Roll 2d6, as used by hit and luck tests."""
        return self.roll(HIT_DICE).total

    def roll_one_die(self) -> int:
        """Roll 1d6, as used by damage and starting luck."""
        return self.roll(DAMAGE_DICE).total

    def _extract_dice_values(self, expr: Any) -> list[int]:
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


def validate_roll(value: int, *, expression: str) -> int:
    """Check an injected roll against the range of ``expression``.

    Args:
        value: The injected total.
        expression: Either the 2d6 or the 1d6 expression.

    Returns:
        The value, unchanged.

    Raises:
        DiceRollError: If the value cannot be produced by the dice.
    """
    low, high = TWO_DICE_RANGE if expression == HIT_DICE else ONE_DIE_RANGE
    if not low <= value <= high:
        raise DiceRollError(
            f"Roll {value} is impossible for {expression} (expected {low}..{high})",
            expression=expression,
            details={"value": value},
        )
    return value


def resolve_roll(
    value: int | None,
    *,
    expression: str,
    roller: DiceRoller | None = None,
) -> int:
    """Return the injected roll if given, otherwise roll ``expression``."""
    if value is not None:
        return validate_roll(value, expression=expression)
    return (roller or DiceRoller()).roll(expression).total


__all__ = [
    "DiceExpression",
    "DiceRoller",
    "validate_roll",
    "resolve_roll",
]
