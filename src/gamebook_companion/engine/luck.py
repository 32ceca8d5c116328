"""Luck tests.

The reader rolls 2d6 and is lucky when the roll does not exceed current
luck. Win or lose, the test costs one point of luck.
"""

from __future__ import annotations

from dataclasses import dataclass

from gamebook_companion.core.constants import HIT_DICE
from gamebook_companion.core.logging import get_logger
from gamebook_companion.engine.dice import DiceRoller, resolve_roll
from gamebook_companion.models.character import Character


logger = get_logger(__name__)


@dataclass(frozen=True)
class LuckTestResult:
    """Outcome of a luck test.

    Attributes:
        roll: The 2d6 total.
        luck_before: Luck the roll was compared against.
        lucky: Whether the roll was at most ``luck_before``.
        character: The character after spending one point of luck.
    """

    roll: int
    luck_before: int
    lucky: bool
    character: Character


def check_luck(
    character: Character,
    roll: int | None = None,
    *,
    roller: DiceRoller | None = None,
) -> LuckTestResult:
    """Test the character's luck.

    Args:
        character: The character being tested.
        roll: Injected 2d6 total; rolled when omitted.
        roller: Dice source used when ``roll`` is omitted.

    Raises:
        DiceRollError: If an injected roll is outside 2..12.
    """
    value = resolve_roll(roll, expression=HIT_DICE, roller=roller)
    luck = character.stats.luck
    result = LuckTestResult(
        roll=value,
        luck_before=luck,
        lucky=value <= luck,
        character=character.decrease_luck(),
    )
    logger.debug("Luck tested", character_id=character.id, roll=value, luck=luck, lucky=result.lucky)
    return result


__all__ = [
    "LuckTestResult",
    "check_luck",
]
