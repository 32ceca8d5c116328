"""Starting statistics for a new character.

Dexterity is fixed, luck is 1d6 and maximum health is 2d6 times four.
"""

from __future__ import annotations

from gamebook_companion.core.constants import (
    DAMAGE_DICE,
    HEALTH_DICE_MULTIPLIER,
    HIT_DICE,
    STARTING_DEXTERITY,
)
from gamebook_companion.engine.dice import DiceRoller, resolve_roll
from gamebook_companion.models.stats import Stats


def roll_starting_stats(
    roller: DiceRoller | None = None,
    *,
    luck_roll: int | None = None,
    health_roll: int | None = None,
    constitution: int | None = None,
) -> Stats:
    """Roll the stats a character starts the book with.

    Args:
        roller: Dice source for rolls that are not injected.
        luck_roll: Injected 1d6 for luck.
        health_roll: Injected 2d6 multiplied into maximum health.
        constitution: Optional constitution, when the book uses it.

    Raises:
        DiceRollError: If an injected roll is out of range.
    """
    roller = roller or DiceRoller()
    luck = resolve_roll(luck_roll, expression=DAMAGE_DICE, roller=roller)
    max_health = resolve_roll(health_roll, expression=HIT_DICE, roller=roller) * HEALTH_DICE_MULTIPLIER
    return Stats(
        dexterity=STARTING_DEXTERITY,
        luck=luck,
        initial_luck=luck,
        max_health=max_health,
        current_health=max_health,
        constitution=constitution,
    )


__all__ = ["roll_starting_stats"]
