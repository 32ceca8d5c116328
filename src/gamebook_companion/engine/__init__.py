"""Rules engine: dice, combat rounds, luck tests and starting stats.

Exports:
    DiceRoller: d20-backed six-sided dice source.
    CombatSession: Alternating-attack combat state machine.
    Combatant, CombatRound, CombatantRole, CombatStatus: Combat values.
    check_hit, calculate_damage, resolve_round: Single-step combat rules.
    check_luck: Luck test.
    roll_starting_stats: Creation-time stat generation.
"""

from __future__ import annotations

from gamebook_companion.engine.combat import (
    CombatantRole,
    Combatant,
    CombatRound,
    CombatSession,
    CombatStatus,
    DamageRoll,
    HitCheck,
    calculate_damage,
    check_hit,
    resolve_round,
)
from gamebook_companion.engine.creation import roll_starting_stats
from gamebook_companion.engine.dice import DiceExpression, DiceRoller, resolve_roll, validate_roll
from gamebook_companion.engine.luck import LuckTestResult, check_luck


__all__ = [
    # Dice
    "DiceExpression",
    "DiceRoller",
    "validate_roll",
    "resolve_roll",
    # Combat
    "CombatantRole",
    "CombatStatus",
    "Combatant",
    "CombatRound",
    "CombatSession",
    "HitCheck",
    "DamageRoll",
    "check_hit",
    "calculate_damage",
    "resolve_round",
    # Luck & creation
    "LuckTestResult",
    "check_luck",
    "roll_starting_stats",
]
