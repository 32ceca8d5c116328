"""Round-by-round combat resolution.

A combat session alternates attacks between the player and one enemy.
Each round the attacker rolls 2d6 and hits when the roll does not exceed
their dexterity; a hit deals ``1 + 1d6 + weapon bonus`` damage and the
defender's endurance is floored at zero. The session ends as soon as one
side's endurance reaches zero.

Example:
    >>> session = CombatSession.start(hero, goblin)
    >>> session = session.play_round(hit_roll=6, damage_roll=3)
    >>> session.rounds[-1].total_damage
    4
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self

from pydantic import Field, model_validator

from gamebook_companion.core.constants import BASE_DAMAGE, DAMAGE_DICE, HIT_DICE
from gamebook_companion.core.exceptions import CombatError, ValidationError
from gamebook_companion.core.logging import get_logger
from gamebook_companion.engine.dice import DiceRoller, resolve_roll
from gamebook_companion.models.base import ValueObject
from gamebook_companion.models.character import Character


logger = get_logger(__name__)


class CombatantRole(StrEnum):
    """Side of the fight."""

    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opponent(self) -> CombatantRole:
        return CombatantRole.ENEMY if self is CombatantRole.PLAYER else CombatantRole.PLAYER


class CombatStatus(StrEnum):
    """State of a combat session."""

    ONGOING = "ongoing"
    VICTORY = "victory"
    DEFEAT = "defeat"


class Combatant(ValueObject):
    """Numeric snapshot of one side of a fight.

    Attributes:
        name: Display name.
        dexterity: Compared against the 2d6 hit roll (>= 1).
        endurance: Remaining endurance (>= 0).
        weapon_bonus: Damage added to each hit (>= 0).
        max_endurance: Endurance at full health, when known (>= endurance).
    """

    name: str
    dexterity: int
    endurance: int
    weapon_bonus: int = 0
    max_endurance: int | None = None

    @model_validator(mode="after")
    def check_combatant(self) -> Self:
        if self.dexterity < 1:
            raise ValidationError(
                "Dexterity must be at least 1",
                field_name="dexterity",
                invalid_value=self.dexterity,
            )
        if self.endurance < 0:
            raise ValidationError(
                "Endurance cannot be negative",
                field_name="endurance",
                invalid_value=self.endurance,
            )
        if self.weapon_bonus < 0:
            raise ValidationError(
                "Weapon bonus cannot be negative",
                field_name="weapon_bonus",
                invalid_value=self.weapon_bonus,
            )
        if self.max_endurance is not None and (self.max_endurance < 1 or self.max_endurance < self.endurance):
            raise ValidationError(
                "Maximum endurance must be positive and at least the current endurance",
                field_name="max_endurance",
                invalid_value=self.max_endurance,
            )
        return self

    @classmethod
    def from_character(cls, character: Character) -> Combatant:
        """Snapshot a character's fighting values."""
        return cls(
            name=character.name,
            dexterity=character.stats.dexterity,
            endurance=character.stats.current_health,
            weapon_bonus=character.weapon_bonus,
            max_endurance=character.stats.max_health,
        )

    @property
    def endurance_ratio(self) -> float | None:
        """Remaining share of full endurance, or None when the maximum is unknown."""
        if self.max_endurance is None:
            return None
        return self.endurance / self.max_endurance

    def with_endurance(self, endurance: int) -> Combatant:
        return self._evolve(endurance=endurance)


@dataclass(frozen=True)
class HitCheck:
    """Outcome of a hit test."""

    roll: int
    dexterity: int
    success: bool


@dataclass(frozen=True)
class DamageRoll:
    """Outcome of a damage roll."""

    roll: int
    weapon_bonus: int
    total: int


class CombatRound(ValueObject):
    """Immutable record of one resolved round.

    Damage fields are only set when the attack hit.
    """

    round_number: int
    attacker_role: CombatantRole = Field(strict=False)
    hit_roll: int
    hit_success: bool
    damage_roll: int | None = None
    weapon_bonus: int | None = None
    total_damage: int | None = None
    attacker_endurance_after: int
    defender_endurance_after: int

    def to_data(self) -> dict[str, Any]:
        """Serialize to the round descriptor, omitting damage fields on a miss."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def endurance_after(self, role: CombatantRole) -> int:
        """Endurance of ``role`` at the end of this round."""
        if role is self.attacker_role:
            return self.attacker_endurance_after
        return self.defender_endurance_after


def check_hit(
    dexterity: int,
    hit_roll: int | None = None,
    *,
    roller: DiceRoller | None = None,
) -> HitCheck:
    """Roll (or take) 2d6 and compare it with ``dexterity``.

    Raises:
        DiceRollError: If an injected roll is outside 2..12.
    """
    roll = resolve_roll(hit_roll, expression=HIT_DICE, roller=roller)
    return HitCheck(roll=roll, dexterity=dexterity, success=roll <= dexterity)


def calculate_damage(
    weapon_bonus: int,
    damage_roll: int | None = None,
    *,
    roller: DiceRoller | None = None,
) -> DamageRoll:
    """Roll (or take) 1d6 and compute ``1 + roll + weapon_bonus``.

    Raises:
        DiceRollError: If an injected roll is outside 1..6.
    """
    roll = resolve_roll(damage_roll, expression=DAMAGE_DICE, roller=roller)
    return DamageRoll(roll=roll, weapon_bonus=weapon_bonus, total=BASE_DAMAGE + roll + weapon_bonus)


def resolve_round(
    round_number: int,
    attacker_role: CombatantRole,
    attacker: Combatant,
    defender: Combatant,
    *,
    hit_roll: int | None = None,
    damage_roll: int | None = None,
    roller: DiceRoller | None = None,
) -> CombatRound:
    """Resolve a single attack of ``attacker`` against ``defender``.

    The damage roll is only consumed when the attack hits.

    Returns:
        The round record, with both sides' endurance after the attack.
    """
    hit = check_hit(attacker.dexterity, hit_roll, roller=roller)
    if not hit.success:
        return CombatRound(
            round_number=round_number,
            attacker_role=attacker_role,
            hit_roll=hit.roll,
            hit_success=False,
            attacker_endurance_after=attacker.endurance,
            defender_endurance_after=defender.endurance,
        )

    damage = calculate_damage(attacker.weapon_bonus, damage_roll, roller=roller)
    return CombatRound(
        round_number=round_number,
        attacker_role=attacker_role,
        hit_roll=hit.roll,
        hit_success=True,
        damage_roll=damage.roll,
        weapon_bonus=damage.weapon_bonus,
        total_damage=damage.total,
        attacker_endurance_after=attacker.endurance,
        defender_endurance_after=max(0, defender.endurance - damage.total),
    )


class CombatSession(ValueObject):
    """State of a fight between the player and one enemy.

    The status is derived from endurance: the session is a defeat once the
    player's endurance is zero and a victory once the enemy's is.
    """

    player: Combatant
    enemy: Combatant
    next_attacker: CombatantRole = Field(CombatantRole.PLAYER, strict=False)
    rounds: tuple[CombatRound, ...] = Field((), strict=False)

    @classmethod
    def start(
        cls,
        character: Character,
        enemy: Combatant,
        first_attacker: CombatantRole = CombatantRole.PLAYER,
    ) -> CombatSession:
        """Open a session against ``enemy`` using the character's current values."""
        session = cls(
            player=Combatant.from_character(character),
            enemy=enemy,
            next_attacker=first_attacker,
        )
        logger.info(
            "Combat started",
            player=session.player.name,
            enemy=enemy.name,
            first_attacker=str(first_attacker),
        )
        return session

    @property
    def status(self) -> CombatStatus:
        if self.player.endurance == 0:
            return CombatStatus.DEFEAT
        if self.enemy.endurance == 0:
            return CombatStatus.VICTORY
        return CombatStatus.ONGOING

    @property
    def is_over(self) -> bool:
        return self.status is not CombatStatus.ONGOING

    def combatant(self, role: CombatantRole) -> Combatant:
        return self.player if role is CombatantRole.PLAYER else self.enemy

    def damage_taken(self, role: CombatantRole) -> int:
        """Total damage dealt to ``role`` across all rounds."""
        return sum(
            played.total_damage or 0
            for played in self.rounds
            if played.attacker_role is role.opponent
        )

    def play_round(
        self,
        *,
        hit_roll: int | None = None,
        damage_roll: int | None = None,
        roller: DiceRoller | None = None,
    ) -> CombatSession:
        """Resolve the next attack and return the updated session.

        Raises:
            CombatError: If the session has already ended.
            DiceRollError: If an injected roll is out of range.
        """
        round_number = len(self.rounds) + 1
        if self.is_over:
            raise CombatError(
                f"Combat is already over ({self.status})",
                round_number=round_number,
            )

        attacker_role = self.next_attacker
        defender_role = attacker_role.opponent
        played = resolve_round(
            round_number,
            attacker_role,
            self.combatant(attacker_role),
            self.combatant(defender_role),
            hit_roll=hit_roll,
            damage_roll=damage_roll,
            roller=roller,
        )
        defender = self.combatant(defender_role).with_endurance(played.defender_endurance_after)

        session = self._evolve(
            **{str(defender_role): defender},
            next_attacker=defender_role,
            rounds=(*self.rounds, played),
        )
        logger.debug(
            "Combat round resolved",
            round_number=round_number,
            attacker=str(attacker_role),
            hit=played.hit_success,
            damage=played.total_damage,
            status=str(session.status),
        )
        if session.is_over:
            logger.info("Combat ended", status=str(session.status), rounds=round_number)
        return session

    def apply_to(self, character: Character) -> Character:
        """Fold the damage the player took back into ``character``."""
        return character.take_damage(self.damage_taken(CombatantRole.PLAYER))


__all__ = [
    "CombatantRole",
    "CombatStatus",
    "Combatant",
    "HitCheck",
    "DamageRoll",
    "CombatRound",
    "check_hit",
    "calculate_damage",
    "resolve_round",
    "CombatSession",
]
