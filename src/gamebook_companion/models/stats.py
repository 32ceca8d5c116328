"""Character statistics value object.

Holds dexterity, luck, health and the edition-specific optional stats.
Every operation returns a new instance; bounds are checked on every
construction and never clamped, except by the operations documented as
clamping (``decrease_luck``, ``take_damage`` and ``heal``).
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import Field, model_validator

from gamebook_companion.core.constants import (
    CRITICAL_HEALTH_DIVISOR,
    MAX_REPUTATION,
    MIN_REPUTATION,
)
from gamebook_companion.core.exceptions import ValidationError
from gamebook_companion.models.base import ValueObject


class Stats(ValueObject):
    """Numeric attributes and health of a character.

    Attributes:
        dexterity: Fighting skill, compared against 2d6 to hit (>= 1).
        luck: Current luck, spent by luck tests (>= 0).
        initial_luck: Luck rolled at creation (>= 0).
        max_health: Maximum endurance (>= 1).
        current_health: Current endurance (0..max_health).
        constitution: Optional stat introduced by later books (>= 0).
        reputation: Reputation track, only used by book 2 (-5..5).

    Example:
        >>> stats = Stats(dexterity=7, luck=4, initial_luck=4, max_health=32, current_health=32)
        >>> stats.take_damage(5).current_health
        27
    """

    dexterity: int = Field(description="Dexterity score")
    luck: int = Field(description="Current luck")
    initial_luck: int = Field(description="Luck rolled at creation")
    max_health: int = Field(description="Maximum endurance")
    current_health: int = Field(description="Current endurance")
    constitution: int | None = Field(default=None, description="Optional constitution")
    reputation: int | None = Field(default=None, description="Reputation (book 2 only)")

    @model_validator(mode="after")
    def check_bounds(self) -> Self:
        """Enforce every stat bound.

        Raises:
            ValidationError: On the first violated bound.
        """
        if self.dexterity < 1:
            raise ValidationError(
                "Dexterity must be at least 1",
                field_name="dexterity",
                invalid_value=self.dexterity,
            )
        if self.constitution is not None and self.constitution < 0:
            raise ValidationError(
                "Constitution cannot be negative",
                field_name="constitution",
                invalid_value=self.constitution,
            )
        if self.luck < 0:
            raise ValidationError("Luck cannot be negative", field_name="luck", invalid_value=self.luck)
        if self.initial_luck < 0:
            raise ValidationError(
                "Initial luck cannot be negative",
                field_name="initial_luck",
                invalid_value=self.initial_luck,
            )
        if self.max_health < 1:
            raise ValidationError(
                "Maximum health must be at least 1",
                field_name="max_health",
                invalid_value=self.max_health,
            )
        if self.current_health < 0:
            raise ValidationError(
                "Current health cannot be negative",
                field_name="current_health",
                invalid_value=self.current_health,
            )
        if self.current_health > self.max_health:
            raise ValidationError(
                f"Current health cannot exceed maximum health ({self.max_health})",
                field_name="current_health",
                invalid_value=self.current_health,
            )
        if self.reputation is not None and not MIN_REPUTATION <= self.reputation <= MAX_REPUTATION:
            raise ValidationError(
                f"Reputation must be between {MIN_REPUTATION} and {MAX_REPUTATION}",
                field_name="reputation",
                invalid_value=self.reputation,
            )
        return self

    def update(self, **changes: Any) -> Stats:
        """Merge ``changes`` over the current values.

        Passing ``None`` for an optional stat clears it. The whole update is
        rejected if any resulting field is invalid.

        Raises:
            ValidationError: If a field is unknown or a bound is violated.
        """
        return self._evolve(**changes)

    def decrease_luck(self) -> Stats:
        """Spend one point of luck, never going below zero."""
        return self._evolve(luck=max(0, self.luck - 1))

    def take_damage(self, amount: int) -> Stats:
        """Lose ``amount`` endurance, floored at zero.

        Raises:
            ValidationError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValidationError("Damage cannot be negative", field_name="amount", invalid_value=amount)
        return self._evolve(current_health=max(0, self.current_health - amount))

    def heal(self, amount: int) -> Stats:
        """Recover ``amount`` endurance, capped at maximum health.

        Raises:
            ValidationError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValidationError("Healing cannot be negative", field_name="amount", invalid_value=amount)
        return self._evolve(current_health=min(self.max_health, self.current_health + amount))

    def update_reputation(self, value: int | None) -> Stats:
        return self._evolve(reputation=value)

    def is_dead(self) -> bool:
        return self.current_health == 0

    def is_critical_health(self) -> bool:
        """Alive with a quarter (floored) of maximum health or less."""
        return 0 < self.current_health <= self.max_health // CRITICAL_HEALTH_DIVISOR


__all__ = ["Stats"]
