"""The Character aggregate.

A Character owns its Stats, Inventory and Progress value objects together
with identity, book and bookkeeping timestamps. It is immutable: every
mutator validates the change through the owning value object and returns
a new Character sharing ``id`` and ``created_at`` with a fresh
``updated_at``.

Example:
    >>> stats = Stats(dexterity=7, luck=4, initial_luck=4, max_health=32, current_health=32)
    >>> hero = Character.create(name="Ael", book=1, talent="Archer", stats=stats)
    >>> hero = hero.go_to_paragraph(42).take_damage(6)
    >>> hero.progress.history, hero.stats.current_health
    ((1, 42), 26)
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any, Self
from uuid import uuid4

from pydantic import Field, field_validator, model_validator

from gamebook_companion.core.constants import (
    CURRENT_SCHEMA_VERSION,
    MAX_BOOK,
    MIN_BOOK,
    REPUTATION_BOOK,
)
from gamebook_companion.core.exceptions import ValidationError
from gamebook_companion.models.base import ValueObject, ensure_utc, utc_now
from gamebook_companion.models.inventory import Inventory, InventoryItem, Weapon
from gamebook_companion.models.progress import Progress
from gamebook_companion.models.stats import Stats


class GameMode(StrEnum):
    """How strictly the rules are applied."""

    NARRATIVE = "narrative"
    SIMPLIFIED = "simplified"
    MORTAL = "mortal"


class Character(ValueObject):
    """A player character of the gamebook series.

    Attributes:
        id: Opaque identifier assigned at creation.
        name: Character name, trimmed and non-empty.
        book: Book number (1..3).
        talent: Talent chosen at creation.
        game_mode: Rules mode.
        schema_version: Always the current schema version.
        created_at: Creation time, never changes.
        updated_at: Time of the last change.
        stats: Numeric attributes and health.
        inventory: Money, weapon and items.
        progress: Paragraph position and history.
        notes: Free-text player notes.
    """

    id: str
    name: str
    book: int
    talent: str
    game_mode: GameMode = Field(GameMode.MORTAL, strict=False)
    schema_version: int = CURRENT_SCHEMA_VERSION
    created_at: datetime = Field(strict=False)
    updated_at: datetime = Field(strict=False)
    stats: Stats
    inventory: Inventory = Field(default_factory=Inventory.starting)
    progress: Progress = Field(default_factory=Progress.starting)
    notes: str = ""

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def normalize_timestamps(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def check_character(self) -> Self:
        """Validate identity, name, book and schema version.

        Raises:
            ValidationError: On the first violated rule.
        """
        if not self.id.strip():
            raise ValidationError("Character id cannot be empty", field_name="id", invalid_value=self.id)
        if not self.name.strip():
            raise ValidationError("Character name cannot be empty", field_name="name", invalid_value=self.name)
        if not MIN_BOOK <= self.book <= MAX_BOOK:
            raise ValidationError(
                f"Book must be between {MIN_BOOK} and {MAX_BOOK}",
                field_name="book",
                invalid_value=self.book,
            )
        if self.schema_version != CURRENT_SCHEMA_VERSION:
            raise ValidationError(
                f"Unsupported schema version, expected {CURRENT_SCHEMA_VERSION}",
                field_name="schema_version",
                invalid_value=self.schema_version,
            )
        return self

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def create(
        cls,
        *,
        name: str,
        book: int,
        talent: str,
        stats: Stats | Mapping[str, Any],
        game_mode: GameMode | str = GameMode.MORTAL,
        notes: str = "",
    ) -> Character:
        """Create a new character at the start of a book.

        Assigns a fresh id and timestamps, the starting inventory and
        progress, and applies the book's optional fields: book 2 starts
        with reputation 0 and a day counter at 0, other books have neither.

        Args:
            name: Character name, trimmed.
            book: Book number (1..3).
            talent: Chosen talent.
            stats: Starting stats, as Stats or a record mapping.
            game_mode: Rules mode.
            notes: Initial notes.

        Raises:
            ValidationError: If any value is invalid.
        """
        if not isinstance(stats, Stats):
            stats = Stats.from_data(stats)
        tracks_reputation = book == REPUTATION_BOOK
        if tracks_reputation:
            stats = stats.update_reputation(stats.reputation if stats.reputation is not None else 0)
        else:
            stats = stats.update_reputation(None)

        now = utc_now()
        return cls.from_data(
            {
                "id": str(uuid4()),
                "name": name.strip(),
                "book": book,
                "talent": talent,
                "game_mode": game_mode,
                "schema_version": CURRENT_SCHEMA_VERSION,
                "created_at": now,
                "updated_at": now,
                "stats": stats,
                "inventory": Inventory.starting(),
                "progress": Progress.starting(track_days=tracks_reputation),
                "notes": notes,
            }
        )

    def duplicate(self, name_suffix: str = " (Copy)") -> Character:
        """Create a new character with the same build and a fresh adventure.

        Stats, talent, book and game mode are kept; identity, inventory and
        progress start over.
        """
        return self.create(
            name=f"{self.name}{name_suffix}",
            book=self.book,
            talent=self.talent,
            stats=self.stats,
            game_mode=self.game_mode,
        )

    # =========================================================================
    # Read-only helpers
    # =========================================================================

    @property
    def weapon_bonus(self) -> int:
        """Attack bonus of the equipped weapon, 0 when unarmed."""
        weapon = self.inventory.weapon
        return weapon.attack_bonus if weapon is not None else 0

    def is_dead(self) -> bool:
        return self.stats.is_dead()

    def is_critical_health(self) -> bool:
        return self.stats.is_critical_health()

    # =========================================================================
    # Mutators
    # =========================================================================

    def _touch(self, **changes: Any) -> Character:
        return self._evolve(updated_at=utc_now(), **changes)

    def update_name(self, name: str) -> Character:
        """Rename the character.

        Raises:
            ValidationError: If the trimmed name is empty.
        """
        trimmed = name.strip()
        if not trimmed:
            raise ValidationError("Character name cannot be empty", field_name="name", invalid_value=name)
        return self._touch(name=trimmed)

    def update_book(self, book: int) -> Character:
        if not MIN_BOOK <= book <= MAX_BOOK:
            raise ValidationError(
                f"Book must be between {MIN_BOOK} and {MAX_BOOK}",
                field_name="book",
                invalid_value=book,
            )
        return self._touch(book=book)

    def update_game_mode(self, game_mode: GameMode | str) -> Character:
        return self._touch(game_mode=game_mode)

    def update_notes(self, notes: str) -> Character:
        return self._touch(notes=notes)

    def update_stats(self, **changes: Any) -> Character:
        return self._touch(stats=self.stats.update(**changes))

    def update_reputation(self, value: int | None) -> Character:
        return self._touch(stats=self.stats.update_reputation(value))

    def take_damage(self, amount: int) -> Character:
        return self._touch(stats=self.stats.take_damage(amount))

    def heal(self, amount: int) -> Character:
        return self._touch(stats=self.stats.heal(amount))

    def decrease_luck(self) -> Character:
        return self._touch(stats=self.stats.decrease_luck())

    def equip_weapon(self, weapon: Weapon) -> Character:
        return self._touch(inventory=self.inventory.equip_weapon(weapon))

    def unequip_weapon(self) -> Character:
        return self._touch(inventory=self.inventory.unequip_weapon())

    def add_item(self, item: InventoryItem) -> Character:
        return self._touch(inventory=self.inventory.add_item(item))

    def remove_item(self, index: int) -> Character:
        return self._touch(inventory=self.inventory.remove_item(index))

    def toggle_item_possession(self, index: int) -> Character:
        return self._touch(inventory=self.inventory.toggle_item_possession(index))

    def add_currency(self, amount: int) -> Character:
        return self._touch(inventory=self.inventory.add_currency(amount))

    def remove_currency(self, amount: int) -> Character:
        return self._touch(inventory=self.inventory.remove_currency(amount))

    def go_to_paragraph(self, paragraph: int) -> Character:
        return self._touch(progress=self.progress.go_to_paragraph(paragraph))

    def update_days_elapsed(self, days: int) -> Character:
        return self._touch(progress=self.progress.update_days_elapsed(days))

    def update_next_wake_up_paragraph(self, paragraph: int | None) -> Character:
        return self._touch(progress=self.progress.update_next_wake_up_paragraph(paragraph))

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_data(self) -> dict[str, Any]:
        """Serialize to the persisted record, stamping ``updatedAt`` with now."""
        data = super().to_data()
        data["updatedAt"] = utc_now().isoformat()
        return data


__all__ = [
    "GameMode",
    "Character",
]
