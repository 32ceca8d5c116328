"""Application service for character use cases.

Every use case loads a character from the injected repository, applies one
aggregate operation and saves the result. Domain errors propagate
unchanged; a missing character raises CharacterNotFoundError.

Example:
    >>> service = CharacterService(InMemoryCharacterRepository(), roller=DiceRoller(seed=1))
    >>> hero = service.create_character(name="Ael", book=2, talent="Archer")
    >>> hero = service.go_to_paragraph(hero.id, 42)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from gamebook_companion.core.config import get_settings
from gamebook_companion.core.exceptions import CharacterNotFoundError
from gamebook_companion.core.logging import get_logger
from gamebook_companion.engine.combat import Combatant, CombatantRole, CombatSession
from gamebook_companion.engine.creation import roll_starting_stats
from gamebook_companion.engine.dice import DiceRoller
from gamebook_companion.engine.luck import LuckTestResult, check_luck
from gamebook_companion.models.character import Character, GameMode
from gamebook_companion.models.inventory import InventoryItem, Weapon
from gamebook_companion.models.stats import Stats
from gamebook_companion.storage.repository import CharacterRepository


logger = get_logger(__name__)


class CharacterService:
    """Load, change and save characters through a repository.

    Args:
        repository: Storage collaborator.
        roller: Dice source for creation and luck tests. Defaults to a
            roller seeded from ``settings.game.dice_seed``.
    """

    def __init__(
        self,
        repository: CharacterRepository,
        *,
        roller: DiceRoller | None = None,
    ) -> None:
        self._repository = repository
        self._roller = roller or DiceRoller(seed=get_settings().game.dice_seed)
        logger.debug("CharacterService initialized", repository=type(repository).__name__)

    @property
    def repository(self) -> CharacterRepository:
        return self._repository

    # =========================================================================
    # Queries
    # =========================================================================

    def get_character(self, character_id: str) -> Character:
        """Load a character.

        Raises:
            CharacterNotFoundError: If no record exists for ``character_id``.
        """
        character = self._repository.find_by_id(character_id)
        if character is None:
            raise CharacterNotFoundError(character_id)
        return character

    def list_characters(self) -> list[Character]:
        return self._repository.find_all()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create_character(
        self,
        *,
        name: str,
        book: int,
        talent: str,
        stats: Stats | Mapping[str, Any] | None = None,
        game_mode: GameMode | str | None = None,
        luck_roll: int | None = None,
        health_roll: int | None = None,
    ) -> Character:
        """Create and store a new character.

        Stats are rolled with the book rules when not supplied, using the
        injected rolls where given. The game mode defaults to the configured
        one.
        """
        if stats is None:
            stats = roll_starting_stats(self._roller, luck_roll=luck_roll, health_roll=health_roll)
        character = Character.create(
            name=name,
            book=book,
            talent=talent,
            stats=stats,
            game_mode=game_mode or get_settings().game.default_game_mode,
        )
        self._repository.save(character)
        logger.info("Character created", character_id=character.id, name=character.name, book=book)
        return character

    def duplicate_character(self, character_id: str) -> Character:
        """Store a copy with a new identity and a fresh adventure."""
        copy = self.get_character(character_id).duplicate()
        self._repository.save(copy)
        logger.info("Character duplicated", source_id=character_id, character_id=copy.id)
        return copy

    def delete_character(self, character_id: str) -> None:
        """Delete a character.

        Raises:
            CharacterNotFoundError: If no record exists for ``character_id``.
        """
        if not self._repository.exists(character_id):
            raise CharacterNotFoundError(character_id)
        self._repository.delete(character_id)
        logger.info("Character deleted", character_id=character_id)

    # =========================================================================
    # Mutations
    # =========================================================================

    def _mutate(
        self,
        character_id: str,
        operation: Callable[[Character], Character],
        action: str,
    ) -> Character:
        updated = operation(self.get_character(character_id))
        self._repository.save(updated)
        logger.debug("Character updated", character_id=character_id, action=action)
        return updated

    def update_name(self, character_id: str, name: str) -> Character:
        return self._mutate(character_id, lambda c: c.update_name(name), "update_name")

    def update_book(self, character_id: str, book: int) -> Character:
        return self._mutate(character_id, lambda c: c.update_book(book), "update_book")

    def update_game_mode(self, character_id: str, game_mode: GameMode | str) -> Character:
        return self._mutate(character_id, lambda c: c.update_game_mode(game_mode), "update_game_mode")

    def update_notes(self, character_id: str, notes: str) -> Character:
        return self._mutate(character_id, lambda c: c.update_notes(notes), "update_notes")

    def update_stats(self, character_id: str, **changes: Any) -> Character:
        return self._mutate(character_id, lambda c: c.update_stats(**changes), "update_stats")

    def update_reputation(self, character_id: str, value: int | None) -> Character:
        return self._mutate(character_id, lambda c: c.update_reputation(value), "update_reputation")

    def take_damage(self, character_id: str, amount: int) -> Character:
        return self._mutate(character_id, lambda c: c.take_damage(amount), "take_damage")

    def heal(self, character_id: str, amount: int) -> Character:
        return self._mutate(character_id, lambda c: c.heal(amount), "heal")

    def decrease_luck(self, character_id: str) -> Character:
        return self._mutate(character_id, lambda c: c.decrease_luck(), "decrease_luck")

    def equip_weapon(self, character_id: str, weapon: Weapon) -> Character:
        return self._mutate(character_id, lambda c: c.equip_weapon(weapon), "equip_weapon")

    def unequip_weapon(self, character_id: str) -> Character:
        return self._mutate(character_id, lambda c: c.unequip_weapon(), "unequip_weapon")

    def add_item(self, character_id: str, item: InventoryItem) -> Character:
        return self._mutate(character_id, lambda c: c.add_item(item), "add_item")

    def remove_item(self, character_id: str, index: int) -> Character:
        return self._mutate(character_id, lambda c: c.remove_item(index), "remove_item")

    def toggle_item_possession(self, character_id: str, index: int) -> Character:
        return self._mutate(
            character_id, lambda c: c.toggle_item_possession(index), "toggle_item_possession"
        )

    def add_currency(self, character_id: str, amount: int) -> Character:
        return self._mutate(character_id, lambda c: c.add_currency(amount), "add_currency")

    def remove_currency(self, character_id: str, amount: int) -> Character:
        return self._mutate(character_id, lambda c: c.remove_currency(amount), "remove_currency")

    def go_to_paragraph(self, character_id: str, paragraph: int) -> Character:
        return self._mutate(character_id, lambda c: c.go_to_paragraph(paragraph), "go_to_paragraph")

    def update_days_elapsed(self, character_id: str, days: int) -> Character:
        return self._mutate(character_id, lambda c: c.update_days_elapsed(days), "update_days_elapsed")

    def update_next_wake_up_paragraph(self, character_id: str, paragraph: int | None) -> Character:
        return self._mutate(
            character_id,
            lambda c: c.update_next_wake_up_paragraph(paragraph),
            "update_next_wake_up_paragraph",
        )

    # =========================================================================
    # Rules
    # =========================================================================

    def test_luck(self, character_id: str, roll: int | None = None) -> LuckTestResult:
        """Run a luck test and store the character with one less luck point."""
        result = check_luck(self.get_character(character_id), roll, roller=self._roller)
        self._repository.save(result.character)
        logger.info("Luck test", character_id=character_id, roll=result.roll, lucky=result.lucky)
        return result

    def start_combat(
        self,
        character_id: str,
        enemy: Combatant,
        first_attacker: CombatantRole = CombatantRole.PLAYER,
    ) -> CombatSession:
        """Open a combat session for a stored character."""
        return CombatSession.start(self.get_character(character_id), enemy, first_attacker)

    def play_round(
        self,
        session: CombatSession,
        *,
        hit_roll: int | None = None,
        damage_roll: int | None = None,
    ) -> CombatSession:
        """Resolve the next round with the service's dice source."""
        return session.play_round(hit_roll=hit_roll, damage_roll=damage_roll, roller=self._roller)

    def apply_combat_outcome(self, character_id: str, session: CombatSession) -> Character:
        """Store the damage the character took during ``session``."""
        updated = self._mutate(character_id, session.apply_to, "apply_combat_outcome")
        logger.info(
            "Combat outcome applied",
            character_id=character_id,
            status=str(session.status),
            health=updated.stats.current_health,
        )
        return updated


__all__ = ["CharacterService"]
