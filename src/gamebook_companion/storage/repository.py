"""Character repository contract and an in-memory implementation.

Repositories store characters as persisted records. Records are passed
through the migration chain on every read, before hydration, so callers
always receive characters at the current schema version.
"""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable

from gamebook_companion.core.logging import get_logger
from gamebook_companion.models.character import Character
from gamebook_companion.storage.migrations import migrate_record


logger = get_logger(__name__)


@runtime_checkable
class CharacterRepository(Protocol):
    """Storage collaborator required by the character service."""

    def save(self, character: Character) -> None:
        """Insert or replace the character's record."""
        ...

    def find_by_id(self, character_id: str) -> Character | None:
        """Load a character, or None if no record exists."""
        ...

    def find_all(self) -> list[Character]:
        """Load every stored character."""
        ...

    def delete(self, character_id: str) -> None:
        """Remove a character's record; unknown ids are ignored."""
        ...

    def exists(self, character_id: str) -> bool:
        """Check whether a record exists for ``character_id``."""
        ...


def hydrate(record: dict[str, Any]) -> Character:
    """Migrate a raw record and build the Character it describes.

    Raises:
        ValidationError: If the migrated record is still invalid.
    """
    return Character.from_data(migrate_record(record))


class InMemoryCharacterRepository:
    """Dict-backed repository, used in tests and for throwaway sessions.

    Example:
        >>> repository = InMemoryCharacterRepository()
        >>> repository.save(character)
        >>> repository.exists(character.id)
        True
    """

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        """Initialize the repository.

        Args:
            records: Optional raw records keyed by id, at any schema version.
        """
        self._records: dict[str, dict[str, Any]] = copy.deepcopy(records) if records else {}

    def save(self, character: Character) -> None:
        self._records[character.id] = character.to_data()
        logger.debug("Character saved", character_id=character.id, backend="memory")

    def find_by_id(self, character_id: str) -> Character | None:
        record = self._records.get(character_id)
        if record is None:
            return None
        return hydrate(record)

    def find_all(self) -> list[Character]:
        return [hydrate(record) for record in self._records.values()]

    def delete(self, character_id: str) -> None:
        self._records.pop(character_id, None)
        logger.debug("Character deleted", character_id=character_id, backend="memory")

    def exists(self, character_id: str) -> bool:
        return character_id in self._records

    def raw_record(self, character_id: str) -> dict[str, Any] | None:
        """Return a copy of the stored record, without migration."""
        record = self._records.get(character_id)
        return copy.deepcopy(record) if record is not None else None


__all__ = [
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "hydrate",
]
