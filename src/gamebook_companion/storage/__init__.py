"""Storage module for character persistence.

Provides:
- The repository contract used by the character service
- In-memory and SQLite repositories
- The schema migration chain applied to every record read from storage
"""

from gamebook_companion.storage.database import SQLiteCharacterRepository
from gamebook_companion.storage.migrations import (
    MIGRATIONS,
    Migration,
    get_record_version,
    migrate_record,
)
from gamebook_companion.storage.repository import (
    CharacterRepository,
    InMemoryCharacterRepository,
    hydrate,
)

__all__ = [
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "SQLiteCharacterRepository",
    "hydrate",
    "Migration",
    "MIGRATIONS",
    "get_record_version",
    "migrate_record",
]
