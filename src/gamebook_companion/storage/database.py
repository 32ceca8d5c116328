"""SQLite persistence for characters.

Each character is stored as its JSON record in a single ``characters``
table. The schema version and update time are copied into their own
columns for inspection and ordering. Records are migrated on read.

Storage location: ``settings.storage.database_path`` (data/gamebook.db).
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from gamebook_companion.core.config import get_settings
from gamebook_companion.core.exceptions import PersistenceError
from gamebook_companion.core.logging import get_logger
from gamebook_companion.models.character import Character
from gamebook_companion.storage.migrations import get_record_version
from gamebook_companion.storage.repository import hydrate


logger = get_logger(__name__)


class SQLiteCharacterRepository:
    """SQLite implementation of the character repository.

    A short-lived connection is opened for every call.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the repository and create the schema.

        Args:
            db_path: Path to the database file. If None, uses the configured path.
        """
        self.db_path = Path(db_path) if db_path is not None else get_settings().storage.database_path

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Character database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup.

        Raises:
            PersistenceError: If SQLite reports an error.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Cannot open character database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError(
                f"Character database error: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    record_json TEXT NOT NULL,
                    schema_version INTEGER NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_updated
                ON characters(updated_at DESC)
            """)

    # =========================================================================
    # Repository contract
    # =========================================================================

    def save(self, character: Character) -> None:
        """Insert or replace the character's record."""
        record = character.to_data()
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO characters (id, record_json, schema_version, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    character.id,
                    json.dumps(record, ensure_ascii=False),
                    record["schemaVersion"],
                    record["updatedAt"],
                ),
            )
        logger.info("Character saved", character_id=character.id, name=character.name)

    def find_by_id(self, character_id: str) -> Character | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT record_json FROM characters WHERE id = ?",
                (character_id,),
            ).fetchone()
        if row is None:
            return None
        return hydrate(json.loads(row["record_json"]))

    def find_all(self) -> list[Character]:
        """Load every character, most recently updated first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT record_json FROM characters ORDER BY updated_at DESC"
            ).fetchall()
        return [hydrate(json.loads(row["record_json"])) for row in rows]

    def delete(self, character_id: str) -> None:
        with self._get_connection() as conn:
            deleted = conn.execute("DELETE FROM characters WHERE id = ?", (character_id,)).rowcount
        if deleted:
            logger.info("Character deleted", character_id=character_id)

    def exists(self, character_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM characters WHERE id = ?",
                (character_id,),
            ).fetchone()
        return row is not None

    # =========================================================================
    # Raw access
    # =========================================================================

    def import_record(self, record: dict[str, object]) -> None:
        """Store a raw record as is, at whatever schema version it carries.

        Used to load exported or legacy data; migration happens on read.

        Raises:
            PersistenceError: If the record has no id.
        """
        character_id = record.get("id")
        if not isinstance(character_id, str) or not character_id:
            raise PersistenceError("Cannot import a record without an id")
        version = get_record_version(record)
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO characters (id, record_json, schema_version, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    character_id,
                    json.dumps(record, ensure_ascii=False),
                    version,
                    str(record.get("updatedAt", "")),
                ),
            )
        logger.info("Record imported", character_id=character_id, schema_version=version)


__all__ = ["SQLiteCharacterRepository"]
