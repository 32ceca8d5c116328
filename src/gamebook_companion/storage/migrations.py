"""Schema migrations for stored character records.

Records are plain dicts in the persisted (camelCase) shape. Each migration
upgrades a record from the previous version to its own version, filling
new fields with defaults. A field stored as null counts as missing.
Migrations accept any record of the prior
version and never raise; they work on a copy of their input.

Example:
    >>> migrated = migrate_record({"name": "Ael", "book": "La Confrérie de NUADA"})
    >>> migrated["book"], migrated["schemaVersion"]
    (2, 8)
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from gamebook_companion.core.constants import (
    BOOK_TITLES,
    CURRENT_SCHEMA_VERSION,
    LEGACY_SCHEMA_VERSION,
    MIN_BOOK,
    MIN_DAYS_ELAPSED,
    PURSE_ITEM_NAME,
    REPUTATION_BOOK,
)
from gamebook_companion.core.logging import get_logger


logger = get_logger(__name__)

Record = dict[str, Any]

BOOK_NUMBERS: dict[str, int] = {title: number for number, title in BOOK_TITLES.items()}


@dataclass(frozen=True)
class Migration:
    """One step of the schema chain.

    Attributes:
        version: Schema version produced by this step.
        description: What the step changes.
        migrate: Upgrade function from ``version - 1`` to ``version``.
    """

    version: int
    description: str
    migrate: Callable[[Record], Record]


def get_record_version(record: Mapping[str, Any]) -> int:
    """Read a record's schema version.

    ``schemaVersion`` wins over the legacy ``version`` key; records with
    neither predate versioning.
    """
    version = record.get("schemaVersion", record.get("version"))
    return version if isinstance(version, int) else LEGACY_SCHEMA_VERSION


def _stamp(record: Record, version: int) -> Record:
    record.pop("version", None)
    record["schemaVersion"] = version
    return record


def _sub_record(record: Record, key: str) -> Record:
    value = record.get(key)
    if not isinstance(value, dict):
        value = {}
        record[key] = value
    return value


def _fill(record: Record, key: str, default: Any) -> None:
    if record.get(key) is None:
        record[key] = default


# =============================================================================
# Migration steps
# =============================================================================


def _add_game_mode(record: Record) -> Record:
    record = copy.deepcopy(record)
    _fill(record, "gameMode", "mortal")
    return _stamp(record, 2)


def _add_constitution(record: Record) -> Record:
    record = copy.deepcopy(record)
    _sub_record(record, "stats").setdefault("constitution", None)
    return _stamp(record, 3)


def _book_title_to_number(record: Record) -> Record:
    record = copy.deepcopy(record)
    book = record.get("book")
    if not isinstance(book, int) or isinstance(book, bool):
        record["book"] = BOOK_NUMBERS.get(book, MIN_BOOK) if isinstance(book, str) else MIN_BOOK
    return _stamp(record, 4)


def _add_reputation(record: Record) -> Record:
    record = copy.deepcopy(record)
    _fill(_sub_record(record, "stats"), "reputation", 0 if record.get("book") == REPUTATION_BOOK else None)
    return _stamp(record, 5)


def _ensure_purse(record: Record) -> Record:
    record = copy.deepcopy(record)
    inventory = _sub_record(record, "inventory")
    items = inventory.get("items")
    if not isinstance(items, list):
        items = []
    if not any(isinstance(item, dict) and item.get("name") == PURSE_ITEM_NAME for item in items):
        items = [{"name": PURSE_ITEM_NAME, "possessed": True, "kind": "special"}, *items]
    inventory["items"] = items
    return _stamp(record, 6)


def _normalize_inventory(record: Record) -> Record:
    record = copy.deepcopy(record)
    inventory = _sub_record(record, "inventory")
    items = inventory.get("items")
    for item in items if isinstance(items, list) else ():
        if isinstance(item, dict):
            _fill(item, "kind", "item")
            _fill(item, "possessed", True)
    if not isinstance(inventory.get("weapon"), dict):
        inventory["weapon"] = None
    return _stamp(record, 7)


def _add_day_tracking(record: Record) -> Record:
    record = copy.deepcopy(record)
    progress = _sub_record(record, "progress")
    _fill(progress, "daysElapsed", MIN_DAYS_ELAPSED if record.get("book") == REPUTATION_BOOK else None)
    progress.setdefault("nextWakeUpPosition", None)
    return _stamp(record, 8)


MIGRATIONS: tuple[Migration, ...] = (
    Migration(2, "Add game mode, defaulting to mortal", _add_game_mode),
    Migration(3, "Add optional constitution stat", _add_constitution),
    Migration(4, "Store book as a number instead of its title", _book_title_to_number),
    Migration(5, "Add reputation for book 2", _add_reputation),
    Migration(6, "Guarantee the purse item", _ensure_purse),
    Migration(7, "Default item kind, possession and weapon", _normalize_inventory),
    Migration(8, "Add day tracking and wake-up paragraph", _add_day_tracking),
)


def migrate_record(record: Mapping[str, Any]) -> Record:
    """Upgrade a stored record to the current schema version.

    Applies, in ascending order, every migration newer than the record's
    version. A record already at the current version is returned as is.

    Args:
        record: Raw record as read from storage.

    Returns:
        A record at CURRENT_SCHEMA_VERSION. The input is never modified.
    """
    version = get_record_version(record)
    if version >= CURRENT_SCHEMA_VERSION:
        return dict(record)

    migrated: Record = dict(record)
    for migration in MIGRATIONS:
        if migration.version > version:
            migrated = migration.migrate(migrated)
            logger.debug(
                "Migration applied",
                record_id=migrated.get("id"),
                version=migration.version,
                description=migration.description,
            )

    logger.info(
        "Record migrated",
        record_id=migrated.get("id"),
        from_version=version,
        to_version=CURRENT_SCHEMA_VERSION,
    )
    return migrated


__all__ = [
    "Migration",
    "MIGRATIONS",
    "get_record_version",
    "migrate_record",
]
