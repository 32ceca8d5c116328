"""Tests for the record migration chain."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from gamebook_companion.core.constants import CURRENT_SCHEMA_VERSION, PURSE_ITEM_NAME
from gamebook_companion.models.character import Character
from gamebook_companion.storage.migrations import (
    MIGRATIONS,
    get_record_version,
    migrate_record,
)


class TestRegistry:
    """Tests for the registry itself."""

    def test_versions_contiguous_from_two(self) -> None:
        """Test that versions start at 2 and have no gaps."""
        versions = [migration.version for migration in MIGRATIONS]

        assert versions == list(range(2, CURRENT_SCHEMA_VERSION + 1))

    def test_every_migration_described(self) -> None:
        """Test that each migration has a description."""
        assert all(migration.description for migration in MIGRATIONS)

    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            ({}, 1),
            ({"version": 3}, 3),
            ({"schemaVersion": 5, "version": 2}, 5),
        ],
    )
    def test_record_version(self, record: dict[str, Any], expected: int) -> None:
        """Test version lookup order."""
        assert get_record_version(record) == expected


class TestMigrateRecord:
    """Tests for migrate_record."""

    def test_legacy_record(self, legacy_record: dict[str, Any]) -> None:
        """Test the full chain from an unversioned record."""
        migrated = migrate_record(legacy_record)

        assert migrated["schemaVersion"] == CURRENT_SCHEMA_VERSION
        assert "version" not in migrated
        assert migrated["gameMode"] == "mortal"
        assert migrated["book"] == 2
        assert migrated["stats"]["constitution"] is None
        assert migrated["stats"]["reputation"] == 0
        assert migrated["inventory"]["weapon"] is None
        assert migrated["inventory"]["items"] == [
            {"name": PURSE_ITEM_NAME, "possessed": True, "kind": "special"},
            {"name": "Rope", "possessed": True, "kind": "item"},
        ]
        assert migrated["progress"]["daysElapsed"] == 0
        assert migrated["progress"]["nextWakeUpPosition"] is None

    def test_hydrates_after_migration(self, legacy_record: dict[str, Any]) -> None:
        """Test that a migrated legacy record is a valid Character."""
        character = Character.from_data(migrate_record(legacy_record))

        assert character.id == "legacy-1"
        assert character.stats.current_health == 20
        assert character.progress.history == (1, 12, 57)

    def test_input_not_mutated(self, legacy_record: dict[str, Any]) -> None:
        """Test that the original record is untouched."""
        original = copy.deepcopy(legacy_record)

        migrate_record(legacy_record)

        assert legacy_record == original

    def test_idempotent(self, legacy_record: dict[str, Any]) -> None:
        """Test that migrating twice changes nothing."""
        once = migrate_record(legacy_record)

        assert migrate_record(once) == once

    def test_current_record_unchanged(self, sample_character: Character) -> None:
        """Test no-op at the current version."""
        record = sample_character.to_data()

        assert migrate_record(record) == record

    @pytest.mark.parametrize(
        ("book", "expected"),
        [
            ("La Harpe des Quatre Saisons", 1),
            ("La Confrérie de NUADA", 2),
            ("Les Entrailles du temps", 3),
            ("Unknown book", 1),
            (3, 3),
        ],
    )
    def test_book_title_mapping(self, book: Any, expected: int) -> None:
        """Test book title to number conversion."""
        assert migrate_record({"version": 3, "book": book})["book"] == expected

    def test_reputation_only_for_book_two(self) -> None:
        """Test that other books get no reputation."""
        migrated = migrate_record({"version": 4, "book": 1, "stats": {}})

        assert migrated["stats"]["reputation"] is None
        assert migrated["progress"]["daysElapsed"] is None

    def test_existing_values_kept(self) -> None:
        """Test that migrations only fill missing fields."""
        migrated = migrate_record(
            {
                "version": 1,
                "book": 2,
                "gameMode": "narrative",
                "stats": {"reputation": -2},
                "inventory": {"items": [{"name": "Key", "kind": "special", "possessed": False}]},
            }
        )

        assert migrated["gameMode"] == "narrative"
        assert migrated["stats"]["reputation"] == -2
        assert migrated["inventory"]["items"][1] == {"name": "Key", "kind": "special", "possessed": False}

    def test_purse_not_duplicated(self) -> None:
        """Test that an existing purse is kept in place."""
        items = [{"name": "Rope"}, {"name": PURSE_ITEM_NAME, "kind": "special"}]

        migrated = migrate_record({"version": 5, "inventory": {"items": items}})

        assert [item["name"] for item in migrated["inventory"]["items"]] == ["Rope", PURSE_ITEM_NAME]

    def test_malformed_record_never_raises(self) -> None:
        """Test that migrations are total over odd input."""
        migrated = migrate_record({"stats": None, "inventory": "?", "progress": 3})

        assert migrated["schemaVersion"] == CURRENT_SCHEMA_VERSION
        assert migrated["inventory"]["items"][0]["name"] == PURSE_ITEM_NAME

    def test_null_fields_get_defaults(self) -> None:
        """Test that explicit nulls are replaced like missing keys."""
        migrated = migrate_record(
            {
                "version": 1,
                "book": 2,
                "gameMode": None,
                "stats": {"reputation": None},
                "inventory": {
                    "weapon": "Sword",
                    "items": [{"name": "Rope", "kind": None, "possessed": None}],
                },
                "progress": {"daysElapsed": None},
            }
        )

        assert migrated["gameMode"] == "mortal"
        assert migrated["stats"]["reputation"] == 0
        assert migrated["inventory"]["weapon"] is None
        assert migrated["inventory"]["items"][1] == {"name": "Rope", "kind": "item", "possessed": True}
        assert migrated["progress"]["daysElapsed"] == 0

    def test_null_fields_hydrate(self, legacy_record: dict[str, Any]) -> None:
        """Test that a legacy record with null fields becomes a valid Character."""
        legacy_record["gameMode"] = None
        legacy_record["inventory"]["weapon"] = None
        legacy_record["inventory"]["items"].append({"name": "Lamp", "kind": None, "possessed": None})

        character = Character.from_data(migrate_record(legacy_record))

        assert character.game_mode == "mortal"
        assert character.inventory.weapon is None
        lamp = character.inventory.items[-1]
        assert (lamp.name, lamp.kind, lamp.possessed) == ("Lamp", "item", True)
