"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the gamebook companion test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from gamebook_companion.engine.combat import Combatant
from gamebook_companion.engine.dice import DiceRoller
from gamebook_companion.models.character import Character
from gamebook_companion.models.stats import Stats
from gamebook_companion.services.character_service import CharacterService
from gamebook_companion.storage.repository import InMemoryCharacterRepository


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Reset the settings cache and keep the default database inside tmp_path."""
    from gamebook_companion.core.config import clear_settings_cache

    monkeypatch.setenv("GAMEBOOK_DATABASE_PATH", str(tmp_path / "gamebook.db"))
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "GAMEBOOK_DEBUG": "true",
        "GAMEBOOK_LOG_LEVEL": "DEBUG",
        "GAMEBOOK_GAME_DICE_SEED": "1234",
        "GAMEBOOK_GAME_DEFAULT_GAME_MODE": "narrative",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_stats_data() -> dict[str, int]:
    """Provide stats of a freshly rolled character (luck 4, health 8 x 4)."""
    return {
        "dexterity": 7,
        "luck": 4,
        "initial_luck": 4,
        "max_health": 32,
        "current_health": 32,
    }


@pytest.fixture
def sample_stats(sample_stats_data: dict[str, int]) -> Stats:
    return Stats(**sample_stats_data)


@pytest.fixture
def sample_character(sample_stats: Stats) -> Character:
    """Create a book 1 character at paragraph 1."""
    return Character.create(name="Ael", book=1, talent="Archer", stats=sample_stats)


@pytest.fixture
def book_two_character(sample_stats: Stats) -> Character:
    """Create a book 2 character, which tracks reputation and days."""
    return Character.create(name="Brenn", book=2, talent="Healer", stats=sample_stats)


@pytest.fixture
def legacy_record() -> dict[str, Any]:
    """Provide a record saved before schema versioning existed.

    Returns:
        Raw record with a book title, no game mode and no purse.
    """
    return {
        "id": "legacy-1",
        "name": "Old Hero",
        "book": "La Confrérie de NUADA",
        "talent": "Sword",
        "createdAt": "2023-05-01T10:00:00Z",
        "updatedAt": "2023-05-02T10:00:00Z",
        "stats": {
            "dexterity": 7,
            "luck": 3,
            "initialLuck": 5,
            "maxHealth": 28,
            "currentHealth": 20,
        },
        "inventory": {
            "currency": 12,
            "items": [{"name": "Rope"}],
        },
        "progress": {
            "currentPosition": 57,
            "history": [1, 12, 57],
            "lastSavedAt": "2023-05-02T10:00:00Z",
        },
        "notes": "",
    }


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def goblin() -> Combatant:
    return Combatant(name="Goblin", dexterity=6, endurance=10, weapon_bonus=1)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def repository() -> InMemoryCharacterRepository:
    return InMemoryCharacterRepository()


@pytest.fixture
def character_service(
    repository: InMemoryCharacterRepository,
    dice_roller: DiceRoller,
) -> CharacterService:
    """Create a CharacterService over an empty in-memory repository."""
    return CharacterService(repository, roller=dice_roller)
