"""Gamebook Companion - character sheet and combat resolver for solo gamebooks.

Tracks a reader's character through a paragraph-based adventure book:
stats, inventory and reading progress, resolved dice combat, and stored
records that stay readable as the record format evolves.

ARCHITECTURE:
- Characters are immutable; every change returns a new validated Character
- Dice come from d20 unless the caller injects the values rolled at the table
- Stored records pass through the migration chain before hydration

Example:
    >>> from gamebook_companion import CharacterService, InMemoryCharacterRepository
    >>>
    >>> service = CharacterService(InMemoryCharacterRepository())
    >>> hero = service.create_character(name="Ael", book=2, talent="Archer")
    >>> hero = service.go_to_paragraph(hero.id, 42)
    >>> session = service.start_combat(hero.id, Combatant(name="Wolf", dexterity=6, endurance=8))
    >>> session = service.play_round(session, hit_roll=5, damage_roll=3)

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic value objects and the Character aggregate.
    engine: Dice, combat rounds, luck tests and starting stats.
    storage: Repository contract, SQLite/in-memory adapters, migrations.
    services: Character use cases over an injected repository.
"""

from __future__ import annotations

# Core
from gamebook_companion.core.config import Settings, get_settings
from gamebook_companion.core.exceptions import GamebookError
from gamebook_companion.core.logging import configure_logging, get_logger

# Models
from gamebook_companion.models import (
    Character,
    GameMode,
    Inventory,
    InventoryItem,
    ItemKind,
    Progress,
    Stats,
    Weapon,
)

# Engine
from gamebook_companion.engine import (
    Combatant,
    CombatantRole,
    CombatRound,
    CombatSession,
    CombatStatus,
    DiceRoller,
    check_luck,
    roll_starting_stats,
)

# Storage & services
from gamebook_companion.services import CharacterService
from gamebook_companion.storage import (
    CharacterRepository,
    InMemoryCharacterRepository,
    SQLiteCharacterRepository,
    migrate_record,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "GamebookError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "GameMode",
    "Stats",
    "Inventory",
    "InventoryItem",
    "ItemKind",
    "Weapon",
    "Progress",
    # Engine
    "DiceRoller",
    "Combatant",
    "CombatantRole",
    "CombatRound",
    "CombatSession",
    "CombatStatus",
    "check_luck",
    "roll_starting_stats",
    # Storage & services
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "SQLiteCharacterRepository",
    "migrate_record",
    "CharacterService",
]
