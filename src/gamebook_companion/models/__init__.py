"""Domain models for gamebook characters.

Exports:
    Character: The character aggregate.
    GameMode: Rules mode enumeration.
    Stats: Numeric attributes and health.
    Inventory, InventoryItem, Weapon, ItemKind: Carried equipment.
    Progress: Paragraph position and reading history.
    ValueObject: Frozen base model with record (de)serialization.
"""

from __future__ import annotations

from gamebook_companion.models.base import ValueObject, utc_now
from gamebook_companion.models.character import Character, GameMode
from gamebook_companion.models.inventory import Inventory, InventoryItem, ItemKind, Weapon
from gamebook_companion.models.progress import Progress
from gamebook_companion.models.stats import Stats


__all__ = [
    "ValueObject",
    "utc_now",
    "Character",
    "GameMode",
    "Stats",
    "Inventory",
    "InventoryItem",
    "ItemKind",
    "Weapon",
    "Progress",
]
