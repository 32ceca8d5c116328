"""Application-wide constants for the gamebook companion.

Rules constants taken from the adventure books, plus the schema version
shared by the character model and the migration chain.
"""

from __future__ import annotations

# =============================================================================
# Persistence
# =============================================================================

CURRENT_SCHEMA_VERSION = 8
"""Schema version every live Character carries."""

LEGACY_SCHEMA_VERSION = 1
"""Implicit version of records stored before versioning existed."""

# =============================================================================
# Books
# =============================================================================

MIN_BOOK = 1
MAX_BOOK = 3

REPUTATION_BOOK = 2
"""Only this book tracks reputation and elapsed days."""

BOOK_TITLES: dict[int, str] = {
    1: "La Harpe des Quatre Saisons",
    2: "La Confrérie de NUADA",
    3: "Les Entrailles du temps",
}
"""Titles under which books were stored before they became numbers."""

# =============================================================================
# Inventory
# =============================================================================

MAX_ITEMS = 14
"""Hard cap on carried items, purse included."""

PURSE_ITEM_NAME = "Purse"
"""The protected item holding the character's currency."""

# =============================================================================
# Stats
# =============================================================================

MIN_REPUTATION = -5
MAX_REPUTATION = 5

STARTING_DEXTERITY = 7
"""Dexterity is fixed at creation; luck and health are rolled."""

HEALTH_DICE_MULTIPLIER = 4
"""Maximum health is 2d6 times this value."""

CRITICAL_HEALTH_DIVISOR = 4
"""Health at or below max // 4 is critical."""

# =============================================================================
# Progress
# =============================================================================

STARTING_PARAGRAPH = 1
MIN_DAYS_ELAPSED = 0
MAX_DAYS_ELAPSED = 4

# =============================================================================
# Combat
# =============================================================================

BASE_DAMAGE = 1
"""Flat damage added to every hit before the die and weapon bonus."""

HIT_DICE = "2d6"
DAMAGE_DICE = "1d6"


__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "LEGACY_SCHEMA_VERSION",
    "MIN_BOOK",
    "MAX_BOOK",
    "REPUTATION_BOOK",
    "BOOK_TITLES",
    "MAX_ITEMS",
    "PURSE_ITEM_NAME",
    "MIN_REPUTATION",
    "MAX_REPUTATION",
    "STARTING_DEXTERITY",
    "HEALTH_DICE_MULTIPLIER",
    "CRITICAL_HEALTH_DIVISOR",
    "STARTING_PARAGRAPH",
    "MIN_DAYS_ELAPSED",
    "MAX_DAYS_ELAPSED",
    "BASE_DAMAGE",
    "HIT_DICE",
    "DAMAGE_DICE",
]
