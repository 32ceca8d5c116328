"""Inventory value objects: items, weapon and the carried inventory.

The inventory always holds the purse, a special item that cannot be
removed, and never more than MAX_ITEMS items in total.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import Field, model_validator

from gamebook_companion.core.constants import MAX_ITEMS, PURSE_ITEM_NAME
from gamebook_companion.core.exceptions import (
    InsufficientFundsError,
    InventoryFullError,
    ProtectedItemError,
    ValidationError,
)
from gamebook_companion.models.base import ValueObject


class ItemKind(StrEnum):
    """Kind of inventory entry."""

    ITEM = "item"
    SPECIAL = "special"


class InventoryItem(ValueObject):
    """A single carried item.

    Attributes:
        name: Display name (non-empty).
        possessed: Whether the character currently holds it.
        kind: Regular item or special (quest) item.
    """

    name: str
    possessed: bool = True
    kind: ItemKind = Field(ItemKind.ITEM, strict=False)

    @model_validator(mode="after")
    def check_name(self) -> Self:
        if not self.name.strip():
            raise ValidationError("Item name cannot be empty", field_name="name", invalid_value=self.name)
        return self

    @classmethod
    def purse(cls) -> InventoryItem:
        """Create the protected purse item."""
        return cls(name=PURSE_ITEM_NAME, possessed=True, kind=ItemKind.SPECIAL)

    @property
    def is_purse(self) -> bool:
        return self.name == PURSE_ITEM_NAME

    def toggle_possession(self) -> InventoryItem:
        return self._evolve(possessed=not self.possessed)


class Weapon(ValueObject):
    """The equipped weapon.

    Attributes:
        name: Weapon name (non-empty).
        attack_bonus: Damage added to every hit (>= 0).
    """

    name: str
    attack_bonus: int = 0

    @model_validator(mode="after")
    def check_weapon(self) -> Self:
        if not self.name.strip():
            raise ValidationError("Weapon name cannot be empty", field_name="name", invalid_value=self.name)
        if self.attack_bonus < 0:
            raise ValidationError(
                "Attack bonus cannot be negative",
                field_name="attack_bonus",
                invalid_value=self.attack_bonus,
            )
        return self


class Inventory(ValueObject):
    """Currency, weapon and carried items.

    Example:
        >>> inventory = Inventory.starting()
        >>> [item.name for item in inventory.items]
        ['Purse']
        >>> inventory.add_currency(5).remove_currency(2).currency
        3
    """

    currency: int = 0
    weapon: Weapon | None = None
    items: tuple[InventoryItem, ...] = Field(default_factory=lambda: (InventoryItem.purse(),), strict=False)

    @model_validator(mode="after")
    def check_inventory(self) -> Self:
        """Enforce currency, capacity and purse invariants.

        Raises:
            ValidationError: If currency is negative or the purse is missing.
            InventoryFullError: If more than MAX_ITEMS items are carried.
        """
        if self.currency < 0:
            raise ValidationError("Currency cannot be negative", field_name="currency", invalid_value=self.currency)
        if len(self.items) > MAX_ITEMS:
            raise InventoryFullError(
                f"Inventory cannot hold more than {MAX_ITEMS} items",
                capacity=MAX_ITEMS,
            )
        if not any(item.is_purse for item in self.items):
            raise ValidationError("Inventory must contain the purse", field_name="items")
        return self

    @classmethod
    def starting(cls) -> Inventory:
        """Inventory given to a new character: no money, no weapon, the purse."""
        return cls(currency=0, weapon=None, items=(InventoryItem.purse(),))

    @property
    def is_full(self) -> bool:
        return len(self.items) >= MAX_ITEMS

    def equip_weapon(self, weapon: Weapon) -> Inventory:
        """Replace the current weapon, if any."""
        return self._evolve(weapon=weapon)

    def unequip_weapon(self) -> Inventory:
        return self._evolve(weapon=None)

    def add_item(self, item: InventoryItem) -> Inventory:
        """Append an item.

        Raises:
            InventoryFullError: If the inventory already holds MAX_ITEMS items.
        """
        if self.is_full:
            raise InventoryFullError(
                f"Inventory is full ({MAX_ITEMS} items)",
                capacity=MAX_ITEMS,
            )
        return self._evolve(items=(*self.items, item))

    def remove_item(self, index: int) -> Inventory:
        """Remove the item at ``index``.

        Raises:
            ValidationError: If ``index`` is out of range.
            ProtectedItemError: If the item is the purse.
        """
        item = self._item_at(index)
        if item.is_purse:
            raise ProtectedItemError(
                "The purse cannot be removed",
                field_name="items",
                invalid_value=index,
            )
        return self._evolve(items=self.items[:index] + self.items[index + 1 :])

    def toggle_item_possession(self, index: int) -> Inventory:
        """Flip the ``possessed`` flag of the item at ``index``.

        Raises:
            ValidationError: If ``index`` is out of range.
        """
        toggled = self._item_at(index).toggle_possession()
        return self._evolve(items=(*self.items[:index], toggled, *self.items[index + 1 :]))

    def add_currency(self, amount: int) -> Inventory:
        if amount < 0:
            raise ValidationError("Amount cannot be negative", field_name="amount", invalid_value=amount)
        return self._evolve(currency=self.currency + amount)

    def remove_currency(self, amount: int) -> Inventory:
        """Spend ``amount`` currency.

        Raises:
            ValidationError: If ``amount`` is negative.
            InsufficientFundsError: If less than ``amount`` is carried.
        """
        if amount < 0:
            raise ValidationError("Amount cannot be negative", field_name="amount", invalid_value=amount)
        if amount > self.currency:
            raise InsufficientFundsError(
                "Not enough currency",
                requested=amount,
                available=self.currency,
            )
        return self._evolve(currency=self.currency - amount)

    def _item_at(self, index: int) -> InventoryItem:
        if not 0 <= index < len(self.items):
            raise ValidationError(
                f"Item index out of range (0..{len(self.items) - 1})",
                field_name="index",
                invalid_value=index,
            )
        return self.items[index]


__all__ = [
    "ItemKind",
    "InventoryItem",
    "Weapon",
    "Inventory",
]
