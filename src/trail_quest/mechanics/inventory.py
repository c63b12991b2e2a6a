"""Inventory bookkeeping: in-place mutations on an Inventory record, no I/O."""
from __future__ import annotations

from trail_quest.models.inventory import Inventory
from trail_quest.models.item import EquipmentSlot, Item, ItemType


def has_room(inventory: Inventory) -> bool:
    return len(inventory.items) < inventory.max_size


def add_item(inventory: Inventory, item: Item) -> bool:
    """Append an item. Returns False (and changes nothing) when full."""
    if not has_room(inventory):
        return False
    inventory.items.append(item)
    return True


def remove_item(inventory: Inventory, index: int) -> Item | None:
    if index < 0 or index >= len(inventory.items):
        return None
    return inventory.items.pop(index)


def add_gold(inventory: Inventory, amount: int) -> int:
    inventory.gold += amount
    return inventory.gold


def remove_gold(inventory: Inventory, amount: int) -> int:
    inventory.gold = max(0, inventory.gold - amount)
    return inventory.gold


def equip_item(inventory: Inventory, index: int) -> bool:
    """Move an equipment item into its slot, returning any previous occupant to the bag."""
    if index < 0 or index >= len(inventory.items):
        return False
    item = inventory.items[index]
    if item.type != ItemType.EQUIPMENT or item.equipment_slot is None:
        return False

    inventory.items.pop(index)
    previous = inventory.equipped_items.get(item.equipment_slot)
    if previous is not None:
        inventory.items.append(previous)
    inventory.equipped_items[item.equipment_slot] = item
    return True


def unequip_item(inventory: Inventory, slot: EquipmentSlot | str) -> bool:
    slot = EquipmentSlot(slot)
    item = inventory.equipped_items.get(slot)
    if item is None or not has_room(inventory):
        return False
    inventory.items.append(item)
    inventory.equipped_items[slot] = None
    return True


def validate_consumable(inventory: Inventory, index: int) -> tuple[bool, str]:
    """Check the item at ``index`` can be consumed. Returns (valid, error_message)."""
    if index < 0 or index >= len(inventory.items):
        return False, "Invalid item index"
    item = inventory.items[index]
    if item.type != ItemType.CONSUMABLE or item.consumable_effect is None:
        return False, f"{item.name} cannot be used in combat."
    return True, ""


def equipped_gear(inventory: Inventory) -> list[Item]:
    return [item for item in inventory.equipped_items.values() if item is not None]


def all_items(inventory: Inventory) -> list[Item]:
    """Carried items followed by everything equipped."""
    return [*inventory.items, *equipped_gear(inventory)]
