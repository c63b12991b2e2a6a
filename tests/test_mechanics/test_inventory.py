"""Tests for src/trail_quest/mechanics/inventory.py."""
from __future__ import annotations

from trail_quest.mechanics.inventory import (
    add_gold,
    add_item,
    all_items,
    equipped_gear,
    equip_item,
    remove_gold,
    remove_item,
    unequip_item,
    validate_consumable,
)
from trail_quest.models.inventory import Inventory
from trail_quest.models.item import EquipmentSlot, Item, ItemType


class TestItems:
    def test_add_until_full(self, health_potion):
        inventory = Inventory(max_size=2)
        assert add_item(inventory, health_potion)
        assert add_item(inventory, health_potion)
        assert not add_item(inventory, health_potion)
        assert len(inventory.items) == 2

    def test_remove(self, health_potion, iron_sword):
        inventory = Inventory(items=[health_potion, iron_sword])
        assert remove_item(inventory, 0).id == health_potion.id
        assert [i.id for i in inventory.items] == [iron_sword.id]

    def test_remove_out_of_range(self):
        assert remove_item(Inventory(), 0) is None


class TestGold:
    def test_add_and_remove(self):
        inventory = Inventory(gold=10)
        assert add_gold(inventory, 5) == 15
        assert remove_gold(inventory, 20) == 0


class TestEquipment:
    def test_equip_moves_into_slot(self, iron_sword):
        inventory = Inventory(items=[iron_sword])
        assert equip_item(inventory, 0)
        assert inventory.items == []
        assert inventory.equipped_items[EquipmentSlot.MAIN_HAND].id == iron_sword.id

    def test_equip_swaps_previous(self, iron_sword):
        axe = Item(id="axe", name="Axe", type=ItemType.EQUIPMENT, equipment_slot=EquipmentSlot.MAIN_HAND)
        inventory = Inventory(items=[iron_sword, axe])
        equip_item(inventory, 0)
        equip_item(inventory, 0)
        assert inventory.equipped_items[EquipmentSlot.MAIN_HAND].id == "axe"
        assert [i.id for i in inventory.items] == [iron_sword.id]

    def test_cannot_equip_consumable(self, health_potion):
        assert not equip_item(Inventory(items=[health_potion]), 0)

    def test_unequip_needs_room(self, iron_sword, health_potion):
        inventory = Inventory(items=[iron_sword], max_size=1)
        equip_item(inventory, 0)
        inventory.items.append(health_potion)
        assert not unequip_item(inventory, "MAIN_HAND")
        inventory.items.clear()
        assert unequip_item(inventory, EquipmentSlot.MAIN_HAND)
        assert inventory.equipped_items[EquipmentSlot.MAIN_HAND] is None

    def test_all_items(self, iron_sword, health_potion):
        inventory = Inventory(items=[iron_sword, health_potion])
        equip_item(inventory, 0)
        assert [i.id for i in all_items(inventory)] == [health_potion.id, iron_sword.id]

    def test_equipped_gear(self, iron_sword, health_potion):
        inventory = Inventory(items=[iron_sword, health_potion])
        assert equipped_gear(inventory) == []
        equip_item(inventory, 0)
        assert [i.id for i in equipped_gear(inventory)] == [iron_sword.id]


class TestValidateConsumable:
    def test_ok(self, health_potion):
        assert validate_consumable(Inventory(items=[health_potion]), 0) == (True, "")

    def test_bad_index(self):
        assert validate_consumable(Inventory(), 3) == (False, "Invalid item index")

    def test_not_consumable(self, iron_sword):
        assert validate_consumable(Inventory(items=[iron_sword]), 0) == (False, "Iron Sword cannot be used in combat.")
