"""Tests for src/trail_quest/engine/session.py."""
from __future__ import annotations

import json

import pytest

from trail_quest.engine.combat import CombatEngine
from trail_quest.engine.session import load_session, new_session, save_session
from trail_quest.models.item import EquipmentSlot


class TestNewSession:
    def test_defaults(self):
        session = new_session("Aria", "Wizard", "Elf")
        assert session.character.name == "Aria"
        assert session.inventory.max_size == 20
        assert session.inventory.gold == 0
        assert session.encounter is None
        assert not session.in_combat

    def test_inventory_options(self):
        session = new_session("Aria", "Wizard", "Elf", max_inventory_size=5, starting_gold=12)
        assert session.inventory.max_size == 5
        assert session.inventory.gold == 12

    def test_bad_archetype(self):
        with pytest.raises(ValueError):
            new_session("Aria", "Bard", "Elf")


class TestSaveLoad:
    def test_round_trip(self, make_monster):
        session = new_session("Aria", "Warrior", "Dwarf")
        CombatEngine(session).start_encounter(make_monster())
        record = save_session(session)
        assert json.loads(json.dumps(record)) == record

        restored = load_session(record)
        assert restored.in_combat
        assert restored.encounter.monster.name == "Goblin"
        assert restored.inventory.equipped_items[EquipmentSlot.HEAD] is None
        assert save_session(restored) == record
