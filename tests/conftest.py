"""Shared fixtures for the Trail Quest test suite."""
from __future__ import annotations

import random
from typing import Callable

import pytest

from trail_quest.engine.combat import CombatEngine
from trail_quest.engine.session import GameSession
from trail_quest.mechanics.character_creation import create_character
from trail_quest.models.character import Character, Stats
from trail_quest.models.inventory import Inventory
from trail_quest.models.item import (
    ConsumableEffect,
    ConsumableType,
    EquipmentSlot,
    GoldRange,
    Item,
    ItemType,
    LootDrop,
    LootTable,
)
from trail_quest.models.monster import Monster, MonsterAttack


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def warrior() -> Character:
    # Elf warrior: strength 15, dexterity 13, intelligence 12, vitality 13
    return create_character("Aria", "Warrior", "Elf")


@pytest.fixture
def assassin() -> Character:
    return create_character("Vex", "Assassin", "Human")


@pytest.fixture
def health_potion() -> Item:
    return Item(
        id="consumable_health_potion",
        name="Health Potion",
        type=ItemType.CONSUMABLE,
        consumable_effect=ConsumableEffect(type=ConsumableType.HEAL, value=50),
    )


@pytest.fixture
def iron_sword() -> Item:
    return Item(
        id="weapon_sword_iron",
        name="Iron Sword",
        type=ItemType.EQUIPMENT,
        equipment_slot=EquipmentSlot.MAIN_HAND,
    )


@pytest.fixture
def make_monster() -> Callable[..., Monster]:
    def _make(health: float = 50, strength: float = 10, attacks: list[MonsterAttack] | None = None,
              drops: list[LootDrop] | None = None, gold: tuple[int, int] = (0, 0),
              experience_value: int = 60, name: str = "Goblin") -> Monster:
        return Monster(
            id="monster_test",
            name=name,
            stats=Stats(strength=strength, health=health),
            attacks=attacks if attacks is not None else [
                MonsterAttack(name="Scratch", description="scratches", damage=5, cooldown=0),
            ],
            loot_table=LootTable(
                monster_id="monster_test",
                possible_items=drops or [],
                gold_range=GoldRange(min=gold[0], max=gold[1]),
            ),
            experience_value=experience_value,
        )
    return _make


@pytest.fixture
def session(warrior) -> GameSession:
    return GameSession(character=warrior, inventory=Inventory())


@pytest.fixture
def engine(session, seeded_rng) -> CombatEngine:
    return CombatEngine(session, rng=seeded_rng)
