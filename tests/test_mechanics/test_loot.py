"""Tests for src/trail_quest/mechanics/loot.py."""
from __future__ import annotations

import random

from trail_quest.mechanics.loot import generate_loot, roll_gold
from trail_quest.models.item import GoldRange, Item, LootDrop, LootTable


def _table(drops, low=5, high=20):
    return LootTable(monster_id="m", possible_items=drops, gold_range=GoldRange(min=low, max=high))


class TestGenerateLoot:
    def test_certain_and_impossible_drops(self):
        always = Item(id="always", name="Always")
        never = Item(id="never", name="Never")
        table = _table([LootDrop(item=always, drop_rate=1.0), LootDrop(item=never, drop_rate=0.0)])
        rng = random.Random(7)
        for _ in range(1000):
            loot = generate_loot(table, rng)
            assert [i.id for i in loot.items] == ["always"]
            assert 5 <= loot.gold <= 20

    def test_dropped_items_are_copies(self):
        item = Item(id="gem", name="Gem")
        loot = generate_loot(_table([LootDrop(item=item, drop_rate=1.0)]), random.Random(1))
        loot.items[0].name = "Changed"
        assert item.name == "Gem"

    def test_roughly_half(self):
        table = _table([LootDrop(item=Item(id="coin", name="Coin"), drop_rate=0.5)])
        rng = random.Random(3)
        hits = sum(len(generate_loot(table, rng).items) for _ in range(2000))
        assert 850 < hits < 1150

    def test_empty_table(self):
        loot = generate_loot(_table([], 0, 0), random.Random(1))
        assert loot.items == []
        assert loot.gold == 0


class TestRollGold:
    def test_inclusive_bounds(self):
        rng = random.Random(11)
        rolls = {roll_gold(_table([], 1, 3), rng) for _ in range(300)}
        assert rolls == {1, 2, 3}

    def test_swapped_range(self):
        rng = random.Random(11)
        assert all(5 <= roll_gold(_table([], 20, 5), rng) <= 20 for _ in range(100))
