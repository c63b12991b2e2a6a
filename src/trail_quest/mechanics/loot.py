"""Loot rolls: pure functions, no I/O."""
from __future__ import annotations

import random
from dataclasses import dataclass, field

from trail_quest.models.item import Item, LootTable


@dataclass
class Loot:
    items: list[Item] = field(default_factory=list)
    gold: int = 0


def roll_gold(loot_table: LootTable, rng: random.Random | None = None) -> int:
    """Uniform integer in [min, max], both ends inclusive."""
    rng = rng or random.Random()
    low, high = loot_table.gold_range.min, loot_table.gold_range.max
    if high < low:
        low, high = high, low
    return rng.randint(low, high)


def generate_loot(loot_table: LootTable, rng: random.Random | None = None) -> Loot:
    """Roll every drop independently against its rate, then roll gold.

    An entry drops when a uniform [0, 1) draw is <= its drop rate, so a rate
    of 1.0 always drops and 0.0 never does.
    """
    rng = rng or random.Random()
    items = [
        drop.item.model_copy(deep=True)
        for drop in loot_table.possible_items
        if drop.drop_rate > 0 and rng.random() <= drop.drop_rate
    ]
    return Loot(items=items, gold=roll_gold(loot_table, rng))
