"""Monster attack selection and templated spawning."""
from __future__ import annotations

import logging
import math
import random
from typing import Any

from trail_quest.content.loader import load_all_items, load_monster_templates
from trail_quest.models.character import Stats
from trail_quest.models.item import GoldRange, Item, LootDrop, LootTable
from trail_quest.models.monster import AttackEffect, Monster, MonsterAttack, MonsterDifficulty, MonsterType

logger = logging.getLogger(__name__)

BASIC_ATTACK_RATIO = 0.8
SPAWN_DIFFICULTIES = (MonsterDifficulty.EASY, MonsterDifficulty.NORMAL)


def basic_attack(monster: Monster) -> MonsterAttack:
    """Fallback used when every real attack is cooling down."""
    return MonsterAttack(
        name="Basic Attack",
        description="attacks with a basic strike",
        damage=math.floor(monster.stats.strength * BASIC_ATTACK_RATIO),
        cooldown=0,
        current_cooldown=0,
    )


def ready_attacks(monster: Monster) -> list[MonsterAttack]:
    return [a for a in monster.attacks if a.current_cooldown == 0]


def choose_attack(monster: Monster, rng: random.Random | None = None) -> MonsterAttack:
    """Pick uniformly among ready attacks and start its cooldown.

    Returns a snapshot of the chosen attack as it was when picked.
    """
    rng = rng or random.Random()
    available = ready_attacks(monster)
    if not available:
        return basic_attack(monster)

    chosen = rng.choice(available)
    snapshot = chosen.model_copy(deep=True)
    chosen.current_cooldown = chosen.cooldown
    return snapshot


def update_attack_cooldowns(monster: Monster) -> None:
    for attack in monster.attacks:
        if attack.current_cooldown > 0:
            attack.current_cooldown -= 1


def _roll_range(rng: random.Random, low: int, high: int) -> int:
    return rng.randint(min(low, high), max(low, high))


def _build_attacks(template: dict[str, Any], rng: random.Random) -> list[MonsterAttack]:
    attacks = []
    for entry in template.get("attacks", []):
        attacks.append(MonsterAttack(
            name=entry["name"],
            description=entry.get("description", ""),
            damage=_roll_range(rng, entry.get("damage_min", 10), entry.get("damage_max", 14)),
            cooldown=entry.get("cooldown", 0),
            current_cooldown=0,
            effects=[AttackEffect(**e) for e in entry.get("effects", [])],
        ))
    return attacks


def _build_loot_table(monster_id: str, template: dict[str, Any], items: dict[str, dict]) -> LootTable:
    drops = []
    for entry in template.get("drops", []):
        data = items.get(entry["item_id"])
        if data is None:
            logger.warning(f"Loot template references unknown item '{entry['item_id']}'")
            continue
        drops.append(LootDrop(item=Item.model_validate(data), drop_rate=entry.get("drop_rate", 0.0)))
    return LootTable(monster_id=monster_id, possible_items=drops, gold_range=GoldRange(min=5, max=20))


def generate_monster(
    index: int,
    character_level: int,
    rng: random.Random | None = None,
    templates: dict[str, dict] | None = None,
    items: dict[str, dict] | None = None,
) -> Monster:
    """Spawn a random monster scaled to the character's level.

    Stats, attack damage and experience are rolled from fixed ranges; the
    monster's type picks its attack and drop template.
    """
    rng = rng or random.Random()
    templates = templates if templates is not None else load_monster_templates()
    items = items if items is not None else load_all_items()

    monster_type = rng.choice(list(MonsterType))
    difficulty = rng.choice(SPAWN_DIFFICULTIES)
    template = templates.get(monster_type.value) or templates.get("default", {})
    monster_id = f"monster_{index}"

    stats = Stats(
        strength=10 + rng.randrange(5),
        dexterity=10 + rng.randrange(5),
        intelligence=10 + rng.randrange(5),
        vitality=10 + rng.randrange(5),
        health=100 + rng.randrange(50),
        mana=50 + rng.randrange(20),
    )
    return Monster(
        id=monster_id,
        name=f"{monster_type.value} {index + 1}",
        type=monster_type,
        difficulty=difficulty,
        level=character_level,
        stats=stats,
        attacks=_build_attacks(template, rng),
        loot_table=_build_loot_table(monster_id, template, items),
        experience_value=50 + rng.randrange(30),
    )
