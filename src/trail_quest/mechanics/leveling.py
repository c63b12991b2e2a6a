"""Experience and level-up mechanics: pure math, no I/O."""
from __future__ import annotations

import math

from trail_quest.mechanics.stats import apply_deltas, restore_to_max
from trail_quest.models.character import Character, Profession

STARTING_EXPERIENCE_TO_NEXT_LEVEL = 100
EXPERIENCE_GROWTH = 1.5

LEVEL_UP_DELTAS: dict[Profession, dict[str, float]] = {
    Profession.WARRIOR: {"strength": 2, "vitality": 2, "dexterity": 1, "intelligence": 0.5},
    Profession.ASSASSIN: {"dexterity": 2, "strength": 1, "vitality": 1, "intelligence": 1},
    Profession.WIZARD: {"intelligence": 2, "vitality": 1, "dexterity": 1, "strength": 0.5},
}


def next_threshold(current: int) -> int:
    """Experience needed for the level after next."""
    return math.floor(current * EXPERIENCE_GROWTH)


def level_up(character: Character) -> Character:
    """Advance one level, carrying surplus experience over.

    Stats grow by the profession's per-level deltas and both pools are
    refilled to the recomputed maxima.
    """
    character.level += 1
    character.experience -= character.experience_to_next_level
    character.experience_to_next_level = next_threshold(character.experience_to_next_level)
    apply_deltas(character.stats, LEVEL_UP_DELTAS[character.profession])
    restore_to_max(character.stats)
    return character


def gain_experience(character: Character, amount: int) -> int:
    """Add experience and cascade through every level-up it pays for.

    Returns the number of levels gained.
    """
    character.experience += amount
    levels = 0
    while character.experience >= character.experience_to_next_level:
        level_up(character)
        levels += 1
    return levels
