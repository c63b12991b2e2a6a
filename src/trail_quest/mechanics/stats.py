"""Stat derivation, pure math, no I/O."""
from __future__ import annotations

from trail_quest.models.character import Profession, Race, Stats

BASE_STATS: dict[str, float] = {
    "strength": 10,
    "dexterity": 10,
    "intelligence": 10,
    "vitality": 10,
    "health": 100,
    "mana": 50,
}

PROFESSION_DELTAS: dict[Profession, dict[str, float]] = {
    Profession.WARRIOR: {"strength": 5, "vitality": 3, "health": 50},
    Profession.ASSASSIN: {"dexterity": 5, "strength": 2, "health": 25},
    Profession.WIZARD: {"intelligence": 5, "mana": 50},
}

RACE_DELTAS: dict[Race, dict[str, float]] = {
    Race.HUMAN: {"strength": 1, "dexterity": 1, "intelligence": 1, "vitality": 1},
    Race.DWARF: {"strength": 2, "vitality": 3, "health": 25},
    Race.ORC: {"strength": 4, "vitality": 2, "intelligence": -2, "health": 30},
    Race.ELF: {"dexterity": 3, "intelligence": 2, "mana": 25},
}


def max_health(stats: Stats) -> float:
    """Derived health maximum: 100 + 10 per point of vitality."""
    return 100 + stats.vitality * 10


def max_mana(stats: Stats) -> float:
    """Derived mana maximum: 50 + 5 per point of intelligence."""
    return 50 + stats.intelligence * 5


def apply_deltas(stats: Stats, deltas: dict[str, float]) -> Stats:
    """Add each delta to the matching stat in place and return the stats."""
    for stat, delta in deltas.items():
        setattr(stats, stat, getattr(stats, stat) + delta)
    return stats


def derive_initial_stats(profession: Profession | str, race: Race | str) -> Stats:
    """Baseline stats plus profession deltas, then race deltas.

    Health and mana are the baseline-plus-deltas pools, not the derived maxima.
    """
    profession = Profession(profession)
    race = Race(race)
    stats = Stats(**BASE_STATS)
    apply_deltas(stats, PROFESSION_DELTAS[profession])
    apply_deltas(stats, RACE_DELTAS[race])
    return stats


def restore_to_max(stats: Stats) -> Stats:
    """Recompute the derived maxima and refill both pools."""
    stats.health = max_health(stats)
    stats.mana = max_mana(stats)
    return stats
