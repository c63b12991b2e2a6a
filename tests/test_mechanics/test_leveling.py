"""Tests for src/trail_quest/mechanics/leveling.py."""
from __future__ import annotations

import pytest

from trail_quest.mechanics.character_creation import create_character
from trail_quest.mechanics.leveling import gain_experience, level_up, next_threshold
from trail_quest.mechanics.stats import max_health, max_mana


class TestNextThreshold:
    @pytest.mark.parametrize("current, expected", [(100, 150), (150, 225), (225, 337), (337, 505)])
    def test_floors_growth(self, current, expected):
        assert next_threshold(current) == expected


class TestLevelUp:
    def test_warrior_deltas(self, warrior):
        before = warrior.stats.model_copy()
        warrior.experience = 120
        level_up(warrior)
        assert warrior.level == 2
        assert warrior.experience == 20
        assert warrior.experience_to_next_level == 150
        assert warrior.stats.strength == before.strength + 2
        assert warrior.stats.vitality == before.vitality + 2
        assert warrior.stats.dexterity == before.dexterity + 1
        assert warrior.stats.intelligence == before.intelligence + 0.5

    def test_restores_pools_to_new_maxima(self, warrior):
        warrior.stats.health = 1
        warrior.stats.mana = 0
        level_up(warrior)
        assert warrior.stats.health == max_health(warrior.stats)
        assert warrior.stats.mana == max_mana(warrior.stats)

    @pytest.mark.parametrize("profession, stat, delta", [
        ("Assassin", "dexterity", 2),
        ("Assassin", "intelligence", 1),
        ("Wizard", "intelligence", 2),
        ("Wizard", "strength", 0.5),
    ])
    def test_profession_deltas(self, profession, stat, delta):
        character = create_character("Test", profession, "Human")
        before = getattr(character.stats, stat)
        level_up(character)
        assert getattr(character.stats, stat) == before + delta


class TestGainExperience:
    def test_below_threshold(self, warrior):
        assert gain_experience(warrior, 99) == 0
        assert warrior.level == 1
        assert warrior.experience == 99

    def test_exact_threshold(self, warrior):
        assert gain_experience(warrior, 100) == 1
        assert warrior.level == 2
        assert warrior.experience == 0

    def test_cascades_multiple_levels(self, warrior):
        # 100 + 150 + 225 = 475 pays for three levels with 25 left over
        assert gain_experience(warrior, 500) == 3
        assert warrior.level == 4
        assert warrior.experience == 25
        assert warrior.experience_to_next_level == 337

    def test_single_grant_matches_repeated_level_ups(self):
        granted = create_character("A", "Wizard", "Elf")
        stepped = create_character("B", "Wizard", "Elf")
        gain_experience(granted, 400)
        stepped.experience = 400
        while stepped.experience >= stepped.experience_to_next_level:
            level_up(stepped)
        assert granted.level == stepped.level
        assert granted.experience == stepped.experience
        assert granted.experience_to_next_level == stepped.experience_to_next_level
        assert granted.stats == stepped.stats
