"""Tests for src/trail_quest/mechanics/abilities.py."""
from __future__ import annotations

import pytest

from trail_quest.mechanics.abilities import (
    CATALOG,
    abilities_for,
    execute_ability,
    mana_cost,
    update_cooldowns,
    use_ability,
    validate_ability_use,
)
from trail_quest.models.character import AbilityState, Stats
from trail_quest.models.combat import AbilityEffectType, StatusKind


class TestCatalog:
    @pytest.mark.parametrize("profession, race, names", [
        ("Warrior", "Human", ["Slash", "Shield Bash", "Adaptability"]),
        ("Assassin", "Dwarf", ["Backstab", "Poison Strike", "Stone Skin"]),
        ("Wizard", "Orc", ["Fireball", "Frost Nova", "Berserker Rage"]),
        ("Wizard", "Elf", ["Fireball", "Frost Nova", "Nature's Blessing"]),
    ])
    def test_profession_first_then_race(self, profession, race, names):
        assert [a.name for a in abilities_for(profession, race)] == names

    @pytest.mark.parametrize("name, cooldown", [
        ("Slash", 0), ("Shield Bash", 10), ("Backstab", 5), ("Poison Strike", 8),
        ("Fireball", 3), ("Frost Nova", 12), ("Adaptability", 20), ("Stone Skin", 15),
        ("Berserker Rage", 25), ("Nature's Blessing", 18),
    ])
    def test_cooldowns(self, name, cooldown):
        assert CATALOG[name].cooldown == cooldown

    def test_every_ability_costs_ten_mana(self):
        assert all(mana_cost(name) == 10 for name in CATALOG)


class TestExecuteAbility:
    def test_slash_scales_with_strength(self):
        effect = execute_ability("Slash", Stats(strength=15))
        assert effect.type == AbilityEffectType.DAMAGE
        assert effect.value == 22.5

    def test_reads_current_stats(self):
        stats = Stats(intelligence=10)
        assert execute_ability("Fireball", stats).value == pytest.approx(18)
        stats.intelligence = 20
        assert execute_ability("Fireball", stats).value == pytest.approx(36)

    def test_shield_bash_stuns(self):
        effect = execute_ability("Shield Bash", Stats(strength=12))
        assert effect.type == AbilityEffectType.DAMAGE_AND_EFFECT
        assert effect.damage == 12
        assert effect.effect.kind == StatusKind.STUN
        assert effect.effect.duration == 2

    def test_poison_strike(self):
        effect = execute_ability("Poison Strike", Stats(dexterity=20))
        assert effect.damage == 10
        assert effect.effect.kind == StatusKind.POISON
        assert effect.effect.magnitude == pytest.approx(6)
        assert effect.effect.duration == 3

    def test_berserker_rage(self):
        effect = execute_ability("Berserker Rage", Stats())
        assert effect.type == AbilityEffectType.BUFF_AND_DEBUFF
        assert [(b.kind, b.magnitude) for b in effect.buffs] == [(StatusKind.STRENGTH, 5)]
        assert [(d.kind, d.magnitude) for d in effect.debuffs] == [(StatusKind.DEFENSE, -2)]

    def test_natures_blessing_heals(self):
        effect = execute_ability("Nature's Blessing", Stats(intelligence=15))
        assert effect.type == AbilityEffectType.HEAL
        assert effect.value == pytest.approx(18)

    def test_unknown_name_is_noop(self):
        effect = execute_ability("Meteor Swarm", Stats())
        assert effect.type == AbilityEffectType.NOOP


class TestUseAbility:
    def _abilities(self):
        return [CATALOG["Slash"].new_state(), CATALOG["Shield Bash"].new_state()]

    def test_resets_cooldown(self):
        abilities = self._abilities()
        ok, _, effect = use_ability(abilities, 1, Stats())
        assert ok
        assert abilities[1].current_cooldown == 10
        assert effect.type == AbilityEffectType.DAMAGE_AND_EFFECT

    def test_on_cooldown_rejected_without_mutation(self):
        abilities = self._abilities()
        abilities[1].current_cooldown = 4
        ok, message, effect = use_ability(abilities, 1, Stats())
        assert not ok
        assert effect is None
        assert message == "Shield Bash is on cooldown for 4 more turns."
        assert abilities[1].current_cooldown == 4

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_invalid_index(self, index):
        valid, message = validate_ability_use(self._abilities(), index)
        assert not valid
        assert message == "Invalid ability index"


class TestUpdateCooldowns:
    def test_decrements_and_floors(self):
        abilities = [
            AbilityState(name="A", cooldown=3, current_cooldown=2),
            AbilityState(name="B", cooldown=3, current_cooldown=0),
        ]
        update_cooldowns(abilities)
        assert [a.current_cooldown for a in abilities] == [1, 0]
