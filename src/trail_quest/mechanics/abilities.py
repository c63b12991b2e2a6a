"""Ability catalog: the single source of truth for what each ability does.

Abilities are persisted as plain ``AbilityState`` records keyed by name. The
damage/effect formulas live here and always read the stats at the moment of
use, so growth from leveling is picked up without touching the records.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from trail_quest.models.character import AbilityState, Profession, Race, Stats
from trail_quest.models.combat import AbilityEffect, AbilityEffectType, StatusEffect, StatusKind

logger = logging.getLogger(__name__)

DEFAULT_MANA_COST = 10


@dataclass(frozen=True)
class AbilityDefinition:
    name: str
    description: str
    cooldown: int
    compute: Callable[[Stats], AbilityEffect]
    mana_cost: int = DEFAULT_MANA_COST

    def new_state(self) -> AbilityState:
        return AbilityState(
            name=self.name,
            description=self.description,
            cooldown=self.cooldown,
            current_cooldown=0,
        )


def _damage(value: float) -> AbilityEffect:
    return AbilityEffect(type=AbilityEffectType.DAMAGE, value=value)


def _damage_and_effect(damage: float, effect: StatusEffect) -> AbilityEffect:
    return AbilityEffect(type=AbilityEffectType.DAMAGE_AND_EFFECT, damage=damage, effect=effect)


def _buff(kind: StatusKind, value: float, duration: int) -> AbilityEffect:
    return AbilityEffect(
        type=AbilityEffectType.BUFF,
        effect=StatusEffect(kind=kind, magnitude=value, duration=duration),
    )


SLASH = AbilityDefinition(
    "Slash", "A powerful slash with your weapon", 0,
    lambda s: _damage(s.strength * 1.5),
)
SHIELD_BASH = AbilityDefinition(
    "Shield Bash", "Bash your enemy with your shield, stunning them", 10,
    lambda s: _damage_and_effect(s.strength, StatusEffect(kind=StatusKind.STUN, duration=2)),
)
BACKSTAB = AbilityDefinition(
    "Backstab", "Attack from behind for critical damage", 5,
    lambda s: _damage(s.dexterity * 2),
)
POISON_STRIKE = AbilityDefinition(
    "Poison Strike", "Poison your enemy, dealing damage over time", 8,
    lambda s: _damage_and_effect(
        s.dexterity * 0.5,
        StatusEffect(kind=StatusKind.POISON, magnitude=s.dexterity * 0.3, duration=3),
    ),
)
FIREBALL = AbilityDefinition(
    "Fireball", "Launch a ball of fire at your enemy", 3,
    lambda s: _damage(s.intelligence * 1.8),
)
FROST_NOVA = AbilityDefinition(
    "Frost Nova", "Freeze enemies around you", 12,
    lambda s: _damage_and_effect(s.intelligence, StatusEffect(kind=StatusKind.FREEZE, duration=2)),
)
ADAPTABILITY = AbilityDefinition(
    "Adaptability", "Humans adapt quickly to situations", 20,
    lambda s: _buff(StatusKind.ALL_STATS, 2, 3),
)
STONE_SKIN = AbilityDefinition(
    "Stone Skin", "Harden your skin to reduce damage", 15,
    lambda s: _buff(StatusKind.DEFENSE, 5, 3),
)
BERSERKER_RAGE = AbilityDefinition(
    "Berserker Rage", "Enter a rage, increasing damage but reducing defense", 25,
    lambda s: AbilityEffect(
        type=AbilityEffectType.BUFF_AND_DEBUFF,
        buffs=[StatusEffect(kind=StatusKind.STRENGTH, magnitude=5, duration=3)],
        debuffs=[StatusEffect(kind=StatusKind.DEFENSE, magnitude=-2, duration=3)],
    ),
)
NATURES_BLESSING = AbilityDefinition(
    "Nature's Blessing", "Call upon nature to heal your wounds", 18,
    lambda s: AbilityEffect(type=AbilityEffectType.HEAL, value=s.intelligence * 1.2),
)

PROFESSION_ABILITIES: dict[Profession, list[AbilityDefinition]] = {
    Profession.WARRIOR: [SLASH, SHIELD_BASH],
    Profession.ASSASSIN: [BACKSTAB, POISON_STRIKE],
    Profession.WIZARD: [FIREBALL, FROST_NOVA],
}

RACE_ABILITIES: dict[Race, list[AbilityDefinition]] = {
    Race.HUMAN: [ADAPTABILITY],
    Race.DWARF: [STONE_SKIN],
    Race.ORC: [BERSERKER_RAGE],
    Race.ELF: [NATURES_BLESSING],
}

CATALOG: dict[str, AbilityDefinition] = {
    ability.name: ability
    for group in (*PROFESSION_ABILITIES.values(), *RACE_ABILITIES.values())
    for ability in group
}


def abilities_for(profession: Profession | str, race: Race | str) -> list[AbilityDefinition]:
    """Profession abilities first, then the race ability."""
    return [*PROFESSION_ABILITIES[Profession(profession)], *RACE_ABILITIES[Race(race)]]


def initial_ability_states(profession: Profession | str, race: Race | str) -> list[AbilityState]:
    return [ability.new_state() for ability in abilities_for(profession, race)]


def get_ability(name: str) -> AbilityDefinition | None:
    return CATALOG.get(name)


def noop_effect() -> AbilityEffect:
    """Placeholder effect for abilities the catalog does not know."""
    return AbilityEffect(type=AbilityEffectType.NOOP)


def execute_ability(name: str, stats: Stats) -> AbilityEffect:
    """Compute an ability's effect from the given (current) stats."""
    ability = get_ability(name)
    if ability is None:
        logger.warning(f"Unknown ability '{name}', using no-op effect")
        return noop_effect()
    return ability.compute(stats)


def mana_cost(name: str) -> int:
    ability = get_ability(name)
    return ability.mana_cost if ability else DEFAULT_MANA_COST


def validate_ability_use(abilities: list[AbilityState], index: int) -> tuple[bool, str]:
    """Check an ability can be used. Returns (valid, error_message)."""
    if index < 0 or index >= len(abilities):
        return False, "Invalid ability index"
    ability = abilities[index]
    if ability.current_cooldown > 0:
        return False, f"{ability.name} is on cooldown for {ability.current_cooldown} more turns."
    return True, ""


def use_ability(abilities: list[AbilityState], index: int, stats: Stats) -> tuple[bool, str, AbilityEffect | None]:
    """Validate, start the cooldown and compute the effect.

    Nothing is mutated when validation fails.
    """
    valid, error = validate_ability_use(abilities, index)
    if not valid:
        return False, error, None
    ability = abilities[index]
    ability.current_cooldown = ability.cooldown
    return True, "", execute_ability(ability.name, stats)


def update_cooldowns(abilities: list[AbilityState]) -> None:
    """Tick every running cooldown down by one turn."""
    for ability in abilities:
        if ability.current_cooldown > 0:
            ability.current_cooldown -= 1
