"""Conversion between persisted records and live combatants.

Persisted records are plain JSON dicts with abilities stored by name only.
Deserializing rebinds each ability to its catalog definition, so a round
trip through the store keeps every ability working.
"""
from __future__ import annotations

import logging
import random
from typing import Any

from trail_quest.mechanics import abilities as ability_catalog
from trail_quest.mechanics import leveling
from trail_quest.mechanics.monsters import choose_attack, update_attack_cooldowns
from trail_quest.models.character import AbilityState, Character, Stats
from trail_quest.models.combat import AbilityEffect
from trail_quest.models.monster import Monster, MonsterAttack

logger = logging.getLogger(__name__)


def serialize_character(character: Character) -> dict[str, Any]:
    return character.model_dump(mode="json")


def serialize_monster(monster: Monster) -> dict[str, Any]:
    return monster.model_dump(mode="json")


class LiveAbility:
    """An AbilityState bound to the stats of the character that owns it."""

    def __init__(self, state: AbilityState, owner: "LiveCharacter"):
        self.state = state
        self._owner = owner
        if ability_catalog.get_ability(state.name) is None:
            logger.warning(f"Ability '{state.name}' is not in the catalog; it will do nothing")

    @property
    def name(self) -> str:
        return self.state.name

    @property
    def is_ready(self) -> bool:
        return self.state.is_ready

    def execute(self, target: Any = None) -> AbilityEffect:
        return ability_catalog.execute_ability(self.state.name, self._owner.stats)


class LiveCharacter:
    def __init__(self, record: Character):
        self.record = record
        self.abilities = [LiveAbility(state, self) for state in record.abilities]

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def stats(self) -> Stats:
        return self.record.stats

    @property
    def level(self) -> int:
        return self.record.level

    def use_ability(self, index: int) -> dict[str, Any]:
        ok, message, effect = ability_catalog.use_ability(self.record.abilities, index, self.stats)
        if not ok:
            return {"success": False, "message": message}
        return {"success": True, "result": effect}

    def update_cooldowns(self) -> None:
        ability_catalog.update_cooldowns(self.record.abilities)

    def gain_experience(self, amount: int) -> int:
        return leveling.gain_experience(self.record, amount)

    def level_up(self) -> None:
        leveling.level_up(self.record)

    def to_record(self) -> dict[str, Any]:
        return serialize_character(self.record)


class LiveMonster:
    def __init__(self, record: Monster):
        self.record = record

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def attacks(self) -> list[MonsterAttack]:
        return self.record.attacks

    def choose_attack(self, rng: random.Random | None = None) -> MonsterAttack:
        return choose_attack(self.record, rng)

    def update_cooldowns(self) -> None:
        update_attack_cooldowns(self.record)

    def to_record(self) -> dict[str, Any]:
        return serialize_monster(self.record)


def deserialize_character(record: dict[str, Any] | Character) -> LiveCharacter:
    if not isinstance(record, Character):
        record = Character.model_validate(record)
    return LiveCharacter(record)


def deserialize_monster(record: dict[str, Any] | Monster) -> LiveMonster:
    if not isinstance(record, Monster):
        record = Monster.model_validate(record)
    return LiveMonster(record)
