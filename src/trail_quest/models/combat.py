from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from trail_quest.models.character import AbilityState
from trail_quest.models.monster import Monster


class StatusKind(str, Enum):
    STUN = "stun"
    POISON = "poison"
    FREEZE = "freeze"
    FEAR = "fear"
    # Buffs/debuffs on a named stat
    ALL_STATS = "all_stats"
    DEFENSE = "defense"
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    VITALITY = "vitality"


class StatusEffect(BaseModel):
    kind: StatusKind
    magnitude: float = 0
    duration: int = Field(default=1, gt=0)


class AbilityEffectType(str, Enum):
    DAMAGE = "damage"
    HEAL = "heal"
    BUFF = "buff"
    DAMAGE_AND_EFFECT = "damage_and_effect"
    BUFF_AND_DEBUFF = "buff_and_debuff"
    NOOP = "noop"


class AbilityEffect(BaseModel):
    """What an ability produces when executed against the current stats."""
    type: AbilityEffectType
    value: float = 0
    damage: float = 0
    effect: Optional[StatusEffect] = None
    buffs: list[StatusEffect] = Field(default_factory=list)
    debuffs: list[StatusEffect] = Field(default_factory=list)


class CombatPhase(str, Enum):
    IDLE = "idle"
    IN_COMBAT = "in_combat"
    MONSTER_DEFEATED = "monster_defeated"
    PLAYER_DEFEATED = "player_defeated"


class CombatOutcome(str, Enum):
    MONSTER_DEFEATED = "monster_defeated"
    PLAYER_DEFEATED = "player_defeated"
    FLED = "fled"


class CombatEncounter(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    phase: CombatPhase = CombatPhase.IN_COMBAT
    outcome: Optional[CombatOutcome] = None
    active: bool = True
    monster: Optional[Monster] = None
    monster_name: str = ""
    player_health: float = 0
    player_mana: float = 0
    monster_health: float = 0
    player_abilities: list[AbilityState] = Field(default_factory=list)
    player_effects: list[StatusEffect] = Field(default_factory=list)
    monster_effects: list[StatusEffect] = Field(default_factory=list)
    turn_count: int = 0
    combat_log: list[str] = Field(default_factory=list)
    turn_in_flight: bool = False
    rewards_granted: bool = False
