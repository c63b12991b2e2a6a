from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from trail_quest.models.character import Stats
from trail_quest.models.item import LootTable


class MonsterType(str, Enum):
    HUMANOID = "Humanoid"
    BEAST = "Beast"
    UNDEAD = "Undead"
    ELEMENTAL = "Elemental"
    DRAGON = "Dragon"


class MonsterDifficulty(str, Enum):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    BOSS = "Boss"


class AttackEffect(BaseModel):
    type: str
    value: float = 0
    duration: int = 1


class MonsterAttack(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str = ""
    damage: float = 0
    cooldown: int = 0
    current_cooldown: int = 0
    effects: list[AttackEffect] = Field(default_factory=list)


class Monster(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type: MonsterType = MonsterType.BEAST
    difficulty: MonsterDifficulty = MonsterDifficulty.NORMAL
    level: int = 1
    stats: Stats = Field(default_factory=Stats)
    attacks: list[MonsterAttack] = Field(default_factory=list)
    loot_table: LootTable = Field(default_factory=LootTable)
    experience_value: int = 0
