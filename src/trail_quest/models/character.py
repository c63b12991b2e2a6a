from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Profession(str, Enum):
    WARRIOR = "Warrior"
    ASSASSIN = "Assassin"
    WIZARD = "Wizard"


class Race(str, Enum):
    HUMAN = "Human"
    DWARF = "Dwarf"
    ORC = "Orc"
    ELF = "Elf"


class Stats(BaseModel):
    """Base attributes plus the current health/mana pools.

    Attributes are floats: some professions gain half a point per level.
    """
    model_config = ConfigDict(from_attributes=True)

    strength: float = 10
    dexterity: float = 10
    intelligence: float = 10
    vitality: float = 10
    health: float = 100
    mana: float = 50


class AbilityState(BaseModel):
    """Persisted part of an ability. The effect formula lives in the catalog."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str = ""
    cooldown: int = 0
    current_cooldown: int = 0

    @property
    def is_ready(self) -> bool:
        return self.current_cooldown == 0


class Character(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    profession: Profession
    race: Race
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 100
    stats: Stats = Field(default_factory=Stats)
    abilities: list[AbilityState] = Field(default_factory=list)
