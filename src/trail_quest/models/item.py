from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):
    EQUIPMENT = "EQUIPMENT"
    CONSUMABLE = "CONSUMABLE"
    QUEST = "QUEST"
    MATERIAL = "MATERIAL"


class EquipmentSlot(str, Enum):
    HEAD = "HEAD"
    CHEST = "CHEST"
    LEGS = "LEGS"
    FEET = "FEET"
    MAIN_HAND = "MAIN_HAND"
    OFF_HAND = "OFF_HAND"
    NECK = "NECK"
    RING = "RING"


class ItemRarity(str, Enum):
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"


class ConsumableType(str, Enum):
    HEAL = "heal"
    MANA = "mana"
    BUFF = "buff"
    DAMAGE = "damage"


class StatBonus(BaseModel):
    strength: float = 0
    dexterity: float = 0
    intelligence: float = 0
    vitality: float = 0
    health: float = 0
    mana: float = 0


class ConsumableEffect(BaseModel):
    type: ConsumableType
    value: float
    duration: Optional[int] = None  # buffs only


class Item(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    type: ItemType = ItemType.MATERIAL
    rarity: ItemRarity = ItemRarity.COMMON
    value: int = 0
    level_requirement: int = 1
    equipment_slot: Optional[EquipmentSlot] = None
    stat_bonuses: Optional[StatBonus] = None
    consumable_effect: Optional[ConsumableEffect] = None
    quest_id: Optional[str] = None
    crafting_uses: list[str] = Field(default_factory=list)


class LootDrop(BaseModel):
    item: Item
    drop_rate: float = Field(default=1.0, ge=0.0, le=1.0)


class GoldRange(BaseModel):
    min: int = 0
    max: int = 0


class LootTable(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monster_id: str = ""
    possible_items: list[LootDrop] = Field(default_factory=list)
    gold_range: GoldRange = Field(default_factory=GoldRange)
