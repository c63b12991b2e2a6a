from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from trail_quest.models.item import EquipmentSlot, Item


def _empty_slots() -> dict[EquipmentSlot, Item | None]:
    return {slot: None for slot in EquipmentSlot}


class Inventory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[Item] = Field(default_factory=list)
    equipped_items: dict[EquipmentSlot, Item | None] = Field(default_factory=_empty_slots)
    gold: int = 0
    max_size: int = 20
