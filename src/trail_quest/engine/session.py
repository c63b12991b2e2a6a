"""GameSession: the explicit state object threaded through the engine."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from trail_quest.mechanics.character_creation import create_character
from trail_quest.models.character import Character, Profession, Race
from trail_quest.models.combat import CombatEncounter
from trail_quest.models.inventory import Inventory


class GameSession(BaseModel):
    """Everything one player owns. Dumps to a single JSON record."""
    model_config = ConfigDict(from_attributes=True)

    character: Character
    inventory: Inventory = Field(default_factory=Inventory)
    encounter: Optional[CombatEncounter] = None
    last_encounter: Optional[CombatEncounter] = None

    @property
    def in_combat(self) -> bool:
        return self.encounter is not None and self.encounter.active


def new_session(name: str, profession: Profession | str, race: Race | str,
                max_inventory_size: int = 20, starting_gold: int = 0) -> GameSession:
    character = create_character(name, profession, race)
    return GameSession(
        character=character,
        inventory=Inventory(max_size=max_inventory_size, gold=starting_gold),
    )


def save_session(session: GameSession) -> dict[str, Any]:
    return session.model_dump(mode="json")


def load_session(record: dict[str, Any]) -> GameSession:
    return GameSession.model_validate(record)
