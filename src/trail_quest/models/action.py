from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from trail_quest.models.combat import CombatOutcome, CombatPhase
from trail_quest.models.item import Item


class ActionKind(str, Enum):
    ATTACK = "attack"
    ABILITY = "ability"
    ITEM = "item"


@dataclass
class AttackAction:
    damage: float
    description: str = "attacks"
    kind: ActionKind = field(default=ActionKind.ATTACK, init=False)


@dataclass
class AbilityAction:
    ability_index: int
    kind: ActionKind = field(default=ActionKind.ABILITY, init=False)


@dataclass
class ItemAction:
    item_index: int
    kind: ActionKind = field(default=ActionKind.ITEM, init=False)


PlayerAction = Union[AttackAction, AbilityAction, ItemAction]


@dataclass
class ActionResult:
    success: bool = False
    message: str = ""
    log_lines: list[str] = field(default_factory=list)


@dataclass
class Rewards:
    experience: int = 0
    levels_gained: int = 0
    gold: int = 0
    items: list[Item] = field(default_factory=list)
    items_left_behind: list[Item] = field(default_factory=list)


@dataclass
class TurnReport:
    accepted: bool = False
    message: str = ""
    log_lines: list[str] = field(default_factory=list)
    phase: CombatPhase = CombatPhase.IDLE
    outcome: Optional[CombatOutcome] = None
    rewards: Optional[Rewards] = None
    monster_turn_pending: bool = False
