"""Free-text combat input -> structured player action.

``CombatInterpreter`` asks an LLM to judge the action and falls back to the
deterministic ``KeywordInterpreter`` whenever the call fails or returns
something unusable. Neither touches combat state.
"""
from __future__ import annotations

import logging
import math
import random
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from trail_quest.engine.serialization import LiveCharacter
from trail_quest.llm.output_parser import OutputParser
from trail_quest.llm.provider import LLMProvider
from trail_quest.models.action import AbilityAction, AttackAction, ItemAction, PlayerAction
from trail_quest.models.character import AbilityState
from trail_quest.models.item import Item, ItemType
from trail_quest.models.llm_contract import InterpretedAction
from trail_quest.models.monster import Monster

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "llm" / "prompts"

ATTACK_WORDS = ("attack", "hit", "strike", "slash", "stab", "punch", "kick")
ITEM_VERBS = ("use", "drink", "eat", "throw", "quaff")

SYSTEM_PROMPT = """You are a combat evaluator for a role-playing game. Decide whether the player's \
combat action is realistic given their character's abilities and inventory. Respond ONLY with a JSON object:
{
  "valid": boolean,
  "action": "attack" | "ability" | "item",
  "damage": number,
  "ability_index": number,
  "item_index": number,
  "message": string,
  "reasoning": string
}"""


class KeywordInterpreter:
    """Deterministic keyword matching. Always available."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def interpret(self, text: str, character: LiveCharacter, monster: Monster | None = None,
                  items: list[Item] | None = None,
                  abilities: list[AbilityState] | None = None) -> InterpretedAction:
        lowered = text.lower()
        abilities = character.record.abilities if abilities is None else abilities

        for index, ability in enumerate(abilities):
            if ability.name.lower() in lowered:
                if ability.current_cooldown > 0:
                    return InterpretedAction(
                        valid=False,
                        message=f"{ability.name} is on cooldown for {ability.current_cooldown} more turns.",
                        reasoning="Ability is currently on cooldown",
                    )
                return InterpretedAction(
                    valid=True,
                    action="ability",
                    ability_index=index,
                    message=f"You used {ability.name}!",
                    reasoning="Player used an available ability",
                )

        item_match = self._match_item(lowered, items or [])
        if item_match is not None:
            index, item = item_match
            return InterpretedAction(
                valid=True,
                action="item",
                item_index=index,
                message=f"You used {item.name}!",
                reasoning="Player used a carried consumable",
            )

        if any(re.search(rf"\b{word}", lowered) for word in ATTACK_WORDS):
            damage = math.floor(character.stats.strength * (0.8 + self.rng.random() * 0.4))
            return InterpretedAction(
                valid=True,
                action="attack",
                damage=damage,
                message=f"You attacked for {damage} damage!",
                reasoning="Basic attack is always available",
            )

        return InterpretedAction(
            valid=False,
            message="I don't understand that action. Try attacking or using an ability.",
            reasoning="Could not identify a valid combat action",
        )

    @staticmethod
    def _match_item(lowered: str, items: list[Item]) -> tuple[int, Item] | None:
        if not any(re.search(rf"\b{verb}\b", lowered) for verb in ITEM_VERBS):
            return None
        for index, item in enumerate(items):
            if item.type == ItemType.CONSUMABLE and item.name.lower() in lowered:
                return index, item
        return None


class CombatInterpreter:
    """LLM-backed interpreter with a keyword fallback."""

    def __init__(self, llm: LLMProvider | None = None, fallback: KeywordInterpreter | None = None,
                 temperature: float = 0.3):
        self.llm = llm
        self.fallback = fallback or KeywordInterpreter()
        self.temperature = temperature
        self._jinja_env: Environment | None = None

    @property
    def jinja_env(self) -> Environment:
        if self._jinja_env is None:
            self._jinja_env = Environment(
                loader=FileSystemLoader(str(PROMPTS_DIR)),
                autoescape=False,
            )
        return self._jinja_env

    def render_prompt(self, text: str, character: LiveCharacter, monster: Monster,
                      items: list[Item], abilities: list[AbilityState],
                      equipped: list[Item] | None = None) -> str:
        """Build the evaluation prompt. ``items`` is the carried pack, numbered for item_index."""
        template = self.jinja_env.get_template("combat_evaluation.j2")
        return template.render(
            player_input=text,
            character=character.record.model_dump(mode="json"),
            abilities=abilities,
            equipped=[i.model_dump(mode="json") for i in equipped or []],
            items=[i.model_dump(mode="json") for i in items],
            monster=monster.model_dump(mode="json"),
        )

    def interpret(self, text: str, character: LiveCharacter, monster: Monster,
                  items: list[Item] | None = None,
                  abilities: list[AbilityState] | None = None,
                  equipped: list[Item] | None = None) -> InterpretedAction:
        items = items or []
        abilities = character.record.abilities if abilities is None else abilities
        if self.llm is None:
            return self.fallback.interpret(text, character, monster, items, abilities)

        try:
            prompt = self.render_prompt(text, character, monster, items, abilities, equipped)
            raw = self.llm.generate_structured(prompt, SYSTEM_PROMPT, temperature=self.temperature)
            result = OutputParser.parse_combat_evaluation(raw)
        except Exception as e:
            logger.warning(f"Combat evaluation failed, using keyword fallback: {e}")
            return self.fallback.interpret(text, character, monster, items, abilities)

        if result.valid and result.action is None:
            logger.warning("Combat evaluation marked the action valid without naming it, using keyword fallback")
            return self.fallback.interpret(text, character, monster, items, abilities)
        return result


def to_player_action(interpretation: InterpretedAction, raw_input: str = "") -> PlayerAction | None:
    """Map a valid interpretation onto an engine action. Invalid ones map to None."""
    if not interpretation.valid:
        return None
    if interpretation.action == "ability" and interpretation.ability_index is not None:
        return AbilityAction(ability_index=interpretation.ability_index)
    if interpretation.action == "item" and interpretation.item_index is not None:
        return ItemAction(item_index=interpretation.item_index)
    if interpretation.action == "attack":
        damage = max(0.0, float(interpretation.damage or 0))
        return AttackAction(damage=damage, description=_attack_description(raw_input))
    return None


def _attack_description(raw_input: str) -> str:
    lowered = raw_input.lower()
    for word in ATTACK_WORDS:
        if re.search(rf"\b{word}", lowered):
            return f"{word}s" if not word.endswith("h") else f"{word}es"
    return "attacks"
