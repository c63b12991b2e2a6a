"""Parse and validate LLM outputs."""
from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from trail_quest.models.llm_contract import InterpretedAction

logger = logging.getLogger(__name__)

_ACTIONS = ("attack", "ability", "item")


class OutputParser:
    @staticmethod
    def parse_combat_evaluation(raw: dict[str, Any]) -> InterpretedAction:
        """Validate a combat evaluation payload.

        Accepts both ``ability_index`` and the camelCase ``abilityIndex``.

        Raises:
            ValueError: If ``valid`` is missing or not a boolean, or the
                payload does not fit the InterpretedAction shape.
        """
        if not isinstance(raw, dict) or not isinstance(raw.get("valid"), bool):
            raise ValueError("Invalid response format: missing valid field")

        action = raw.get("action")
        if isinstance(action, str):
            action = action.strip().lower()
        if action not in _ACTIONS:
            action = None

        try:
            return InterpretedAction(
                valid=raw["valid"],
                action=action,
                damage=raw.get("damage"),
                ability_index=raw.get("ability_index", raw.get("abilityIndex")),
                item_index=raw.get("item_index", raw.get("itemIndex")),
                message=raw.get("message"),
                reasoning=raw.get("reasoning"),
            )
        except ValidationError as e:
            raise ValueError(f"Invalid response format: {e}") from e

    @staticmethod
    def extract_json_from_text(text: str) -> dict[str, Any] | None:
        text = text.strip()
        if "```json" in text:
            start = text.index("```json") + 7
            end = text.find("```", start)
            try:
                parsed = json.loads(text[start:end if end != -1 else len(text)].strip())
                if isinstance(parsed, dict):
                    return parsed
            except json.JSONDecodeError:
                pass
        brace_depth = 0
        start_idx = None
        for i, c in enumerate(text):
            if c == "{":
                if brace_depth == 0:
                    start_idx = i
                brace_depth += 1
            elif c == "}" and brace_depth > 0:
                brace_depth -= 1
                if brace_depth == 0 and start_idx is not None:
                    try:
                        return json.loads(text[start_idx : i + 1])
                    except json.JSONDecodeError:
                        start_idx = None
        return None
