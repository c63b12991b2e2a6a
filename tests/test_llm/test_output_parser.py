"""Tests for src/trail_quest/llm/output_parser.py."""
from __future__ import annotations

import pytest

from trail_quest.llm.output_parser import OutputParser


class TestParseCombatEvaluation:
    def test_full_payload(self):
        raw = {
            "valid": True, "action": "ability", "ability_index": 1,
            "message": "You bash it.", "reasoning": "Ready ability",
        }
        result = OutputParser.parse_combat_evaluation(raw)
        assert result.valid
        assert result.action == "ability"
        assert result.ability_index == 1
        assert result.reasoning == "Ready ability"

    def test_camel_case_index(self):
        result = OutputParser.parse_combat_evaluation({"valid": True, "action": "ability", "abilityIndex": 2})
        assert result.ability_index == 2

    def test_action_normalised(self):
        result = OutputParser.parse_combat_evaluation({"valid": True, "action": " Attack ", "damage": 9})
        assert result.action == "attack"
        assert result.damage == 9

    def test_unknown_action_dropped(self):
        result = OutputParser.parse_combat_evaluation({"valid": True, "action": "dance"})
        assert result.action is None

    def test_invalid_verdict(self):
        result = OutputParser.parse_combat_evaluation({"valid": False, "message": "No sword."})
        assert not result.valid
        assert result.message == "No sword."

    @pytest.mark.parametrize("raw", [{}, {"valid": "true"}, {"valid": 1}, [], None])
    def test_missing_or_bad_valid(self, raw):
        with pytest.raises(ValueError):
            OutputParser.parse_combat_evaluation(raw)

    def test_bad_damage_type(self):
        with pytest.raises(ValueError):
            OutputParser.parse_combat_evaluation({"valid": True, "action": "attack", "damage": "lots"})


class TestExtractJsonFromText:
    def test_plain(self):
        assert OutputParser.extract_json_from_text('{"valid": true}') == {"valid": True}

    def test_fenced(self):
        text = 'Here you go:\n```json\n{"valid": false, "message": "no"}\n```'
        assert OutputParser.extract_json_from_text(text) == {"valid": False, "message": "no"}

    def test_embedded(self):
        text = 'Verdict: {"valid": true, "action": "attack"} -- done'
        assert OutputParser.extract_json_from_text(text) == {"valid": True, "action": "attack"}

    def test_nested(self):
        assert OutputParser.extract_json_from_text('x {"a": {"b": 1}} y') == {"a": {"b": 1}}

    def test_no_json(self):
        assert OutputParser.extract_json_from_text("just words") is None

    def test_broken_then_valid(self):
        assert OutputParser.extract_json_from_text('{oops} {"ok": 1}') == {"ok": 1}
