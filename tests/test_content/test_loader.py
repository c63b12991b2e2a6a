"""Tests for src/trail_quest/content/loader.py."""
from __future__ import annotations

from trail_quest.content.loader import load_all_items, load_monster_templates
from trail_quest.models.item import Item, ItemType
from trail_quest.models.monster import MonsterType


class TestLoadAllItems:
    def test_items_validate(self):
        items = load_all_items()
        assert items
        for item_id, data in items.items():
            item = Item.model_validate(data)
            assert item.id == item_id

    def test_consumables_have_effects(self):
        items = {k: Item.model_validate(v) for k, v in load_all_items().items()}
        consumables = [i for i in items.values() if i.type == ItemType.CONSUMABLE]
        assert consumables
        assert all(i.consumable_effect is not None for i in consumables)

    def test_health_potion(self):
        potion = Item.model_validate(load_all_items()["consumable_health_potion"])
        assert potion.consumable_effect.value == 50


class TestLoadMonsterTemplates:
    def test_default_template(self):
        default = load_monster_templates()["default"]
        names = [a["name"] for a in default["attacks"]]
        assert names == ["Slash", "Bite"]

    def test_every_type_has_attacks(self):
        templates = load_monster_templates()
        for monster_type in MonsterType:
            assert templates[monster_type.value]["attacks"]

    def test_drops_reference_known_items(self):
        items = load_all_items()
        for template in load_monster_templates().values():
            for drop in template.get("drops", []):
                assert drop["item_id"] in items
                assert 0 <= drop["drop_rate"] <= 1
