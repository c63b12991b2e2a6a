from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any

CONTENT_DIR = Path(__file__).parent

def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)


def load_all_items() -> dict[str, dict]:
    """Item definitions from content/items/*.toml, keyed by item id."""
    items = {}
    items_dir = CONTENT_DIR / "items"
    for f in sorted(items_dir.glob("*.toml")):
        data = load_toml(f)
        for item in data.get("items", [data]):
            items[item["id"]] = item
    return items


def load_monster_templates() -> dict[str, dict]:
    """Attack/drop templates keyed by monster type name, plus ``default``."""
    templates_file = CONTENT_DIR / "monsters" / "templates.toml"
    if not templates_file.exists():
        return {}
    data = load_toml(templates_file)
    return {k: v for k, v in data.items() if isinstance(v, dict)}
