"""config.toml loading."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


def load_config(path: Path | str | None = None) -> dict[str, Any]:
    """Load config.toml from the project root, or ``path`` if given.

    A missing file means defaults everywhere. An unreadable one is logged
    and also treated as empty.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Could not read {config_path}, using defaults: {e}")
        return {}
