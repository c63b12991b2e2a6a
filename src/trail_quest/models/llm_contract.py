from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class InterpretedAction(BaseModel):
    """Structured verdict on a free-text combat action."""
    valid: bool
    action: Optional[Literal["attack", "ability", "item"]] = None
    damage: Optional[float] = None
    ability_index: Optional[int] = None
    item_index: Optional[int] = None
    message: Optional[str] = None
    reasoning: Optional[str] = None
