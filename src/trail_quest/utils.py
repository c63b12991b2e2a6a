"""Shared utility functions for Trail Quest."""
from __future__ import annotations


def format_amount(value: float) -> str:
    """Render a stat amount without a trailing ``.0`` (22.5 stays 22.5, 20.0 becomes 20).

    Float noise past four decimals is rounded away so 0.1 + 0.2 reads 0.3.
    """
    rounded = round(value, 4)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def floor_at_zero(value: float) -> float:
    return value if value > 0 else 0
