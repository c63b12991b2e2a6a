"""Status effect ledger: pure data, no I/O."""
from __future__ import annotations

from trail_quest.models.combat import StatusEffect, StatusKind

DAMAGE_OVER_TIME: frozenset[StatusKind] = frozenset({StatusKind.POISON})


def tick_durations(ledger: list[StatusEffect]) -> list[StatusEffect]:
    """Decrement every effect by one turn and drop the ones that run out."""
    ticked = []
    for effect in ledger:
        remaining = effect.duration - 1
        if remaining > 0:
            ticked.append(effect.model_copy(update={"duration": remaining}))
    return ticked


def damage_over_time(ledger: list[StatusEffect]) -> list[float]:
    """Per-effect damage for this turn, in ledger order."""
    return [e.magnitude for e in ledger if e.kind in DAMAGE_OVER_TIME]


def has_effect(ledger: list[StatusEffect], kind: StatusKind | str) -> bool:
    kind = StatusKind(kind)
    return any(e.kind == kind for e in ledger)


def stat_modifier(ledger: list[StatusEffect], stat: str) -> float:
    """Net buff/debuff on a stat. ``all_stats`` counts toward every stat."""
    total = 0.0
    for e in ledger:
        if e.kind.value == stat or e.kind == StatusKind.ALL_STATS:
            total += e.magnitude
    return total


def describe(effect: StatusEffect) -> str:
    if effect.magnitude:
        return f"{effect.kind.value} {effect.magnitude:+g} ({effect.duration}t)"
    return f"{effect.kind.value} ({effect.duration}t)"
