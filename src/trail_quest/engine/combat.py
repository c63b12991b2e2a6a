"""Combat engine: the turn-based state machine for one encounter.

The engine is the only thing that mutates a ``CombatEncounter``. Each turn
follows a fixed order: the player's action, an early exit if the monster
fell, the monster's reply, an early exit if the player fell, cooldowns and
effect durations tick, poison ticks, and a final defeat check.

Invalid requests come back as ``ActionResult``/``TurnReport`` objects with
``success``/``accepted`` set to False and the encounter untouched.
"""
from __future__ import annotations

import logging
import random
from typing import Any

from trail_quest.engine.session import GameSession
from trail_quest.mechanics import abilities as ability_catalog
from trail_quest.mechanics import status_effects
from trail_quest.mechanics.inventory import add_gold, add_item, remove_item, validate_consumable
from trail_quest.mechanics.leveling import gain_experience
from trail_quest.mechanics.loot import generate_loot
from trail_quest.mechanics.monsters import choose_attack, update_attack_cooldowns
from trail_quest.models.action import (
    AbilityAction,
    ActionResult,
    AttackAction,
    ItemAction,
    PlayerAction,
    Rewards,
    TurnReport,
)
from trail_quest.models.combat import (
    AbilityEffect,
    AbilityEffectType,
    CombatEncounter,
    CombatOutcome,
    CombatPhase,
    StatusEffect,
    StatusKind,
)
from trail_quest.models.item import ConsumableType
from trail_quest.models.monster import Monster, MonsterAttack
from trail_quest.utils import floor_at_zero, format_amount

logger = logging.getLogger(__name__)

CONSUMABLE_BUFF_DURATION = 3


class CombatEngine:
    def __init__(self, session: GameSession, rng: random.Random | None = None,
                 auto_resolve: bool = True):
        self.session = session
        self.rng = rng or random.Random()
        self.auto_resolve = auto_resolve

    @classmethod
    def from_config(cls, session: GameSession, config: dict[str, Any],
                    rng: random.Random | None = None) -> "CombatEngine":
        combat_cfg = config.get("combat", {})
        return cls(session, rng=rng, auto_resolve=combat_cfg.get("auto_resolve", True))

    # -- State access --

    @property
    def encounter(self) -> CombatEncounter | None:
        return self.session.encounter

    @property
    def phase(self) -> CombatPhase:
        if self.session.encounter is None:
            return CombatPhase.IDLE
        return self.session.encounter.phase

    def _log(self, line: str) -> None:
        self.session.encounter.combat_log.append(line)
        logger.debug(line)

    def _rejection(self) -> str | None:
        """Reason the encounter cannot take a player action right now, if any."""
        encounter = self.session.encounter
        if encounter is None or not encounter.active:
            return "You are not in combat."
        if encounter.phase != CombatPhase.IN_COMBAT:
            return "This fight is already over."
        if encounter.turn_in_flight:
            return "Wait for the monster to finish its turn."
        return None

    # -- Lifecycle --

    def start_encounter(self, monster: Monster, player_health: float | None = None,
                        player_mana: float | None = None) -> ActionResult:
        """Idle -> InCombat against ``monster``.

        The encounter keeps its own copy of the monster and of the player's
        ability cooldowns; pools default to the character's current ones.
        """
        current = self.session.encounter
        if current is not None and current.active:
            return ActionResult(success=False, message=f"Already in combat with {current.monster_name}.")

        character = self.session.character
        monster = monster.model_copy(deep=True)
        encounter = CombatEncounter(
            monster=monster,
            monster_name=monster.name,
            player_health=character.stats.health if player_health is None else player_health,
            player_mana=character.stats.mana if player_mana is None else player_mana,
            monster_health=monster.stats.health,
            player_abilities=[a.model_copy(deep=True) for a in character.abilities],
        )
        self.session.encounter = encounter
        line = f"Combat started with {monster.name}!"
        self._log(line)
        logger.info(f"Encounter {encounter.id} started: {character.name} vs {monster.name}")
        return ActionResult(success=True, message=line, log_lines=[line])

    def end_encounter(self, outcome: CombatOutcome | str) -> ActionResult:
        encounter = self.session.encounter
        if encounter is None:
            return ActionResult(success=False, message="You are not in combat.")

        outcome = CombatOutcome(outcome)
        encounter.outcome = outcome
        encounter.active = False
        encounter.turn_in_flight = False
        encounter.monster = None
        if outcome == CombatOutcome.FLED:
            encounter.phase = CombatPhase.IDLE
        self._log("Combat ended.")
        self.session.last_encounter = encounter
        self.session.encounter = None
        logger.info(f"Encounter {encounter.id} ended: {outcome.value} after {encounter.turn_count} turns")
        return ActionResult(success=True, message="Combat ended.")

    def flee(self) -> ActionResult:
        """Leave the fight at once. Any pending monster turn is dropped and nothing is awarded."""
        encounter = self.session.encounter
        if encounter is None or not encounter.active:
            return ActionResult(success=False, message="You are not in combat.")
        if encounter.phase != CombatPhase.IN_COMBAT:
            return ActionResult(success=False, message="This fight is already over.")
        start = len(encounter.combat_log)
        self._log(f"Player fled from {encounter.monster_name}.")
        self.end_encounter(CombatOutcome.FLED)
        return ActionResult(success=True, message="You escaped.", log_lines=encounter.combat_log[start:])

    # -- Player actions --

    def apply_player_action(self, action: PlayerAction) -> ActionResult:
        rejection = self._rejection()
        if rejection:
            return ActionResult(success=False, message=rejection)

        encounter = self.session.encounter
        start = len(encounter.combat_log)

        if isinstance(action, AttackAction):
            result = self._apply_attack(action)
        elif isinstance(action, AbilityAction):
            result = self._apply_ability(action)
        elif isinstance(action, ItemAction):
            result = self._apply_item(action)
        else:
            return ActionResult(success=False, message=f"Unsupported action: {action!r}")

        if not result.success:
            return result

        self._check_monster_defeated()
        result.log_lines = encounter.combat_log[start:]
        return result

    def _apply_attack(self, action: AttackAction) -> ActionResult:
        damage = floor_at_zero(action.damage)
        self._damage_monster(damage)
        self._log(f"Player {action.description} for {format_amount(damage)} damage.")
        return ActionResult(success=True, message=f"You {action.description}.")

    def _apply_ability(self, action: AbilityAction) -> ActionResult:
        encounter = self.session.encounter
        ok, error, effect = ability_catalog.use_ability(
            encounter.player_abilities, action.ability_index, self.session.character.stats,
        )
        if not ok:
            return ActionResult(success=False, message=error)
        name = encounter.player_abilities[action.ability_index].name
        self.apply_ability_effect(ability_catalog.mana_cost(name), effect, name)
        return ActionResult(success=True, message=f"You used {name}.")

    def _apply_item(self, action: ItemAction) -> ActionResult:
        valid, error = validate_consumable(self.session.inventory, action.item_index)
        if not valid:
            return ActionResult(success=False, message=error)

        encounter = self.session.encounter
        item = remove_item(self.session.inventory, action.item_index)
        effect = item.consumable_effect
        self._log(f"Player used {item.name}.")

        if effect.type == ConsumableType.HEAL:
            encounter.player_health += effect.value
            self._log(f"Healed for {format_amount(effect.value)} health.")
        elif effect.type == ConsumableType.MANA:
            encounter.player_mana += effect.value
            self._log(f"Restored {format_amount(effect.value)} mana.")
        elif effect.type == ConsumableType.BUFF:
            buff = StatusEffect(
                kind=StatusKind.STRENGTH,
                magnitude=effect.value,
                duration=effect.duration or CONSUMABLE_BUFF_DURATION,
            )
            encounter.player_effects.append(buff)
            self._log(f"Gained {buff.kind.value} buff for {buff.duration} turns.")
        elif effect.type == ConsumableType.DAMAGE:
            self._damage_monster(effect.value)
            self._log(f"Dealt {format_amount(effect.value)} damage to {encounter.monster_name}.")
        return ActionResult(success=True, message=f"You used {item.name}.")

    def apply_ability_effect(self, mana_cost: float, effect: AbilityEffect, description: str) -> None:
        """Pay the mana and apply one computed ability effect.

        Affordability is not checked: mana is floored at zero.
        """
        encounter = self.session.encounter
        encounter.player_mana = floor_at_zero(encounter.player_mana - mana_cost)
        self._log(f"Player used {description}.")

        if effect.type == AbilityEffectType.DAMAGE:
            self._damage_monster(effect.value)
            self._log(f"Dealt {format_amount(effect.value)} damage to {encounter.monster_name}.")
        elif effect.type == AbilityEffectType.HEAL:
            # Not capped at max health.
            encounter.player_health += effect.value
            self._log(f"Healed for {format_amount(effect.value)} health.")
        elif effect.type == AbilityEffectType.BUFF:
            encounter.player_effects.append(effect.effect)
            self._log(f"Gained {effect.effect.kind.value} buff for {effect.effect.duration} turns.")
        elif effect.type == AbilityEffectType.DAMAGE_AND_EFFECT:
            self._damage_monster(effect.damage)
            self._log(f"Dealt {format_amount(effect.damage)} damage to {encounter.monster_name}.")
            encounter.monster_effects.append(effect.effect)
            self._log(
                f"Applied {effect.effect.kind.value} effect to {encounter.monster_name} "
                f"for {effect.effect.duration} turns."
            )
        elif effect.type == AbilityEffectType.BUFF_AND_DEBUFF:
            for buff in effect.buffs:
                encounter.player_effects.append(buff)
                self._log(f"Gained {buff.kind.value} buff for {buff.duration} turns.")
            for debuff in effect.debuffs:
                encounter.player_effects.append(debuff)
                self._log(f"Suffered {debuff.kind.value} debuff for {debuff.duration} turns.")
        else:
            self._log("Nothing happened.")

    def _damage_monster(self, amount: float) -> None:
        encounter = self.session.encounter
        encounter.monster_health = floor_at_zero(encounter.monster_health - amount)

    def _damage_player(self, amount: float) -> None:
        encounter = self.session.encounter
        encounter.player_health = floor_at_zero(encounter.player_health - amount)

    # -- Monster turn --

    def resolve_monster_turn(self) -> MonsterAttack | None:
        """The monster's automatic reply: a random ready attack, or its basic strike."""
        encounter = self.session.encounter
        if encounter is None or encounter.monster is None or encounter.phase != CombatPhase.IN_COMBAT:
            return None

        attack = choose_attack(encounter.monster, self.rng)
        self._damage_player(attack.damage)
        self._log(f"{encounter.monster_name} {attack.description} for {format_amount(attack.damage)} damage.")

        for attack_effect in attack.effects:
            try:
                kind = StatusKind(attack_effect.type)
            except ValueError:
                logger.warning(f"Attack '{attack.name}' has unknown effect type '{attack_effect.type}', skipping")
                continue
            if attack_effect.duration <= 0:
                continue
            effect = StatusEffect(kind=kind, magnitude=attack_effect.value, duration=attack_effect.duration)
            encounter.player_effects.append(effect)
            self._log(f"Player is afflicted by {kind.value} for {effect.duration} turns.")

        self._check_player_defeated()
        return attack

    # -- Turn advancement --

    def tick_cooldowns(self) -> None:
        encounter = self.session.encounter
        if encounter is None:
            return
        ability_catalog.update_cooldowns(encounter.player_abilities)
        if encounter.monster is not None:
            update_attack_cooldowns(encounter.monster)

    def advance_turn(self) -> None:
        encounter = self.session.encounter
        if encounter is None:
            return
        encounter.turn_count += 1
        self._log(f"--- Turn {encounter.turn_count} ---")
        encounter.player_effects = status_effects.tick_durations(encounter.player_effects)
        encounter.monster_effects = status_effects.tick_durations(encounter.monster_effects)

    def apply_status_effects(self) -> None:
        """Poison ticks for both sides, then both defeat conditions are re-checked."""
        encounter = self.session.encounter
        if encounter is None:
            return
        for damage in status_effects.damage_over_time(encounter.monster_effects):
            self._damage_monster(damage)
            self._log(f"{encounter.monster_name} took {format_amount(damage)} poison damage.")
        for damage in status_effects.damage_over_time(encounter.player_effects):
            self._damage_player(damage)
            self._log(f"Player took {format_amount(damage)} poison damage.")
        self._check_monster_defeated()
        self._check_player_defeated()

    def _check_monster_defeated(self) -> None:
        encounter = self.session.encounter
        if encounter.phase == CombatPhase.IN_COMBAT and encounter.monster_health <= 0:
            encounter.phase = CombatPhase.MONSTER_DEFEATED
            self._log(f"{encounter.monster_name} was defeated!")

    def _check_player_defeated(self) -> None:
        encounter = self.session.encounter
        if encounter.phase == CombatPhase.IN_COMBAT and encounter.player_health <= 0:
            encounter.phase = CombatPhase.PLAYER_DEFEATED
            self._log("Player was defeated!")

    # -- Full turns --

    def take_turn(self, action: PlayerAction) -> TurnReport:
        """Run one complete turn: the player's action and everything that follows it."""
        encounter = self.session.encounter
        rejection = self._rejection()
        if rejection:
            return TurnReport(accepted=False, message=rejection, phase=self.phase)

        start = len(encounter.combat_log)
        result = self.apply_player_action(action)
        if not result.success:
            return TurnReport(accepted=False, message=result.message, phase=self.phase)

        if encounter.phase == CombatPhase.IN_COMBAT:
            self._run_monster_phase()
        rewards = self._settle()
        return self._report(encounter, start, result.message, rewards)

    def submit_player_action(self, action: PlayerAction) -> TurnReport:
        """First half of a turn. Locks the encounter until ``resolve_pending_turn``."""
        encounter = self.session.encounter
        rejection = self._rejection()
        if rejection:
            return TurnReport(accepted=False, message=rejection, phase=self.phase)

        start = len(encounter.combat_log)
        result = self.apply_player_action(action)
        if not result.success:
            return TurnReport(accepted=False, message=result.message, phase=self.phase)

        if encounter.phase == CombatPhase.IN_COMBAT:
            encounter.turn_in_flight = True
            return self._report(encounter, start, result.message, None, monster_turn_pending=True)
        rewards = self._settle()
        return self._report(encounter, start, result.message, rewards)

    def resolve_pending_turn(self) -> TurnReport:
        """Second half of a turn: the monster's reply and end-of-turn ticks."""
        encounter = self.session.encounter
        if encounter is None or not encounter.turn_in_flight:
            return TurnReport(accepted=False, message="No turn is waiting for the monster.", phase=self.phase)

        start = len(encounter.combat_log)
        self._run_monster_phase()
        encounter.turn_in_flight = False
        rewards = self._settle()
        return self._report(encounter, start, "", rewards)

    def _run_monster_phase(self) -> None:
        self.resolve_monster_turn()
        if self.session.encounter.phase != CombatPhase.IN_COMBAT:
            return
        self.tick_cooldowns()
        self.advance_turn()
        self.apply_status_effects()

    def _settle(self) -> Rewards | None:
        if not self.auto_resolve or self.phase not in (CombatPhase.MONSTER_DEFEATED, CombatPhase.PLAYER_DEFEATED):
            return None
        return self.resolve_outcome()

    def _report(self, encounter: CombatEncounter, start: int, message: str,
                rewards: Rewards | None, monster_turn_pending: bool = False) -> TurnReport:
        return TurnReport(
            accepted=True,
            message=message,
            log_lines=encounter.combat_log[start:],
            phase=encounter.phase,
            outcome=encounter.outcome,
            rewards=rewards,
            monster_turn_pending=monster_turn_pending,
        )

    # -- Resolution --

    def resolve_outcome(self) -> Rewards | None:
        """Settle a finished fight and end the encounter.

        A monster defeat grants experience, gold and loot, all computed up
        front and applied together, at most once per encounter. A player
        defeat grants nothing. Returns the rewards, or None when nothing was
        awarded.
        """
        encounter = self.session.encounter
        if encounter is None:
            return None
        if encounter.phase == CombatPhase.PLAYER_DEFEATED:
            self._log("You have been defeated!")
            self.end_encounter(CombatOutcome.PLAYER_DEFEATED)
            return None
        if encounter.phase != CombatPhase.MONSTER_DEFEATED:
            logger.warning(f"resolve_outcome called while encounter {encounter.id} is {encounter.phase.value}")
            return None
        if encounter.rewards_granted:
            logger.warning(f"Rewards for encounter {encounter.id} were already granted")
            return None

        monster = encounter.monster
        loot = generate_loot(monster.loot_table, self.rng)
        free_slots = self.session.inventory.max_size - len(self.session.inventory.items)
        rewards = Rewards(
            experience=monster.experience_value,
            gold=loot.gold,
            items=loot.items[:max(free_slots, 0)],
            items_left_behind=loot.items[max(free_slots, 0):],
        )

        encounter.rewards_granted = True
        rewards.levels_gained = gain_experience(self.session.character, rewards.experience)
        add_gold(self.session.inventory, rewards.gold)
        for item in rewards.items:
            add_item(self.session.inventory, item)

        self._log(f"You defeated {monster.name} and gained {rewards.experience} experience!")
        if rewards.levels_gained:
            self._log(f"You reached level {self.session.character.level}!")
        if rewards.gold:
            self._log(f"You found {rewards.gold} gold!")
        if rewards.items:
            self._log(f"You found {len(rewards.items)} item(s)!")
        for item in rewards.items_left_behind:
            self._log(f"Your pack is full. {item.name} was left behind.")

        self.end_encounter(CombatOutcome.MONSTER_DEFEATED)
        return rewards
