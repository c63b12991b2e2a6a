"""Typer CLI application."""
from __future__ import annotations

import logging
import random
import time
from typing import Optional

import typer

app = typer.Typer(
    name="trail-quest",
    help="A turn-based exploration and combat RPG",
    no_args_is_help=False,
)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        logging.basicConfig(level=logging.WARNING)
        return
    from rich.logging import RichHandler

    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(rich_tracebacks=True)])


def _build_interpreter(config: dict, model: str | None, offline: bool, rng: random.Random):
    from trail_quest.engine.interpreter import CombatInterpreter, KeywordInterpreter

    llm_cfg = config.get("llm", {})
    fallback = KeywordInterpreter(rng)
    if offline or not llm_cfg.get("enabled", True):
        return CombatInterpreter(llm=None, fallback=fallback)

    from trail_quest.llm.litellm_provider import LiteLLMProvider

    provider = LiteLLMProvider(
        model=model or llm_cfg.get("model", "gpt-4o-mini"),
        api_base=llm_cfg.get("api_base"),
        timeout=llm_cfg.get("timeout", 30),
    )
    return CombatInterpreter(llm=provider, fallback=fallback, temperature=llm_cfg.get("temperature", 0.3))


@app.command()
def fight(
    name: str = typer.Option("Wanderer", "--name", help="Character name"),
    profession: str = typer.Option("Warrior", "--profession", "-p", help="Warrior, Assassin or Wizard"),
    race: str = typer.Option("Human", "--race", "-r", help="Human, Dwarf, Orc or Elf"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for monster spawning and dice"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="LLM model to use"),
    offline: bool = typer.Option(False, "--offline", help="Use keyword matching only"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Meet a monster on the trail and fight it out."""
    from trail_quest.cli.combat_display import CombatDisplay
    from trail_quest.config import load_config
    from trail_quest.engine.combat import CombatEngine
    from trail_quest.engine.interpreter import to_player_action
    from trail_quest.engine.serialization import deserialize_character
    from trail_quest.engine.session import new_session
    from trail_quest.mechanics.inventory import add_item, equipped_gear
    from trail_quest.mechanics.monsters import generate_monster
    from trail_quest.content.loader import load_all_items
    from trail_quest.models.item import Item

    _setup_logging(verbose)
    config = load_config()
    rng = random.Random(seed)
    display = CombatDisplay()

    inventory_cfg = config.get("inventory", {})
    try:
        session = new_session(
            name, profession, race,
            max_inventory_size=inventory_cfg.get("max_size", 20),
            starting_gold=inventory_cfg.get("starting_gold", 0),
        )
    except ValueError as e:
        display.show_rejection(str(e))
        raise typer.Exit(code=1)
    add_item(session.inventory, Item.model_validate(load_all_items()["consumable_health_potion"]))

    engine = CombatEngine.from_config(session, config, rng=rng)
    interpreter = _build_interpreter(config, model, offline, rng)
    delay = config.get("combat", {}).get("monster_turn_delay", 0.6)

    monster = generate_monster(0, session.character.level, rng)
    engine.start_encounter(monster)
    display.show_combat_start(engine.encounter)

    rewards = None
    while engine.encounter is not None:
        encounter = engine.encounter
        display.show_combat_menu(encounter, session.character)
        text = display.console.input("[bold]> [/bold]").strip()
        if not text:
            continue
        if text.lower() in ("flee", "run", "escape"):
            result = engine.flee()
            display.show_log_lines(result.log_lines)
            break

        live = deserialize_character(session.character)
        interpretation = interpreter.interpret(
            text, live, encounter.monster, session.inventory.items, encounter.player_abilities,
            equipped=equipped_gear(session.inventory),
        )
        action = to_player_action(interpretation, text)
        if action is None:
            display.show_rejection(interpretation.message or "Nothing happens.")
            continue
        display.show_evaluation(interpretation.reasoning)

        report = engine.submit_player_action(action)
        if not report.accepted:
            display.show_rejection(report.message)
            continue
        display.show_log_lines(report.log_lines)
        rewards = report.rewards

        if report.monster_turn_pending:
            time.sleep(delay)
            report = engine.resolve_pending_turn()
            display.show_log_lines(report.log_lines)
            rewards = report.rewards

    last = session.last_encounter
    display.show_combat_end(last.outcome if last else None, rewards)
    display.show_inventory(session.inventory.items, session.inventory.gold)


@app.command()
def stats(
    profession: str = typer.Argument(..., help="Warrior, Assassin or Wizard"),
    race: str = typer.Argument(..., help="Human, Dwarf, Orc or Elf"),
    level: int = typer.Option(1, "--level", "-l", help="Show the character at this level"),
) -> None:
    """Show the starting stats and abilities for a profession and race."""
    from trail_quest.cli.combat_display import CombatDisplay
    from trail_quest.mechanics.character_creation import create_character
    from trail_quest.mechanics.leveling import level_up

    display = CombatDisplay()
    try:
        character = create_character("Preview", profession, race)
    except ValueError as e:
        display.show_rejection(str(e))
        raise typer.Exit(code=1)
    for _ in range(max(0, level - 1)):
        level_up(character)
        character.experience = 0
    display.show_character(character)


@app.command()
def check(model: Optional[str] = typer.Option(None, "--model", "-m", help="LLM model to check")) -> None:
    """Check whether the configured LLM can be reached."""
    from trail_quest.cli.combat_display import console
    from trail_quest.config import load_config
    from trail_quest.llm.litellm_provider import LiteLLMProvider

    llm_cfg = load_config().get("llm", {})
    provider = LiteLLMProvider(model=model or llm_cfg.get("model", "gpt-4o-mini"))
    if provider.is_available():
        console.print(f"[green]{provider.model_name} is configured.[/green]")
    else:
        console.print(f"[yellow]{provider.model_name} is not configured; combat will use keyword matching.[/yellow]")


if __name__ == "__main__":
    app()
