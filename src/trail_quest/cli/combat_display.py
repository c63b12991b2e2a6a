"""Combat-specific display helpers: turn-based combat UI."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trail_quest.mechanics import status_effects
from trail_quest.mechanics.stats import max_health, max_mana
from trail_quest.models.action import Rewards
from trail_quest.models.character import Character, Stats
from trail_quest.models.combat import CombatEncounter, CombatOutcome, StatusEffect
from trail_quest.models.item import Item
from trail_quest.utils import format_amount

console = Console()

_EFFECT_COLORS = {
    "poison": "green", "stun": "yellow", "freeze": "cyan", "fear": "magenta",
}


def hp_bar(current: float, maximum: float, width: int = 12) -> str:
    """Coloured block bar: green above half, yellow above a quarter, red below."""
    pct = max(0.0, min(1.0, current / maximum)) if maximum > 0 else 0.0
    filled = int(pct * width)
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


def _effect_tags(ledger: list[StatusEffect]) -> str:
    tags = []
    for effect in ledger:
        color = _EFFECT_COLORS.get(effect.kind.value, "blue" if effect.magnitude >= 0 else "red")
        tags.append(f"[{color}]{status_effects.describe(effect)}[/{color}]")
    return " " + " ".join(tags) if tags else ""


class CombatDisplay:
    def __init__(self, console_override: Console | None = None) -> None:
        self.console = console_override or console

    def show_combat_start(self, encounter: CombatEncounter) -> None:
        monster = encounter.monster
        subtitle = f"{monster.difficulty.value} {monster.type.value}, level {monster.level}" if monster else ""
        self.console.print(Panel(
            f"[bold red]COMBAT![/bold red]\n\n{encounter.monster_name} blocks the trail. {subtitle}",
            border_style="red", box=box.HEAVY,
        ))

    def show_combat_menu(self, encounter: CombatEncounter, character: Character) -> None:
        """Both combatants' bars, active effects and the ability list."""
        content = Text.from_markup(f"  Turn {encounter.turn_count + 1}, your move\n\n", style="bold yellow")

        monster_max = encounter.monster.stats.health if encounter.monster else encounter.monster_health
        content.append_text(Text.from_markup(
            f"  {encounter.monster_name:<18} {hp_bar(encounter.monster_health, monster_max)} "
            f"{format_amount(encounter.monster_health)}/{format_amount(monster_max)}"
            f"{_effect_tags(encounter.monster_effects)}\n"
        ))

        player_max = max(max_health(character.stats), encounter.player_health)
        content.append_text(Text.from_markup(
            f"\n  [bold]You[/bold]{'':15} {hp_bar(encounter.player_health, player_max)} "
            f"{format_amount(encounter.player_health)}/{format_amount(player_max)}"
            f"{_effect_tags(encounter.player_effects)}\n"
            f"  [blue]Mana[/blue]{'':14} {format_amount(encounter.player_mana)}/"
            f"{format_amount(max_mana(character.stats))}\n\n"
        ))

        for index, ability in enumerate(encounter.player_abilities):
            if ability.is_ready:
                content.append_text(Text.from_markup(f"  [cyan bold][{index}][/cyan bold] {ability.name}\n"))
            else:
                content.append_text(Text.from_markup(
                    f"  [dim][{index}] {ability.name} ({ability.current_cooldown} turns)[/dim]\n"
                ))
        content.append_text(Text.from_markup("\n  [dim]Describe your action, or type 'flee'.[/dim]"))

        self.console.print(Panel(content, border_style="red", box=box.ROUNDED, width=60))

    def show_log_lines(self, lines: list[str]) -> None:
        """Show what happened this turn."""
        if not lines:
            return
        self.console.print()
        for line in lines:
            if line.startswith("---"):
                self.console.print(f"[dim]{line}[/dim]")
            elif "defeated" in line:
                self.console.print(f"  [bold red]{line}[/bold red]")
            else:
                self.console.print(f"  {line}")

    def show_rejection(self, message: str) -> None:
        self.console.print(f"  [yellow]{message}[/yellow]")

    def show_evaluation(self, reasoning: str | None) -> None:
        if reasoning:
            self.console.print(f"  [dim]AI Evaluation: {escape(reasoning)}[/dim]")

    def show_combat_end(self, outcome: CombatOutcome | None, rewards: Rewards | None = None) -> None:
        if outcome == CombatOutcome.MONSTER_DEFEATED:
            content = "[bold green]Victory![/bold green]\n"
            if rewards:
                content += f"\nXP Gained: {rewards.experience}"
                if rewards.levels_gained:
                    content += f" ([bold]+{rewards.levels_gained} level[/bold])"
                if rewards.gold:
                    content += f"\nGold: +{rewards.gold}"
                if rewards.items:
                    content += f"\nLoot: {', '.join(i.name for i in rewards.items)}"
                if rewards.items_left_behind:
                    content += f"\n[dim]Left behind: {', '.join(i.name for i in rewards.items_left_behind)}[/dim]"
            self.console.print(Panel(content, border_style="green", box=box.HEAVY))
        elif outcome == CombatOutcome.PLAYER_DEFEATED:
            self.console.print(Panel(
                "[bold red]Defeat...[/bold red]\n\nYou have been defeated!",
                border_style="red", box=box.HEAVY,
            ))
        elif outcome == CombatOutcome.FLED:
            self.console.print(Panel(
                "[bold yellow]Escaped![/bold yellow]\nYou flee from combat.",
                border_style="yellow", box=box.HEAVY,
            ))

    def show_character(self, character: Character) -> None:
        table = Table(title=f"{character.name}, level {character.level} {character.race.value} "
                            f"{character.profession.value}", box=box.SIMPLE)
        table.add_column("Stat", style="bold")
        table.add_column("Value", justify="right")
        stats: Stats = character.stats
        for name in ("strength", "dexterity", "intelligence", "vitality"):
            table.add_row(name.capitalize(), format_amount(getattr(stats, name)))
        table.add_row("Health", f"{format_amount(stats.health)}/{format_amount(max_health(stats))}")
        table.add_row("Mana", f"{format_amount(stats.mana)}/{format_amount(max_mana(stats))}")
        table.add_row("Experience", f"{character.experience}/{character.experience_to_next_level}")
        self.console.print(table)

        abilities = Table(box=box.SIMPLE)
        abilities.add_column("Ability", style="cyan")
        abilities.add_column("Cooldown", justify="right")
        abilities.add_column("Description", style="dim")
        for ability in character.abilities:
            abilities.add_row(ability.name, str(ability.cooldown), ability.description)
        self.console.print(abilities)

    def show_inventory(self, items: list[Item], gold: int) -> None:
        if not items:
            self.console.print(f"[dim]Your pack is empty. Gold: {gold}[/dim]")
            return
        table = Table(title=f"Pack (gold: {gold})", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Item")
        table.add_column("Type", style="dim")
        for index, item in enumerate(items):
            table.add_row(str(index), item.name, item.type.value.lower())
        self.console.print(table)
