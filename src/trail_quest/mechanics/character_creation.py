"""Character creation logic: assembles a level-1 Character."""
from __future__ import annotations

from trail_quest.mechanics.abilities import initial_ability_states
from trail_quest.mechanics.leveling import STARTING_EXPERIENCE_TO_NEXT_LEVEL
from trail_quest.mechanics.stats import derive_initial_stats
from trail_quest.models.character import Character, Profession, Race


def create_character(name: str, profession: Profession | str, race: Race | str) -> Character:
    """Build a fresh character from a name and its two archetype tags.

    Raises:
        ValueError: If the profession or race is not recognised.
    """
    name = name.strip()
    if not name:
        raise ValueError("Character name cannot be empty")
    profession = Profession(profession)
    race = Race(race)
    return Character(
        name=name,
        profession=profession,
        race=race,
        level=1,
        experience=0,
        experience_to_next_level=STARTING_EXPERIENCE_TO_NEXT_LEVEL,
        stats=derive_initial_stats(profession, race),
        abilities=initial_ability_states(profession, race),
    )
