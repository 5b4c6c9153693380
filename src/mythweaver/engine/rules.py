"""Derived character rules: encumbrance, penalties, damage and healing.

Everything here is a pure function of its arguments. Transitions return a
new Character and never touch the one they were given.
"""

from __future__ import annotations

from collections.abc import Iterable

from mythweaver.core.constants import (
    CARRY_CAPACITY_PER_STRENGTH,
    ENCUMBERED_ATTACK_PENALTY,
    EXHAUSTION_PENALTY_PER_LEVEL,
    MAX_DEATH_SAVE_FAILURES,
)
from mythweaver.core.logging import get_logger
from mythweaver.models.components import Encumbrance, InventoryItem
from mythweaver.models.entities import Character


logger = get_logger(__name__)


def encumbrance(character: Character, inventory: Iterable[InventoryItem]) -> Encumbrance:
    """Compare carried weight with strength x 15.

    A load equal to capacity is not encumbered.

    Example:
        >>> from mythweaver.models import StatsComponent
        >>> hero = Character(stats=StatsComponent(strength=10))
        >>> encumbrance(hero, [InventoryItem(name="Anvil", weight=150)]).encumbered
        False
    """
    load = sum(item.weight for item in inventory)
    capacity = character.stats.strength * CARRY_CAPACITY_PER_STRENGTH
    return Encumbrance(load=load, capacity=capacity, encumbered=load > capacity)


def exhaustion_penalty(level: int) -> int:
    """Flat penalty to all d20 totals: -2 per exhaustion level."""
    if level <= 0:
        return 0
    return EXHAUSTION_PENALTY_PER_LEVEL * level


def check_modifier(character: Character, base: int) -> int:
    """A d20 modifier with the exhaustion penalty folded in."""
    return base + exhaustion_penalty(character.exhaustion)


def attack_modifier(character: Character, inventory: Iterable[InventoryItem]) -> int:
    """Strength modifier plus exhaustion and encumbrance penalties."""
    modifier = check_modifier(character, character.stats.strength_modifier)
    if encumbrance(character, inventory).encumbered:
        modifier += ENCUMBERED_ATTACK_PENALTY
    return modifier


def apply_damage(character: Character, amount: int) -> Character:
    """Subtract hit points, recording a death save failure at hp <= 0.

    The third failure ends the character's life. Damage to a character who
    is already dead changes nothing.
    """
    if not character.alive:
        return character

    hp = character.hp - amount
    failures = character.death_save_failures
    alive = True
    if hp <= 0:
        failures = min(failures + 1, MAX_DEATH_SAVE_FAILURES)
        alive = failures < MAX_DEATH_SAVE_FAILURES
        logger.info(
            "Death save failed",
            character=character.name,
            hp=hp,
            failures=failures,
            alive=alive,
        )
    return character.model_copy(
        update={"hp": hp, "death_save_failures": failures, "alive": alive}
    )


def heal(character: Character, amount: int) -> Character:
    """Restore hit points, clamped to max_hp.

    A dying character brought back above 0 hp clears their death save
    failures. The dead stay dead.
    """
    if not character.alive or amount <= 0:
        return character

    hp = min(character.max_hp, character.hp + amount)
    failures = character.death_save_failures if hp <= 0 else 0
    return character.model_copy(update={"hp": hp, "death_save_failures": failures})


def adjust_exhaustion(character: Character, delta: int) -> Character:
    """Raise or lower exhaustion, never below 0."""
    return character.model_copy(update={"exhaustion": max(0, character.exhaustion + delta)})


def earn_trait(character: Character, label: str) -> Character:
    """Add a trait label once."""
    if label in character.traits:
        return character
    logger.info("Trait earned", character=character.name, trait=label)
    return character.model_copy(update={"traits": character.traits + (label,)})


__all__ = [
    "encumbrance",
    "exhaustion_penalty",
    "check_modifier",
    "attack_modifier",
    "apply_damage",
    "heal",
    "adjust_exhaustion",
    "earn_trait",
]
