"""Reusable value components shared by the Mythweaver entities.

Components are frozen pydantic models. Derived values (modifiers) are plain
properties so that a dumped component validates straight back.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from mythweaver.core.constants import MAX_ABILITY_SCORE, MIN_ABILITY_SCORE
from mythweaver.models.enums import Ability, ItemType


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    The modifier is floor((score - 10) / 2); floor division keeps odd
    scores below 10 rounding down.

    Example:
        >>> calculate_modifier(10)
        0
        >>> calculate_modifier(20)
        5
        >>> calculate_modifier(8)
        -1
    """
    return (score - 10) // 2


AbilityScore = Annotated[
    int,
    Field(ge=MIN_ABILITY_SCORE, le=MAX_ABILITY_SCORE, description="Ability score"),
]


V = TypeVar("V")


def read_only(value: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only view over a private copy of ``value``."""
    return MappingProxyType(dict(value))


def _plain_dict(value: Mapping[str, Any]) -> dict[str, Any]:
    return dict(value)


# Mapping fields of frozen models: wrapped read-only on validation, dumped as dicts
ReadOnlyMap = Annotated[Mapping[str, V], AfterValidator(read_only), PlainSerializer(_plain_dict)]


class StatsComponent(BaseModel):
    """The six ability scores.

    Example:
        >>> stats = StatsComponent(strength=14, dexterity=12)
        >>> stats.modifier(Ability.STRENGTH)
        2
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: AbilityScore = 10
    dexterity: AbilityScore = 10
    constitution: AbilityScore = 10
    intelligence: AbilityScore = 10
    wisdom: AbilityScore = 10
    charisma: AbilityScore = 10

    def score(self, ability: Ability) -> int:
        """Get the score for a specific ability."""
        return getattr(self, ability.value)

    def modifier(self, ability: Ability) -> int:
        """Get the modifier for a specific ability."""
        return calculate_modifier(self.score(ability))

    @property
    def strength_modifier(self) -> int:
        return calculate_modifier(self.strength)

    @property
    def dexterity_modifier(self) -> int:
        return calculate_modifier(self.dexterity)


class InventoryItem(BaseModel):
    """An item carried by the player.

    Attributes:
        name: Display name.
        weight: Weight in pounds, counted against carrying capacity.
        item_type: Broad category of the item.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    weight: float = Field(default=0.0, ge=0)
    item_type: ItemType = ItemType.GEAR


class Encumbrance(BaseModel):
    """Carried load against carrying capacity.

    Attributes:
        load: Total weight carried.
        capacity: Strength x 15.
        encumbered: True only when load exceeds capacity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    load: float
    capacity: float
    encumbered: bool


__all__ = [
    "calculate_modifier",
    "AbilityScore",
    "ReadOnlyMap",
    "read_only",
    "StatsComponent",
    "InventoryItem",
    "Encumbrance",
]
