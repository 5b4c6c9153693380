"""Game entities owned by a campaign: the character, enemies, NPCs, factions.

Every entity is a frozen pydantic model. State changes produce new values
through ``model_copy(update=...)``; see ``mythweaver.engine.rules`` for the
transition functions.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mythweaver.core.constants import MAX_DEATH_SAVE_FAILURES
from mythweaver.models.components import ReadOnlyMap, StatsComponent


# =============================================================================
# Player Character
# =============================================================================


class Character(BaseModel):
    """The player's character.

    ``hp`` may drop below zero internally, meaning the character is dying;
    ``display_hp`` never shows a negative value. ``alive`` only ever goes from
    True to False, when the third death save failure is recorded.

    Attributes:
        name: Character name.
        stats: Ability scores.
        hp: Current hit points.
        max_hp: Maximum hit points.
        death_save_failures: Failed death saves (0-3).
        alive: Whether the character still lives.
        exhaustion: Exhaustion level.
        spell_slots: Remaining spell slots.
        skills: Read-only skill name to modifier (social skills use Intent
            values).
        alignment: Moral drift, negative for cruelty.
        influence: Standing earned through social success.
        traits: Earned labels such as "Feared", unique and in earn order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="Wanderer", min_length=1, max_length=100)
    stats: StatsComponent = Field(
        default_factory=lambda: StatsComponent(strength=14, dexterity=12, constitution=12)
    )
    hp: int = 12
    max_hp: Annotated[int, Field(gt=0)] = 12
    death_save_failures: Annotated[int, Field(ge=0, le=MAX_DEATH_SAVE_FAILURES)] = 0
    alive: bool = True
    exhaustion: Annotated[int, Field(ge=0)] = 0
    spell_slots: Annotated[int, Field(ge=0)] = 0
    skills: ReadOnlyMap[int] = Field(default_factory=dict, validate_default=True)
    alignment: int = 0
    influence: int = 0
    traits: tuple[str, ...] = ()

    @model_validator(mode="after")
    def validate_hp_ceiling(self) -> "Character":
        """Hit points never exceed the maximum."""
        if self.hp > self.max_hp:
            raise ValueError(f"hp ({self.hp}) cannot exceed max_hp ({self.max_hp})")
        return self

    @property
    def display_hp(self) -> int:
        return max(self.hp, 0)

    @property
    def is_dying(self) -> bool:
        return self.alive and self.hp <= 0

    def skill(self, name: str) -> int:
        """Modifier for a skill, 0 when untrained."""
        return self.skills.get(name, 0)


# =============================================================================
# Enemies
# =============================================================================


class Enemy(BaseModel):
    """A hostile creature with fixed combat modifiers.

    Attributes:
        name: Display name.
        hp: Current hit points.
        max_hp: Maximum hit points.
        alive: False once hp has reached 0.
        attack_bonus: Added to the enemy's attack d20.
        damage_die: Sides of the enemy's damage die.
        damage_bonus: Added to the enemy's damage roll.
        initiative_bonus: Added to the enemy's initiative d20.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    hp: int
    max_hp: Annotated[int, Field(gt=0)]
    alive: bool = True
    attack_bonus: int = 2
    damage_die: Annotated[int, Field(ge=1)] = 6
    damage_bonus: int = 0
    initiative_bonus: int = 1


# =============================================================================
# Social Entities
# =============================================================================


class NPC(BaseModel):
    """A non-player character the player can talk to.

    Attributes:
        name: NPC name, unique within the campaign.
        disposition: Favour toward the player; lowers social DCs.
        influence: The NPC's standing in the world.
        memory: Observations of the player, append-only.
        public_info: What the NPC says to anyone.
        secret: What the NPC reveals only to a successful check.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    disposition: int = 0
    influence: int = 0
    memory: tuple[str, ...] = ()
    public_info: str = ""
    secret: str = ""


class Faction(BaseModel):
    """A faction whose attitude drifts with the player's dealings.

    Attributes:
        name: Faction name, unique within the campaign.
        attitude: Favour toward the player.
        influence: The faction's reach.
        memory: Observations of the player, append-only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    attitude: int = 0
    influence: int = 0
    memory: tuple[str, ...] = ()


__all__ = [
    "Character",
    "Enemy",
    "NPC",
    "Faction",
]
