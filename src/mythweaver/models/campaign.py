"""Campaign record: the persisted state of one solo adventure.

A Campaign is an immutable value. The engine never edits one in place; each
action yields a new Campaign built with the helpers below (``with_log``,
``with_enemy`` and friends), so logs stay append-only and earlier values
remain valid snapshots.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from mythweaver.models.combat import CombatEncounter
from mythweaver.models.components import InventoryItem, ReadOnlyMap, read_only
from mythweaver.models.entities import NPC, Character, Enemy, Faction
from mythweaver.models.enums import BeatState, Theme


def _now() -> datetime:
    return datetime.now(UTC)


class Universe(BaseModel):
    """Player-authored setting sent to the opening-narration service.

    Attributes:
        name: Universe name.
        tone: Tone keywords, e.g. "bleak, quiet".
        themes: Theme keywords, e.g. "loss, survival".
        description: Free-text world description.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", max_length=200)
    tone: str = Field(default="", max_length=200)
    themes: str = Field(default="", max_length=500)
    description: str = Field(default="", max_length=5000)


class WorldState(BaseModel):
    """World-level narrative state.

    Attributes:
        tension: Accumulated narrative tension, never decreases.
        described: True once the opening beat has fired.
        last_beat: The beat most recently narrated.
        rumors: Rumors heard on the road, append-only.
        events: World events that have happened, append-only.
        turn: Number of player actions processed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tension: Annotated[int, Field(ge=0)] = 0
    described: bool = False
    last_beat: BeatState = BeatState.START
    rumors: tuple[str, ...] = ()
    events: tuple[str, ...] = ()
    turn: Annotated[int, Field(ge=0)] = 0


class Campaign(BaseModel):
    """A solo campaign and everything it owns.

    Attributes:
        id: Unique campaign identifier.
        name: Campaign name.
        theme: Theme used to flavour narration.
        universe: Optional custom setting.
        log: Player-facing narration, append-only.
        rules_log: Roll details, append-only, kept apart from the narration.
        character: The player's character.
        enemies: Enemies in turn/display order.
        npcs: NPCs keyed by name, read-only.
        factions: Factions keyed by name, read-only.
        world: World state.
        inventory: Carried items in pickup order.
        gold: Gold pieces.
        combat: The running encounter, None outside combat.
        last_played: When the campaign was last touched.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1, max_length=200)
    theme: Theme = Theme.DARK_FANTASY
    universe: Universe | None = None
    log: tuple[str, ...] = ()
    rules_log: tuple[str, ...] = ()
    character: Character = Field(default_factory=Character)
    enemies: tuple[Enemy, ...] = ()
    npcs: ReadOnlyMap[NPC] = Field(default_factory=dict, validate_default=True)
    factions: ReadOnlyMap[Faction] = Field(default_factory=dict, validate_default=True)
    world: WorldState = Field(default_factory=WorldState)
    inventory: tuple[InventoryItem, ...] = ()
    gold: Annotated[int, Field(ge=0)] = 0
    combat: CombatEncounter | None = None
    last_played: datetime = Field(default_factory=_now)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def in_combat(self) -> bool:
        return self.combat is not None

    @property
    def living_enemies(self) -> list[tuple[int, Enemy]]:
        """Living enemies with their position in ``enemies``."""
        return [(i, e) for i, e in enumerate(self.enemies) if e.alive]

    def visible_log(self, limit: int = 30) -> tuple[str, ...]:
        """The last ``limit`` narration lines, for display."""
        return self.log[-limit:]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def with_log(self, *lines: str) -> "Campaign":
        return self.model_copy(update={"log": self.log + lines})

    def with_rules(self, *lines: str) -> "Campaign":
        return self.model_copy(update={"rules_log": self.rules_log + lines})

    def with_character(self, character: Character) -> "Campaign":
        return self.model_copy(update={"character": character})

    def with_world(self, world: WorldState) -> "Campaign":
        return self.model_copy(update={"world": world})

    def with_combat(self, combat: CombatEncounter | None) -> "Campaign":
        return self.model_copy(update={"combat": combat})

    def with_enemy(self, index: int, enemy: Enemy) -> "Campaign":
        """Replace the enemy at ``index``."""
        enemies = self.enemies[:index] + (enemy,) + self.enemies[index + 1 :]
        return self.model_copy(update={"enemies": enemies})

    def with_added_enemy(self, enemy: Enemy) -> "Campaign":
        return self.model_copy(update={"enemies": self.enemies + (enemy,)})

    def with_relations(self, npcs: Mapping[str, NPC], factions: Mapping[str, Faction]) -> "Campaign":
        """Replace the NPC and faction tables."""
        return self.model_copy(update={"npcs": read_only(npcs), "factions": read_only(factions)})

    def with_item(self, item: InventoryItem) -> "Campaign":
        return self.model_copy(update={"inventory": self.inventory + (item,)})

    def touched(self, when: datetime | None = None) -> "Campaign":
        return self.model_copy(update={"last_played": when or _now()})


__all__ = [
    "Universe",
    "WorldState",
    "Campaign",
]
