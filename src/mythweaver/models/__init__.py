"""Pydantic V2 schemas for the Mythweaver session engine.

All models are frozen: the engine derives new values rather than mutating
existing ones, and every model round-trips through
``model_dump(mode="json")`` / ``model_validate``.

Submodules:
    enums: Enumeration types (Theme, BeatState, Intent, TurnOwner, ...)
    components: Ability scores, inventory items, encumbrance
    entities: Character, Enemy, NPC, Faction
    combat: CombatEncounter
    campaign: Universe, WorldState, Campaign

Example:
    >>> from mythweaver.models import Campaign, Enemy
    >>> campaign = Campaign(name="A Bleak Road")
    >>> campaign = campaign.with_added_enemy(Enemy(name="Bandit", hp=8, max_hp=8))
    >>> len(campaign.living_enemies)
    1
"""

from __future__ import annotations

from mythweaver.models.campaign import Campaign, Universe, WorldState
from mythweaver.models.combat import CombatEncounter
from mythweaver.models.components import (
    AbilityScore,
    Encumbrance,
    InventoryItem,
    StatsComponent,
    calculate_modifier,
)
from mythweaver.models.entities import NPC, Character, Enemy, Faction
from mythweaver.models.enums import (
    Ability,
    ActionKind,
    BeatState,
    EngineMode,
    Intent,
    ItemType,
    Theme,
    TurnOwner,
)


__all__ = [
    # === Enumerations ===
    "Ability",
    "ActionKind",
    "BeatState",
    "EngineMode",
    "Intent",
    "ItemType",
    "Theme",
    "TurnOwner",
    # === Components ===
    "AbilityScore",
    "calculate_modifier",
    "StatsComponent",
    "InventoryItem",
    "Encumbrance",
    # === Entities ===
    "Character",
    "Enemy",
    "NPC",
    "Faction",
    # === Campaign ===
    "CombatEncounter",
    "Universe",
    "WorldState",
    "Campaign",
]
