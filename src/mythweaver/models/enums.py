"""Enumeration types for the Mythweaver data model."""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six ability scores."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


class Theme(StrEnum):
    """Campaign theme, used to flavour the opening beat."""

    DARK_FANTASY = "dark_fantasy"
    HIGH_FANTASY = "high_fantasy"
    HORROR = "horror"
    FRONTIER = "frontier"
    CUSTOM = "custom"


class BeatState(StrEnum):
    """Stages of the narrative beat cycle."""

    START = "start"
    EXPLORE = "explore"
    CONSEQUENCE = "consequence"
    ESCALATION = "escalation"


class TurnOwner(StrEnum):
    """Whose half-turn it is inside a combat encounter."""

    PLAYER = "player"
    ENEMY = "enemy"


class Intent(StrEnum):
    """Social intent recognised in free text."""

    DECEPTION = "deception"
    PERSUASION = "persuasion"
    INTIMIDATION = "intimidation"
    INSIGHT = "insight"


class ActionKind(StrEnum):
    """Routing category of a player action."""

    ATTACK = "attack"
    SOCIAL = "social"
    REST = "rest"
    LOOT = "loot"
    FREE = "free"


class EngineMode(StrEnum):
    """Mode the engine reports after processing an action."""

    NARRATIVE = "narrative"
    COMBAT = "combat"


class ItemType(StrEnum):
    """Broad inventory item categories."""

    WEAPON = "weapon"
    ARMOR = "armor"
    GEAR = "gear"
    CONSUMABLE = "consumable"
    TREASURE = "treasure"


__all__ = [
    "Ability",
    "Theme",
    "BeatState",
    "TurnOwner",
    "Intent",
    "ActionKind",
    "EngineMode",
    "ItemType",
]
