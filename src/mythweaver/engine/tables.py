"""Content tables: starting cast, bestiary and loot."""

from __future__ import annotations

from mythweaver.models.components import InventoryItem
from mythweaver.models.entities import NPC, Enemy, Faction
from mythweaver.models.enums import ItemType


BESTIARY: tuple[Enemy, ...] = (
    Enemy(name="Bandit", hp=9, max_hp=9, attack_bonus=2, damage_die=6, initiative_bonus=1),
    Enemy(name="Ash Wolf", hp=7, max_hp=7, attack_bonus=3, damage_die=4, initiative_bonus=2),
    Enemy(name="Grave Thrall", hp=12, max_hp=12, attack_bonus=1, damage_die=6, initiative_bonus=-1),
)

LOOT_TABLE: tuple[InventoryItem, ...] = (
    InventoryItem(name="Rations", weight=2, item_type=ItemType.CONSUMABLE),
    InventoryItem(name="Rope", weight=10, item_type=ItemType.GEAR),
    InventoryItem(name="Rusted Shortsword", weight=2, item_type=ItemType.WEAPON),
    InventoryItem(name="Chain Shirt", weight=20, item_type=ItemType.ARMOR),
    InventoryItem(name="Silver Idol", weight=5, item_type=ItemType.TREASURE),
)

STARTING_ENEMIES: tuple[Enemy, ...] = (BESTIARY[0],)

STARTING_NPCS: tuple[NPC, ...] = (
    NPC(
        name="Old Maren",
        public_info="Old Maren says the eastern road is watched, and leaves it at that.",
        secret="Old Maren admits the watchers answer to the Ash Court, and that she pays them.",
    ),
)

STARTING_FACTIONS: tuple[Faction, ...] = (
    Faction(name="Ash Court", influence=3),
    Faction(name="Road Wardens", influence=1),
)


__all__ = [
    "BESTIARY",
    "LOOT_TABLE",
    "STARTING_ENEMIES",
    "STARTING_NPCS",
    "STARTING_FACTIONS",
]
