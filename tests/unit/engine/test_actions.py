"""Tests for action routing and the free actions."""

from __future__ import annotations

import pytest

from mythweaver.core.constants import NO_REST_IN_COMBAT_LINE
from mythweaver.engine.actions import classify_action, resolve_loot, resolve_rest
from mythweaver.engine.tables import LOOT_TABLE
from mythweaver.models import (
    ActionKind,
    Campaign,
    Character,
    CombatEncounter,
    InventoryItem,
    StatsComponent,
)


class TestClassifyAction:
    """Verbs before intents, free text last."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("attack", ActionKind.ATTACK),
            ("I strike the bandit", ActionKind.ATTACK),
            ("Rest by the fire", ActionKind.REST),
            ("I search the bodies", ActionKind.LOOT),
            ("I ask Old Maren about the road", ActionKind.SOCIAL),
            ("I walk north", ActionKind.FREE),
        ],
    )
    def test_routes(self, text: str, expected: ActionKind) -> None:
        assert classify_action(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I ask about the rest of the tale", ActionKind.SOCIAL),
            ("I hit the road", ActionKind.FREE),
            ("I lie down to rest", ActionKind.REST),
            ("I fight while I ask for mercy", ActionKind.ATTACK),
        ],
    )
    def test_ambiguous_phrasing(self, text: str, expected: ActionKind) -> None:
        assert classify_action(text) == expected


class TestLoot:
    """Gold and one item."""

    def test_adds_gold_and_item(self, sample_campaign: Campaign, roller) -> None:
        roller.queue(7)
        roller.picks.extend([4])

        campaign = resolve_loot(sample_campaign, roller)

        assert campaign.gold == 7
        assert campaign.inventory == (LOOT_TABLE[4],)
        assert campaign.log[-1] == f"You scavenge 7 gold. Found: {LOOT_TABLE[4].name}."
        assert campaign.character.exhaustion == 0

    def test_encumbered_looting_exhausts(self, roller) -> None:
        """STR 1 carries 15; a 20 lb chain shirt is already too much."""
        campaign = Campaign(
            name="Road",
            character=Character(stats=StatsComponent(strength=1)),
            inventory=(InventoryItem(name="Chain Shirt", weight=20),),
        )
        roller.queue(3)

        campaign = resolve_loot(campaign, roller)

        assert campaign.character.exhaustion == 1
        assert campaign.log[-1].endswith("The weight drags at you.")


class TestRest:
    """Short rests outside combat."""

    def test_heals_and_recovers(self, roller) -> None:
        campaign = Campaign(name="Road", character=Character(hp=5, max_hp=12, exhaustion=2))
        roller.queue(4)

        campaign = resolve_rest(campaign, roller)

        assert campaign.character.hp == 9
        assert campaign.character.exhaustion == 1
        assert campaign.log[-1] == "You rest briefly. (9/12 hp)"

    def test_not_in_combat(self, sample_campaign: Campaign, roller) -> None:
        fighting = sample_campaign.with_combat(CombatEncounter())

        campaign = resolve_rest(fighting, roller)

        assert campaign.log[-1] == NO_REST_IN_COMBAT_LINE
        assert campaign.character == fighting.character
        assert roller.history == []
