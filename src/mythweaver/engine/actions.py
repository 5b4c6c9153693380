"""Action classification and the free actions: loot and rest."""

from __future__ import annotations

import re

from mythweaver.core.constants import LOOT_GOLD_DIE, NO_REST_IN_COMBAT_LINE, REST_HEAL_DIE
from mythweaver.core.logging import get_logger
from mythweaver.engine.dice import DiceRoller
from mythweaver.engine.rules import adjust_exhaustion, encumbrance, heal
from mythweaver.engine.social import classify_intent
from mythweaver.engine.tables import LOOT_TABLE
from mythweaver.models.campaign import Campaign
from mythweaver.models.enums import ActionKind


logger = get_logger(__name__)

ATTACK_PATTERN = re.compile(r"\b(attack\w*|fight\w*|strike\w*)\b", re.IGNORECASE)

# Checked after attack verbs and social intents
ACTION_PATTERNS: tuple[tuple[re.Pattern[str], ActionKind], ...] = (
    (re.compile(r"\b(rest\w*|sleep\w*|camp)\b", re.IGNORECASE), ActionKind.REST),
    (re.compile(r"\b(loot\w*|scaveng\w*|search\w*)\b", re.IGNORECASE), ActionKind.LOOT),
)


def classify_action(text: str) -> ActionKind:
    """Route a player action: attack, social intent, rest, loot or free.

    "I ask about the rest of the tale" is a question, not a nap.
    """
    if ATTACK_PATTERN.search(text):
        return ActionKind.ATTACK
    if classify_intent(text) is not None:
        return ActionKind.SOCIAL
    for pattern, kind in ACTION_PATTERNS:
        if pattern.search(text):
            return kind
    return ActionKind.FREE


def resolve_loot(campaign: Campaign, roller: DiceRoller) -> Campaign:
    """Find gold and one item. Hauling more while encumbered is exhausting."""
    already_encumbered = encumbrance(campaign.character, campaign.inventory).encumbered
    gold = roller.roll_die(LOOT_GOLD_DIE)
    item = roller.choice(LOOT_TABLE)

    updated = campaign.with_item(item).model_copy(update={"gold": campaign.gold + gold})
    updated = updated.with_rules(f"Loot: d{LOOT_GOLD_DIE} {gold} gold, {item.name}")
    line = f"You scavenge {gold} gold. Found: {item.name}."

    if already_encumbered:
        updated = updated.with_character(adjust_exhaustion(updated.character, 1))
        line += " The weight drags at you."
    logger.info("Looted", gold=gold, item=item.name, encumbered=already_encumbered)
    return updated.with_log(line)


def resolve_rest(campaign: Campaign, roller: DiceRoller) -> Campaign:
    """Recover d6 hit points and one exhaustion level, outside combat."""
    if campaign.in_combat:
        return campaign.with_log(NO_REST_IN_COMBAT_LINE)

    amount = roller.roll_die(REST_HEAL_DIE)
    character = adjust_exhaustion(heal(campaign.character, amount), -1)
    logger.info("Rested", healed=amount, hp=character.hp)
    return (
        campaign.with_character(character)
        .with_rules(f"Rest: d{REST_HEAL_DIE} {amount} hp")
        .with_log(f"You rest briefly. ({character.display_hp}/{character.max_hp} hp)")
    )


__all__ = [
    "ATTACK_PATTERN",
    "ACTION_PATTERNS",
    "classify_action",
    "resolve_loot",
    "resolve_rest",
]
