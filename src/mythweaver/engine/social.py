"""Skill and social check resolution.

Free text is matched against an ordered list of keyword patterns to find a
social intent. A recognised intent becomes a d20 check against the target
NPC, whose disposition lowers (or raises) the DC. Whatever the outcome, the
NPC and every faction remember the attempt and shift their attitude.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mythweaver.core.config import GameSettings
from mythweaver.core.logging import get_logger
from mythweaver.engine.dice import CheckResult, DiceRoller
from mythweaver.engine.rules import check_modifier, earn_trait
from mythweaver.models.campaign import Campaign
from mythweaver.models.entities import NPC
from mythweaver.models.enums import Intent


logger = get_logger(__name__)

FEARED_TRAIT = "Feared"

# Evaluated top to bottom; the first match wins.
INTENT_PATTERNS: tuple[tuple[re.Pattern[str], Intent], ...] = (
    (re.compile(r"\b(lie|lies|lying|bluff\w*|deceiv\w*)\b(?!\s+down)", re.IGNORECASE), Intent.DECEPTION),
    (re.compile(r"\b(convinc\w*|persuad\w*|ask(s|ed|ing)?)\b", re.IGNORECASE), Intent.PERSUASION),
    (re.compile(r"\b(threaten\w*|intimidat\w*)\b", re.IGNORECASE), Intent.INTIMIDATION),
    (
        re.compile(r"\b(observ\w*|watch(es|ed|ing)?|sens(e|es|ed|ing)|read(s|ing)?)\b", re.IGNORECASE),
        Intent.INSIGHT,
    ),
)


@dataclass(frozen=True)
class SocialOutcome:
    """Result of a social check.

    Attributes:
        campaign: The campaign after the check's side effects.
        intent: The intent that was checked.
        npc_name: Who the check was made against.
        check: The roll.
        revealed: The information the NPC gave up.
    """

    campaign: Campaign
    intent: Intent
    npc_name: str
    check: CheckResult
    revealed: str


def classify_intent(text: str) -> Intent | None:
    """Map free text to a social intent, or None when nothing matches.

    Example:
        >>> classify_intent("I try to bluff my way past")
        <Intent.DECEPTION: 'deception'>
        >>> classify_intent("I walk north") is None
        True
    """
    for pattern, intent in INTENT_PATTERNS:
        if pattern.search(text):
            return intent
    return None


def find_target(campaign: Campaign, text: str) -> NPC | None:
    """The NPC named in the text, else the first NPC present, else None."""
    lowered = text.lower()
    for name, npc in campaign.npcs.items():
        if name.lower() in lowered:
            return npc
    return next(iter(campaign.npcs.values()), None)


def social_dc(base_dc: int, npc: NPC) -> int:
    """Friendlier NPCs are easier to work with: base DC minus disposition."""
    return base_dc - npc.disposition


def _revelation(npc: NPC, intent: Intent, success: bool) -> str:
    if not success:
        return npc.public_info or f"{npc.name} gives you nothing beyond pleasantries."
    if intent == Intent.INSIGHT:
        return f"{npc.name} is hiding something."
    return npc.secret or f"{npc.name} has nothing more to tell."


def resolve_social(
    campaign: Campaign,
    intent: Intent,
    npc: NPC,
    roller: DiceRoller,
    settings: GameSettings,
) -> SocialOutcome:
    """Roll a social check against ``npc`` and apply its side effects.

    Success reveals the NPC's secret (insight only reveals that something is
    concealed); failure reveals the public information. Either way the NPC's
    disposition and every faction's attitude drift by one, and all of them
    remember the attempt.
    """
    character = campaign.character
    dc = social_dc(settings.base_social_dc, npc)
    check = roller.check(check_modifier(character, character.skill(intent)), dc)
    revealed = _revelation(npc, intent, check.success)
    drift = 1 if check.success else -1
    outcome = "succeeded" if check.success else "failed"
    memory_line = f"{character.name} attempted {intent} with {npc.name} and {outcome}."

    updated_npc = npc.model_copy(
        update={"disposition": npc.disposition + drift, "memory": npc.memory + (memory_line,)}
    )
    npcs = {**campaign.npcs, npc.name: updated_npc}
    factions = {
        name: faction.model_copy(
            update={"attitude": faction.attitude + drift, "memory": faction.memory + (memory_line,)}
        )
        for name, faction in campaign.factions.items()
    }

    if check.success:
        character = character.model_copy(update={"influence": character.influence + 1})
        if intent == Intent.INTIMIDATION:
            character = character.model_copy(update={"alignment": character.alignment - 1})
            if character.alignment <= settings.feared_alignment_threshold:
                character = earn_trait(character, FEARED_TRAIT)

    logger.info(
        "Social check resolved",
        intent=intent,
        npc=npc.name,
        dc=dc,
        total=check.total,
        success=check.success,
    )

    updated = (
        campaign.with_relations(npcs, factions)
        .with_character(character)
        .with_rules(f"{intent.capitalize()} vs {npc.name}: {check.describe()}")
        .with_log(revealed)
    )
    return SocialOutcome(
        campaign=updated,
        intent=intent,
        npc_name=npc.name,
        check=check,
        revealed=revealed,
    )


__all__ = [
    "FEARED_TRAIT",
    "INTENT_PATTERNS",
    "SocialOutcome",
    "classify_intent",
    "find_target",
    "social_dc",
    "resolve_social",
]
