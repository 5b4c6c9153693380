"""Session engine for Mythweaver.

Resolves player actions against a campaign: dice and derived rules, the
combat turn machine, social checks, the narrative beat cycle and the world
timeline.

Submodules:
    dice: Die rolls and d20 checks (d20 library)
    rules: Encumbrance, exhaustion, damage and healing
    combat: Initiative and the player/enemy half-turns
    social: Intent classification and social checks
    narrative: Beat cycle and narration strategies
    timeline: Turn counter and scheduled world events
    actions: Action routing, loot and rest
    game: GameEngine entry point and GameSession

Example:
    >>> from mythweaver.engine import GameEngine
    >>> session = await engine.create_campaign("A Bleak Road")
    >>> session = engine.apply_action(session, "attack")
    >>> session.campaign.in_combat
    True
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from mythweaver.engine.dice import (
    CheckResult,
    DiceRoller,
    RollType,
    ability_modifier,
    select_roll,
)

# =============================================================================
# Rules
# =============================================================================
from mythweaver.engine.rules import (
    adjust_exhaustion,
    apply_damage,
    attack_modifier,
    check_modifier,
    earn_trait,
    encumbrance,
    exhaustion_penalty,
    heal,
)

# =============================================================================
# Combat
# =============================================================================
from mythweaver.engine.combat import (
    enemy_turn,
    player_turn,
    resolve_attack,
    roll_initiative,
)

# =============================================================================
# Social Checks
# =============================================================================
from mythweaver.engine.social import (
    SocialOutcome,
    classify_intent,
    find_target,
    resolve_social,
    social_dc,
)

# =============================================================================
# Narrative and Timeline
# =============================================================================
from mythweaver.engine.narrative import (
    BeatResult,
    FixedNarration,
    NarrationStrategy,
    NarrativeEngine,
    PooledNarration,
    build_strategy,
)
from mythweaver.engine.timeline import DEFAULT_SCHEDULE, ScheduledEvent, advance_turn

# =============================================================================
# Actions and Entry Point
# =============================================================================
from mythweaver.engine.actions import classify_action, resolve_loot, resolve_rest
from mythweaver.engine.game import GameEngine, GameSession


__all__ = [
    # Dice
    "CheckResult",
    "DiceRoller",
    "RollType",
    "ability_modifier",
    "select_roll",
    # Rules
    "adjust_exhaustion",
    "apply_damage",
    "attack_modifier",
    "check_modifier",
    "earn_trait",
    "encumbrance",
    "exhaustion_penalty",
    "heal",
    # Combat
    "enemy_turn",
    "player_turn",
    "resolve_attack",
    "roll_initiative",
    # Social
    "SocialOutcome",
    "classify_intent",
    "find_target",
    "resolve_social",
    "social_dc",
    # Narrative
    "BeatResult",
    "FixedNarration",
    "NarrationStrategy",
    "NarrativeEngine",
    "PooledNarration",
    "build_strategy",
    # Timeline
    "DEFAULT_SCHEDULE",
    "ScheduledEvent",
    "advance_turn",
    # Actions
    "classify_action",
    "resolve_loot",
    "resolve_rest",
    # Entry point
    "GameEngine",
    "GameSession",
]
