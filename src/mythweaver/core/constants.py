"""Rules and narrative constants for Mythweaver.

Tunable values live in GameSettings; these are the fixed rules of the
system.
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================

D20 = 20
"""Sides of the check die."""

PLAYER_DAMAGE_DIE = 6
"""Die rolled for player weapon damage."""

REST_HEAL_DIE = 6
"""Die rolled for hit points recovered by a short rest."""

LOOT_GOLD_DIE = 10
"""Die rolled for gold found when looting."""

# =============================================================================
# Character Rules
# =============================================================================

CARRY_CAPACITY_PER_STRENGTH = 15
"""Carrying capacity in weight units per point of strength."""

EXHAUSTION_PENALTY_PER_LEVEL = -2
"""Flat penalty to every d20 total per exhaustion level."""

ENCUMBERED_ATTACK_PENALTY = -2
"""Extra penalty to attack totals while encumbered."""

MAX_DEATH_SAVE_FAILURES = 3
"""Death save failures that end the character's life."""

MIN_ABILITY_SCORE = 1
MAX_ABILITY_SCORE = 30

# =============================================================================
# Timeline
# =============================================================================

WORLD_EVENT_INTERVAL = 3
"""A world event fires every this many turns."""

RUMOR_EXHAUSTION_THRESHOLD = 2
"""Exhaustion level at which the road starts whispering rumors."""

# =============================================================================
# Narrative Text
# =============================================================================

FALLBACK_OPENING = "Cold air settles over a nameless road. Your journey begins without ceremony."
"""Opening used when the narration service is unavailable."""

PLACEHOLDER_OPENING = (
    "Cold air settles over a nameless road. "
    "The land feels wrong here, too quiet, too patient. "
    "Somewhere nearby, something waits, unseen. "
    "Your journey begins without ceremony."
)
"""Scene returned by the placeholder opening service."""

UNKNOWN_ACTION_LINE = "The world considers your action."
NOTHING_TO_ATTACK_LINE = "There is nothing to attack."
NO_REST_IN_COMBAT_LINE = "There is no time to rest."
TALE_ENDED_LINE = "Your tale has ended."
PLAYER_DEATH_LINE = "You fall, and do not rise again."


__all__ = [
    "D20",
    "PLAYER_DAMAGE_DIE",
    "REST_HEAL_DIE",
    "LOOT_GOLD_DIE",
    "CARRY_CAPACITY_PER_STRENGTH",
    "EXHAUSTION_PENALTY_PER_LEVEL",
    "ENCUMBERED_ATTACK_PENALTY",
    "MAX_DEATH_SAVE_FAILURES",
    "MIN_ABILITY_SCORE",
    "MAX_ABILITY_SCORE",
    "WORLD_EVENT_INTERVAL",
    "RUMOR_EXHAUSTION_THRESHOLD",
    "FALLBACK_OPENING",
    "PLACEHOLDER_OPENING",
    "UNKNOWN_ACTION_LINE",
    "NOTHING_TO_ATTACK_LINE",
    "NO_REST_IN_COMBAT_LINE",
    "TALE_ENDED_LINE",
    "PLAYER_DEATH_LINE",
]
