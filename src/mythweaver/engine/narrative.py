"""Narrative beat engine.

Each campaign cycles through story beats independently of what the player
types:

    Start -> Explore -> Consequence -> Escalation -> Explore -> ...

Start fires exactly once, while the world has not been described yet. Every
beat raises tension; an Escalation beat may tip the session into combat.

What the beats *say* is delegated to a narration strategy. Two strategies
share the ``NarrationStrategy`` interface: ``FixedNarration`` always uses
the same line for a beat, ``PooledNarration`` draws from sensory,
development and hook pools. The transition table lives here, so both obey
the same beat contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from mythweaver.core.config import GameSettings
from mythweaver.core.logging import get_logger
from mythweaver.engine.dice import DiceRoller
from mythweaver.models.campaign import Campaign
from mythweaver.models.enums import BeatState, EngineMode, Theme


logger = get_logger(__name__)


NEXT_BEAT: dict[BeatState, BeatState] = {
    BeatState.START: BeatState.EXPLORE,
    BeatState.EXPLORE: BeatState.CONSEQUENCE,
    BeatState.CONSEQUENCE: BeatState.ESCALATION,
    BeatState.ESCALATION: BeatState.EXPLORE,
}

THEME_OPENINGS: dict[Theme, str] = {
    Theme.DARK_FANTASY: "Cold rain falls on the Ashfall Road. Smoke rises ahead.",
    Theme.HIGH_FANTASY: "Banners snap above the white city as your road begins.",
    Theme.HORROR: "The lantern gutters. Something in the dark has noticed you.",
    Theme.FRONTIER: "Dust hangs over the last outpost before the wilds.",
    Theme.CUSTOM: "A new world waits to be walked.",
}

FIXED_LINES: dict[BeatState, str] = {
    BeatState.EXPLORE: "The moment lingers. The road ahead is yours to read.",
    BeatState.CONSEQUENCE: "Subtle consequences surface in the wake of your choices.",
    BeatState.ESCALATION: "Events accelerate. The world will not wait for you.",
}

SENSORY_POOL: tuple[str, ...] = (
    "Wet leaves smell of iron and old smoke.",
    "A crow watches from a split fencepost, unblinking.",
    "Wind moves through the grass like a held breath let go.",
    "Far off, a bell rings once and falls silent.",
)

DEVELOPMENT_POOL: tuple[str, ...] = (
    "Word of your passing has travelled ahead of you.",
    "Fresh tracks cross your path, heading where you came from.",
    "A door you left open has been closed behind you.",
    "Someone has been asking about you by name.",
)

HOOK_POOL: tuple[str, ...] = (
    "Shouts rise beyond the ridge, then steel on steel.",
    "A rider bears down on you, cloak torn, eyes wild.",
    "The ground trembles. Whatever sleeps here is waking.",
    "Torches bloom in the treeline, far too many of them.",
)

POOLS: dict[BeatState, tuple[str, ...]] = {
    BeatState.EXPLORE: SENSORY_POOL,
    BeatState.CONSEQUENCE: DEVELOPMENT_POOL,
    BeatState.ESCALATION: HOOK_POOL,
}


class NarrationStrategy(Protocol):
    """Turns a beat into a line of narration."""

    def narrate(self, beat: BeatState, campaign: Campaign) -> str: ...


def opening_line(campaign: Campaign, opening: str | None = None) -> str:
    """Compose the Start beat: theme line, service opening, world description."""
    parts = [THEME_OPENINGS[campaign.theme]]
    if opening:
        parts.append(opening.strip())
    if campaign.universe and campaign.universe.description:
        parts.append(campaign.universe.description.strip())
    return " ".join(parts)


class FixedNarration:
    """One fixed line per beat."""

    def narrate(self, beat: BeatState, campaign: Campaign) -> str:
        if beat == BeatState.START:
            return opening_line(campaign)
        return FIXED_LINES[beat]


class PooledNarration:
    """A random line from the pool matching the beat."""

    def __init__(self, roller: DiceRoller) -> None:
        self._roller = roller

    def narrate(self, beat: BeatState, campaign: Campaign) -> str:
        if beat == BeatState.START:
            return opening_line(campaign)
        return self._roller.choice(POOLS[beat])


def build_strategy(settings: GameSettings, roller: DiceRoller) -> NarrationStrategy:
    """The narration strategy named by ``settings.narration_strategy``."""
    if settings.narration_strategy == "pooled":
        return PooledNarration(roller)
    return FixedNarration()


@dataclass(frozen=True)
class BeatResult:
    """Outcome of one beat.

    Attributes:
        campaign: Campaign with the beat applied.
        beat: The beat that fired.
        text: The narration appended to the log.
        mode: COMBAT when an Escalation beat triggered a fight.
    """

    campaign: Campaign
    beat: BeatState
    text: str
    mode: EngineMode = EngineMode.NARRATIVE


class NarrativeEngine:
    """Advances a campaign's beat cycle one step per call."""

    def __init__(
        self,
        settings: GameSettings,
        roller: DiceRoller,
        strategy: NarrationStrategy | None = None,
    ) -> None:
        self.settings = settings
        self.roller = roller
        self.strategy = strategy or build_strategy(settings, roller)

    @staticmethod
    def next_beat(campaign: Campaign) -> BeatState:
        """The beat the next call will fire."""
        if not campaign.world.described:
            return BeatState.START
        return NEXT_BEAT[campaign.world.last_beat]

    def tension_gain(self, campaign: Campaign) -> int:
        """Tension added per beat; cruelty (negative alignment) adds more."""
        return self.settings.tension_per_beat + max(0, -campaign.character.alignment)

    def advance(self, campaign: Campaign, *, opening: str | None = None) -> BeatResult:
        """Fire the next beat.

        Args:
            campaign: The campaign to advance.
            opening: Opening-service text, woven into the Start beat only.

        Returns:
            The beat result, with ``mode`` COMBAT when escalation turned
            violent.
        """
        beat = self.next_beat(campaign)
        if beat == BeatState.START:
            text = opening_line(campaign, opening)
        else:
            text = self.strategy.narrate(beat, campaign)

        mode = EngineMode.NARRATIVE
        if beat == BeatState.ESCALATION:
            draw = self.roller.chance()
            if draw < self.settings.combat_trigger_chance:
                mode = EngineMode.COMBAT
            logger.debug("Escalation draw", draw=draw, mode=mode)

        world = campaign.world.model_copy(
            update={
                "tension": campaign.world.tension + self.tension_gain(campaign),
                "described": True,
                "last_beat": beat,
            }
        )
        logger.info("Beat fired", beat=beat, tension=world.tension, mode=mode)
        return BeatResult(
            campaign=campaign.with_world(world).with_log(text),
            beat=beat,
            text=text,
            mode=mode,
        )


__all__ = [
    "NEXT_BEAT",
    "THEME_OPENINGS",
    "FIXED_LINES",
    "SENSORY_POOL",
    "DEVELOPMENT_POOL",
    "HOOK_POOL",
    "NarrationStrategy",
    "FixedNarration",
    "PooledNarration",
    "BeatResult",
    "NarrativeEngine",
    "build_strategy",
    "opening_line",
]
