"""Game engine entry point.

The engine is driven one player action at a time:

    session = await engine.create_campaign("A Bleak Road")
    session = engine.apply_action(session, "attack the bandit")

``apply_action`` classifies the text, routes it to combat, the social
resolver, a free action or the narrative beat engine, ticks the world
timeline and persists the resulting campaign. The session is an explicit
value; the engine keeps no notion of a current campaign.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from mythweaver.core.config import Settings, get_settings
from mythweaver.core.constants import TALE_ENDED_LINE, UNKNOWN_ACTION_LINE
from mythweaver.core.exceptions import ValidationError
from mythweaver.core.logging import bind_context, clear_context, get_logger
from mythweaver.engine.actions import classify_action, resolve_loot, resolve_rest
from mythweaver.engine.combat import resolve_attack
from mythweaver.engine.dice import DiceRoller
from mythweaver.engine.narrative import NarrativeEngine
from mythweaver.engine.social import classify_intent, find_target, resolve_social
from mythweaver.engine.tables import (
    BESTIARY,
    STARTING_ENEMIES,
    STARTING_FACTIONS,
    STARTING_NPCS,
)
from mythweaver.engine.timeline import advance_turn
from mythweaver.models.campaign import Campaign, Universe
from mythweaver.models.entities import Character
from mythweaver.models.enums import ActionKind, EngineMode, Theme
from mythweaver.services.narration import OpeningNarrator, build_narrator, fetch_opening
from mythweaver.storage.repository import CampaignRepository


logger = get_logger(__name__)


@dataclass(frozen=True)
class GameSession:
    """The campaign being played and the mode the last action left it in."""

    campaign: Campaign
    mode: EngineMode = EngineMode.NARRATIVE


class GameEngine:
    """Processes player actions against campaigns held by a repository.

    Args:
        repository: Where campaigns are read from and written to.
        settings: Application settings, defaults to ``get_settings()``.
        roller: Dice source, a fresh unseeded roller by default.
        narrator: Opening-scene service, built from settings by default.
    """

    def __init__(
        self,
        repository: CampaignRepository,
        settings: Settings | None = None,
        roller: DiceRoller | None = None,
        narrator: OpeningNarrator | None = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or get_settings()
        self.roller = roller or DiceRoller()
        self.narrator = narrator or build_narrator(self.settings.narration)
        self.narrative = NarrativeEngine(self.settings.game, self.roller)

    # -------------------------------------------------------------------------
    # Campaign lifecycle
    # -------------------------------------------------------------------------

    async def create_campaign(
        self,
        name: str,
        theme: Theme = Theme.DARK_FANTASY,
        universe: Universe | None = None,
        character: Character | None = None,
    ) -> GameSession:
        """Start a new adventure.

        When a universe is given the opening service is consulted first; its
        text (or the fallback opening) is woven into the Start beat, which
        becomes the campaign's single initial log line.

        Raises:
            ValidationError: If the name is blank.
        """
        if not name.strip():
            raise ValidationError("Campaign name cannot be blank", field_name="name", invalid_value=name)

        campaign = Campaign(
            name=name.strip(),
            theme=theme,
            universe=universe,
            character=character or Character(),
            enemies=STARTING_ENEMIES,
            npcs={npc.name: npc for npc in STARTING_NPCS},
            factions={faction.name: faction for faction in STARTING_FACTIONS},
        )

        opening = None
        if universe is not None:
            opening = await fetch_opening(self.narrator, universe)

        result = self.narrative.advance(campaign, opening=opening)
        campaign = self.repository.create(result.campaign)
        logger.info("Campaign started", campaign_id=campaign.id, theme=theme)
        return GameSession(campaign=campaign)

    def open_session(self, campaign_id: str) -> GameSession | None:
        """Resume a stored campaign, or None if it does not exist."""
        campaign = self.repository.find(campaign_id)
        if campaign is None:
            return None
        mode = EngineMode.COMBAT if campaign.in_combat else EngineMode.NARRATIVE
        return GameSession(campaign=campaign, mode=mode)

    def delete_campaign(self, campaign_id: str) -> bool:
        return self.repository.delete(campaign_id)

    def visible_log(self, session: GameSession) -> tuple[str, ...]:
        """The narration lines shown to the player, newest last."""
        return session.campaign.visible_log(self.settings.game.log_display_limit)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def apply_action(self, session: GameSession, action: str) -> GameSession:
        """Resolve one player action and persist the result.

        Blank input is ignored and returns ``session`` unchanged. Once the
        character has died every action only records that the tale is over.
        """
        text = action.strip()
        if not text:
            return session

        bind_context(campaign_id=session.campaign.id)
        try:
            campaign = session.campaign.with_log(f"> {text}")
            if not campaign.character.alive:
                campaign = campaign.with_log(TALE_ENDED_LINE)
                mode = EngineMode.NARRATIVE
            else:
                campaign, mode = self._route(campaign, text)

            campaign = advance_turn(campaign).touched()
            campaign = self.repository.update(campaign)
            logger.info("Action processed", turn=campaign.world.turn, mode=mode)
            return replace(session, campaign=campaign, mode=mode)
        finally:
            clear_context()

    def _route(self, campaign: Campaign, text: str) -> tuple[Campaign, EngineMode]:
        kind = classify_action(text)
        logger.debug("Action classified", kind=kind)

        if kind == ActionKind.ATTACK:
            campaign = resolve_attack(campaign, self.roller, self.settings.game)
            return campaign, self._mode_of(campaign)
        if kind == ActionKind.REST:
            return resolve_rest(campaign, self.roller), self._mode_of(campaign)
        if kind == ActionKind.LOOT:
            campaign = resolve_loot(campaign, self.roller)
            return campaign, self._mode_of(campaign)
        if kind == ActionKind.SOCIAL:
            intent = classify_intent(text)
            npc = find_target(campaign, text)
            if intent is not None and npc is not None:
                outcome = resolve_social(campaign, intent, npc, self.roller, self.settings.game)
                return outcome.campaign, self._mode_of(outcome.campaign)
            logger.debug("No one to talk to", intent=intent)

        return self._narrate(campaign)

    def _narrate(self, campaign: Campaign) -> tuple[Campaign, EngineMode]:
        """Hand the action to the beat engine; spawn a foe if escalation turns violent."""
        if campaign.in_combat:
            return campaign.with_log(UNKNOWN_ACTION_LINE), EngineMode.COMBAT

        result = self.narrative.advance(campaign)
        campaign = result.campaign
        if result.mode == EngineMode.COMBAT and not campaign.living_enemies:
            foe = self.roller.choice(BESTIARY)
            campaign = campaign.with_added_enemy(foe).with_log(
                f"Something stirs. The {foe.name} blocks your way."
            )
            logger.info("Enemy spawned", enemy=foe.name)
        return campaign, result.mode

    @staticmethod
    def _mode_of(campaign: Campaign) -> EngineMode:
        return EngineMode.COMBAT if campaign.in_combat else EngineMode.NARRATIVE


__all__ = ["GameSession", "GameEngine"]
