"""Integration tests for a full play session.

Creates a campaign through the engine, fights the opening bandit to the
end, and checks what a player would see in the log.
"""

from __future__ import annotations

import pytest

from mythweaver.core.constants import PLAYER_DEATH_LINE, TALE_ENDED_LINE
from mythweaver.engine.game import GameEngine
from mythweaver.engine.narrative import THEME_OPENINGS
from mythweaver.models import Character, EngineMode, Theme, Universe


pytestmark = pytest.mark.integration


class TestNewAdventure:
    """From creation through the first fight."""

    @pytest.mark.asyncio
    async def test_create_attack_and_win(self, engine: GameEngine, roller) -> None:
        universe = Universe(name="Vael", description="A drowned kingdom under grey skies.")

        session = await engine.create_campaign("Drowned Crowns", Theme.DARK_FANTASY, universe)

        assert len(session.campaign.log) == 1
        assert THEME_OPENINGS[Theme.DARK_FANTASY] in session.campaign.log[0]
        assert "A drowned kingdom under grey skies." in session.campaign.log[0]
        assert session.campaign.combat is None

        # Initiative 15+1 vs 5+1, hit for 3+2, bandit misses.
        roller.queue(15, 5, 15, 3, 2)
        session = engine.apply_action(session, "attack")

        assert session.campaign.combat is not None
        assert session.mode == EngineMode.COMBAT
        assert any(line.startswith("Initiative:") for line in session.campaign.rules_log)
        assert session.campaign.enemies[0].hp == 4

        # Hit for 4+2, the bandit falls.
        roller.queue(15, 4)
        session = engine.apply_action(session, "attack")

        assert session.campaign.enemies[0].hp == 0
        assert session.campaign.log[-1] == "You strike the Bandit for 6. The Bandit falls."
        assert session.campaign.combat is None
        assert session.mode == EngineMode.NARRATIVE

        session = engine.apply_action(session, "attack")

        assert session.campaign.log[-1] == "There is nothing to attack."
        assert session.campaign.world.turn == 3
        assert len(session.campaign.world.events) == 1

    @pytest.mark.asyncio
    async def test_opening_bandit_survives_first_blow(self, engine: GameEngine, roller) -> None:
        session = await engine.create_campaign("The Ashfall Road")

        # Initiative 20+1 vs 1+1, the best possible hit (6+2), bandit misses.
        roller.queue(20, 1, 20, 6, 1)
        session = engine.apply_action(session, "attack")

        assert session.campaign.enemies[0].hp == 1
        assert session.campaign.combat is not None
        assert session.mode == EngineMode.COMBAT

    @pytest.mark.asyncio
    async def test_log_is_append_only(self, engine: GameEngine, roller) -> None:
        session = await engine.create_campaign("The Ashfall Road")
        history = [session.campaign.log]

        for action in ("I walk north", "I ask Old Maren about the road", "rest", "search the ditch"):
            session = engine.apply_action(session, action)
            history.append(session.campaign.log)

        for before, after in zip(history, history[1:]):
            assert after[: len(before)] == before
            assert len(after) > len(before)


class TestFallingInBattle:
    """A frail hero against the bandit."""

    @pytest.mark.asyncio
    async def test_death_ends_the_tale(self, engine: GameEngine, roller) -> None:
        frail = Character(name="Ilsa", hp=1, max_hp=10)
        session = await engine.create_campaign("Short Tale", character=frail)

        # Bandit wins initiative, then every swing lands and every player blow misses.
        roller.queue(1, 20)
        for _ in range(3):
            roller.queue(20, 3, 1)
            session = engine.apply_action(session, "attack")
            if not session.campaign.character.alive:
                break

        assert session.campaign.character.alive is False
        assert session.campaign.character.death_save_failures == 3
        assert session.campaign.combat is None
        assert PLAYER_DEATH_LINE in session.campaign.log[-1]

        session = engine.apply_action(session, "I get up")

        assert session.campaign.log[-2:] == ("> I get up", TALE_ENDED_LINE)
