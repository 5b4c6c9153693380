"""Tests for the narrative beat engine."""

from __future__ import annotations

import pytest

from mythweaver.core.config import GameSettings
from mythweaver.engine.narrative import (
    FIXED_LINES,
    SENSORY_POOL,
    THEME_OPENINGS,
    FixedNarration,
    NarrativeEngine,
    PooledNarration,
    build_strategy,
)
from mythweaver.models import BeatState, Campaign, Character, EngineMode, Theme, Universe


@pytest.fixture
def fresh_campaign() -> Campaign:
    return Campaign(name="The Ashfall Road")


class TestBeatCycle:
    """Start fires once, then Explore -> Consequence -> Escalation repeats."""

    def test_five_beats(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        roller.chances.extend([0.5])
        engine = NarrativeEngine(game_settings, roller)

        beats = []
        campaign = fresh_campaign
        for _ in range(5):
            result = engine.advance(campaign)
            beats.append(result.beat)
            campaign = result.campaign

        assert beats == [
            BeatState.START,
            BeatState.EXPLORE,
            BeatState.CONSEQUENCE,
            BeatState.ESCALATION,
            BeatState.EXPLORE,
        ]
        assert campaign.world.tension == 25
        assert len(campaign.log) == 5

    def test_start_fires_once(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        engine = NarrativeEngine(game_settings, roller)

        first = engine.advance(fresh_campaign)

        assert first.campaign.world.described is True
        assert engine.next_beat(first.campaign) == BeatState.EXPLORE

    def test_fixed_lines(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        engine = NarrativeEngine(game_settings, roller)
        campaign = engine.advance(fresh_campaign).campaign

        result = engine.advance(campaign)

        assert result.text == FIXED_LINES[BeatState.EXPLORE]
        assert "moment lingers" in result.text


class TestOpening:
    """The Start beat text."""

    def test_theme_line(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        result = NarrativeEngine(game_settings, roller).advance(fresh_campaign)

        assert result.text == THEME_OPENINGS[Theme.DARK_FANTASY]

    def test_universe_and_opening_woven_in(self, roller, game_settings: GameSettings) -> None:
        campaign = Campaign(
            name="Drowned",
            theme=Theme.HORROR,
            universe=Universe(name="Vael", description="A drowned kingdom under grey skies."),
        )

        result = NarrativeEngine(game_settings, roller).advance(campaign, opening="The tide is wrong.")

        assert result.text == (
            f"{THEME_OPENINGS[Theme.HORROR]} The tide is wrong. A drowned kingdom under grey skies."
        )


class TestEscalation:
    """Escalation may turn the session toward combat."""

    def _to_escalation(self, engine: NarrativeEngine, campaign: Campaign) -> Campaign:
        for _ in range(3):
            campaign = engine.advance(campaign).campaign
        return campaign

    def test_low_draw_triggers_combat(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        roller.chances.extend([0.1])
        engine = NarrativeEngine(game_settings, roller)

        result = engine.advance(self._to_escalation(engine, fresh_campaign))

        assert result.beat == BeatState.ESCALATION
        assert result.mode == EngineMode.COMBAT

    def test_draw_at_threshold_stays_narrative(
        self,
        fresh_campaign: Campaign,
        roller,
        game_settings: GameSettings,
    ) -> None:
        roller.chances.extend([0.30])
        engine = NarrativeEngine(game_settings, roller)

        result = engine.advance(self._to_escalation(engine, fresh_campaign))

        assert result.mode == EngineMode.NARRATIVE

    def test_other_beats_never_draw(self, fresh_campaign: Campaign, roller, game_settings: GameSettings) -> None:
        roller.chances.extend([0.0])
        engine = NarrativeEngine(game_settings, roller)

        campaign = self._to_escalation(engine, fresh_campaign)

        assert list(roller.chances) == [0.0]
        assert campaign.world.last_beat == BeatState.CONSEQUENCE


class TestTension:
    """Tension rises every beat; cruelty raises it faster."""

    def test_negative_alignment_adds_tension(self, roller, game_settings: GameSettings) -> None:
        campaign = Campaign(name="Road", character=Character(alignment=-2))

        result = NarrativeEngine(game_settings, roller).advance(campaign)

        assert result.campaign.world.tension == 7


class TestStrategies:
    """Narration strategies share one interface."""

    def test_build_strategy(self, roller) -> None:
        assert isinstance(build_strategy(GameSettings(), roller), FixedNarration)
        assert isinstance(build_strategy(GameSettings(narration_strategy="pooled"), roller), PooledNarration)

    def test_pooled_uses_pool(self, fresh_campaign: Campaign, roller) -> None:
        roller.picks.extend([2])

        text = PooledNarration(roller).narrate(BeatState.EXPLORE, fresh_campaign)

        assert text == SENSORY_POOL[2]

    def test_pooled_keeps_cycle(self, fresh_campaign: Campaign, roller) -> None:
        settings = GameSettings(narration_strategy="pooled")
        engine = NarrativeEngine(settings, roller)

        campaign = fresh_campaign
        beats = []
        for _ in range(4):
            result = engine.advance(campaign)
            beats.append(result.beat)
            campaign = result.campaign

        assert beats == [BeatState.START, BeatState.EXPLORE, BeatState.CONSEQUENCE, BeatState.ESCALATION]
