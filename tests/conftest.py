"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Mythweaver test suite.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, TypeVar

import pytest

from mythweaver.core.config import GameSettings, Settings
from mythweaver.core.exceptions import DiceRollError
from mythweaver.engine.dice import DiceRoller
from mythweaver.engine.game import GameEngine
from mythweaver.models import (
    NPC,
    Campaign,
    Character,
    Enemy,
    Faction,
    StatsComponent,
)
from mythweaver.services.narration import PlaceholderOpeningNarrator
from mythweaver.storage import CampaignRepository, InMemoryCampaignStore


if TYPE_CHECKING:
    from collections.abc import Generator


T = TypeVar("T")


# =============================================================================
# Dice
# =============================================================================


class ScriptedRoller(DiceRoller):
    """DiceRoller that plays back queued results.

    Die rolls come from ``rolls`` (clamped to the die size), probability
    draws from ``chances`` and pool picks from ``picks`` (indices). When a
    queue runs dry the defaults are used: ``default_roll``, 0.99 and index 0.
    """

    def __init__(
        self,
        rolls: Iterable[int] = (),
        *,
        chances: Iterable[float] = (),
        picks: Iterable[int] = (),
        default_roll: int = 10,
    ) -> None:
        super().__init__()
        self.rolls: deque[int] = deque(rolls)
        self.chances: deque[float] = deque(chances)
        self.picks: deque[int] = deque(picks)
        self.default_roll = default_roll
        self.history: list[tuple[int, int]] = []

    def queue(self, *rolls: int) -> ScriptedRoller:
        self.rolls.extend(rolls)
        return self

    def roll_die(self, sides: int) -> int:
        if sides < 1:
            raise DiceRollError("A die needs at least one side", sides=sides)
        value = self.rolls.popleft() if self.rolls else self.default_roll
        value = max(1, min(value, sides))
        self.history.append((sides, value))
        return value

    def chance(self) -> float:
        return self.chances.popleft() if self.chances else 0.99

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise DiceRollError("Cannot choose from an empty pool")
        index = self.picks.popleft() if self.picks else 0
        return options[index]


@pytest.fixture
def roller() -> ScriptedRoller:
    """Scripted dice: queue results with ``roller.queue(...)``."""
    return ScriptedRoller()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from mythweaver.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def game_settings() -> GameSettings:
    """Default rules settings."""
    return GameSettings()


@pytest.fixture
def settings() -> Settings:
    """Default application settings with the placeholder narrator."""
    return Settings()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_character() -> Character:
    """A fresh adventurer: STR 14 (+2), DEX 12 (+1), 12 hp."""
    return Character(
        name="Ilsa",
        stats=StatsComponent(strength=14, dexterity=12, constitution=12),
        hp=12,
        max_hp=12,
        skills={"persuasion": 3, "intimidation": 2},
    )


@pytest.fixture
def bandit() -> Enemy:
    return Enemy(name="Bandit", hp=8, max_hp=8, attack_bonus=2, damage_die=6, initiative_bonus=1)


@pytest.fixture
def maren() -> NPC:
    return NPC(
        name="Old Maren",
        disposition=2,
        public_info="The eastern road is watched.",
        secret="The watchers answer to the Ash Court.",
    )


@pytest.fixture
def sample_campaign(
    sample_character: Character,
    bandit: Enemy,
    maren: NPC,
) -> Campaign:
    """A campaign past its opening, with one bandit, one NPC, two factions."""
    campaign = Campaign(
        name="The Ashfall Road",
        character=sample_character,
        enemies=(bandit,),
        npcs={maren.name: maren},
        factions={
            "Ash Court": Faction(name="Ash Court", influence=3),
            "Road Wardens": Faction(name="Road Wardens", influence=1),
        },
    )
    return campaign.with_world(campaign.world.model_copy(update={"described": True}))


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryCampaignStore:
    return InMemoryCampaignStore()


@pytest.fixture
def repository(store: InMemoryCampaignStore) -> CampaignRepository:
    return CampaignRepository(store)


@pytest.fixture
def engine(
    repository: CampaignRepository,
    settings: Settings,
    roller: ScriptedRoller,
) -> GameEngine:
    """GameEngine wired to an in-memory store and scripted dice."""
    return GameEngine(
        repository,
        settings=settings,
        roller=roller,
        narrator=PlaceholderOpeningNarrator(),
    )
