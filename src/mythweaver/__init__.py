"""Mythweaver - solo tabletop-RPG session engine.

Free-text player actions go in; dice checks, a combat turn machine, a
narrative beat cycle and persistent campaign state come out.

ARCHITECTURE:
- Campaigns are immutable values; every action yields a new one
- All randomness flows through one DiceRoller (d20 library)
- Persistence is an injected store behind a CampaignRepository

Example:
    >>> from mythweaver import GameEngine, CampaignRepository, InMemoryCampaignStore
    >>>
    >>> engine = GameEngine(CampaignRepository(InMemoryCampaignStore()))
    >>> session = await engine.create_campaign("A Bleak Road")
    >>> session = engine.apply_action(session, "I ask Old Maren about the road")
    >>> print(session.campaign.log[-1])

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 campaign schemas.
    engine: Dice, rules, combat, social checks, narrative and timeline.
    storage: Campaign stores and the repository.
    services: Opening-narration service client.
"""

from __future__ import annotations

# Core
from mythweaver.core.config import Settings, get_settings
from mythweaver.core.exceptions import MythweaverError
from mythweaver.core.logging import configure_logging, get_logger

# Models
from mythweaver.models import (
    NPC,
    Campaign,
    Character,
    Enemy,
    Faction,
    Theme,
    Universe,
    WorldState,
)

# Engine
from mythweaver.engine.dice import DiceRoller
from mythweaver.engine.game import GameEngine, GameSession

# Storage
from mythweaver.storage import (
    CampaignRepository,
    InMemoryCampaignStore,
    SqliteCampaignStore,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "MythweaverError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Campaign",
    "Character",
    "Enemy",
    "NPC",
    "Faction",
    "Theme",
    "Universe",
    "WorldState",
    # Engine
    "DiceRoller",
    "GameEngine",
    "GameSession",
    # Storage
    "CampaignRepository",
    "InMemoryCampaignStore",
    "SqliteCampaignStore",
]
