"""World timeline: the turn counter and the events scheduled on it.

The counter ticks once per processed player action. After every tick each
scheduled event is evaluated as a pure function of (turn, character, world);
the ones that fire append to the world's event or rumor log, which is never
pruned.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from mythweaver.core.constants import RUMOR_EXHAUSTION_THRESHOLD, WORLD_EVENT_INTERVAL
from mythweaver.core.logging import get_logger
from mythweaver.models.campaign import Campaign, WorldState
from mythweaver.models.entities import Character


logger = get_logger(__name__)


@dataclass(frozen=True)
class ScheduledEvent:
    """An event that fires when its condition holds after a tick.

    Attributes:
        name: Identifier for logging.
        condition: Pure predicate over (turn, character, world).
        text: Line appended when the event fires.
        channel: Which world log receives the line.
    """

    name: str
    condition: Callable[[int, Character, WorldState], bool]
    text: str
    channel: Literal["events", "rumors"] = "events"


DEFAULT_SCHEDULE: tuple[ScheduledEvent, ...] = (
    ScheduledEvent(
        name="world_stirs",
        condition=lambda turn, character, world: turn % WORLD_EVENT_INTERVAL == 0,
        text="Somewhere beyond sight, the world shifts. A distant fire, a closed road.",
    ),
    ScheduledEvent(
        name="weary_whispers",
        condition=lambda turn, character, world: character.exhaustion >= RUMOR_EXHAUSTION_THRESHOLD,
        text="Travellers whisper of a weary stranger on the road, easy prey.",
        channel="rumors",
    ),
)


def advance_turn(
    campaign: Campaign,
    schedule: tuple[ScheduledEvent, ...] = DEFAULT_SCHEDULE,
) -> Campaign:
    """Tick the turn counter and append whatever the schedule fires."""
    world = campaign.world
    turn = world.turn + 1
    events = world.events
    rumors = world.rumors

    for event in schedule:
        if not event.condition(turn, campaign.character, world):
            continue
        logger.debug("World event fired", event_name=event.name, turn=turn)
        if event.channel == "rumors":
            rumors = rumors + (event.text,)
        else:
            events = events + (event.text,)

    return campaign.with_world(
        world.model_copy(update={"turn": turn, "events": events, "rumors": rumors})
    )


__all__ = [
    "ScheduledEvent",
    "DEFAULT_SCHEDULE",
    "advance_turn",
]
