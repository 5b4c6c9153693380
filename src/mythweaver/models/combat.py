"""Combat encounter state.

An encounter exists on a campaign only while combat is running; a campaign
whose ``combat`` is None is in the NoCombat state.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from mythweaver.models.enums import TurnOwner


class CombatEncounter(BaseModel):
    """Whose turn it is in a running fight.

    Attributes:
        turn: The side that acts next.
        round: Current round, starting at 1.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    turn: TurnOwner = TurnOwner.PLAYER
    round: Annotated[int, Field(ge=1)] = 1


__all__ = ["CombatEncounter"]
