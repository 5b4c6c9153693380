"""Dice rolling mechanics.

Every random number the engine uses comes from a DiceRoller: die rolls go
through the d20 library, and the two non-die draws (probability checks and
pool picks) sit beside them so a single object can be seeded or replaced in
tests.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

import d20

from mythweaver.core.constants import D20
from mythweaver.core.exceptions import DiceRollError
from mythweaver.core.logging import get_logger
from mythweaver.models.components import calculate_modifier


logger = get_logger(__name__)

T = TypeVar("T")


class RollType(StrEnum):
    """Types of d20 rolls."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a d20 check against a DC.

    Attributes:
        roll: The kept d20 result.
        modifier: Total modifier applied.
        total: roll + modifier.
        dc: Difficulty class.
        success: total >= dc (ties succeed).
        roll_type: Normal, advantage or disadvantage.
    """

    roll: int
    modifier: int
    total: int
    dc: int
    success: bool
    roll_type: RollType = RollType.NORMAL

    def describe(self) -> str:
        """Roll detail for the rules log, e.g. ``d20 14 +2 = 16 vs DC 12: success``."""
        sign = "+" if self.modifier >= 0 else "-"
        outcome = "success" if self.success else "failure"
        return (
            f"d20 {self.roll} {sign}{abs(self.modifier)} = {self.total} "
            f"vs DC {self.dc}: {outcome}"
        )


def ability_modifier(score: int) -> int:
    """floor((score - 10) / 2)."""
    return calculate_modifier(score)


def select_roll(first: int, second: int, roll_type: RollType) -> int:
    """Pick the kept die from a pair: max for advantage, min for disadvantage.

    A NORMAL roll keeps the first die.
    """
    if roll_type == RollType.ADVANTAGE:
        return max(first, second)
    if roll_type == RollType.DISADVANTAGE:
        return min(first, second)
    return first


class DiceRoller:
    """Source of all randomness in the engine.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.check(modifier=2, dc=12)
        >>> result.total == result.roll + 2
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll_die(self, sides: int) -> int:
        """Roll one die, uniform in [1, sides].

        Raises:
            DiceRollError: If ``sides`` is less than 1.
        """
        if sides < 1:
            raise DiceRollError("A die needs at least one side", sides=sides)
        return d20.roll(f"1d{sides}").total

    def roll_d20(self, roll_type: RollType = RollType.NORMAL) -> int:
        """Roll a d20, rolling a second die for advantage or disadvantage."""
        first = self.roll_die(D20)
        if roll_type == RollType.NORMAL:
            return first
        second = self.roll_die(D20)
        kept = select_roll(first, second, roll_type)
        logger.debug("Rolled two d20", roll_type=roll_type, dice=[first, second], kept=kept)
        return kept

    def check(
        self,
        modifier: int,
        dc: int,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> CheckResult:
        """Roll d20 + modifier against a DC. Ties succeed."""
        roll = self.roll_d20(roll_type)
        total = roll + modifier
        result = CheckResult(
            roll=roll,
            modifier=modifier,
            total=total,
            dc=dc,
            success=total >= dc,
            roll_type=roll_type,
        )
        logger.debug(
            "Check rolled",
            roll=roll,
            modifier=modifier,
            total=total,
            dc=dc,
            success=result.success,
        )
        return result

    def chance(self) -> float:
        """Uniform draw in [0, 1)."""
        return random.random()

    def choice(self, options: Sequence[T]) -> T:
        """Pick one option uniformly.

        Raises:
            DiceRollError: If there is nothing to pick from.
        """
        if not options:
            raise DiceRollError("Cannot choose from an empty pool")
        return random.choice(options)


__all__ = [
    "RollType",
    "CheckResult",
    "DiceRoller",
    "ability_modifier",
    "select_roll",
]
