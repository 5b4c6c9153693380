"""Exception hierarchy for the Mythweaver session engine.

Everything raised by this package derives from MythweaverError, so callers
can catch one type at the engine boundary. Few of these reach a player: the
engine recovers from malformed saves and narration outages locally and only
logs them.

    MythweaverError
    ├── GameEngineError
    │   ├── InvalidGameStateError
    │   ├── CombatError
    │   └── DiceRollError
    ├── StorageError
    │   └── MalformedStateError
    ├── NarrationServiceError
    ├── ConfigurationError
    └── ValidationError

Example:
    >>> from mythweaver.core.exceptions import DiceRollError
    >>> raise DiceRollError("A die needs at least one side", sides=0)
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Merge keyword context into ``details``, skipping unset (None) values."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class MythweaverError(Exception):
    """Base exception for all Mythweaver errors.

    Attributes:
        message: Human-readable error description.
        details: Extra context, rendered after the message as ``[k=v, ...]``.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{rendered}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Engine
# =============================================================================


class GameEngineError(MythweaverError):
    """Base exception for rules and state machine errors."""


class InvalidGameStateError(GameEngineError):
    """A transition was requested from a state that cannot take it.

    Example: a player half-turn while the enemy holds the turn.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(
                details,
                current_state=current_state or None,
                expected_states=expected_states or None,
            ),
        )


class CombatError(GameEngineError):
    """Combat could not be resolved for a combatant."""

    def __init__(
        self,
        message: str,
        *,
        combatant: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, combatant=combatant or None, round_number=round_number),
        )


class DiceRollError(GameEngineError):
    """A die cannot be rolled, e.g. fewer than one side, or an empty pool."""

    def __init__(
        self,
        message: str,
        *,
        sides: int | None = None,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, sides=sides, expression=expression or None),
        )


# =============================================================================
# Storage
# =============================================================================


class StorageError(MythweaverError):
    """Campaigns could not be written."""


class MalformedStateError(StorageError):
    """Persisted campaign data could not be parsed.

    Stores recover from this by loading an empty campaign list.

    Args:
        source: Where the bad data came from, such as a row id.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, source=source or None))


# =============================================================================
# Narration service
# =============================================================================


class NarrationServiceError(MythweaverError):
    """The opening-narration service failed or answered with a bad body."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, url=url or None, status_code=status_code),
        )


# =============================================================================
# Configuration & Validation
# =============================================================================


class ConfigurationError(MythweaverError):
    """Settings are missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, config_key=config_key or None))


class ValidationError(MythweaverError):
    """A value failed a domain check outside pydantic's own validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name or None, invalid_value=invalid_value),
        )


__all__ = [
    "MythweaverError",
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    "StorageError",
    "MalformedStateError",
    "NarrationServiceError",
    "ConfigurationError",
    "ValidationError",
]
