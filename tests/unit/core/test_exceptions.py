"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from mythweaver.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    MalformedStateError,
    MythweaverError,
    NarrationServiceError,
    StorageError,
    ValidationError,
)


class TestMythweaverError:
    """Tests for the base MythweaverError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = MythweaverError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = MythweaverError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        repr_str = repr(MythweaverError("Test", details={"x": 1}))
        assert "MythweaverError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestGameEngineExceptions:
    """Tests for game engine exceptions."""

    def test_dice_roll_error_with_sides(self) -> None:
        exc = DiceRollError("No sides", sides=0)
        assert exc.details["sides"] == 0
        assert isinstance(exc, GameEngineError)

    def test_combat_error_context(self) -> None:
        exc = CombatError("Bad target", combatant="Bandit", round_number=3)
        assert exc.details == {"combatant": "Bandit", "round_number": 3}

    def test_invalid_state_lists_expected_states(self) -> None:
        exc = InvalidGameStateError(
            "Not the player's turn",
            current_state="enemy",
            expected_states=["player"],
        )
        assert exc.details["current_state"] == "enemy"
        assert exc.details["expected_states"] == ["player"]

    @pytest.mark.parametrize("exc_type", [DiceRollError, CombatError, InvalidGameStateError])
    def test_inheritance(self, exc_type: type[GameEngineError]) -> None:
        exc = exc_type("Error")
        assert isinstance(exc, GameEngineError)
        assert isinstance(exc, MythweaverError)


class TestStorageAndServiceExceptions:
    """Tests for storage and narration service exceptions."""

    def test_malformed_state_is_storage_error(self) -> None:
        exc = MalformedStateError("Unreadable", source="row-1")
        assert isinstance(exc, StorageError)
        assert exc.details["source"] == "row-1"

    def test_narration_error_status_code(self) -> None:
        exc = NarrationServiceError("Down", url="http://n.test", status_code=503)
        assert exc.details == {"url": "http://n.test", "status_code": 503}


class TestConfigurationExceptions:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error_key(self) -> None:
        exc = ConfigurationError("Bad URL", config_key="opening_url")
        assert exc.details["config_key"] == "opening_url"

    def test_validation_error_field(self) -> None:
        exc = ValidationError("Too long", field_name="name", invalid_value="x" * 3)
        assert exc.details["field_name"] == "name"
        assert exc.details["invalid_value"] == "xxx"
