"""Tests for structured logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
import structlog

from mythweaver.core.config import Settings
from mythweaver.core.logging import (
    add_app_context,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
)


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo global logging configuration after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    clear_context()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """structlog processor chains."""

    def test_json_renderer_in_production(self) -> None:
        configure_logging(level="WARNING", json_format=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert add_app_context in processors

    def test_console_renderer_in_development(self) -> None:
        configure_logging(level="DEBUG")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_quiets_http_libraries(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYTHWEAVER_DEBUG", "false")

        configure_from_settings(Settings())

        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)


class TestContext:
    """Context variables bound to log entries."""

    def test_app_context(self) -> None:
        assert add_app_context(None, "info", {"event": "x"})["app"] == "mythweaver"

    def test_bind_and_clear(self) -> None:
        bind_context(campaign_id="c-1")
        assert structlog.contextvars.get_contextvars() == {"campaign_id": "c-1"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
