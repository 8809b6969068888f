"""Test fixtures for Discord bot tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from league_bot.config import BotConfig


@pytest.fixture
def bot_config() -> BotConfig:
    """Create a test bot configuration."""
    return BotConfig(
        bot_token="test-token-123",
        data_path=Path("/tmp/unused.json"),
        command_prefix="!",
        allowed_roles=frozenset({"Co-Owner"}),
        audit_channel="admin-logs",
    )
