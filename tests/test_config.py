from __future__ import annotations

import os
from pathlib import Path

import pytest
from config import ConfigurationSet

from league_bot.config import create_config, load_bot_config
from league_bot.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove league bot env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("LEAGUE_BOT__") or key == "DISCORD_BOT_TOKEN":
            monkeypatch.delenv(key)


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path="/nonexistent/league_bot.yaml")
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["store.path"] == "./leagueData.json"
    assert cfg["commands.prefix"] == "!"
    assert cfg["audit.channel"] == "admin-logs"
    assert cfg["ingest.port"] == 3000


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "league_bot.yaml"
    yaml_file.write_text("store:\n  path: /srv/league.json\naudit:\n  channel: mod-log\n")
    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["store.path"] == "/srv/league.json"
    assert cfg["audit.channel"] == "mod-log"
    # Defaults still apply for unset keys
    assert cfg["commands.prefix"] == "!"


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "league_bot.yaml"
    yaml_file.write_text("ingest:\n  port: 8080\n")
    monkeypatch.setenv("LEAGUE_BOT__INGEST__PORT", "9090")

    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["ingest.port"] == "9090"  # env vars are strings


class TestLoadBotConfig:
    def test_missing_token_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="DISCORD_BOT_TOKEN"):
            load_bot_config(create_config(yaml_path="/nonexistent.yaml"))

    def test_token_optional_when_not_required(self) -> None:
        config = load_bot_config(create_config(yaml_path="/nonexistent.yaml"), require_token=False)
        assert config.bot_token == ""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "test-token")
        config = load_bot_config(create_config(yaml_path="/nonexistent.yaml"))
        assert config.bot_token == "test-token"
        assert config.data_path == Path("./leagueData.json")
        assert config.allowed_roles == frozenset({"Co-Owner", "Snow"})
        assert config.ingest_port == 3000

    def test_roles_from_env_are_comma_separated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEAGUE_BOT__COMMANDS__ALLOWED_ROLES", "Commissioner, Stats Crew,")
        config = load_bot_config(create_config(yaml_path="/nonexistent.yaml"), require_token=False)
        assert config.allowed_roles == frozenset({"Commissioner", "Stats Crew"})

    def test_roles_from_yaml_list(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "league_bot.yaml"
        yaml_file.write_text("commands:\n  allowed_roles:\n    - Admin\n    - Scorer\n")
        config = load_bot_config(create_config(yaml_path=str(yaml_file)), require_token=False)
        assert config.allowed_roles == frozenset({"Admin", "Scorer"})

    def test_port_from_env_is_cast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEAGUE_BOT__INGEST__PORT", "9090")
        config = load_bot_config(create_config(yaml_path="/nonexistent.yaml"), require_token=False)
        assert config.ingest_port == 9090

    def test_bad_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEAGUE_BOT__INGEST__PORT", "http")
        with pytest.raises(ConfigurationError, match="ingest.port"):
            load_bot_config(create_config(yaml_path="/nonexistent.yaml"), require_token=False)
