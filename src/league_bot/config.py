from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from league_bot.exceptions import ConfigurationError

_DEFAULTS: dict[str, object] = {
    "store": {
        "path": "./leagueData.json",
    },
    "commands": {
        "prefix": "!",
        "allowed_roles": ["Co-Owner", "Snow"],
    },
    "audit": {
        "channel": "admin-logs",
    },
    "ingest": {
        "host": "0.0.0.0",
        "port": 3000,
    },
}


@dataclass(frozen=True)
class BotConfig:
    """Runtime configuration for the bot and the ingestion server.

    Attributes:
        bot_token: Discord bot token; empty when running without Discord.
        data_path: Snapshot file location.
        command_prefix: Character that marks a chat line as a command.
        allowed_roles: Role names permitted to run privileged verbs.
        audit_channel: Name of the channel that receives audit notices.
        ingest_host: Bind address for the ingestion server.
        ingest_port: Port for the ingestion server.
    """

    bot_token: str
    data_path: Path
    command_prefix: str = "!"
    allowed_roles: frozenset[str] = frozenset({"Co-Owner", "Snow"})
    audit_channel: str = "admin-logs"
    ingest_host: str = "0.0.0.0"
    ingest_port: int = 3000


def create_config(
    yaml_path: str = "league_bot.yaml",
    env_prefix: str = "LEAGUE_BOT",
    defaults: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    return ConfigurationSet(
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    )


def _parse_roles(raw: object) -> frozenset[str]:
    # Env vars arrive as one comma-separated string, YAML as a list.
    if isinstance(raw, str):
        return frozenset(role.strip() for role in raw.split(",") if role.strip())
    return frozenset(str(role) for role in cast("list[object]", raw))


def load_bot_config(cfg: ConfigurationSet | None = None, *, require_token: bool = True) -> BotConfig:
    """Build a BotConfig from layered config plus ``DISCORD_BOT_TOKEN``.

    Raises:
        ConfigurationError: If the token is required but missing, or a value is invalid.
    """
    if cfg is None:
        cfg = create_config()

    bot_token = os.environ.get("DISCORD_BOT_TOKEN", "")
    if require_token and not bot_token:
        raise ConfigurationError("DISCORD_BOT_TOKEN environment variable is required")

    try:
        ingest_port = int(str(cfg["ingest.port"]))
    except ValueError as e:
        raise ConfigurationError(f"ingest.port must be an integer: {e}") from e

    prefix = str(cfg["commands.prefix"])
    if not prefix:
        raise ConfigurationError("commands.prefix must not be empty")

    return BotConfig(
        bot_token=bot_token,
        data_path=Path(str(cfg["store.path"])).expanduser(),
        command_prefix=prefix,
        allowed_roles=_parse_roles(cfg["commands.allowed_roles"]),
        audit_channel=str(cfg["audit.channel"]),
        ingest_host=str(cfg["ingest.host"]),
        ingest_port=ingest_port,
    )
