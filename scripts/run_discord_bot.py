#!/usr/bin/env python
"""Entry point script for running the Discord bot with the ingestion server.

Equivalent to ``league-bot run``.

Usage:
    DISCORD_BOT_TOKEN=xxx uv run python scripts/run_discord_bot.py [--verbose] [--config league_bot.yaml]

Environment variables:
    DISCORD_BOT_TOKEN: Required. The Discord bot token.
    LEAGUE_BOT__STORE__PATH: Optional. Snapshot file (default ./leagueData.json).
    LEAGUE_BOT__COMMANDS__ALLOWED_ROLES: Optional. Comma-separated role names allowed to update stats.
    LEAGUE_BOT__INGEST__PORT: Optional. Ingestion server port (default 3000).
"""

import sys

from league_bot.cli.app import app

if __name__ == "__main__":
    app([*sys.argv[1:], "run"], prog_name="run_discord_bot")
