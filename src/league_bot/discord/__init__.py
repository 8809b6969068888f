"""Discord frontend for league commands.

Public API:
    create_bot(config, dispatcher) -> LeagueBot
    run_bot(config, dispatcher) -> None (async)
    to_discord_embed(embed) -> discord.Embed
"""

from league_bot.discord.bot import LeagueBot, create_bot, run_bot, to_discord_embed

__all__ = [
    "LeagueBot",
    "create_bot",
    "run_bot",
    "to_discord_embed",
]
