from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeAlias

from league_bot.auth import is_authorized
from league_bot.commands.parser import parse_command, parse_stat_pairs
from league_bot.commands.replies import AuditNotice, CommandResult, Embed, EmbedField, Reply
from league_bot.domain.errors import NotFoundError, PermissionDeniedError
from league_bot.domain.league import BATTING_FIELDS, PITCHING_FIELDS, TEAM_FIELDS
from league_bot.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

    from league_bot.domain.league import PlayerRecord, TeamRecord
    from league_bot.state.league_state import LeagueState

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS = 5


@dataclass(frozen=True)
class Caller:
    display_name: str
    roles: frozenset[str] = field(default_factory=frozenset)


_Handler: TypeAlias = Callable[[tuple[str, ...], Caller], CommandResult]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _display(value: object) -> str:
    text = str(value).strip()
    return text if text else "N/A"


class CommandDispatcher:
    """Route prefixed chat lines to read queries and the privileged update verb.

    Each call is independent: nothing read from the league state is kept
    between calls.
    """

    def __init__(
        self,
        state: LeagueState,
        allowed_roles: Iterable[str],
        prefix: str = "!",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._state = state
        self._allowed_roles = frozenset(allowed_roles)
        self._prefix = prefix
        self._clock = clock
        self._handlers: dict[str, _Handler] = {
            "ping": self._ping,
            "help": self._help,
            "stats": self._stats,
            "team": self._team,
            "standings": self._standings,
            "transactions": self._transactions,
            "updatestats": self._update_stats,
        }

    def dispatch(self, line: str, caller: Caller) -> CommandResult | None:
        """Handle one chat line. Returns None if the line is not a command."""
        command = parse_command(line, self._prefix)
        if command is None:
            return None

        handler = self._handlers.get(command.verb)
        if handler is None:
            return CommandResult(Reply.plain(f"Unknown command: {command.verb}. Try {self._prefix}help."))
        logger.debug("Dispatching '%s' for %s", command.verb, caller.display_name)
        return handler(command.args, caller)

    # -- Read verbs ----------------------------------------------------------

    def _ping(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        return CommandResult(Reply.plain("Bot is online!"))

    def _help(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        p = self._prefix
        lines = [
            f"{p}ping",
            f"{p}stats <player>",
            f"{p}team <team>",
            f"{p}standings",
            f"{p}transactions",
            f"{p}updatestats <player> key=value ...",
        ]
        return CommandResult(Reply.plain("Commands: " + ", ".join(lines)))

    def _stats(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        name = " ".join(args)
        match self._lookup_player(name):
            case Err(error):
                return CommandResult(Reply.plain(error.message))
            case Ok(record):
                fields = [
                    EmbedField(name=label, value=_display(record[key]))
                    for key, label in (*BATTING_FIELDS, *PITCHING_FIELDS)
                    if key in record
                ]
                return CommandResult(Reply.rich(Embed(title=f"Stats for {name}", color="blue", fields=tuple(fields))))

    def _team(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        name = " ".join(args)
        match self._lookup_team(name):
            case Err(error):
                return CommandResult(Reply.plain(error.message))
            case Ok(record):
                description = "\n".join(f"{key}: {_display(record.get(key, ''))}" for key in TEAM_FIELDS)
                return CommandResult(
                    Reply.rich(Embed(title=f"{name} Team Stats", color="green", description=description))
                )

    def _standings(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        standings = self._state.get_standings()
        if standings:
            description = "\n".join(
                f"{rank}. {entry.team} — {entry.wins}-{entry.losses}" for rank, entry in enumerate(standings, 1)
            )
        else:
            description = "No standings posted yet."
        return CommandResult(Reply.rich(Embed(title="League Standings", color="gold", description=description)))

    def _transactions(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        recent = self._state.get_recent_transactions(RECENT_TRANSACTIONS)
        if recent:
            description = "\n".join(f"**{t.type or 'Unknown'}:** {t.player} → {t.team}" for t in recent)
        else:
            description = "No transactions recorded."
        return CommandResult(Reply.rich(Embed(title="Recent Transactions", color="orange", description=description)))

    # -- Privileged verbs ----------------------------------------------------

    def _update_stats(self, args: tuple[str, ...], caller: Caller) -> CommandResult:
        if isinstance(denied := self._authorize(caller, "updatestats"), Err):
            return CommandResult(Reply.plain(denied.error.message))

        if not args:
            return CommandResult(Reply.plain("Please provide a player name."))

        player, *pairs = args
        fields = parse_stat_pairs(pairs)
        self._state.merge_player_fields(player, fields)

        audit = AuditNotice(
            actor=caller.display_name,
            player=player,
            fields=tuple(fields.items()),
            timestamp=self._clock(),
        )
        return CommandResult(Reply.plain(f"Updated stats for {player}."), audit=audit)

    def _authorize(self, caller: Caller, verb: str) -> Result[Caller, PermissionDeniedError]:
        if is_authorized(caller.roles, self._allowed_roles):
            return Ok(caller)
        logger.info("Denied '%s' for %s (roles: %s)", verb, caller.display_name, sorted(caller.roles))
        return Err(
            PermissionDeniedError(
                message="You do not have permission to update stats.",
                actor=caller.display_name,
                verb=verb,
            )
        )

    def _lookup_player(self, name: str) -> Result[PlayerRecord, NotFoundError]:
        record = self._state.get_player(name) if name else None
        if record is None:
            return Err(NotFoundError(message=f"No stats found for {name}.", subject="player", name=name))
        return Ok(record)

    def _lookup_team(self, name: str) -> Result[TeamRecord, NotFoundError]:
        record = self._state.get_team(name) if name else None
        if record is None:
            return Err(NotFoundError(message=f"No team found named {name}.", subject="team", name=name))
        return Ok(record)
