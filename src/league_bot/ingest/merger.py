"""Apply ingestion updates to the league state.

Each update kind has its own merge policy:

    transaction -> append {player, team, type: payload.action or "Unknown"}
    stats       -> full overwrite of Players[player]
    team        -> full overwrite of Teams[team]
    standings   -> full replacement of the standings list

Updates that cannot be applied (unknown kind, missing key, wrong payload
shape) are logged and returned as ``Err(MalformedUpdateError)``; they never
raise and never touch the state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeAlias

from league_bot.domain.errors import MalformedUpdateError
from league_bot.domain.league import TransactionRecord, standings_entry_from_dict
from league_bot.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

    from league_bot.state.league_state import LeagueState

logger = logging.getLogger(__name__)


class UpdateKind(StrEnum):
    TRANSACTION = "transaction"
    STATS = "stats"
    TEAM = "team"
    STANDINGS = "standings"


@dataclass(frozen=True)
class LeagueUpdate:
    kind: str
    player: str | None = None
    team: str | None = None
    payload: Any = None


ApplyResult: TypeAlias = Result[UpdateKind, MalformedUpdateError]


def _optional_name(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def parse_update(raw: object) -> LeagueUpdate:
    """Map an ingestion body ``{type, player?, team?, stats}`` to a LeagueUpdate.

    A body that is not an object becomes an update with an empty kind.
    """
    if not isinstance(raw, Mapping):
        return LeagueUpdate(kind="")
    return LeagueUpdate(
        kind=str(raw.get("type", "")),
        player=_optional_name(raw.get("player")),
        team=_optional_name(raw.get("team")),
        payload=raw.get("stats"),
    )


def parse_updates(body: object) -> list[LeagueUpdate]:
    """Parse an ingestion body holding one update object or a list of them."""
    raw_updates = body if isinstance(body, list) else [body]
    return [parse_update(raw) for raw in raw_updates]


class UpdateMerger:
    def __init__(self, state: LeagueState) -> None:
        self._state = state

    def apply(self, update: LeagueUpdate) -> ApplyResult:
        try:
            kind = UpdateKind(update.kind)
        except ValueError:
            return self._reject(update, f"unrecognized update type '{update.kind}'")

        match kind:
            case UpdateKind.TRANSACTION:
                return self._apply_transaction(update)
            case UpdateKind.STATS:
                if update.player is None:
                    return self._reject(update, "stats update has no player")
                if not isinstance(update.payload, Mapping):
                    return self._reject(update, "stats payload must be an object")
                self._state.set_player(update.player, update.payload)
            case UpdateKind.TEAM:
                if update.team is None:
                    return self._reject(update, "team update has no team")
                if not isinstance(update.payload, Mapping):
                    return self._reject(update, "team payload must be an object")
                self._state.set_team(update.team, update.payload)
            case UpdateKind.STANDINGS:
                if not isinstance(update.payload, list):
                    return self._reject(update, "standings payload must be a list")
                try:
                    entries = [standings_entry_from_dict(entry) for entry in update.payload]
                except (TypeError, ValueError) as e:
                    return self._reject(update, f"bad standings entry: {e}")
                self._state.set_standings(entries)
        return Ok(kind)

    def apply_all(self, updates: Iterable[LeagueUpdate]) -> list[ApplyResult]:
        """Apply a batch in order; a malformed unit does not stop the rest."""
        return [self.apply(update) for update in updates]

    def _apply_transaction(self, update: LeagueUpdate) -> ApplyResult:
        action = update.payload.get("action") if isinstance(update.payload, Mapping) else None
        record = TransactionRecord(
            type=str(action) if action else "Unknown",
            player=update.player,
            team=update.team,
        )
        self._state.append_transaction(record)
        return Ok(UpdateKind.TRANSACTION)

    def _reject(self, update: LeagueUpdate, reason: str) -> ApplyResult:
        logger.warning("Ignoring %r update: %s", update.kind, reason)
        return Err(MalformedUpdateError(message=reason, kind=update.kind))
