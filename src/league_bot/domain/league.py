"""League data model.

Player and team records are schema-less stat lines: any key may appear and
unknown keys pass through untouched. Standings and transactions are typed.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

StatValue: TypeAlias = int | float | str
StatLine: TypeAlias = dict[str, StatValue]
PlayerRecord: TypeAlias = StatLine
TeamRecord: TypeAlias = StatLine

BATTING_FIELDS: tuple[tuple[str, str], ...] = (
    ("HR", "HR"),
    ("Singles", "Singles"),
    ("Doubles", "Doubles"),
    ("RBI", "RBI"),
    ("AVG", "AVG"),
)
PITCHING_FIELDS: tuple[tuple[str, str], ...] = (
    ("IP", "Innings Pitched"),
    ("SO", "Strikeouts"),
    ("BB", "Walks"),
    ("ERA", "ERA"),
)
TEAM_FIELDS: tuple[str, ...] = ("Wins", "Losses", "AVG", "ERA")


@dataclass(frozen=True)
class StandingsEntry:
    team: str
    wins: StatValue = 0
    losses: StatValue = 0
    # Keys beyond team/wins/losses, kept so a standings push is stored whole.
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransactionRecord:
    type: str | None
    player: str | None = None
    team: str | None = None


@dataclass
class LeagueSnapshot:
    players: dict[str, PlayerRecord] = field(default_factory=dict)
    teams: dict[str, TeamRecord] = field(default_factory=dict)
    standings: list[StandingsEntry] = field(default_factory=list)
    transactions: list[TransactionRecord] = field(default_factory=list)

    @classmethod
    def empty(cls) -> LeagueSnapshot:
        return cls()

    def copy(self) -> LeagueSnapshot:
        """Point-in-time deep copy; nothing in it is shared with this snapshot."""
        return copy.deepcopy(self)


_STANDINGS_KEYS = frozenset({"team", "wins", "losses"})


def standings_entry_from_dict(raw: Mapping[str, Any]) -> StandingsEntry:
    if not isinstance(raw, Mapping):
        raise TypeError(f"standings entry must be an object, got {type(raw).__name__}")
    if "team" not in raw:
        raise ValueError("standings entry is missing 'team'")
    extra = {key: value for key, value in raw.items() if key not in _STANDINGS_KEYS}
    return StandingsEntry(
        team=str(raw["team"]),
        wins=raw.get("wins", 0),
        losses=raw.get("losses", 0),
        extra=copy.deepcopy(extra),
    )


def transaction_from_dict(raw: Mapping[str, Any]) -> TransactionRecord:
    if not isinstance(raw, Mapping):
        raise TypeError(f"transaction must be an object, got {type(raw).__name__}")
    kind = raw.get("type")
    return TransactionRecord(
        type=str(kind) if kind is not None else None,
        player=raw.get("player"),
        team=raw.get("team"),
    )


def _records_from_dict(raw: object, section: str) -> dict[str, StatLine]:
    if not isinstance(raw, Mapping):
        raise TypeError(f"'{section}' must be an object, got {type(raw).__name__}")
    records: dict[str, StatLine] = {}
    for name, record in raw.items():
        if not isinstance(record, Mapping):
            raise TypeError(f"'{section}.{name}' must be an object, got {type(record).__name__}")
        records[str(name)] = copy.deepcopy(dict(record))
    return records


def _entries_from_list(raw: object, section: str) -> list[Any]:
    if not isinstance(raw, list):
        raise TypeError(f"'{section}' must be a list, got {type(raw).__name__}")
    return raw


def standings_entry_to_dict(entry: StandingsEntry) -> dict[str, Any]:
    return {"team": entry.team, "wins": entry.wins, "losses": entry.losses, **entry.extra}


def transaction_to_dict(record: TransactionRecord) -> dict[str, Any]:
    # A transaction read without a type is written back without one.
    raw: dict[str, Any] = {} if record.type is None else {"type": record.type}
    raw.update(player=record.player, team=record.team)
    return raw


def snapshot_to_dict(snapshot: LeagueSnapshot) -> dict[str, Any]:
    return copy.deepcopy(
        {
            "players": snapshot.players,
            "teams": snapshot.teams,
            "standings": [standings_entry_to_dict(s) for s in snapshot.standings],
            "transactions": [transaction_to_dict(t) for t in snapshot.transactions],
        }
    )


def snapshot_from_dict(raw: object) -> LeagueSnapshot:
    """Build a snapshot from its JSON form.

    Missing top-level sections default to empty. Raises ``TypeError`` or
    ``ValueError`` when a section has the wrong shape.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"snapshot must be an object, got {type(raw).__name__}")
    return LeagueSnapshot(
        players=_records_from_dict(raw.get("players", {}), "players"),
        teams=_records_from_dict(raw.get("teams", {}), "teams"),
        standings=[standings_entry_from_dict(s) for s in _entries_from_list(raw.get("standings", []), "standings")],
        transactions=[
            transaction_from_dict(t) for t in _entries_from_list(raw.get("transactions", []), "transactions")
        ],
    )
