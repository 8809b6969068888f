"""Authoritative in-memory league state.

LeagueState is the only owner of the LeagueSnapshot and the only writer of
the snapshot store. Every read and write happens under a single re-entrant
lock; writes persist while still holding it, so the in-memory and on-disk
views never interleave.

Reads return deep copies and writes store deep copies, so no caller ever
shares a nested list or object with the state. Writes return ``True`` when
the write-through succeeded and ``False`` when it failed; a failed
write-through is logged and the in-memory change is kept.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import TYPE_CHECKING

from league_bot.exceptions import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from league_bot.domain.league import (
        LeagueSnapshot,
        PlayerRecord,
        StandingsEntry,
        StatValue,
        TeamRecord,
        TransactionRecord,
    )
    from league_bot.store.protocol import SnapshotStore

logger = logging.getLogger(__name__)


class LeagueState:
    def __init__(self, snapshot: LeagueSnapshot, store: SnapshotStore) -> None:
        self._snapshot = snapshot
        self._store = store
        self._lock = threading.RLock()

    @classmethod
    def open(cls, store: SnapshotStore) -> LeagueState:
        """Load the snapshot from ``store`` and take ownership of it.

        Raises:
            CorruptStateError: If the stored snapshot cannot be read.
        """
        return cls(store.load(), store)

    # -- Reads ---------------------------------------------------------------

    def get_player(self, name: str) -> PlayerRecord | None:
        with self._lock:
            record = self._snapshot.players.get(name)
            return copy.deepcopy(record)

    def get_team(self, name: str) -> TeamRecord | None:
        with self._lock:
            record = self._snapshot.teams.get(name)
            return copy.deepcopy(record)

    def get_standings(self) -> tuple[StandingsEntry, ...]:
        with self._lock:
            return copy.deepcopy(tuple(self._snapshot.standings))

    def get_recent_transactions(self, n: int) -> list[TransactionRecord]:
        """Return the last ``n`` transactions, most recent first."""
        if n <= 0:
            return []
        with self._lock:
            return list(reversed(self._snapshot.transactions[-n:]))

    def snapshot(self) -> LeagueSnapshot:
        with self._lock:
            return self._snapshot.copy()

    # -- Writes --------------------------------------------------------------

    def set_player(self, name: str, record: Mapping[str, StatValue]) -> bool:
        with self._lock:
            self._snapshot.players[name] = copy.deepcopy(dict(record))
            logger.info("Replaced player %s (%d fields)", name, len(record))
            return self._persist()

    def merge_player_fields(self, name: str, fields: Mapping[str, StatValue]) -> bool:
        """Shallow-merge ``fields`` into the player's record, creating it if absent."""
        with self._lock:
            merged = dict(self._snapshot.players.get(name, {}))
            merged.update(copy.deepcopy(dict(fields)))
            self._snapshot.players[name] = merged
            logger.info("Merged %d fields into player %s", len(fields), name)
            return self._persist()

    def set_team(self, name: str, record: Mapping[str, StatValue]) -> bool:
        with self._lock:
            self._snapshot.teams[name] = copy.deepcopy(dict(record))
            logger.info("Replaced team %s (%d fields)", name, len(record))
            return self._persist()

    def set_standings(self, entries: Iterable[StandingsEntry]) -> bool:
        with self._lock:
            self._snapshot.standings = copy.deepcopy(list(entries))
            logger.info("Replaced standings (%d teams)", len(self._snapshot.standings))
            return self._persist()

    def append_transaction(self, record: TransactionRecord) -> bool:
        with self._lock:
            self._snapshot.transactions.append(record)
            logger.info("Recorded %s transaction: %s -> %s", record.type, record.player, record.team)
            return self._persist()

    def _persist(self) -> bool:
        # Caller holds the lock.
        try:
            self._store.save(self._snapshot)
        except PersistenceError:
            logger.warning("Snapshot write-through failed; keeping in-memory change", exc_info=True)
            return False
        return True
