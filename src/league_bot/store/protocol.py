from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from league_bot.domain.league import LeagueSnapshot


class SnapshotStore(Protocol):
    def load(self) -> LeagueSnapshot: ...

    def save(self, snapshot: LeagueSnapshot) -> None: ...
