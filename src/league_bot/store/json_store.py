"""JSON file storage for the league snapshot.

The whole snapshot is rewritten on every save. Writes go to a temporary
sibling file that is then renamed over the target, so readers never see a
partially written snapshot.

Usage:
    store = JsonSnapshotStore(Path("leagueData.json"))
    snapshot = store.load()
    store.save(snapshot)
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from league_bot.domain.league import LeagueSnapshot, snapshot_from_dict, snapshot_to_dict
from league_bot.exceptions import CorruptStateError, PersistenceError

logger = logging.getLogger(__name__)


class JsonSnapshotStore:
    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LeagueSnapshot:
        """Read the snapshot, or return an empty one if the file does not exist.

        Raises:
            CorruptStateError: If the file exists but is not a valid snapshot.
        """
        if not self._path.exists():
            logger.info("No snapshot at %s, starting with an empty league", self._path)
            return LeagueSnapshot.empty()

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            snapshot = snapshot_from_dict(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValueError) as e:
            raise CorruptStateError(f"Snapshot at {self._path} is unreadable: {e}") from e

        logger.info(
            "Loaded snapshot from %s (%d players, %d teams, %d transactions)",
            self._path,
            len(snapshot.players),
            len(snapshot.teams),
            len(snapshot.transactions),
        )
        return snapshot

    def save(self, snapshot: LeagueSnapshot) -> None:
        """Overwrite the file with the full snapshot.

        Raises:
            PersistenceError: If the snapshot cannot be serialized or written.
        """
        tmp_name: str | None = None
        try:
            data = json.dumps(snapshot_to_dict(snapshot), indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            # mkstemp creates 0600; keep the permissions of the file being replaced.
            if self._path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self._path.stat().st_mode))
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write snapshot to {self._path}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Saved snapshot to %s", self._path)
