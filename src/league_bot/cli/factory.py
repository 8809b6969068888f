from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.serving import BaseWSGIServer, make_server

from league_bot.commands.dispatcher import CommandDispatcher
from league_bot.ingest.merger import UpdateMerger
from league_bot.ingest.server import create_ingest_app
from league_bot.state.league_state import LeagueState
from league_bot.store.json_store import JsonSnapshotStore

if TYPE_CHECKING:
    from league_bot.config import BotConfig


@dataclass(frozen=True)
class LeagueRuntime:
    state: LeagueState
    merger: UpdateMerger
    dispatcher: CommandDispatcher


def build_runtime(config: BotConfig) -> LeagueRuntime:
    """Load the snapshot and wire both entry points to one LeagueState.

    Raises:
        CorruptStateError: If the snapshot file cannot be read.
    """
    state = LeagueState.open(JsonSnapshotStore(config.data_path))
    return LeagueRuntime(
        state=state,
        merger=UpdateMerger(state),
        dispatcher=CommandDispatcher(state, config.allowed_roles, prefix=config.command_prefix),
    )


def build_ingest_server(config: BotConfig, runtime: LeagueRuntime) -> BaseWSGIServer:
    app = create_ingest_app(runtime.merger)
    return make_server(config.ingest_host, config.ingest_port, app, threaded=True)


def start_ingest_thread(server: BaseWSGIServer) -> threading.Thread:
    thread = threading.Thread(target=server.serve_forever, name="ingest-server", daemon=True)
    thread.start()
    return thread
