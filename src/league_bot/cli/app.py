import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from league_bot.cli._logging import configure_logging
from league_bot.cli._output import print_command_result, print_error, print_ingest_result, print_snapshot
from league_bot.cli.factory import LeagueRuntime, build_ingest_server, build_runtime, start_ingest_thread
from league_bot.commands.dispatcher import Caller
from league_bot.config import BotConfig, create_config, load_bot_config
from league_bot.discord.bot import run_bot
from league_bot.domain.result import errors_of
from league_bot.exceptions import ConfigurationError, CorruptStateError
from league_bot.ingest.merger import parse_updates

logger = logging.getLogger(__name__)

app = typer.Typer(name="league-bot", help="League bot: Discord commands and game-backend ingestion")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config_path: Annotated[str, typer.Option("--config", help="Path to the YAML config file")] = "league_bot.yaml",
) -> None:
    """League bot: Discord commands and game-backend ingestion."""
    configure_logging(verbose=verbose)
    ctx.obj = config_path
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


def _load(ctx: typer.Context, *, require_token: bool = False) -> tuple[BotConfig, LeagueRuntime]:
    try:
        config = load_bot_config(create_config(yaml_path=ctx.obj), require_token=require_token)
        return config, build_runtime(config)
    except (ConfigurationError, CorruptStateError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def run(ctx: typer.Context) -> None:
    """Run the Discord bot and the ingestion server together."""
    config, runtime = _load(ctx, require_token=True)
    server = build_ingest_server(config, runtime)
    start_ingest_thread(server)
    logger.info("Ingestion server listening on %s:%d", config.ingest_host, config.ingest_port)

    logger.info("Starting Discord bot...")
    try:
        asyncio.run(run_bot(config, runtime.dispatcher))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    finally:
        server.shutdown()


@app.command("serve-ingest")
def serve_ingest(ctx: typer.Context) -> None:
    """Run only the ingestion server."""
    config, runtime = _load(ctx)
    server = build_ingest_server(config, runtime)
    logger.info("Ingestion server listening on %s:%d", config.ingest_host, config.ingest_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Ingestion server stopped by user")


@app.command()
def ingest(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="JSON file with one update or a list of updates")],
) -> None:
    """Apply updates from a JSON file, as if pushed by the game backend."""
    try:
        body = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Could not read {path}: {e}")
        raise typer.Exit(code=1) from e

    _, runtime = _load(ctx)
    results = runtime.merger.apply_all(parse_updates(body))
    ignored = len(errors_of(results))
    print_ingest_result(len(results) - ignored, ignored)


@app.command()
def query(
    ctx: typer.Context,
    line: Annotated[str, typer.Argument(help="Command line, e.g. '!stats Alice'")],
    role: Annotated[list[str] | None, typer.Option("--role", help="Role held by the caller")] = None,
    caller_name: Annotated[str, typer.Option("--as", help="Caller display name")] = "console",
) -> None:
    """Run one chat command against the local snapshot."""
    _, runtime = _load(ctx)
    caller = Caller(display_name=caller_name, roles=frozenset(role or ()))
    print_command_result(runtime.dispatcher.dispatch(line, caller))


@app.command()
def dump(ctx: typer.Context) -> None:
    """Print the current snapshot as JSON."""
    _, runtime = _load(ctx)
    print_snapshot(runtime.state.snapshot())
